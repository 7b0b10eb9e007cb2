from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8000
    cors_allow_origins: list[str] = ["*"]

    max_file_size_bytes: int = 10 * 1024 * 1024
    chunk_max_length: int = 2000

    storage_backend: str = "local"
    storage_root: str = "/app/files"
    minio_endpoint: str = "localhost:9000"
    minio_access_key: str = "minioadmin"
    minio_secret_key: str = "minioadmin"
    minio_bucket_name: str = "documents"
    minio_secure: bool = False

    metadata_backend: str = "postgres"
    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "doc_translator"
    db_username: str = "doc_translator"
    db_password: str = "secret"

    pdf_engine: str = "pdfplumber"

    translation_provider: str = "openai"
    translation_api_key: str = ""
    translation_model_name: str = ""
    translation_base_url: str = ""
    translation_timeout_seconds: int = 30
    translation_temperature: float = 0.0

    cloudflare_account_id: str = ""
    cloudflare_api_token: str = ""
    cloudflare_model: str = "@cf/meta/m2m100-1.2b"
