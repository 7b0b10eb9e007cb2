"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from doc_translator.api.errors import register_exception_handlers
from doc_translator.api.routes import router
from doc_translator.config.settings import Settings
from doc_translator.documents.service import DocumentService, build_document_service
from doc_translator.logging.logger import Log

APP_TITLE = "Document Translator"
APP_VERSION = "0.1.0"


def create_app(
    settings: Settings | None = None,
    service: DocumentService | None = None,
) -> FastAPI:
    """Create the HTTP app; pass a prebuilt service to bypass the configured adapters."""
    settings = settings or Settings()
    app = FastAPI(title=APP_TITLE, version=APP_VERSION)
    app.state.document_service = service or build_document_service(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    register_exception_handlers(app)
    app.include_router(router)

    @app.get("/health", tags=["health"])
    def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    Log.info(f"{APP_TITLE} ready", env=settings.app_env)
    return app
