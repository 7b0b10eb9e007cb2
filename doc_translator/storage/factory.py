from pathlib import Path

from doc_translator.config.settings import Settings
from doc_translator.storage.base import BaseDocumentStore
from doc_translator.storage.local_store import LocalDocumentStore
from doc_translator.storage.memory_store import InMemoryDocumentStore
from doc_translator.storage.minio_store import MinioDocumentStore


class DocumentStoreFactory:
    """Creates the configured artifact store."""

    BACKENDS: tuple[str, ...] = ("local", "minio", "memory")

    @classmethod
    def create(cls, settings: Settings) -> BaseDocumentStore:
        backend = settings.storage_backend.strip().lower()
        if backend == "local":
            return LocalDocumentStore(root=Path(settings.storage_root))
        if backend == "minio":
            return MinioDocumentStore.connect(
                endpoint=settings.minio_endpoint,
                access_key=settings.minio_access_key,
                secret_key=settings.minio_secret_key,
                bucket_name=settings.minio_bucket_name,
                secure=settings.minio_secure,
            )
        if backend == "memory":
            return InMemoryDocumentStore()
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
