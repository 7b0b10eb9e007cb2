from doc_translator.config.settings import Settings
from doc_translator.database.connection import init_pool
from doc_translator.metadata.base import BaseMetadataStore
from doc_translator.metadata.memory_store import InMemoryMetadataStore
from doc_translator.metadata.postgres_store import PostgresMetadataStore


class MetadataStoreFactory:
    """Creates the configured metadata store."""

    BACKENDS: tuple[str, ...] = ("postgres", "memory")

    @classmethod
    def create(cls, settings: Settings) -> BaseMetadataStore:
        backend = settings.metadata_backend.strip().lower()
        if backend == "postgres":
            init_pool(settings)
            store = PostgresMetadataStore()
            store.ensure_schema()
            return store
        if backend == "memory":
            return InMemoryMetadataStore()
        raise ValueError(
            f"Unknown metadata backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
