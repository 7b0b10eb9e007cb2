import os
import uuid
from collections.abc import Generator

import psycopg
import pytest

from doc_translator.config.settings import Settings
from doc_translator.database.connection import (
    build_conninfo,
    close_pool,
    get_connection,
    init_pool,
)
from doc_translator.metadata.postgres_store import PostgresMetadataStore


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "doc_translator_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        with psycopg.connect(build_conninfo(test_settings), connect_timeout=3):
            pass
    except psycopg.Error as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    init_pool(test_settings, max_size=2)
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def metadata_store(integration_pool: None) -> PostgresMetadataStore:
    store = PostgresMetadataStore()
    store.ensure_schema()
    return store


@pytest.fixture
def document_ids(integration_pool: None) -> Generator[list[str], None, None]:
    """Fresh ids whose rows are deleted after the test."""
    created: list[str] = []

    yield created

    if not created:
        return
    with get_connection() as conn:
        conn.execute(
            "DELETE FROM document_metadata WHERE document_id = ANY(%s)",
            (created,),
        )
        conn.commit()


@pytest.fixture
def new_document_id(document_ids: list[str]) -> str:
    document_id = str(uuid.uuid4())
    document_ids.append(document_id)
    return document_id
