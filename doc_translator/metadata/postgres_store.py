from typing import Any

import psycopg
from psycopg.types.json import Jsonb

from doc_translator.database.connection import get_connection
from doc_translator.metadata.base import BaseMetadataStore
from doc_translator.storage.exceptions import StorageError


class PostgresMetadataStore(BaseMetadataStore):
    """Metadata records kept as JSONB rows in the document_metadata table."""

    def ensure_schema(self) -> None:
        """Create the document_metadata table if it does not exist yet."""
        try:
            with get_connection() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS document_metadata (
                        document_id TEXT PRIMARY KEY,
                        record JSONB NOT NULL,
                        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                    )
                    """
                )
                conn.commit()
        except psycopg.Error as exc:
            raise StorageError(f"Failed to create metadata table: {exc}") from exc

    def get(self, document_id: str) -> dict[str, Any] | None:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        "SELECT record FROM document_metadata WHERE document_id = %s",
                        (document_id,),
                    )
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise StorageError(f"Failed to read metadata for {document_id}: {exc}") from exc

        if row is None:
            return None
        record: dict[str, Any] = row[0]
        return record

    def put(self, document_id: str, record: dict[str, Any]) -> None:
        try:
            with get_connection() as conn:
                conn.execute(
                    """
                    INSERT INTO document_metadata (document_id, record, updated_at)
                    VALUES (%s, %s, NOW())
                    ON CONFLICT (document_id)
                    DO UPDATE SET record = EXCLUDED.record, updated_at = NOW()
                    """,
                    (document_id, Jsonb(record)),
                )
                conn.commit()
        except psycopg.Error as exc:
            raise StorageError(f"Failed to write metadata for {document_id}: {exc}") from exc
