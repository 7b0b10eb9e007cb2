import copy
from typing import Any

from doc_translator.metadata.base import BaseMetadataStore


class InMemoryMetadataStore(BaseMetadataStore):
    """Dict-backed metadata store; records are copied in and out."""

    def __init__(self) -> None:
        self._records: dict[str, dict[str, Any]] = {}

    def get(self, document_id: str) -> dict[str, Any] | None:
        record = self._records.get(document_id)
        return copy.deepcopy(record) if record is not None else None

    def put(self, document_id: str, record: dict[str, Any]) -> None:
        self._records[document_id] = copy.deepcopy(record)
