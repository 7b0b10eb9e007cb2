from abc import ABC, abstractmethod
from typing import Any


class BaseMetadataStore(ABC):
    """Contract for the key-value store holding one JSON record per document."""

    @abstractmethod
    def get(self, document_id: str) -> dict[str, Any] | None:
        """Return the stored record, or None if the id is unknown.

        Raises:
            StorageError: if the backend read fails.
        """

    @abstractmethod
    def put(self, document_id: str, record: dict[str, Any]) -> None:
        """Create or replace the record for document_id (last write wins).

        Raises:
            StorageError: if the backend write fails.
        """
