from abc import ABC, abstractmethod


class BaseDocumentStore(ABC):
    """Contract for blob storage of document artifacts."""

    @abstractmethod
    def put(self, key: str, data: bytes) -> None:
        """Write data under key, replacing any previous blob.

        Raises:
            StorageError: if the backend write fails.
        """

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Return the blob stored under key, or None if it does not exist.

        Raises:
            StorageError: if the backend read fails.
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the blob stored under key; a missing key is not an error.

        Raises:
            StorageError: if the backend delete fails.
        """

    def put_text(self, key: str, text: str) -> None:
        self.put(key, text.encode("utf-8"))

    def get_text(self, key: str) -> str | None:
        data = self.get(key)
        if data is None:
            return None
        return data.decode("utf-8")
