from pathlib import Path

from doc_translator.storage.base import BaseDocumentStore
from doc_translator.storage.exceptions import StorageError


class LocalDocumentStore(BaseDocumentStore):
    """Stores artifacts as files below a root directory: {root}/{key}."""

    DEFAULT_ROOT = Path("/app/files")

    def __init__(self, root: Path | None = None) -> None:
        self._root = root if root is not None else self.DEFAULT_ROOT

    def put(self, key: str, data: bytes) -> None:
        path = self._resolve_path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise StorageError(f"Failed to write {key}: {exc}") from exc

    def get(self, key: str) -> bytes | None:
        path = self._resolve_path(key)
        if not path.exists():
            return None
        try:
            return path.read_bytes()
        except OSError as exc:
            raise StorageError(f"Failed to read {key}: {exc}") from exc

    def delete(self, key: str) -> None:
        path = self._resolve_path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Failed to delete {key}: {exc}") from exc

    def _resolve_path(self, key: str) -> Path:
        path = (self._root / key).resolve()
        if not path.is_relative_to(self._root.resolve()):
            raise StorageError(f"Key escapes storage root: {key}")
        return path
