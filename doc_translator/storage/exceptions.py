class StorageError(Exception):
    """Raised when a document or metadata backend cannot be read or written."""
