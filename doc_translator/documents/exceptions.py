class DocumentServiceError(Exception):
    """Base exception for errors reported back to the API caller."""


class ValidationError(DocumentServiceError):
    """Raised for missing or invalid input: no file, bad extension, oversized file."""


class NotFoundError(DocumentServiceError):
    """Raised when a document id or one of its artifacts does not exist."""
