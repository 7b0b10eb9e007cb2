class TranslationError(Exception):
    """Raised when a translation provider cannot translate a text segment."""


class TranslationNetworkError(TranslationError):
    """Raised when the provider call fails due to network/infrastructure issues."""

