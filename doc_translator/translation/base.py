from abc import ABC, abstractmethod


class BaseTranslationProvider(ABC):
    """Contract for all translation model adapters."""

    @abstractmethod
    def translate(self, text: str, *, source_language: str, target_language: str) -> str:
        """Translate one text segment.

        Args:
            text: Segment produced by the chunker.
            source_language: Language code of the segment (never "auto").
            target_language: Language code to translate into.

        Returns:
            The translated segment.

        Raises:
            TranslationError: on any failure.
        """
