"""Example translation adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseTranslationProvider and register the provider in
TranslationProviderFactory.
"""

from doc_translator.translation.base import BaseTranslationProvider


class ExampleTranslationAdapter(BaseTranslationProvider):
    """Returns every segment unchanged.

    No network calls. Useful for local development and tests where the
    pipeline matters more than the translation itself.
    """

    def translate(self, text: str, *, source_language: str, target_language: str) -> str:
        _ = source_language, target_language
        return text
