from typing import ClassVar

from doc_translator.config.settings import Settings
from doc_translator.translation.base import BaseTranslationProvider
from doc_translator.translation.cloudflare_adapter import CloudflareTranslationAdapter
from doc_translator.translation.example_client_adapter import ExampleTranslationAdapter
from doc_translator.translation.openai_client_adapter import OpenAIClientAdapter


class TranslationProviderFactory:
    """Creates the configured translation provider adapter."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseTranslationProvider:
        """Create a configured translation provider from application settings."""
        provider = settings.translation_provider.strip().lower()
        if provider == "example":
            return ExampleTranslationAdapter()
        if provider == "cloudflare":
            return CloudflareTranslationAdapter(
                account_id=settings.cloudflare_account_id,
                api_token=settings.cloudflare_api_token,
                timeout_seconds=settings.translation_timeout_seconds,
                model=settings.cloudflare_model,
            )
        return OpenAIClientAdapter(
            api_key=settings.translation_api_key,
            model=settings.translation_model_name,
            timeout_seconds=settings.translation_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
            temperature=settings.translation_temperature,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        custom_url = settings.translation_base_url.strip()
        if provider == "openai":
            return custom_url or None
        if provider == "openai_compatible":
            if not custom_url:
                raise ValueError(
                    "translation_base_url is required for "
                    "translation_provider=openai_compatible"
                )
            return custom_url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return custom_url or default_base_url
        supported = [
            "cloudflare",
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown translation provider '{provider}'. Choose from: {supported}"
        )
