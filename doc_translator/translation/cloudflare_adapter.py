"""Workers AI adapter for Meta's m2m100 translation model."""

from typing import Any

import httpx

from doc_translator.translation.base import BaseTranslationProvider
from doc_translator.translation.exceptions import TranslationNetworkError


class CloudflareTranslationAdapter(BaseTranslationProvider):
    """Calls the Workers AI REST endpoint: POST {api_base}/accounts/{id}/ai/run/{model}."""

    API_BASE = "https://api.cloudflare.com/client/v4"
    DEFAULT_MODEL = "@cf/meta/m2m100-1.2b"

    def __init__(
        self,
        *,
        account_id: str,
        api_token: str,
        timeout_seconds: int,
        model: str = DEFAULT_MODEL,
        client: httpx.Client | None = None,
    ) -> None:
        if not account_id or not api_token:
            raise ValueError(
                "cloudflare_account_id and cloudflare_api_token are required "
                "for translation_provider=cloudflare"
            )
        self._url = f"{self.API_BASE}/accounts/{account_id}/ai/run/{model}"
        self._client = client or httpx.Client(
            timeout=timeout_seconds,
            headers={"Authorization": f"Bearer {api_token}"},
        )

    def translate(self, text: str, *, source_language: str, target_language: str) -> str:
        payload = {
            "text": text,
            "source_lang": source_language,
            "target_lang": target_language,
        }
        try:
            response = self._client.post(self._url, json=payload)
            response.raise_for_status()
            body: dict[str, Any] = response.json()
        except httpx.HTTPStatusError as exc:
            raise TranslationNetworkError(
                f"Workers AI returned HTTP {exc.response.status_code}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise TranslationNetworkError(f"Workers AI request failed: {exc}") from exc

        if not body.get("success", True):
            raise TranslationNetworkError(f"Workers AI error: {body.get('errors')}")
        result = body.get("result") or {}
        return result.get("translated_text") or text
