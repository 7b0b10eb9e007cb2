from pathlib import Path

import httpx
import openai

from doc_translator.translation.base import BaseTranslationProvider
from doc_translator.translation.exceptions import TranslationError, TranslationNetworkError
from doc_translator.translation.languages import language_name
from doc_translator.translation.prompt_loader import load_prompt_template


class OpenAIClientAdapter(BaseTranslationProvider):
    """Translation adapter built on an OpenAI-compatible chat completions API."""

    SYSTEM_PROMPT = "You are a professional translator. Answer with the translation only."

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_seconds: int,
        base_url: str | None = None,
        temperature: float = 0.0,
        prompt_template_path: Path | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._prompt_template = load_prompt_template(prompt_template_path)

    def translate(self, text: str, *, source_language: str, target_language: str) -> str:
        prompt = self._prompt_template.format(
            source_language=language_name(source_language),
            target_language=language_name(target_language),
            text=text,
        )
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                temperature=self._temperature,
                messages=[
                    {"role": "system", "content": self.SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise TranslationNetworkError(
                f"Translation provider network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise TranslationNetworkError(
                f"Translation provider API error: {exc}"
            ) from exc

        if not response.choices:
            raise TranslationError("Translation provider returned no choices")
        content = response.choices[0].message.content
        if not content or not content.strip():
            raise TranslationError("Translation provider returned empty response")
        return content.strip()
