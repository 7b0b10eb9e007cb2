from pathlib import Path

from doc_translator.translation.exceptions import TranslationError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the translation prompt template from a file.

    Args:
        path: Path to the prompt template file.
              Defaults to the bundled translation_prompt.txt.

    Returns:
        The raw template with {source_language}, {target_language} and {text}
        placeholders.

    Raises:
        TranslationError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "translation_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TranslationError(f"Failed to load prompt template: {exc}") from exc
