"""Sentence-boundary chunker used to keep translation requests within size limits."""

import re

DEFAULT_MAX_LENGTH = 2000

_TERMINATORS_RE = re.compile(r"[.!?]+")
_SEPARATOR = "."


def chunk_text(text: str, max_length: int = DEFAULT_MAX_LENGTH) -> list[str]:
    """Split text into ordered chunks of roughly ``max_length`` characters.

    The text is cut at runs of ``.``, ``!`` and ``?``; the terminators are
    dropped and fragments that end up in the same chunk are re-joined with a
    plain ``.``, whatever the original terminator was. A fragment is never
    split, so a single fragment longer than ``max_length`` becomes a chunk of
    its own. The joining period counts towards the limit, so no other chunk
    is longer than ``max_length``.

    Raises:
        ValueError: if max_length is not positive.
    """
    if max_length <= 0:
        raise ValueError(f"max_length must be positive, got {max_length}")

    chunks: list[str] = []
    buffer = ""
    for fragment in _TERMINATORS_RE.split(text):
        if not fragment.strip():
            continue
        if not buffer:
            buffer = fragment
        elif len(buffer) + len(_SEPARATOR) + len(fragment) > max_length:
            _flush(buffer, chunks)
            buffer = fragment
        else:
            buffer = f"{buffer}{_SEPARATOR}{fragment}"
    _flush(buffer, chunks)
    return chunks


def _flush(buffer: str, chunks: list[str]) -> None:
    stripped = buffer.strip()
    if stripped:
        chunks.append(stripped)
