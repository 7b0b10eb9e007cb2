"""Whitespace and line-break cleanup applied to extracted text before storage.

The header and list rules are plain regex heuristics without a document
model: an all-caps sentence or a line that starts with ``2024.`` is treated
like a header or a list item.
"""

import re

_BLANK_RUN_RE = re.compile(r"\n\n+")
_HORIZONTAL_WS_RE = re.compile(r"[ \t]+")
_LINE_EDGE_WS_RE = re.compile(r"^[ \t]+|[ \t]+$", re.MULTILINE)
_HEADER_RE = re.compile(r"^([A-Z][A-Z\s]+[A-Z])$", re.MULTILINE)
_LIST_ITEM_RE = re.compile(r"^(\s*)([\-\*]|\d+\.)[ \t]+", re.MULTILINE)
_EXCESS_BLANK_RE = re.compile(r"\n\n\n+")


def normalize_text(text: str) -> str:
    """Return text with normalized line breaks, spacing, headers and list items.

    Steps run in a fixed order because the later ones rely on the earlier
    output (e.g. the header rule expects single spaces and ``\\n`` endings).
    """
    if not text:
        return text

    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _BLANK_RUN_RE.sub("\n\n", text)

    text = _HORIZONTAL_WS_RE.sub(" ", text)
    text = _LINE_EDGE_WS_RE.sub("", text)

    text = _HEADER_RE.sub("\n\\1\n", text)
    text = _LIST_ITEM_RE.sub("\n\\1\\2 ", text)

    text = _EXCESS_BLANK_RE.sub("\n\n", text)
    return text.strip()
