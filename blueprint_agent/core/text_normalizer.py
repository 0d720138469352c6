"""Normalization of AI-generated text into canonical plain text."""

import html
import re

_SINGLE_QUOTES_RE = re.compile("[‘’]")
_DOUBLE_QUOTES_RE = re.compile("[“”]")
_DASHES_RE = re.compile("[•–—]")
_BOLD_RE = re.compile(r"\*\*(.+?)\*\*")


def _normalize_once(text: str) -> str:
    text = html.unescape(text)
    text = _SINGLE_QUOTES_RE.sub("'", text)
    text = _DOUBLE_QUOTES_RE.sub('"', text)
    text = _DASHES_RE.sub("-", text)
    text = _BOLD_RE.sub(r"\1", text)
    return text.strip()


def normalize(raw: str | None) -> str:
    """
    Clean raw completion text.

    Decodes HTML entities, straightens curly quotes, maps bullets and
    en/em dashes to "-", removes inline bold markup and trims whitespace.
    Rules are reapplied until the text stops changing, so double-encoded
    entities are fully decoded and ``normalize(normalize(x)) == normalize(x)``.

    Args:
        raw: Raw text (None is treated as empty)

    Returns:
        Normalized text
    """
    text = raw or ""
    while True:
        cleaned = _normalize_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned
