from __future__ import annotations
import re
from typing import Any, List

from .config import SEPARATORS

_TRAILING_SEPARATOR = re.compile(rf"[\s{re.escape(SEPARATORS)}]$")


def as_text(value: Any) -> str:
    """Coerce any stored value to a string; None and non-scalars become ''."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def ends_with_separator(text: str) -> bool:
    """True when the last character closes a word (whitespace , ; :)."""
    return bool(_TRAILING_SEPARATOR.search(text))


def is_blank(text: str) -> bool:
    return not text.strip()


def tokens(text: str) -> List[str]:
    """Whitespace tokens, empty segments dropped."""
    return text.split()


def fold(text: str) -> str:
    """Case-insensitive comparison key."""
    return text.lower()
