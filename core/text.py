from __future__ import annotations

from typing import Any


def resolve_text(value: Any, language: str = "en") -> str:
    """
    Resolve a dataset label to a display string.

    Labels are either plain strings or ``{"en": ..., "ar": ...}`` objects;
    the requested language wins, English is the fallback.
    """
    if value is None:
        return ""
    if isinstance(value, dict):
        text = value.get(language) or value.get("en")
        return str(text) if text is not None else ""
    return str(value)
