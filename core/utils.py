"""
General utility functions.

Provides text truncation plus small parsing helpers.
"""
from __future__ import annotations

import datetime as dt
from typing import Any, Optional

UTC = dt.timezone.utc


def utcnow() -> dt.datetime:
    return dt.datetime.now(tz=UTC)


def truncate(text: str, max_len: int, suffix: str = "...") -> str:
    if len(text) <= max_len:
        return text
    return text[: max(0, max_len - len(suffix))] + suffix


def safe_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.isdigit():
            try:
                return int(stripped)
            except Exception:
                return default
    return default


def normalize_trigger(trigger: str) -> str:
    """Case-fold a trigger and collapse its whitespace."""
    return " ".join(trigger.split()).casefold()
