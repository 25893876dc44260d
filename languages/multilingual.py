from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

# A text-bearing field: either a plain string or `{language_code: text}`.
MultilingualText = Union[str, dict[str, str]]


def resolve_text(value: Any, language_code: str | None, default_language_code: str | None = None) -> str:
    """Resolve a plain or multilingual value to one string.

    Order: requested language, default language, first non-empty entry, "".
    Never raises; anything that is neither a string nor a mapping resolves to "".
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if not isinstance(value, Mapping):
        return ""

    for code in (language_code, default_language_code):
        if not code:
            continue
        v = value.get(code)
        if isinstance(v, str) and v:
            return v

    for v in value.values():
        if isinstance(v, str) and v:
            return v
    return ""
