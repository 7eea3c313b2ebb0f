"""neofeeder.utils

Sanitizers applied to every caller value that ends up inside a filter string.
The remote filter language is plain SQL-like text, so these character
whitelists are the only thing standing between caller input and the query.
"""
from __future__ import annotations

import re
from typing import Any

__all__ = [
    "strict_token",
    "digits_only",
    "search_text",
    "quoted_text",
    "escape_literal",
    "field_name",
]


_token_re = re.compile(r"[^A-Za-z0-9-]")
_digits_re = re.compile(r"[^0-9]")
_search_re = re.compile(r"[^A-Za-z0-9\s-]")
_quoted_re = re.compile(r"[^A-Za-z0-9\s']")
_field_re = re.compile(r"[^A-Za-z0-9_]")
_ws_re = re.compile(r"\s+")


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def strict_token(value: Any) -> str:
    """Keep only ASCII letters, digits and hyphens (IDs, codes, periods)."""
    return _token_re.sub("", _text(value))


def digits_only(value: Any) -> str:
    """Keep only digits; used for student numbers (NIM)."""
    return _digits_re.sub("", _text(value))


def search_text(value: Any) -> str:
    """Blank out punctuation and collapse whitespace for ``like`` searches."""
    t = _search_re.sub(" ", _text(value))
    return _ws_re.sub(" ", t).strip()


def quoted_text(value: Any) -> str:
    """Double single quotes, blank out anything else but letters/digits/spaces."""
    t = _text(value).replace("'", "''")
    t = _quoted_re.sub(" ", t)
    return _ws_re.sub(" ", t).strip()


def escape_literal(value: Any) -> str:
    """Trim and backslash-escape ``\\``, ``'``, ``"`` and NUL for a quoted literal."""
    t = _text(value).strip()
    t = t.replace("\\", "\\\\")
    for orig, repl in [
        ("'", "\\'"),
        ('"', '\\"'),
        ("\x00", "\\0"),
    ]:
        t = t.replace(orig, repl)
    return t


def field_name(value: Any) -> str:
    """Column names: letters, digits and underscores only."""
    return _field_re.sub("", _text(value))
