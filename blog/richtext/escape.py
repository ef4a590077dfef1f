"""HTML escaping for text and attribute contexts."""

from __future__ import annotations

from typing import Any

_HTML_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#039;",
    }
)


def escape_html(text: str) -> str:
    """Escape ``& < > " '`` so ``text`` is inert inside element content."""

    return text.translate(_HTML_ESCAPES)


def escape_attr(value: Any) -> str:
    """Escape any value for use inside a double-quoted attribute."""

    return escape_html("" if value is None else str(value))
