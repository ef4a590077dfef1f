"""Shared fixtures and document builders for rich-text engine tests."""

from __future__ import annotations

from typing import Any, Dict

import pytest

from blog.richtext.config import load_config
from blog.richtext.types import InternalLinkRule


@pytest.fixture()
def engine_config():
    """Provide a fresh copy of the default engine configuration."""

    return load_config(None)


def text(value: str, *, format: int = 0, style: str | None = None) -> Dict[str, Any]:
    node: Dict[str, Any] = {"type": "text", "text": value, "format": format}
    if style is not None:
        node["style"] = style
    return node


def paragraph(*children: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "paragraph", "children": list(children)}


def heading(*children: Dict[str, Any], tag: str = "h2", **extra: Any) -> Dict[str, Any]:
    return {"type": "heading", "tag": tag, "children": list(children), **extra}


def block(**fields: Any) -> Dict[str, Any]:
    return {"type": "block", "fields": fields}


def doc(*children: Dict[str, Any]) -> Dict[str, Any]:
    return {"root": {"type": "root", "children": list(children)}}


def make_rule(keyword: str, target_url: str, **overrides: Any) -> InternalLinkRule:
    return InternalLinkRule(keyword=keyword, target_url=target_url, **overrides)
