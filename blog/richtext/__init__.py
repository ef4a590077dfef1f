"""Rich-text rendering and internal link injection.

This package has no Django dependencies so it can be reused from scripts and
tested in isolation.
"""

from .injector import inject, sort_rules
from .nodes import Node, NodeKind, TextFormat, parse_document
from .pipeline import RenderResult, filter_rules_for_site, render_document, render_with_links
from .serializer import serialize, serialize_document
from .toc import extract_toc
from .types import InjectionOptions, InternalLinkRule, LinkInjectionStats, MatchType, TocEntry

__all__ = [
    "InjectionOptions",
    "InternalLinkRule",
    "LinkInjectionStats",
    "MatchType",
    "Node",
    "NodeKind",
    "RenderResult",
    "TextFormat",
    "TocEntry",
    "extract_toc",
    "filter_rules_for_site",
    "inject",
    "parse_document",
    "render_document",
    "render_with_links",
    "serialize",
    "serialize_document",
    "sort_rules",
]
