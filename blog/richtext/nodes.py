"""Immutable document tree produced from the block editor's JSON.

The editor stores a post body as ``{"root": {"type": "root", "children": [...]}}``.
:func:`parse_document` turns that payload into a tree of frozen :class:`Node`
objects so the serializer never has to poke at raw dictionaries. Parsing is
lenient: anything it does not understand becomes an ``UNKNOWN`` node that
keeps its children, and garbage values fall back to defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum, IntFlag
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


class NodeKind(str, Enum):
    """Closed set of node kinds the serializer knows how to render."""

    ROOT = "root"
    PARAGRAPH = "paragraph"
    TEXT = "text"
    HEADING = "heading"
    LINK = "link"
    LIST = "list"
    LIST_ITEM = "listitem"
    QUOTE = "quote"
    CODE = "code"
    LINE_BREAK = "linebreak"
    HORIZONTAL_RULE = "horizontalrule"
    UPLOAD = "upload"
    TABLE = "table"
    TABLE_ROW = "tablerow"
    TABLE_CELL = "tablecell"
    BLOCK = "block"
    UNKNOWN = "unknown"


class TextFormat(IntFlag):
    """Bit flags stored in a text node's ``format`` field."""

    NONE = 0
    BOLD = 1
    ITALIC = 2
    STRIKETHROUGH = 4
    UNDERLINE = 8
    CODE = 16
    SUBSCRIPT = 32
    SUPERSCRIPT = 64


# Marks are wrapped in this order: the first entry ends up innermost.
MARK_ORDER: Tuple[TextFormat, ...] = (
    TextFormat.BOLD,
    TextFormat.ITALIC,
    TextFormat.UNDERLINE,
    TextFormat.STRIKETHROUGH,
    TextFormat.CODE,
    TextFormat.SUBSCRIPT,
    TextFormat.SUPERSCRIPT,
)

ALL_MARKS = TextFormat(sum(MARK_ORDER))

_KIND_ALIASES: Dict[str, NodeKind] = {kind.value: kind for kind in NodeKind if kind is not NodeKind.UNKNOWN}
_KIND_ALIASES["autolink"] = NodeKind.LINK
_KIND_ALIASES["media"] = NodeKind.UPLOAD
# Text-bearing leaves emitted inside code blocks and for tab characters.
_KIND_ALIASES["code-highlight"] = NodeKind.TEXT
_KIND_ALIASES["tab"] = NodeKind.TEXT

_EMPTY_FIELDS: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class Node:
    """A single node of the document tree.

    Only the attributes relevant to ``kind`` are populated; the rest keep
    their defaults. ``raw_type`` preserves the editor's original type string,
    which matters for ``UNKNOWN`` nodes.
    """

    kind: NodeKind
    children: Tuple["Node", ...] = ()
    raw_type: str = ""
    # text
    text: str = ""
    format: TextFormat = TextFormat.NONE
    color: Optional[str] = None
    # heading
    level: int = 2
    anchor_id: Optional[str] = None
    # link / upload
    url: Optional[str] = None
    new_tab: bool = False
    # list
    ordered: bool = False
    # upload
    alt: str = ""
    width: Optional[int] = None
    height: Optional[int] = None
    # block
    block_type: Optional[str] = None
    fields: Mapping[str, Any] = field(default_factory=lambda: _EMPTY_FIELDS)

    @property
    def is_leaf(self) -> bool:
        return not self.children


def parse_document(data: Any) -> Node:
    """Return the root node for an editor payload.

    Accepts the full ``{"root": ...}`` payload, a bare root dictionary or a
    JSON string of either. Anything else yields an empty root.
    """

    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except ValueError:
            return Node(kind=NodeKind.ROOT, raw_type="root")

    if isinstance(data, dict) and isinstance(data.get("root"), dict):
        data = data["root"]
    if not isinstance(data, dict):
        return Node(kind=NodeKind.ROOT, raw_type="root")

    return Node(kind=NodeKind.ROOT, raw_type="root", children=_parse_children(data))


def parse_node(data: Any) -> Optional[Node]:
    """Convert one editor node dictionary into a :class:`Node`."""

    if not isinstance(data, dict):
        return None

    raw_type = str(data.get("type") or "")
    kind = _KIND_ALIASES.get(raw_type, NodeKind.UNKNOWN)
    children = _parse_children(data)

    if kind is NodeKind.TEXT:
        return Node(
            kind=kind,
            raw_type=raw_type,
            text=_as_str(data.get("text")),
            format=_parse_format(data.get("format")),
            color=_as_str(data.get("style") or data.get("colorStyle")).strip() or None,
        )
    if kind is NodeKind.HEADING:
        return Node(
            kind=kind,
            raw_type=raw_type,
            children=children,
            level=_parse_level(data),
            anchor_id=_as_str(data.get("id")).strip() or None,
        )
    if kind is NodeKind.LINK:
        link_fields = data.get("fields") if isinstance(data.get("fields"), dict) else {}
        return Node(
            kind=kind,
            raw_type=raw_type,
            children=children,
            url=_as_str(link_fields.get("url") or data.get("url")) or None,
            new_tab=bool(link_fields.get("openInNewTab") or data.get("newTab") or data.get("openInNewTab")),
        )
    if kind is NodeKind.LIST:
        return Node(
            kind=kind,
            raw_type=raw_type,
            children=children,
            ordered=data.get("listType") == "number" or data.get("ordered") is True,
        )
    if kind is NodeKind.UPLOAD:
        value = data.get("value") if isinstance(data.get("value"), dict) else {}
        return Node(
            kind=kind,
            raw_type=raw_type,
            url=_as_str(value.get("url")) or None,
            alt=_as_str(value.get("alt")),
            width=_as_int(value.get("width")),
            height=_as_int(value.get("height")),
        )
    if kind is NodeKind.BLOCK:
        block_fields = data.get("fields") if isinstance(data.get("fields"), dict) else {}
        return Node(
            kind=kind,
            raw_type=raw_type,
            block_type=_as_str(block_fields.get("blockType")) or None,
            fields=MappingProxyType(dict(block_fields)),
        )
    return Node(kind=kind, raw_type=raw_type, children=children)


def _parse_children(data: Dict[str, Any]) -> Tuple[Node, ...]:
    raw_children = data.get("children")
    if not isinstance(raw_children, list):
        return ()
    parsed = (parse_node(child) for child in raw_children)
    return tuple(node for node in parsed if node is not None)


def _parse_format(value: Any) -> TextFormat:
    number = _as_int(value)
    if number is None or number < 0:
        return TextFormat.NONE
    return TextFormat(number & ALL_MARKS)


def _parse_level(data: Dict[str, Any]) -> int:
    level = _as_int(data.get("level"))
    tag = _as_str(data.get("tag")).strip().lower()
    if level is None and len(tag) == 2 and tag[0] == "h":
        level = _as_int(tag[1])
    if level is None:
        return 2
    return max(1, min(level, 6))


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
