"""Render a document tree to HTML.

Rendering is a pure function of the tree: the same input always yields the
same markup, and malformed or unknown nodes degrade to their children (or to
nothing) instead of raising.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, Iterable, Iterator, Mapping, Optional, Set
from urllib.parse import urlsplit

from . import theme
from .escape import escape_attr, escape_html
from .nodes import MARK_ORDER, Node, NodeKind, TextFormat, parse_document

_NEW_TAB_ATTRS = ' target="_blank" rel="noopener noreferrer"'

_MARK_TAGS: Dict[TextFormat, str] = {
    TextFormat.BOLD: "strong",
    TextFormat.ITALIC: "em",
    TextFormat.UNDERLINE: "u",
    TextFormat.STRIKETHROUGH: "s",
    TextFormat.CODE: "code",
    TextFormat.SUBSCRIPT: "sub",
    TextFormat.SUPERSCRIPT: "sup",
}

_MARK_ATTRS: Dict[TextFormat, str] = {
    TextFormat.CODE: f' class="{theme.INLINE_CODE}"',
}

_DEFAULT_IMAGE_WIDTH = 1200
_DEFAULT_IMAGE_HEIGHT = 800

_SAFE_SCHEMES = frozenset({"http", "https", "mailto", "tel"})
_URL_IGNORED_RE = re.compile(r"[\x00-\x20\x7f]+")

_SLUG_STRIP_RE = re.compile(r"[^\w\s-]|_")
_WHITESPACE_RE = re.compile(r"\s+")
_HYPHENS_RE = re.compile(r"-+")


def serialize(root: Node) -> str:
    """Return the HTML for ``root`` (usually a ``ROOT`` node)."""

    return _Serializer(_explicit_heading_ids(root)).render(root)


def serialize_document(data: Any) -> str:
    """Parse an editor payload and serialize it in one step."""

    return serialize(parse_document(data))


def plain_text(node: Node) -> str:
    """Concatenate the text of every text node below ``node``."""

    if node.kind is NodeKind.TEXT:
        return node.text
    return "".join(plain_text(child) for child in node.children)


def safe_href(url: Optional[str]) -> str:
    """Return ``url`` when it is relative or uses a web, mail or phone scheme, else ``"#"``."""

    if not url or not url.strip():
        return "#"
    try:
        scheme = urlsplit(_URL_IGNORED_RE.sub("", url)).scheme.lower()
    except ValueError:
        return "#"
    if scheme and scheme not in _SAFE_SCHEMES:
        return "#"
    return url.strip()


def slugify_heading(text: str) -> str:
    """Lowercase ``text`` and reduce it to hyphen-separated alphanumerics."""

    slug = _SLUG_STRIP_RE.sub("", text.strip().lower())
    slug = _WHITESPACE_RE.sub("-", slug)
    slug = _HYPHENS_RE.sub("-", slug)
    return slug.strip("-")


class _Serializer:
    """Holds the per-document state (heading ids) for one render."""

    def __init__(self, reserved_ids: Iterable[str] = ()) -> None:
        self._heading_ids: Set[str] = set()
        # Explicit ids anywhere in the document; generated ids must avoid them.
        self._reserved_ids: Set[str] = set(reserved_ids)
        self._anonymous_headings = 0
        self._renderers: Dict[NodeKind, Callable[[Node], str]] = {
            kind: getattr(self, method) for kind, method in RENDERERS.items()
        }

    def render(self, node: Node) -> str:
        return self._renderers[node.kind](node)

    def render_children(self, node: Node) -> str:
        return "".join(self.render(child) for child in node.children)

    def _root(self, node: Node) -> str:
        return self.render_children(node)

    def _paragraph(self, node: Node) -> str:
        inner = self.render_children(node) or "<br />"
        return f'<p class="{theme.PARAGRAPH}">{inner}</p>'

    def _text(self, node: Node) -> str:
        if not node.text:
            return ""
        html = escape_html(node.text)
        for mark in MARK_ORDER:
            if node.format & mark:
                tag = _MARK_TAGS[mark]
                html = f"<{tag}{_MARK_ATTRS.get(mark, '')}>{html}</{tag}>"
        if node.color:
            html = f'<span style="color: {escape_attr(node.color)}" class="{theme.COLOR_SPAN}">{html}</span>'
        return html

    def _heading(self, node: Node) -> str:
        tag = f"h{max(1, min(node.level, 6))}"
        heading_id = self._heading_id(node)
        classes = theme.HEADINGS[int(tag[1])]
        return f'<{tag} id="{escape_attr(heading_id)}" class="{classes}">{self.render_children(node)}</{tag}>'

    def _heading_id(self, node: Node) -> str:
        if node.anchor_id and node.anchor_id not in self._heading_ids:
            self._heading_ids.add(node.anchor_id)
            return node.anchor_id

        slug = "" if node.anchor_id else slugify_heading(plain_text(node))
        if node.anchor_id:
            candidate = node.anchor_id
        elif slug:
            candidate = f"heading-{slug}"
        else:
            self._anonymous_headings += 1
            candidate = f"heading-section-{self._anonymous_headings}"

        unique = candidate
        suffix = 2
        while unique in self._heading_ids or unique in self._reserved_ids:
            unique = f"{candidate}-{suffix}"
            suffix += 1
        self._heading_ids.add(unique)
        return unique

    def _link(self, node: Node) -> str:
        href = escape_attr(safe_href(node.url))
        new_tab = _NEW_TAB_ATTRS if node.new_tab else ""
        return f'<a href="{href}" class="{theme.LINK}"{new_tab}>{self.render_children(node)}</a>'

    def _list(self, node: Node) -> str:
        tag, classes = ("ol", theme.ORDERED_LIST) if node.ordered else ("ul", theme.UNORDERED_LIST)
        return f'<{tag} class="{classes}">{self.render_children(node)}</{tag}>'

    def _list_item(self, node: Node) -> str:
        return f'<li class="{theme.LIST_ITEM}">{self.render_children(node)}</li>'

    def _quote(self, node: Node) -> str:
        return f'<blockquote class="{theme.QUOTE}">{self.render_children(node)}</blockquote>'

    def _code(self, node: Node) -> str:
        code = escape_html(_code_text(node))
        return f'<pre class="{theme.CODE_BLOCK}"><code class="{theme.CODE_BLOCK_INNER}">{code}</code></pre>'

    def _line_break(self, node: Node) -> str:
        return "<br />"

    def _horizontal_rule(self, node: Node) -> str:
        return f'<hr class="{theme.HORIZONTAL_RULE}" />'

    def _upload(self, node: Node) -> str:
        if not node.url:
            return ""
        alt = escape_html(node.alt)
        width = node.width or _DEFAULT_IMAGE_WIDTH
        height = node.height or _DEFAULT_IMAGE_HEIGHT
        caption = f'<figcaption class="{theme.FIGURE_CAPTION}">{alt}</figcaption>' if node.alt else ""
        return (
            f'<figure class="{theme.FIGURE}"><div class="{theme.FIGURE_FRAME}">'
            f'<img src="{escape_attr(node.url)}" alt="{alt}" width="{width}" height="{height}" '
            f'class="{theme.FIGURE_IMAGE}" loading="lazy" /></div>{caption}</figure>'
        )

    def _table(self, node: Node) -> str:
        return (
            f'<div class="{theme.TABLE_WRAPPER}"><table class="{theme.TABLE}"><tbody>'
            f"{self.render_children(node)}</tbody></table></div>"
        )

    def _table_row(self, node: Node) -> str:
        return f'<tr class="{theme.TABLE_ROW}">{self.render_children(node)}</tr>'

    def _table_cell(self, node: Node) -> str:
        return f'<td class="{theme.TABLE_CELL}">{self.render_children(node)}</td>'

    def _block(self, node: Node) -> str:
        if node.block_type == "customButton":
            return _render_button(node.fields)
        if node.block_type == "callout":
            return _render_callout(node.fields)
        return ""

    def _unknown(self, node: Node) -> str:
        return self.render_children(node)


# Every NodeKind must have an entry here.
RENDERERS: Dict[NodeKind, str] = {
    NodeKind.ROOT: "_root",
    NodeKind.PARAGRAPH: "_paragraph",
    NodeKind.TEXT: "_text",
    NodeKind.HEADING: "_heading",
    NodeKind.LINK: "_link",
    NodeKind.LIST: "_list",
    NodeKind.LIST_ITEM: "_list_item",
    NodeKind.QUOTE: "_quote",
    NodeKind.CODE: "_code",
    NodeKind.LINE_BREAK: "_line_break",
    NodeKind.HORIZONTAL_RULE: "_horizontal_rule",
    NodeKind.UPLOAD: "_upload",
    NodeKind.TABLE: "_table",
    NodeKind.TABLE_ROW: "_table_row",
    NodeKind.TABLE_CELL: "_table_cell",
    NodeKind.BLOCK: "_block",
    NodeKind.UNKNOWN: "_unknown",
}


def _explicit_heading_ids(node: Node) -> Iterator[str]:
    if node.kind is NodeKind.HEADING and node.anchor_id:
        yield node.anchor_id
    for child in node.children:
        yield from _explicit_heading_ids(child)


def _code_text(node: Node) -> str:
    parts = []
    for child in node.children:
        if child.kind is NodeKind.TEXT:
            parts.append(child.text)
        elif child.kind is NodeKind.LINE_BREAK:
            parts.append("\n")
        else:
            parts.append(_code_text(child))
    return "".join(parts)


def _field(fields: Mapping[str, Any], name: str) -> str:
    value = fields.get(name)
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value)


def _render_button(fields: Mapping[str, Any]) -> str:
    text = escape_html(_field(fields, "buttonText") or "Learn more")
    href = escape_attr(safe_href(_field(fields, "buttonLink")))
    style = theme.BUTTON_STYLES.get(_field(fields, "buttonStyle"), theme.BUTTON_STYLES["primary"])
    size = theme.BUTTON_SIZES.get(_field(fields, "buttonSize"), theme.BUTTON_SIZES["medium"])
    alignment = _field(fields, "alignment")
    if alignment not in theme.BUTTON_ALIGNMENTS:
        alignment = "left"
    new_tab = _NEW_TAB_ATTRS if fields.get("openInNewTab") else ""
    return f'<div class="my-6 text-{alignment}"><a href="{href}" class="{style} {size}"{new_tab}>{text}</a></div>'


def _render_callout(fields: Mapping[str, Any]) -> str:
    colors = theme.CALLOUT_COLORS.get(_field(fields, "type"), theme.CALLOUT_COLORS["info"])
    content = escape_html(_field(fields, "content"))
    return f'<div class="{theme.CALLOUT} {colors}">{content}</div>'
