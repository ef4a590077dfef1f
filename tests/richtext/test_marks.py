"""Inline text format tests."""

from __future__ import annotations

import pytest

from blog.richtext import theme
from blog.richtext.nodes import Node, NodeKind, TextFormat, parse_node
from blog.richtext.serializer import serialize

TAGS = [
    (TextFormat.BOLD, "<strong>", "</strong>"),
    (TextFormat.ITALIC, "<em>", "</em>"),
    (TextFormat.UNDERLINE, "<u>", "</u>"),
    (TextFormat.STRIKETHROUGH, "<s>", "</s>"),
    (TextFormat.CODE, f'<code class="{theme.INLINE_CODE}">', "</code>"),
    (TextFormat.SUBSCRIPT, "<sub>", "</sub>"),
    (TextFormat.SUPERSCRIPT, "<sup>", "</sup>"),
]


def render_text(node: Node) -> str:
    return serialize(Node(kind=NodeKind.ROOT, children=(node,)))


@pytest.mark.parametrize("mask", range(128))
def test_every_format_combination(mask):
    expected = "a&amp;b"
    for flag, opening, closing in TAGS:
        if mask & flag:
            expected = f"{opening}{expected}{closing}"
    node = Node(kind=NodeKind.TEXT, text="a&b", format=TextFormat(mask))
    assert render_text(node) == expected


def test_bold_is_innermost():
    node = Node(kind=NodeKind.TEXT, text="t", format=TextFormat.BOLD | TextFormat.ITALIC)
    assert render_text(node) == "<em><strong>t</strong></em>"


def test_unknown_format_bits_are_ignored():
    node = parse_node({"type": "text", "text": "x", "format": 1 | 128 | 256})
    assert node is not None
    assert node.format == TextFormat.BOLD


def test_empty_text_renders_nothing():
    node = Node(kind=NodeKind.TEXT, text="", format=TextFormat.BOLD, color="red")
    assert render_text(node) == ""


def test_color_is_outermost_and_escaped():
    node = Node(kind=NodeKind.TEXT, text="x", format=TextFormat.CODE, color='red"><b>')
    assert render_text(node) == (
        '<span style="color: red&quot;&gt;&lt;b&gt;" class="inline">'
        f'<code class="{theme.INLINE_CODE}">x</code></span>'
    )
