"""Table-of-contents extraction tests."""

from __future__ import annotations

from blog.richtext.serializer import serialize_document
from blog.richtext.toc import extract_toc
from blog.richtext.types import TocEntry

from .conftest import doc, heading, paragraph, text


def test_toc_lists_requested_levels_in_order():
    html = serialize_document(
        doc(
            heading(text("Title"), tag="h1"),
            heading(text("Setup")),
            paragraph(text("body")),
            heading(text("Install  the   tool"), tag="h3"),
            heading(text("Details"), tag="h4"),
            heading(text("Setup")),
        )
    )
    assert extract_toc(html) == [
        TocEntry(id="heading-setup", text="Setup", level=2),
        TocEntry(id="heading-install-the-tool", text="Install the tool", level=3),
        TocEntry(id="heading-setup-2", text="Setup", level=2),
    ]


def test_toc_custom_levels():
    html = serialize_document(doc(heading(text("Title"), tag="h1"), heading(text("Details"), tag="h4")))
    entries = extract_toc(html, levels=(1, 4))
    assert [entry.level for entry in entries] == [1, 4]


def test_toc_skips_unanchored_or_empty_headings():
    html = '<h2>No id</h2><h2 id="empty"> </h2><h2 id="ok">Fine <a href="/x">link</a></h2>'
    assert extract_toc(html) == [TocEntry(id="ok", text="Fine link", level=2)]


def test_toc_of_empty_html():
    assert extract_toc("") == []
