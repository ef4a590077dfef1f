"""Table-of-contents extraction from rendered post HTML."""

from __future__ import annotations

from typing import List, Sequence

from bs4 import BeautifulSoup  # type: ignore

from .types import TocEntry


def extract_toc(html: str, levels: Sequence[int] = (2, 3)) -> List[TocEntry]:
    """Return the anchorable headings of ``html`` in document order.

    Only headings whose level is listed in ``levels`` are included. Headings
    without an ``id`` or without visible text are skipped since they cannot
    be linked to from the table of contents.
    """

    if not html:
        return []

    soup = BeautifulSoup(html, "html.parser")
    entries: List[TocEntry] = []
    for heading in soup.find_all([f"h{level}" for level in levels]):
        heading_id = heading.get("id")
        text = " ".join(heading.get_text().split())
        if not heading_id or not text:
            continue
        entries.append(TocEntry(id=heading_id, text=text, level=int(heading.name[1])))
    return entries
