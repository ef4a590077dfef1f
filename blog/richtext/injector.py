"""Rule-driven internal link injection over serialized HTML.

Rules are applied one after another to a running copy of the HTML string,
highest priority first and, within a priority, longest keyword first so a
specific phrase is linked before a shorter keyword can break it up. Each rule
is bounded by its own quota and by the global quota for the page.

Whether a match may be linked is decided from string positions in the HTML
as it stood before the current rule ran: a match is skipped when it sits
inside tag markup, inside an open element from the avoid list, or inside an
existing anchor. Matches that begin or end within a character reference such
as ``&amp;`` are skipped as well.
"""

from __future__ import annotations

import logging
import re
from bisect import bisect_left, bisect_right
from typing import Dict, Iterable, List, Sequence, Tuple

from .escape import escape_attr, escape_html
from .types import InjectionOptions, InternalLinkRule, LinkInjectionStats, MatchType

logger = logging.getLogger(__name__)

_ANCHOR_KEY = "\0anchor"
_ENTITY_RE = re.compile(r"&(?:#[0-9]+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);")


def sort_rules(rules: Iterable[InternalLinkRule]) -> List[InternalLinkRule]:
    """Return rules by priority (high first), then keyword length (long first)."""

    return sorted(rules, key=lambda rule: (-rule.priority, -len(rule.keyword)))


def compile_rule_pattern(rule: InternalLinkRule) -> re.Pattern[str]:
    """Compile the case-insensitive search pattern for ``rule``.

    Raises :class:`re.error` when a ``regex`` rule carries an invalid pattern.
    """

    if rule.match_type is MatchType.REGEX:
        return re.compile(rule.keyword, flags=re.IGNORECASE)
    escaped = re.escape(rule.keyword)
    if rule.match_type is MatchType.PHRASE:
        return re.compile(escaped, flags=re.IGNORECASE)
    return re.compile(rf"\b{escaped}\b", flags=re.IGNORECASE)


def inject(
    html: str,
    rules: Sequence[InternalLinkRule],
    options: InjectionOptions | None = None,
) -> Tuple[str, LinkInjectionStats]:
    """Insert anchors for rule keywords and return ``(html, stats)``.

    Inactive and inert rules are ignored. A rule whose pattern does not
    compile is skipped and reported in ``stats.diagnostics``. Once the global
    quota is reached no further rules are attempted.
    """

    opts = options or InjectionOptions()
    stats = LinkInjectionStats()
    if not html or not rules:
        return html, stats

    usable = [rule for rule in rules if rule.is_active and not rule.is_inert]
    result = html

    for rule in sort_rules(usable):
        if stats.total_links_injected >= opts.max_total_links:
            break

        stats.rule_stats.setdefault(rule.keyword, 0)
        try:
            pattern = compile_rule_pattern(rule)
        except re.error as exc:
            message = f'Invalid regex pattern for keyword "{rule.keyword}": {exc}'
            logger.warning(message)
            stats.diagnostics.append(message)
            continue

        result = _apply_rule(result, rule, pattern, opts, stats)

    logger.debug(
        "Injected %d internal links across %d rules",
        stats.total_links_injected,
        len(stats.rule_stats),
    )
    return result, stats


def _apply_rule(
    html: str,
    rule: InternalLinkRule,
    pattern: re.Pattern[str],
    opts: InjectionOptions,
    stats: LinkInjectionStats,
) -> str:
    index = _TagIndex(html, opts.avoid_tags)
    linked = 0

    def replace(match: re.Match[str]) -> str:
        nonlocal linked
        text = match.group(0)
        if not text:
            return text
        if linked >= rule.max_links_per_page:
            return text
        if stats.total_links_injected >= opts.max_total_links:
            return text

        position = match.start()
        if index.inside_markup(position):
            return text
        if index.splits_entity(position) or index.splits_entity(match.end()):
            return text
        if index.inside_any(position, opts.avoid_tags):
            return text
        if index.inside_anchor(position):
            return text

        linked += 1
        stats.total_links_injected += 1
        stats.rule_stats[rule.keyword] += 1
        return _build_anchor(rule, text, opts.link_class)

    return pattern.sub(replace, html)


def _build_anchor(rule: InternalLinkRule, text: str, link_class: str) -> str:
    attrs = [f'href="{escape_attr(rule.target_url)}"']
    if rule.title:
        attrs.append(f'title="{escape_html(rule.title)}"')
    if rule.nofollow:
        attrs.append('rel="nofollow"')
    attrs.append(f'class="{escape_attr(link_class)}"')
    return f"<a {' '.join(attrs)}>{text}</a>"


class _TagIndex:
    """Positions of opening and closing tags in one HTML snapshot.

    A position counts as inside a tag when more openings than closings end
    before it and at least one closing tag starts at or after it.
    """

    def __init__(self, html: str, tags: Iterable[str]) -> None:
        self._html = html
        self._open_ends: Dict[str, List[int]] = {}
        self._close_ends: Dict[str, List[int]] = {}
        self._close_starts: Dict[str, List[int]] = {}

        for tag in tags:
            name = re.escape(tag)
            self._index(tag, rf"<{name}[\s>]", rf"</{name}>")
        # Existing anchors are recognised by "<a" followed by whitespace.
        self._index(_ANCHOR_KEY, r"<a\s", r"</a>")
        self._entity_starts: List[int] = []
        self._entity_ends: List[int] = []
        for entity in _ENTITY_RE.finditer(html):
            self._entity_starts.append(entity.start())
            self._entity_ends.append(entity.end())

    def _index(self, key: str, opening: str, closing: str) -> None:
        self._open_ends[key] = [m.end() for m in re.finditer(opening, self._html, flags=re.IGNORECASE)]
        closings = list(re.finditer(closing, self._html, flags=re.IGNORECASE))
        self._close_ends[key] = [m.end() for m in closings]
        self._close_starts[key] = [m.start() for m in closings]

    def inside(self, key: str, position: int) -> bool:
        opened = bisect_right(self._open_ends[key], position)
        closed = bisect_right(self._close_ends[key], position)
        if opened <= closed:
            return False
        return bisect_left(self._close_starts[key], position) < len(self._close_starts[key])

    def inside_any(self, position: int, tags: Iterable[str]) -> bool:
        return any(self.inside(tag, position) for tag in tags)

    def inside_anchor(self, position: int) -> bool:
        return self.inside(_ANCHOR_KEY, position)

    def inside_markup(self, position: int) -> bool:
        return self._html.rfind("<", 0, position) > self._html.rfind(">", 0, position)

    def splits_entity(self, position: int) -> bool:
        """True when ``position`` falls strictly inside a character reference."""

        i = bisect_left(self._entity_starts, position) - 1
        return i >= 0 and position < self._entity_ends[i]
