"""Coordinator for the serialize-then-link rendering pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .injector import inject
from .nodes import Node
from .serializer import serialize
from .types import InjectionOptions, InternalLinkRule, LinkInjectionStats


@dataclass(frozen=True)
class RenderResult:
    """Final HTML for a document plus the link statistics of the pass."""

    html: str
    stats: LinkInjectionStats = field(default_factory=LinkInjectionStats)


def filter_rules_for_site(rules: Iterable[InternalLinkRule], site: Optional[str]) -> List[InternalLinkRule]:
    """Keep active rules that belong to ``site`` or to no site at all."""

    return [rule for rule in rules if rule.is_active and (not site or not rule.site or rule.site == site)]


def render_document(
    root: Node,
    rules: Sequence[InternalLinkRule],
    site: Optional[str] = None,
    options: InjectionOptions | None = None,
) -> RenderResult:
    """Serialize ``root`` and inject the site's internal links into it."""

    html = serialize(root)
    site_rules = filter_rules_for_site(rules, site)
    if not html or not site_rules:
        return RenderResult(html=html)

    linked_html, stats = inject(html, site_rules, options)
    return RenderResult(html=linked_html, stats=stats)


def render_with_links(root: Node, rules: Sequence[InternalLinkRule], site: Optional[str] = None) -> str:
    """Return the final HTML for ``root`` using the default injection options."""

    return render_document(root, rules, site).html
