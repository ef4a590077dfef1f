"""Typed data structures shared by the injector and the rendering pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Mapping, Optional

DEFAULT_AVOID_TAGS: FrozenSet[str] = frozenset({"a", "code", "pre", "script", "style"})
DEFAULT_MAX_TOTAL_LINKS = 50
DEFAULT_MAX_LINKS_PER_RULE = 2
LINK_MARKER_CLASS = "internal-link"


class MatchType(str, Enum):
    """How a rule's keyword is turned into a search pattern."""

    WORD = "word"
    PHRASE = "phrase"
    REGEX = "regex"

    @classmethod
    def coerce(cls, value: Any) -> "MatchType":
        """Return the member for ``value``, falling back to ``WORD``."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.WORD


@dataclass(frozen=True)
class InternalLinkRule:
    """Keyword → URL linking rule supplied by the rule store."""

    keyword: str
    target_url: str
    title: Optional[str] = None
    nofollow: bool = False
    priority: int = 0
    max_links_per_page: int = DEFAULT_MAX_LINKS_PER_RULE
    match_type: MatchType = MatchType.WORD
    site: Optional[str] = None
    is_active: bool = True

    @property
    def is_inert(self) -> bool:
        """A rule without keyword or target, or with no quota, never links."""

        return not self.keyword or not self.target_url or self.max_links_per_page <= 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "InternalLinkRule":
        """Build a rule from its JSON form (snake_case or camelCase keys)."""

        def pick(*names: str, default: Any = None) -> Any:
            for name in names:
                if data.get(name) is not None:
                    return data[name]
            return default

        title = pick("title")
        site = pick("site")
        return cls(
            keyword=str(pick("keyword", default="")),
            target_url=str(pick("target_url", "targetUrl", default="")),
            title=str(title) if title else None,
            nofollow=bool(pick("nofollow", default=False)),
            priority=_coerce_int(pick("priority"), 0),
            max_links_per_page=_coerce_int(
                pick("max_links_per_page", "maxLinksPerPage"),
                DEFAULT_MAX_LINKS_PER_RULE,
            ),
            match_type=MatchType.coerce(pick("match_type", "matchType", default=MatchType.WORD)),
            site=str(site) if site else None,
            is_active=pick("isActive", "is_active", default=True) is not False,
        )


@dataclass(frozen=True)
class InjectionOptions:
    """Knobs for a single injection pass."""

    max_total_links: int = DEFAULT_MAX_TOTAL_LINKS
    avoid_tags: FrozenSet[str] = DEFAULT_AVOID_TAGS
    link_class: str = LINK_MARKER_CLASS


@dataclass
class LinkInjectionStats:
    """Counters collected while injecting links. Output only."""

    total_links_injected: int = 0
    rule_stats: Dict[str, int] = field(default_factory=dict)
    diagnostics: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "totalLinksInjected": self.total_links_injected,
            "ruleStats": dict(self.rule_stats),
            "diagnostics": list(self.diagnostics),
        }


@dataclass(frozen=True)
class TocEntry:
    """One heading listed in a post's table of contents."""

    id: str
    text: str
    level: int


def _coerce_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
