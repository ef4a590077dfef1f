"""Configuration helpers for the rich-text engine."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

from .types import (
    DEFAULT_AVOID_TAGS,
    DEFAULT_MAX_TOTAL_LINKS,
    LINK_MARKER_CLASS,
    InjectionOptions,
)


@dataclass(frozen=True)
class EngineConfig:
    """Typed wrapper around the engine configuration dictionary."""

    raw: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)

    def injection_options(self) -> InjectionOptions:
        section = self.raw.get("injection", {})
        return InjectionOptions(
            max_total_links=int(section.get("max_total_links", DEFAULT_MAX_TOTAL_LINKS)),
            avoid_tags=frozenset(str(tag).lower() for tag in section.get("avoid_tags", DEFAULT_AVOID_TAGS)),
            link_class=str(section.get("link_class", LINK_MARKER_CLASS)),
        )

    def toc_levels(self) -> Tuple[int, ...]:
        levels = self.raw.get("toc", {}).get("levels", (2, 3))
        return tuple(int(level) for level in levels)


DEFAULTS: Dict[str, Any] = {
    "injection": {
        "max_total_links": DEFAULT_MAX_TOTAL_LINKS,
        "avoid_tags": sorted(DEFAULT_AVOID_TAGS),
        "link_class": LINK_MARKER_CLASS,
    },
    "toc": {
        "levels": [2, 3],
    },
}


def load_config(path: str | Path | None = None) -> EngineConfig:
    """Load configuration from YAML, merging with defaults."""

    data: Dict[str, Any] = copy.deepcopy(DEFAULTS)

    if path is not None and Path(path).exists():
        with Path(path).open("r", encoding="utf-8") as stream:
            user = yaml.safe_load(stream) or {}
        merge_into(data, user)

    return EngineConfig(data)


def merge_into(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge override into base dict."""

    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_into(base[key], value)
        else:
            base[key] = value
