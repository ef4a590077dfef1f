"""Service functions connecting the stored content to the rendering engine.

These functions play the part of the rule store and content store for the
pure :mod:`blog.richtext` engine. They load link rules from the database,
cache them (and rendered posts) in Django's cache framework, and expose a
single invalidation hook used by signals and the revalidation endpoint.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, List, Optional, Sequence

from django.conf import settings
from django.core.cache import cache
from django.db.models import Q

from .models import BlogPost, InternalLinkRule
from .richtext import (
    InternalLinkRule as LinkRule,
    LinkInjectionStats,
    TocEntry,
    extract_toc,
    parse_document,
    render_document,
)
from .richtext.config import EngineConfig, load_config

logger = logging.getLogger(__name__)

CACHE_PREFIX = 'blog:render'
GENERATION_KEY = f'{CACHE_PREFIX}:generation'


@dataclass(frozen=True)
class RenderedPost:
    """Everything a post page needs from the rendering pass."""

    html: str
    stats: LinkInjectionStats = field(default_factory=LinkInjectionStats)
    toc: List[TocEntry] = field(default_factory=list)


@lru_cache(maxsize=1)
def engine_config() -> EngineConfig:
    """Return the engine configuration named by ``settings.RICHTEXT_CONFIG``."""

    return load_config(getattr(settings, 'RICHTEXT_CONFIG', None))


def default_site() -> str:
    return getattr(settings, 'DEFAULT_SITE', '')


def _generation() -> int:
    return cache.get_or_set(GENERATION_KEY, 1, timeout=None)


def _cache_timeout() -> int:
    return int(getattr(settings, 'INTERNAL_LINKS_CACHE_TIMEOUT', 3600))


def fetch_link_rules(site: Optional[str]) -> List[LinkRule]:
    """Return the active link rules for ``site`` as engine rules.

    Rules without a site apply to every site and are always included. When
    ``site`` is empty every active rule is returned. Results are cached until
    :func:`invalidate_render_cache` is called or the cache timeout expires.

    Parameters
    ----------
    site:
        Domain whose rules should be loaded.

    Returns
    -------
    list of :class:`blog.richtext.InternalLinkRule`
        Rules in database order; the injector sorts them itself.
    """

    key = f'{CACHE_PREFIX}:{_generation()}:rules:{site or "*"}'
    cached = cache.get(key)
    if cached is not None:
        return cached

    queryset = InternalLinkRule.objects.filter(is_active=True)
    if site:
        queryset = queryset.filter(Q(site=site) | Q(site=''))
    rules = [rule.to_rule() for rule in queryset]
    cache.set(key, rules, timeout=_cache_timeout())
    return rules


def render_content(
    content: Any,
    rules: Sequence[LinkRule],
    site: Optional[str] = None,
) -> RenderedPost:
    """Render an editor document with ``rules`` and build its table of contents."""

    config = engine_config()
    result = render_document(parse_document(content), rules, site, config.injection_options())
    for message in result.stats.diagnostics:
        logger.warning('Link rule skipped for site %s: %s', site or '*', message)
    toc = extract_toc(result.html, config.toc_levels())
    return RenderedPost(html=result.html, stats=result.stats, toc=toc)


def render_post(post: BlogPost, site: Optional[str] = None) -> RenderedPost:
    """Render ``post`` for ``site`` using the stored link rules.

    The rendered result is cached per post revision; rule changes invalidate
    it through :func:`invalidate_render_cache`.
    """

    site = site if site is not None else default_site()
    revision = post.updated_at.timestamp() if post.updated_at else 0
    key = f'{CACHE_PREFIX}:{_generation()}:post:{post.pk}:{revision}:{site or "*"}'
    cached = cache.get(key)
    if cached is not None:
        return cached

    rendered = render_content(post.content, fetch_link_rules(site), site)
    cache.set(key, rendered, timeout=_cache_timeout())
    return rendered


def invalidate_render_cache(reason: str = '') -> int:
    """Drop every cached rule list and rendered post.

    Entries are keyed by a generation number; bumping it orphans the old
    entries, which then expire on their own.

    Returns
    -------
    int
        The new generation number.
    """

    generation = _generation() + 1
    cache.set(GENERATION_KEY, generation, timeout=None)
    logger.info('Render cache invalidated (generation %d)%s', generation, f': {reason}' if reason else '')
    return generation
