"""Database models for the blog app.

Posts store their body as the block editor's JSON document; it is rendered
to HTML on request. Internal link rules are editor-maintained keyword →
URL mappings applied to every rendered post of the matching site.
"""

from __future__ import annotations

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from .richtext.types import InternalLinkRule as LinkRule
from .richtext.types import MatchType


class BlogPost(models.Model):
    """A blog article authored in the rich-text editor."""

    title = models.CharField(max_length=300)
    slug = models.SlugField(max_length=255, unique=True)
    excerpt = models.TextField(blank=True)
    content = models.JSONField(default=dict, blank=True)
    meta_title = models.CharField(max_length=300, blank=True)
    meta_description = models.TextField(blank=True)
    canonical_url = models.URLField(blank=True)
    is_published = models.BooleanField(default=False, db_index=True)
    published_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-published_at', '-created_at']

    def __str__(self) -> str:  # pragma: no cover - convenience display
        return self.title


class InternalLinkRule(models.Model):
    """Keyword → URL rule used to inject internal links into posts."""

    MATCH_TYPE_CHOICES = [
        (MatchType.WORD.value, 'Word (exact)'),
        (MatchType.PHRASE.value, 'Phrase (exact)'),
        (MatchType.REGEX.value, 'Regex (advanced)'),
    ]

    site = models.CharField(
        max_length=255,
        blank=True,
        db_index=True,
        help_text='Domain this rule applies to. Leave blank to apply to every site.',
    )
    keyword = models.CharField(max_length=255, db_index=True)
    target_url = models.CharField(max_length=500, help_text='Target URL (e.g. /blogs/nextjs-guide).')
    title = models.CharField(max_length=300, blank=True, help_text='Optional tooltip.')
    nofollow = models.BooleanField(default=False)
    priority = models.PositiveSmallIntegerField(
        default=10,
        validators=[MaxValueValidator(100)],
        help_text='Higher priorities are applied first (0-100).',
    )
    max_links_per_page = models.PositiveSmallIntegerField(
        default=2,
        validators=[MinValueValidator(0), MaxValueValidator(10)],
    )
    match_type = models.CharField(max_length=10, choices=MATCH_TYPE_CHOICES, default=MatchType.WORD.value)
    is_active = models.BooleanField(default=True, db_index=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-priority', 'keyword']

    def __str__(self) -> str:  # pragma: no cover - convenience display
        return f'{self.keyword} → {self.target_url}'

    def to_rule(self) -> LinkRule:
        """Return the engine representation of this rule."""

        return LinkRule(
            keyword=self.keyword,
            target_url=self.target_url,
            title=self.title or None,
            nofollow=self.nofollow,
            priority=self.priority,
            max_links_per_page=self.max_links_per_page,
            match_type=MatchType.coerce(self.match_type),
            site=self.site or None,
            is_active=self.is_active,
        )
