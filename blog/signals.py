"""Invalidate cached renders whenever posts or link rules change."""

from __future__ import annotations

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import BlogPost, InternalLinkRule
from .services import invalidate_render_cache


@receiver([post_save, post_delete], sender=InternalLinkRule)
def link_rules_changed(sender, instance: InternalLinkRule, **kwargs) -> None:
    invalidate_render_cache(f'internal link rule "{instance.keyword}" changed')


@receiver(post_delete, sender=BlogPost)
def post_deleted(sender, instance: BlogPost, **kwargs) -> None:
    invalidate_render_cache(f'post "{instance.slug}" deleted')
