"""Django views for the blog app.

These views render published posts through the rich-text engine, offer a
JSON preview endpoint for editors, and accept revalidation notifications
from the content management side.
"""

from __future__ import annotations

import hmac
import json
import logging
import time
from typing import Any, Dict, List

from django.conf import settings
from django.contrib.auth.decorators import login_required
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404, render
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from .models import BlogPost
from .richtext import InternalLinkRule as LinkRule
from .services import default_site, fetch_link_rules, invalidate_render_cache, render_content, render_post

logger = logging.getLogger(__name__)

# Collections whose changes affect every rendered page.
SITE_WIDE_COLLECTIONS = {'internal-links', 'seo-pages', 'seo-images'}


@require_GET
def post_list(request: HttpRequest) -> HttpResponse:
    """List published posts, newest first."""

    posts = BlogPost.objects.filter(is_published=True)
    return render(request, 'blog/post_list.html', {'posts': posts})


@require_GET
def post_detail(request: HttpRequest, slug: str) -> HttpResponse:
    """Render a single published post with internal links and a table of contents."""

    post = get_object_or_404(BlogPost, slug=slug, is_published=True)
    rendered = render_post(post)
    canonical = post.canonical_url or request.build_absolute_uri()
    return render(
        request,
        'blog/post_detail.html',
        {
            'post': post,
            'content_html': rendered.html,
            'toc': rendered.toc,
            'meta_title': post.meta_title or post.title,
            'meta_description': post.meta_description or post.excerpt,
            'canonical': canonical,
        },
    )


@login_required
@require_POST
def preview(request: HttpRequest) -> HttpResponse:
    """Render a posted editor document and report link statistics.

    The JSON body carries ``content`` (the editor document), an optional
    ``site`` and optional ``rules``. Without ``rules`` the stored rules for
    the site are used, so editors can check a draft before publishing.
    """

    try:
        payload = json.loads(request.body or b'{}')
    except ValueError:
        return JsonResponse({'detail': 'Request body must be valid JSON.'}, status=400)
    if not isinstance(payload, dict) or 'content' not in payload:
        return JsonResponse({'detail': 'A "content" document is required.'}, status=400)

    site = payload.get('site') or default_site()
    raw_rules = payload.get('rules')
    if raw_rules is None:
        rules = fetch_link_rules(site)
    elif isinstance(raw_rules, list) and all(isinstance(item, dict) for item in raw_rules):
        rules = [LinkRule.from_dict(item) for item in raw_rules]
    else:
        return JsonResponse({'detail': '"rules" must be a list of rule objects.'}, status=400)

    rendered = render_content(payload['content'], rules, site)
    return JsonResponse(
        {
            'html': rendered.html,
            'stats': rendered.stats.as_dict(),
            'toc': [{'id': entry.id, 'text': entry.text, 'level': entry.level} for entry in rendered.toc],
        }
    )


def _secret_matches(request: HttpRequest) -> bool:
    expected = getattr(settings, 'REVALIDATE_SECRET', '')
    if not expected:
        return False
    provided = request.headers.get('X-Revalidate-Secret') or request.GET.get('secret') or ''
    return hmac.compare_digest(provided, expected)


def _paths_for(payload: Dict[str, Any]) -> List[str]:
    collection = payload.get('collection')
    slug = payload.get('slug')
    if collection == 'blogs':
        return [f'/blogs/{slug}/', '/blogs/'] if slug else ['/blogs/']
    if collection in SITE_WIDE_COLLECTIONS:
        return ['/']
    path = payload.get('path')
    return [path] if isinstance(path, str) and path else ['/']


@csrf_exempt
@require_http_methods(['GET', 'POST'])
def revalidate(request: HttpRequest) -> HttpResponse:
    """Drop cached renders after content or link rules changed upstream."""

    if not _secret_matches(request):
        return JsonResponse(
            {'revalidated': False, 'detail': 'Invalid or missing revalidation secret.'},
            status=401,
        )

    if request.method == 'POST':
        try:
            payload = json.loads(request.body or b'{}')
        except ValueError:
            return JsonResponse({'revalidated': False, 'detail': 'Request body must be valid JSON.'}, status=400)
        if not isinstance(payload, dict):
            return JsonResponse({'revalidated': False, 'detail': 'Request body must be a JSON object.'}, status=400)
    else:
        payload = {'path': request.GET.get('path')}

    paths = _paths_for(payload)
    invalidate_render_cache(f"revalidation of {', '.join(paths)}")
    logger.info('Revalidation request for %s handled', payload.get('collection') or 'manual')
    return JsonResponse({'revalidated': True, 'paths': paths, 'now': int(time.time() * 1000)})
