"""Forms for the blog app.

The admin edits link rules through :class:`InternalLinkRuleForm`, which
rejects rules the injector would otherwise have to skip at render time.
"""

from __future__ import annotations

import re

from django import forms

from .models import InternalLinkRule
from .richtext.injector import compile_rule_pattern
from .richtext.types import InternalLinkRule as LinkRule
from .richtext.types import MatchType


class InternalLinkRuleForm(forms.ModelForm):
    """Admin form validating keywords, targets and regex patterns."""

    class Meta:
        model = InternalLinkRule
        fields = (
            'site',
            'keyword',
            'target_url',
            'title',
            'nofollow',
            'priority',
            'max_links_per_page',
            'match_type',
            'is_active',
            'notes',
        )
        widgets = {
            'notes': forms.Textarea(attrs={'rows': 3}),
        }

    def clean_keyword(self) -> str:
        keyword = (self.cleaned_data.get('keyword') or '').strip()
        if not keyword:
            raise forms.ValidationError('Keyword is required.')
        return keyword

    def clean_target_url(self) -> str:
        target = (self.cleaned_data.get('target_url') or '').strip()
        if not target:
            raise forms.ValidationError('Target URL is required.')
        if not (target.startswith('/') or target.startswith('http://') or target.startswith('https://')):
            raise forms.ValidationError('Target URL must be a site path (/blogs/...) or an absolute http(s) URL.')
        return target

    def clean_site(self) -> str:
        return (self.cleaned_data.get('site') or '').strip().lower()

    def clean(self) -> dict[str, object]:  # type: ignore[override]
        cleaned_data = super().clean()
        keyword = cleaned_data.get('keyword')
        match_type = cleaned_data.get('match_type')
        if keyword and match_type == MatchType.REGEX.value:
            try:
                compile_rule_pattern(LinkRule(keyword=keyword, target_url='#', match_type=MatchType.REGEX))
            except re.error as exc:
                self.add_error('keyword', f'Invalid regular expression: {exc}')
        return cleaned_data
