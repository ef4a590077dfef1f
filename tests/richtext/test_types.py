"""Rule and stats data structure tests."""

from __future__ import annotations

from blog.richtext.types import InternalLinkRule, LinkInjectionStats, MatchType


def test_rule_from_camel_case_dict():
    rule = InternalLinkRule.from_dict(
        {
            "keyword": "seo",
            "targetUrl": "/blogs/seo",
            "title": "SEO",
            "nofollow": True,
            "priority": "7",
            "maxLinksPerPage": 4,
            "matchType": "PHRASE",
            "site": "example.com",
            "isActive": False,
        }
    )
    assert rule == InternalLinkRule(
        keyword="seo",
        target_url="/blogs/seo",
        title="SEO",
        nofollow=True,
        priority=7,
        max_links_per_page=4,
        match_type=MatchType.PHRASE,
        site="example.com",
        is_active=False,
    )


def test_rule_from_sparse_dict_uses_defaults():
    rule = InternalLinkRule.from_dict({"keyword": "seo", "target_url": "/seo", "priority": "high", "matchType": "fuzzy"})
    assert rule.priority == 0
    assert rule.max_links_per_page == 2
    assert rule.match_type is MatchType.WORD
    assert rule.title is None
    assert rule.site is None
    assert rule.is_active


def test_inert_rules():
    assert InternalLinkRule(keyword="", target_url="/x").is_inert
    assert InternalLinkRule(keyword="x", target_url="").is_inert
    assert InternalLinkRule(keyword="x", target_url="/x", max_links_per_page=0).is_inert
    assert not InternalLinkRule(keyword="x", target_url="/x").is_inert


def test_stats_as_dict_copies_values():
    stats = LinkInjectionStats(total_links_injected=1, rule_stats={"a": 1})
    exported = stats.as_dict()
    exported["ruleStats"]["a"] = 5
    assert stats.rule_stats == {"a": 1}
    assert exported["totalLinksInjected"] == 1
