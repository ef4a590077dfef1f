"""Internal link injection tests."""

from __future__ import annotations

import logging

from blog.richtext.injector import inject, sort_rules
from blog.richtext.types import InjectionOptions, MatchType

from .conftest import make_rule


def test_rules_sorted_by_priority_then_length():
    rules = [
        make_rule("tax", "/tax", priority=1),
        make_rule("books", "/books", priority=5),
        make_rule("books about tax", "/tax-books", priority=5),
    ]
    assert [rule.keyword for rule in sort_rules(rules)] == ["books about tax", "books", "tax"]


def test_longer_keyword_wins_and_is_not_relinked():
    rules = [make_rule("books", "/books"), make_rule("books about tax", "/tax-books")]
    html, stats = inject("<p>I read books about tax.</p>", rules)
    assert html == '<p>I read <a href="/tax-books" class="internal-link">books about tax</a>.</p>'
    assert stats.total_links_injected == 1
    assert stats.rule_stats == {"books about tax": 1, "books": 0}


def test_per_rule_quota():
    rules = [make_rule("python", "/python", max_links_per_page=2)]
    html, stats = inject("<p>python python python python python</p>", rules)
    assert html.count("<a ") == 2
    assert html.endswith("python python python</p>")
    assert stats.rule_stats == {"python": 2}


def test_global_quota_stops_remaining_rules():
    rules = [make_rule("alpha", "/alpha", priority=10), make_rule("beta", "/beta", priority=1)]
    html, stats = inject("<p>alpha beta</p>", rules, InjectionOptions(max_total_links=1))
    assert html == '<p><a href="/alpha" class="internal-link">alpha</a> beta</p>'
    assert stats.total_links_injected == 1
    assert stats.rule_stats == {"alpha": 1}


def test_avoid_tags_are_respected():
    rules = [make_rule("python", "/python", max_links_per_page=5)]
    source = "<p>Use python.</p><pre><code>python</code></pre><script>var python;</script>"
    html, stats = inject(source, rules)
    assert html == (
        '<p>Use <a href="/python" class="internal-link">python</a>.</p>'
        "<pre><code>python</code></pre><script>var python;</script>"
    )
    assert stats.total_links_injected == 1


def test_existing_anchors_are_not_nested():
    rules = [make_rule("python", "/python")]
    source = '<p><a href="/docs" class="x">learn python</a> and python</p>'
    html, _ = inject(source, rules)
    assert html == '<p><a href="/docs" class="x">learn python</a> and <a href="/python" class="internal-link">python</a></p>'


def test_attributes_are_never_rewritten():
    rules = [make_rule("python", "/python")]
    html, stats = inject('<p><img alt="python logo" /> python</p>', rules)
    assert html == '<p><img alt="python logo" /> <a href="/python" class="internal-link">python</a></p>'
    assert stats.rule_stats == {"python": 1}


def test_word_match_respects_boundaries_and_keeps_case():
    rules = [make_rule("java", "/java")]
    html, _ = inject("<p>JavaScript is not Java.</p>", rules)
    assert html == '<p>JavaScript is not <a href="/java" class="internal-link">Java</a>.</p>'


def test_phrase_match_ignores_word_boundaries():
    rules = [make_rule("script", "/script", match_type=MatchType.PHRASE)]
    html, _ = inject("<p>javascript</p>", rules)
    assert html == '<p>java<a href="/script" class="internal-link">script</a></p>'


def test_regex_rule():
    rules = [make_rule(r"v\d+\.\d+", "/releases", match_type=MatchType.REGEX)]
    html, stats = inject("<p>See v2.10 and V3.1</p>", rules)
    assert '<a href="/releases" class="internal-link">v2.10</a>' in html
    assert '<a href="/releases" class="internal-link">V3.1</a>' in html
    assert stats.rule_stats == {r"v\d+\.\d+": 2}


def test_zero_length_regex_matches_are_ignored():
    rules = [make_rule(r"x*", "/x", match_type=MatchType.REGEX)]
    html, stats = inject("<p>abc</p>", rules)
    assert html == "<p>abc</p>"
    assert stats.total_links_injected == 0


def test_invalid_regex_is_reported(caplog):
    rules = [make_rule("([", "/broken", match_type=MatchType.REGEX), make_rule("ok", "/ok")]
    with caplog.at_level(logging.WARNING, logger="blog.richtext.injector"):
        html, stats = inject("<p>ok</p>", rules)
    assert html == '<p><a href="/ok" class="internal-link">ok</a></p>'
    assert stats.rule_stats == {"([": 0, "ok": 1}
    assert len(stats.diagnostics) == 1
    assert '"(["' in stats.diagnostics[0]
    assert "Invalid regex pattern" in caplog.text


def test_inactive_and_inert_rules_are_skipped():
    rules = [
        make_rule("alpha", "/alpha", is_active=False),
        make_rule("beta", "/beta", max_links_per_page=0),
        make_rule("gamma", ""),
        make_rule("", "/empty"),
    ]
    source = "<p>alpha beta gamma</p>"
    html, stats = inject(source, rules)
    assert html == source
    assert stats.rule_stats == {}


def test_title_nofollow_and_escaping():
    rules = [make_rule("guide", "/guide?a=1&b=2", title='The "best" guide', nofollow=True)]
    html, _ = inject("<p>Read the Guide</p>", rules)
    assert html == (
        '<p>Read the <a href="/guide?a=1&amp;b=2" title="The &quot;best&quot; guide" '
        'rel="nofollow" class="internal-link">Guide</a></p>'
    )


def test_custom_link_class():
    rules = [make_rule("seo", "/seo")]
    html, _ = inject("<p>seo</p>", rules, InjectionOptions(link_class="auto-link"))
    assert html == '<p><a href="/seo" class="auto-link">seo</a></p>'


def test_duplicate_keywords_share_a_counter():
    rules = [make_rule("tea", "/tea", priority=2, max_links_per_page=1), make_rule("tea", "/green-tea", priority=1)]
    html, stats = inject("<p>tea and tea and tea</p>", rules)
    assert html.count('href="/tea"') == 1
    assert html.count('href="/green-tea"') == 2
    assert stats.rule_stats == {"tea": 3}


def test_empty_inputs():
    assert inject("", [make_rule("a", "/a")])[0] == ""
    html, stats = inject("<p>a</p>", [])
    assert html == "<p>a</p>"
    assert stats.as_dict() == {"totalLinksInjected": 0, "ruleStats": {}, "diagnostics": []}


def test_character_references_are_never_split():
    rules = [make_rule(r"\d+", "/numbers", match_type=MatchType.REGEX, max_links_per_page=5)]
    html, stats = inject("<p>It&#039;s 2024</p>", rules)
    assert html == '<p>It&#039;s <a href="/numbers" class="internal-link">2024</a></p>'
    assert stats.rule_stats == {r"\d+": 1}


def test_entity_names_are_not_linked_as_words():
    rules = [make_rule("amp", "/amp"), make_rule("quot", "/quot")]
    source = "<p>Tom &amp; Jerry say &quot;hi&quot;</p>"
    html, stats = inject(source, rules)
    assert html == source
    assert stats.total_links_injected == 0


def test_match_ending_inside_an_entity_is_skipped():
    rules = [make_rule(r"Tom &am", "/tom", match_type=MatchType.REGEX), make_rule("Jerry", "/jerry")]
    html, _ = inject("<p>Tom &amp; Jerry</p>", rules)
    assert html == '<p>Tom &amp; <a href="/jerry" class="internal-link">Jerry</a></p>'
