"""End-to-end rendering tests."""

from __future__ import annotations

from blog.richtext import theme
from blog.richtext.nodes import parse_document
from blog.richtext.pipeline import filter_rules_for_site, render_document, render_with_links
from blog.richtext.types import InjectionOptions, MatchType

from .conftest import doc, heading, make_rule, paragraph, text

P = f'<p class="{theme.PARAGRAPH}">'


def test_filter_rules_for_site():
    shared = make_rule("shared", "/shared")
    ours = make_rule("ours", "/ours", site="example.com")
    theirs = make_rule("theirs", "/theirs", site="other.com")
    inactive = make_rule("off", "/off", site="example.com", is_active=False)
    rules = [shared, ours, theirs, inactive]

    assert filter_rules_for_site(rules, "example.com") == [shared, ours]
    assert filter_rules_for_site(rules, None) == [shared, ours, theirs]
    assert filter_rules_for_site(rules, "") == [shared, ours, theirs]


def test_render_with_links():
    root = parse_document(doc(paragraph(text("Learn about SEO today."))))
    rules = [make_rule("seo", "/blogs/seo-guide", title="SEO guide")]
    html = render_with_links(root, rules, "example.com")
    assert html == (
        f'{P}Learn about <a href="/blogs/seo-guide" title="SEO guide" class="internal-link">SEO</a> today.</p>'
    )


def test_rules_for_other_sites_are_not_applied():
    root = parse_document(doc(paragraph(text("Learn about SEO today."))))
    rules = [make_rule("seo", "/blogs/seo-guide", site="other.com")]
    result = render_document(root, rules, "example.com")
    assert result.html == f"{P}Learn about SEO today.</p>"
    assert result.stats.total_links_injected == 0


def test_heading_ids_and_class_names_are_not_linked():
    root = parse_document(doc(heading(text("Leading heading")), paragraph(text("leading"))))
    rules = [make_rule("heading", "/heading"), make_rule("leading", "/leading")]
    result = render_document(root, rules)
    assert 'id="heading-leading-heading"' in result.html
    assert f'class="{theme.PARAGRAPH}"' in result.html
    assert result.stats.rule_stats == {"heading": 1, "leading": 2}


def test_editor_links_are_not_double_linked():
    link = {"type": "link", "fields": {"url": "/python"}, "children": [text("python")]}
    root = parse_document(doc(paragraph(link, text(" and python"))))
    result = render_document(root, [make_rule("python", "/python-guide")])
    assert result.html.count("<a ") == 2
    assert result.html.endswith('and <a href="/python-guide" class="internal-link">python</a></p>')


def test_options_are_forwarded():
    root = parse_document(doc(paragraph(text("one two"))))
    rules = [make_rule("one", "/one"), make_rule("two", "/two")]
    result = render_document(root, rules, options=InjectionOptions(max_total_links=1))
    assert result.stats.total_links_injected == 1


def test_empty_document():
    result = render_document(parse_document({}), [make_rule("x", "/x")])
    assert result.html == ""
    assert result.stats.total_links_injected == 0


def test_escaped_text_survives_linking():
    root = parse_document(doc(paragraph(text('It\'s 2024, Tom & Jerry say "hi"'))))
    rules = [
        make_rule(r"\d+", "/numbers", match_type=MatchType.REGEX),
        make_rule("amp", "/amp"),
        make_rule("quot", "/quot"),
    ]
    result = render_document(root, rules)
    assert result.html == (
        f'{P}It&#039;s <a href="/numbers" class="internal-link">2024</a>, '
        "Tom &amp; Jerry say &quot;hi&quot;</p>"
    )
