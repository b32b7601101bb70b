# tests/core/test_rule_registry.py
import pytest

from seo_grader.dom.parser import ContentParser
from seo_grader.model import CATEGORY_ORDER
from seo_grader.rules.core import AnalysisContent, CategoryDefinition, RuleCheckResult, RuleDefinition, rule_spec
from seo_grader.rules.registry import RuleRegistry


def make_content(html: str = "", **fields) -> AnalysisContent:
    document = ContentParser().parse(html)
    return AnalysisContent.model_validate({**document.model_dump(), **fields})


def check(rule_id: str, content: AnalysisContent) -> RuleCheckResult:
    return RuleRegistry.get_rule_by_id(rule_id).check(content)


def test_catalogue_has_all_rules():
    rules = RuleRegistry.get_all_rules()
    assert len(rules) == 39
    assert isinstance(rules, tuple)
    assert len(set(RuleRegistry.get_all_rule_ids())) == 39


def test_rules_are_grouped_in_category_order():
    categories = [r.category for r in RuleRegistry.get_all_rules()]
    rank = [CATEGORY_ORDER.index(c) for c in categories]
    assert rank == sorted(rank)
    assert {c: categories.count(c) for c in CATEGORY_ORDER} == {
        "meta": 6, "content": 9, "technical": 20, "readability": 4,
    }


def test_registration_order_inside_category():
    ids = [r.id for r in RuleRegistry.get_rules_by_category("meta")]
    assert ids == [
        "meta-title-exists",
        "meta-title-length",
        "meta-title-keywords",
        "meta-description-exists",
        "meta-description-length",
        "meta-description-keywords",
    ]


def test_lookup_queries():
    rule = RuleRegistry.get_rule_by_id("https-protocol")
    assert (rule.category, rule.weight, rule.severity) == ("technical", 10, "critical")
    assert RuleRegistry.get_rule_by_id("does-not-exist") is None

    critical = {r.id for r in RuleRegistry.get_rules_by_severity("critical")}
    assert critical == {"meta-title-exists", "meta-description-exists", "https-protocol"}


def test_every_rule_is_well_formed():
    for rule in RuleRegistry.get_all_rules():
        assert rule.weight > 0
        assert rule.title and rule.description
        assert callable(rule.check)
        assert isinstance(rule.recommendations, tuple)


def test_rule_definition_rejects_bad_values():
    with pytest.raises(ValueError):
        RuleDefinition(id="x", category="meta", weight=0, severity="low", title="X", description="x",
                       check=lambda c: None)
    with pytest.raises(ValueError):
        RuleDefinition(id="x", category="social", weight=1, severity="low", title="X", description="x",
                       check=lambda c: None)
    with pytest.raises(ValueError):
        RuleDefinition(id="x", category="meta", weight=1, severity="urgent", title="X", description="x",
                       check=lambda c: None)


def test_category_definition_requires_decorated_checks():
    def plain(content):
        return RuleCheckResult(passed=True)

    @rule_spec("sample-rule", "content", 2, "low", title="Sample", description="Sample rule")
    def decorated(content):
        return RuleCheckResult(passed=True)

    with pytest.raises(ValueError):
        CategoryDefinition("content", [plain])
    with pytest.raises(ValueError):
        CategoryDefinition("meta", [decorated])

    definition = CategoryDefinition("content", [decorated])
    assert definition.ids == ["sample-rule"]
    assert definition.rules[0].check is decorated


# --- Individual checks ---

def test_title_length_bounds():
    assert check("meta-title-length", make_content(title="x" * 30)).passed
    assert check("meta-title-length", make_content(title="x" * 60)).passed

    too_long = check("meta-title-length", make_content(title="x" * 61))
    assert not too_long.passed and too_long.warning
    assert "too long (61 chars)" in too_long.message
    assert check("meta-title-length", make_content()).message == "Title is missing"


def test_keyword_rules_pass_without_keywords():
    content = make_content(title="Anything")
    assert check("meta-title-keywords", content).message == "No target keywords defined"
    assert check("meta-description-keywords", content).passed


def test_title_keywords_found_case_insensitively():
    content = make_content(title="The Complete SEO Guide", keywords=["seo"])
    assert check("meta-title-keywords", content).passed


def test_multiple_h1_headings_fail_structure():
    result = check("headings-structure", make_content("<h1>One</h1><h2>Sub</h2><h1>Two</h1>"))
    assert not result.passed
    assert result.message == "Multiple H1 headings found (2). Should have exactly one"


def test_single_h1_with_subheadings_passes():
    result = check("headings-structure", make_content("<h1>One</h1><h2>Sub</h2><h2>Sub 2</h2>"))
    assert result.passed
    assert result.message == "Proper heading structure: 1 H1, 2 H2 headings"


def test_keyword_density_rule_without_content():
    result = check("keyword-density", make_content(keywords=["seo"]))
    assert not result.passed
    assert result.message == "No content to analyze"


def test_https_rule():
    assert check("https-protocol", make_content(url="https://example.com")).passed
    assert not check("https-protocol", make_content(url="http://example.com")).passed
    assert check("https-protocol", make_content()).passed


def test_canonical_missing_is_a_warning():
    result = check("canonical-url", make_content("<p>text</p>"))
    assert not result.passed and result.warning


def test_content_freshness_always_passes():
    assert check("content-freshness", make_content()).passed


@pytest.mark.parametrize("url, passed", [
    ("https://example.com/seo-guide", True),
    ("https://example.com/SEO_Guide", False),
    ("https://example.com/search?q=seo&page=2&sort=new", False),
    ("https://example.com/item/1234567", False),
    ("", True),
])
def test_url_structure(url, passed):
    assert check("url-structure", make_content(url=url)).passed is passed


def test_url_structure_lists_every_problem():
    result = check("url-structure", make_content(url="https://example.com/My_Page%20Two"))
    assert "underscores" in result.message
    assert "URL-encoded spaces" in result.message
    assert "uppercase" in result.message


@pytest.mark.parametrize("url, passed, warning", [
    ("https://example.com/", True, False),
    ("https://example.com/a/b/c", True, False),
    ("https://example.com/a/b/c/d", False, False),
    ("https://example.com/a/b/c/d/e", False, True),
])
def test_url_depth(url, passed, warning):
    result = check("url-depth", make_content(url=url))
    assert (result.passed, result.warning) == (passed, warning)


@pytest.mark.parametrize("html, passed", [
    ("<p>No robots tag</p>", True),
    ('<meta name="robots" content="index, follow">', True),
    ('<meta name="robots" content="noindex, nofollow">', False),
])
def test_robots_meta(html, passed):
    assert check("robots-meta", make_content(html)).passed is passed


def test_robots_meta_names_blocking_directives():
    result = check("robots-meta", make_content('<meta name="robots" content="NOINDEX">'))
    assert result.warning
    assert result.message == "Robots directives may limit indexing: noindex"


@pytest.mark.parametrize("html, detected", [
    ('<script type="application/ld+json">{"@type": "Article"}</script>', "JSON-LD"),
    ('<div itemscope itemtype="https://schema.org/Product"><span itemprop="name">X</span></div>', "Microdata"),
    ('<div vocab="https://schema.org/" typeof="Person">Jane</div>', "RDFa"),
])
def test_schema_markup_detected(html, detected):
    result = check("schema-markup", make_content(html))
    assert result.passed
    assert detected in result.message


def test_schema_markup_missing():
    result = check("schema-markup", make_content("<p>Plain page</p>"))
    assert not result.passed and result.warning


@pytest.mark.parametrize("src, passed", [
    ("/img/seo-chart.png", True),
    ("/photos/DSC123.jpg", False),
    ("/uploads/12345.png", False),
    ("/a.png?v=2", False),
    ("https://cdn.example.com/image.webp", False),
])
def test_image_file_names(src, passed):
    html = f'<img src="{src}" alt="Chart">'
    assert check("image-file-names", make_content(html)).passed is passed


def test_image_file_names_without_images():
    assert check("image-file-names", make_content("<p>text</p>")).message == "No images found"


def test_accessibility_basics_pass():
    html = '<h1>Guide</h1><img src="/seo-chart.png" alt="Chart"><a href="/about">About us</a>'
    assert check("accessibility-basics", make_content(html)).passed


def test_accessibility_basics_reports_each_problem():
    result = check("accessibility-basics", make_content('<img src="/x.png"><a href="/a"></a>'))
    assert not result.passed and result.warning
    assert "1 image(s) without alt text" in result.message
    assert "No H1 heading" in result.message
    assert "1 link(s) without text" in result.message


@pytest.mark.parametrize("kb, passed, warning", [
    (10, True, False),
    (101, False, False),
    (200, False, True),
])
def test_page_size_estimate(kb, passed, warning):
    html = "<p>" + "x" * (kb * 1024 - 7) + "</p>"
    result = check("page-size-estimate", make_content(html))
    assert (result.passed, result.warning) == (passed, warning)
    assert result.message == f"Estimated HTML size: {float(kb)} KB"


@pytest.mark.parametrize("html, passed", [
    ('<a href="/ok">Fine link</a>', True),
    ('<a href="#">Top</a><a href="javascript:void(0)">Menu</a><a href="/ok">Fine</a>', False),
    ("<p>No links</p>", True),
])
def test_broken_links_check(html, passed):
    assert check("broken-links-check", make_content(html)).passed is passed


def test_broken_links_check_counts_placeholders():
    html = '<a href="">Empty</a><a href="javascript:;">Menu</a>'
    assert check("broken-links-check", make_content(html)).message == "2 suspicious or empty link(s) found"


def test_placeholder_links_do_not_count_as_external():
    content = make_content('<a href="javascript:void(0)">Menu</a>', url="https://example.com/")
    assert not check("external-links", content).passed
    assert check("internal-links", content).passed
