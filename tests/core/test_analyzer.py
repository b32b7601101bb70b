# tests/core/test_analyzer.py
import asyncio
from unittest.mock import MagicMock

import pytest

from seo_grader.analyzer import AnalysisInput, SEOAnalyzer, fold_outcomes, order_rules, RuleOutcome
from seo_grader.errors import RuleEvaluationError, ValidationError
from seo_grader.model import calculate_grade
from seo_grader.rules.core import RuleCheckResult, RuleDefinition

LONG_TITLE = "An Extremely Long Page Title That Goes On And On Well Past Sixty Characters"

GOOD_PAGE = """
<html lang="en"><head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<link rel="canonical" href="https://example.com/seo-guide">
</head><body>
<header><nav><a href="/">Home</a></nav></header>
<main><article>
<h1>SEO guide</h1>
<h2>Why SEO matters</h2>
<p>Good pages are easy to read. Short sentences help people. SEO is about people too.</p>
</article></main>
<footer>Footer</footer>
</body></html>
"""


def make_rule(rule_id, check, weight=5, category="content", severity="medium"):
    return RuleDefinition(id=rule_id, category=category, weight=weight, severity=severity,
                          title=rule_id.title(), description=f"{rule_id} description", check=check)


def passing(content):
    return RuleCheckResult(passed=True, message="ok")


def failing(content):
    return RuleCheckResult(passed=False, message="not ok", warning=True)


@pytest.fixture
def analyzer():
    return SEOAnalyzer(language="en")


# --- Input validation ---

@pytest.mark.parametrize("content", [{}, {"keywords": "seo", "url": "https://example.com"},
                                     {"html": "", "title": "", "description": ""}])
def test_missing_content_raises(analyzer, content):
    with pytest.raises(ValidationError) as exc_info:
        asyncio.run(analyzer.analyze(content))
    assert "At least one content field" in str(exc_info.value)
    assert exc_info.value.field_names == ["html", "title", "description"]


def test_invalid_content_type_raises(analyzer):
    with pytest.raises(ValidationError, match="Invalid content object provided"):
        asyncio.run(analyzer.analyze("just a string"))


def test_validation_error_is_a_value_error():
    assert issubclass(ValidationError, ValueError)


# --- Scoring ---

def test_title_only_analysis(analyzer):
    result = asyncio.run(analyzer.analyze({"title": "Hello"}))

    assert result.max_score > 0
    assert 0 < result.score < result.max_score
    assert result.grade == calculate_grade(result.percentage)
    assert result.metadata.title == "Hello"
    assert result.metadata.word_count == 0
    assert result.passed_rules + result.failed_rules == 39
    assert result.evaluation_errors == []


def test_long_title_scenario(analyzer):
    """A too-long title is flagged, recommended with specifics and offered as a quick win."""
    result = asyncio.run(analyzer.analyze(AnalysisInput(title=LONG_TITLE)))

    issue = next(i for i in result.issues if i.id == "meta-title-length")
    assert issue.severity == "high"
    assert f"too long ({len(LONG_TITLE)} chars)" in issue.description

    rec_set = result.enhanced_recommendations
    rec = next(r for r in rec_set.recommendations if r.rule_id == "meta-title-length")
    assert rec.id == "rec-meta-title-length"
    assert rec.priority == "high"
    assert rec.effort == "quick"
    specific = [a for a in rec.actions if a.specific]
    assert len(specific) == 1
    assert f"Reduce by {len(LONG_TITLE) - 60} characters" in specific[0].action
    assert rec.example.before == LONG_TITLE

    quick_ids = [r.id for r in rec_set.quick_wins]
    assert len(quick_ids) == 5
    assert quick_ids[:3] == ["rec-meta-description-exists", "rec-meta-title-length",
                             "rec-meta-description-length"]
    assert all(r.effort == "quick" and r.priority in ("critical", "high") for r in rec_set.quick_wins)


def test_issues_sorted_by_severity_then_impact(analyzer):
    result = asyncio.run(analyzer.analyze({"title": "Hi", "url": "http://example.com/a"}))
    ranks = {"critical": 0, "high": 1, "medium": 2, "low": 3}
    keys = [(ranks[i.severity], -i.impact) for i in result.issues]
    assert keys == sorted(keys)
    assert result.issues[0].severity == "critical"


def test_well_formed_page_scores_higher(analyzer):
    weak = asyncio.run(analyzer.analyze({"title": "Hi"}))
    strong = asyncio.run(analyzer.analyze({
        "html": GOOD_PAGE,
        "title": "The Complete SEO Guide for Small Business Websites",
        "description": "Learn how SEO works, which on-page signals matter most and how to write "
                       "content that ranks without sacrificing readability for your visitors.",
        "keywords": "SEO, guide",
        "url": "https://example.com/seo-guide",
    }))
    assert strong.percentage > weak.percentage
    assert strong.metadata.keywords == ["seo", "guide"]
    assert strong.metadata.meta_tags.canonical == "https://example.com/seo-guide"
    assert 0 <= strong.percentage <= 100


def test_category_scores_add_up(analyzer):
    result = asyncio.run(analyzer.analyze({"html": GOOD_PAGE}))
    assert list(result.category_scores) == ["meta", "content", "technical", "readability"]
    assert sum(c.score for c in result.category_scores.values()) == result.score
    assert sum(c.max_score for c in result.category_scores.values()) == result.max_score
    assert sum(c.failed for c in result.category_scores.values()) == result.failed_rules


@pytest.mark.parametrize("percentage, grade", [
    (100, "A"), (90, "A"), (89, "B"), (80, "B"), (79, "C"), (70, "C"), (69, "D"), (60, "D"), (59, "F"), (0, "F"),
])
def test_grade_bands(percentage, grade):
    assert calculate_grade(percentage) == grade


# --- Rule isolation ---

def test_failing_rule_is_isolated():
    """A rule that raises is recorded and excluded from both score and max_score."""
    broken = MagicMock(side_effect=RuntimeError("boom"))
    rules = [
        make_rule("rule-pass", passing, weight=4),
        make_rule("rule-broken", broken, weight=6),
        make_rule("rule-fail", failing, weight=2, severity="low"),
    ]
    result = SEOAnalyzer(rules=rules).analyze_sync({"title": "Anything"})

    broken.assert_called_once()
    assert result.score == 4
    assert result.max_score == 6
    assert result.percentage == 67
    assert [(e.rule_id, e.error) for e in result.evaluation_errors] == [("rule-broken", "boom")]
    assert [i.id for i in result.issues] == ["rule-fail"]
    assert result.warnings == 1


def test_fractional_weights_are_scored():
    rules = [
        make_rule("rule-pass", passing, weight=1.5),
        make_rule("rule-fail", failing, weight=2.5, severity="high"),
    ]
    result = SEOAnalyzer(rules=rules).analyze_sync({"title": "x"})

    assert (result.score, result.max_score) == (1.5, 4.0)
    assert result.percentage == 38
    assert result.issues[0].impact == 2.5
    assert result.category_scores["content"].max_score == 4.0

    rec = result.enhanced_recommendations.recommendations[0]
    assert rec.weight == 2.5
    assert rec.impact_estimate.score_increase == 2.5
    assert rec.impact_estimate.percentage_increase == 62.5
    assert rec.impact_estimate.projected_score == 4.0
    assert result.enhanced_recommendations.summary.potential_score == 4.0


def test_all_rules_failing_to_evaluate_gives_zero():
    rules = [make_rule("rule-broken", MagicMock(side_effect=ValueError("bad")))]
    result = SEOAnalyzer(rules=rules).analyze_sync({"title": "Anything"})
    assert (result.score, result.max_score, result.percentage, result.grade) == (0, 0, 0, "F")


def test_async_and_dict_returning_checks():
    async def async_check(content):
        await asyncio.sleep(0)
        return RuleCheckResult(passed=True)

    rules = [
        make_rule("rule-async", async_check, weight=3),
        make_rule("rule-dict", lambda content: {"passed": False, "message": "from dict"}, weight=1),
    ]
    result = SEOAnalyzer(rules=rules).analyze_sync({"description": "Some description"})
    assert result.score == 3
    assert result.issues[0].description == "from dict"


def test_evaluate_rule_wraps_errors():
    rule = make_rule("rule-broken", MagicMock(side_effect=KeyError("missing")))
    outcome = asyncio.run(SEOAnalyzer.evaluate_rule(rule, MagicMock()))
    assert not outcome.ok
    assert isinstance(outcome.error, RuleEvaluationError)
    assert outcome.error.rule_id == "rule-broken"


def test_fold_and_order_are_pure():
    rules = [
        make_rule("r-tech", passing, category="technical"),
        make_rule("r-meta", failing, category="meta"),
        make_rule("r-read", passing, category="readability"),
    ]
    assert [r.id for r in order_rules(rules)] == ["r-meta", "r-tech", "r-read"]

    outcomes = [RuleOutcome(rule=r, result=r.check(None)) for r in rules]
    tally = fold_outcomes(outcomes)
    assert (tally.score, tally.max_score, tally.passed, tally.failed) == (10, 15, 2, 1)
    assert fold_outcomes(outcomes).score == tally.score


def test_timeout_propagates():
    async def slow(content):
        await asyncio.sleep(1)
        return RuleCheckResult(passed=True)

    analyzer = SEOAnalyzer(rules=[make_rule("rule-slow", slow)])
    with pytest.raises(asyncio.TimeoutError):
        asyncio.run(analyzer.analyze({"title": "Anything"}, timeout=0.01))


def test_analyzer_instance_is_reusable(analyzer):
    first = analyzer.analyze_sync({"title": LONG_TITLE})
    second = analyzer.analyze_sync({"title": LONG_TITLE})
    assert first.score == second.score
    assert [i.id for i in first.issues] == [i.id for i in second.issues]


def test_concurrent_analyses_on_one_instance(analyzer):
    async def run_both():
        return await asyncio.gather(
            analyzer.analyze({"title": LONG_TITLE}),
            analyzer.analyze({"html": GOOD_PAGE, "url": "https://example.com/seo-guide"}),
        )

    long_title, good_page = asyncio.run(run_both())

    alone = analyzer.analyze_sync({"title": LONG_TITLE})
    assert (long_title.score, long_title.max_score) == (alone.score, alone.max_score)
    assert [i.id for i in long_title.issues] == [i.id for i in alone.issues]
    assert long_title.metadata.title == LONG_TITLE
    assert good_page.metadata.title == ""
    assert good_page.metadata.url == "https://example.com/seo-guide"
    assert long_title.passed_rules + long_title.failed_rules == 39
    assert good_page.passed_rules + good_page.failed_rules == 39
    assert "meta-title-length" in [i.id for i in long_title.issues]


def test_set_language_changes_recommendation_text(analyzer):
    analyzer.set_language("el")
    result = analyzer.analyze_sync({"title": "Hello"})
    rec = result.enhanced_recommendations.recommendations[0]
    assert rec.priority_label == "Κρίσιμο"


# --- Keyword helpers ---

def test_parse_keywords():
    assert SEOAnalyzer.parse_keywords(" SEO, Content ,, tips ") == ["seo", "content", "tips"]
    assert SEOAnalyzer.parse_keywords(["A", " b "]) == ["a", "b"]
    assert SEOAnalyzer.parse_keywords(None) == []


def test_keyword_density_scenario():
    density = SEOAnalyzer.calculate_keyword_density("SEO is great. SEO rules.", "seo")
    assert density.count == 2
    assert density.word_count == 5
    assert density.density == 40.0


def test_keyword_density_is_case_symmetric_and_idempotent():
    text = "Content marketing works. Great content marketing wins."
    lower = SEOAnalyzer.calculate_keyword_density(text, "content marketing")
    upper = SEOAnalyzer.calculate_keyword_density(text.upper(), "CONTENT MARKETING")
    assert (lower.count, lower.density) == (upper.count, upper.density)
    assert SEOAnalyzer.calculate_keyword_density(text, "content marketing") == lower


def test_keyword_density_of_nothing():
    assert SEOAnalyzer.calculate_keyword_density("", "seo").density == 0
    assert SEOAnalyzer.calculate_all_keyword_densities("some text", []) == []
    assert SEOAnalyzer.calculate_all_keyword_densities("some text", None) == []
    results = SEOAnalyzer.calculate_all_keyword_densities("seo text", ["seo", "text", "missing"])
    assert [r.count for r in results] == [1, 1, 0]
