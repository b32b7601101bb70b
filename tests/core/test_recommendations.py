# tests/core/test_recommendations.py
import json

import pytest

from seo_grader.analyzer import AnalysisMetadata, AnalysisResult, Issue, SEOAnalyzer
from seo_grader.recommendations.engine import RecommendationEngine
from seo_grader.recommendations.models import StoredRecommendation
from seo_grader.recommendations.templates import estimate_effort, ranking_impact
from seo_grader.recommendations.translations import resolve_language, translate
from seo_grader.rules.core import RuleCheckResult, RuleDefinition
from seo_grader.rules.registry import RuleRegistry


def _strip_timestamps(value):
    if isinstance(value, dict):
        return {k: _strip_timestamps(v) for k, v in value.items() if k != "timestamp"}
    if isinstance(value, list):
        return [_strip_timestamps(v) for v in value]
    return value


@pytest.fixture(scope="module")
def analysis():
    return SEOAnalyzer(language="en").analyze_sync({
        "title": "Short",
        "html": "<h1>One</h1><h1>Two</h1><img src='a.png'><p>Thin content.</p>",
        "url": "http://example.com/page",
    })


@pytest.fixture
def engine():
    return RecommendationEngine("en")


def make_result(issues, score=50, max_score=100):
    return AnalysisResult(score=score, max_score=max_score, percentage=round(score / max_score * 100),
                          grade="F", issues=issues, metadata=AnalysisMetadata())


def issue_for(rule_id):
    rule = RuleRegistry.get_rule_by_id(rule_id)
    return Issue(id=rule.id, category=rule.category, severity=rule.severity, title=rule.title,
                 description=rule.description, impact=rule.weight)


def test_one_recommendation_per_known_issue(engine, analysis):
    rec_set = engine.generate_recommendations(analysis, RuleRegistry.get_all_rules())
    assert len(rec_set.recommendations) == len(analysis.issues)
    assert {r.id for r in rec_set.recommendations} == {f"rec-{i.id}" for i in analysis.issues}
    assert rec_set.summary.total_recommendations == len(analysis.issues)


def test_unknown_issue_is_skipped(engine):
    unknown = Issue(id="no-such-rule", category="meta", severity="low", title="?", description="?", impact=1)
    rec_set = engine.generate_recommendations(make_result([unknown]), RuleRegistry.get_all_rules())
    assert rec_set.recommendations == []


def test_generation_is_reentrant(engine, analysis):
    rules = RuleRegistry.get_all_rules()
    first = engine.generate_recommendations(analysis, rules).model_dump()
    second = engine.generate_recommendations(analysis, rules).model_dump()
    assert _strip_timestamps(first) == _strip_timestamps(second)


def test_sorted_by_priority_then_increase(engine, analysis):
    recs = engine.generate_recommendations(analysis, RuleRegistry.get_all_rules()).recommendations
    ranks = {"critical": 0, "high": 1, "medium": 2, "low": 3}
    keys = [(ranks[r.priority], -r.impact_estimate.score_increase) for r in recs]
    assert keys == sorted(keys)


def test_priority_mirrors_severity(engine, analysis):
    for rec in engine.generate_recommendations(analysis, RuleRegistry.get_all_rules()).recommendations:
        assert rec.priority == rec.severity


def test_impact_estimate(engine):
    rule = RuleRegistry.get_rule_by_id("meta-title-length")
    impact = engine.estimate_impact(rule, current_score=95, max_score=100)
    assert impact.score_increase == 8
    assert impact.percentage_increase == 8.0
    assert impact.projected_score == 100
    assert impact.ranking_impact == "high"

    impact = engine.estimate_impact(rule, current_score=0, max_score=0)
    assert impact.percentage_increase == 0.0


def test_percentage_increase_has_two_decimals(engine):
    rule = RuleRegistry.get_rule_by_id("html-lang")
    assert engine.estimate_impact(rule, 10, 30).percentage_increase == 16.67


@pytest.mark.parametrize("rule_id, category, weight, effort", [
    ("meta-title-length", "meta", 8, "quick"),
    ("https-protocol", "technical", 10, "significant"),
    ("content-freshness", "content", 2, "quick"),
    ("external-links", "technical", 3, "quick"),
    ("headings-structure", "content", 7, "significant"),
    ("url-structure", "technical", 4, "moderate"),
    ("list-usage", "readability", 2, "quick"),
])
def test_effort_estimation(rule_id, category, weight, effort):
    assert estimate_effort(rule_id, category, weight) == effort


def test_ranking_impact():
    assert [ranking_impact(s) for s in ("critical", "high", "medium", "low")] == ["high", "high", "medium", "low"]


def test_actions_from_template_with_specific_steps(engine):
    rule = RuleRegistry.get_rule_by_id("headings-structure")
    actions = engine.generate_actions(rule, {"headings": {"h1": ["One", "Two"]}})
    assert [a.step for a in actions] == [1, 2, 3]
    assert actions[-1].specific
    assert actions[-1].action == "The page currently has 2 H1 heading(s)."


def test_fallback_action_for_rules_without_template(engine):
    rule = RuleRegistry.get_rule_by_id("url-depth")
    actions = engine.generate_actions(rule, {})
    assert len(actions) == 1
    assert (actions[0].step, actions[0].action, actions[0].type) == (1, rule.description, "action")


def test_custom_rule_uses_fallback():
    rule = RuleDefinition(id="custom-check", category="content", weight=4, severity="medium",
                          title="Custom", description="Do the custom thing",
                          check=lambda c: RuleCheckResult(passed=False))
    issue = Issue(id="custom-check", category="content", severity="medium", title="Custom",
                  description="Custom failed", impact=4)
    rec = RecommendationEngine().generate_recommendations(make_result([issue]), [rule]).recommendations[0]
    assert rec.actions[0].action == "Do the custom thing"
    assert rec.why == "Do the custom thing"
    assert rec.effort == "moderate"


def test_quick_wins():
    issues = [issue_for(rule_id) for rule_id in (
        "meta-description-exists", "https-protocol", "meta-title-length", "meta-description-length",
        "viewport-meta", "canonical-url", "charset-declaration", "robots-meta",
    )]
    rec_set = RecommendationEngine().generate_recommendations(make_result(issues), RuleRegistry.get_all_rules())
    assert [r.rule_id for r in rec_set.quick_wins] == [
        "meta-description-exists", "meta-title-length", "meta-description-length", "viewport-meta", "canonical-url",
    ]
    assert rec_set.summary.effort_counts.quick == 7
    assert rec_set.summary.priority_counts.critical == 2


def test_summary_potential_is_clamped(engine):
    issues = [issue_for("meta-title-exists"), issue_for("meta-description-exists")]
    summary = engine.generate_recommendations(make_result(issues, score=95), RuleRegistry.get_all_rules()).summary
    assert summary.total_potential_increase == 20
    assert summary.potential_score == 100
    assert summary.potential_grade == "A"
    assert summary.current_score == 95


def test_groupings(engine, analysis):
    rec_set = engine.generate_recommendations(analysis, RuleRegistry.get_all_rules())
    assert sum(len(v) for v in rec_set.by_category.values()) == len(rec_set.recommendations)
    assert len(rec_set.by_priority.critical) == rec_set.summary.priority_counts.critical
    assert len(rec_set.by_effort.quick) == rec_set.summary.effort_counts.quick


# --- Translations ---

def test_greek_labels():
    rec = RecommendationEngine("el").generate_recommendations(
        make_result([issue_for("meta-title-exists")]), RuleRegistry.get_all_rules()).recommendations[0]
    assert rec.priority_label == "Κρίσιμο"
    assert rec.estimated_time == "5-15 λεπτά"
    assert rec.category_label == "Ετικέτες Meta"


def test_unknown_language_falls_back_to_english():
    assert resolve_language("fr") == "en"
    assert resolve_language(None) == "en"
    rec = RecommendationEngine("fr").generate_recommendations(
        make_result([issue_for("meta-title-exists")]), RuleRegistry.get_all_rules()).recommendations[0]
    assert rec.priority_label == "Critical"


def test_translate_fallbacks():
    # No Greek text for this key: English is used.
    assert translate("el", "specific", "alt_missing", count=3) == "3 image(s) currently have no alt text."
    assert translate("el", "specific", "title_too_long", length=70, excess=10) == \
        "Ο τίτλος έχει 70 χαρακτήρες. Μειώστε τον κατά 10."
    assert translate("en", "why", "no-such-rule", default="Fallback") == "Fallback"
    assert translate("en", "nowhere", "some_key") == "some_key"


def test_translate_with_missing_parameters_returns_template():
    text = translate("en", "specific", "title_too_long", length=70)
    assert text == "Current title is {length} characters. Reduce by {excess} characters to avoid truncation."


# --- Stored rows ---

def test_stored_recommendation_parses_json_columns():
    row = {
        "id": "rec-meta-title-length",
        "ruleId": "meta-title-length",
        "title": "Page Title Length",
        "priority": "high",
        "category": "meta",
        "effort": "quick",
        "status": "In-Progress",
        "actions": json.dumps([{"step": 1, "action": "Shorten the title", "type": "action"}]),
        "example": json.dumps({"before": "Old", "after": "New"}),
        "resources": "",
        "impactEstimate": json.dumps({"scoreIncrease": 8, "percentageIncrease": 7.5}),
    }
    stored = StoredRecommendation.model_validate(row)
    assert stored.status == "in-progress"
    assert stored.actions[0].action == "Shorten the title"
    assert stored.example.after == "New"
    assert stored.resources == []
    assert (stored.score_increase, stored.percentage_increase) == (8, 7.5)


def test_stored_recommendation_tolerates_malformed_json():
    stored = StoredRecommendation.model_validate({
        "id": "rec-x", "ruleId": "x", "title": "X", "priority": "low", "category": "content",
        "actions": "{not json", "example": "nope",
    })
    assert stored.actions == []
    assert stored.example is None
    assert stored.status == "pending"
