# src/seo_grader/recommendations/engine.py
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List

from seo_grader.model import SEVERITY_RANK, calculate_grade
from seo_grader.rules.core import RuleDefinition
from seo_grader.utils.config_loader import get_nested_config

from .models import (
    EFFORTS,
    PRIORITIES,
    EffortCounts,
    ImpactEstimate,
    PriorityCounts,
    Recommendation,
    RecommendationAction,
    RecommendationExample,
    RecommendationsByEffort,
    RecommendationsByPriority,
    RecommendationSet,
    RecommendationSummary,
    Resource,
)
from .templates import (
    ACTION_TEMPLATES,
    SPECIFIC_STEPS,
    build_example,
    estimate_effort,
    ranking_impact,
    resources_for,
)
from .translations import resolve_language, translate

logger = logging.getLogger(__name__)


class RecommendationEngine:
    """
    Turns the issues of an analysis into a prioritized, impact-estimated action plan.

    The engine keeps no state between calls apart from its language: running
    it twice on the same analysis gives the same recommendations, differing
    only in their `timestamp`.
    """

    def __init__(self, language: str = "en"):
        self.language = resolve_language(language)

    def generate_recommendations(self, analysis_result: Any, rules: Iterable[RuleDefinition]) -> RecommendationSet:
        """
        Args:
            analysis_result: An AnalysisResult (issues, score, max_score, percentage, grade, metadata).
            rules: The rule catalogue the issues were produced by.

        Returns:
            RecommendationSet: One recommendation per issue whose rule is known.
        """
        rules_by_id = {rule.id: rule for rule in rules}
        metadata = analysis_result.metadata.model_dump()
        timestamp = datetime.now(timezone.utc).isoformat()

        recommendations: List[Recommendation] = []
        for issue in analysis_result.issues:
            rule = rules_by_id.get(issue.id)
            if rule is None:
                logger.debug(f"No rule registered for issue '{issue.id}', skipping")
                continue
            recommendations.append(self._create_recommendation(issue, rule, analysis_result, metadata, timestamp))

        # Stable sort: equal priority and increase keep issue order.
        recommendations.sort(key=lambda r: (SEVERITY_RANK[r.priority], -r.impact_estimate.score_increase))

        logger.debug(f"Generated {len(recommendations)} recommendations ({self.language})")
        return RecommendationSet(
            recommendations=recommendations,
            summary=self._summary(recommendations, analysis_result),
            by_priority=RecommendationsByPriority(
                **{p: [r for r in recommendations if r.priority == p] for p in PRIORITIES}),
            by_category=self._group_by_category(recommendations),
            by_effort=RecommendationsByEffort(
                **{e: [r for r in recommendations if r.effort == e] for e in EFFORTS}),
            quick_wins=self.identify_quick_wins(recommendations, analysis_result.issues),
        )

    def _create_recommendation(self, issue, rule: RuleDefinition, analysis_result,
                               metadata: Dict[str, Any], timestamp: str) -> Recommendation:
        priority = rule.severity
        effort = estimate_effort(rule.id, rule.category, rule.weight)
        example = build_example(rule.id, metadata)

        return Recommendation(
            id=f"rec-{rule.id}",
            rule_id=rule.id,
            title=rule.title,
            priority=priority,
            category=rule.category,
            description=issue.description,
            actions=self.generate_actions(rule, metadata),
            effort=effort,
            estimated_time=translate(self.language, "estimated_time", effort),
            impact_estimate=self.estimate_impact(rule, analysis_result.score, analysis_result.max_score),
            example=RecommendationExample(**example) if example else None,
            why=translate(self.language, "why", rule.id, default=rule.description),
            resources=[Resource(**r) for r in resources_for(rule.id, rule.category)],
            weight=rule.weight,
            severity=rule.severity,
            timestamp=timestamp,
            priority_label=translate(self.language, "priorities", priority),
            effort_label=translate(self.language, "effort", effort),
            category_label=translate(self.language, "categories", rule.category),
        )

    def generate_actions(self, rule: RuleDefinition, metadata: Dict[str, Any]) -> List[RecommendationAction]:
        template = ACTION_TEMPLATES.get(rule.id)
        if not template:
            return [RecommendationAction(step=1, action=rule.description, type="action")]

        actions = [
            RecommendationAction(step=i, action=translate(self.language, "actions", key), type=action_type)
            for i, (key, action_type) in enumerate(template, start=1)
        ]
        specific = SPECIFIC_STEPS.get(rule.id)
        if specific:
            for key, params, action_type in specific(metadata):
                actions.append(RecommendationAction(
                    step=len(actions) + 1,
                    action=translate(self.language, "specific", key, **params),
                    type=action_type,
                    specific=True,
                ))
        return actions

    def estimate_impact(self, rule: RuleDefinition, current_score: float, max_score: float) -> ImpactEstimate:
        impact = ranking_impact(rule.severity)
        return ImpactEstimate(
            score_increase=rule.weight,
            percentage_increase=round(rule.weight / max_score * 100, 2) if max_score else 0.0,
            current_score=current_score,
            projected_score=min(current_score + rule.weight, max_score),
            ranking_impact=impact,
            ranking_impact_label=translate(self.language, "ranking_impact", impact),
        )

    @staticmethod
    def identify_quick_wins(recommendations: List[Recommendation], issues) -> List[Recommendation]:
        """Quick-effort critical/high items, largest score increase first; ties keep issue order."""
        limit = get_nested_config("recommendations.max_quick_wins", 5)
        issue_order = {issue.id: i for i, issue in enumerate(issues)}
        candidates = [
            r for r in recommendations
            if r.effort == "quick" and r.priority in ("critical", "high")
        ]
        candidates.sort(key=lambda r: (-r.impact_estimate.score_increase, issue_order.get(r.rule_id, 0)))
        return candidates[:limit]

    @staticmethod
    def _group_by_category(recommendations: List[Recommendation]) -> Dict[str, List[Recommendation]]:
        grouped: Dict[str, List[Recommendation]] = {}
        for rec in recommendations:
            grouped.setdefault(rec.category, []).append(rec)
        return grouped

    @staticmethod
    def _summary(recommendations: List[Recommendation], analysis_result) -> RecommendationSummary:
        total_increase = sum(r.impact_estimate.score_increase for r in recommendations)
        max_score = analysis_result.max_score
        potential = min(analysis_result.score + total_increase, max_score)
        potential_percentage = round(potential / max_score * 100) if max_score else 0

        return RecommendationSummary(
            total_recommendations=len(recommendations),
            priority_counts=PriorityCounts(
                **{p: sum(1 for r in recommendations if r.priority == p) for p in PRIORITIES}),
            effort_counts=EffortCounts(
                **{e: sum(1 for r in recommendations if r.effort == e) for e in EFFORTS}),
            current_score=analysis_result.score,
            current_percentage=analysis_result.percentage,
            current_grade=analysis_result.grade or "F",
            potential_score=potential,
            potential_percentage=potential_percentage,
            potential_grade=calculate_grade(potential_percentage),
            total_potential_increase=total_increase,
        )
