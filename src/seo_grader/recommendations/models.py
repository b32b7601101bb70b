# src/seo_grader/recommendations/models.py
import json
import logging
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field, field_validator, model_validator

from seo_grader.model import CamelModel

logger = logging.getLogger(__name__)

Priority = Literal["critical", "high", "medium", "low"]
Effort = Literal["quick", "moderate", "significant"]
ActionType = Literal["action", "check", "note"]
RankingImpact = Literal["high", "medium", "low"]
RecommendationStatus = Literal["pending", "in-progress", "completed", "dismissed"]

PRIORITIES = ("critical", "high", "medium", "low")
EFFORTS = ("quick", "moderate", "significant")


class RecommendationAction(CamelModel):
    step: int
    action: str
    type: ActionType = "action"
    specific: bool = False


class ImpactEstimate(CamelModel):
    score_increase: float
    percentage_increase: float
    current_score: float
    projected_score: float
    ranking_impact: RankingImpact
    ranking_impact_label: str = ""


class RecommendationExample(CamelModel):
    before: str
    after: str


class Resource(CamelModel):
    title: str
    url: str


class Recommendation(CamelModel):
    """
    An actionable, prioritized transformation of one failed rule.
    `id` is derived from the rule id, so the same issue always maps to the same recommendation.
    """
    id: str
    rule_id: str
    title: str
    priority: Priority
    category: str
    description: str
    actions: List[RecommendationAction] = Field(default_factory=list)
    effort: Effort
    estimated_time: str
    impact_estimate: ImpactEstimate
    example: Optional[RecommendationExample] = None
    why: str = ""
    resources: List[Resource] = Field(default_factory=list)
    weight: float
    severity: str
    timestamp: str

    priority_label: str = ""
    effort_label: str = ""
    category_label: str = ""


class PriorityCounts(CamelModel):
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0


class EffortCounts(CamelModel):
    quick: int = 0
    moderate: int = 0
    significant: int = 0


class RecommendationSummary(CamelModel):
    total_recommendations: int = 0
    priority_counts: PriorityCounts = Field(default_factory=PriorityCounts)
    effort_counts: EffortCounts = Field(default_factory=EffortCounts)
    current_score: float = 0
    current_percentage: int = 0
    current_grade: str = "F"
    potential_score: float = 0
    potential_percentage: int = 0
    potential_grade: str = "F"
    total_potential_increase: float = 0


class RecommendationsByPriority(CamelModel):
    critical: List[Recommendation] = Field(default_factory=list)
    high: List[Recommendation] = Field(default_factory=list)
    medium: List[Recommendation] = Field(default_factory=list)
    low: List[Recommendation] = Field(default_factory=list)


class RecommendationsByEffort(CamelModel):
    quick: List[Recommendation] = Field(default_factory=list)
    moderate: List[Recommendation] = Field(default_factory=list)
    significant: List[Recommendation] = Field(default_factory=list)


class RecommendationSet(CamelModel):
    recommendations: List[Recommendation] = Field(default_factory=list)
    summary: RecommendationSummary = Field(default_factory=RecommendationSummary)
    by_priority: RecommendationsByPriority = Field(default_factory=RecommendationsByPriority)
    by_category: Dict[str, List[Recommendation]] = Field(default_factory=dict)
    by_effort: RecommendationsByEffort = Field(default_factory=RecommendationsByEffort)
    quick_wins: List[Recommendation] = Field(default_factory=list)


def _decode_json(value: Any, field: str, empty: Any) -> Any:
    if isinstance(value, str):
        try:
            return json.loads(value) if value.strip() else empty
        except json.JSONDecodeError:
            logger.warning(f"Stored recommendation has malformed JSON in '{field}', ignoring it")
            return empty
    return value


class StoredRecommendation(CamelModel):
    """
    Read-only shape of a recommendation row handed back by the persistence layer.

    Rows may carry `actions`, `example` and `resources` either as nested
    objects or as JSON-encoded strings straight from a SQL result. `status`
    is owned by the store; the engine never sets it.
    """
    id: str
    rule_id: str
    title: str
    priority: Priority
    category: str
    description: str = ""
    effort: Effort = "moderate"
    estimated_time: str = ""
    score_increase: float = 0
    percentage_increase: float = 0.0
    why: str = ""
    status: RecommendationStatus = "pending"
    actions: List[RecommendationAction] = Field(default_factory=list)
    example: Optional[RecommendationExample] = None
    resources: List[Resource] = Field(default_factory=list)

    @model_validator(mode='before')
    @classmethod
    def lift_impact_estimate(cls, data: Any) -> Any:
        """Rows written from engine records nest the increases under impactEstimate."""
        if isinstance(data, dict):
            impact = _decode_json(data.get("impactEstimate") or data.get("impact_estimate"), "impactEstimate", None)
            if isinstance(impact, dict):
                data = dict(data)
                for camel, snake in (("scoreIncrease", "score_increase"),
                                     ("percentageIncrease", "percentage_increase")):
                    if camel in impact and camel not in data and snake not in data:
                        data[camel] = impact[camel]
        return data

    @field_validator('actions', 'resources', mode='before')
    @classmethod
    def parse_json_list(cls, v: Any, info) -> List[Any]:
        return _decode_json(v, info.field_name, []) or []

    @field_validator('example', mode='before')
    @classmethod
    def parse_json_example(cls, v: Any) -> Optional[Dict[str, Any]]:
        return _decode_json(v, 'example', None) or None

    @field_validator('status', mode='before')
    @classmethod
    def normalize_status(cls, v: Any) -> str:
        return str(v or "pending").strip().lower()
