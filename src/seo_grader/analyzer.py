# src/seo_grader/analyzer.py
import asyncio
import inspect
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from pydantic import Field

from seo_grader.dom.models import ImageInfo, LinkInfo, MetaTags, ParsedDocument, StructuralElements
from seo_grader.dom.parser import ContentParser
from seo_grader.errors import RuleEvaluationError, ValidationError
from seo_grader.keywords import density
from seo_grader.keywords.models import KeywordDensity
from seo_grader.keywords.suggestions import parse_keyword_list
from seo_grader.model import CATEGORY_ORDER, SEVERITY_RANK, CamelModel, calculate_grade
from seo_grader.readability.scoring import quick_flesch
from seo_grader.recommendations.engine import RecommendationEngine
from seo_grader.recommendations.models import RecommendationSet
from seo_grader.rules.core import AnalysisContent, RuleCheckResult, RuleDefinition
from seo_grader.rules.registry import RuleRegistry
from seo_grader.utils.config_loader import get_nested_config
from seo_grader.utils.loop_runner import run_sync

logger = logging.getLogger(__name__)

MISSING_CONTENT_MESSAGE = "At least one content field (html, title, or description) is required"


class AnalysisInput(CamelModel):
    html: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    keywords: Union[str, List[str], None] = None
    language: Optional[str] = None
    url: Optional[str] = None


class Issue(CamelModel):
    id: str
    category: str
    severity: str
    title: str
    description: str
    impact: float


class CategoryScore(CamelModel):
    score: float = 0
    max_score: float = 0
    passed: int = 0
    failed: int = 0
    warnings: int = 0


class EvaluationError(CamelModel):
    rule_id: str
    error: str


class AnalysisMetadata(CamelModel):
    title: str = ""
    description: str = ""
    keywords: List[str] = Field(default_factory=list)
    language: str = "en"
    url: str = ""
    word_count: int = 0
    character_count: int = 0
    headings: Dict[str, List[str]] = Field(default_factory=dict)
    images: List[ImageInfo] = Field(default_factory=list)
    links: List[LinkInfo] = Field(default_factory=list)
    meta_tags: MetaTags = Field(default_factory=MetaTags)
    structural_elements: StructuralElements = Field(default_factory=StructuralElements)


class AnalysisResult(CamelModel):
    score: float = 0
    max_score: float = 0
    percentage: int = 0
    grade: str = "F"
    passed_rules: int = 0
    failed_rules: int = 0
    warnings: int = 0
    issues: List[Issue] = Field(default_factory=list)
    metadata: AnalysisMetadata = Field(default_factory=AnalysisMetadata)
    recommendations_by_category: Dict[str, List[str]] = Field(default_factory=dict)
    category_scores: Dict[str, CategoryScore] = Field(default_factory=dict)
    evaluation_errors: List[EvaluationError] = Field(default_factory=list)
    enhanced_recommendations: Optional[RecommendationSet] = None
    timestamp: str = ""


@dataclass
class RuleOutcome:
    """Result of one rule evaluation: either a check result or the error it raised."""
    rule: RuleDefinition
    result: Optional[RuleCheckResult] = None
    error: Optional[RuleEvaluationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ScoreTally:
    score: float = 0
    max_score: float = 0
    passed: int = 0
    failed: int = 0
    warnings: int = 0
    issues: List[Issue] = field(default_factory=list)
    legacy: Dict[str, List[str]] = field(default_factory=dict)
    categories: Dict[str, CategoryScore] = field(default_factory=dict)
    errors: List[EvaluationError] = field(default_factory=list)


def fold_outcomes(outcomes: Iterable[RuleOutcome]) -> ScoreTally:
    """
    Reduces rule outcomes into totals. Errored rules are recorded and
    contribute to neither score nor max_score.
    """
    tally = ScoreTally()
    for outcome in outcomes:
        rule = outcome.rule
        if not outcome.ok:
            tally.errors.append(EvaluationError(rule_id=rule.id, error=str(outcome.error.cause)))
            continue

        result = outcome.result
        category = tally.categories.setdefault(rule.category, CategoryScore())
        tally.max_score += rule.weight
        category.max_score += rule.weight

        if result.passed:
            tally.score += rule.weight
            tally.passed += 1
            category.score += rule.weight
            category.passed += 1
        else:
            tally.failed += 1
            category.failed += 1
            tally.issues.append(Issue(
                id=rule.id,
                category=rule.category,
                severity=rule.severity,
                title=rule.title,
                description=result.message or rule.description,
                impact=rule.weight,
            ))
            tally.legacy.setdefault(rule.category, []).extend(rule.recommendations)

        if result.warning:
            tally.warnings += 1
            category.warnings += 1
    return tally


def order_rules(rules: Iterable[RuleDefinition]) -> List[RuleDefinition]:
    """Groups rules meta, content, technical, readability, keeping registration order inside a group."""
    rank = {category: i for i, category in enumerate(CATEGORY_ORDER)}
    return sorted(rules, key=lambda r: rank.get(r.category, len(rank)))


class SEOAnalyzer:
    """
    Grades one piece of content against the rule catalogue.

    An instance only holds its language and rule list; every accumulator lives
    inside a single `analyze()` call, so one instance can serve concurrent calls.
    """

    def __init__(self, language: Optional[str] = None, rules: Optional[Sequence[RuleDefinition]] = None,
                 parser: Optional[ContentParser] = None):
        self.language = language or get_nested_config("analysis.default_language", "en")
        self.rules = tuple(rules) if rules is not None else RuleRegistry.get_all_rules()
        self.parser = parser or ContentParser()

    def set_language(self, language: str) -> None:
        self.language = language

    async def analyze(self, content: Union[AnalysisInput, Dict[str, Any]],
                      timeout: Optional[float] = None) -> AnalysisResult:
        """
        Runs every rule against the content and builds the graded result.

        Args:
            content: html, title, description, keywords (csv or list), language, url.
            timeout: Optional deadline in seconds; asyncio.TimeoutError propagates.

        Raises:
            ValidationError: When html, title and description are all missing.
        """
        if timeout is not None:
            return await asyncio.wait_for(self._analyze(content), timeout)
        return await self._analyze(content)

    def analyze_sync(self, content: Union[AnalysisInput, Dict[str, Any]],
                     timeout: Optional[float] = None) -> AnalysisResult:
        return run_sync(self.analyze(content, timeout=timeout))

    async def _analyze(self, content: Union[AnalysisInput, Dict[str, Any]]) -> AnalysisResult:
        request = self.validate_input(content)
        document = self.parser.parse(request.html or "", base_url=request.url or None)
        logger.debug(f"Parsed content: {document.word_count} words, {len(document.links)} links, "
                     f"{len(document.images)} images")

        analysis_content = self.build_content(request, document)
        rules = order_rules(self.rules)

        outcomes = []
        for rule in rules:
            outcomes.append(await self.evaluate_rule(rule, analysis_content))
        tally = fold_outcomes(outcomes)

        percentage = round(tally.score / tally.max_score * 100) if tally.max_score else 0
        issues = sorted(tally.issues, key=lambda i: (SEVERITY_RANK.get(i.severity, 3), -i.impact))

        result = AnalysisResult(
            score=tally.score,
            max_score=tally.max_score,
            percentage=percentage,
            grade=calculate_grade(percentage),
            passed_rules=tally.passed,
            failed_rules=tally.failed,
            warnings=tally.warnings,
            issues=issues,
            metadata=self.build_metadata(analysis_content),
            recommendations_by_category=tally.legacy,
            category_scores={c: tally.categories[c] for c in CATEGORY_ORDER if c in tally.categories},
            evaluation_errors=tally.errors,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        result.enhanced_recommendations = RecommendationEngine(self.language).generate_recommendations(
            result, self.rules)

        logger.info(f"Analysis complete: {result.score}/{result.max_score} ({result.percentage}%, "
                    f"grade {result.grade}), {result.failed_rules} failed, "
                    f"{len(result.evaluation_errors)} errored")
        return result

    @staticmethod
    def validate_input(content: Union[AnalysisInput, Dict[str, Any]]) -> AnalysisInput:
        if isinstance(content, AnalysisInput):
            request = content
        elif isinstance(content, dict):
            request = AnalysisInput.model_validate(content)
        else:
            raise ValidationError("Invalid content object provided")

        if not (request.html or request.title or request.description):
            raise ValidationError(MISSING_CONTENT_MESSAGE, field_names=["html", "title", "description"])
        return request

    def build_content(self, request: AnalysisInput, document: ParsedDocument) -> AnalysisContent:
        language = request.language or self.language
        return AnalysisContent.model_validate({
            **document.model_dump(),
            "title": request.title or "",
            "description": request.description or "",
            "keywords": self.parse_keywords(request.keywords),
            "language": language,
            "url": request.url or "",
            "readability": quick_flesch(document.text, language),
        })

    @staticmethod
    def build_metadata(content: AnalysisContent) -> AnalysisMetadata:
        return AnalysisMetadata.model_validate(content.model_dump(include=set(AnalysisMetadata.model_fields)))

    @staticmethod
    async def evaluate_rule(rule: RuleDefinition, content: AnalysisContent) -> RuleOutcome:
        try:
            result = rule.check(content)
            if inspect.isawaitable(result):
                result = await result
            if not isinstance(result, RuleCheckResult):
                result = RuleCheckResult.model_validate(result)
        except Exception as e:
            logger.error(f"Error running rule {rule.id}: {e}", exc_info=True)
            return RuleOutcome(rule=rule, error=RuleEvaluationError(rule.id, e))
        return RuleOutcome(rule=rule, result=result)

    @staticmethod
    def parse_keywords(keywords: Union[str, List[str], None]) -> List[str]:
        """Comma separated string or list; trimmed, lowercased, empties dropped."""
        return parse_keyword_list(keywords, lowercase=True)

    @staticmethod
    def calculate_keyword_density(text: str, keyword: str) -> KeywordDensity:
        return density.calculate_keyword_density(text, keyword)

    @staticmethod
    def calculate_all_keyword_densities(text: str, keywords: Optional[List[str]]) -> List[KeywordDensity]:
        if not keywords:
            return []
        return density.calculate_all_keyword_densities(text, keywords)
