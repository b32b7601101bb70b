from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Optional, Tuple, Union

from pydantic import Field

from seo_grader.dom.models import ParsedDocument
from seo_grader.model import CATEGORY_ORDER, SEVERITY_RANK, CamelModel
from seo_grader.readability.models import FleschSnapshot


def rule_spec(rule_id: str, category: str, weight: float, severity: str, title: str,
              description: str, recommendations: Optional[List[str]] = None):
    """
    Decorator declaring the identity and scoring weight of a rule check.
    The attached RuleDefinition is collected by CategoryDefinition and the RuleRegistry.
    """
    def decorator(func):
        func.rule = RuleDefinition(
            id=rule_id,
            category=category,
            weight=weight,
            severity=severity,
            title=title,
            description=description,
            check=func,
            recommendations=tuple(recommendations or ()),
        )
        return func
    return decorator


class RuleCheckResult(CamelModel):
    passed: bool
    message: str = ""
    warning: bool = False


class AnalysisContent(ParsedDocument):
    """
    What every rule check receives: the parsed document merged with the
    caller's metadata. `keywords` is already lowercased and trimmed.
    """
    title: str = ""
    description: str = ""
    keywords: List[str] = Field(default_factory=list)
    language: str = "en"
    url: str = ""
    readability: FleschSnapshot = Field(default_factory=FleschSnapshot)


RuleCheck = Callable[[AnalysisContent], Union[RuleCheckResult, Awaitable[RuleCheckResult]]]


@dataclass(frozen=True)
class RuleDefinition:
    """A single weighted, categorized SEO check with its legacy advice strings."""
    id: str
    category: str
    weight: float
    severity: str
    title: str
    description: str
    check: RuleCheck = field(compare=False, repr=False)
    recommendations: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.category not in CATEGORY_ORDER:
            raise ValueError(f"Rule '{self.id}': unknown category '{self.category}'")
        if self.severity not in SEVERITY_RANK:
            raise ValueError(f"Rule '{self.id}': unknown severity '{self.severity}'")
        if self.weight <= 0:
            raise ValueError(f"Rule '{self.id}': weight must be positive")


class CategoryDefinition:
    """
    Binds one rule category to its decorated check functions, in registration order.
    Each module under `seo_grader.rules.categories` exposes one as `DEFINITION`.
    """

    def __init__(self, category: str, checks: List[Callable[[AnalysisContent], Any]]):
        self.category = category
        self.rules: List[RuleDefinition] = []

        for check in checks:
            rule = getattr(check, "rule", None)
            if rule is None:
                raise ValueError(f"{check.__name__} is not decorated with @rule_spec")
            if rule.category != category:
                raise ValueError(f"Rule '{rule.id}' declares category '{rule.category}', "
                                 f"registered under '{category}'")
            self.rules.append(rule)

        self.ids = [r.id for r in self.rules]
