# src/seo_grader/keywords/models.py
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from seo_grader.model import CamelModel

KeywordType = Literal["word", "phrase"]
DensityStatus = Literal["optimal", "underused", "overused"]
DensityBucket = Literal["high", "medium", "low"]
DifficultyLevel = Literal["easy", "medium", "hard", "very hard"]
InsightType = Literal["success", "info", "warning"]


class KeywordDensity(CamelModel):
    keyword: str
    count: int = 0
    density: float = 0.0
    word_count: int = 0


class KeywordSuggestion(CamelModel):
    keyword: str
    frequency: int
    relevance: int
    type: KeywordType


# --- Density ---

class KeywordPosition(CamelModel):
    index: int
    percentage: float


class DensityResult(CamelModel):
    keyword: str
    count: int
    density: float
    status: DensityStatus
    bucket: DensityBucket
    is_optimal: bool
    positions: List[KeywordPosition] = Field(default_factory=list)
    type: KeywordType


class DensityRecommendation(CamelModel):
    type: Literal["warning", "critical", "success"]
    keyword: str
    message: str
    action: Literal["increase", "decrease", "maintain"]


class SectionKeywordCount(CamelModel):
    keyword: str
    count: int


class SectionDistribution(CamelModel):
    section: str
    total_keywords: int
    keyword_counts: List[SectionKeywordCount] = Field(default_factory=list)


class DensitySummary(CamelModel):
    optimal: int = 0
    underused: int = 0
    overused: int = 0


class DensityAnalysis(CamelModel):
    total_words: int = 0
    total_keywords: int = 0
    density_results: List[DensityResult] = Field(default_factory=list)
    distribution: List[SectionDistribution] = Field(default_factory=list)
    recommendations: List[DensityRecommendation] = Field(default_factory=list)
    summary: DensitySummary = Field(default_factory=DensitySummary)


# --- Long-tail ---

class LongTailComponents(CamelModel):
    frequency: int = 0
    relevance: int = 0
    length: int = 0
    specificity: int = 0
    adjacency: int = 0


class LongTailPhrase(CamelModel):
    phrase: str
    total_score: int
    components: LongTailComponents
    frequency: int


class LongTailByIntent(CamelModel):
    informational: List[LongTailPhrase] = Field(default_factory=list)
    commercial: List[LongTailPhrase] = Field(default_factory=list)
    navigational: List[LongTailPhrase] = Field(default_factory=list)
    transactional: List[LongTailPhrase] = Field(default_factory=list)


class LongTailResult(CamelModel):
    total_phrases: int = 0
    suggestions: List[LongTailPhrase] = Field(default_factory=list)
    by_intent: LongTailByIntent = Field(default_factory=LongTailByIntent)
    seed_keywords: List[str] = Field(default_factory=list)


# --- Clustering ---

class RelatedKeyword(CamelModel):
    keyword: str
    similarity: int


class CommonWord(CamelModel):
    word: str
    count: int
    frequency: float


class KeywordCluster(CamelModel):
    primary: str
    related: List[RelatedKeyword] = Field(default_factory=list)
    size: int = 1
    common_words: List[CommonWord] = Field(default_factory=list)
    suggested_name: str = ""
    quality: int = 0
    theme: str = "General"

    @property
    def keywords(self) -> List[str]:
        return [self.primary] + [r.keyword for r in self.related]


class ClusterInsight(CamelModel):
    type: InsightType
    message: str


class ClusteringResult(CamelModel):
    total_keywords: int = 0
    total_clusters: int = 0
    clusters: List[KeywordCluster] = Field(default_factory=list)
    singleton: int = 0
    avg_cluster_size: float = 0.0
    options: Dict[str, Any] = Field(default_factory=dict)
    insights: List[ClusterInsight] = Field(default_factory=list)


# --- LSI ---

class LSIKeyword(CamelModel):
    keyword: str
    frequency: int
    relevance: int
    lsi_score: int
    type: KeywordType


class LSISummary(CamelModel):
    phrases: int = 0
    words: int = 0
    avg_lsi_score: float = 0.0


class LSIResult(CamelModel):
    total_suggestions: int = 0
    language: Optional[str] = None
    main_keywords: List[str] = Field(default_factory=list)
    lsi_keywords: List[LSIKeyword] = Field(default_factory=list)
    summary: LSISummary = Field(default_factory=LSISummary)


# --- Difficulty ---

class DifficultyFactors(CamelModel):
    length: int = 0
    generic: int = 0
    commercial: int = 0
    question: int = 0
    numbers: int = 0
    location: int = 0
    content: int = 0


class DifficultyEstimate(CamelModel):
    keyword: str
    score: int
    level: DifficultyLevel
    color: str
    factors: DifficultyFactors
    recommendation: str


class DifficultyDistribution(CamelModel):
    easy: int = 0
    medium: int = 0
    hard: int = 0
    very_hard: int = 0


class DifficultyResult(CamelModel):
    """Local heuristic estimate only; no search-engine or market data is consulted."""
    total_keywords: int = 0
    estimates: List[DifficultyEstimate] = Field(default_factory=list)
    easiest: List[DifficultyEstimate] = Field(default_factory=list)
    hardest: List[DifficultyEstimate] = Field(default_factory=list)
    distribution: DifficultyDistribution = Field(default_factory=DifficultyDistribution)
