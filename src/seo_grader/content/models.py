# src/seo_grader/content/models.py
from typing import List, Literal, Optional, Sequence, Tuple

from pydantic import Field

from seo_grader.model import CamelModel

NoteType = Literal["error", "warning", "info", "success"]
LengthStatus = Literal["too_short", "too_long", "optimal"]
TopicDepth = Literal["none", "mentioned", "shallow", "moderate", "deep"]
DepthLevel = Literal["comprehensive", "adequate", "shallow", "minimal"]
ComparisonStatus = Literal["competitive", "longer", "shorter", "below"]

QUALITY_LABELS = ((80, "Excellent"), (60, "Good"), (40, "Fair"))
COMPETITIVE_LABELS = ((80, "Highly Competitive"), (60, "Competitive"), (40, "Needs Improvement"))


class ContentNote(CamelModel):
    type: NoteType
    category: str
    title: str
    message: str


class ContentScore(CamelModel):
    score: int = 0
    label: str = "Poor"


def rate(score: int, bands: Sequence[Tuple[int, str]] = QUALITY_LABELS, floor_label: str = "Poor") -> ContentScore:
    """Labels a 0..100 score with the first band whose inclusive floor it reaches."""
    for floor, label in bands:
        if score >= floor:
            return ContentScore(score=score, label=label)
    return ContentScore(score=score, label=floor_label)


# --- Structure ---

class HeadingAnalysis(CamelModel):
    total: int = 0
    h1_count: int = 0
    h2_count: int = 0
    h3_count: int = 0
    h4_count: int = 0
    h5_count: int = 0
    h6_count: int = 0
    has_h1: bool = False
    has_h2: bool = False
    has_proper_hierarchy: bool = False
    hierarchy_issues: List[str] = Field(default_factory=list)


class ParagraphAnalysis(CamelModel):
    count: int = 0
    avg_length: int = 0
    short_paragraphs: int = 0
    medium_paragraphs: int = 0
    long_paragraphs: int = 0
    is_empty: bool = True


class ListAnalysis(CamelModel):
    unordered_lists: int = 0
    ordered_lists: int = 0
    total_lists: int = 0
    total_list_items: int = 0
    avg_items_per_list: int = 0
    has_lists: bool = False


class MediaAnalysis(CamelModel):
    images: int = 0
    images_with_alt: int = 0
    images_without_alt: int = 0
    videos: int = 0
    embeds: int = 0
    total_media: int = 0
    has_media: bool = False


class StructureMeta(CamelModel):
    timestamp: str
    word_count: int = 0


class StructureAnalysisResult(CamelModel):
    meta: StructureMeta
    score: ContentScore
    headings: HeadingAnalysis
    paragraphs: ParagraphAnalysis
    lists: ListAnalysis
    media: MediaAnalysis
    recommendations: List[ContentNote] = Field(default_factory=list)


# --- Headings ---

class HeadingKeywordUsage(CamelModel):
    keyword: str
    count: int = 0
    in_headings: bool = False


class KeywordUsageAnalysis(CamelModel):
    usage: List[HeadingKeywordUsage] = Field(default_factory=list)
    keywords_in_headings: int = 0
    total_keywords: int = 0
    percentage: int = 0


class HeadingDetail(CamelModel):
    level: str
    text: str
    length: int
    characters: int


class HeadingLengthAnalysis(CamelModel):
    total: int = 0
    optimal: int = 0
    too_long: int = 0
    too_short: int = 0
    details: List[HeadingDetail] = Field(default_factory=list)


class HeadingOptimizationMeta(CamelModel):
    timestamp: str
    total_headings: int = 0
    keywords_provided: int = 0


class HeadingOptimizationResult(CamelModel):
    meta: HeadingOptimizationMeta
    analysis: HeadingAnalysis
    keyword_usage: KeywordUsageAnalysis
    length_analysis: HeadingLengthAnalysis
    suggestions: List[ContentNote] = Field(default_factory=list)
    score: ContentScore


# --- Internal linking ---

class ExistingPage(CamelModel):
    title: str = ""
    url: str
    keywords: List[str] = Field(default_factory=list)


class LinkAnalysis(CamelModel):
    total: int = 0
    internal: int = 0
    external: int = 0
    ratio: int = 0
    has_links: bool = False


class LinkingOpportunity(CamelModel):
    page: str
    url: str
    reason: str
    relevance: int


class AnchorTextAnalysis(CamelModel):
    total: int = 0
    generic: int = 0
    descriptive: int = 0
    empty: int = 0
    generic_percentage: int = 0


class InternalLinkingMeta(CamelModel):
    timestamp: str
    current_links: int = 0
    existing_pages: int = 0


class InternalLinkingResult(CamelModel):
    meta: InternalLinkingMeta
    link_analysis: LinkAnalysis
    opportunities: List[LinkingOpportunity] = Field(default_factory=list)
    anchor_analysis: AnchorTextAnalysis
    recommendations: List[ContentNote] = Field(default_factory=list)
    score: ContentScore


# --- Length ---

class ContentLengthRange(CamelModel):
    min: int
    max: int
    ideal: int


class ContentLengthAnalysis(CamelModel):
    status: LengthStatus
    message: str
    difference: int
    percentage_of_ideal: int
    score: int


class ContentSection(CamelModel):
    title: str
    type: str = "h2"


class SectionAnalysis(CamelModel):
    major_sections: int = 0
    subsections: int = 0
    has_proper_sectioning: bool = False
    sections: List[ContentSection] = Field(default_factory=list)


class CurrentLength(CamelModel):
    words: int = 0
    characters: int = 0
    reading_time: int = 0


class ContentLengthMeta(CamelModel):
    timestamp: str
    current_word_count: int = 0
    target_type: str


class ContentLengthResult(CamelModel):
    meta: ContentLengthMeta
    current_length: CurrentLength
    ideal_range: ContentLengthRange
    length_analysis: ContentLengthAnalysis
    sections: SectionAnalysis
    suggestions: List[ContentNote] = Field(default_factory=list)
    score: int = 0


# --- Gaps ---

class TopicCoverage(CamelModel):
    topic: str
    covered: bool = False
    in_headings: bool = False
    relevance: int = 0
    depth: TopicDepth = "none"


class ContentDepthAnalysis(CamelModel):
    words_per_topic: int = 0
    depth_level: DepthLevel = "minimal"
    deep_topics: int = 0
    shallow_topics: int = 0


class ContentGapMeta(CamelModel):
    timestamp: str
    topics_provided: int = 0
    topics_covered: int = 0


class ContentGapResult(CamelModel):
    meta: ContentGapMeta
    coverage: List[TopicCoverage] = Field(default_factory=list)
    gaps: List[TopicCoverage] = Field(default_factory=list)
    depth: ContentDepthAnalysis
    suggestions: List[ContentNote] = Field(default_factory=list)
    score: ContentScore


# --- Competitive ---

class ContentMetrics(CamelModel):
    word_count: int = 0
    heading_count: int = 0
    image_count: int = 0
    list_count: int = 0


class CompetitorContent(CamelModel):
    title: str = ""
    content: str = ""
    url: str = ""


class CompetitorMetrics(ContentMetrics):
    title: str = ""
    url: str = ""


class MetricComparison(CamelModel):
    value: int
    average: int
    difference: int
    status: ComparisonStatus
    percentage: Optional[int] = None


class ContentComparison(CamelModel):
    word_count: MetricComparison
    heading_count: MetricComparison
    image_count: MetricComparison
    list_count: MetricComparison


class CompetitiveMeta(CamelModel):
    timestamp: str
    competitors_analyzed: int = 0


class CompetitiveAnalysisResult(CamelModel):
    meta: CompetitiveMeta
    your_content: ContentMetrics
    competitors: List[CompetitorMetrics] = Field(default_factory=list)
    averages: ContentMetrics
    comparison: ContentComparison
    insights: List[ContentNote] = Field(default_factory=list)
    score: ContentScore
