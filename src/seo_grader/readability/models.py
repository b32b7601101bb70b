# src/seo_grader/readability/models.py
from typing import Dict, List, Literal, Optional

from pydantic import Field

from seo_grader.model import CamelModel

FormulaType = Literal["ease", "grade"]
NoteType = Literal["critical", "warning", "info", "success"]
AssessmentSeverity = Literal["critical", "high", "medium", "low"]
AdvicePriority = Literal["critical", "high", "medium", "low", "maintenance"]


class ReadabilityTotals(CamelModel):
    words: int = 0
    sentences: int = 0
    paragraphs: int = 0
    characters: int = 0
    letters: int = 0
    syllables: int = 0
    complex_words: int = 0
    average_sentence_length: float = 0.0
    average_syllables_per_word: float = 0.0
    complex_word_ratio: float = 0.0
    vocabulary_richness: float = 0.0


class FormulaResult(CamelModel):
    id: str
    label: str
    score: float
    normalized: int = Field(ge=0, le=100)
    interpretation: Optional[str] = None
    grade_level: str
    grade_value: int
    color: str
    type: FormulaType


class CompositeScore(CamelModel):
    score: int = 0
    label: str = "N/A"
    color: str = "gray"
    grade_level: str = "N/A"
    reading_time_minutes: int = 0


class SentenceSample(CamelModel):
    text: str
    length: int


class LengthBucket(CamelModel):
    range: str
    count: int


class SentenceAnalysis(CamelModel):
    count: int = 0
    average_length: float = 0.0
    median_length: float = 0.0
    longest_sentence: Optional[SentenceSample] = None
    shortest_sentence: Optional[SentenceSample] = None
    long_sentences: List[SentenceSample] = Field(default_factory=list)
    short_sentences: List[SentenceSample] = Field(default_factory=list)
    distribution: List[LengthBucket] = Field(default_factory=list)


class ParagraphDetail(CamelModel):
    index: int
    text: str
    words: int
    sentences: int
    average_sentence_length: float
    reading_ease: int
    label: str


class ParagraphAnalysis(CamelModel):
    count: int = 0
    average_words: float = 0.0
    average_sentences: float = 0.0
    long_paragraphs: List[ParagraphDetail] = Field(default_factory=list)
    short_paragraphs: List[ParagraphDetail] = Field(default_factory=list)
    items: List[ParagraphDetail] = Field(default_factory=list)
    distribution: List[LengthBucket] = Field(default_factory=list)


class StructureAnalysis(CamelModel):
    sentences: SentenceAnalysis = Field(default_factory=SentenceAnalysis)
    paragraphs: ParagraphAnalysis = Field(default_factory=ParagraphAnalysis)


class ReadabilityNote(CamelModel):
    type: NoteType
    title: str
    message: str


class EducationStage(CamelModel):
    label: str
    range: str


class AudienceFit(CamelModel):
    audience: str
    suitable: bool


class ReadingLevels(CamelModel):
    recommended_grade: int = 0
    recommended_label: str = "N/A"
    education_stages: List[EducationStage] = Field(default_factory=list)
    audience_fit: List[AudienceFit] = Field(default_factory=list)


class GuidanceRule(CamelModel):
    title: str
    description: str


class LanguageGuidance(CamelModel):
    language: str
    notes: str = ""
    rules: List[GuidanceRule] = Field(default_factory=list)


class ReadabilitySummary(CamelModel):
    reading_time_minutes: int = 0
    pacing: str = "N/A"
    audience: str = "N/A"
    word_count: int = 0
    language: str = ""


class ReadabilityMeta(CamelModel):
    language: str
    language_name: str
    timestamp: str
    processing_time_ms: int = 0
    is_insufficient: bool = False
    warnings: List[str] = Field(default_factory=list)


class ReadabilityResult(CamelModel):
    """Full output of `ReadabilityServices.analyze`; every mini-service is a slice of it."""
    meta: ReadabilityMeta
    totals: ReadabilityTotals = Field(default_factory=ReadabilityTotals)
    composite_score: CompositeScore = Field(default_factory=CompositeScore)
    formulas: List[FormulaResult] = Field(default_factory=list)
    structure: StructureAnalysis = Field(default_factory=StructureAnalysis)
    recommendations: List[ReadabilityNote] = Field(default_factory=list)
    language_guidance: LanguageGuidance
    reading_levels: ReadingLevels = Field(default_factory=ReadingLevels)
    summary: ReadabilitySummary = Field(default_factory=ReadabilitySummary)


class FleschSnapshot(CamelModel):
    score: int = 0
    level: str = "N/A"
    description: str = "No content to analyze"


# --- SEO assessments ---

class SEOAssessment(CamelModel):
    score: int
    status: str
    reason: str


class IssueExample(CamelModel):
    text: str
    word_count: Optional[int] = None


class SEOImpactIssue(CamelModel):
    severity: AssessmentSeverity
    category: str
    finding: str
    impact: str
    examples: List[IssueExample] = Field(default_factory=list)


class SEOAdvice(CamelModel):
    priority: AdvicePriority
    rule: str
    reason: str
    action: str
    seo_impact: str


class SEOStrength(CamelModel):
    category: str
    strength: str
    benefit: str


class ContentAnalysis(CamelModel):
    overall_readability: str
    score: int
    target_audience: str
    seo_readability: str


class DynamicLanguageGuidance(CamelModel):
    content_analysis: ContentAnalysis
    seo_impact: Dict[str, SEOAssessment]
    specific_issues: List[SEOImpactIssue] = Field(default_factory=list)
    actionable_advice: List[SEOAdvice] = Field(default_factory=list)
    strengths_identified: List[SEOStrength] = Field(default_factory=list)
