# src/seo_grader/readability/seo_readability.py
"""
SEO-oriented readings of the readability numbers.

Each assessment is an independent, additive score capped at 100 with a
status band and a reason. `generate_dynamic_language_guidance` combines
them with content-specific issues, advice and strengths.
"""
from typing import Dict, List, Tuple

from .models import (
    CompositeScore,
    ContentAnalysis,
    DynamicLanguageGuidance,
    IssueExample,
    ReadabilityTotals,
    SEOAdvice,
    SEOAssessment,
    SEOImpactIssue,
    SEOStrength,
    StructureAnalysis,
)
from .text_analysis import safe_ratio, truncate_text

SEVERITY_ORDER = {"critical": 0, "high": 1, "medium": 2, "low": 3}
PRIORITY_ORDER = {"critical": 0, "high": 1, "medium": 2, "low": 3, "maintenance": 4}


def _banded(score: float, bands: Tuple[Tuple[float, str, str], ...], floor: Tuple[str, str]) -> SEOAssessment:
    score = min(100.0, score)
    for minimum, status, reason in bands:
        if score >= minimum:
            return SEOAssessment(score=int(round(score)), status=status, reason=reason)
    return SEOAssessment(score=int(round(score)), status=floor[0], reason=floor[1])


def get_seo_readability_level(score: float) -> str:
    if score >= 70:
        return "Excellent for SEO - highly scannable"
    if score >= 60:
        return "Good for SEO - accessible to most users"
    if score >= 50:
        return "Fair for SEO - may limit reach"
    return "Poor for SEO - likely to increase bounce rate"


def assess_crawlability(structure: StructureAnalysis, totals: ReadabilityTotals) -> SEOAssessment:
    score = ((40 if structure.paragraphs.count >= 3 else 20)
             + (30 if structure.sentences.count >= 10 else 15)
             + (30 if totals.words >= 300 else totals.words / 10))
    return _banded(score, (
        (80, "Excellent", "Well-structured content is easy for search engines to parse"),
        (60, "Good", "Adequate structure for search engine indexing"),
        (40, "Fair", "Content structure may limit search engine understanding"),
    ), ("Poor", "Content structure may limit search engine understanding"))


def assess_user_engagement(readability_score: float, structure: StructureAnalysis) -> SEOAssessment:
    score = (readability_score * 0.6
             + (20 if structure.paragraphs.count >= 4 else 10)
             + (20 if structure.sentences.average_length <= 20 else 10))
    return _banded(score, (
        (75, "High", "Content is optimized for sustained user engagement"),
        (55, "Moderate", "Content supports average engagement levels"),
    ), ("Low", "Readability issues may increase bounce rate"))


def assess_mobile_friendliness(structure: StructureAnalysis) -> SEOAssessment:
    avg_paragraph_words = structure.paragraphs.average_words
    avg_sentence_length = structure.sentences.average_length
    score = ((50 if avg_paragraph_words <= 80 else (80 / avg_paragraph_words) * 50)
             + (50 if avg_sentence_length <= 18 else (18 / avg_sentence_length) * 50))
    return _banded(score, (
        (80, "Excellent", "Short paragraphs and sentences perfect for mobile reading"),
        (60, "Good", "Acceptable for mobile but could be more concise"),
    ), ("Needs Improvement", "Text blocks may be difficult to read on mobile devices"))


def assess_voice_search_readiness(readability_score: float, totals: ReadabilityTotals) -> SEOAssessment:
    ratio = totals.complex_word_ratio
    score = ((60 if readability_score >= 70 else readability_score * 0.85)
             + (40 if ratio < 0.15 else max(0.0, (0.15 - ratio) * 200)))
    return _banded(score, (
        (75, "High", "Conversational tone aligns with voice search queries"),
        (55, "Moderate", "Partially optimized for voice search"),
    ), ("Low", "Complex language limits voice search compatibility"))


def assess_snippet_potential(structure: StructureAnalysis, readability_score: float) -> SEOAssessment:
    avg_words = structure.paragraphs.average_words
    score = ((40 if readability_score >= 60 else readability_score * 0.65)
             + (30 if 40 <= avg_words <= 100 else 15)
             + (30 if structure.sentences.average_length <= 20 else 15))
    return _banded(score, (
        (75, "High", "Content structure favors featured snippet selection"),
        (55, "Moderate", "Some paragraphs may qualify for featured snippets"),
    ), ("Low", "Current structure limits featured snippet eligibility"))


def assess_seo_impact(totals: ReadabilityTotals, structure: StructureAnalysis,
                      composite_score: int) -> Dict[str, SEOAssessment]:
    return {
        "crawlability": assess_crawlability(structure, totals),
        "userEngagement": assess_user_engagement(composite_score, structure),
        "mobileFriendliness": assess_mobile_friendliness(structure),
        "voiceSearchOptimization": assess_voice_search_readiness(composite_score, totals),
        "featuredSnippetPotential": assess_snippet_potential(structure, composite_score),
    }


def get_language_specific_seo_advice(language_code: str, totals: ReadabilityTotals,
                                     structure: StructureAnalysis, composite: CompositeScore):
    """Returns (issues, advice, strengths) specific to English or Greek content."""
    issues: List[SEOImpactIssue] = []
    advice: List[SEOAdvice] = []
    strengths: List[SEOStrength] = []

    if language_code == "en":
        if structure.sentences.average_length > 22:
            issues.append(SEOImpactIssue(
                severity="medium",
                category="English Sentence Structure",
                finding=f"Average sentence length of {round(structure.sentences.average_length)} words "
                        f"exceeds English web standard",
                impact="English readers expect concise, direct sentences online",
            ))
            advice.append(SEOAdvice(
                priority="medium",
                rule="Apply English Web Writing Standards",
                reason="English web content performs best at 15-20 words per sentence",
                action="Target 18-word average sentences. Use active voice and eliminate filler words.",
                seo_impact="Better engagement from English-speaking markets",
            ))
        if totals.vocabulary_richness < 0.4:
            issues.append(SEOImpactIssue(
                severity="low",
                category="Keyword Diversity",
                finding=f"Low vocabulary richness ({round(totals.vocabulary_richness * 100)}%) "
                        f"suggests repetitive language",
                impact="Limited semantic keyword coverage",
            ))
            advice.append(SEOAdvice(
                priority="low",
                rule="Expand Semantic Keyword Coverage",
                reason="Varied vocabulary captures more long-tail search queries",
                action="Use synonyms and related terms to broaden topical relevance without keyword stuffing.",
                seo_impact="Improved semantic SEO and featured snippet potential",
            ))

    elif language_code == "el":
        if structure.paragraphs.average_words > 100:
            issues.append(SEOImpactIssue(
                severity="high",
                category="Greek Paragraph Length",
                finding=f"Greek paragraphs average {round(structure.paragraphs.average_words)} words "
                        f"- exceeds web standard",
                impact="Greek readers expect shorter, focused web paragraphs",
            ))
            advice.append(SEOAdvice(
                priority="high",
                rule="Adapt to Greek Web Reading Patterns",
                reason="Greek online content performs best with 50-80 word paragraphs",
                action="Break paragraphs at natural thought boundaries. Use bullet points for lists.",
                seo_impact="Better engagement from Greek-speaking audiences",
            ))
        if composite.score < 55:
            advice.append(SEOAdvice(
                priority="high",
                rule="Optimize for Greek Search Algorithms",
                reason="Greek search engines prioritize accessible content",
                action="Simplify sentence structure. Use contemporary Greek vocabulary over archaic forms.",
                seo_impact="Improved visibility in Greek search results",
            ))

    return issues, advice, strengths


def _examples(samples, count_attr: str) -> List[IssueExample]:
    return [IssueExample(text=truncate_text(s.text, 100), word_count=getattr(s, count_attr))
            for s in samples[:2]]


def generate_dynamic_language_guidance(totals: ReadabilityTotals, structure: StructureAnalysis,
                                       composite: CompositeScore, language_code: str) -> DynamicLanguageGuidance:
    issues: List[SEOImpactIssue] = []
    advice: List[SEOAdvice] = []
    strengths: List[SEOStrength] = []
    sentences = structure.sentences
    paragraphs = structure.paragraphs

    long_sentence_ratio = safe_ratio(len(sentences.long_sentences), sentences.count)
    if long_sentence_ratio > 0.3:
        issues.append(SEOImpactIssue(
            severity="high",
            category="Sentence Complexity",
            finding=f"{round(long_sentence_ratio * 100)}% of sentences exceed 25 words",
            impact="Users may abandon pages with dense, hard-to-scan content",
            examples=_examples(sentences.long_sentences, "length"),
        ))
        advice.append(SEOAdvice(
            priority="critical",
            rule="Break Up Long Sentences for SEO",
            reason="Search engines favor content that users can quickly scan and understand",
            action="Split sentences over 25 words. Target 15-20 words per sentence for optimal web readability.",
            seo_impact="Improved dwell time and reduced bounce rate",
        ))
    elif long_sentence_ratio < 0.1:
        strengths.append(SEOStrength(
            category="Sentence Length",
            strength="Well-controlled sentence length throughout content",
            benefit="Users can easily scan and extract information",
        ))

    long_paragraph_ratio = safe_ratio(len(paragraphs.long_paragraphs), paragraphs.count)
    if long_paragraph_ratio > 0.3:
        issues.append(SEOImpactIssue(
            severity="high",
            category="Paragraph Structure",
            finding=f"{round(long_paragraph_ratio * 100)}% of paragraphs exceed 150 words",
            impact="Large text blocks reduce scannability and mobile readability",
            examples=_examples(paragraphs.long_paragraphs, "words"),
        ))
        advice.append(SEOAdvice(
            priority="high",
            rule="Optimize Paragraph Length for Web",
            reason="Mobile users and search engine crawlers prefer shorter, focused paragraphs",
            action="Break paragraphs into 40-80 word chunks. Use subheadings to improve content hierarchy.",
            seo_impact="Better featured snippet eligibility and mobile SEO",
        ))
    elif paragraphs.average_words <= 80:
        strengths.append(SEOStrength(
            category="Paragraph Structure",
            strength="Paragraphs are well-sized for web consumption",
            benefit="Mobile-friendly and search engine optimized",
        ))

    if totals.complex_word_ratio > 0.2:
        issues.append(SEOImpactIssue(
            severity="medium",
            category="Vocabulary Complexity",
            finding=f"{round(totals.complex_word_ratio * 100)}% of words are complex (3+ syllables)",
            impact="Technical jargon may limit organic search reach",
        ))
        advice.append(SEOAdvice(
            priority="medium",
            rule="Simplify Vocabulary for Broader Reach",
            reason="Search engines prioritize content accessible to wider audiences",
            action="Replace complex terms with simpler alternatives. "
                   "Use jargon only when targeting specialist searches.",
            seo_impact="Expanded keyword targeting and voice search optimization",
        ))
    elif totals.complex_word_ratio < 0.12:
        strengths.append(SEOStrength(
            category="Vocabulary",
            strength="Accessible vocabulary suitable for general audiences",
            benefit="Better voice search compatibility",
        ))

    short_sentence_ratio = safe_ratio(len(sentences.short_sentences), sentences.count)
    if short_sentence_ratio > 0.4:
        issues.append(SEOImpactIssue(
            severity="low",
            category="Sentence Variety",
            finding=f"{round(short_sentence_ratio * 100)}% of sentences are very short (under 5 words)",
            impact="Choppy rhythm may reduce engagement time",
        ))
        advice.append(SEOAdvice(
            priority="low",
            rule="Balance Sentence Lengths",
            reason="Mix of short and medium sentences creates engaging reading rhythm",
            action="Combine some short sentences or add supporting details to create 12-18 word sentences.",
            seo_impact="Improved user engagement metrics",
        ))

    if composite.score < 50:
        issues.append(SEOImpactIssue(
            severity="critical",
            category="Overall Readability",
            finding=f"Readability score of {composite.score} is below recommended threshold",
            impact="Low readability directly correlates with high bounce rates",
        ))
        advice.append(SEOAdvice(
            priority="critical",
            rule="Improve Overall Readability for SEO Performance",
            reason="Google considers user engagement signals; poor readability hurts rankings",
            action="Apply sentence and paragraph improvements. Target a score above 60 for optimal SEO.",
            seo_impact="Better rankings, featured snippet opportunities, and user satisfaction",
        ))
    elif composite.score >= 70:
        strengths.append(SEOStrength(
            category="Overall Readability",
            strength="Excellent readability score for web content",
            benefit="Strong foundation for SEO success and user engagement",
        ))

    lang_issues, lang_advice, lang_strengths = get_language_specific_seo_advice(
        language_code, totals, structure, composite)
    issues.extend(lang_issues)
    advice.extend(lang_advice)
    strengths.extend(lang_strengths)

    if not issues:
        advice.append(SEOAdvice(
            priority="maintenance",
            rule="Maintain Current Standards",
            reason="Your content meets readability best practices",
            action="Continue using clear language, varied sentence structure, and focused paragraphs.",
            seo_impact="Sustained organic performance",
        ))

    issues.sort(key=lambda i: SEVERITY_ORDER[i.severity])
    advice.sort(key=lambda a: PRIORITY_ORDER[a.priority])

    return DynamicLanguageGuidance(
        content_analysis=ContentAnalysis(
            overall_readability=composite.label,
            score=composite.score,
            target_audience=composite.grade_level,
            seo_readability=get_seo_readability_level(composite.score),
        ),
        seo_impact=assess_seo_impact(totals, structure, composite.score),
        specific_issues=issues,
        actionable_advice=advice,
        strengths_identified=strengths,
    )
