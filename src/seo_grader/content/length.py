# src/seo_grader/content/length.py
import logging
from datetime import datetime, timezone
from typing import List, Optional

from seo_grader.dom.parser import calculate_reading_time, parse
from seo_grader.utils.config_loader import get_nested_config

from .models import (
    ContentLengthAnalysis,
    ContentLengthMeta,
    ContentLengthRange,
    ContentLengthResult,
    ContentNote,
    ContentSection,
    CurrentLength,
    SectionAnalysis,
)

logger = logging.getLogger(__name__)

# Word-count targets per content type.
IDEAL_CONTENT_LENGTH = {
    "blog": ContentLengthRange(min=1000, max=2000, ideal=1500),
    "guide": ContentLengthRange(min=2000, max=5000, ideal=3000),
    "listicle": ContentLengthRange(min=800, max=2000, ideal=1200),
    "product": ContentLengthRange(min=300, max=1000, ideal=500),
    "news": ContentLengthRange(min=300, max=800, ideal=500),
    "pillar": ContentLengthRange(min=3000, max=10000, ideal=5000),
}
DEFAULT_TARGET_TYPE = "blog"
SWEET_SPOT_WORDS = 200


def resolve_target_type(target_type: Optional[str]) -> str:
    requested = (target_type or get_nested_config("content.default_target_type", DEFAULT_TARGET_TYPE)).lower()
    if requested not in IDEAL_CONTENT_LENGTH:
        logger.debug("Unknown content type '%s', using '%s'", requested, DEFAULT_TARGET_TYPE)
        return DEFAULT_TARGET_TYPE
    return requested


def calculate_length_score(word_count: int, ideal_range: ContentLengthRange) -> int:
    """
    In range: 70..100 by distance from the ideal. Too short: 70 % of the
    share of the minimum reached. Too long: 70 minus the excess as a share
    of the maximum (penalty capped at 50), never below 20.
    """
    low, high, ideal = ideal_range.min, ideal_range.max, ideal_range.ideal
    if low <= word_count <= high:
        max_distance = max(ideal - low, high - ideal)
        score = 100 - abs(word_count - ideal) / max_distance * 30
        return max(70, round(score))
    if word_count < low:
        return max(0, round(word_count / low * 100 * 0.7))
    penalty = min(50, (word_count - high) / high * 100)
    return max(20, round(70 - penalty))


def analyze_length(word_count: int, ideal_range: ContentLengthRange, target_type: str) -> ContentLengthAnalysis:
    if word_count < ideal_range.min:
        status = "too_short"
        message = (f"Content is {ideal_range.min - word_count} words below the minimum recommended length "
                   f"for {target_type} content.")
    elif word_count > ideal_range.max:
        status = "too_long"
        message = (f"Content is {word_count - ideal_range.max} words above the maximum recommended length "
                   f"for {target_type} content.")
    else:
        status = "optimal"
        message = f"Content length is within the ideal range for {target_type} content."

    return ContentLengthAnalysis(
        status=status,
        message=message,
        difference=word_count - ideal_range.ideal,
        percentage_of_ideal=round(word_count / ideal_range.ideal * 100),
        score=calculate_length_score(word_count, ideal_range),
    )


def analyze_sections(headings: dict) -> SectionAnalysis:
    h2s = headings.get("h2", [])
    return SectionAnalysis(
        major_sections=len(h2s),
        subsections=len(headings.get("h3", [])),
        has_proper_sectioning=len(h2s) >= 3,
        sections=[ContentSection(title=title, type="h2") for title in h2s],
    )


def length_suggestions(word_count: int, ideal_range: ContentLengthRange, sections: SectionAnalysis,
                       target_type: str) -> List[ContentNote]:
    if word_count < ideal_range.min:
        notes = [ContentNote(
            type="warning", category="expand", title="Content Too Short",
            message=f"Add approximately {ideal_range.min - word_count} more words to meet the minimum "
                    f"recommended length for {target_type} content.")]
        if sections.major_sections < 3:
            notes.append(ContentNote(
                type="info", category="expand", title="Add More Sections",
                message="Create additional sections to thoroughly cover your topic. "
                        "Aim for at least 3-5 major sections."))
        notes.append(ContentNote(
            type="info", category="expand", title="Expansion Ideas",
            message="Consider adding: examples, case studies, statistics, expert quotes, FAQs, "
                    "or additional details."))
        return notes

    if word_count > ideal_range.max:
        return [
            ContentNote(
                type="warning", category="reduce", title="Content Too Long",
                message=f"Consider removing approximately {word_count - ideal_range.max} words "
                        f"or splitting into multiple pages."),
            ContentNote(
                type="info", category="reduce", title="Reduction Ideas",
                message="Remove redundant information, consolidate similar points, "
                        "or move detailed sections to separate pages."),
        ]

    if abs(word_count - ideal_range.ideal) <= SWEET_SPOT_WORDS:
        return [ContentNote(
            type="success", category="optimal", title="Ideal Content Length",
            message=f"Your content is at the sweet spot for {target_type} content. Well done!")]
    return [ContentNote(
        type="success", category="optimal", title="Good Content Length",
        message=f"Your content length is appropriate for {target_type} content.")]


def optimize_content_length(content: str, target_type: Optional[str] = None) -> ContentLengthResult:
    """
    Compares the word count with the range recommended for a content type
    (blog, guide, listicle, product, news or pillar; unknown types use blog).
    """
    target = resolve_target_type(target_type)
    ideal_range = IDEAL_CONTENT_LENGTH[target]
    document = parse(content or "")
    words = document.word_count

    analysis = analyze_length(words, ideal_range, target)
    sections = analyze_sections(document.headings)

    logger.debug("Content length %d words for %s: %s", words, target, analysis.status)
    return ContentLengthResult(
        meta=ContentLengthMeta(
            timestamp=datetime.now(timezone.utc).isoformat(),
            current_word_count=words,
            target_type=target,
        ),
        current_length=CurrentLength(
            words=words,
            characters=document.character_count,
            reading_time=calculate_reading_time(words),
        ),
        ideal_range=ideal_range,
        length_analysis=analysis,
        sections=sections,
        suggestions=length_suggestions(words, ideal_range, sections, target),
        score=analysis.score,
    )
