# src/seo_grader/content/structure.py
import logging
from datetime import datetime, timezone
from typing import Dict, List

from bs4 import BeautifulSoup

from seo_grader.dom.models import HEADING_LEVELS, ParsedDocument
from seo_grader.dom.parser import parse

from .models import (
    ContentNote,
    ContentScore,
    HeadingAnalysis,
    ListAnalysis,
    MediaAnalysis,
    ParagraphAnalysis,
    StructureAnalysisResult,
    StructureMeta,
    rate,
)

logger = logging.getLogger(__name__)

SHORT_PARAGRAPH_WORDS = 50
LONG_PARAGRAPH_WORDS = 150


def count_tags(markup: str, *names: str) -> Dict[str, int]:
    """Occurrences of each tag name in the markup; plain text counts zero everywhere."""
    if not markup or "<" not in markup:
        return {name: 0 for name in names}
    soup = BeautifulSoup(markup, "html.parser")
    return {name: len(soup.find_all(name)) for name in names}


def find_hierarchy_issues(headings: Dict[str, List[str]]) -> List[str]:
    issues = []
    h1_count = len(headings.get("h1", []))
    if h1_count == 0:
        issues.append("Missing H1 heading")
    elif h1_count > 1:
        issues.append(f"Multiple H1 headings ({h1_count}) - should have only one")

    if not headings.get("h2"):
        issues.append("No H2 headings - add subheadings to structure content")

    # Only the first skipped level is reported.
    counts = [len(headings.get(level, [])) for level in HEADING_LEVELS]
    for i in range(len(counts) - 1):
        if counts[i] == 0 and any(counts[i + 1:]):
            issues.append(f"Heading hierarchy skip detected - H{i + 1} missing but H{i + 2} or lower exists")
            break
    return issues


def analyze_heading_hierarchy(headings: Dict[str, List[str]]) -> HeadingAnalysis:
    counts = {level: len(headings.get(level, [])) for level in HEADING_LEVELS}
    has_h1 = counts["h1"] == 1
    has_h2 = counts["h2"] > 0
    return HeadingAnalysis(
        total=sum(counts.values()),
        **{f"{level}_count": count for level, count in counts.items()},
        has_h1=has_h1,
        has_h2=has_h2,
        has_proper_hierarchy=has_h1 and has_h2,
        hierarchy_issues=find_hierarchy_issues(headings),
    )


def analyze_paragraphs(document: ParsedDocument) -> ParagraphAnalysis:
    lengths = [len(p.split()) for p in document.paragraphs]
    if not lengths:
        return ParagraphAnalysis()
    return ParagraphAnalysis(
        count=len(lengths),
        avg_length=round(sum(lengths) / len(lengths)),
        short_paragraphs=sum(1 for n in lengths if n < SHORT_PARAGRAPH_WORDS),
        medium_paragraphs=sum(1 for n in lengths if SHORT_PARAGRAPH_WORDS <= n <= LONG_PARAGRAPH_WORDS),
        long_paragraphs=sum(1 for n in lengths if n > LONG_PARAGRAPH_WORDS),
        is_empty=False,
    )


def analyze_lists(tag_counts: Dict[str, int]) -> ListAnalysis:
    unordered, ordered, items = tag_counts["ul"], tag_counts["ol"], tag_counts["li"]
    total = unordered + ordered
    return ListAnalysis(
        unordered_lists=unordered,
        ordered_lists=ordered,
        total_lists=total,
        total_list_items=items,
        avg_items_per_list=round(items / total) if total else 0,
        has_lists=total > 0,
    )


def analyze_media(document: ParsedDocument, tag_counts: Dict[str, int]) -> MediaAnalysis:
    images = len(document.images)
    with_alt = sum(1 for image in document.images if image.has_alt)
    total = images + tag_counts["video"] + tag_counts["iframe"]
    return MediaAnalysis(
        images=images,
        images_with_alt=with_alt,
        images_without_alt=images - with_alt,
        videos=tag_counts["video"],
        embeds=tag_counts["iframe"],
        total_media=total,
        has_media=total > 0,
    )


def calculate_structure_score(headings: HeadingAnalysis, paragraphs: ParagraphAnalysis, lists: ListAnalysis,
                              media: MediaAnalysis, word_count: int) -> ContentScore:
    """Headings 30, paragraphs 25, lists 20, media 15 and length 10 points."""
    score = 0
    if headings.has_proper_hierarchy:
        score += 30
    elif headings.has_h1:
        score += 15

    if paragraphs.count >= 3:
        score += 15
        if paragraphs.long_paragraphs < paragraphs.count * 0.3:
            score += 10

    if lists.has_lists:
        score += 20

    if media.has_media:
        score += 10
        if media.images_with_alt == media.images:
            score += 5

    if word_count >= 300:
        score += 10
    elif word_count >= 150:
        score += 5

    return rate(score)


def structure_recommendations(headings: HeadingAnalysis, paragraphs: ParagraphAnalysis, lists: ListAnalysis,
                              media: MediaAnalysis, word_count: int) -> List[ContentNote]:
    notes = []
    if not headings.has_proper_hierarchy:
        if not headings.has_h1:
            notes.append(ContentNote(
                type="error", category="headings", title="Add H1 Heading",
                message="Every page needs exactly one H1 heading that clearly states the main topic."))
        if not headings.has_h2:
            notes.append(ContentNote(
                type="warning", category="headings", title="Add H2 Subheadings",
                message="Break content into sections with H2 headings to improve scannability."))

    for issue in headings.hierarchy_issues:
        notes.append(ContentNote(type="warning", category="headings", title="Heading Hierarchy Issue", message=issue))

    if paragraphs.long_paragraphs > paragraphs.count * 0.3:
        notes.append(ContentNote(
            type="warning", category="paragraphs", title="Long Paragraphs Detected",
            message=f"{paragraphs.long_paragraphs} paragraphs exceed {LONG_PARAGRAPH_WORDS} words. "
                    f"Consider breaking them into smaller chunks."))

    if paragraphs.count < 3 and word_count > 200:
        notes.append(ContentNote(
            type="info", category="paragraphs", title="Add More Paragraphs",
            message="Break content into more paragraphs for better readability."))

    if not lists.has_lists and word_count > 300:
        notes.append(ContentNote(
            type="info", category="lists", title="Consider Adding Lists",
            message="Use bulleted or numbered lists to present information clearly and improve scannability."))

    if not media.has_media and word_count > 500:
        notes.append(ContentNote(
            type="info", category="media", title="Add Visual Elements",
            message="Include images, videos, or infographics to break up text and improve engagement."))

    if media.images_without_alt > 0:
        notes.append(ContentNote(
            type="warning", category="media", title="Add Alt Text to Images",
            message=f"{media.images_without_alt} images missing alt text. "
                    f"Add descriptive alt text for SEO and accessibility."))

    if not notes:
        notes.append(ContentNote(
            type="success", category="general", title="Excellent Structure",
            message="Your content has a well-organized structure. Keep it up!"))
    return notes


def analyze_content_structure(content: str) -> StructureAnalysisResult:
    """
    Grades how the content is organized: heading hierarchy, paragraph
    lengths, lists and media, with a 0..100 score and actionable notes.

    Args:
        content (str): HTML or plain text.
    """
    document = parse(content or "")
    tag_counts = count_tags(document.html, "ul", "ol", "li", "video", "iframe")

    headings = analyze_heading_hierarchy(document.headings)
    paragraphs = analyze_paragraphs(document)
    lists = analyze_lists(tag_counts)
    media = analyze_media(document, tag_counts)
    score = calculate_structure_score(headings, paragraphs, lists, media, document.word_count)

    logger.debug("Structure score %d for %d words", score.score, document.word_count)
    return StructureAnalysisResult(
        meta=StructureMeta(timestamp=datetime.now(timezone.utc).isoformat(), word_count=document.word_count),
        score=score,
        headings=headings,
        paragraphs=paragraphs,
        lists=lists,
        media=media,
        recommendations=structure_recommendations(headings, paragraphs, lists, media, document.word_count),
    )
