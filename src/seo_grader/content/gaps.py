# src/seo_grader/content/gaps.py
import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Union

from seo_grader.dom.models import HEADING_LEVELS
from seo_grader.dom.parser import parse
from seo_grader.keywords.suggestions import parse_keyword_list

from .models import (
    ContentDepthAnalysis,
    ContentGapMeta,
    ContentGapResult,
    ContentNote,
    ContentScore,
    TopicCoverage,
    rate,
)

logger = logging.getLogger(__name__)


def topic_depth(text: str, topic: str) -> str:
    """Depth from the number of mentions: 0 none, 1 mentioned, up to 3 shallow, up to 7 moderate, else deep."""
    mentions = text.count(topic) if topic else 0
    if mentions == 0:
        return "none"
    if mentions == 1:
        return "mentioned"
    if mentions <= 3:
        return "shallow"
    if mentions <= 7:
        return "moderate"
    return "deep"


def analyze_topic_coverage(text: str, headings: Dict[str, List[str]], topics: List[str]) -> List[TopicCoverage]:
    """`text` is expected lowercased. Relevance is the share of the topic's words found anywhere in it."""
    heading_text = " ".join(t for level in HEADING_LEVELS for t in headings.get(level, [])).lower()
    coverage = []
    for topic in topics:
        lowered = topic.lower()
        words = lowered.split()
        in_text = lowered in text
        in_headings = lowered in heading_text
        matched = sum(1 for word in words if word in text)
        coverage.append(TopicCoverage(
            topic=topic,
            covered=in_text or in_headings,
            in_headings=in_headings,
            relevance=round(matched / len(words) * 100) if words else 0,
            depth=topic_depth(text, lowered),
        ))
    return coverage


def analyze_content_depth(word_count: int, coverage: List[TopicCoverage]) -> ContentDepthAnalysis:
    covered = sum(1 for t in coverage if t.covered)
    words_per_topic = round(word_count / covered) if covered else 0
    if words_per_topic >= 500:
        level = "comprehensive"
    elif words_per_topic >= 200:
        level = "adequate"
    elif words_per_topic >= 100:
        level = "shallow"
    else:
        level = "minimal"
    return ContentDepthAnalysis(
        words_per_topic=words_per_topic,
        depth_level=level,
        deep_topics=sum(1 for t in coverage if t.depth == "deep"),
        shallow_topics=sum(1 for t in coverage if t.depth in ("shallow", "mentioned")),
    )


def gap_suggestions(gaps: List[TopicCoverage], depth: ContentDepthAnalysis,
                    coverage: List[TopicCoverage]) -> List[ContentNote]:
    notes = []
    if gaps:
        notes.append(ContentNote(
            type="warning", category="coverage", title="Missing Topics",
            message=f"{len(gaps)} topics are not covered: {', '.join(g.topic for g in gaps)}"))
        notes.append(ContentNote(
            type="info", category="coverage", title="Add Missing Content",
            message="Create sections addressing the missing topics to provide comprehensive coverage."))

    if depth.shallow_topics > len(coverage) * 0.5:
        notes.append(ContentNote(
            type="warning", category="depth", title="Shallow Topic Coverage",
            message="Many topics are only briefly mentioned. Add more depth and examples."))

    if coverage and depth.words_per_topic < 100:
        notes.append(ContentNote(
            type="warning", category="depth", title="Insufficient Detail",
            message=f"Average {depth.words_per_topic} words per topic. Aim for at least 200 words per topic."))

    if not notes:
        notes.append(ContentNote(
            type="success", category="coverage", title="Comprehensive Coverage",
            message="All topics are well covered with good depth. Excellent!"))
    return notes


def calculate_coverage_score(coverage: List[TopicCoverage]) -> ContentScore:
    """Covered share plus up to 20 for moderate or deep topics, capped at 100. No topics scores 100, N/A."""
    if not coverage:
        return ContentScore(score=100, label="N/A")
    covered = round(sum(1 for t in coverage if t.covered) / len(coverage) * 100)
    deep = sum(1 for t in coverage if t.depth in ("deep", "moderate"))
    depth_bonus = round(deep / len(coverage) * 20)
    return rate(min(100, covered + depth_bonus))


def analyze_content_gaps(content: str, topics: Union[str, Iterable[str], None] = None) -> ContentGapResult:
    """
    Checks which topics or questions the content covers and how deeply.

    Args:
        content (str): HTML or plain text.
        topics: Topics to look for, as a list or a comma separated string.
    """
    document = parse(content or "")
    text = document.text.lower()
    topic_list = parse_keyword_list(topics)

    coverage = analyze_topic_coverage(text, document.headings, topic_list)
    gaps = [t for t in coverage if not t.covered]
    depth = analyze_content_depth(document.word_count, coverage)

    logger.debug("Content gaps: %d of %d topics missing", len(gaps), len(coverage))
    return ContentGapResult(
        meta=ContentGapMeta(
            timestamp=datetime.now(timezone.utc).isoformat(),
            topics_provided=len(topic_list),
            topics_covered=len(coverage) - len(gaps),
        ),
        coverage=coverage,
        gaps=gaps,
        depth=depth,
        suggestions=gap_suggestions(gaps, depth, coverage),
        score=calculate_coverage_score(coverage),
    )
