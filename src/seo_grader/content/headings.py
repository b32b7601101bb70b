# src/seo_grader/content/headings.py
import logging
import re
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Union

from seo_grader.dom.models import HEADING_LEVELS
from seo_grader.dom.parser import parse
from seo_grader.keywords.suggestions import parse_keyword_list

from .models import (
    ContentNote,
    ContentScore,
    HeadingAnalysis,
    HeadingDetail,
    HeadingKeywordUsage,
    HeadingLengthAnalysis,
    HeadingOptimizationMeta,
    HeadingOptimizationResult,
    KeywordUsageAnalysis,
    rate,
)
from .structure import analyze_heading_hierarchy

logger = logging.getLogger(__name__)

MIN_HEADING_WORDS = 3
MAX_HEADING_WORDS = 10


def analyze_heading_keywords(headings: Dict[str, List[str]], keywords: List[str]) -> KeywordUsageAnalysis:
    heading_text = " ".join(text for level in HEADING_LEVELS for text in headings.get(level, [])).lower()
    usage = []
    for keyword in keywords:
        count = len(re.findall(rf"\b{re.escape(keyword.lower())}\b", heading_text))
        usage.append(HeadingKeywordUsage(keyword=keyword, count=count, in_headings=count > 0))

    found = sum(1 for u in usage if u.in_headings)
    return KeywordUsageAnalysis(
        usage=usage,
        keywords_in_headings=found,
        total_keywords=len(keywords),
        percentage=round(found / len(keywords) * 100) if keywords else 0,
    )


def analyze_heading_length(headings: Dict[str, List[str]]) -> HeadingLengthAnalysis:
    details = [
        HeadingDetail(level=level, text=text, length=len(text.split()), characters=len(text))
        for level in HEADING_LEVELS
        for text in headings.get(level, [])
    ]
    return HeadingLengthAnalysis(
        total=len(details),
        optimal=sum(1 for d in details if MIN_HEADING_WORDS <= d.length <= MAX_HEADING_WORDS),
        too_long=sum(1 for d in details if d.length > MAX_HEADING_WORDS),
        too_short=sum(1 for d in details if d.length < MIN_HEADING_WORDS),
        details=details,
    )


def heading_suggestions(analysis: HeadingAnalysis, keyword_usage: KeywordUsageAnalysis,
                        length: HeadingLengthAnalysis) -> List[ContentNote]:
    notes = []
    if keyword_usage.total_keywords:
        missing = [u.keyword for u in keyword_usage.usage if not u.in_headings]
        if missing:
            notes.append(ContentNote(
                type="info", category="keywords", title="Include Keywords in Headings",
                message=f"Consider using these keywords in your headings: {', '.join(missing)}"))
        if keyword_usage.keywords_in_headings == 0:
            notes.append(ContentNote(
                type="warning", category="keywords", title="No Keywords in Headings",
                message="None of your target keywords appear in headings. This is a missed SEO opportunity."))

    if length.too_long:
        notes.append(ContentNote(
            type="warning", category="length", title="Shorten Long Headings",
            message=f"{length.too_long} headings are too long (>{MAX_HEADING_WORDS} words). "
                    f"Keep headings concise and scannable."))
    if length.too_short:
        notes.append(ContentNote(
            type="info", category="length", title="Expand Short Headings",
            message=f"{length.too_short} headings are very short (<{MIN_HEADING_WORDS} words). "
                    f"Add more context for clarity."))

    for issue in analysis.hierarchy_issues:
        notes.append(ContentNote(type="warning", category="hierarchy", title="Fix Heading Hierarchy", message=issue))

    if not notes:
        notes.append(ContentNote(
            type="success", category="general", title="Well-Optimized Headings",
            message="Your headings are well-structured and optimized. Great job!"))
    return notes


def calculate_heading_score(analysis: HeadingAnalysis, keyword_usage: KeywordUsageAnalysis,
                            length: HeadingLengthAnalysis) -> ContentScore:
    """Hierarchy 40, keyword usage 35 (full marks without keywords) and length 25 points."""
    score = 0
    if analysis.has_proper_hierarchy:
        score += 40
    elif analysis.has_h1:
        score += 20

    if keyword_usage.total_keywords:
        score += round(keyword_usage.percentage / 100 * 35)
    else:
        score += 35

    if length.total:
        score += round(length.optimal / length.total * 25)
    return rate(score)


def optimize_headings(content: str, keywords: Union[str, Iterable[str], None] = None) -> HeadingOptimizationResult:
    """
    Checks heading hierarchy, target keyword usage and heading length.

    Args:
        content (str): HTML or plain text.
        keywords: Target keywords, as a list or a comma separated string.
    """
    document = parse(content or "")
    keyword_list = parse_keyword_list(keywords)

    analysis = analyze_heading_hierarchy(document.headings)
    keyword_usage = analyze_heading_keywords(document.headings, keyword_list)
    length = analyze_heading_length(document.headings)
    score = calculate_heading_score(analysis, keyword_usage, length)

    logger.debug("Heading score %d over %d headings", score.score, analysis.total)
    return HeadingOptimizationResult(
        meta=HeadingOptimizationMeta(
            timestamp=datetime.now(timezone.utc).isoformat(),
            total_headings=analysis.total,
            keywords_provided=len(keyword_list),
        ),
        analysis=analysis,
        keyword_usage=keyword_usage,
        length_analysis=length,
        suggestions=heading_suggestions(analysis, keyword_usage, length),
        score=score,
    )
