# src/seo_grader/content/competitive.py
import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Union

from seo_grader.dom.parser import parse

from .models import (
    COMPETITIVE_LABELS,
    CompetitiveAnalysisResult,
    CompetitiveMeta,
    CompetitorContent,
    CompetitorMetrics,
    ContentComparison,
    ContentMetrics,
    ContentNote,
    ContentScore,
    MetricComparison,
    rate,
)
from .structure import count_tags

logger = logging.getLogger(__name__)

# Word counts within ±10 % of the competitor average are competitive.
WORD_COUNT_TOLERANCE = 0.1


def measure_content(content: str) -> ContentMetrics:
    document = parse(content or "")
    lists = count_tags(document.html, "ul", "ol")
    return ContentMetrics(
        word_count=document.word_count,
        heading_count=sum(len(texts) for texts in document.headings.values()),
        image_count=len(document.images),
        list_count=lists["ul"] + lists["ol"],
    )


def competitor_averages(competitors: List[CompetitorMetrics]) -> ContentMetrics:
    if not competitors:
        return ContentMetrics()
    n = len(competitors)
    return ContentMetrics(
        word_count=round(sum(c.word_count for c in competitors) / n),
        heading_count=round(sum(c.heading_count for c in competitors) / n),
        image_count=round(sum(c.image_count for c in competitors) / n),
        list_count=round(sum(c.list_count for c in competitors) / n),
    )


def _at_least_average(value: int, average: int) -> MetricComparison:
    return MetricComparison(
        value=value,
        average=average,
        difference=value - average,
        status="competitive" if value >= average else "below",
    )


def compare_to_competitors(yours: ContentMetrics, averages: ContentMetrics) -> ContentComparison:
    words, average = yours.word_count, averages.word_count
    if average * (1 - WORD_COUNT_TOLERANCE) <= words <= average * (1 + WORD_COUNT_TOLERANCE):
        status = "competitive"
    elif words > average:
        status = "longer"
    else:
        status = "shorter"

    return ContentComparison(
        word_count=MetricComparison(
            value=words,
            average=average,
            difference=words - average,
            status=status,
            percentage=round(words / average * 100) if average > 0 else 100,
        ),
        heading_count=_at_least_average(yours.heading_count, averages.heading_count),
        image_count=_at_least_average(yours.image_count, averages.image_count),
        list_count=_at_least_average(yours.list_count, averages.list_count),
    )


def competitive_insights(comparison: ContentComparison) -> List[ContentNote]:
    insights = []
    words = comparison.word_count
    if words.status == "shorter":
        insights.append(ContentNote(
            type="warning", category="length", title="Content Length Below Average",
            message=f"Your content is {abs(words.difference)} words shorter than competitor average. "
                    f"Consider expanding."))
    elif words.status == "longer":
        insights.append(ContentNote(
            type="success", category="length", title="Content Length Above Average",
            message=f"Your content is {words.difference} words longer than competitors."))
    else:
        insights.append(ContentNote(
            type="success", category="length", title="Competitive Content Length",
            message="Your content length matches competitor standards."))

    if comparison.heading_count.status == "below":
        insights.append(ContentNote(
            type="info", category="structure", title="Fewer Headings Than Competitors",
            message=f"Add {abs(comparison.heading_count.difference)} more headings to match competitor structure."))
    if comparison.image_count.status == "below":
        insights.append(ContentNote(
            type="info", category="media", title="Fewer Images Than Competitors",
            message=f"Consider adding {abs(comparison.image_count.difference)} more images "
                    f"to match competitor visual content."))
    if comparison.list_count.status == "below":
        insights.append(ContentNote(
            type="info", category="formatting", title="Fewer Lists Than Competitors",
            message="Competitors use more lists. Consider formatting information as bulleted or numbered lists."))

    if all(i.type == "success" for i in insights):
        insights.append(ContentNote(
            type="success", category="overall", title="Competitive Content",
            message="Your content is competitive with top-ranking pages!"))
    return insights


def calculate_competitive_score(comparison: ContentComparison) -> ContentScore:
    """Word count 40, headings 20, images 20 and lists 20 points."""
    words = comparison.word_count
    if words.status == "competitive":
        score = 40
    elif words.status == "longer":
        score = 35
    elif words.percentage and words.percentage >= 70:
        score = 25
    else:
        score = 10

    for metric, tolerance in ((comparison.heading_count, -2), (comparison.image_count, -2),
                              (comparison.list_count, -1)):
        if metric.status == "competitive":
            score += 20
        elif metric.difference >= tolerance:
            score += 15
        else:
            score += 5
    return rate(score, COMPETITIVE_LABELS, "Below Average")


def _as_competitor(item: Union[CompetitorContent, dict]) -> CompetitorContent:
    return item if isinstance(item, CompetitorContent) else CompetitorContent.model_validate(item)


def analyze_competitive_content(content: str,
                                competitors: Optional[Iterable[Union[CompetitorContent, dict]]] = None
                                ) -> CompetitiveAnalysisResult:
    """
    Compares word, heading, image and list counts with the average of
    competing pages. Without competitors the averages are all zero.

    Args:
        content (str): Your HTML or plain text.
        competitors: CompetitorContent or dicts with title, content and url.
    """
    yours = measure_content(content)
    measured = []
    for competitor in (_as_competitor(c) for c in (competitors or [])):
        metrics = measure_content(competitor.content)
        measured.append(CompetitorMetrics(title=competitor.title, url=competitor.url, **metrics.model_dump()))

    averages = competitor_averages(measured)
    comparison = compare_to_competitors(yours, averages)

    logger.debug("Compared against %d competitors: %s length", len(measured), comparison.word_count.status)
    return CompetitiveAnalysisResult(
        meta=CompetitiveMeta(timestamp=datetime.now(timezone.utc).isoformat(), competitors_analyzed=len(measured)),
        your_content=yours,
        competitors=measured,
        averages=averages,
        comparison=comparison,
        insights=competitive_insights(comparison),
        score=calculate_competitive_score(comparison),
    )
