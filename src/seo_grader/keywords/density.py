# src/seo_grader/keywords/density.py
"""
Keyword density: the whole-word matcher shared by the analyzer and the
rules, and the detailed per-keyword density analysis.

Tokenizer: `word_count` is `len(text.split())`, so punctuation stays
attached to its word ("great." is one word). Matching is case-insensitive,
treats '-', '_' and '/' as spaces and lets multi-word keywords span any
run of whitespace.
"""
import logging
import re
from typing import Iterable, List, Optional, Union

from .models import (
    DensityAnalysis,
    DensityRecommendation,
    DensityResult,
    DensitySummary,
    KeywordDensity,
    KeywordPosition,
    SectionDistribution,
    SectionKeywordCount,
)
from .suggestions import content_text, parse_keyword_list

logger = logging.getLogger(__name__)

_SEPARATOR_RE = re.compile(r'[-_/]')

SECTION_NAMES = ("Introduction", "Early Content", "Middle Content", "Conclusion")


def normalize_for_matching(text: str) -> str:
    return _SEPARATOR_RE.sub(" ", (text or "").lower())


def keyword_pattern(keyword: str) -> Optional[re.Pattern]:
    """Whole-word, case-insensitive pattern for a keyword, or None for a blank keyword."""
    words = normalize_for_matching(keyword).split()
    if not words:
        return None
    body = r'\s+'.join(re.escape(w) for w in words)
    return re.compile(rf'(?<!\w){body}(?!\w)', re.IGNORECASE)


def keyword_word_count(keyword: str) -> int:
    return len(normalize_for_matching(keyword).split())


def count_keyword(text: str, keyword: str) -> int:
    pattern = keyword_pattern(keyword)
    if pattern is None or not text:
        return 0
    return len(pattern.findall(normalize_for_matching(text)))


def calculate_keyword_density(text: str, keyword: str) -> KeywordDensity:
    """
    Count and density of one keyword in `text`.

    density = count * words_in_keyword / word_count * 100, rounded to two decimals.
    Empty text or keyword yields zeros.
    """
    if not text or not keyword or not keyword.strip():
        return KeywordDensity(keyword=keyword or "")

    count = count_keyword(text, keyword)
    word_count = len(text.split())
    density = (count * keyword_word_count(keyword) / word_count * 100) if word_count else 0.0
    return KeywordDensity(keyword=keyword, count=count, density=round(density, 2), word_count=word_count)


def calculate_all_keyword_densities(text: str, keywords: Iterable[str]) -> List[KeywordDensity]:
    return [calculate_keyword_density(text, k) for k in (keywords or [])]


def density_status(density: float) -> str:
    if density < 1:
        return "underused"
    if density > 3:
        return "overused"
    return "optimal"


def density_bucket(density: float) -> str:
    if density >= 2:
        return "high"
    if density >= 1:
        return "medium"
    return "low"


def _density_result(text: str, keyword: str, total_words: int) -> DensityResult:
    pattern = keyword_pattern(keyword)
    normalized = normalize_for_matching(text)
    matches = list(pattern.finditer(normalized)) if pattern else []
    count = len(matches)
    density = round(count * keyword_word_count(keyword) / total_words * 100, 2) if total_words else 0.0
    status = density_status(density)

    return DensityResult(
        keyword=keyword,
        count=count,
        density=density,
        status=status,
        bucket=density_bucket(density),
        is_optimal=status == "optimal",
        positions=[
            KeywordPosition(index=m.start(), percentage=round(m.start() / len(text) * 100, 2))
            for m in matches
        ],
        type="phrase" if keyword_word_count(keyword) > 1 else "word",
    )


def calculate_distribution(text: str, keywords: List[str]) -> List[SectionDistribution]:
    """Keyword counts in four equal character sections; the last one absorbs the remainder."""
    size = len(text) // 4
    bounds = [(0, size), (size, size * 2), (size * 2, size * 3), (size * 3, len(text))]

    distribution = []
    for name, (start, end) in zip(SECTION_NAMES, bounds):
        section_text = text[start:end]
        counts = [SectionKeywordCount(keyword=k, count=count_keyword(section_text, k)) for k in keywords]
        distribution.append(SectionDistribution(
            section=name,
            total_keywords=sum(c.count for c in counts),
            keyword_counts=counts,
        ))
    return distribution


def density_recommendations(results: List[DensityResult]) -> List[DensityRecommendation]:
    recommendations = []
    for r in results:
        if r.status == "underused":
            recommendations.append(DensityRecommendation(
                type="warning", keyword=r.keyword, action="increase",
                message=f'"{r.keyword}" is underused ({r.density}%). '
                        f'Try to use it more naturally in your content.'))
        elif r.status == "overused":
            recommendations.append(DensityRecommendation(
                type="critical", keyword=r.keyword, action="decrease",
                message=f'"{r.keyword}" is overused ({r.density}%). This may be considered keyword stuffing.'))
        else:
            recommendations.append(DensityRecommendation(
                type="success", keyword=r.keyword, action="maintain",
                message=f'"{r.keyword}" has optimal density ({r.density}%).'))
    return recommendations


def analyze_keyword_density(content: str, keywords: Union[str, List[str]]) -> DensityAnalysis:
    keyword_list = parse_keyword_list(keywords)
    text = content_text(content)
    total_words = len(text.split())

    if not keyword_list or total_words == 0:
        logger.debug("Density analysis skipped: %d keywords, %d words", len(keyword_list), total_words)
        return DensityAnalysis(total_words=total_words, total_keywords=len(keyword_list))

    results = [_density_result(text, k, total_words) for k in keyword_list]
    summary = DensitySummary(
        optimal=sum(1 for r in results if r.status == "optimal"),
        underused=sum(1 for r in results if r.status == "underused"),
        overused=sum(1 for r in results if r.status == "overused"),
    )
    logger.debug("Density analysis: %d optimal, %d underused, %d overused",
                 summary.optimal, summary.underused, summary.overused)

    return DensityAnalysis(
        total_words=total_words,
        total_keywords=len(keyword_list),
        density_results=results,
        distribution=calculate_distribution(text, keyword_list),
        recommendations=density_recommendations(results),
        summary=summary,
    )
