# src/seo_grader/keywords/difficulty.py
"""
Keyword difficulty as a local heuristic.

Scores start at 50 and move with the keyword's length, its wording
(generic, commercial, question, numbers, location) and whether the
supplied content already covers it. No search-engine, SERP or market
data is consulted, so the score is a writing aid and not a live
competition signal.
"""
import logging
import re
from typing import List, Optional, Union

from .density import count_keyword
from .models import DifficultyDistribution, DifficultyEstimate, DifficultyFactors, DifficultyResult
from .suggestions import content_text, parse_keyword_list

logger = logging.getLogger(__name__)

BASE_DIFFICULTY = 50

GENERIC_TERMS = frozenset({"best", "top", "good", "great", "make", "get", "free"})
COMMERCIAL_TERMS = frozenset({"buy", "price", "cost", "cheap", "deal", "sale", "discount"})
QUESTION_WORDS = ("how", "what", "why", "when", "where", "which", "who")
LOCATION_WORDS = frozenset({"near", "in", "at", "local", "city", "town"})

# (upper bound exclusive, level, colour)
DIFFICULTY_LEVELS = (
    (30, "easy", "#10b981"),
    (60, "medium", "#f59e0b"),
    (80, "hard", "#ef4444"),
)
VERY_HARD = ("very hard", "#991b1b")

_RECOMMENDATIONS = {
    "easy": '"{kw}" appears to be a good target - relatively low competition expected.',
    "medium": '"{kw}" has moderate difficulty. Create quality content and build backlinks.',
    "hard": '"{kw}" is competitive. Consider targeting long-tail variations.',
    "very hard": '"{kw}" is highly competitive. Focus on long-tail alternatives first.',
}


def difficulty_level(score: int):
    for upper, level, color in DIFFICULTY_LEVELS:
        if score < upper:
            return level, color
    return VERY_HARD


def calculate_difficulty(keyword: str, text: str = "") -> DifficultyEstimate:
    words = keyword.strip().lower().split()
    factors = DifficultyFactors()

    if len(words) == 1:
        factors.length = 25
    elif len(words) == 2:
        factors.length = 10
    elif len(words) >= 4:
        factors.length = -15

    if any(w in GENERIC_TERMS for w in words):
        factors.generic = 15
    if any(w in COMMERCIAL_TERMS for w in words):
        factors.commercial = 10
    if keyword.strip().lower().startswith(QUESTION_WORDS):
        factors.question = -10
    if re.search(r'\d+', keyword):
        factors.numbers = -10
    if any(w in LOCATION_WORDS for w in words):
        factors.location = -5

    # Coverage in the supplied content: present -5, absent +5.
    if text:
        factors.content = -5 if count_keyword(text, keyword) > 0 else 5

    raw = BASE_DIFFICULTY + sum(factors.model_dump().values())
    score = int(max(0, min(100, raw)))
    level, color = difficulty_level(score)

    return DifficultyEstimate(
        keyword=keyword,
        score=score,
        level=level,
        color=color,
        factors=factors,
        recommendation=_RECOMMENDATIONS[level].format(kw=keyword),
    )


def estimate_keyword_difficulty(keywords: Union[str, List[str]], content: Optional[str] = "") -> DifficultyResult:
    keyword_list = parse_keyword_list(keywords)
    if not keyword_list:
        return DifficultyResult()

    text = content_text(content or "")
    estimates = [calculate_difficulty(k, text) for k in keyword_list]
    ordered = sorted(estimates, key=lambda e: e.score)

    distribution = DifficultyDistribution(
        easy=sum(1 for e in estimates if e.level == "easy"),
        medium=sum(1 for e in estimates if e.level == "medium"),
        hard=sum(1 for e in estimates if e.level == "hard"),
        very_hard=sum(1 for e in estimates if e.level == "very hard"),
    )
    logger.debug("Difficulty: %d easy, %d medium, %d hard, %d very hard",
                 distribution.easy, distribution.medium, distribution.hard, distribution.very_hard)

    return DifficultyResult(
        total_keywords=len(estimates),
        estimates=estimates,
        easiest=ordered[:3],
        hardest=list(reversed(ordered[-3:])),
        distribution=distribution,
    )
