# src/seo_grader/keywords/lsi.py
"""
Related-term ("LSI") suggestions. This is a local co-occurrence heuristic
over the document's own vocabulary, not a singular value decomposition.
"""
import logging
import re
from typing import List, Optional

from seo_grader.readability.language_config import detect_language
from seo_grader.utils.config_loader import get_nested_config

from .models import LSIKeyword, LSIResult, LSISummary
from .suggestions import content_text, parse_keyword_list, suggest_keywords

logger = logging.getLogger(__name__)

MIN_LSI_TEXT = 200
UNSEEDED_LSI_SCORE = 50


def split_plain_sentences(text: str) -> List[str]:
    return [s for s in re.split(r'[.!?]+', text) if s.strip()]


def calculate_lsi_score(candidate: str, main_keywords: List[str], sentences: List[str]) -> int:
    """+10 for every sentence holding both the candidate and a main keyword, capped at 100."""
    if not main_keywords:
        return UNSEEDED_LSI_SCORE
    candidate = candidate.lower()
    mains = [k.lower() for k in main_keywords]
    score = 0
    for sentence in sentences:
        lowered = sentence.lower()
        if candidate in lowered and any(main in lowered for main in mains):
            score += 10
    return min(100, score)


def generate_lsi_keywords(content: str, main_keywords: Optional[List[str]] = None,
                          max_suggestions: Optional[int] = None, language: Optional[str] = None) -> LSIResult:
    """
    Candidate related terms drawn from the content's keyword suggestions,
    main keywords removed, ranked by co-occurrence score then frequency.

    With `main_keywords=None` every candidate scores the neutral 50 and
    frequency decides; an explicitly empty list yields an empty result.
    `language` picks the stop-word list and is detected from the text when omitted.
    """
    mains = parse_keyword_list(main_keywords)
    if main_keywords is not None and not mains:
        return LSIResult()
    if max_suggestions is None:
        max_suggestions = get_nested_config("keywords.max_lsi", 15)

    text = content_text(content)
    if len(text) < MIN_LSI_TEXT:
        logger.debug("LSI generation skipped: %d characters of text", len(text))
        return LSIResult(main_keywords=mains)

    language = language or detect_language(text)
    mains_lower = {k.lower() for k in mains}
    candidates = [s for s in suggest_keywords(content, max_suggestions * 2, language)
                  if s.keyword.lower() not in mains_lower]
    sentences = split_plain_sentences(text)

    scored = [
        LSIKeyword(
            keyword=c.keyword,
            frequency=c.frequency,
            relevance=c.relevance,
            lsi_score=calculate_lsi_score(c.keyword, mains, sentences),
            type=c.type,
        )
        for c in candidates
    ]
    scored.sort(key=lambda k: (-k.lsi_score, -k.frequency, k.keyword))
    top = scored[:max_suggestions]

    summary = LSISummary(
        phrases=sum(1 for k in top if k.type == "phrase"),
        words=sum(1 for k in top if k.type == "word"),
        avg_lsi_score=sum(k.lsi_score for k in top) / len(top) if top else 0.0,
    )
    logger.debug("LSI: %d suggestions, average score %.1f", len(top), summary.avg_lsi_score)

    return LSIResult(
        total_suggestions=len(top),
        language=language,
        main_keywords=mains,
        lsi_keywords=top,
        summary=summary,
    )
