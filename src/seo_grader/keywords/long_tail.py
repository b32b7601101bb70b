# src/seo_grader/keywords/long_tail.py
import logging
import re
from typing import Dict, List, Optional, Sequence, Set, Tuple

from seo_grader.utils.config_loader import get_nested_config
from seo_grader.utils.stopwords import ALL_STOPWORDS

from .models import LongTailByIntent, LongTailComponents, LongTailPhrase, LongTailResult
from .suggestions import clean_token, content_text, is_code_word, parse_keyword_list, vowel_ratio

logger = logging.getLogger(__name__)

MIN_LONG_TAIL_TEXT = 100
MIN_PHRASE_WORDS = 2
MAX_PHRASE_WORDS = 5

_QUESTION_START_RE = re.compile(r'^(how|what|why|when|where|which|who)')
_DIGITS_RE = re.compile(r'\d+')

# Checked in order; the first match wins and anything unmatched is informational.
INTENT_PATTERNS: Tuple[Tuple[str, re.Pattern], ...] = (
    ("informational", re.compile(r'^(how|what|why|when|where|which|who|guide|tutorial|learn)')),
    ("commercial", re.compile(r'(best|top|review|compare|vs|versus|alternative)')),
    ("transactional", re.compile(r'(buy|price|cost|cheap|deal|discount|order|purchase)')),
    ("navigational", re.compile(r'(login|sign in|register|download|app|software)')),
)


def phrase_tokens(text: str, stopwords=ALL_STOPWORDS) -> List[str]:
    tokens = (clean_token(w) for w in text.lower().split())
    return [t for t in tokens if len(t) > 2 and t not in stopwords]


def is_valid_phrase(phrase: str, stopwords=ALL_STOPWORDS) -> bool:
    if vowel_ratio(phrase) < 0.2:
        return False
    words = phrase.split(" ")
    if all(w in stopwords for w in words):
        return False
    return not any(is_code_word(w) for w in words)


def extract_ngrams(tokens: List[str], min_words: int = MIN_PHRASE_WORDS,
                   max_words: int = MAX_PHRASE_WORDS) -> Dict[str, List[int]]:
    """Maps every valid n-gram seen at least twice to the token offsets where it starts."""
    occurrences: Dict[str, List[int]] = {}
    for n in range(min_words, max_words + 1):
        for i in range(len(tokens) - n + 1):
            phrase = " ".join(tokens[i:i + n])
            if phrase in occurrences:
                occurrences[phrase].append(i)
            elif is_valid_phrase(phrase):
                occurrences[phrase] = [i]
    return {phrase: starts for phrase, starts in occurrences.items() if len(starts) >= 2}


def seed_adjacency(tokens: List[str], starts: List[int], length: int, seed_terms: Set[str], window: int) -> int:
    """Number of occurrences with a seed term within `window` tokens on either side."""
    if not seed_terms:
        return 0
    hits = 0
    for start in starts:
        context = tokens[max(0, start - window):start] + tokens[start + length:start + length + window]
        if seed_terms.intersection(context):
            hits += 1
    return hits


def score_phrase(phrase: str, frequency: int, seeds: Sequence[str], adjacency_hits: int) -> LongTailPhrase:
    words = phrase.split(" ")

    if seeds:
        if any(seed in phrase for seed in seeds):
            relevance = 40
        else:
            partial = sum(1 for seed in seeds if any(sw in words for sw in seed.split()))
            relevance = min(partial * 10, 20)
    else:
        relevance = 20

    components = LongTailComponents(
        frequency=min(frequency * 5, 30),
        relevance=relevance,
        length=min(len(words) * 5, 20),
        specificity=(5 if _DIGITS_RE.search(phrase) else 0) + (5 if _QUESTION_START_RE.match(phrase) else 0),
        adjacency=min(adjacency_hits * 2, 10),
    )
    total = (components.frequency + components.relevance + components.length
             + components.specificity + components.adjacency)
    return LongTailPhrase(phrase=phrase, total_score=total, components=components, frequency=frequency)


def categorize_by_intent(phrases: List[LongTailPhrase]) -> LongTailByIntent:
    by_intent = LongTailByIntent()
    for item in phrases:
        text = item.phrase.lower().strip()
        intent = next((name for name, pattern in INTENT_PATTERNS if pattern.search(text)), "informational")
        getattr(by_intent, intent).append(item)
    return by_intent


def generate_long_tail_keywords(content: str, seed_keywords: Optional[List[str]] = None,
                                max_suggestions: Optional[int] = None,
                                window: Optional[int] = None) -> LongTailResult:
    """
    Long-tail phrase suggestions from repeated 2-5 word n-grams in the content.

    Seeds raise a phrase's relevance when contained in it and its adjacency
    score when they occur within `window` tokens of it. With `seed_keywords=None`
    every phrase gets the unseeded base relevance; an explicitly empty seed
    list yields an empty result.
    """
    seeds = parse_keyword_list(seed_keywords, lowercase=True)
    if seed_keywords is not None and not seeds:
        return LongTailResult()
    if max_suggestions is None:
        max_suggestions = get_nested_config("keywords.max_long_tail", 20)
    if window is None:
        window = get_nested_config("keywords.long_tail_window", 4)

    text = content_text(content)
    if len(text) < MIN_LONG_TAIL_TEXT:
        logger.debug("Long-tail generation skipped: %d characters of text", len(text))
        return LongTailResult(seed_keywords=seeds)

    tokens = phrase_tokens(text)
    seed_terms = {clean_token(w) for seed in seeds for w in seed.split()} - {""}
    ngrams = extract_ngrams(tokens)

    scored = [
        score_phrase(phrase, len(starts), seeds,
                     seed_adjacency(tokens, starts, len(phrase.split(" ")), seed_terms, window))
        for phrase, starts in ngrams.items()
    ]
    scored = [s for s in scored if s.total_score > 0]
    scored.sort(key=lambda s: (-s.total_score, -s.frequency, s.phrase))
    suggestions = scored[:max_suggestions]

    by_intent = categorize_by_intent(suggestions)
    logger.debug("Long-tail: %d candidates, %d kept", len(ngrams), len(suggestions))

    return LongTailResult(
        total_phrases=len(suggestions),
        suggestions=suggestions,
        by_intent=by_intent,
        seed_keywords=seeds,
    )
