# src/seo_grader/keywords/suggestions.py
import logging
import re
from collections import Counter
from typing import Dict, Iterable, List, Optional, Union

from seo_grader.dom.parser import parse
from seo_grader.readability.language_config import detect_language
from seo_grader.utils.stopwords import ALL_STOPWORDS, stopwords_for

from .models import KeywordSuggestion

logger = logging.getLogger(__name__)

CODE_PATTERNS: Dict[str, re.Pattern] = {
    "html_attribute": re.compile(r'^(href|src|alt|title|class|id|name|value|data-[\w-]+)$', re.IGNORECASE),
    "camel_case": re.compile(r'^[a-z]+[A-Z][a-zA-Z0-9]*$'),
    "snake_case": re.compile(r'^[a-z]+_[a-z0-9_]+$'),
    "kebab_case": re.compile(r'^[a-z]+(-[a-z0-9]+)+$'),
    "css_unit": re.compile(r'^(px|em|rem|pt|cm|mm|in|pc|ex|ch|vw|vh|vmin|vmax|%)$', re.IGNORECASE),
    "css_property": re.compile(
        r'^(background|color|border|margin|padding|font|width|height|display|position|flex|grid)$', re.IGNORECASE),
    "js_keyword": re.compile(
        r'^(function|const|let|var|return|if|else|for|while|do|switch|case|try|catch|finally|async|await|class'
        r'|extends|constructor)$', re.IGNORECASE),
    "numeric_only": re.compile(r'^\d+$'),
    "single_char": re.compile(r'^.$'),
    "url_like": re.compile(r'^(http|https|www|ftp|\.com|\.org|\.net|\.edu)$', re.IGNORECASE),
    "minified": re.compile(r'^[a-z]{1,2}\d+$|^_[a-zA-Z0-9]+$'),
}

_VOWELS_RE = re.compile(r'[aeiouyαειουωάέίόύώή]', re.IGNORECASE)
_HEX_RE = re.compile(r'^#?[0-9a-f]{3}$|^#?[0-9a-f]{6}$', re.IGNORECASE)
_REPEATED_RE = re.compile(r'(.)\1{2,}')
_TOKEN_SPLIT_RE = re.compile(r'[\s\-_/]+')
_NON_WORD_RE = re.compile(r'[^\w]')

MIN_SUGGESTION_TEXT = 50


def content_text(content: str) -> str:
    """Visible text of HTML content; plain text passes through."""
    if not content or not content.strip():
        return ""
    document = parse(content)
    return document.text if document.text.strip() else content


def parse_keyword_list(keywords: Union[str, Iterable[str], None], lowercase: bool = False) -> List[str]:
    """Accepts a comma separated string or an iterable; trims and drops empties."""
    if not keywords:
        return []
    items = keywords.split(",") if isinstance(keywords, str) else keywords
    cleaned = [str(k).strip() for k in items if k is not None]
    if lowercase:
        cleaned = [k.lower() for k in cleaned]
    return [k for k in cleaned if k]


def is_code_word(word: str) -> bool:
    if not word:
        return True
    return any(pattern.search(word) for pattern in CODE_PATTERNS.values())


def vowel_ratio(text: str) -> float:
    if not text:
        return 0.0
    return len(_VOWELS_RE.findall(text)) / len(text)


def is_real_language_word(word: str) -> bool:
    """Rejects short tokens, consonant soup, hex colours and runs of a repeated character."""
    if not word or len(word) < 3:
        return False
    if vowel_ratio(word) < 0.25:
        return False
    if _HEX_RE.match(word):
        return False
    if _REPEATED_RE.search(word):
        return False
    return True


def clean_token(token: str) -> str:
    return _NON_WORD_RE.sub("", token)


def candidate_words(text: str, stopwords=ALL_STOPWORDS) -> List[str]:
    words = []
    for raw in _TOKEN_SPLIT_RE.split(text.lower()):
        word = clean_token(raw)
        if len(word) < 3 or word in stopwords:
            continue
        if is_code_word(word) or not is_real_language_word(word):
            continue
        words.append(word)
    return words


def extract_phrases(words: List[str], min_count: int = 2) -> Counter:
    """2- and 3-word phrases over consecutive candidate words, kept when seen `min_count` times."""
    phrases = Counter(" ".join(pair) for pair in zip(words, words[1:]))
    phrases.update(" ".join(triple) for triple in zip(words, words[1:], words[2:]))
    return Counter({phrase: count for phrase, count in phrases.items() if count >= min_count})


def relevance_score(frequency: int, total_words: int, keyword: str) -> float:
    """Frequency (up to 60) plus a length bonus and a phrase bonus, capped at 100."""
    frequency_score = min((frequency / (total_words * 0.01)) * 60, 60) if total_words else 0
    length = len(keyword)
    if length > 8:
        length_bonus = 15
    elif length >= 6:
        length_bonus = 5
    else:
        length_bonus = 0
    phrase_bonus = 10 if " " in keyword else 0
    return min(frequency_score + length_bonus + phrase_bonus, 100)


def suggest_keywords(content: str, max_suggestions: int = 10, language: Optional[str] = None, *,
                     stopwords=None) -> List[KeywordSuggestion]:
    """
    Suggests keywords found in the content, ranked by relevance then frequency.

    Args:
        content (str): HTML or plain text.
        max_suggestions (int): Number of suggestions to return.
        language (Optional[str]): Content language picking the stop-word list; detected when omitted.
        stopwords: Explicit stop-word set, overriding the language's list.
    """
    text = content_text(content)
    if len(text) < MIN_SUGGESTION_TEXT:
        return []

    language = language or detect_language(text)
    if stopwords is None:
        stopwords = stopwords_for(language)
    words = candidate_words(text, stopwords)
    if not words:
        return []

    frequencies = Counter(words)
    frequencies.update(extract_phrases(words))

    suggestions = [
        KeywordSuggestion(
            keyword=keyword,
            frequency=frequency,
            relevance=int(round(relevance_score(frequency, len(words), keyword))),
            type="phrase" if " " in keyword else "word",
        )
        for keyword, frequency in frequencies.items()
    ]
    suggestions.sort(key=lambda s: (-s.relevance, -s.frequency, s.keyword))

    logger.debug("Suggested %d keywords from %d candidate words (language=%s)",
                 min(len(suggestions), max_suggestions), len(words), language)
    return suggestions[:max_suggestions]
