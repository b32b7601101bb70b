# src/seo_grader/readability/text_analysis.py
"""
Text statistics shared by the readability formulas, the structure
analysis and the SEO assessments. All functions are pure.
"""
import re
import statistics
from typing import Iterable, List, Optional

from .language_config import LanguageConfig

_WORD_RE = re.compile(r'\b[a-zA-Z0-9Ͱ-Ͽἀ-῿]+\b')
_SENTENCE_BREAK_RE = re.compile(r'[.!?]+\s+')
_PARAGRAPH_BREAK_RE = re.compile(r'\n\s*\n')


def normalize_whitespace(text: str) -> str:
    """
    Collapses runs of spaces inside paragraphs and keeps blank-line
    paragraph boundaries as a single '\\n\\n'. Leading and trailing
    whitespace is dropped.
    """
    if not text:
        return ""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    blocks = (" ".join(block.split()) for block in _PARAGRAPH_BREAK_RE.split(text))
    return "\n\n".join(block for block in blocks if block)


def tokenize_words(text: str) -> List[str]:
    if not text:
        return []
    return _WORD_RE.findall(text)


def split_sentences(text: str, abbreviations: Iterable[str] = ()) -> List[str]:
    """
    Splits after runs of . ! ? followed by whitespace.

    A single '.' after a known abbreviation (Dr., e.g.) does not end a sentence.
    Text without any terminal punctuation is one sentence.
    """
    if not text or not text.strip():
        return []

    abbreviations = frozenset(abbreviations)
    sentences = []
    start = 0
    for match in _SENTENCE_BREAK_RE.finditer(text):
        tokens = text[start:match.start()].split()
        if (abbreviations and tokens and match.group().strip() == "."
                and tokens[-1].lower().rstrip(".") in abbreviations):
            continue
        sentence = text[start:match.end()].strip()
        if sentence:
            sentences.append(sentence)
        start = match.end()

    tail = text[start:].strip()
    if tail:
        sentences.append(tail)
    return sentences


def split_paragraphs(text: str) -> List[str]:
    if not text:
        return []
    paragraphs = (p.strip() for p in _PARAGRAPH_BREAK_RE.split(text))
    return [p for p in paragraphs if p]


def count_syllables(word: str, lang: LanguageConfig) -> int:
    """Vowel-group heuristic; English drops a silent trailing 'e'. Minimum 1."""
    clean_word = (word or "").strip().lower()
    if not clean_word:
        return 0
    count = len(lang.vowel_groups.findall(clean_word))
    if lang.code == "en" and clean_word.endswith("e") and count > 1:
        count -= 1
    return max(count, 1)


def is_complex_word(word: str, lang: LanguageConfig) -> bool:
    return count_syllables(word, lang) >= lang.complex_threshold


def count_total_syllables(words: List[str], lang: LanguageConfig) -> int:
    return sum(count_syllables(w, lang) for w in words)


def count_complex_words(words: List[str], lang: LanguageConfig) -> int:
    return sum(1 for w in words if is_complex_word(w, lang))


def calculate_vocabulary_richness(words: List[str]) -> float:
    if not words:
        return 0.0
    return len({w.lower() for w in words}) / len(words)


def calculate_median(numbers: List[float]) -> float:
    if not numbers:
        return 0
    return statistics.median(numbers)


def count_characters(text: str) -> int:
    """Non-whitespace characters."""
    return len(re.sub(r'\s', '', text or ""))


def count_letters(words: List[str]) -> int:
    return sum(len(w) for w in words)


def safe_ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


def _measure(sentences: List[str]) -> List[dict]:
    return [{"text": s, "length": len(tokenize_words(s))} for s in sentences]


def get_longest_sentence(sentences: List[str]) -> Optional[dict]:
    measured = _measure(sentences)
    if not measured:
        return None
    # max() keeps the first of equally long sentences
    return max(measured, key=lambda m: m["length"])


def get_shortest_sentence(sentences: List[str]) -> Optional[dict]:
    measured = _measure(sentences)
    if not measured:
        return None
    non_empty = [m for m in measured if m["length"] > 0] or measured
    return min(non_empty, key=lambda m: m["length"])


def filter_sentences_by_length(sentences: List[str], threshold: int, comparison: str) -> List[dict]:
    """comparison is 'above' (strictly longer) or 'below' (strictly shorter)."""
    measured = _measure(sentences)
    if comparison == "above":
        return [m for m in measured if m["length"] > threshold]
    return [m for m in measured if m["length"] < threshold]


def create_length_distribution(lengths: List[int], bucket_size: int) -> List[dict]:
    """Histogram with labels like '0-4'; empty buckets are omitted."""
    if not lengths:
        return []
    buckets = []
    for start in range(0, max(lengths) + 1, bucket_size):
        end = start + bucket_size - 1
        count = sum(1 for length in lengths if start <= length <= end)
        if count:
            buckets.append({"range": f"{start}-{end}", "count": count})
    return buckets


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."
