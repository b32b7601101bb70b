# src/seo_grader/readability/scoring.py
import re
from typing import List

from seo_grader.dom.parser import calculate_reading_time

from . import text_analysis as ta
from .formulas import composite_label, flesch_reading_ease, interpret_flesch_score
from .language_config import LanguageConfig, get_language_config
from .models import (
    AudienceFit,
    EducationStage,
    FleschSnapshot,
    LengthBucket,
    ParagraphAnalysis,
    ParagraphDetail,
    ReadabilityNote,
    ReadabilitySummary,
    ReadabilityTotals,
    ReadingLevels,
    SentenceAnalysis,
    SentenceSample,
    StructureAnalysis,
)

LONG_SENTENCE_WORDS = 25
SHORT_SENTENCE_WORDS = 5
LONG_PARAGRAPH_WORDS = 150
SHORT_PARAGRAPH_WORDS = 30

_EDUCATION_STAGES = (
    ("Elementary School", "1st-5th grade", 1, 5),
    ("Middle School", "6th-8th grade", 6, 8),
    ("High School", "9th-12th grade", 9, 12),
    ("College", "Undergraduate", 13, 16),
    ("Graduate", "Graduate level", 17, 20),
)

_SNAPSHOT_DESCRIPTIONS = {
    "Very Easy": "5th grade level",
    "Easy": "6th grade level",
    "Fairly Easy": "7th grade level",
    "Standard": "8th-9th grade level",
    "Fairly Difficult": "10th-12th grade level",
    "Difficult": "College level",
    "Very Difficult": "College graduate level",
}


def calculate_totals(text: str, lang: LanguageConfig) -> ReadabilityTotals:
    words = ta.tokenize_words(text)
    sentences = ta.split_sentences(text, lang.abbreviations)
    syllables = ta.count_total_syllables(words, lang)
    complex_words = ta.count_complex_words(words, lang)

    return ReadabilityTotals(
        words=len(words),
        sentences=len(sentences),
        paragraphs=len(ta.split_paragraphs(text)),
        characters=ta.count_characters(text),
        letters=ta.count_letters(words),
        syllables=syllables,
        complex_words=complex_words,
        average_sentence_length=ta.safe_ratio(len(words), len(sentences)),
        average_syllables_per_word=ta.safe_ratio(syllables, len(words)),
        complex_word_ratio=ta.safe_ratio(complex_words, len(words)),
        vocabulary_richness=ta.calculate_vocabulary_richness(words),
    )


def analyze_sentences(text: str, lang: LanguageConfig) -> SentenceAnalysis:
    sentences = ta.split_sentences(text, lang.abbreviations)
    lengths = [len(ta.tokenize_words(s)) for s in sentences]
    longest = ta.get_longest_sentence(sentences)
    shortest = ta.get_shortest_sentence(sentences)

    return SentenceAnalysis(
        count=len(sentences),
        average_length=sum(lengths) / len(lengths) if lengths else 0.0,
        median_length=ta.calculate_median(lengths),
        longest_sentence=SentenceSample(**longest) if longest else None,
        shortest_sentence=SentenceSample(**shortest) if shortest else None,
        long_sentences=[SentenceSample(**s) for s in
                        ta.filter_sentences_by_length(sentences, LONG_SENTENCE_WORDS, "above")],
        short_sentences=[SentenceSample(**s) for s in
                         ta.filter_sentences_by_length(sentences, SHORT_SENTENCE_WORDS, "below")],
        distribution=[LengthBucket(**b) for b in ta.create_length_distribution(lengths, 5)],
    )


def _paragraph_detail(index: int, paragraph: str, lang: LanguageConfig) -> ParagraphDetail:
    words = ta.tokenize_words(paragraph)
    sentences = ta.split_sentences(paragraph, lang.abbreviations)
    avg_sentence_length = len(words) / max(len(sentences), 1)
    avg_syllables = ta.count_total_syllables(words, lang) / max(len(words), 1)
    reading_ease = flesch_reading_ease(avg_sentence_length, avg_syllables, lang)

    return ParagraphDetail(
        index=index,
        text=ta.truncate_text(paragraph, 100),
        words=len(words),
        sentences=len(sentences),
        average_sentence_length=avg_sentence_length,
        reading_ease=int(round(reading_ease)),
        label=composite_label(reading_ease),
    )


def analyze_paragraphs(text: str, lang: LanguageConfig) -> ParagraphAnalysis:
    items = [_paragraph_detail(i, p, lang) for i, p in enumerate(ta.split_paragraphs(text), start=1)]
    word_counts = [p.words for p in items]
    sentence_counts = [p.sentences for p in items]

    return ParagraphAnalysis(
        count=len(items),
        average_words=sum(word_counts) / len(word_counts) if word_counts else 0.0,
        average_sentences=sum(sentence_counts) / len(sentence_counts) if sentence_counts else 0.0,
        long_paragraphs=[p for p in items if p.words > LONG_PARAGRAPH_WORDS],
        short_paragraphs=[p for p in items if 0 < p.words < SHORT_PARAGRAPH_WORDS],
        items=items,
        distribution=[LengthBucket(**b) for b in ta.create_length_distribution(word_counts, 50)],
    )


def analyze_structure(text: str, lang: LanguageConfig) -> StructureAnalysis:
    return StructureAnalysis(
        sentences=analyze_sentences(text, lang),
        paragraphs=analyze_paragraphs(text, lang),
    )


def generate_recommendations(totals: ReadabilityTotals, structure: StructureAnalysis,
                             composite_score: int) -> List[ReadabilityNote]:
    notes = []
    avg_sentence = int(round(totals.average_sentence_length))

    if totals.words < 100:
        notes.append(ReadabilityNote(
            type="warning", title="Content Too Short",
            message=f"Your content has only {totals.words} words. "
                    f"Aim for at least 100 words for meaningful readability analysis."))

    if totals.average_sentence_length > 25:
        notes.append(ReadabilityNote(
            type="critical", title="Sentences Too Long",
            message=f"Average sentence length is {avg_sentence} words. "
                    f"Try to keep sentences under 20 words for better readability."))
    elif totals.average_sentence_length < 10:
        notes.append(ReadabilityNote(
            type="info", title="Sentences Very Short",
            message=f"Average sentence length is {avg_sentence} words. While short sentences are good, "
                    f"varying sentence length can improve flow."))

    if totals.complex_word_ratio > 0.15:
        notes.append(ReadabilityNote(
            type="warning", title="Too Many Complex Words",
            message=f"{round(totals.complex_word_ratio * 100)}% of words are complex. "
                    f"Consider using simpler alternatives where possible."))

    long_paragraphs = len(structure.paragraphs.long_paragraphs)
    if long_paragraphs:
        notes.append(ReadabilityNote(
            type="warning", title="Long Paragraphs Detected",
            message=f"{long_paragraphs} paragraph(s) have more than 150 words. "
                    f"Break them into smaller chunks for better readability."))

    if totals.vocabulary_richness < 0.4 and totals.words > 100:
        notes.append(ReadabilityNote(
            type="info", title="Limited Vocabulary Diversity",
            message="Consider using more varied vocabulary to keep readers engaged."))

    if composite_score >= 70:
        notes.append(ReadabilityNote(
            type="success", title="Excellent Readability",
            message="Your content is very easy to read and understand!"))
    elif composite_score < 30:
        notes.append(ReadabilityNote(
            type="critical", title="Readability Needs Improvement",
            message="Your content is difficult to read. Focus on shorter sentences and simpler words."))

    return notes


def determine_reading_levels(grade_value: float) -> ReadingLevels:
    stage_label = _EDUCATION_STAGES[-1][0]
    for label, _range, low, high in _EDUCATION_STAGES:
        if low <= grade_value <= high:
            stage_label = label
            break

    return ReadingLevels(
        recommended_grade=int(round(grade_value)),
        recommended_label=stage_label,
        education_stages=[EducationStage(label=label, range=rng) for label, rng, _, _ in _EDUCATION_STAGES],
        audience_fit=[
            AudienceFit(audience="General Public", suitable=grade_value <= 8),
            AudienceFit(audience="High School Students", suitable=7 <= grade_value <= 12),
            AudienceFit(audience="College Students", suitable=10 <= grade_value <= 16),
            AudienceFit(audience="Academic/Professional", suitable=grade_value >= 13),
        ],
    )


def generate_summary(totals: ReadabilityTotals, composite_score: int,
                     lang: LanguageConfig) -> ReadabilitySummary:
    reading_time = calculate_reading_time(totals.words, lang.default_wpm)

    if reading_time <= 2:
        pacing = "Quick read"
    elif reading_time <= 5:
        pacing = "Short read"
    elif reading_time <= 10:
        pacing = "Medium read"
    else:
        pacing = "Long read"

    if composite_score >= 70:
        audience = "General audience"
    elif composite_score >= 50:
        audience = "High school and above"
    elif composite_score >= 30:
        audience = "College level"
    else:
        audience = "Advanced/Academic"

    return ReadabilitySummary(
        reading_time_minutes=reading_time,
        pacing=pacing,
        audience=audience,
        word_count=totals.words,
        language=lang.name,
    )


def quick_flesch(text: str, language: str = "en") -> FleschSnapshot:
    """
    Single-formula Flesch Reading Ease snapshot of already stripped text.
    Sentences are counted as non-empty runs between . ! ? marks.
    """
    if not text or not text.strip():
        return FleschSnapshot()

    lang = get_language_config(language)
    words = ta.tokenize_words(text)
    sentences = [s for s in re.split(r'[.!?]+', text) if s.strip()]
    if not words or not sentences:
        return FleschSnapshot(description="Insufficient content")

    syllables = ta.count_total_syllables(words, lang)
    score = flesch_reading_ease(len(words) / len(sentences), syllables / len(words), lang)
    level, _grade_label, _grade_value = interpret_flesch_score(score)
    return FleschSnapshot(
        score=int(round(score)),
        level=level,
        description=_SNAPSHOT_DESCRIPTIONS[level],
    )
