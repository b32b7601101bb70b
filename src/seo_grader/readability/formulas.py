# src/seo_grader/readability/formulas.py
"""
The six readability formulas, their 0..100 normalisation and the
weighted composite score. Every function here is a pure function of counts.
"""
import math
from typing import Dict, List, Tuple

from .language_config import LanguageConfig
from .models import CompositeScore, FormulaResult

# Relative weight of each formula in the composite score.
COMPOSITE_WEIGHTS: Dict[str, float] = {
    "flesch-reading-ease": 1.0,
    "flesch-kincaid-grade": 1.0,
    "gunning-fog": 1.0,
    "smog": 1.0,
    "coleman-liau": 1.0,
    "ari": 1.0,
}

GRADE_SCALE_MAX = 18

# (minimum score, label, grade label, grade value)
_FLESCH_BANDS: Tuple[Tuple[float, str, str, int], ...] = (
    (90, "Very Easy", "5th grade", 5),
    (80, "Easy", "6th grade", 6),
    (70, "Fairly Easy", "7th grade", 7),
    (60, "Standard", "8th-9th grade", 8),
    (50, "Fairly Difficult", "10th-12th grade", 10),
    (30, "Difficult", "College", 13),
)
_FLESCH_FLOOR = ("Very Difficult", "College Graduate", 16)


def flesch_reading_ease(avg_sentence_length: float, avg_syllables_per_word: float,
                        lang: LanguageConfig) -> float:
    c = lang.flesch
    return c.a - (c.b * avg_sentence_length) - (c.c * avg_syllables_per_word)


def flesch_kincaid_grade(avg_sentence_length: float, avg_syllables_per_word: float) -> float:
    return (0.39 * avg_sentence_length) + (11.8 * avg_syllables_per_word) - 15.59


def gunning_fog(avg_sentence_length: float, complex_word_ratio: float) -> float:
    return 0.4 * (avg_sentence_length + (100 * complex_word_ratio))


def smog_index(complex_word_count: int, sentence_count: int) -> float:
    if sentence_count == 0:
        return 0.0
    return 1.0430 * math.sqrt(complex_word_count * (30 / sentence_count)) + 3.1291


def coleman_liau(avg_letters_per_word: float, avg_sentences_per_word: float) -> float:
    letters_per_100 = avg_letters_per_word * 100
    sentences_per_100 = avg_sentences_per_word * 100
    return (0.0588 * letters_per_100) - (0.296 * sentences_per_100) - 15.8


def automated_readability_index(avg_characters_per_word: float, avg_sentence_length: float) -> float:
    return (4.71 * avg_characters_per_word) + (0.5 * avg_sentence_length) - 21.43


def interpret_flesch_score(score: float) -> Tuple[str, str, int]:
    """Returns (label, grade label, grade value) for a Flesch Reading Ease score."""
    for minimum, label, grade_label, grade_value in _FLESCH_BANDS:
        if score >= minimum:
            return label, grade_label, grade_value
    return _FLESCH_FLOOR


def normalize_ease(score: float) -> int:
    """Reading-ease scores already run easy-high; clamp to 0..100."""
    return int(min(max(round(score), 0), 100))


def normalize_grade(grade: float, low: float = 0, high: float = GRADE_SCALE_MAX) -> int:
    """Maps a grade level inversely onto 0..100 so that a lower grade scores higher."""
    if grade <= low:
        return 100
    if grade >= high:
        return 0
    return int(round(100 - ((grade - low) / (high - low)) * 100))


def grade_to_color(grade: float) -> str:
    if grade <= 6:
        return "green"
    if grade <= 9:
        return "lightgreen"
    if grade <= 12:
        return "yellow"
    if grade <= 16:
        return "orange"
    return "red"


def grade_to_label(grade: float) -> str:
    if grade <= 6:
        return "Elementary"
    if grade <= 8:
        return "Middle School"
    if grade <= 12:
        return "High School"
    if grade <= 16:
        return "College"
    return "Graduate"


def _grade_formula(formula_id: str, label: str, grade: float) -> FormulaResult:
    rounded = int(round(grade))
    return FormulaResult(
        id=formula_id,
        label=label,
        score=round(grade, 1),
        normalized=normalize_grade(grade),
        grade_level=f"Grade {rounded}",
        grade_value=rounded,
        color=grade_to_color(grade),
        type="grade",
    )


def calculate_all_formulas(word_count: int, sentence_count: int, letter_count: int,
                           syllable_count: int, complex_word_count: int,
                           lang: LanguageConfig) -> List[FormulaResult]:
    words = max(word_count, 1)
    avg_sentence_length = word_count / max(sentence_count, 1)
    avg_syllables_per_word = syllable_count / words
    complex_word_ratio = complex_word_count / words
    avg_letters_per_word = letter_count / words
    avg_sentences_per_word = sentence_count / words

    ease = flesch_reading_ease(avg_sentence_length, avg_syllables_per_word, lang)
    label, grade_label, grade_value = interpret_flesch_score(ease)
    formulas = [FormulaResult(
        id="flesch-reading-ease",
        label="Flesch Reading Ease",
        score=round(ease, 1),
        normalized=normalize_ease(ease),
        interpretation=label,
        grade_level=grade_label,
        grade_value=grade_value,
        color=grade_to_color(grade_value),
        type="ease",
    )]

    formulas.append(_grade_formula(
        "flesch-kincaid-grade", "Flesch-Kincaid Grade",
        flesch_kincaid_grade(avg_sentence_length, avg_syllables_per_word)))
    formulas.append(_grade_formula(
        "gunning-fog", "Gunning Fog Index",
        gunning_fog(avg_sentence_length, complex_word_ratio)))
    formulas.append(_grade_formula(
        "smog", "SMOG Index",
        smog_index(complex_word_count, sentence_count)))
    formulas.append(_grade_formula(
        "coleman-liau", "Coleman-Liau Index",
        coleman_liau(avg_letters_per_word, avg_sentences_per_word)))
    formulas.append(_grade_formula(
        "ari", "Automated Readability Index",
        automated_readability_index(avg_letters_per_word, avg_sentence_length)))
    return formulas


def composite_label(score: float) -> str:
    if score >= 80:
        return "Very Easy"
    if score >= 60:
        return "Easy"
    if score >= 40:
        return "Moderate"
    if score >= 20:
        return "Difficult"
    return "Very Difficult"


def average_grade(formulas: List[FormulaResult]) -> float:
    grades = [f.grade_value for f in formulas if f.type == "grade"]
    return sum(grades) / len(grades) if grades else 0.0


def calculate_composite_score(formulas: List[FormulaResult]) -> CompositeScore:
    """Weighted mean of the normalized scores, weights from COMPOSITE_WEIGHTS."""
    if not formulas:
        return CompositeScore(score=0, label="Unknown", color="gray", grade_level="N/A")

    total_weight = sum(COMPOSITE_WEIGHTS.get(f.id, 1.0) for f in formulas)
    weighted = sum(f.normalized * COMPOSITE_WEIGHTS.get(f.id, 1.0) for f in formulas)
    avg_normalized = weighted / total_weight if total_weight else 0.0
    avg_grade = average_grade(formulas)

    return CompositeScore(
        score=int(round(avg_normalized)),
        label=composite_label(avg_normalized),
        color=grade_to_color(avg_grade),
        grade_level=grade_to_label(avg_grade),
    )
