# tests/core/test_readability.py
import pytest

from seo_grader.readability.formulas import (
    calculate_composite_score, composite_label, flesch_reading_ease, normalize_ease, normalize_grade,
)
from seo_grader.readability.language_config import detect_language, get_language_config
from seo_grader.readability.scoring import quick_flesch
from seo_grader.readability.seo_readability import get_seo_readability_level
from seo_grader.readability.services import ReadabilityServices
from seo_grader.readability.text_analysis import count_syllables, normalize_whitespace, split_sentences

ENGLISH = (
    "The cat sat on the mat. It was a sunny day. Dogs ran in the park.\n\n"
    "Children played near the lake. Their parents watched from a bench. Everyone enjoyed the warm weather."
)

GREEK = "Το κείμενο είναι απλό. Οι προτάσεις είναι μικρές. Η ανάγνωση είναι εύκολη."

FORMULA_IDS = ["flesch-reading-ease", "flesch-kincaid-grade", "gunning-fog", "smog", "coleman-liau", "ari"]


@pytest.fixture
def services():
    return ReadabilityServices()


# --- Text analysis ---

def test_syllable_heuristic():
    en = get_language_config("en")
    assert count_syllables("make", en) == 1
    assert count_syllables("the", en) == 1
    assert count_syllables("readability", en) == 5
    assert count_syllables("", en) == 0


def test_sentences_respect_abbreviations():
    abbreviations = get_language_config("en").abbreviations
    assert split_sentences("Dr. Smith arrived. He sat down.", abbreviations) == [
        "Dr. Smith arrived.", "He sat down."]
    assert split_sentences("no punctuation at all", abbreviations) == ["no punctuation at all"]
    assert split_sentences("   ") == []


def test_normalize_whitespace_keeps_paragraphs():
    assert normalize_whitespace("  One   two\nthree \n\n\n Four  \n") == "One two three\n\nFour"


def test_unknown_language_falls_back_to_english():
    assert get_language_config("fr").code == "en"
    assert get_language_config("EL").code == "el"


def test_detect_language():
    assert detect_language(GREEK) == "el"
    assert detect_language(ENGLISH) == "en"
    assert detect_language("") == "en"


# --- Formulas ---

def test_flesch_reading_ease_constants():
    en = get_language_config("en")
    assert flesch_reading_ease(10, 1.5, en) == pytest.approx(206.835 - 1.015 * 10 - 84.6 * 1.5)


@pytest.mark.parametrize("score, label", [
    (85, "Very Easy"), (80, "Very Easy"), (65, "Easy"), (45, "Moderate"), (25, "Difficult"), (5, "Very Difficult"),
])
def test_composite_labels(score, label):
    assert composite_label(score) == label


@pytest.mark.parametrize("ease, expected", [(85.4, 85), (-12, 0), (130, 100)])
def test_reading_ease_keeps_direction(ease, expected):
    assert normalize_ease(ease) == expected


def test_easy_text_normalizes_high_on_both_scales():
    assert normalize_ease(90) > normalize_ease(30)
    assert normalize_grade(4) > normalize_grade(14)
    assert (normalize_grade(0), normalize_grade(18)) == (100, 0)


def test_composite_of_no_formulas():
    assert calculate_composite_score([]).score == 0


# --- Full analysis ---

def test_full_analysis(services):
    result = services.analyze(ENGLISH, "en")

    assert [f.id for f in result.formulas] == FORMULA_IDS
    assert all(0 <= f.normalized <= 100 for f in result.formulas)
    assert 0 <= result.composite_score.score <= 100
    assert result.totals.sentences == 6
    assert result.totals.paragraphs == 2
    assert result.structure.paragraphs.count == 2
    assert result.meta.language_name == "English"
    assert result.meta.is_insufficient  # fewer than 100 words
    assert any("below recommended minimum" in w for w in result.meta.warnings)


def test_composite_is_whitespace_invariant(services):
    messy = ENGLISH.replace("mat. It", "mat.\nIt").replace(" ", "   ") + "\n\n\n"
    assert services.analyze(messy).composite_score == services.analyze(ENGLISH).composite_score
    assert services.analyze(messy).totals == services.analyze(ENGLISH).totals


def test_html_paragraphs_are_used(services):
    html = "<div><p>The cat sat on the mat.</p><p>It was a sunny day.</p><script>x = 1;</script></div>"
    result = services.analyze(html)
    assert result.totals.paragraphs == 2
    assert result.totals.words == 11


@pytest.mark.parametrize("content, reason", [
    ("", "No content provided"),
    ("   \n ", "No content provided"),
    ("<div></div>", "Unable to extract text from content"),
])
def test_empty_input_is_zero_valued(services, content, reason):
    result = services.analyze(content)
    assert result.meta.is_insufficient
    assert result.meta.warnings == [reason]
    assert result.composite_score.score == 0
    assert result.totals.words == 0
    assert result.formulas == []


def test_greek_analysis(services):
    result = services.analyze(GREEK, "el")
    assert result.meta.language == "el"
    assert result.meta.language_name == "Greek"
    assert result.totals.sentences == 3
    assert services.analyze(GREEK, None).meta.language == "el"


# --- Mini-services ---

def test_mini_services_agree_with_full_analysis(services):
    full = services.analyze(ENGLISH)

    overview = services.analyze_overview(ENGLISH)
    assert overview["composite_score"] == full.composite_score
    assert overview["formulas"] == full.formulas
    assert overview["totals"] == full.totals

    structure = services.analyze_structure(ENGLISH)
    assert structure["structure"] == full.structure
    assert structure["totals"]["words"] == full.totals.words

    levels = services.analyze_reading_levels(ENGLISH)
    assert levels["reading_levels"] == full.reading_levels
    assert [f["id"] for f in levels["formulas"]] == FORMULA_IDS

    improvements = services.analyze_improvements(ENGLISH)
    assert improvements["composite_score"] == {"score": full.composite_score.score,
                                               "label": full.composite_score.label}
    assert improvements["recommendations"] == full.recommendations

    live = services.analyze_live_score(ENGLISH)
    assert live["composite_score"] == full.composite_score
    assert live["summary"] == full.summary


def test_language_guidance_includes_seo_assessments(services):
    guidance = services.analyze_language_guidance(ENGLISH)["guidance"]
    assert set(guidance.seo_impact) == {
        "crawlability", "userEngagement", "mobileFriendliness",
        "voiceSearchOptimization", "featuredSnippetPotential",
    }
    assert all(0 <= a.score <= 100 for a in guidance.seo_impact.values())


def test_seo_readability_level():
    assert get_seo_readability_level(75).startswith("Excellent")
    assert get_seo_readability_level(10).startswith("Poor")


# --- Snapshot used by the rules ---

def test_quick_flesch_snapshot():
    assert quick_flesch("").score == 0
    assert quick_flesch("").level == "N/A"

    snapshot = quick_flesch("The cat sat on the mat. It was a sunny day.")
    assert snapshot.score > 60
    assert snapshot.description
