# src/seo_grader/readability/language_config.py
import re
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Pattern, Tuple

_GREEK_CHARS_RE = re.compile(r'[α-ωΑ-Ωάέίόύώήϊϋΐΰ]')


@dataclass(frozen=True)
class FleschConstants:
    a: float
    b: float
    c: float


@dataclass(frozen=True)
class LanguageConfig:
    """Per-language parameters for tokenization, syllable counting and scoring."""
    code: str
    name: str
    vowel_groups: Pattern
    complex_threshold: int
    flesch: FleschConstants
    min_words: int
    default_wpm: int
    abbreviations: FrozenSet[str] = field(default_factory=frozenset)
    guidance: Tuple[Dict[str, str], ...] = ()


LANGUAGE_CONFIG: Dict[str, LanguageConfig] = {
    "en": LanguageConfig(
        code="en",
        name="English",
        vowel_groups=re.compile(r'[aeiouy]+', re.IGNORECASE),
        complex_threshold=3,
        flesch=FleschConstants(a=206.835, b=1.015, c=84.6),
        min_words=100,
        default_wpm=200,
        abbreviations=frozenset({
            "mr", "mrs", "ms", "dr", "prof", "sr", "jr", "st", "vs", "etc", "e.g", "i.e", "inc", "ltd", "co",
            "no", "fig", "approx",
        }),
        guidance=(
            {"title": "Use Short Sentences",
             "description": "Keep sentences under 20 words for better readability."},
            {"title": "Use Simple Words",
             "description": "Replace complex words with simpler alternatives where possible."},
            {"title": "Break Up Paragraphs",
             "description": "Keep paragraphs to 3-5 sentences for better comprehension."},
            {"title": "Use Active Voice",
             "description": "Active voice makes your content more engaging and easier to read."},
            {"title": "Include Transition Words",
             "description": 'Use transition words like "however", "therefore", and "additionally" to improve flow.'},
        ),
    ),
    "el": LanguageConfig(
        code="el",
        name="Greek",
        vowel_groups=re.compile(r'[αειουωηάέίόύώήϊϋΐΰ]+', re.IGNORECASE),
        complex_threshold=4,
        flesch=FleschConstants(a=206.835, b=1.015, c=84.6),
        min_words=100,
        default_wpm=180,
        abbreviations=frozenset({"κ", "π.χ", "δηλ", "κλπ", "βλ", "σελ", "αρ", "τηλ"}),
        guidance=(
            {"title": "Χρησιμοποιήστε Απλές Προτάσεις",
             "description": "Κρατήστε τις προτάσεις κάτω από 20 λέξεις για καλύτερη αναγνωσιμότητα."},
            {"title": "Χρησιμοποιήστε Απλές Λέξεις",
             "description": "Αντικαταστήστε πολύπλοκες λέξεις με απλούστερες εναλλακτικές όπου είναι δυνατόν."},
            {"title": "Χωρίστε τις Παραγράφους",
             "description": "Κρατήστε τις παραγράφους στις 3-5 προτάσεις για καλύτερη κατανόηση."},
            {"title": "Χρησιμοποιήστε Ενεργητική Φωνή",
             "description": "Η ενεργητική φωνή κάνει το περιεχόμενό σας πιο ελκυστικό και ευανάγνωστο."},
            {"title": "Συμπεριλάβετε Συνδετικές Λέξεις",
             "description": 'Χρησιμοποιήστε συνδετικές λέξεις όπως "ωστόσο", "επομένως", και "επιπλέον" '
                            'για να βελτιώσετε τη ροή.'},
        ),
    ),
}

DEFAULT_LANGUAGE = "en"


def get_language_config(language_code: str) -> LanguageConfig:
    """Returns the config for a language code, falling back to English."""
    return LANGUAGE_CONFIG.get((language_code or "").strip().lower(), LANGUAGE_CONFIG[DEFAULT_LANGUAGE])


def detect_language(text: str) -> str:
    """Greek if the text contains Greek letters, English otherwise."""
    if text and _GREEK_CHARS_RE.search(text):
        return "el"
    return "en"
