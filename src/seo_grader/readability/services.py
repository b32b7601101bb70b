# src/seo_grader/readability/services.py
import logging
import re
import time
from datetime import datetime, timezone
from typing import Optional

from seo_grader.dom.parser import ContentParser, calculate_reading_time

from .formulas import average_grade, calculate_all_formulas, calculate_composite_score
from .language_config import LanguageConfig, detect_language, get_language_config
from .models import (
    GuidanceRule,
    LanguageGuidance,
    ReadabilityMeta,
    ReadabilityNote,
    ReadabilityResult,
    ReadabilitySummary,
    ReadabilityTotals,
    StructureAnalysis,
)
from .scoring import (
    analyze_structure,
    calculate_totals,
    determine_reading_levels,
    generate_recommendations,
    generate_summary,
)
from .seo_readability import generate_dynamic_language_guidance
from .text_analysis import normalize_whitespace

logger = logging.getLogger(__name__)

_MARKUP_RE = re.compile(r'<\s*[a-zA-Z!/][^>]*>')

_LANGUAGE_NOTES = {
    "en": "English content is analyzed using US English readability standards. "
          "Aim for 60+ readability score for general audiences.",
    "el": "Το ελληνικό περιεχόμενο αναλύεται χρησιμοποιώντας προσαρμοσμένες παραμέτρους αναγνωσιμότητας. "
          "Στοχεύστε σε βαθμολογία 60+ για γενικό κοινό.",
}
_DEFAULT_NOTES = "Content analyzed using standard readability metrics."


class ReadabilityServices:
    """
    Readability analysis of HTML or plain text.

    `analyze` computes everything once; the mini-services return slices of
    that result so their numbers always agree with a full run.
    """

    def __init__(self, parser: Optional[ContentParser] = None):
        self.parser = parser or ContentParser()

    def prepare_text(self, content: str) -> str:
        """
        Extracts analysable prose. Markup is parsed and its <p> paragraphs are
        kept as blank-line separated blocks; plain text keeps its blank-line
        paragraph breaks. Insignificant whitespace is normalized away.
        """
        if not content or not content.strip():
            return ""
        if _MARKUP_RE.search(content):
            document = self.parser.parse(content)
            if document.paragraphs:
                return "\n\n".join(normalize_whitespace(p) for p in document.paragraphs)
            return normalize_whitespace(document.text)
        return normalize_whitespace(content)

    def analyze(self, content: str, language: Optional[str] = "en") -> ReadabilityResult:
        """`language=None` picks Greek or English from the characters of the content."""
        start = time.perf_counter()
        if language is None:
            language = detect_language(content if isinstance(content, str) else "")
        lang = get_language_config(language)

        text = self.prepare_text(content if isinstance(content, str) else "")
        if not text:
            reason = "No content provided" if not (content or "").strip() else "Unable to extract text from content"
            return self._empty_result(lang, start, reason)

        totals = calculate_totals(text, lang)
        if totals.words == 0 or totals.sentences == 0:
            return self._empty_result(lang, start, "Insufficient textual content")

        formulas = calculate_all_formulas(
            totals.words, totals.sentences, totals.letters, totals.syllables, totals.complex_words, lang)
        composite = calculate_composite_score(formulas)
        composite.reading_time_minutes = calculate_reading_time(totals.words, lang.default_wpm)

        structure = analyze_structure(text, lang)
        warnings = self._collect_warnings(totals, structure, lang)

        logger.debug("Readability (%s): %d words, composite %d", lang.code, totals.words, composite.score)

        return ReadabilityResult(
            meta=ReadabilityMeta(
                language=lang.code,
                language_name=lang.name,
                timestamp=datetime.now(timezone.utc).isoformat(),
                processing_time_ms=self._elapsed_ms(start),
                is_insufficient=totals.words < lang.min_words or totals.sentences < 3,
                warnings=warnings,
            ),
            totals=totals,
            composite_score=composite,
            formulas=formulas,
            structure=structure,
            recommendations=generate_recommendations(totals, structure, composite.score),
            language_guidance=self._language_guidance(lang),
            reading_levels=determine_reading_levels(average_grade(formulas)),
            summary=generate_summary(totals, composite.score, lang),
        )

    # --- Mini-services ---

    def analyze_overview(self, content: str, language: str = "en") -> dict:
        full = self.analyze(content, language)
        return {
            "meta": full.meta,
            "composite_score": full.composite_score,
            "formulas": full.formulas,
            "totals": full.totals,
            "summary": full.summary,
        }

    def analyze_structure(self, content: str, language: str = "en") -> dict:
        full = self.analyze(content, language)
        return {
            "meta": full.meta,
            "structure": full.structure,
            "totals": full.totals.model_dump(
                include={"words", "sentences", "paragraphs", "average_sentence_length"}),
        }

    def analyze_reading_levels(self, content: str, language: str = "en") -> dict:
        full = self.analyze(content, language)
        return {
            "meta": full.meta,
            "reading_levels": full.reading_levels,
            "composite_score": full.composite_score.model_dump(include={"grade_level", "label"}),
            "formulas": [f.model_dump(include={"id", "label", "grade_level", "grade_value"})
                         for f in full.formulas],
        }

    def analyze_improvements(self, content: str, language: str = "en") -> dict:
        full = self.analyze(content, language)
        return {
            "meta": full.meta,
            "recommendations": full.recommendations,
            "composite_score": full.composite_score.model_dump(include={"score", "label"}),
            "totals": full.totals.model_dump(
                include={"words", "complex_word_ratio", "average_sentence_length"}),
            "long_sentences": full.structure.sentences.long_sentences,
            "long_paragraphs": full.structure.paragraphs.long_paragraphs,
        }

    def analyze_language_guidance(self, content: str, language: str = "en") -> dict:
        full = self.analyze(content, language)
        guidance = generate_dynamic_language_guidance(
            full.totals, full.structure, full.composite_score, full.meta.language)
        return {
            "meta": full.meta,
            "composite_score": full.composite_score.model_dump(include={"score", "label", "grade_level"}),
            "totals": full.totals.model_dump(include={
                "words", "sentences", "paragraphs", "average_sentence_length",
                "complex_word_ratio", "vocabulary_richness"}),
            "language": full.meta.language_name,
            "guidance": guidance,
            "long_sentences": full.structure.sentences.long_sentences[:3],
            "long_paragraphs": full.structure.paragraphs.long_paragraphs[:3],
        }

    def analyze_live_score(self, content: str, language: str = "en") -> dict:
        full = self.analyze(content, language)
        return {
            "meta": full.meta.model_dump(include={
                "timestamp", "language", "is_insufficient", "processing_time_ms"}),
            "composite_score": full.composite_score,
            "totals": full.totals.model_dump(include={"words", "sentences", "average_sentence_length"}),
            "summary": full.summary,
        }

    # --- Helpers ---

    @staticmethod
    def _elapsed_ms(start: float) -> int:
        return int((time.perf_counter() - start) * 1000)

    @staticmethod
    def _language_guidance(lang: LanguageConfig, with_notes: bool = True) -> LanguageGuidance:
        return LanguageGuidance(
            language=lang.name,
            notes=_LANGUAGE_NOTES.get(lang.code, _DEFAULT_NOTES) if with_notes else "",
            rules=[GuidanceRule(**rule) for rule in lang.guidance],
        )

    def _empty_result(self, lang: LanguageConfig, start: float, reason: str) -> ReadabilityResult:
        logger.debug("Readability input rejected: %s", reason)
        return ReadabilityResult(
            meta=ReadabilityMeta(
                language=lang.code,
                language_name=lang.name,
                timestamp=datetime.now(timezone.utc).isoformat(),
                processing_time_ms=self._elapsed_ms(start),
                is_insufficient=True,
                warnings=[reason],
            ),
            totals=ReadabilityTotals(),
            structure=StructureAnalysis(),
            recommendations=[ReadabilityNote(type="warning", title="Insufficient Content", message=reason)],
            language_guidance=self._language_guidance(lang, with_notes=False),
            summary=ReadabilitySummary(language=lang.name),
        )

    @staticmethod
    def _collect_warnings(totals: ReadabilityTotals, structure: StructureAnalysis,
                          lang: LanguageConfig) -> list:
        warnings = []
        if totals.words < lang.min_words:
            warnings.append(
                f"Content length ({totals.words} words) is below recommended minimum of "
                f"{lang.min_words} words for accurate analysis.")
        if totals.sentences < 3:
            warnings.append("Content has fewer than 3 sentences. Results may be less reliable.")
        if structure.sentences.count > 0 and structure.sentences.average_length > 30:
            warnings.append("Average sentence length exceeds 30 words. Consider breaking up long sentences.")
        if totals.complex_word_ratio > 0.3:
            warnings.append("High ratio of complex words (>30%). Content may be difficult for general audiences.")
        return warnings
