# src/seo_grader/keywords/services.py
from typing import List, Optional, Union

from .clustering import cluster_keywords
from .density import analyze_keyword_density
from .difficulty import estimate_keyword_difficulty
from .long_tail import generate_long_tail_keywords
from .lsi import generate_lsi_keywords
from .models import ClusteringResult, DensityAnalysis, DifficultyResult, LongTailResult, LSIResult
from .suggestions import suggest_keywords


class KeywordServices:
    """Groups the keyword tools behind one object for callers that want a single entry point."""

    def analyze_keyword_density(self, content: str, keywords: Union[str, List[str]]) -> DensityAnalysis:
        return analyze_keyword_density(content, keywords)

    def generate_long_tail_keywords(self, content: str, seed_keywords: Optional[List[str]] = None,
                                    max_suggestions: Optional[int] = None) -> LongTailResult:
        return generate_long_tail_keywords(content, seed_keywords, max_suggestions)

    def estimate_keyword_difficulty(self, keywords: Union[str, List[str]], content: str = "") -> DifficultyResult:
        return estimate_keyword_difficulty(keywords, content)

    def cluster_keywords(self, keywords: Union[str, List[str]], similarity_threshold: Optional[float] = None,
                         strategy: str = "jaccard") -> ClusteringResult:
        return cluster_keywords(keywords, similarity_threshold, strategy)

    def generate_lsi_keywords(self, content: str, main_keywords: Optional[List[str]] = None,
                              max_suggestions: Optional[int] = None, language: Optional[str] = None) -> LSIResult:
        return generate_lsi_keywords(content, main_keywords, max_suggestions, language)

    def suggest_keywords(self, content: str, max_suggestions: int = 10, language: Optional[str] = None):
        return suggest_keywords(content, max_suggestions, language)
