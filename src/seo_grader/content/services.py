# src/seo_grader/content/services.py
from typing import Iterable, List, Optional, Union

from .competitive import analyze_competitive_content
from .gaps import analyze_content_gaps
from .headings import optimize_headings
from .length import optimize_content_length
from .linking import recommend_internal_links
from .models import (
    CompetitiveAnalysisResult,
    CompetitorContent,
    ContentGapResult,
    ContentLengthResult,
    ExistingPage,
    HeadingOptimizationResult,
    InternalLinkingResult,
    StructureAnalysisResult,
)
from .structure import analyze_content_structure


class ContentServices:
    """
    Content optimization tools that run outside the scored analysis.
    Each call parses its content independently and persists nothing.
    """

    def analyze_content_structure(self, content: str) -> StructureAnalysisResult:
        return analyze_content_structure(content)

    def optimize_headings(self, content: str,
                          keywords: Union[str, List[str], None] = None) -> HeadingOptimizationResult:
        return optimize_headings(content, keywords)

    def recommend_internal_links(self, content: str,
                                 existing_pages: Optional[Iterable[Union[ExistingPage, dict]]] = None,
                                 base_url: Optional[str] = None) -> InternalLinkingResult:
        return recommend_internal_links(content, existing_pages, base_url)

    def optimize_content_length(self, content: str, target_type: Optional[str] = None) -> ContentLengthResult:
        return optimize_content_length(content, target_type)

    def analyze_content_gaps(self, content: str, topics: Union[str, List[str], None] = None) -> ContentGapResult:
        return analyze_content_gaps(content, topics)

    def analyze_competitive_content(self, content: str,
                                    competitors: Optional[Iterable[Union[CompetitorContent, dict]]] = None
                                    ) -> CompetitiveAnalysisResult:
        return analyze_competitive_content(content, competitors)
