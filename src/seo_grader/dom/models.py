# src/seo_grader/dom/models.py
from typing import Dict, List, Literal, Optional

from pydantic import Field, field_validator

from seo_grader.model import CamelModel

HEADING_LEVELS = ("h1", "h2", "h3", "h4", "h5", "h6")

LinkType = Literal["internal", "external", "email", "phone", "anchor"]


def _empty_headings() -> Dict[str, List[str]]:
    return {level: [] for level in HEADING_LEVELS}


class ImageInfo(CamelModel):
    src: str = ""
    alt: str = ""
    title: str = ""
    has_alt: bool = False
    has_title: bool = False


class LinkInfo(CamelModel):
    href: str = ""
    text: str = ""
    rel: str = ""
    type: LinkType = "internal"
    has_text: bool = False


class MetaTags(CamelModel):
    viewport: Optional[str] = None
    canonical: Optional[str] = None
    robots: Optional[str] = None
    charset: Optional[str] = None
    language: Optional[str] = None


class StructuralElements(CamelModel):
    has_nav: bool = False
    has_header: bool = False
    has_footer: bool = False
    has_main: bool = False
    has_article: bool = False
    semantic_score: int = Field(default=0, ge=0, le=5)


class ParsedDocument(CamelModel):
    """
    Structured model of one piece of HTML/text content.

    Built per analysis by the ContentParser and owned by that analysis call.
    `text` is the tag-stripped, whitespace-collapsed body and
    `word_count` always equals `len(text.split())`.
    """
    text: str = ""
    html: str = ""
    word_count: int = 0
    character_count: int = 0

    headings: Dict[str, List[str]] = Field(default_factory=_empty_headings)
    images: List[ImageInfo] = Field(default_factory=list)
    links: List[LinkInfo] = Field(default_factory=list)
    paragraphs: List[str] = Field(default_factory=list)

    meta_tags: MetaTags = Field(default_factory=MetaTags)
    structural_elements: StructuralElements = Field(default_factory=StructuralElements)

    @field_validator('headings', mode='before')
    @classmethod
    def fill_heading_levels(cls, v) -> Dict[str, List[str]]:
        """Every level h1..h6 is present and holds only non-null strings."""
        headings = _empty_headings()
        for level, texts in (v or {}).items():
            key = str(level).lower()
            if key in headings:
                headings[key] = [t for t in (texts or []) if t is not None]
        return headings

    def heading_count(self, level: str) -> int:
        return len(self.headings.get(level, []))
