# src/seo_grader/dom/parser.py
import html as html_lib
import logging
import math
import re
from typing import List, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Comment, Tag

from .models import (
    HEADING_LEVELS,
    ImageInfo,
    LinkInfo,
    MetaTags,
    ParsedDocument,
    StructuralElements,
)

logger = logging.getLogger(__name__)

SEMANTIC_TAGS = ("nav", "header", "main", "article", "footer")
NON_CONTENT_TAGS = ("script", "style", "noscript", "template")

_SCRIPT_STYLE_RE = re.compile(r'<(script|style)\b[^>]*>.*?</\1\s*>', re.IGNORECASE | re.DOTALL)
_COMMENT_RE = re.compile(r'<!--.*?-->', re.DOTALL)
_TAG_RE = re.compile(r'<[^>]*>')
_CHARSET_RE = re.compile(r'charset\s*=\s*["\']?([\w-]+)', re.IGNORECASE)


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def strip_html_tags(markup: str) -> str:
    """
    Best-effort regex strip used when the markup cannot be parsed:
    drops script/style blocks and comments, replaces tags with spaces,
    decodes entities and collapses whitespace.
    """
    if not markup:
        return ""
    text = _SCRIPT_STYLE_RE.sub(" ", markup)
    text = _COMMENT_RE.sub(" ", text)
    text = _TAG_RE.sub(" ", text)
    return collapse_whitespace(html_lib.unescape(text))


def calculate_reading_time(word_count: int, wpm: int = 200) -> int:
    """Minutes needed to read `word_count` words, rounded up."""
    if wpm <= 0:
        return 0
    return math.ceil(word_count / wpm)


def empty_document(markup: str = "") -> ParsedDocument:
    return ParsedDocument(html=markup)


def _normalize_host(host: Optional[str]) -> str:
    if not host:
        return ""
    parsed = urlparse(host if "//" in host else f"//{host}")
    return parsed.netloc.lower().removeprefix("www.")


def classify_link(href: str, current_host: Optional[str] = None) -> str:
    """
    Classifies an href as internal, external, email, phone or anchor.

    mailto: and tel: win first, a bare fragment is an anchor, root-relative
    and relative paths and non-http(s) schemes are internal, and an absolute
    URL is internal only when its host matches (or is a subdomain of) the
    current host.
    """
    href = (href or "").strip()
    lowered = href.lower()

    if lowered.startswith("mailto:"):
        return "email"
    if lowered.startswith("tel:"):
        return "phone"
    if href.startswith("#"):
        return "anchor"
    if href.startswith("/") and not href.startswith("//"):
        return "internal"

    parsed = urlparse(href)
    if not parsed.scheme and not parsed.netloc:
        return "internal"
    # javascript:, data: and other non-web schemes never leave the page.
    if parsed.scheme and parsed.scheme.lower() not in ("http", "https"):
        return "internal"

    source_domain = _normalize_host(current_host)
    target_domain = parsed.netloc.lower().removeprefix("www.")
    if source_domain and target_domain and (
            target_domain == source_domain or target_domain.endswith(f".{source_domain}")):
        return "internal"
    return "external"


class ContentParser:
    """
    Turns raw HTML (or plain text) into a ParsedDocument.

    Parsing never raises: when BeautifulSoup cannot handle the input the
    parser degrades to a plain-text document built by `strip_html_tags`.
    """

    def parse(self, markup: str, base_url: Optional[str] = None) -> ParsedDocument:
        """
        Parses raw HTML content into a ParsedDocument.

        Args:
            markup (str): Raw HTML or plain text.
            base_url (Optional[str]): URL (or bare host) of the page, used to
                                      decide which absolute links are internal.
        """
        if not markup or not markup.strip():
            return empty_document(markup or "")

        try:
            return self._parse_markup(markup, base_url)
        except Exception as e:
            logger.warning("Markup could not be parsed, falling back to plain text: %s", e)
            return self._plain_text_document(markup)

    def _plain_text_document(self, markup: str) -> ParsedDocument:
        text = strip_html_tags(markup)
        return ParsedDocument(
            text=text,
            html=markup,
            word_count=len(text.split()),
            character_count=len(text),
        )

    def _parse_markup(self, markup: str, base_url: Optional[str]) -> ParsedDocument:
        clean_html = markup.replace('\ufeff', '')
        soup = BeautifulSoup(clean_html, 'html.parser')

        # Read before non-content tags are dropped.
        meta_tags = self._extract_meta_tags(soup)
        structural = self._extract_structural_elements(soup)

        for tag in soup(list(NON_CONTENT_TAGS)):
            tag.decompose()
        for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
            comment.extract()

        text = collapse_whitespace(soup.get_text(" "))
        current_host = base_url or ""

        return ParsedDocument(
            text=text,
            html=markup,
            word_count=len(text.split()),
            character_count=len(text),
            headings=self._extract_headings(soup),
            images=self._extract_images(soup),
            links=self._extract_links(soup, current_host),
            paragraphs=self._extract_paragraphs(soup),
            meta_tags=meta_tags,
            structural_elements=structural,
        )

    @staticmethod
    def _tag_text(tag: Tag) -> str:
        return collapse_whitespace(tag.get_text(" ", strip=True))

    def _extract_headings(self, soup: BeautifulSoup) -> dict:
        headings = {}
        for level in HEADING_LEVELS:
            texts = [self._tag_text(tag) for tag in soup.find_all(level)]
            headings[level] = [t for t in texts if t]
        return headings

    @staticmethod
    def _attr(tag: Tag, name: str) -> str:
        value = tag.get(name)
        if value is None:
            return ""
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def _extract_images(self, soup: BeautifulSoup) -> List[ImageInfo]:
        images = []
        for tag in soup.find_all("img"):
            alt = self._attr(tag, "alt")
            title = self._attr(tag, "title")
            images.append(ImageInfo(
                src=self._attr(tag, "src"),
                alt=alt,
                title=title,
                has_alt=bool(alt.strip()),
                has_title=bool(title.strip()),
            ))
        return images

    def _extract_links(self, soup: BeautifulSoup, current_host: str) -> List[LinkInfo]:
        links = []
        for tag in soup.find_all("a"):
            if not tag.has_attr("href"):
                continue
            href = self._attr(tag, "href").strip()
            text = self._tag_text(tag)
            links.append(LinkInfo(
                href=href,
                text=text,
                rel=self._attr(tag, "rel"),
                type=classify_link(href, current_host),
                has_text=bool(text),
            ))
        return links

    def _extract_paragraphs(self, soup: BeautifulSoup) -> List[str]:
        paragraphs = [self._tag_text(tag) for tag in soup.find_all("p")]
        return [p for p in paragraphs if p]

    def _extract_meta_tags(self, soup: BeautifulSoup) -> MetaTags:
        meta_by_name = {}
        charset = None
        for tag in soup.find_all("meta"):
            name = self._attr(tag, "name").strip().lower()
            if name and name not in meta_by_name:
                meta_by_name[name] = self._attr(tag, "content").strip()

            if charset is None and tag.has_attr("charset"):
                charset = self._attr(tag, "charset").strip() or None
            elif charset is None and self._attr(tag, "http-equiv").lower() == "content-type":
                match = _CHARSET_RE.search(self._attr(tag, "content"))
                if match:
                    charset = match.group(1)

        canonical = None
        for tag in soup.find_all("link"):
            rel_values = [r.lower() for r in (tag.get("rel") or [])]
            if "canonical" in rel_values:
                canonical = self._attr(tag, "href").strip() or None
                break

        html_tag = soup.find("html")
        language = self._attr(html_tag, "lang").strip() if html_tag else ""

        return MetaTags(
            viewport=meta_by_name.get("viewport") or None,
            canonical=canonical,
            robots=meta_by_name.get("robots") or None,
            charset=charset,
            language=language or None,
        )

    @staticmethod
    def _extract_structural_elements(soup: BeautifulSoup) -> StructuralElements:
        present = {name: soup.find(name) is not None for name in SEMANTIC_TAGS}
        return StructuralElements(
            has_nav=present["nav"],
            has_header=present["header"],
            has_footer=present["footer"],
            has_main=present["main"],
            has_article=present["article"],
            semantic_score=min(sum(present.values()), 5),
        )


_DEFAULT_PARSER = ContentParser()


def parse(markup: str, base_url: Optional[str] = None) -> ParsedDocument:
    """Module-level shortcut for `ContentParser().parse()`."""
    return _DEFAULT_PARSER.parse(markup, base_url)
