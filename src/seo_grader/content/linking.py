# src/seo_grader/content/linking.py
import logging
import re
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Union
from urllib.parse import urlparse

from seo_grader.dom.models import LinkInfo
from seo_grader.dom.parser import parse
from seo_grader.utils.config_loader import get_nested_config

from .models import (
    AnchorTextAnalysis,
    ContentNote,
    ContentScore,
    ExistingPage,
    InternalLinkingMeta,
    InternalLinkingResult,
    LinkAnalysis,
    LinkingOpportunity,
    rate,
)

logger = logging.getLogger(__name__)

GENERIC_ANCHOR_RE = re.compile(r'^(click here|read more|here|link|more)$', re.IGNORECASE)


def is_page_link(link: LinkInfo) -> bool:
    """Links that navigate to a page; anchors, mailto:, tel: and script links are not."""
    if link.type == "external":
        return True
    return link.type == "internal" and urlparse(link.href).scheme.lower() in ("", "http", "https")


def analyze_current_links(links: List[LinkInfo]) -> LinkAnalysis:
    internal = sum(1 for link in links if link.type == "internal")
    total = len(links)
    return LinkAnalysis(
        total=total,
        internal=internal,
        external=total - internal,
        ratio=round(internal / total * 100) if total else 0,
        has_links=total > 0,
    )


def find_linking_opportunities(text: str, pages: List[ExistingPage],
                               links: List[LinkInfo]) -> List[LinkingOpportunity]:
    """Unlinked pages whose title or keywords appear in the text, most relevant first."""
    linked = {link.href for link in links}
    lowered = text.lower()
    opportunities = []
    for page in pages:
        if page.url in linked:
            continue
        title_match = bool(page.title.strip()) and page.title.lower() in lowered
        keyword_matches = [k for k in page.keywords if k.strip() and k.lower() in lowered]
        if not (title_match or keyword_matches):
            continue
        reason = (f'Page title "{page.title}" mentioned in content' if title_match
                  else f"Keywords mentioned: {', '.join(keyword_matches)}")
        opportunities.append(LinkingOpportunity(
            page=page.title,
            url=page.url,
            reason=reason,
            relevance=len(keyword_matches) + (2 if title_match else 0),
        ))
    opportunities.sort(key=lambda o: -o.relevance)
    return opportunities


def analyze_anchor_text(links: List[LinkInfo]) -> AnchorTextAnalysis:
    anchors = [link.text for link in links if link.type == "internal"]
    generic = sum(1 for a in anchors if GENERIC_ANCHOR_RE.match(a))
    empty = sum(1 for a in anchors if not a)
    return AnchorTextAnalysis(
        total=len(anchors),
        generic=generic,
        descriptive=len(anchors) - generic - empty,
        empty=empty,
        generic_percentage=round(generic / len(anchors) * 100) if anchors else 0,
    )


def linking_recommendations(link_analysis: LinkAnalysis, opportunities: List[LinkingOpportunity],
                            anchors: AnchorTextAnalysis, word_count: int) -> List[ContentNote]:
    notes = []
    words_per_link = word_count / max(link_analysis.internal, 1)
    if link_analysis.internal == 0:
        notes.append(ContentNote(
            type="warning", category="links", title="Add Internal Links",
            message="No internal links found. Link to relevant pages to improve navigation and SEO."))
    elif words_per_link > 300:
        notes.append(ContentNote(
            type="info", category="links", title="Add More Internal Links",
            message="Consider adding more internal links. Aim for 1-2 internal links per 200-300 words."))
    elif words_per_link < 100:
        notes.append(ContentNote(
            type="warning", category="links", title="Too Many Links",
            message="Very high link density. Ensure links add value and are not spammy."))

    if anchors.generic:
        notes.append(ContentNote(
            type="warning", category="anchor", title="Improve Anchor Text",
            message=f'{anchors.generic} links use generic anchor text like "click here". '
                    f'Use descriptive text instead.'))
    if anchors.empty:
        notes.append(ContentNote(
            type="error", category="anchor", title="Empty Anchor Text",
            message=f"{anchors.empty} links have no anchor text. Add descriptive text to all links."))

    if opportunities:
        notes.append(ContentNote(
            type="info", category="opportunities", title="Linking Opportunities Found",
            message=f"Found {len(opportunities)} opportunities to link to existing pages. "
                    f"Review the opportunities list."))

    if not notes:
        notes.append(ContentNote(
            type="success", category="general", title="Good Linking Strategy",
            message="Your internal linking looks good. Keep it up!"))
    return notes


def calculate_linking_score(link_analysis: LinkAnalysis, opportunities: List[LinkingOpportunity],
                            anchors: AnchorTextAnalysis) -> ContentScore:
    """Internal links present 30, link count 25, descriptive anchors 30 and no missed opportunities 15 points."""
    score = 0
    if link_analysis.internal > 0:
        score += 30
        score += 25 if link_analysis.internal <= 10 else 15
    if anchors.total:
        score += round(anchors.descriptive / anchors.total * 30)
    if not opportunities:
        score += 15
    return rate(score)


def _as_pages(existing_pages: Optional[Iterable[Union[ExistingPage, dict]]]) -> List[ExistingPage]:
    return [p if isinstance(p, ExistingPage) else ExistingPage.model_validate(p) for p in (existing_pages or [])]


def recommend_internal_links(content: str, existing_pages: Optional[Iterable[Union[ExistingPage, dict]]] = None,
                             base_url: Optional[str] = None) -> InternalLinkingResult:
    """
    Reviews the internal links already on the page and finds unlinked pages
    of the same site that the text mentions.

    Args:
        content (str): HTML or plain text.
        existing_pages: Pages of the site as ExistingPage or dicts with title, url and keywords.
        base_url (Optional[str]): URL of the page, so absolute links to the same host count as internal.

    Raises:
        pydantic.ValidationError: an existing page has no url.
    """
    pages = _as_pages(existing_pages)
    document = parse(content or "", base_url)
    links = [link for link in document.links if is_page_link(link)]

    link_analysis = analyze_current_links(links)
    opportunities = find_linking_opportunities(document.text, pages, links)
    anchors = analyze_anchor_text(links)
    max_opportunities = get_nested_config("content.max_link_opportunities", 10)

    logger.debug("Internal linking: %d internal links, %d opportunities",
                 link_analysis.internal, len(opportunities))
    return InternalLinkingResult(
        meta=InternalLinkingMeta(
            timestamp=datetime.now(timezone.utc).isoformat(),
            current_links=len(links),
            existing_pages=len(pages),
        ),
        link_analysis=link_analysis,
        opportunities=opportunities[:max_opportunities],
        anchor_analysis=anchors,
        recommendations=linking_recommendations(link_analysis, opportunities, anchors, document.word_count),
        score=calculate_linking_score(link_analysis, opportunities, anchors),
    )
