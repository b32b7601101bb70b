# src/seo_grader/recommendations/templates.py
"""
Per-rule lookup tables for the recommendation engine.

Texts live in `translations`; these tables only hold keys, types and data.
"""
from typing import Any, Callable, Dict, List, Optional, Tuple

# rule id -> ((action key, action type), ...)
ACTION_TEMPLATES: Dict[str, Tuple[Tuple[str, str], ...]] = {
    "meta-title-exists": (("title_add", "action"), ("title_keywords", "action"), ("title_unique", "check")),
    "meta-title-length": (("title_length", "action"), ("title_preview", "check")),
    "meta-title-keywords": (("title_keyword_natural", "action"), ("title_keywords", "action")),
    "meta-description-exists": (("description_add", "action"), ("description_cta", "note")),
    "meta-description-length": (("description_length", "action"),),
    "meta-description-keywords": (("description_keyword", "action"),),
    "content-length": (("content_expand", "action"), ("content_questions", "note")),
    "keyword-density": (("density_adjust", "action"), ("density_synonyms", "note")),
    "headings-structure": (("h1_single", "check"), ("h2_sections", "action")),
    "images-alt-text": (("alt_add", "action"), ("alt_decorative", "note")),
    "viewport-meta": (("viewport_add", "action"), ("viewport_test", "check")),
    "canonical-url": (("canonical_add", "action"), ("canonical_consistent", "check")),
    "https-protocol": (("https_certificate", "action"), ("https_redirect", "action"), ("https_mixed", "check")),
    "html-lang": (("lang_add", "action"),),
    "charset-declaration": (("charset_add", "action"),),
    "robots-meta": (("robots_review", "check"),),
    "readability-score": (("readability_sentences", "action"), ("readability_paragraphs", "action")),
    "semantic-html": (("semantic_tags", "action"),),
    "internal-links": (("internal_links_add", "action"),),
}

QUICK, MODERATE, SIGNIFICANT = "quick", "moderate", "significant"

EFFORT_BY_RULE: Dict[str, str] = {
    "meta-title-exists": QUICK,
    "meta-title-length": QUICK,
    "meta-title-keywords": QUICK,
    "meta-description-exists": QUICK,
    "meta-description-length": QUICK,
    "meta-description-keywords": QUICK,
    "viewport-meta": QUICK,
    "canonical-url": QUICK,
    "html-lang": QUICK,
    "charset-declaration": QUICK,
    "robots-meta": QUICK,
    "content-length": SIGNIFICANT,
    "content-uniqueness": SIGNIFICANT,
    "readability-score": SIGNIFICANT,
    "https-protocol": SIGNIFICANT,
    "semantic-html": SIGNIFICANT,
}

HEAVY_CATEGORIES = ("technical", "content")
HEAVY_WEIGHT = 7
LIGHT_WEIGHT = 3


def estimate_effort(rule_id: str, category: str, weight: float) -> str:
    """Table entry when present, otherwise heavy categories at weight >= 7 are significant, weight <= 3 quick."""
    if rule_id in EFFORT_BY_RULE:
        return EFFORT_BY_RULE[rule_id]
    if category in HEAVY_CATEGORIES and weight >= HEAVY_WEIGHT:
        return SIGNIFICANT
    if weight <= LIGHT_WEIGHT:
        return QUICK
    return MODERATE


def ranking_impact(severity: str) -> str:
    if severity in ("critical", "high"):
        return "high"
    if severity == "medium":
        return "medium"
    return "low"


def _title_steps(meta: Dict[str, Any]) -> List[Tuple[str, Dict[str, Any], str]]:
    length = len(meta.get("title") or "")
    if 0 < length < 30:
        return [("title_too_short", {"length": length, "missing": 30 - length}, "action")]
    if length > 60:
        return [("title_too_long", {"length": length, "excess": length - 60}, "action")]
    return []


def _description_steps(meta: Dict[str, Any]) -> List[Tuple[str, Dict[str, Any], str]]:
    length = len(meta.get("description") or "")
    if 0 < length < 120:
        return [("description_too_short", {"length": length, "missing": 120 - length}, "action")]
    if length > 160:
        return [("description_too_long", {"length": length, "excess": length - 160}, "action")]
    return []


def _content_steps(meta: Dict[str, Any]) -> List[Tuple[str, Dict[str, Any], str]]:
    words = meta.get("word_count") or 0
    return [("content_words", {"words": words, "missing": max(0, 300 - words)}, "note")]


def _canonical_steps(meta: Dict[str, Any]) -> List[Tuple[str, Dict[str, Any], str]]:
    if meta.get("url"):
        return [("canonical_tag", {"url": meta["url"]}, "action")]
    return []


def _alt_steps(meta: Dict[str, Any]) -> List[Tuple[str, Dict[str, Any], str]]:
    missing = sum(1 for img in meta.get("images") or [] if not (img.get("alt") or "").strip())
    return [("alt_missing", {"count": missing}, "note")] if missing else []


def _h1_steps(meta: Dict[str, Any]) -> List[Tuple[str, Dict[str, Any], str]]:
    count = len((meta.get("headings") or {}).get("h1", []))
    return [("h1_count", {"count": count}, "note")] if count != 1 else []


# Data-driven steps appended after the template; each returns (specific key, params, type).
SPECIFIC_STEPS: Dict[str, Callable[[Dict[str, Any]], List[Tuple[str, Dict[str, Any], str]]]] = {
    "meta-title-length": _title_steps,
    "meta-description-length": _description_steps,
    "content-length": _content_steps,
    "canonical-url": _canonical_steps,
    "images-alt-text": _alt_steps,
    "headings-structure": _h1_steps,
}


def build_example(rule_id: str, meta: Dict[str, Any]) -> Optional[Dict[str, str]]:
    url = meta.get("url") or "https://example.com/page"
    examples = {
        "meta-title-length": {
            "before": meta.get("title") or "Short Title",
            "after": "Optimized SEO Title with Keywords | Brand Name",
        },
        "meta-description-length": {
            "before": meta.get("description") or "Short description.",
            "after": "Comprehensive meta description that includes target keywords, provides clear value "
                     "proposition, and stays within 120-160 character limit for optimal display.",
        },
        "viewport-meta": {
            "before": "<head>\n  <title>Page</title>\n</head>",
            "after": '<head>\n  <meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
                     "  <title>Page</title>\n</head>",
        },
        "headings-structure": {
            "before": '<div class="title">Page Title</div>',
            "after": "<h1>Page Title</h1>",
        },
        "canonical-url": {
            "before": "<head>\n  <title>Page</title>\n</head>",
            "after": f'<head>\n  <link rel="canonical" href="{url}">\n  <title>Page</title>\n</head>',
        },
    }
    return examples.get(rule_id)


RESOURCES_BY_CATEGORY: Dict[str, Tuple[Dict[str, str], ...]] = {
    "meta": ({
        "title": "Google Search Central - Meta Tags",
        "url": "https://developers.google.com/search/docs/crawling-indexing/special-tags",
    },),
    "technical": ({
        "title": "Google Search Central - Technical SEO",
        "url": "https://developers.google.com/search/docs/fundamentals/seo-starter-guide",
    },),
    "content": ({
        "title": "Google Search Central - Helpful Content",
        "url": "https://developers.google.com/search/docs/fundamentals/creating-helpful-content",
    },),
}

READABILITY_RESOURCE = {"title": "Hemingway Editor - Readability Tool", "url": "https://hemingwayapp.com/"}


def resources_for(rule_id: str, category: str) -> List[Dict[str, str]]:
    resources = list(RESOURCES_BY_CATEGORY.get(category, ()))
    if "readability" in rule_id:
        resources.append(READABILITY_RESOURCE)
    return resources
