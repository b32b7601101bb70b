import re

from ..core import AnalysisContent, CategoryDefinition, RuleCheckResult, rule_spec
from .meta import NO_KEYWORDS

NO_URL = "No URL provided for analysis"

GENERIC_ANCHORS = frozenset({"click here", "read more", "here", "link", "more", "this"})
PLACEHOLDER_HREFS = frozenset({"", "#", "javascript:void(0)", "javascript:;"})

MAX_URL_PATH = 75
MAX_URL_DEPTH = 3
MAX_HTML_KB = 100

_ORIGIN_RE = re.compile(r'^https?://[^/]+', re.IGNORECASE)
_POOR_IMAGE_NAME_RE = re.compile(r'^(img|image|photo|pic|picture|dsc|screenshot)\d*$', re.IGNORECASE)


def url_path(url: str) -> str:
    """The URL with its scheme and host removed."""
    return _ORIGIN_RE.sub("", url)


def image_file_stem(src: str) -> str:
    name = src.split("/")[-1].split("?")[0]
    return name.split(".")[0]


@rule_spec(
    "internal-links", "technical", 4, "low",
    title="Internal Links",
    description="Content should include internal links",
    recommendations=[
        "Add internal links to related content on your site",
        "Use descriptive anchor text for links",
        "Link to important pages to distribute page authority",
    ],
)
def check_internal_links(content: AnalysisContent) -> RuleCheckResult:
    internal = sum(1 for link in content.links if link.type == "internal")
    if internal:
        return RuleCheckResult(passed=True, message=f"Found {internal} internal link(s)")
    return RuleCheckResult(passed=False, message="No internal links found")


@rule_spec(
    "external-links", "technical", 3, "low",
    title="External Links",
    description="Content should include relevant external links",
    recommendations=[
        "Link to authoritative external sources when relevant",
        'Add rel="noopener noreferrer" to external links for security',
    ],
)
def check_external_links(content: AnalysisContent) -> RuleCheckResult:
    external = sum(1 for link in content.links if link.type == "external")
    if external:
        return RuleCheckResult(passed=True, message=f"Found {external} external link(s)")
    return RuleCheckResult(passed=False, message="No external links found", warning=True)


@rule_spec(
    "link-anchor-text", "technical", 4, "medium",
    title="Descriptive Link Anchor Text",
    description="Links should have descriptive anchor text",
    recommendations=[
        "Use descriptive, keyword-rich anchor text",
        'Avoid generic text like "click here" or "read more"',
        "Anchor text should describe the destination",
    ],
)
def check_link_anchor_text(content: AnalysisContent) -> RuleCheckResult:
    if not content.links:
        return RuleCheckResult(passed=True, message="No links found")

    poor = 0
    for link in content.links:
        text = link.text.lower().strip()
        if len(text) < 3 or text in GENERIC_ANCHORS:
            poor += 1

    if poor == 0:
        return RuleCheckResult(passed=True, message="All links have descriptive anchor text")
    return RuleCheckResult(passed=False, message=f"{poor} link(s) have poor anchor text")


@rule_spec(
    "image-file-names", "technical", 3, "low",
    title="Descriptive Image File Names",
    description="Image file names should be descriptive",
    recommendations=[
        "Use descriptive, keyword-rich image file names",
        'Avoid generic names like "image1.jpg" or "DSC001.jpg"',
        "Use hyphens to separate words in file names",
    ],
)
def check_image_file_names(content: AnalysisContent) -> RuleCheckResult:
    if not content.images:
        return RuleCheckResult(passed=True, message="No images found")

    poor = 0
    for img in content.images:
        stem = image_file_stem(img.src)
        if len(stem) < 3 or stem.isdigit() or _POOR_IMAGE_NAME_RE.match(stem):
            poor += 1

    if poor == 0:
        return RuleCheckResult(passed=True, message="All images have descriptive file names")
    return RuleCheckResult(passed=False, message=f"{poor} image(s) have generic file names", warning=True)


@rule_spec(
    "broken-links-check", "technical", 5, "medium",
    title="Link Validity",
    description="Check for potentially broken links",
    recommendations=[
        "Ensure all links have valid destinations",
        "Avoid empty or placeholder links",
        "Regularly check for broken links",
    ],
)
def check_broken_links(content: AnalysisContent) -> RuleCheckResult:
    """Placeholder hrefs only; nothing is fetched."""
    if not content.links:
        return RuleCheckResult(passed=True, message="No links to check")

    suspicious = sum(1 for link in content.links if link.href.strip() in PLACEHOLDER_HREFS)
    if suspicious == 0:
        return RuleCheckResult(passed=True, message="All links appear valid")
    return RuleCheckResult(passed=False, message=f"{suspicious} suspicious or empty link(s) found")


@rule_spec(
    "schema-markup", "technical", 4, "low",
    title="Schema Markup Detection",
    description="Check for structured data markup",
    recommendations=[
        "Add structured data markup (Schema.org)",
        "Use JSON-LD format for best compatibility",
        "Implement relevant schema types (Article, Product, etc.)",
        "Test with Google Rich Results Test",
    ],
)
def check_schema_markup(content: AnalysisContent) -> RuleCheckResult:
    html = content.html
    detected = [
        name for name, present in (
            ("JSON-LD", "application/ld+json" in html),
            ("Microdata", "itemscope" in html or "itemprop" in html),
            ("RDFa", "vocab=" in html or "typeof=" in html),
        ) if present
    ]
    if detected:
        return RuleCheckResult(passed=True, message=f"Schema markup detected: {', '.join(detected)}")
    return RuleCheckResult(passed=False, message="No schema markup detected", warning=True)


@rule_spec(
    "url-length", "technical", 4, "medium",
    title="URL Length",
    description="URL should be concise and under 75 characters",
    recommendations=[
        "Keep URLs under 75 characters when possible",
        "Use short, descriptive URLs",
        "Avoid unnecessary parameters and subdirectories",
    ],
)
def check_url_length(content: AnalysisContent) -> RuleCheckResult:
    if not content.url:
        return RuleCheckResult(passed=True, message=NO_URL)

    length = len(url_path(content.url))
    message = "URL is root path" if length == 0 else f"URL path length: {length} characters"
    return RuleCheckResult(passed=length <= MAX_URL_PATH, message=message, warning=length > 100)


@rule_spec(
    "url-keywords", "technical", 5, "medium",
    title="Keywords in URL",
    description="URL should contain target keywords",
    recommendations=[
        "Include primary keyword in URL",
        "Use hyphens to separate words in URLs",
        "Keep URLs descriptive and relevant to content",
    ],
)
def check_url_keywords(content: AnalysisContent) -> RuleCheckResult:
    if not content.url:
        return RuleCheckResult(passed=True, message=NO_URL)
    if not content.keywords:
        return RuleCheckResult(passed=True, message=NO_KEYWORDS)

    url = content.url.lower()
    found = [k for k in content.keywords if re.sub(r'\s+', '-', k.lower()) in url]
    if found:
        return RuleCheckResult(passed=True, message=f"Found keyword(s) in URL: {', '.join(found)}")
    return RuleCheckResult(passed=False, message="No target keywords found in URL")


@rule_spec(
    "url-structure", "technical", 4, "medium",
    title="Clean URL Structure",
    description="URL should be clean and readable",
    recommendations=[
        "Use lowercase letters in URLs",
        "Use hyphens instead of underscores",
        "Avoid special characters and spaces",
        "Minimize URL parameters",
        "Avoid auto-generated IDs in URLs when possible",
    ],
)
def check_url_structure(content: AnalysisContent) -> RuleCheckResult:
    url = content.url
    if not url:
        return RuleCheckResult(passed=True, message=NO_URL)

    problems = []
    if "_" in url:
        problems.append("Contains underscores (use hyphens instead)")
    if "%20" in url:
        problems.append("Contains URL-encoded spaces")
    if re.search(r'[A-Z]', url):
        problems.append("Contains uppercase letters")
    if "?" in url:
        params = len(re.findall(r'[?&]', url))
        if params > 2:
            problems.append(f"Too many URL parameters ({params})")
    if re.search(r'\d{5,}', url):
        problems.append("Contains long number sequences")

    if not problems:
        return RuleCheckResult(passed=True, message="URL structure is clean and SEO-friendly")
    return RuleCheckResult(passed=False, message=f"URL issues: {', '.join(problems)}")


@rule_spec(
    "url-depth", "technical", 3, "low",
    title="URL Depth",
    description="URL should not be too deeply nested",
    recommendations=[
        "Keep URL structure shallow (3 levels or less)",
        "Flat URL structures are easier to crawl and understand",
        "Consider restructuring deep hierarchies",
    ],
)
def check_url_depth(content: AnalysisContent) -> RuleCheckResult:
    if not content.url:
        return RuleCheckResult(passed=True, message=NO_URL)

    depth = url_path(content.url).count("/")
    return RuleCheckResult(passed=depth <= MAX_URL_DEPTH, message=f"URL depth: {depth} level(s)", warning=depth > 4)


@rule_spec(
    "viewport-meta", "technical", 7, "high",
    title="Mobile Viewport Meta Tag",
    description="Page must have viewport meta tag for mobile optimization",
    recommendations=[
        'Add viewport meta tag: <meta name="viewport" content="width=device-width, initial-scale=1">',
        "Viewport is essential for mobile-friendliness",
        "Ensure responsive design for all screen sizes",
    ],
)
def check_viewport(content: AnalysisContent) -> RuleCheckResult:
    viewport = content.meta_tags.viewport
    if viewport:
        return RuleCheckResult(passed=True, message=f"Viewport configured: {viewport}")
    return RuleCheckResult(passed=False, message="Viewport meta tag is missing")


@rule_spec(
    "canonical-url", "technical", 7, "high",
    title="Canonical URL",
    description="Page should specify canonical URL to avoid duplicate content",
    recommendations=[
        'Add canonical link: <link rel="canonical" href="https://example.com/page">',
        "Prevents duplicate content issues",
        "Helps search engines understand preferred URL",
    ],
)
def check_canonical(content: AnalysisContent) -> RuleCheckResult:
    canonical = content.meta_tags.canonical
    if canonical:
        return RuleCheckResult(passed=True, message=f"Canonical URL defined: {canonical}")
    return RuleCheckResult(passed=False, message="Canonical URL not specified", warning=True)


@rule_spec(
    "robots-meta", "technical", 5, "medium",
    title="Robots Meta Tag",
    description="Check robots meta tag configuration",
    recommendations=[
        "Ensure robots meta tag allows indexing for public pages",
        'Use "noindex" only for pages you want excluded from search',
        "Check robots.txt file as well",
    ],
)
def check_robots(content: AnalysisContent) -> RuleCheckResult:
    robots = content.meta_tags.robots
    if not robots:
        return RuleCheckResult(passed=True, message="No robots meta tag (default: index, follow)")

    lowered = robots.lower()
    blocking = [d for d in ("noindex", "nofollow") if d in lowered]
    if blocking:
        return RuleCheckResult(
            passed=False,
            message=f"Robots directives may limit indexing: {', '.join(blocking)}",
            warning=True,
        )
    return RuleCheckResult(passed=True, message=f"Robots meta tag configured: {robots}")


@rule_spec(
    "https-protocol", "technical", 10, "critical",
    title="HTTPS/SSL Security",
    description="Page should use HTTPS protocol for security",
    recommendations=[
        "Install SSL certificate for HTTPS",
        "HTTPS is a ranking factor for Google",
        "Protects user data and improves trust",
        "Redirect all HTTP traffic to HTTPS",
    ],
)
def check_https(content: AnalysisContent) -> RuleCheckResult:
    if not content.url:
        return RuleCheckResult(passed=True, message="No URL provided for protocol check")
    if content.url.lower().startswith("https://"):
        return RuleCheckResult(passed=True, message="Page uses secure HTTPS protocol")
    return RuleCheckResult(passed=False, message="Page uses insecure HTTP protocol")


@rule_spec(
    "semantic-html", "technical", 5, "medium",
    title="Semantic HTML5 Structure",
    description="Page should use semantic HTML5 elements",
    recommendations=[
        "Use semantic HTML5 tags: <header>, <nav>, <main>, <article>, <footer>",
        "Improves accessibility and SEO",
        "Helps search engines understand page structure",
    ],
)
def check_semantic_html(content: AnalysisContent) -> RuleCheckResult:
    structure = content.structural_elements
    score = structure.semantic_score
    found = [
        tag for tag, present in (
            ("header", structure.has_header),
            ("nav", structure.has_nav),
            ("main", structure.has_main),
            ("article", structure.has_article),
            ("footer", structure.has_footer),
        ) if present
    ]
    message = (f"Found semantic elements: {', '.join(found)} ({score}/5)"
               if found else "No semantic HTML5 elements found")
    return RuleCheckResult(passed=score >= 3, message=message, warning=score < 3)


@rule_spec(
    "html-lang", "technical", 5, "medium",
    title="HTML Language Declaration",
    description="HTML tag should declare page language",
    recommendations=[
        'Add lang attribute to <html> tag: <html lang="en">',
        "Use correct language code (en, el, fr, etc.)",
        "Helps screen readers and search engines",
    ],
)
def check_html_lang(content: AnalysisContent) -> RuleCheckResult:
    language = content.meta_tags.language
    if language:
        return RuleCheckResult(passed=True, message=f"Language declared: {language}")
    return RuleCheckResult(passed=False, message="HTML language attribute not set")


@rule_spec(
    "charset-declaration", "technical", 6, "high",
    title="Character Encoding",
    description="Page should declare character encoding",
    recommendations=[
        'Add charset meta tag: <meta charset="UTF-8">',
        "UTF-8 supports all languages and special characters",
        "Place charset declaration early in <head>",
    ],
)
def check_charset(content: AnalysisContent) -> RuleCheckResult:
    charset = content.meta_tags.charset
    if not charset:
        return RuleCheckResult(passed=False, message="Character encoding not declared")
    if charset.lower() == "utf-8":
        return RuleCheckResult(passed=True, message=f"Charset declared: {charset} (recommended)")
    return RuleCheckResult(passed=True, message=f"Charset declared: {charset}", warning=True)


@rule_spec(
    "html-validation", "technical", 3, "low",
    title="Basic HTML Structure",
    description="Check for basic HTML structure elements",
    recommendations=[
        "Ensure proper HTML document structure",
        "Include <!DOCTYPE html> declaration",
        "Validate HTML with W3C validator",
    ],
)
def check_html_structure(content: AnalysisContent) -> RuleCheckResult:
    html = content.html
    if not html:
        return RuleCheckResult(passed=True, message="No HTML content to validate")

    missing = [f"Missing <{tag}> tag" for tag in ("html", "head", "body", "title")
               if not re.search(rf'<{tag}[^>]*>', html, re.IGNORECASE)]
    if not missing:
        return RuleCheckResult(passed=True, message="Basic HTML structure is valid")
    return RuleCheckResult(passed=False, message=f"Structure issues: {', '.join(missing)}", warning=True)


@rule_spec(
    "accessibility-basics", "technical", 5, "medium",
    title="Basic Accessibility",
    description="Check basic accessibility requirements",
    recommendations=[
        "Add alt text to all images",
        "Use single H1 per page",
        "Ensure all links have descriptive text",
        "Test with screen readers",
        "Follow WCAG guidelines",
    ],
)
def check_accessibility(content: AnalysisContent) -> RuleCheckResult:
    problems = []

    no_alt = sum(1 for img in content.images if not img.alt.strip())
    if no_alt:
        problems.append(f"{no_alt} image(s) without alt text")

    h1 = content.heading_count("h1")
    if h1 == 0:
        problems.append("No H1 heading (required for screen readers)")
    elif h1 > 1:
        problems.append("Multiple H1 headings (should have only one)")

    empty_links = sum(1 for link in content.links if not link.text.strip())
    if empty_links:
        problems.append(f"{empty_links} link(s) without text")

    if not problems:
        return RuleCheckResult(passed=True, message="Basic accessibility checks passed")
    return RuleCheckResult(passed=False, message=f"Accessibility issues: {', '.join(problems)}", warning=True)


@rule_spec(
    "page-size-estimate", "technical", 3, "low",
    title="Page Size Performance",
    description="Estimate page size for performance",
    recommendations=[
        "Keep HTML under 100KB for better performance",
        "Minify HTML for production",
        "Remove unnecessary whitespace and comments",
        "Consider lazy loading for large content",
    ],
)
def check_page_size(content: AnalysisContent) -> RuleCheckResult:
    size_kb = round(len(content.html) / 1024, 1)
    return RuleCheckResult(
        passed=size_kb < MAX_HTML_KB,
        message=f"Estimated HTML size: {size_kb} KB",
        warning=size_kb > 150,
    )


DEFINITION = CategoryDefinition(
    category="technical",
    checks=[
        check_internal_links,
        check_external_links,
        check_link_anchor_text,
        check_image_file_names,
        check_broken_links,
        check_schema_markup,
        check_url_length,
        check_url_keywords,
        check_url_structure,
        check_url_depth,
        check_viewport,
        check_canonical,
        check_robots,
        check_https,
        check_semantic_html,
        check_html_lang,
        check_charset,
        check_html_structure,
        check_accessibility,
        check_page_size,
    ],
)
