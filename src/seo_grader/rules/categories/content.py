import math

from seo_grader.keywords.density import calculate_keyword_density

from ..core import AnalysisContent, CategoryDefinition, RuleCheckResult, rule_spec
from .meta import NO_KEYWORDS, keywords_in

MIN_WORDS = 300
COMFORTABLE_WORDS = 500
DENSITY_RANGE = (1.0, 3.0)
WORDS_PER_IMAGE = 300

TEMPORAL_WORDS = (
    "today", "yesterday", "last week", "this month",
    "current", "latest", "recent", "updated",
)


@rule_spec(
    "content-length", "content", 8, "high",
    title="Content Length",
    description="Content should have at least 300 words",
    recommendations=[
        "Aim for at least 300 words of quality content",
        "Longer content (500-1000+ words) often ranks better",
        "Focus on providing comprehensive, valuable information",
    ],
)
def check_content_length(content: AnalysisContent) -> RuleCheckResult:
    words = content.word_count
    message = f"Content has {words} words"
    if words < MIN_WORDS:
        message += f". Recommended minimum: {MIN_WORDS} words"
    return RuleCheckResult(passed=words >= MIN_WORDS, message=message, warning=words < COMFORTABLE_WORDS)


@rule_spec(
    "keyword-density", "content", 6, "medium",
    title="Keyword Density",
    description="Keywords should appear 1-3% of total words",
    recommendations=[
        "Maintain keyword density between 1-3%",
        "Use keywords naturally throughout the content",
        "Include keyword variations and synonyms",
    ],
)
def check_keyword_density(content: AnalysisContent) -> RuleCheckResult:
    if not content.keywords:
        return RuleCheckResult(passed=True, message=NO_KEYWORDS)
    if content.word_count == 0:
        return RuleCheckResult(passed=False, message="No content to analyze")

    # Only the primary (first) keyword is graded.
    result = calculate_keyword_density(content.text, content.keywords[0])
    low, high = DENSITY_RANGE
    return RuleCheckResult(
        passed=low <= result.density <= high,
        message=f"Primary keyword density: {result.density:.2f}% ({result.count} occurrences)",
        warning=result.density > high or result.density < 0.5,
    )


@rule_spec(
    "headings-structure", "content", 7, "medium",
    title="Heading Structure",
    description="Content should use proper heading hierarchy (H1, H2, H3)",
    recommendations=[
        "Use exactly one H1 heading per page",
        "Include H2 headings to structure your content",
        "Use heading hierarchy properly (H1 > H2 > H3)",
    ],
)
def check_headings_structure(content: AnalysisContent) -> RuleCheckResult:
    h1 = content.heading_count("h1")
    h2 = content.heading_count("h2")

    if h1 == 0:
        message = "Missing H1 heading"
    elif h1 > 1:
        message = f"Multiple H1 headings found ({h1}). Should have exactly one"
    elif h2 == 0:
        message = "No H2 headings found. Add subheadings to structure content"
    else:
        message = f"Proper heading structure: 1 H1, {h2} H2 headings"

    return RuleCheckResult(passed=h1 == 1 and h2 > 0, message=message)


@rule_spec(
    "headings-keywords", "content", 5, "medium",
    title="Keywords in Headings",
    description="Headings should contain target keywords",
    recommendations=[
        "Include target keywords in your H1 and H2 headings",
        "Use keywords naturally in heading text",
    ],
)
def check_headings_keywords(content: AnalysisContent) -> RuleCheckResult:
    if not content.keywords:
        return RuleCheckResult(passed=True, message=NO_KEYWORDS)

    all_headings = " ".join(text for texts in content.headings.values() for text in texts)
    found = keywords_in(all_headings, content.keywords)
    if found:
        return RuleCheckResult(passed=True, message=f"Found keywords in headings: {', '.join(found)}")
    return RuleCheckResult(passed=False, message="No target keywords found in headings")


@rule_spec(
    "images-alt-text", "content", 6, "medium",
    title="Image Alt Text",
    description="All images should have descriptive alt text",
    recommendations=[
        "Add descriptive alt text to all images",
        "Include keywords in alt text when relevant",
        "Keep alt text concise and descriptive",
    ],
)
def check_images_alt_text(content: AnalysisContent) -> RuleCheckResult:
    total = len(content.images)
    if total == 0:
        return RuleCheckResult(passed=True, message="No images found")

    missing = sum(1 for img in content.images if not img.alt.strip())
    if missing == 0:
        return RuleCheckResult(passed=True, message=f"All {total} images have alt text")
    return RuleCheckResult(passed=False, message=f"{missing} of {total} images missing alt text")


@rule_spec(
    "heading-hierarchy", "content", 5, "medium",
    title="Heading Hierarchy",
    description="Headings should follow proper hierarchy without skipping levels",
    recommendations=[
        "Use headings in sequential order (H1 → H2 → H3)",
        "Do not skip heading levels",
        "Maintain logical document structure",
    ],
)
def check_heading_hierarchy(content: AnalysisContent) -> RuleCheckResult:
    counts = {level: content.heading_count(level) for level in ("h1", "h2", "h3", "h4")}

    problems = []
    if counts["h3"] and not counts["h2"]:
        problems.append("H3 used without H2")
    if counts["h4"] and not counts["h3"]:
        problems.append("H4 used without H3")

    message = (f"Heading hierarchy issues: {', '.join(problems)}"
               if problems else "Proper heading hierarchy maintained")
    return RuleCheckResult(passed=not problems and counts["h1"] == 1, message=message)


@rule_spec(
    "content-freshness", "content", 2, "low",
    title="Content Structure Indicators",
    description="Check for time-sensitive content structure",
    recommendations=[
        "Update time-sensitive content regularly",
        "Add publication/update dates to content",
        "Review and refresh old content periodically",
    ],
)
def check_content_freshness(content: AnalysisContent) -> RuleCheckResult:
    """Informational: always passes, warns when the text dates itself."""
    text = content.text.lower()
    temporal = any(word in text for word in TEMPORAL_WORDS)
    message = ("Content contains time-sensitive information - ensure regular updates"
               if temporal else "No time-sensitive indicators found")
    return RuleCheckResult(passed=True, message=message, warning=temporal)


@rule_spec(
    "content-uniqueness", "content", 7, "high",
    title="Content Uniqueness Check",
    description="Check for repetitive or duplicate content patterns",
    recommendations=[
        "Ensure all content is unique and original",
        "Avoid copying and pasting duplicate text",
        "Use plagiarism checkers for verification",
        "Rewrite similar sections with unique content",
    ],
)
def check_content_uniqueness(content: AnalysisContent) -> RuleCheckResult:
    if len(content.paragraphs) < 2:
        return RuleCheckResult(passed=True, message="Not enough paragraphs to analyze")

    unique = {p.lower().strip() for p in content.paragraphs}
    duplicates = len(content.paragraphs) - len(unique)
    if duplicates == 0:
        return RuleCheckResult(passed=True, message="No duplicate content detected")
    return RuleCheckResult(passed=False, message=f"{duplicates} duplicate paragraph(s) found", warning=True)


@rule_spec(
    "multimedia-content", "content", 3, "low",
    title="Multimedia Content",
    description="Content should include images or other media",
    recommendations=[
        "Include relevant images to break up text",
        "Add at least one image per 300 words of content",
        "Use charts, infographics, or screenshots when relevant",
        "Ensure all media files are optimized for web",
    ],
)
def check_multimedia_content(content: AnalysisContent) -> RuleCheckResult:
    words = content.word_count
    if words == 0:
        return RuleCheckResult(passed=True, message="No content to analyze")

    images = len(content.images)
    # One image per 300 words is advised, but a single image is enough to pass.
    required = min(math.ceil(words / WORDS_PER_IMAGE), 1)
    message = "No images found. Consider adding visual content" if images == 0 else f"{images} image(s) found"
    return RuleCheckResult(passed=images >= required, message=message, warning=images == 0 and words > MIN_WORDS)


DEFINITION = CategoryDefinition(
    category="content",
    checks=[
        check_content_length,
        check_keyword_density,
        check_headings_structure,
        check_headings_keywords,
        check_images_alt_text,
        check_heading_hierarchy,
        check_content_freshness,
        check_content_uniqueness,
        check_multimedia_content,
    ],
)
