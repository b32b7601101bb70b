from typing import List

from ..core import AnalysisContent, CategoryDefinition, RuleCheckResult, rule_spec

TITLE_MIN, TITLE_MAX = 30, 60
DESCRIPTION_MIN, DESCRIPTION_MAX = 120, 160

NO_KEYWORDS = "No target keywords defined"


def keywords_in(text: str, keywords: List[str]) -> List[str]:
    lowered = text.lower()
    return [k for k in keywords if k.lower() in lowered]


def _length_message(label: str, length: int, low: int, high: int) -> str:
    if length == 0:
        return f"{label} is missing"
    if length < low:
        return f"{label} is too short ({length} chars). Recommended: {low}-{high} chars"
    if length > high:
        return f"{label} is too long ({length} chars). Recommended: {low}-{high} chars"
    return f"{label} length is optimal"


@rule_spec(
    "meta-title-exists", "meta", 10, "critical",
    title="Page Title Exists",
    description="Every page must have a title tag",
    recommendations=[
        "Add a unique, descriptive title for this page",
        "Include primary keywords in the title",
    ],
)
def check_title_exists(content: AnalysisContent) -> RuleCheckResult:
    passed = bool(content.title.strip())
    return RuleCheckResult(passed=passed, message="Page title is present" if passed else "Page title is missing")


@rule_spec(
    "meta-title-length", "meta", 8, "high",
    title="Page Title Length",
    description="Title should be between 30-60 characters",
    recommendations=[
        "Keep title between 30-60 characters for optimal display",
        "Titles longer than 60 chars may be truncated in search results",
    ],
)
def check_title_length(content: AnalysisContent) -> RuleCheckResult:
    length = len(content.title)
    passed = TITLE_MIN <= length <= TITLE_MAX
    return RuleCheckResult(
        passed=passed,
        message=_length_message("Title", length, TITLE_MIN, TITLE_MAX),
        warning=not passed,
    )


@rule_spec(
    "meta-title-keywords", "meta", 7, "high",
    title="Keywords in Title",
    description="Title should contain target keywords",
    recommendations=[
        "Include your primary keyword near the beginning of the title",
        "Make sure keywords appear naturally in the title",
    ],
)
def check_title_keywords(content: AnalysisContent) -> RuleCheckResult:
    if not content.keywords:
        return RuleCheckResult(passed=True, message=NO_KEYWORDS)

    found = keywords_in(content.title, content.keywords)
    if found:
        return RuleCheckResult(
            passed=True, message=f"Found {len(found)} keyword(s) in title: {', '.join(found)}")
    return RuleCheckResult(passed=False, message="No target keywords found in title")


@rule_spec(
    "meta-description-exists", "meta", 10, "critical",
    title="Meta Description Exists",
    description="Every page should have a meta description",
    recommendations=[
        "Add a compelling meta description that summarizes the page content",
        "Include a call-to-action to improve click-through rates",
    ],
)
def check_description_exists(content: AnalysisContent) -> RuleCheckResult:
    passed = bool(content.description.strip())
    return RuleCheckResult(
        passed=passed, message="Meta description is present" if passed else "Meta description is missing")


@rule_spec(
    "meta-description-length", "meta", 8, "high",
    title="Meta Description Length",
    description="Description should be between 120-160 characters",
    recommendations=[
        "Keep description between 120-160 characters",
        "Descriptions longer than 160 chars may be truncated in search results",
    ],
)
def check_description_length(content: AnalysisContent) -> RuleCheckResult:
    length = len(content.description)
    passed = DESCRIPTION_MIN <= length <= DESCRIPTION_MAX
    return RuleCheckResult(
        passed=passed,
        message=_length_message("Description", length, DESCRIPTION_MIN, DESCRIPTION_MAX),
        warning=not passed,
    )


@rule_spec(
    "meta-description-keywords", "meta", 6, "medium",
    title="Keywords in Description",
    description="Description should contain target keywords",
    recommendations=[
        "Include target keywords naturally in the meta description",
        "Avoid keyword stuffing - write for users, not just search engines",
    ],
)
def check_description_keywords(content: AnalysisContent) -> RuleCheckResult:
    if not content.keywords:
        return RuleCheckResult(passed=True, message=NO_KEYWORDS)

    found = keywords_in(content.description, content.keywords)
    if found:
        return RuleCheckResult(passed=True, message=f"Found {len(found)} keyword(s) in description")
    return RuleCheckResult(passed=False, message="No target keywords found in description")


DEFINITION = CategoryDefinition(
    category="meta",
    checks=[
        check_title_exists,
        check_title_length,
        check_title_keywords,
        check_description_exists,
        check_description_length,
        check_description_keywords,
    ],
)
