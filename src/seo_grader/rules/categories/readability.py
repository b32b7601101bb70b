import re

from ..core import AnalysisContent, CategoryDefinition, RuleCheckResult, rule_spec

MAX_PARAGRAPH_WORDS = 150
MAX_AVG_SENTENCE_WORDS = 20
FLESCH_TARGET = (60, 80)
LIST_THRESHOLD_WORDS = 500

_LIST_RE = re.compile(r'<(ul|ol)\b', re.IGNORECASE)


@rule_spec(
    "paragraph-length", "readability", 3, "low",
    title="Paragraph Length",
    description="Paragraphs should be reasonably sized for readability",
    recommendations=[
        "Keep paragraphs under 150 words for better readability",
        "Break long paragraphs into smaller chunks",
        "Use bullet points or lists for long content",
    ],
)
def check_paragraph_length(content: AnalysisContent) -> RuleCheckResult:
    if not content.paragraphs:
        return RuleCheckResult(passed=True, message="No paragraphs to analyze")

    long_paragraphs = sum(1 for p in content.paragraphs if len(p.split()) > MAX_PARAGRAPH_WORDS)
    if long_paragraphs == 0:
        return RuleCheckResult(passed=True, message="All paragraphs are reasonably sized")
    return RuleCheckResult(
        passed=False,
        message=f"{long_paragraphs} paragraph(s) exceed {MAX_PARAGRAPH_WORDS} words",
        warning=True,
    )


@rule_spec(
    "readability-score", "readability", 5, "medium",
    title="Content Readability",
    description="Content should be easily readable (Flesch Reading Ease)",
    recommendations=[
        "Aim for a Flesch Reading Ease score of 60-80",
        "Use shorter sentences for better readability",
        "Avoid complex vocabulary when simpler words work",
        "Write for your target audience level",
    ],
)
def check_readability_score(content: AnalysisContent) -> RuleCheckResult:
    score = content.readability.score
    low, high = FLESCH_TARGET

    message = f"Readability score: {score} ({content.readability.level})"
    if score < low:
        message += " - Content may be too complex"
    elif score > high:
        message += " - Content may be too simple"

    return RuleCheckResult(passed=low <= score <= high, message=message, warning=score < 50 or score > 90)


@rule_spec(
    "sentence-length", "readability", 3, "low",
    title="Sentence Length",
    description="Sentences should be concise and easy to read",
    recommendations=[
        "Keep average sentence length under 20 words",
        "Mix short and long sentences for better flow",
        "Break complex sentences into simpler ones",
    ],
)
def check_sentence_length(content: AnalysisContent) -> RuleCheckResult:
    text = content.text
    if not text:
        return RuleCheckResult(passed=True, message="No content to analyze")

    sentences = [s for s in re.split(r'[.!?]+', text) if s.strip()]
    if not sentences:
        return RuleCheckResult(passed=True, message="No sentences found")

    average = len(text.split()) / len(sentences)
    return RuleCheckResult(
        passed=average <= MAX_AVG_SENTENCE_WORDS,
        message=f"Average sentence length: {average:.1f} words",
        warning=average > 25,
    )


@rule_spec(
    "list-usage", "readability", 2, "low",
    title="List Elements Usage",
    description="Check for proper use of lists for better readability",
    recommendations=[
        "Use bullet points or numbered lists for sequential information",
        "Break down complex information into lists",
        "Lists improve scannability and readability",
    ],
)
def check_list_usage(content: AnalysisContent) -> RuleCheckResult:
    has_lists = bool(_LIST_RE.search(content.html))
    needs_lists = content.word_count > LIST_THRESHOLD_WORDS

    if has_lists:
        message = "Lists used for better content structure"
    elif needs_lists:
        message = "Consider using lists to organize information"
    else:
        message = "No lists needed for short content"

    return RuleCheckResult(passed=has_lists or not needs_lists, message=message, warning=needs_lists and not has_lists)


DEFINITION = CategoryDefinition(
    category="readability",
    checks=[
        check_paragraph_length,
        check_readability_score,
        check_sentence_length,
        check_list_usage,
    ],
)
