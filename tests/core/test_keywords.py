# tests/core/test_keywords.py
import pytest

from seo_grader.keywords.clustering import cluster_keywords, jaccard_similarity
from seo_grader.keywords.density import analyze_keyword_density, density_bucket, density_status
from seo_grader.keywords.difficulty import calculate_difficulty
from seo_grader.keywords.services import KeywordServices
from seo_grader.keywords.suggestions import is_code_word, parse_keyword_list
from seo_grader.utils.stopwords import STOPWORDS_EL

DOG_FOOD_TEXT = (
    "Organic dog food keeps dogs healthy. Buy organic dog food online today. "
    "Organic dog food delivery is fast. Many owners prefer organic dog food brands."
)
LONG_TEXT = " ".join([DOG_FOOD_TEXT] * 2)
GREEK_TEXT = " ".join(["Η οργανική τροφή για σκύλους είναι υγιεινή και φυσική επιλογή."] * 4)


@pytest.fixture
def services():
    return KeywordServices()


# --- Density ---

def test_density_scenario(services):
    analysis = services.analyze_keyword_density("SEO is great. SEO rules.", "seo")
    result = analysis.density_results[0]
    assert analysis.total_words == 5
    assert (result.count, result.density) == (2, 40.0)
    assert (result.status, result.bucket) == ("overused", "high")
    assert analysis.recommendations[0].action == "decrease"
    assert analysis.summary.overused == 1


def test_density_statuses_and_buckets():
    text = "seo " + "word " * 99
    analysis = analyze_keyword_density(text, ["seo", "absent"])
    optimal, missing = analysis.density_results
    assert (optimal.density, optimal.status, optimal.bucket) == (1.0, "optimal", "medium")
    assert (missing.count, missing.status, missing.bucket) == (0, "underused", "low")
    assert [d.section for d in analysis.distribution] == [
        "Introduction", "Early Content", "Middle Content", "Conclusion"]
    assert analysis.distribution[0].total_keywords == 1


@pytest.mark.parametrize("density, status, bucket", [
    (0.5, "underused", "low"), (1.0, "optimal", "medium"), (1.99, "optimal", "medium"),
    (2.0, "optimal", "high"), (3.0, "optimal", "high"), (3.5, "overused", "high"),
])
def test_density_thresholds(density, status, bucket):
    assert density_status(density) == status
    assert density_bucket(density) == bucket


def test_multi_word_keyword_counts_its_words():
    analysis = analyze_keyword_density("dog food and more dog-food here", "dog food")
    result = analysis.density_results[0]
    assert result.count == 2
    assert result.type == "phrase"
    assert result.density == round(2 * 2 / 6 * 100, 2)


@pytest.mark.parametrize("content, keywords", [("", "seo"), ("some text", ""), ("some text", [])])
def test_density_of_nothing_is_empty(content, keywords):
    analysis = analyze_keyword_density(content, keywords)
    assert analysis.density_results == []
    assert analysis.recommendations == []


# --- Long-tail ---

def test_long_tail_with_seed(services):
    result = services.generate_long_tail_keywords(DOG_FOOD_TEXT, ["dog food"])
    top = result.suggestions[0]
    assert top.phrase == "organic dog food"
    assert top.frequency == 4
    assert top.components.relevance == 40
    assert result.seed_keywords == ["dog food"]
    assert result.total_phrases == len(result.suggestions)


def test_long_tail_without_seeds_uses_base_relevance(services):
    result = services.generate_long_tail_keywords(DOG_FOOD_TEXT)
    assert result.suggestions
    assert all(s.components.relevance == 20 for s in result.suggestions)


def test_long_tail_with_empty_seed_list_is_empty(services):
    result = services.generate_long_tail_keywords(DOG_FOOD_TEXT, [])
    assert result.total_phrases == 0
    assert result.suggestions == []


def test_long_tail_needs_enough_text(services):
    assert services.generate_long_tail_keywords("dog food dog food").suggestions == []


def test_long_tail_respects_limit(services):
    result = services.generate_long_tail_keywords(DOG_FOOD_TEXT, max_suggestions=2)
    assert len(result.suggestions) == 2


# --- Clustering ---

def test_clustering_scenario():
    """Keywords sharing words group together; output is stable across runs."""
    keywords = ["dog food", "dog food brands", "cat toys", "cat toys cheap"]
    first = cluster_keywords(keywords)
    second = cluster_keywords(keywords)

    assert first == second
    assert first.total_clusters == 2
    assert [c.keywords for c in first.clusters] == [
        ["cat toys", "cat toys cheap"],
        ["dog food", "dog food brands"],
    ]
    assert first.clusters[1].related[0].similarity == 67
    assert first.clusters[1].suggested_name == "dog food"
    assert first.singleton == 0


def test_clustering_threshold_is_strict():
    assert jaccard_similarity("red apple", "red car") == pytest.approx(1 / 3)
    result = cluster_keywords(["red apple", "red car"], similarity_threshold=1 / 3)
    assert result.total_clusters == 2
    assert cluster_keywords(["red apple", "red car"], similarity_threshold=0.3).total_clusters == 1


def test_clustering_needs_two_keywords():
    assert cluster_keywords(["only one"]).total_clusters == 0
    assert cluster_keywords("").clusters == []


def test_semantic_strategy_groups_word_stems():
    result = cluster_keywords(["marketing tips", "market tips"], strategy="semantic")
    assert result.options["strategy"] == "semantic"
    assert result.total_clusters == 1


# --- LSI ---

def test_lsi_without_main_keywords_scores_neutral(services):
    result = services.generate_lsi_keywords(LONG_TEXT)
    assert result.lsi_keywords
    assert all(k.lsi_score == 50 for k in result.lsi_keywords)


def test_lsi_with_empty_main_keywords_is_empty(services):
    result = services.generate_lsi_keywords(LONG_TEXT, [])
    assert result.total_suggestions == 0
    assert result.lsi_keywords == []


def test_lsi_excludes_main_keywords(services):
    result = services.generate_lsi_keywords(LONG_TEXT, ["dog food"])
    keywords = [k.keyword for k in result.lsi_keywords]
    assert "dog food" not in keywords
    assert all(0 <= k.lsi_score <= 100 for k in result.lsi_keywords)
    scores = [(-k.lsi_score, -k.frequency) for k in result.lsi_keywords]
    assert scores == sorted(scores)


def test_lsi_needs_enough_text(services):
    assert services.generate_lsi_keywords("short text", ["dog"]).lsi_keywords == []


def test_lsi_detects_greek_content(services):
    result = services.generate_lsi_keywords(GREEK_TEXT)
    assert result.language == "el"
    assert result.lsi_keywords
    words = {word for k in result.lsi_keywords for word in k.keyword.split()}
    assert not words & STOPWORDS_EL


def test_lsi_uses_caller_language(services):
    assert services.generate_lsi_keywords(GREEK_TEXT, language="en").language == "en"
    assert services.generate_lsi_keywords(LONG_TEXT).language == "en"


# --- Difficulty ---

@pytest.mark.parametrize("keyword, score, level", [
    ("seo", 75, "hard"),
    ("best seo tools", 65, "hard"),
    ("seo 2024 guide", 40, "medium"),
    ("how to train a puppy at home", 20, "easy"),
])
def test_difficulty_heuristic(keyword, score, level):
    estimate = calculate_difficulty(keyword)
    assert (estimate.score, estimate.level) == (score, level)


def test_difficulty_content_adjustment():
    assert calculate_difficulty("seo", "SEO matters a lot").score == 70
    assert calculate_difficulty("seo", "Nothing relevant here").score == 80
    assert calculate_difficulty("seo", "Nothing relevant here").level == "very hard"


def test_difficulty_result(services):
    result = services.estimate_keyword_difficulty("seo, best seo tools, how to train a puppy at home")
    assert result.total_keywords == 3
    assert result.easiest[0].keyword == "how to train a puppy at home"
    assert result.hardest[0].keyword == "seo"
    assert (result.distribution.easy, result.distribution.hard) == (1, 2)
    assert services.estimate_keyword_difficulty([]).estimates == []


# --- Suggestions ---

def test_parse_keyword_list():
    assert parse_keyword_list("a, B ,,c") == ["a", "B", "c"]
    assert parse_keyword_list(["X ", None, ""], lowercase=True) == ["x"]
    assert parse_keyword_list(None) == []


@pytest.mark.parametrize("word, expected", [
    ("href", True), ("camelCase", True), ("snake_case", True), ("12345", True), ("garden", False),
])
def test_code_word_filter(word, expected):
    assert is_code_word(word) is expected


def test_suggest_keywords_ranks_frequent_terms(services):
    suggestions = services.suggest_keywords(DOG_FOOD_TEXT, max_suggestions=5)
    assert len(suggestions) == 5
    assert "organic dog food" in [s.keyword for s in suggestions]
    assert services.suggest_keywords("too short") == []


def test_suggestions_follow_content_language(services):
    detected = {s.keyword for s in services.suggest_keywords(GREEK_TEXT, max_suggestions=50)}
    as_english = {s.keyword for s in services.suggest_keywords(GREEK_TEXT, max_suggestions=50, language="en")}

    assert "οργανική" in detected
    assert not detected & {"και", "είναι", "για"}
    assert {"και", "είναι", "για"} <= as_english
