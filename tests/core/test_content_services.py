# tests/core/test_content_services.py
import pydantic
import pytest

from seo_grader.content.models import CompetitorContent, ExistingPage
from seo_grader.content.services import ContentServices

PARAGRAPH = "<p>" + " ".join(["organic"] * 60) + "</p>"
WELL_STRUCTURED = (
    "<h1>Organic Dog Food Guide</h1>"
    "<h2>Why organic food matters</h2>" + PARAGRAPH * 3 +
    "<h2>How to choose a brand</h2>" + PARAGRAPH * 2 +
    "<ul><li>Check the label</li><li>Compare prices</li></ul>"
    "<img src='dog.jpg' alt='Happy dog'>"
)


@pytest.fixture
def services():
    return ContentServices()


def words(n):
    return " ".join(["word"] * n)


# --- Structure ---

def test_well_structured_content(services):
    result = services.analyze_content_structure(WELL_STRUCTURED)

    assert result.score.score == 100
    assert result.score.label == "Excellent"
    assert result.headings.has_proper_hierarchy
    assert result.headings.hierarchy_issues == []
    assert (result.paragraphs.count, result.paragraphs.medium_paragraphs, result.paragraphs.avg_length) == (5, 5, 60)
    assert (result.lists.unordered_lists, result.lists.total_list_items, result.lists.avg_items_per_list) == (1, 2, 2)
    assert result.media.images_with_alt == 1
    assert [r.title for r in result.recommendations] == ["Excellent Structure"]


def test_poorly_structured_content(services):
    result = services.analyze_content_structure("<h3>Sub</h3><p>short text</p><img src='a.png'>")

    assert result.headings.hierarchy_issues == [
        "Missing H1 heading",
        "No H2 headings - add subheadings to structure content",
        "Heading hierarchy skip detected - H1 missing but H2 or lower exists",
    ]
    assert result.score.score == 10
    assert result.score.label == "Poor"
    assert [r.title for r in result.recommendations] == [
        "Add H1 Heading", "Add H2 Subheadings",
        "Heading Hierarchy Issue", "Heading Hierarchy Issue", "Heading Hierarchy Issue",
        "Add Alt Text to Images",
    ]
    assert result.recommendations[0].type == "error"


def test_multiple_h1_is_reported(services):
    result = services.analyze_content_structure("<h1>One</h1><h1>Two</h1><h2>Sub</h2>")
    assert not result.headings.has_h1
    assert "Multiple H1 headings (2) - should have only one" in result.headings.hierarchy_issues


def test_videos_and_embeds_count_as_media(services):
    result = services.analyze_content_structure("<video src='a.mp4'></video><iframe src='https://x.test'></iframe>")
    assert (result.media.videos, result.media.embeds, result.media.total_media) == (1, 1, 2)
    assert result.media.has_media


def test_plain_text_structure(services):
    result = services.analyze_content_structure("just some plain words")
    assert result.meta.word_count == 4
    assert result.paragraphs.is_empty
    assert not result.lists.has_lists
    assert result.to_record()["meta"]["wordCount"] == 4


# --- Headings ---

def test_heading_optimization(services):
    content = ("<h1>Organic dog food guide</h1><h2>Buying tips</h2>"
               "<h2>Why organic food is better for every dog and every owner today</h2>")
    result = services.optimize_headings(content, ["dog food", "organic", "puppy"])

    usage = {u.keyword: u.count for u in result.keyword_usage.usage}
    assert usage == {"dog food": 1, "organic": 2, "puppy": 0}
    assert result.keyword_usage.percentage == 67
    assert (result.length_analysis.optimal, result.length_analysis.too_long, result.length_analysis.too_short) == (1, 1, 1)
    assert result.score.score == 71
    assert result.score.label == "Good"
    assert [s.title for s in result.suggestions] == [
        "Include Keywords in Headings", "Shorten Long Headings", "Expand Short Headings",
    ]
    assert result.suggestions[0].message.endswith(": puppy")
    assert result.meta.keywords_provided == 3


def test_headings_without_keywords_get_full_keyword_marks(services):
    result = services.optimize_headings("<h1>One two three</h1><h2>Four five six</h2>")
    assert result.score.score == 100
    assert [s.title for s in result.suggestions] == ["Well-Optimized Headings"]


def test_no_keywords_in_headings_warns(services):
    result = services.optimize_headings("<h1>One two three</h1><h2>Four five six</h2>", "seo, puppy")
    titles = [s.title for s in result.suggestions]
    assert "No Keywords in Headings" in titles
    assert result.keyword_usage.total_keywords == 2


# --- Internal links ---

LINKED_PAGE = (
    "<p>Our organic dog food guide covers puppy nutrition and grooming basics.</p>"
    "<a href='/guide'>Organic dog food guide</a> <a href='/more'>click here</a> <a href='/empty'></a>"
    "<a href='https://other.org/x'>Other</a> <a href='#top'>Top</a> "
    "<a href='mailto:a@b.c'>Mail</a> <a href='javascript:void(0)'>Menu</a>"
)
EXISTING_PAGES = [
    {"title": "Puppy Nutrition", "url": "/puppy", "keywords": ["puppy", "nutrition"]},
    {"title": "Grooming", "url": "/grooming"},
    ExistingPage(title="Guide", url="/guide", keywords=["organic"]),
    {"title": "Cat food", "url": "/cats", "keywords": ["cats"]},
]


def test_internal_link_recommendations(services):
    result = services.recommend_internal_links(LINKED_PAGE, EXISTING_PAGES)

    assert (result.link_analysis.total, result.link_analysis.internal, result.link_analysis.external) == (4, 3, 1)
    assert result.link_analysis.ratio == 75
    assert (result.anchor_analysis.generic, result.anchor_analysis.empty, result.anchor_analysis.descriptive) == (1, 1, 1)
    assert [(o.url, o.relevance) for o in result.opportunities] == [("/puppy", 4), ("/grooming", 2)]
    assert result.opportunities[0].reason == 'Page title "Puppy Nutrition" mentioned in content'
    assert [r.title for r in result.recommendations] == [
        "Too Many Links", "Improve Anchor Text", "Empty Anchor Text", "Linking Opportunities Found",
    ]
    assert result.score.score == 65
    assert result.meta.existing_pages == 4


def test_base_url_makes_same_host_links_internal(services):
    content = "<a href='https://example.com/a'>A page</a>"
    assert services.recommend_internal_links(content, base_url="https://example.com").link_analysis.internal == 1

    result = services.recommend_internal_links(content)
    assert result.link_analysis.internal == 0
    assert result.recommendations[0].title == "Add Internal Links"


def test_opportunity_limit_comes_from_settings(services, monkeypatch):
    monkeypatch.setattr("seo_grader.content.linking.get_nested_config", lambda key, default=None: 1)
    result = services.recommend_internal_links(LINKED_PAGE, EXISTING_PAGES)
    assert len(result.opportunities) == 1
    assert "Found 2 opportunities" in result.recommendations[-1].message


def test_existing_page_needs_url(services):
    with pytest.raises(pydantic.ValidationError):
        services.recommend_internal_links(LINKED_PAGE, [{"title": "No url"}])


# --- Length ---

@pytest.mark.parametrize("word_count, target, status, score", [
    (1500, "blog", "optimal", 100),
    (1900, "blog", "optimal", 76),
    (500, "blog", "too_short", 35),
    (1200, "product", "too_long", 50),
    (0, "news", "too_short", 0),
])
def test_content_length_scores(services, word_count, target, status, score):
    result = services.optimize_content_length(words(word_count), target)
    assert result.length_analysis.status == status
    assert result.score == result.length_analysis.score == score


def test_ideal_length_details(services):
    result = services.optimize_content_length(words(1500))
    assert result.meta.target_type == "blog"
    assert result.length_analysis.difference == 0
    assert result.length_analysis.percentage_of_ideal == 100
    assert (result.current_length.words, result.current_length.reading_time) == (1500, 8)
    assert [s.title for s in result.suggestions] == ["Ideal Content Length"]


def test_short_content_suggestions(services):
    result = services.optimize_content_length(words(500), "blog")
    assert result.length_analysis.message == \
        "Content is 500 words below the minimum recommended length for blog content."
    assert [s.title for s in result.suggestions] == ["Content Too Short", "Add More Sections", "Expansion Ideas"]


def test_long_content_suggestions(services):
    result = services.optimize_content_length(words(1200), "product")
    assert [s.title for s in result.suggestions] == ["Content Too Long", "Reduction Ideas"]
    assert "approximately 200 words" in result.suggestions[0].message


def test_unknown_content_type_uses_blog(services):
    result = services.optimize_content_length(words(10), "recipe")
    assert result.meta.target_type == "blog"
    assert result.ideal_range.ideal == 1500


def test_sections_follow_h2_and_h3(services):
    result = services.optimize_content_length("<h2>A</h2><h2>B</h2><h3>C</h3>")
    assert (result.sections.major_sections, result.sections.subsections) == (2, 1)
    assert not result.sections.has_proper_sectioning
    assert [s.title for s in result.sections.sections] == ["A", "B"]


# --- Gaps ---

def test_content_gaps(services):
    content = ("<h2>Puppy nutrition</h2><p>" + "Puppy nutrition matters. " * 4 +
               "Grooming tips are short.</p>")
    result = services.analyze_content_gaps(content, ["Puppy nutrition", "grooming", "vaccination schedule"])

    coverage = {t.topic: (t.covered, t.in_headings, t.relevance, t.depth) for t in result.coverage}
    assert coverage == {
        "Puppy nutrition": (True, True, 100, "moderate"),
        "grooming": (True, False, 100, "mentioned"),
        "vaccination schedule": (False, False, 0, "none"),
    }
    assert [g.topic for g in result.gaps] == ["vaccination schedule"]
    assert (result.depth.words_per_topic, result.depth.depth_level) == (9, "minimal")
    assert [s.title for s in result.suggestions] == ["Missing Topics", "Add Missing Content", "Insufficient Detail"]
    assert result.score.score == 74
    assert result.meta.topics_covered == 2


def test_gaps_without_topics(services):
    result = services.analyze_content_gaps("<p>Anything</p>")
    assert (result.score.score, result.score.label) == (100, "N/A")
    assert [s.title for s in result.suggestions] == ["Comprehensive Coverage"]


# --- Competitive ---

def test_competitive_analysis(services):
    yours = ("<h1>T</h1><h2>A</h2><p>" + words(100) + "</p>"
             "<img src='a.png' alt='a'><ul><li>x</li></ul>")
    competitors = [
        {"title": "First", "url": "https://one.test",
         "content": "<h1>T</h1><h2>A</h2><h2>B</h2><h2>C</h2><p>" + words(196) + "</p>"
                    "<img src='1.png'><img src='2.png'><img src='3.png'>"},
        CompetitorContent(title="Second", url="https://two.test",
                          content="<h1>T</h1><h2>A</h2><p>" + words(198) + "</p>"
                                  "<img src='x.png' alt='x'><ol><li>a</li></ol><ul><li>b</li></ul>"),
    ]
    result = services.analyze_competitive_content(yours, competitors)

    assert result.your_content.model_dump() == {"word_count": 103, "heading_count": 2, "image_count": 1, "list_count": 1}
    assert result.averages.model_dump() == {"word_count": 201, "heading_count": 3, "image_count": 2, "list_count": 1}
    assert [c.title for c in result.competitors] == ["First", "Second"]
    assert result.comparison.word_count.status == "shorter"
    assert result.comparison.word_count.percentage == 51
    assert result.comparison.list_count.status == "competitive"
    assert [i.title for i in result.insights] == [
        "Content Length Below Average", "Fewer Headings Than Competitors", "Fewer Images Than Competitors",
    ]
    assert result.insights[0].message.startswith("Your content is 98 words shorter")
    assert (result.score.score, result.score.label) == (60, "Competitive")


def test_competitive_analysis_without_competitors(services):
    result = services.analyze_competitive_content("<p>one two</p>")
    assert result.comparison.word_count.status == "longer"
    assert result.insights[-1].title == "Competitive Content"
    assert (result.score.score, result.score.label) == (95, "Highly Competitive")
