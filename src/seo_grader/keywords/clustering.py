# src/seo_grader/keywords/clustering.py
import logging
from collections import Counter
from typing import Dict, List, Optional, Union

from seo_grader.utils.config_loader import get_nested_config
from seo_grader.utils.stopwords import ALL_STOPWORDS

from .models import ClusterInsight, ClusteringResult, CommonWord, KeywordCluster, RelatedKeyword
from .suggestions import parse_keyword_list

logger = logging.getLogger(__name__)

STRATEGIES = ("jaccard", "semantic")

CLUSTER_THEMES: Dict[str, tuple] = {
    "SEO Tools": ("seo", "tool", "software", "analyzer", "optimizer"),
    "Content Marketing": ("content", "blog", "article", "writing", "marketing"),
    "Keyword Research": ("keyword", "research", "search", "volume", "competition"),
    "Technical SEO": ("technical", "crawl", "index", "site", "speed"),
    "Local SEO": ("local", "location", "google", "business", "map"),
    "E-commerce": ("product", "price", "buy", "sale", "shop"),
    "Analytics": ("analytics", "data", "tracking", "metrics", "report"),
}


def jaccard_similarity(keyword1: str, keyword2: str) -> float:
    words1 = set(keyword1.lower().split())
    words2 = set(keyword2.lower().split())
    union = words1 | words2
    return len(words1 & words2) / len(union) if union else 0.0


def word_similarity(word1: str, word2: str) -> float:
    """Shared-stem heuristic: exact 1.0, common 3-letter prefix 0.7, suffix 0.6, containment 0.5."""
    if word1 == word2:
        return 1.0
    if min(len(word1), len(word2)) < 3:
        return 0.0
    if word1.startswith(word2[:3]) or word2.startswith(word1[:3]):
        return 0.7
    if word1.endswith(word2[-3:]) or word2.endswith(word1[-3:]):
        return 0.6
    if word1 in word2 or word2 in word1:
        return 0.5
    return 0.0


def semantic_similarity(keyword1: str, keyword2: str) -> float:
    words1 = keyword1.lower().split()
    words2 = keyword2.lower().split()
    total = sum(word_similarity(w1, w2) for w1 in words1 for w2 in words2)
    comparisons = len(words1) * len(words2)

    if len(words1) > 1 and len(words2) > 1:
        phrase1, phrase2 = " ".join(words1), " ".join(words2)
        if phrase1 in phrase2 or phrase2 in phrase1:
            total += 0.5
            comparisons += 1

    return total / comparisons if comparisons else 0.0


def calculate_similarity(keyword1: str, keyword2: str, strategy: str = "jaccard") -> float:
    if strategy == "semantic":
        return semantic_similarity(keyword1, keyword2)
    return jaccard_similarity(keyword1, keyword2)


def find_common_words(keywords: List[str]) -> List[CommonWord]:
    """Non-stop-words of 3+ letters shared by at least two keywords, most shared first."""
    if not keywords:
        return []
    counts = Counter(
        word
        for keyword in keywords
        for word in keyword.lower().split()
        if len(word) > 2 and word not in ALL_STOPWORDS
    )
    shared = sorted(((w, c) for w, c in counts.items() if c >= 2), key=lambda wc: (-wc[1], wc[0]))
    return [CommonWord(word=w, count=c, frequency=c / len(keywords)) for w, c in shared]


def generate_cluster_name(keywords: List[str]) -> str:
    if not keywords:
        return ""
    common = find_common_words(keywords)
    if not common:
        return keywords[0]

    top_words = [cw.word for cw in common[:3]]
    needed = min(2, len(top_words))
    for keyword in keywords:
        keyword_words = set(keyword.lower().split())
        if sum(1 for w in top_words if w in keyword_words) >= needed:
            return keyword
    return f"{top_words[0]} {top_words[1] if len(top_words) > 1 else 'related'}"


def calculate_cluster_quality(cluster: KeywordCluster) -> int:
    score = 0
    if cluster.size >= 5:
        score += 30
    elif cluster.size >= 3:
        score += 20
    elif cluster.size >= 2:
        score += 10

    if cluster.related:
        avg_similarity = sum(r.similarity for r in cluster.related) / len(cluster.related)
        if avg_similarity >= 70:
            score += 25
        elif avg_similarity >= 50:
            score += 15
        elif avg_similarity >= 30:
            score += 5

    common = len(cluster.common_words)
    if common >= 3:
        score += 20
    elif common >= 2:
        score += 10
    elif common >= 1:
        score += 5

    # Over-clustering penalty
    near_duplicates = sum(1 for r in cluster.related if r.similarity >= 80)
    if near_duplicates > cluster.size * 0.7:
        score -= 10

    return max(0, min(100, score))


def identify_cluster_theme(keywords: List[str]) -> str:
    counts = Counter(" ".join(keywords).lower().split())
    best_theme, best_score = "General", 0
    for theme, theme_words in CLUSTER_THEMES.items():
        score = sum(counts[w] for w in theme_words)
        if score > best_score:
            best_theme, best_score = theme, score
    return best_theme


def clustering_insights(clusters: List[KeywordCluster], total_keywords: int) -> List[ClusterInsight]:
    insights = []
    avg_quality = sum(c.quality for c in clusters) / len(clusters)
    high_quality = sum(1 for c in clusters if c.quality >= 70)
    singleton_pct = sum(1 for c in clusters if c.size == 1) / total_keywords * 100

    if avg_quality >= 70:
        insights.append(ClusterInsight(
            type="success", message="Excellent clustering quality! Your keywords group well together."))
    elif avg_quality >= 50:
        insights.append(ClusterInsight(
            type="info", message="Good clustering results. Consider refining your keyword list for better grouping."))
    else:
        insights.append(ClusterInsight(
            type="warning", message="Clustering quality could be improved. Try adding more related keywords."))

    if singleton_pct > 50:
        insights.append(ClusterInsight(
            type="warning",
            message=f"{singleton_pct:.0f}% of keywords are standalone. Consider expanding your keyword set."))

    if high_quality:
        plural = "s" if high_quality > 1 else ""
        insights.append(ClusterInsight(
            type="success",
            message=f"{high_quality} high-quality cluster{plural} identified for content creation."))
    return insights


def cluster_keywords(keywords: Union[str, List[str]], similarity_threshold: Optional[float] = None,
                     strategy: str = "jaccard") -> ClusteringResult:
    """
    Greedy clustering: each unassigned keyword, in input order, opens a cluster
    and absorbs every later unassigned keyword whose similarity is strictly
    above the threshold. Output is deterministic for identical input.
    """
    if similarity_threshold is None:
        similarity_threshold = get_nested_config("keywords.similarity_threshold", 0.3)
    if strategy not in STRATEGIES:
        logger.warning("Unknown clustering strategy '%s', using jaccard.", strategy)
        strategy = "jaccard"
    options = {"similarity_threshold": similarity_threshold, "strategy": strategy}

    keyword_list = list(dict.fromkeys(parse_keyword_list(keywords)))
    if len(keyword_list) < 2:
        logger.debug("Clustering needs at least 2 keywords, got %d", len(keyword_list))
        return ClusteringResult(total_keywords=len(keyword_list), options=options)

    clusters: List[KeywordCluster] = []
    assigned = set()
    for i, primary in enumerate(keyword_list):
        if primary in assigned:
            continue
        assigned.add(primary)
        related = []
        for candidate in keyword_list[i + 1:]:
            if candidate in assigned:
                continue
            similarity = calculate_similarity(primary, candidate, strategy)
            if similarity > similarity_threshold:
                related.append(RelatedKeyword(keyword=candidate, similarity=int(round(similarity * 100))))
                assigned.add(candidate)

        related.sort(key=lambda r: -r.similarity)
        members = [primary] + [r.keyword for r in related]
        cluster = KeywordCluster(
            primary=primary,
            related=related,
            size=len(members),
            common_words=find_common_words(members),
            suggested_name=generate_cluster_name(members),
            theme=identify_cluster_theme(members),
        )
        cluster.quality = calculate_cluster_quality(cluster)
        clusters.append(cluster)

    clusters.sort(key=lambda c: (-c.quality, -c.size, c.primary))
    logger.debug("Clustered %d keywords into %d clusters (%s)", len(keyword_list), len(clusters), strategy)

    return ClusteringResult(
        total_keywords=len(keyword_list),
        total_clusters=len(clusters),
        clusters=clusters,
        singleton=sum(1 for c in clusters if c.size == 1),
        avg_cluster_size=sum(c.size for c in clusters) / len(clusters),
        options=options,
        insights=clustering_insights(clusters, len(keyword_list)),
    )
