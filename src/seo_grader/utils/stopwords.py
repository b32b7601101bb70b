# src/seo_grader/utils/stopwords.py
from typing import FrozenSet, Optional

STOPWORDS_EN = frozenset({
    "a", "about", "above", "after", "again", "against", "all", "am", "an", "and", "any", "are", "as", "at", "be",
    "because", "been", "before", "being", "below", "between", "both", "but", "by", "can", "could", "did", "do", "does",
    "doing", "down", "during", "each", "few", "for", "from", "further", "had", "has", "have", "having", "he", "her",
    "here", "hers", "herself", "him", "himself", "his", "how", "i", "if", "in", "into", "is", "it", "its", "itself",
    "just", "me", "might", "more", "most", "my", "myself", "no", "nor", "not", "of", "off", "on", "once", "only", "or",
    "other", "our", "ours", "ourselves", "out", "over", "own", "same", "she", "should", "so", "some", "such", "than",
    "that", "the", "their", "theirs", "them", "themselves", "then", "there", "these", "they", "this", "those",
    "through", "to", "too", "under", "until", "up", "very", "was", "we", "were", "what", "when", "where", "which",
    "while", "who", "whom", "why", "will", "with", "would", "you", "your", "yours", "yourself", "yourselves",
})

STOPWORDS_EL = frozenset({
    "ο", "η", "το", "οι", "τα", "την", "των", "τον", "του", "της", "και", "που", "να", "για", "είναι", "σε", "με",
    "αν", "από", "μόνο", "αλλά", "δεν", "όχι", "ή", "ως", "αυτό", "αυτή", "αυτοί", "αυτές", "αυτά", "πολύ", "πολλά",
    "λίγο", "λίγα", "κάτι", "άλλο", "άλλα", "άλλη", "άλλες", "κάποιος", "κάποια", "κάποιο", "κάποιοι", "κάποιες",
    "ποιος", "ποια", "ποιο", "ποιοι", "ποιες", "πώς", "πού", "πότε", "γιατί", "πόσο", "πόσα", "είμαι", "είσαι",
    "είστε", "είμαστε", "ήμουν", "ήσουν", "θα", "ας", "στο", "στη", "στην", "στον", "στα", "στους", "στις",
})

# Page chrome that leaks into extracted text and is never a useful keyword.
STOPWORDS_GUI = frozenset({
    "cookie", "cookies", "menu", "login", "logout", "disclaimer", "privacy", "javascript", "skip", "navigation",
    "copyright", "reserved", "rights",
})


ALL_STOPWORDS = STOPWORDS_EN | STOPWORDS_EL | STOPWORDS_GUI

# Greek pages routinely mix in English, so Greek keeps the English list too.
STOPWORDS_BY_LANGUAGE = {
    "en": STOPWORDS_EN | STOPWORDS_GUI,
    "el": STOPWORDS_EL | STOPWORDS_EN | STOPWORDS_GUI,
}


def stopwords_for(language: Optional[str]) -> FrozenSet[str]:
    """Stop words for a language code; unknown or missing languages get every list."""
    return STOPWORDS_BY_LANGUAGE.get((language or "").lower(), ALL_STOPWORDS)
