# src/seo_grader/recommendations/translations.py
"""
EN/EL text tables for generated recommendations.

Lookups go through `translate()`, which falls back to English and then to
the supplied default, so a missing entry never raises.
"""
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"

TRANSLATIONS: Dict[str, Dict[str, Dict[str, str]]] = {
    "en": {
        "priorities": {
            "critical": "Critical",
            "high": "High Priority",
            "medium": "Medium Priority",
            "low": "Low Priority",
        },
        "effort": {
            "quick": "Quick Fix (< 30 min)",
            "moderate": "Moderate Effort (30 min - 2 hrs)",
            "significant": "Significant Work (> 2 hrs)",
        },
        "estimated_time": {
            "quick": "5-15 min",
            "moderate": "30-60 min",
            "significant": "1-3 hours",
        },
        "ranking_impact": {
            "high": "High - Critical for search visibility",
            "medium": "Medium - Notable improvement potential",
            "low": "Low - Minor optimization",
        },
        "categories": {
            "meta": "Meta Tags",
            "content": "Content Quality",
            "technical": "Technical SEO",
            "readability": "Readability",
        },
        "why": {
            "meta-title-exists": "Page titles are the first thing users see in search results "
                                 "and are a critical ranking factor.",
            "meta-title-length": "Titles between 30-60 characters display fully in search results "
                                 "without truncation.",
            "meta-title-keywords": "Keywords in the title tell search engines and users what the page is about.",
            "meta-description-exists": "Descriptions influence click-through rates and provide context "
                                       "in search results.",
            "meta-description-length": "Descriptions between 120-160 characters are shown in full on "
                                       "most result pages.",
            "content-length": "Longer, comprehensive content tends to rank better and provides more "
                              "value to users.",
            "headings-structure": "A single H1 with supporting H2s signals the page topic and makes "
                                  "content easy to scan.",
            "images-alt-text": "Alt text improves accessibility and helps images rank in image search.",
            "readability-score": "Readable content improves user engagement metrics, which indirectly "
                                 "affects rankings.",
            "https-protocol": "HTTPS is a confirmed ranking signal and essential for user trust and "
                              "data security.",
            "viewport-meta": "Mobile-friendliness is a major ranking factor; viewport meta ensures "
                             "proper mobile display.",
            "canonical-url": "Prevents duplicate content issues that can dilute ranking signals.",
            "html-lang": "The language declaration helps search engines serve the page to the right audience.",
            "charset-declaration": "A declared encoding prevents garbled characters in browsers and crawlers.",
        },
        "actions": {
            "title_add": "Add a <title> tag inside <head> that describes this page",
            "title_keywords": "Place the primary keyword near the beginning of the title",
            "title_unique": "Check that no other page on the site uses the same title",
            "title_length": "Rewrite the title to 30-60 characters",
            "title_preview": "Check the title in a search result preview tool",
            "title_keyword_natural": "Work one target keyword into the title without stuffing",
            "description_add": 'Add <meta name="description" content="..."> inside <head>',
            "description_cta": "End the description with a clear call-to-action",
            "description_length": "Rewrite the description to 120-160 characters",
            "description_keyword": "Mention the primary keyword once in the description",
            "content_expand": "Expand the page to at least 300 words of useful content",
            "content_questions": "Answer the questions your audience is likely to ask",
            "density_adjust": "Adjust primary keyword usage to 1-3% of the text",
            "density_synonyms": "Use synonyms and variations instead of repeating the exact keyword",
            "h1_single": "Keep exactly one H1 heading on the page",
            "h2_sections": "Split the content into sections with H2 subheadings",
            "alt_add": "Add a short, descriptive alt attribute to every image",
            "alt_decorative": "Use alt=\"\" only for purely decorative images",
            "viewport_add": 'Add <meta name="viewport" content="width=device-width, initial-scale=1.0"> in <head>',
            "viewport_test": "Check the page in a mobile-friendly test",
            "canonical_add": "Add a <link rel=\"canonical\"> tag pointing to the preferred URL",
            "canonical_consistent": "Check that the canonical URL matches internal links and the sitemap",
            "https_certificate": "Install an SSL certificate and serve the page over HTTPS",
            "https_redirect": "Redirect all HTTP requests to HTTPS with 301 redirects",
            "https_mixed": "Check for mixed content loaded over HTTP",
            "lang_add": "Add a lang attribute to the <html> tag",
            "charset_add": "Add <meta charset=\"UTF-8\"> as the first element in <head>",
            "robots_review": "Remove noindex/nofollow unless the page should stay out of search",
            "readability_sentences": "Shorten long sentences and prefer simple words",
            "readability_paragraphs": "Keep paragraphs to a few sentences each",
            "semantic_tags": "Wrap page regions in <header>, <nav>, <main>, <article> and <footer>",
            "internal_links_add": "Link to two or three related pages on your site",
        },
        "specific": {
            "title_too_short": "Current title is {length} characters. Add {missing} more characters "
                               "to reach minimum.",
            "title_too_long": "Current title is {length} characters. Reduce by {excess} characters "
                              "to avoid truncation.",
            "description_too_short": "Current description is {length} characters. Add {missing} more "
                                     "to reach minimum.",
            "description_too_long": "Current description is {length} characters. Reduce by {excess} "
                                    "to avoid truncation.",
            "content_words": "Current content: {words} words. Add {missing} more words.",
            "canonical_tag": 'Add canonical tag: <link rel="canonical" href="{url}">',
            "alt_missing": "{count} image(s) currently have no alt text.",
            "h1_count": "The page currently has {count} H1 heading(s).",
        },
    },
    "el": {
        "priorities": {
            "critical": "Κρίσιμο",
            "high": "Υψηλή Προτεραιότητα",
            "medium": "Μέτρια Προτεραιότητα",
            "low": "Χαμηλή Προτεραιότητα",
        },
        "effort": {
            "quick": "Γρήγορη Διόρθωση (< 30 λεπτά)",
            "moderate": "Μέτρια Προσπάθεια (30 λεπτά - 2 ώρες)",
            "significant": "Σημαντική Εργασία (> 2 ώρες)",
        },
        "estimated_time": {
            "quick": "5-15 λεπτά",
            "moderate": "30-60 λεπτά",
            "significant": "1-3 ώρες",
        },
        "ranking_impact": {
            "high": "Υψηλός - Κρίσιμο για την ορατότητα στην αναζήτηση",
            "medium": "Μέτριος - Αξιόλογη δυνατότητα βελτίωσης",
            "low": "Χαμηλός - Μικρή βελτιστοποίηση",
        },
        "categories": {
            "meta": "Ετικέτες Meta",
            "content": "Ποιότητα Περιεχομένου",
            "technical": "Τεχνικό SEO",
            "readability": "Αναγνωσιμότητα",
        },
        "why": {
            "meta-title-exists": "Ο τίτλος είναι το πρώτο που βλέπουν οι χρήστες στα αποτελέσματα "
                                 "αναζήτησης και είναι κρίσιμος παράγοντας κατάταξης.",
            "meta-title-length": "Τίτλοι 30-60 χαρακτήρων εμφανίζονται ολόκληροι στα αποτελέσματα αναζήτησης.",
            "meta-description-exists": "Η περιγραφή επηρεάζει το ποσοστό κλικ και δίνει πλαίσιο "
                                       "στα αποτελέσματα αναζήτησης.",
            "content-length": "Το εκτενές, ολοκληρωμένο περιεχόμενο τείνει να κατατάσσεται καλύτερα.",
            "images-alt-text": "Το κείμενο alt βελτιώνει την προσβασιμότητα και βοηθά στην αναζήτηση εικόνων.",
            "readability-score": "Το ευανάγνωστο περιεχόμενο βελτιώνει την αλληλεπίδραση των χρηστών.",
            "https-protocol": "Το HTTPS είναι επιβεβαιωμένος παράγοντας κατάταξης και απαραίτητο "
                              "για την ασφάλεια των χρηστών.",
            "viewport-meta": "Η φιλικότητα προς κινητά είναι σημαντικός παράγοντας κατάταξης.",
            "canonical-url": "Αποτρέπει προβλήματα διπλότυπου περιεχομένου.",
        },
        "actions": {
            "title_add": "Προσθέστε ετικέτα <title> μέσα στο <head> που περιγράφει τη σελίδα",
            "title_keywords": "Τοποθετήστε την κύρια λέξη-κλειδί κοντά στην αρχή του τίτλου",
            "title_unique": "Ελέγξτε ότι καμία άλλη σελίδα δεν χρησιμοποιεί τον ίδιο τίτλο",
            "title_length": "Ξαναγράψτε τον τίτλο σε 30-60 χαρακτήρες",
            "description_add": 'Προσθέστε <meta name="description" content="..."> μέσα στο <head>',
            "description_length": "Ξαναγράψτε την περιγραφή σε 120-160 χαρακτήρες",
            "content_expand": "Επεκτείνετε τη σελίδα σε τουλάχιστον 300 λέξεις χρήσιμου περιεχομένου",
            "h1_single": "Διατηρήστε ακριβώς μία επικεφαλίδα H1 στη σελίδα",
            "h2_sections": "Χωρίστε το περιεχόμενο σε ενότητες με υπότιτλους H2",
            "alt_add": "Προσθέστε σύντομο, περιγραφικό alt σε κάθε εικόνα",
            "viewport_add": 'Προσθέστε <meta name="viewport" content="width=device-width, initial-scale=1.0"> '
                            'στο <head>',
            "canonical_add": "Προσθέστε ετικέτα <link rel=\"canonical\"> προς την προτιμώμενη διεύθυνση",
            "https_certificate": "Εγκαταστήστε πιστοποιητικό SSL και σερβίρετε τη σελίδα μέσω HTTPS",
            "https_redirect": "Ανακατευθύνετε όλα τα αιτήματα HTTP σε HTTPS με 301",
            "lang_add": "Προσθέστε χαρακτηριστικό lang στην ετικέτα <html>",
            "charset_add": "Προσθέστε <meta charset=\"UTF-8\"> ως πρώτο στοιχείο στο <head>",
            "readability_sentences": "Συντομεύστε τις μεγάλες προτάσεις και προτιμήστε απλές λέξεις",
        },
        "specific": {
            "title_too_short": "Ο τίτλος έχει {length} χαρακτήρες. Προσθέστε {missing} ακόμη.",
            "title_too_long": "Ο τίτλος έχει {length} χαρακτήρες. Μειώστε τον κατά {excess}.",
            "description_too_short": "Η περιγραφή έχει {length} χαρακτήρες. Προσθέστε {missing} ακόμη.",
            "description_too_long": "Η περιγραφή έχει {length} χαρακτήρες. Μειώστε την κατά {excess}.",
            "content_words": "Τρέχον περιεχόμενο: {words} λέξεις. Προσθέστε {missing} ακόμη.",
            "canonical_tag": 'Προσθέστε ετικέτα canonical: <link rel="canonical" href="{url}">',
        },
    },
}


def resolve_language(language: Optional[str]) -> str:
    code = (language or DEFAULT_LANGUAGE).lower()
    if code not in TRANSLATIONS:
        logger.debug(f"No recommendation translations for '{code}', using English")
        return DEFAULT_LANGUAGE
    return code


def translate(language: str, section: str, key: str, default: Optional[str] = None, **params: Any) -> str:
    """
    Text for `section.key` in `language`, else English, else `default`
    (or the key itself). `params` are substituted with str.format.
    """
    text = TRANSLATIONS.get(language, {}).get(section, {}).get(key)
    if text is None:
        text = TRANSLATIONS[DEFAULT_LANGUAGE].get(section, {}).get(key)
    if text is None:
        text = default if default is not None else key
    if params:
        try:
            return text.format(**params)
        except (KeyError, IndexError, ValueError):
            logger.warning(f"Could not format translation '{section}.{key}' with {sorted(params)}")
    return text
