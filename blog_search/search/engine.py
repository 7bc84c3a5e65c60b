"""In-memory search over the blog corpus.

Searching is a pure function of the corpus and the query term. The term
is normalized, every document is tested for a substring match against
its title, tags and excerpt, and matches are ordered by relevance tier
with corpus order as the final tie-break.

Example usage:
    search(corpus, "symfony")   # -> [Document(title="Improve Symfony Tests Performance"), ...]
    search(corpus, "")          # -> every document, in corpus order
"""

import re

from blog_search.corpus.models import Corpus, Document
from blog_search.search.models import MatchTier, SearchHit

WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_term(term: str | None) -> str:
    """Normalize text for matching.

    Trims surrounding whitespace, lowercases, and collapses internal
    whitespace runs to a single space.

    Examples:
        >>> normalize_term("  Symfony   Tests ")
        'symfony tests'
        >>> normalize_term(None)
        ''
    """
    if not term:
        return ""
    return WHITESPACE_PATTERN.sub(" ", term).strip().lower()


def match_tier(document: Document, normalized_term: str) -> MatchTier | None:
    """Find the most specific tier a document matches a normalized term in.

    Args:
        document: Document to test
        normalized_term: Output of normalize_term()

    Returns:
        The matching tier, MatchTier.ALL for an empty term, or None if
        the document does not match
    """
    if not normalized_term:
        return MatchTier.ALL

    title = document.title.lower()
    if title == normalized_term:
        return MatchTier.TITLE_EXACT
    if title.startswith(normalized_term):
        return MatchTier.TITLE_PREFIX
    if normalized_term in title:
        return MatchTier.TITLE_CONTAINS

    tags = [tag.lower() for tag in document.tags]
    if normalized_term in tags:
        return MatchTier.TAG_EXACT
    if any(normalized_term in tag for tag in tags):
        return MatchTier.TAG_CONTAINS

    if normalized_term in document.excerpt.lower():
        return MatchTier.EXCERPT_CONTAINS

    return None


def rank(corpus: Corpus, term: str | None) -> list[SearchHit]:
    """Rank every matching document in the corpus.

    Args:
        corpus: Corpus to search
        term: Raw query; any casing or whitespace

    Returns:
        Hits ordered by tier, then by corpus position
    """
    normalized = normalize_term(term)
    hits: list[SearchHit] = []

    for position, document in enumerate(corpus.documents):
        tier = match_tier(document, normalized)
        if tier is not None:
            hits.append(SearchHit(document=document, tier=tier, position=position))

    # sort() is stable, so equal tiers keep corpus order
    hits.sort(key=lambda hit: hit.tier)
    return hits


def search(corpus: Corpus, term: str | None) -> list[Document]:
    """Search the corpus for a query term.

    An empty or whitespace-only term matches every document. Never raises.

    Args:
        corpus: Corpus to search
        term: Raw query; any casing or whitespace

    Returns:
        Matching documents, most relevant first
    """
    return [hit.document for hit in rank(corpus, term)]


def generate_snippet(text: str, term: str | None, max_length: int = 150) -> str:
    """Generate a snippet of text centered on the first match of a term.

    Falls back to the start of the text when the term is empty or absent.

    Args:
        text: Text to cut the snippet from (usually an excerpt)
        term: Raw query to center on
        max_length: Maximum snippet length, excluding ellipses

    Returns:
        Snippet with ellipses on each side that was truncated

    Examples:
        >>> generate_snippet("Long content with API design notes", "API", 12)
        '...ith API des...'
    """
    body = WHITESPACE_PATTERN.sub(" ", text).strip()
    normalized = normalize_term(term)
    match = re.search(re.escape(normalized), body, re.IGNORECASE) if normalized else None

    if match is None:
        excerpt = body[:max_length].strip()
        return f"{excerpt}..." if len(body) > max_length else excerpt

    # Center the snippet around the match, using offsets into the original text
    half_length = max(0, (max_length - (match.end() - match.start())) // 2)
    start = max(0, match.start() - half_length)
    end = min(len(body), match.end() + half_length)

    snippet = body[start:end].strip()

    prefix = "..." if start > 0 else ""
    suffix = "..." if end < len(body) else ""

    return f"{prefix}{snippet}{suffix}"
