"""Pydantic models for ranked search hits."""

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field

from blog_search.corpus.models import Document


class MatchTier(IntEnum):
    """Relevance tier of a match, most specific first.

    Lower values sort earlier. Documents in the same tier keep
    their corpus order.
    """

    TITLE_EXACT = 1
    TITLE_PREFIX = 2
    TITLE_CONTAINS = 3
    TAG_EXACT = 4
    TAG_CONTAINS = 5
    EXCERPT_CONTAINS = 6
    ALL = 7


class SearchHit(BaseModel):
    """A matching document together with why it matched.

    Attributes:
        document: The matching document
        tier: The most specific tier the document matched in
        position: Index of the document in its corpus
    """

    model_config = ConfigDict(frozen=True)

    document: Document
    tier: MatchTier = Field(..., description="Most specific matching tier")
    position: int = Field(..., ge=0, description="Corpus order")
