"""Pydantic models for search widget state."""

from enum import Enum

from pydantic import BaseModel, Field

from blog_search.corpus.models import Document


class WidgetState(str, Enum):
    """Lifecycle state of a mounted search widget.

    IDLE: input is empty, the full corpus is shown
    TYPING: input is non-empty and a debounce timer is pending
    SETTLED: the timer elapsed and results for the term are rendered
    """

    IDLE = "idle"
    TYPING = "typing"
    SETTLED = "settled"


class QueryState(BaseModel):
    """Query state owned by a single widget instance.

    Attributes:
        term: Raw user input, updated on every keystroke
        normalized_term: Normalized form of term, updated with it
        results: Documents currently rendered, most relevant first
    """

    term: str = Field(default="", description="Raw user input")
    normalized_term: str = Field(default="", description="Normalized input")
    results: list[Document] = Field(default_factory=list, description="Rendered results")
