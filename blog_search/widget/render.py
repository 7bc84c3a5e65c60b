"""HTML rendering of search results into the results container."""

import html

from blog_search.config import get_settings
from blog_search.corpus.models import Document
from blog_search.search.engine import generate_snippet
from blog_search.widget.models import QueryState

RESULTS_CONTAINER_ID = "search-results"
NO_RESULTS_CLASS = "search-no-results"


def render_document(document: Document, term: str, snippet_length: int) -> str:
    """Render one result as a list item with title link and excerpt snippet."""
    snippet = generate_snippet(document.excerpt, term, snippet_length)
    parts = [
        '<li class="search-result">',
        f'<a href="{html.escape(document.url)}">{html.escape(document.title)}</a>',
    ]
    if snippet:
        parts.append(f'<p class="search-snippet">{html.escape(snippet)}</p>')
    parts.append("</li>")
    return "".join(parts)


def render_results(results: list[Document], term: str = "", snippet_length: int = 150) -> str:
    """Render ranked results, or an explicit no-results state when empty.

    Args:
        results: Documents to render, in display order
        term: Raw query, used to center snippets and in the no-results message
        snippet_length: Maximum snippet length per result

    Returns:
        HTML fragment for the results container
    """
    if not results:
        message = "No results"
        if term.strip():
            message += f" for “{html.escape(term.strip())}”"
        return f'<p class="{NO_RESULTS_CLASS}">{message}</p>'

    items = "".join(render_document(document, term, snippet_length) for document in results)
    return f'<ul class="search-result-list">{items}</ul>'


class ResultsContainer:
    """Presentation target a search widget renders into.

    Holds the latest rendered HTML and how many times it was rendered.
    """

    def __init__(self, snippet_length: int | None = None) -> None:
        self.snippet_length = (
            get_settings().snippet_length if snippet_length is None else snippet_length
        )
        self.html = ""
        self.render_count = 0

    def render(self, query: QueryState) -> None:
        self.html = render_results(query.results, query.term, self.snippet_length)
        self.render_count += 1

    def clear(self) -> None:
        self.html = ""

    @property
    def is_empty_state(self) -> bool:
        return NO_RESULTS_CLASS in self.html
