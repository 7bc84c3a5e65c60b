"""Incremental search widget with debounced recomputation.

The widget owns its QueryState exclusively and shares the corpus
read-only. Every keystroke updates the term; recomputation runs once
input pauses for the debounce delay. Only the latest keystroke's timer
may fire: scheduling a new one cancels the pending one, so stale
results never render after newer ones.

Example usage:
    widget = SearchWidget(load(), ResultsContainer())
    widget.mount()
    widget.on_input("sym")
    widget.on_input("symfony")   # cancels the "sym" timer
    ...
    widget.unmount()
"""

import asyncio

from blog_search.config import get_settings
from blog_search.corpus.models import Corpus
from blog_search.dependencies import logger
from blog_search.search.engine import normalize_term, search
from blog_search.widget.models import QueryState, WidgetState
from blog_search.widget.render import ResultsContainer


class SearchWidget:
    """Search widget state machine bound to one results container."""

    def __init__(
        self,
        corpus: Corpus,
        container: ResultsContainer,
        debounce: float | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._corpus = corpus
        self._container = container
        self._debounce = get_settings().debounce_seconds if debounce is None else debounce
        self._loop = loop
        self._timer: asyncio.TimerHandle | None = None
        self.state = WidgetState.IDLE
        self.query: QueryState | None = None

    @property
    def mounted(self) -> bool:
        return self.query is not None

    @property
    def pending(self) -> bool:
        """Whether a debounce timer is waiting to fire."""
        return self._timer is not None

    def mount(self) -> None:
        """Create fresh query state and render the full corpus."""
        if self.mounted:
            return
        self.query = QueryState(results=search(self._corpus, ""))
        self.state = WidgetState.IDLE
        self._container.render(self.query)
        logger.debug("widget_mounted", extra={"documents": len(self._corpus)})

    def on_input(self, term: str) -> None:
        """Handle a raw input change from the search field.

        A non-empty term (re)starts the debounce timer on the injected
        loop, or on the running loop. Without either there is no way to
        debounce, so the search settles immediately. An empty term
        returns to IDLE and renders the full corpus immediately.
        """
        if self.query is None:
            logger.debug("widget_input_ignored", extra={"reason": "unmounted"})
            return

        self.query.term = term
        self.query.normalized_term = normalize_term(term)
        self._cancel_timer()

        if not self.query.normalized_term:
            self.query.results = search(self._corpus, "")
            self.state = WidgetState.IDLE
            self._container.render(self.query)
            return

        self.state = WidgetState.TYPING
        loop = self._loop or self._running_loop()
        if loop is None:
            # Nothing can fire a timer; settle synchronously instead
            self._settle()
            return
        self._timer = loop.call_later(self._debounce, self._settle)

    def unmount(self) -> None:
        """Cancel any pending recomputation and discard query state."""
        self._cancel_timer()
        self.query = None
        self.state = WidgetState.IDLE
        self._container.clear()
        logger.debug("widget_unmounted")

    def _settle(self) -> None:
        self._timer = None
        if self.query is None or self.state is not WidgetState.TYPING:
            return

        self.query.results = search(self._corpus, self.query.term)
        self.state = WidgetState.SETTLED
        self._container.render(self.query)
        logger.debug(
            "widget_settled",
            extra={"term": self.query.normalized_term, "results": len(self.query.results)},
        )

    @staticmethod
    def _running_loop() -> asyncio.AbstractEventLoop | None:
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("widget_no_event_loop", extra={"fallback": "settle_now"})
            return None

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
