"""Debounced query lifecycle controller.

Wires a reactivex pipeline around the search engine::

    set_query() -> Subject -> debounce -> evaluate -> on_results()

Only the last query of any quiet window is evaluated. Every query is
tagged with a generation number; a result is delivered unless a newer
generation has already been delivered, so a superseded evaluation never
overwrites fresher results. An evaluation that has completed is always
delivered, even if a new query arrived meanwhile.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Union

from reactivex import operators as ops
from reactivex.abc import DisposableBase, SchedulerBase
from reactivex.subject import Subject

from alumsearch.config import SearchConfig
from alumsearch.constants import DEBOUNCE_SECONDS
from alumsearch.exceptions import InvalidSearchOptions
from alumsearch.models import EnrichedRecord, SearchOutcome
from alumsearch.search.engine import SearchEngine, SearchOptions

logger = logging.getLogger(__name__)

SearchCallable = Callable[[str, Union[SearchOptions, None]], SearchOutcome]
ResultsCallback = Callable[[list[EnrichedRecord], list[EnrichedRecord], str], None]


class QueryController:
    """Holds the current query and delivers debounced search results.

    Args:
        engine_or_callable: A SearchEngine, or any ``(query, options) ->
            SearchOutcome`` callable.
        on_results: Called with ``(primary, secondary, normalized_query)``.
        debounce_seconds: Quiet window before a query is evaluated. Defaults
            to ``config.debounce_seconds``, else the engine's configured
            debounce, else 0.25s.
        scheduler: reactivex scheduler for the debounce timer (pass a
            ``TestScheduler`` in tests, an ``AsyncIOScheduler`` in asyncio apps).
        options: SearchOptions used for every evaluation.
        config: SearchConfig supplying the debounce window.
    """

    def __init__(
        self,
        engine_or_callable: SearchEngine | SearchCallable,
        on_results: ResultsCallback,
        debounce_seconds: float | None = None,
        scheduler: SchedulerBase | None = None,
        options: SearchOptions | None = None,
        config: SearchConfig | None = None,
    ) -> None:
        if debounce_seconds is None:
            if config is not None:
                debounce_seconds = config.debounce_seconds
            elif isinstance(engine_or_callable, SearchEngine):
                debounce_seconds = engine_or_callable.config.debounce_seconds
            else:
                debounce_seconds = DEBOUNCE_SECONDS
        if debounce_seconds < 0:
            raise InvalidSearchOptions(
                f"debounce_seconds must be non-negative, got {debounce_seconds}"
            )
        self._search = self._as_callable(engine_or_callable)
        self._on_results = on_results
        self._options = options
        self._query = ""
        self._generation: int = 0  # Incremented on each set_query
        self._delivered_generation: int = 0
        self._evaluating = threading.Lock()

        self._subject: Subject[tuple[int, str]] = Subject()
        self._subscription: DisposableBase | None = self._subject.pipe(
            ops.debounce(debounce_seconds, scheduler=scheduler),
        ).subscribe(on_next=self._evaluate)

    @staticmethod
    def _as_callable(engine_or_callable: SearchEngine | SearchCallable) -> SearchCallable:
        if isinstance(engine_or_callable, SearchEngine):
            return engine_or_callable.search
        return engine_or_callable

    @property
    def query(self) -> str:
        """The most recently set query."""
        return self._query

    @property
    def generation(self) -> int:
        return self._generation

    def set_query(self, query: str) -> None:
        """Record a new query and restart the debounce window."""
        if self._subscription is None:
            logger.debug("set_query after dispose ignored: %r", query)
            return
        self._query = query or ""
        self._generation += 1
        self._subject.on_next((self._generation, self._query))

    def set_corpus(self, engine_or_callable: SearchEngine | SearchCallable) -> None:
        """Swap the corpus snapshot used by the next evaluation."""
        self._search = self._as_callable(engine_or_callable)

    def set_options(self, options: SearchOptions | None) -> None:
        self._options = options

    def _evaluate(self, item: tuple[int, str]) -> None:
        gen, query = item
        with self._evaluating:
            try:
                outcome = self._search(query, self._options)
            except Exception:
                logger.exception("Search failed for query %r", query)
                return

            if gen < self._delivered_generation:
                logger.debug(
                    "Dropping stale results for %r (generation %d < %d)",
                    query,
                    gen,
                    self._delivered_generation,
                )
                return
            self._delivered_generation = gen

            primary, secondary, normalized_query = outcome
            try:
                self._on_results(primary, secondary, normalized_query)
            except Exception:
                logger.exception("Results callback failed for query %r", query)

    def dispose(self) -> None:
        """Stop the pipeline; pending debounced queries are discarded."""
        if self._subscription is None:
            return
        self._subscription.dispose()
        self._subscription = None
        self._subject.on_completed()

    def __enter__(self) -> QueryController:
        return self

    def __exit__(self, *exc) -> None:
        self.dispose()
