"""Two-tier ranking engine.

Pipeline per query:

1. Gate the corpus with :class:`~alumsearch.search.filters.SearchFilters`
2. Empty query -> empty result (or the whole gated corpus in show-all mode)
3. Tier 1: score every gated record, keep the included ones, sort by score
4. Tier 2: fuzzy fallback over the corpus, minus tier 1 keys and duplicates
5. Truncate tier 2 to ``max_secondary``

Per-query evaluation never raises. Contract violations (bad options,
an alias index that does not fit the corpus) surface at construction.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from alumsearch.config import SearchConfig
from alumsearch.constants import DEFAULT_MAX_SECONDARY
from alumsearch.exceptions import InvalidSearchOptions
from alumsearch.models import EnrichedRecord, ScoredResult, SearchOutcome
from alumsearch.search.alias_index import AliasIndex
from alumsearch.search.filters import SearchFilters
from alumsearch.search.fuzzy import FuzzyMatcher
from alumsearch.search.scorer import ParsedQuery, is_primary, score_record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchOptions:
    """Per-query options.

    Raises:
        InvalidSearchOptions: If ``max_secondary`` is not positive.
    """

    max_secondary: int = DEFAULT_MAX_SECONDARY
    show_all_if_empty: bool = False
    filters: SearchFilters | None = None
    debug: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.max_secondary, bool) or not isinstance(self.max_secondary, int):
            raise InvalidSearchOptions(
                f"max_secondary must be an int, got {type(self.max_secondary).__name__}"
            )
        if self.max_secondary <= 0:
            raise InvalidSearchOptions(f"max_secondary must be positive, got {self.max_secondary}")


def _dedup_key(record: EnrichedRecord) -> object:
    # Records with no identifier at all are only duplicates of themselves.
    return record.key or id(record)


class SearchEngine:
    """Search over one immutable corpus snapshot.

    Builds the fuzzy matcher once. With ``strict=True`` (the default) the
    alias index is checked against the corpus up front and a
    :class:`~alumsearch.exceptions.CorpusMismatchError` is raised if it
    names identifiers no record carries. Pass ``strict=False`` when the
    program rosters legitimately list people without a profile.
    """

    def __init__(
        self,
        corpus: Sequence[EnrichedRecord],
        alias_index: AliasIndex,
        config: SearchConfig | None = None,
        *,
        strict: bool = True,
    ) -> None:
        self.corpus: tuple[EnrichedRecord, ...] = tuple(corpus)
        self.alias_index = alias_index
        self.config = config or SearchConfig()
        if strict:
            alias_index.validate_against(self.corpus)
        self._fuzzy = FuzzyMatcher(self.corpus, self.config.fuzzy)

    def default_options(self) -> SearchOptions:
        return SearchOptions(max_secondary=self.config.max_secondary)

    def search(self, query: str, options: SearchOptions | None = None) -> SearchOutcome:
        """Rank the corpus against ``query``.

        Args:
            query: Raw user query.
            options: Per-query options; defaults use the configured max_secondary.

        Returns:
            SearchOutcome unpackable as ``(primary, secondary, normalized_query)``.
        """
        if options is None:
            options = self.default_options()
        filters = options.filters
        active = filters is not None and not filters.is_empty()

        gated = [r for r in self.corpus if filters.passes(r)] if active else list(self.corpus)

        if not (query or "").strip():
            if options.show_all_if_empty:
                return SearchOutcome(primary=[], secondary=gated, normalized_query="")
            return SearchOutcome(primary=[], secondary=[], normalized_query="")

        # Punctuation-only queries normalize to nothing and match nothing.
        parsed = ParsedQuery.parse(query)
        if not parsed.normalized:
            return SearchOutcome(primary=[], secondary=[], normalized_query="")

        weights = self.config.scoring
        scored: list[ScoredResult] = []
        seen: set[object] = set()
        for record in gated:
            result = score_record(record, self.alias_index, parsed, weights)
            if is_primary(result, weights):
                scored.append(result)
                seen.add(_dedup_key(record))
        scored.sort(key=lambda r: r.score, reverse=True)

        secondary: list[EnrichedRecord] = []
        for hit in self._fuzzy.search(parsed.raw):
            if len(secondary) >= options.max_secondary:
                break
            record = hit.record
            if active and not filters.passes(record):
                continue
            key = _dedup_key(record)
            if key in seen:
                continue
            seen.add(key)
            secondary.append(record)

        if options.debug:
            logger.debug("Search debug: %r", parsed.raw)
            for result in scored:
                logger.debug(
                    "%s -> score %d, coverage %.0f%%: %s",
                    result.record.name,
                    result.score,
                    result.coverage * 100,
                    "; ".join(result.reasons),
                )

        logger.debug(
            "Query %r: %d gated, %d primary, %d secondary",
            parsed.normalized,
            len(gated),
            len(scored),
            len(secondary),
        )
        return SearchOutcome(
            primary=[r.record for r in scored],
            secondary=secondary,
            normalized_query=parsed.normalized,
            scored=scored,
        )


def search(
    corpus: Sequence[EnrichedRecord],
    alias_index: AliasIndex,
    query: str,
    options: SearchOptions | None = None,
    config: SearchConfig | None = None,
) -> SearchOutcome:
    """One-shot search without keeping an engine around.

    The alias index is not validated here; build a :class:`SearchEngine`
    to check it once per corpus load.
    """
    engine = SearchEngine(corpus, alias_index, config, strict=False)
    return engine.search(query, options)
