"""Search subpackage: alias index, tier 1 scoring, fuzzy fallback."""

from alumsearch.search.alias_index import (
    AliasIndex,
    build_alias_index,
    build_alias_index_from_maps,
    load_alias_overrides,
)
from alumsearch.search.engine import SearchEngine, SearchOptions, search
from alumsearch.search.filters import SearchFilters
from alumsearch.search.formatter import display_outcome, render_score_table
from alumsearch.search.fuzzy import FuzzyMatcher
from alumsearch.search.scorer import score_record

__all__ = [
    "AliasIndex",
    "build_alias_index",
    "build_alias_index_from_maps",
    "load_alias_overrides",
    "SearchEngine",
    "SearchOptions",
    "search",
    "SearchFilters",
    "render_score_table",
    "display_outcome",
    "FuzzyMatcher",
    "score_record",
]
