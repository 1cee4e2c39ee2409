"""Alumni directory search: enrichment, alias index and two-tier ranking."""

__version__ = "0.1.0"

from alumsearch.config import SearchConfig, load_search_config
from alumsearch.enrichment.pipeline import enrich
from alumsearch.entities.models import ExternalMaps, MediaCandidate, ProfileRecord
from alumsearch.entities.slug_aliases import SlugAliasTable
from alumsearch.exceptions import AlumSearchError, CorpusMismatchError, InvalidSearchOptions
from alumsearch.models import EnrichedRecord, ScoredResult, SearchOutcome
from alumsearch.search.alias_index import AliasIndex, build_alias_index, build_alias_index_from_maps
from alumsearch.search.engine import SearchEngine, SearchOptions, search
from alumsearch.search.filters import SearchFilters
from alumsearch.services.query import QueryController

__all__ = [
    "AliasIndex",
    "AlumSearchError",
    "CorpusMismatchError",
    "EnrichedRecord",
    "ExternalMaps",
    "InvalidSearchOptions",
    "MediaCandidate",
    "ProfileRecord",
    "QueryController",
    "ScoredResult",
    "SearchConfig",
    "SearchEngine",
    "SearchFilters",
    "SearchOptions",
    "SearchOutcome",
    "SlugAliasTable",
    "build_alias_index",
    "build_alias_index_from_maps",
    "enrich",
    "load_search_config",
    "search",
    "__version__",
]
