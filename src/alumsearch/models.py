"""Data models for enriched records and search results."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from alumsearch.entities.models import ProfileRecord
from alumsearch.text import normalize, normalize_slug


class TokenField(str, Enum):
    """Token sets carried by every enriched record."""

    ALIAS = "alias_tokens"
    PROGRAM = "program_tokens"
    PRODUCTION = "production_tokens"
    FESTIVAL = "festival_tokens"
    ROLE = "role_tokens"
    BIO = "bio_tokens"
    LOCATION = "location_tokens"
    IDENTITY = "identity_tokens"
    STATUS = "status_tokens"
    SEASON = "season_tokens"
    LANGUAGE = "language_tokens"


@dataclass(frozen=True)
class EnrichedRecord:
    """A profile record plus everything derived for search.

    Every token set holds Normalizer output only. Built once per corpus
    load and never mutated.
    """

    record: ProfileRecord
    canonical_slug: str
    headshot_url: str
    headshot_cache_key: str = ""
    slug_aliases: frozenset[str] = frozenset()

    alias_tokens: frozenset[str] = frozenset()
    program_tokens: frozenset[str] = frozenset()
    production_tokens: frozenset[str] = frozenset()
    festival_tokens: frozenset[str] = frozenset()
    role_tokens: frozenset[str] = frozenset()
    bio_tokens: frozenset[str] = frozenset()
    location_tokens: frozenset[str] = frozenset()
    identity_tokens: frozenset[str] = frozenset()
    status_tokens: frozenset[str] = frozenset()
    season_tokens: frozenset[str] = frozenset()
    language_tokens: frozenset[str] = frozenset()

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def slug(self) -> str:
        return self.record.slug

    @property
    def key(self) -> str:
        """Deduplication key: canonical slug, else own slug, else alumni id.

        Empty when the record carries none of them.
        """
        return (
            self.canonical_slug
            or normalize_slug(self.record.slug)
            or normalize_slug(self.record.alumni_id)
        )

    @property
    def identifiers(self) -> frozenset[str]:
        """Forms under which an alias index may reference this record."""
        forms = {
            self.record.slug,
            normalize_slug(self.record.slug),
            normalize(self.record.slug),
            self.canonical_slug,
            normalize(self.canonical_slug),
        }
        forms.update(self.slug_aliases)
        forms.discard("")
        return frozenset(forms)

    def tokens(self, token_field: TokenField) -> frozenset[str]:
        """Return the token set named by ``token_field``."""
        return getattr(self, token_field.value)


@dataclass
class ScoredResult:
    """A tier 1 match with its diagnostics. Reasons are informational only."""

    record: EnrichedRecord
    score: int
    coverage: float
    tokens_matched: int = 0
    reasons: list[str] = field(default_factory=list)


@dataclass
class SearchOutcome:
    """Result of one query: primary (scored) and secondary (fuzzy) lists.

    Unpacks as ``primary, secondary, normalized_query``.
    """

    primary: list[EnrichedRecord]
    secondary: list[EnrichedRecord]
    normalized_query: str
    scored: list[ScoredResult] = field(default_factory=list)

    def __iter__(self) -> Iterator:
        return iter((self.primary, self.secondary, self.normalized_query))

    @property
    def is_empty(self) -> bool:
        return not self.primary and not self.secondary
