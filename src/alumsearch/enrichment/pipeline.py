"""Enrichment pipeline: profile rows -> searchable enriched records.

Each record is processed independently against read-only collaborator
data (program/production maps, season table, slug forwards, media rows):

A. Resolve the canonical slug and the full slug alias set
B. Pick the current headshot from the record's media rows
C. Fill the catch-all alias bucket from the explicit field table
D. Fill the dedicated role/location/bio/identity/status buckets
E. Join program and production rosters via the slug alias set
   -> program, production, festival, season tokens
F. Derive language tokens (languages field, tags fallback)
G. Add word tokens for bios and location

The output is immutable; rebuild it when the corpus or maps change.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from alumsearch.constants import FESTIVAL_SPLIT_PATTERN
from alumsearch.enrichment.fields import BUCKET_FIELDS, CATCH_ALL_FIELDS, extract_fields
from alumsearch.enrichment.languages import add_language_tokens
from alumsearch.enrichment.seasons import add_season_tokens
from alumsearch.entities.models import (
    ExternalMaps,
    MediaCandidate,
    ProductionEntry,
    ProfileRecord,
    ProgramEntry,
)
from alumsearch.media.headshots import resolve_headshot
from alumsearch.models import EnrichedRecord, TokenField
from alumsearch.search.alias_index import AliasIndex
from alumsearch.text import (
    add_phrase_tokens,
    add_yearish_tokens,
    normalize,
    normalize_slug,
    tokenize,
)

logger = logging.getLogger(__name__)

_FESTIVAL_SPLIT = re.compile(FESTIVAL_SPLIT_PATTERN)

MediaInput = Iterable[MediaCandidate] | Mapping[str, Sequence[MediaCandidate]]


def _as_record(row: ProfileRecord | Mapping[str, Any]) -> ProfileRecord:
    if isinstance(row, ProfileRecord):
        return row
    return ProfileRecord.model_validate(dict(row))


def _as_candidate(row: MediaCandidate | Mapping[str, Any]) -> MediaCandidate:
    if isinstance(row, MediaCandidate):
        return row
    return MediaCandidate.model_validate(dict(row))


def index_media(media: MediaInput | None) -> dict[str, list[MediaCandidate]]:
    """Group media rows by owner key, under both the raw and the slug-normalized key."""
    grouped: dict[str, list[MediaCandidate]] = {}
    if media is None:
        return grouped

    if isinstance(media, Mapping):
        pairs = [
            (str(key), _as_candidate(row)) for key, rows in media.items() for row in rows or ()
        ]
    else:
        pairs = [(c.alumni_id, c) for c in map(_as_candidate, media)]

    for key, candidate in pairs:
        raw = key.strip()
        if not raw:
            continue
        grouped.setdefault(raw, []).append(candidate)
        normalized = normalize_slug(raw)
        if normalized and normalized != raw:
            grouped.setdefault(normalized, []).append(candidate)
    return grouped


def media_for(
    record: ProfileRecord,
    canonical_slug: str,
    media_index: Mapping[str, Sequence[MediaCandidate]],
) -> Sequence[MediaCandidate]:
    """First non-empty candidate list among the record's identifier forms.

    Tried in order: raw id, normalized id, slug, normalized slug,
    canonical slug, normalized canonical slug.
    """
    keys = (
        record.alumni_id,
        normalize_slug(record.alumni_id),
        record.slug,
        normalize_slug(record.slug),
        canonical_slug,
        normalize_slug(canonical_slug),
    )
    for key in keys:
        if key and media_index.get(key):
            return media_index[key]
    return ()


def _add_normalized(dest: set[str], value: str) -> None:
    normalized = normalize(value)
    if normalized:
        dest.add(normalized)


def _roster_hit(artist_slugs: Iterable[str], aliases: set[str]) -> bool:
    return any(normalize_slug(slug) in aliases for slug in artist_slugs)


def _add_program(
    prog: ProgramEntry,
    program_tokens: set[str],
    alias_tokens: set[str],
) -> None:
    for value in (prog.title, prog.program, prog.location):
        if value:
            _add_normalized(program_tokens, value)
            add_phrase_tokens(alias_tokens, value)
    for value in (prog.year, prog.season):
        if value:
            add_yearish_tokens(program_tokens, value)
            add_yearish_tokens(alias_tokens, value)

    if prog.program and prog.location:
        _add_normalized(program_tokens, f"{prog.program} {prog.location}")
    if prog.program and prog.year:
        add_yearish_tokens(program_tokens, f"{prog.program} {prog.year}")
    if prog.program and prog.season:
        add_yearish_tokens(program_tokens, f"{prog.program} {prog.season}")

    if prog.season_number is not None:
        add_phrase_tokens(alias_tokens, f"season-{prog.season_number}")
        add_phrase_tokens(alias_tokens, f"season {prog.season_number}")


def _add_production(
    prod: ProductionEntry,
    production_tokens: set[str],
    festival_tokens: set[str],
    alias_tokens: set[str],
) -> None:
    for value in (prod.title, prod.location):
        if value:
            _add_normalized(production_tokens, value)
            add_phrase_tokens(alias_tokens, value)
    for value in (prod.year, prod.season):
        if value:
            add_yearish_tokens(production_tokens, value)
            add_yearish_tokens(alias_tokens, value)

    if prod.title and prod.location:
        _add_normalized(production_tokens, f"{prod.title} {prod.location}")
    if prod.title and prod.year:
        add_yearish_tokens(production_tokens, f"{prod.title} {prod.year}")
    if prod.title and prod.season:
        add_yearish_tokens(production_tokens, f"{prod.title} {prod.season}")

    if prod.festival:
        _add_normalized(production_tokens, prod.festival)
        add_phrase_tokens(alias_tokens, prod.festival)
        for fragment in _FESTIVAL_SPLIT.split(prod.festival):
            _add_normalized(festival_tokens, fragment)

    if prod.season_number is not None:
        add_phrase_tokens(alias_tokens, f"season-{prod.season_number}")
        add_phrase_tokens(alias_tokens, f"season {prod.season_number}")


def enrich_record(
    record: ProfileRecord,
    maps: ExternalMaps,
    media_index: Mapping[str, Sequence[MediaCandidate]],
) -> EnrichedRecord:
    """Build the enriched form of a single profile record."""
    buckets: dict[TokenField, set[str]] = {field: set() for field in TokenField}
    alias_tokens = buckets[TokenField.ALIAS]

    # A. canonical slug + alias set
    canonical_slug = maps.slug_aliases.resolve(record.slug) or normalize_slug(record.slug)
    slug_aliases = maps.slug_aliases.aliases_for(record.slug)
    own_slug = normalize_slug(record.slug)
    if own_slug:
        slug_aliases.add(own_slug)
    for alias in slug_aliases:
        add_phrase_tokens(alias_tokens, alias)

    # B. headshot
    headshot = resolve_headshot(
        media_for(record, canonical_slug, media_index),
        record_updated_at=record.updated_at,
    )

    # C. catch-all
    extract_fields(alias_tokens, record, CATCH_ALL_FIELDS)

    # D. dedicated buckets
    for token_field, table in BUCKET_FIELDS.items():
        extract_fields(buckets[token_field], record, table)

    # E. program / production rosters
    seasons: list[int] = []
    for key in sorted(maps.programs):
        prog = maps.programs[key]
        if _roster_hit(prog.artist_slugs, slug_aliases):
            _add_program(prog, buckets[TokenField.PROGRAM], alias_tokens)
            if prog.season_number is not None:
                seasons.append(prog.season_number)

    for key in sorted(maps.productions):
        prod = maps.productions[key]
        if _roster_hit(prod.artist_slugs, slug_aliases):
            _add_production(
                prod,
                buckets[TokenField.PRODUCTION],
                buckets[TokenField.FESTIVAL],
                alias_tokens,
            )
            if prod.season_number is not None:
                seasons.append(prod.season_number)

    for season in seasons:
        add_season_tokens(buckets[TokenField.SEASON], season, maps)

    # F. languages, with tags as fallback
    add_language_tokens(buckets[TokenField.LANGUAGE], record.languages)
    add_language_tokens(buckets[TokenField.LANGUAGE], record.tags, allow_codes=False)

    # G. word tokens
    for value in (record.bio_short, record.bio_long, record.current_work):
        buckets[TokenField.BIO].update(tokenize(value))
    buckets[TokenField.LOCATION].update(tokenize(record.location))

    return EnrichedRecord(
        record=record,
        canonical_slug=canonical_slug,
        headshot_url=headshot.url,
        headshot_cache_key=headshot.cache_key,
        slug_aliases=frozenset(slug_aliases),
        **{field.value: frozenset(tokens) for field, tokens in buckets.items()},
    )


def enrich(
    records: Iterable[ProfileRecord | Mapping[str, Any]],
    media_candidates: MediaInput | None,
    external_maps: ExternalMaps,
    alias_index: AliasIndex | None = None,
) -> list[EnrichedRecord]:
    """Enrich a batch of profile records. Pure: inputs are not modified.

    Args:
        records: Profile rows (models or raw dicts; dicts are validated leniently).
        media_candidates: Media rows, either a flat iterable (grouped by
            ``alumni_id``) or a mapping of owner key -> rows.
        external_maps: Program/production maps, season table, slug forwards.
        alias_index: Optional index to check against the produced corpus.

    Returns:
        Enriched records in input order.

    Raises:
        CorpusMismatchError: If ``alias_index`` references identifiers that
            no enriched record carries.
    """
    media_index = index_media(media_candidates)
    out = [enrich_record(_as_record(row), external_maps, media_index) for row in records]

    logger.debug(
        "Enriched %d records (%d media keys, %d programs, %d productions)",
        len(out),
        len(media_index),
        len(external_maps.programs),
        len(external_maps.productions),
    )

    if alias_index is not None:
        alias_index.validate_against(out)
    return out
