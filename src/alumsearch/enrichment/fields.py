"""Explicit field tables for enrichment.

Every stored profile value must be findable by free-text search, so the
catch-all alias bucket lists every field with its extraction mode.
Adding a field to :class:`~alumsearch.entities.models.ProfileRecord`
without listing it here fails ``test_catch_all_covers_every_field``.
"""

from __future__ import annotations

from collections.abc import MutableSet
from enum import Enum

from alumsearch.entities.models import ProfileRecord
from alumsearch.models import TokenField
from alumsearch.text import add_listish_tokens, add_phrase_tokens, add_yearish_tokens


class ExtractionMode(str, Enum):
    """How a raw field value is turned into tokens."""

    PHRASE = "phrase"
    LISTISH = "listish"
    YEARISH = "yearish"


_EXTRACTORS = {
    ExtractionMode.PHRASE: add_phrase_tokens,
    ExtractionMode.LISTISH: add_listish_tokens,
    ExtractionMode.YEARISH: add_yearish_tokens,
}


# (field name, extraction mode) for the catch-all alias bucket.
CATCH_ALL_FIELDS: tuple[tuple[str, ExtractionMode], ...] = (
    # identity
    ("name", ExtractionMode.PHRASE),
    ("slug", ExtractionMode.PHRASE),
    ("alumni_id", ExtractionMode.PHRASE),
    # contact / web
    ("email", ExtractionMode.PHRASE),
    ("website", ExtractionMode.PHRASE),
    ("instagram", ExtractionMode.PHRASE),
    ("youtube", ExtractionMode.PHRASE),
    ("vimeo", ExtractionMode.PHRASE),
    ("imdb", ExtractionMode.PHRASE),
    # profile
    ("pronouns", ExtractionMode.PHRASE),
    ("location", ExtractionMode.PHRASE),
    ("current_work", ExtractionMode.PHRASE),
    # bios
    ("bio_short", ExtractionMode.PHRASE),
    ("bio_long", ExtractionMode.PHRASE),
    ("spotlight", ExtractionMode.PHRASE),
    # list-ish
    ("roles", ExtractionMode.LISTISH),
    ("programs", ExtractionMode.LISTISH),
    ("tags", ExtractionMode.LISTISH),
    ("status_flags", ExtractionMode.LISTISH),
    ("languages", ExtractionMode.LISTISH),
    # status / public flags
    ("is_public", ExtractionMode.PHRASE),
    ("status", ExtractionMode.PHRASE),
    # dates
    ("updated_at", ExtractionMode.YEARISH),
    # media ids / urls (people paste these into search)
    ("current_headshot_id", ExtractionMode.PHRASE),
    ("current_headshot_url", ExtractionMode.PHRASE),
    ("featured_album_id", ExtractionMode.PHRASE),
    ("featured_reel_id", ExtractionMode.PHRASE),
    ("featured_event_id", ExtractionMode.PHRASE),
)


# Dedicated buckets used by weighted scoring.
BUCKET_FIELDS: dict[TokenField, tuple[tuple[str, ExtractionMode], ...]] = {
    TokenField.ROLE: (("roles", ExtractionMode.LISTISH),),
    TokenField.LOCATION: (("location", ExtractionMode.PHRASE),),
    TokenField.BIO: (
        ("bio_short", ExtractionMode.PHRASE),
        ("bio_long", ExtractionMode.PHRASE),
        ("spotlight", ExtractionMode.PHRASE),
        ("current_work", ExtractionMode.PHRASE),
    ),
    TokenField.IDENTITY: (("tags", ExtractionMode.LISTISH),),
    TokenField.STATUS: (
        ("status_flags", ExtractionMode.LISTISH),
        ("status", ExtractionMode.PHRASE),
        ("is_public", ExtractionMode.PHRASE),
    ),
}


def extract_fields(
    dest: MutableSet[str],
    record: ProfileRecord,
    table: tuple[tuple[str, ExtractionMode], ...],
) -> None:
    """Feed every ``(field, mode)`` of ``table`` from ``record`` into ``dest``."""
    for field_name, mode in table:
        _EXTRACTORS[mode](dest, getattr(record, field_name))
