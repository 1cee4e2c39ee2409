"""Shared pytest fixtures for alumni search tests.

Provides a small profile corpus, program/production/season maps with a
renamed-profile slug forward, media rows, the enriched corpus and the
alias index built from them.

Corpus:
    jesse-baxter  Actor/Director in Brooklyn; Slovakia program (season 18),
                  The Tempest at Edinburgh Fringe (season 17); two headshots
    maria-lopez   Playwright in Quito; listed on the Ecuador program
                  roster under her old slug ``old-maria`` (season 14)
    sam-rivera    Stage Manager in Chicago; tag "Actress" (not Spanish)
"""

from __future__ import annotations

import pytest

from alumsearch.enrichment.pipeline import enrich
from alumsearch.entities.models import (
    ExternalMaps,
    MediaCandidate,
    ProductionEntry,
    ProgramEntry,
    SeasonInfo,
)
from alumsearch.entities.slug_aliases import SlugAliasTable
from alumsearch.models import EnrichedRecord
from alumsearch.search.alias_index import AliasIndex, build_alias_index_from_maps


@pytest.fixture
def raw_records() -> list[dict]:
    """Profile rows as the backend supplies them (camelCase keys)."""
    return [
        {
            "name": "Jesse Baxter",
            "slug": "jesse-baxter",
            "alumniId": "jesse-baxter",
            "roles": "Actor, Director",
            "location": "Brooklyn, NY",
            "bioShort": "Physical theatre maker.",
            "tags": "Teaching Artist",
            "statusFlags": "Founding Member",
            "languages": "English | Español",
            "updatedAt": "2024-03-01T00:00:00Z",
        },
        {
            "name": "María López",
            "slug": "maria-lopez",
            "roles": "Playwright",
            "location": "Quito, Ecuador",
            "bioShort": "Writes bilingual plays.",
            "languages": "es",
            "isPublic": True,
        },
        {
            "name": "Sam Rivera",
            "slug": "sam-rivera",
            "roles": "Stage Manager",
            "location": "Chicago",
            "tags": "Actress",
            "website": None,
        },
    ]


@pytest.fixture
def external_maps() -> ExternalMaps:
    """Program, production and season metadata plus one slug forward."""
    return ExternalMaps(
        programs={
            "slovakia-2024": ProgramEntry(
                title="Heart of Europe",
                slug="slovakia-2024",
                program="ACTion: Slovakia",
                location="Slovakia",
                year="2024",
                season="18",
                artists={"jesse-baxter": True},
            ),
            "ecuador-2019": ProgramEntry(
                title="Andes and Amazon",
                slug="ecuador-2019",
                program="ACTion: Ecuador",
                location="Ecuador",
                year="2019",
                season="14",
                artists={"old-maria": True},
            ),
        },
        productions={
            "tempest": ProductionEntry(
                title="The Tempest",
                slug="tempest",
                location="Edinburgh",
                year="2022",
                season="17",
                festival="Edinburgh Fringe: Made in Scotland",
                artists={"jesse-baxter": ["Actor"]},
            ),
        },
        seasons=[
            SeasonInfo(
                slug="season-18",
                season_title="Season 18",
                years="2024-2025",
                projects=["Heart of Europe"],
            ),
            SeasonInfo(
                slug="season-14",
                season_title="Season 14",
                years="2019",
                projects=["Andes and Amazon"],
            ),
        ],
        slug_aliases=SlugAliasTable.from_forwards({"old-maria": "maria-lopez"}),
    )


@pytest.fixture
def media_rows() -> list[MediaCandidate | dict]:
    """Two headshots for Jesse; the current one is keyed by a non-normalized id."""
    return [
        MediaCandidate(
            alumni_id="jesse-baxter",
            kind="headshot",
            file_id="fileA",
            uploaded_at="2024-01-01T00:00:00Z",
            is_current="false",
        ),
        {
            "alumniId": "Jesse-Baxter",
            "kind": "Head Shot",
            "fileId": "fileC",
            "uploadedAt": "2023-06-01T00:00:00Z",
            "isCurrent": "TRUE",
        },
        MediaCandidate(alumni_id="jesse-baxter", kind="album", file_id="fileZ", is_current=True),
    ]


@pytest.fixture
def corpus(raw_records, media_rows, external_maps) -> list[EnrichedRecord]:
    """The enriched corpus, in input order."""
    return enrich(raw_records, media_rows, external_maps)


@pytest.fixture
def by_slug(corpus) -> dict[str, EnrichedRecord]:
    return {record.slug: record for record in corpus}


@pytest.fixture
def alias_index(external_maps) -> AliasIndex:
    """Alias index from the fixture maps with the packaged overrides."""
    return build_alias_index_from_maps(external_maps)
