"""Pydantic models for the read-only inputs of the search engine.

Profile rows, media candidates and program/production/season metadata
come from spreadsheets and hand-edited maps, so validation is lenient:
missing or ``None`` values become empty strings and unknown keys are
ignored. Malformed data is never an error here.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from alumsearch.entities.slug_aliases import SlugAliasTable


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value).strip()


class _Lenient(BaseModel):
    """Frozen model accepting camelCase or snake_case keys, coercing to text."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class ProfileRecord(_Lenient):
    """A profile row as supplied by the storage backend."""

    name: str = ""
    alumni_id: str = ""
    email: str = ""
    slug: str = ""

    pronouns: str = ""
    roles: str = ""
    location: str = ""
    current_work: str = ""

    bio_short: str = ""
    bio_long: str = ""

    website: str = ""
    instagram: str = ""
    youtube: str = ""
    vimeo: str = ""
    imdb: str = ""

    spotlight: str = ""
    programs: str = ""
    tags: str = ""
    status_flags: str = ""
    languages: str = ""

    is_public: str = ""
    status: str = ""
    updated_at: str = ""

    current_headshot_id: str = ""
    current_headshot_url: str = ""

    featured_album_id: str = ""
    featured_reel_id: str = ""
    featured_event_id: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if isinstance(value, (list, tuple)):
            return ", ".join(_as_text(v) for v in value if _as_text(v))
        return _as_text(value)


class MediaCandidate(_Lenient):
    """One media asset row for one profile."""

    alumni_id: str = ""
    kind: str = ""
    file_id: str = ""
    external_url: str = ""
    uploaded_at: str = ""
    is_current: bool | str = False
    sort_index: str = ""

    @field_validator(
        "alumni_id", "kind", "file_id", "external_url", "uploaded_at", "sort_index", mode="before"
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("is_current", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool | str:
        if isinstance(value, bool):
            return value
        return _as_text(value)


class _MapEntry(_Lenient):
    """Shared fields of program and production map entries."""

    title: str = ""
    slug: str = ""
    location: str = ""
    year: str = ""
    season: str = ""
    artists: dict[str, Any] = Field(default_factory=dict)

    @field_validator("title", "slug", "location", "year", "season", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("artists", mode="before")
    @classmethod
    def _coerce_artists(cls, value: Any) -> dict[str, Any]:
        if isinstance(value, dict):
            return {str(k): v for k, v in value.items()}
        if isinstance(value, (list, tuple, set)):
            return {str(k): True for k in value}
        return {}

    @property
    def artist_slugs(self) -> list[str]:
        """Roster keys; values (``True`` or a role list) are not significant."""
        return list(self.artists)

    @property
    def season_number(self) -> int | None:
        """Positive integer season, or None when missing or unparseable."""
        try:
            number = int(float(self.season))
        except (ValueError, OverflowError):
            return None
        return number if number > 0 else None


class ProgramEntry(_MapEntry):
    """A program map entry (residencies, treks, ...)."""

    program: str = ""

    @field_validator("program", mode="before")
    @classmethod
    def _coerce_program(cls, value: Any) -> str:
        return _as_text(value)


class ProductionEntry(_MapEntry):
    """A production map entry."""

    festival: str = ""

    @field_validator("festival", mode="before")
    @classmethod
    def _coerce_festival(cls, value: Any) -> str:
        return _as_text(value)


class SeasonInfo(_Lenient):
    """One row of the season table."""

    slug: str = ""
    season_title: str = ""
    years: str = ""
    projects: list[str] = Field(default_factory=list)

    @field_validator("slug", "season_title", "years", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("projects", mode="before")
    @classmethod
    def _coerce_projects(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value.strip() else []
        return [_as_text(v) for v in value if _as_text(v)]


class ExternalMaps(BaseModel):
    """Read-only collaborator data injected into enrichment and indexing."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    programs: dict[str, ProgramEntry] = Field(default_factory=dict)
    productions: dict[str, ProductionEntry] = Field(default_factory=dict)
    seasons: list[SeasonInfo] = Field(default_factory=list)
    slug_aliases: SlugAliasTable = Field(default_factory=SlugAliasTable)

    def season_by_slug(self, slug: str) -> SeasonInfo | None:
        """Look up a season row by its slug (e.g. ``season-18``)."""
        for season in self.seasons:
            if season.slug == slug:
                return season
        return None
