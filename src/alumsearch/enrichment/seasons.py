"""Season token derivation from program/production season numbers."""

from __future__ import annotations

from collections.abc import MutableSet

from alumsearch.entities.models import ExternalMaps
from alumsearch.text import add_phrase_tokens, add_yearish_tokens


def add_season_tokens(dest: MutableSet[str], season: int | None, maps: ExternalMaps) -> None:
    """Add tokens for season ``season`` ("season-18", "season 18", years, projects).

    Seasons that are missing or not positive add nothing. Seasons absent
    from the season table still get their slug and label.
    """
    if season is None or season <= 0:
        return

    slug = f"season-{season}"
    add_phrase_tokens(dest, slug)
    add_phrase_tokens(dest, f"season {season}")

    info = maps.season_by_slug(slug)
    if info is None:
        return

    add_phrase_tokens(dest, info.season_title)
    add_yearish_tokens(dest, info.years)
    for project in info.projects:
        add_phrase_tokens(dest, project)
    add_phrase_tokens(dest, f"{info.season_title} {info.years}")
