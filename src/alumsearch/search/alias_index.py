"""Alias index: normalized alias phrase -> record identifiers.

Program and production metadata name the artists who took part; the
index lets a query like "teaching artist residency slovakia 2024" or
"edinburgh" reach those artists even when nothing in their own profile
says so. A small manual override table (``data/alias_overrides.yml``)
links aliases the metadata cannot express, applied exactly one hop deep.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path

import yaml

from alumsearch.constants import FESTIVAL_SPLIT_PATTERN, PROGRAM_PREFIX_PATTERN
from alumsearch.entities.models import ExternalMaps, ProductionEntry, ProgramEntry
from alumsearch.exceptions import CorpusMismatchError
from alumsearch.models import EnrichedRecord
from alumsearch.text import normalize, normalize_slug

logger = logging.getLogger(__name__)

DEFAULT_OVERRIDES_PATH = Path(__file__).parent.parent / "data" / "alias_overrides.yml"

_PROGRAM_PREFIX = re.compile(PROGRAM_PREFIX_PATTERN, re.IGNORECASE)
_FESTIVAL_SPLIT = re.compile(FESTIVAL_SPLIT_PATTERN)

# Module-level override cache
_overrides_cache: dict[str, list[str]] | None = None


def load_alias_overrides(path: Path | None = None) -> dict[str, list[str]]:
    """Load the manual alias override table from YAML.

    Caches the result at module level when reading the default path.

    Returns:
        Dict mapping source alias -> list of target aliases (raw text).
    """
    global _overrides_cache

    if _overrides_cache is not None and path is None:
        return _overrides_cache

    with open(path or DEFAULT_OVERRIDES_PATH) as f:
        raw = yaml.safe_load(f) or {}

    overrides = {str(alias): [str(t) for t in (targets or [])] for alias, targets in raw.items()}
    if path is None:
        _overrides_cache = overrides
    return overrides


class AliasIndex(Mapping[str, frozenset[str]]):
    """Read-only mapping of alias phrase to a frozenset of record identifiers."""

    def __init__(self, entries: Mapping[str, Iterable[str]]) -> None:
        self._entries: dict[str, frozenset[str]] = {
            alias: frozenset(entries[alias]) for alias in sorted(entries) if entries[alias]
        }

    def __getitem__(self, alias: str) -> frozenset[str]:
        return self._entries[alias]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"AliasIndex({len(self._entries)} aliases)"

    def lookup(self, phrase: str) -> frozenset[str]:
        """Identifiers for ``phrase`` (normalized first); empty when absent."""
        return self._entries.get(normalize(phrase), frozenset())

    def identifiers(self) -> frozenset[str]:
        """Union of every identifier referenced by the index."""
        out: set[str] = set()
        for members in self._entries.values():
            out.update(members)
        return frozenset(out)

    def validate_against(self, corpus: Iterable[EnrichedRecord]) -> None:
        """Fail fast if the index references identifiers no record carries.

        Raises:
            CorpusMismatchError: Listing the unknown identifiers.
        """
        known: set[str] = set()
        for record in corpus:
            known.update(record.identifiers)
        missing = self.identifiers() - known
        if missing:
            raise CorpusMismatchError(set(missing))


def _program_aliases(prog: ProgramEntry) -> list[str]:
    return [
        prog.title,
        prog.program,
        _PROGRAM_PREFIX.sub("", prog.program),
        prog.location,
        f"{prog.program} {prog.year}",
        f"{prog.program} {prog.location}",
        f"{prog.program} {prog.location} {prog.year}",
    ]


def _production_aliases(prod: ProductionEntry) -> list[str]:
    fragments = _FESTIVAL_SPLIT.split(prod.festival) if prod.festival else []
    return [
        prod.title,
        *fragments,
        prod.location,
        f"{prod.title} {prod.year}",
    ]


def build_alias_index(
    programs: Mapping[str, ProgramEntry],
    productions: Mapping[str, ProductionEntry],
    overrides: Mapping[str, Iterable[str]] | None = None,
) -> AliasIndex:
    """Build the alias index from program and production metadata.

    Each entry contributes a fixed set of alias phrases; every alias maps
    to the entry's artist slugs. Then each override source alias absorbs
    the identifiers of its target aliases, read from the pre-override
    index so chains are never followed.

    Args:
        programs: Program map keyed by program slug.
        productions: Production map keyed by production slug.
        overrides: ``{alias: [target aliases]}``; defaults to the packaged table.

    Returns:
        AliasIndex with deduplicated identifier sets and sorted keys.
    """
    if overrides is None:
        overrides = load_alias_overrides()

    index: dict[str, set[str]] = {}

    def add_alias(alias: str, identifiers: Iterable[str]) -> None:
        key = normalize(alias)
        if not key:
            return
        members = {normalize_slug(i) for i in identifiers}
        members.discard("")
        if members:
            index.setdefault(key, set()).update(members)

    for key in sorted(programs):
        prog = programs[key]
        for alias in _program_aliases(prog):
            add_alias(alias, prog.artist_slugs)

    for key in sorted(productions):
        prod = productions[key]
        for alias in _production_aliases(prod):
            add_alias(alias, prod.artist_slugs)

    snapshot = {alias: frozenset(members) for alias, members in index.items()}
    for alias in sorted(overrides):
        for target in overrides[alias]:
            linked = snapshot.get(normalize(target))
            if linked:
                add_alias(alias, linked)

    result = AliasIndex(index)
    logger.debug(
        "Alias index built: %d aliases from %d programs, %d productions",
        len(result),
        len(programs),
        len(productions),
    )
    return result


def build_alias_index_from_maps(
    maps: ExternalMaps,
    overrides: Mapping[str, Iterable[str]] | None = None,
) -> AliasIndex:
    """Convenience wrapper taking the bundled external maps."""
    return build_alias_index(maps.programs, maps.productions, overrides)
