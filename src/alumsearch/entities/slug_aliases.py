"""SlugAliasTable: in-memory slug forward resolution.

Profiles get renamed; old slugs are kept as forwards (``from -> to``)
so links and program rosters written against the old slug still reach
the profile. The table is small and built once per corpus load.

Usage:
    table = SlugAliasTable.from_forwards({"jane-doe": "jane-smith"})
    table.resolve("Jane Doe")        # "jane-smith"
    table.aliases_for("jane-smith")  # {"jane-smith", "jane-doe"}
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from alumsearch.text import normalize_slug

logger = logging.getLogger(__name__)

# Upper bound on forward hops; chains in the source sheet are accidental
# and never legitimately this long.
MAX_HOPS = 100


class SlugAliasTable:
    """Resolve any slug to its canonical slug and back to its alias set.

    Forwards are normalized on load; self-forwards and blank rows are
    dropped, and later rows win over earlier ones for the same source.
    Chains are followed and cycles are broken, so resolution never raises.
    """

    def __init__(self, forwards: Iterable[tuple[str, str]] = ()) -> None:
        self._by_from: dict[str, str] = {}
        self._by_to: dict[str, set[str]] = {}
        for raw_from, raw_to in forwards:
            source = normalize_slug(raw_from)
            target = normalize_slug(raw_to)
            if not source or not target or source == target:
                continue
            previous = self._by_from.get(source)
            if previous is not None:
                self._by_to[previous].discard(source)
            self._by_from[source] = target
            self._by_to.setdefault(target, set()).add(source)

        logger.debug(
            "SlugAliasTable loaded: %d forwards, %d targets",
            len(self._by_from),
            len(self._by_to),
        )

    @classmethod
    def from_forwards(cls, forwards: Mapping[str, str]) -> SlugAliasTable:
        """Build a table from a ``{from_slug: to_slug}`` mapping."""
        return cls(forwards.items())

    def __len__(self) -> int:
        return len(self._by_from)

    def resolve(self, slug: str) -> str:
        """Return the canonical slug for ``slug`` (normalized), following chains."""
        current = normalize_slug(slug)
        seen: set[str] = set()
        for _ in range(MAX_HOPS):
            if current in seen:
                break
            seen.add(current)
            target = self._by_from.get(current)
            if target is None:
                break
            current = target
        return current

    def aliases_for(self, slug: str) -> set[str]:
        """All slugs equivalent to ``slug``, canonical included."""
        canonical = self.resolve(slug)
        aliases = {canonical} if canonical else set()
        if not canonical:
            return aliases

        # Breadth-first over reverse forwards absorbs chained entries.
        frontier = [canonical]
        while frontier:
            target = frontier.pop()
            for source in self._by_to.get(target, ()):
                if source not in aliases:
                    aliases.add(source)
                    frontier.append(source)
        return aliases

