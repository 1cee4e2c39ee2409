"""Hard filters gating search results by token bucket membership."""

from __future__ import annotations

from dataclasses import dataclass

from alumsearch.models import EnrichedRecord, TokenField
from alumsearch.text import normalize


@dataclass
class SearchFilters:
    """Active filter criteria for search results.

    Each non-empty value is normalized and must be a member of the
    matching token set of a record for that record to pass.
    """

    program: str | None = None
    role: str | None = None
    location: str | None = None
    status_flag: str | None = None
    identity_tag: str | None = None
    language: str | None = None
    season: str | None = None

    def _pairs(self) -> list[tuple[str | None, TokenField]]:
        return [
            (self.program, TokenField.PROGRAM),
            (self.role, TokenField.ROLE),
            (self.location, TokenField.LOCATION),
            (self.status_flag, TokenField.STATUS),
            (self.identity_tag, TokenField.IDENTITY),
            (self.language, TokenField.LANGUAGE),
            (self.season, TokenField.SEASON),
        ]

    def is_empty(self) -> bool:
        """Return True if no filter field holds a usable value."""
        return not any(normalize(value) for value, _ in self._pairs())

    def passes(self, record: EnrichedRecord) -> bool:
        """Return True if ``record`` satisfies every active filter."""
        for value, token_field in self._pairs():
            wanted = normalize(value)
            if wanted and wanted not in record.tokens(token_field):
                return False
        return True
