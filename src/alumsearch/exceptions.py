"""Exceptions raised by the alumni directory search engine.

Malformed record data never raises; these cover caller-contract
violations only, and are raised while building an engine or its
options, never while evaluating a query.
"""

from __future__ import annotations


class AlumSearchError(Exception):
    """Base class for alumsearch errors."""


class InvalidSearchOptions(AlumSearchError, ValueError):
    """Raised when search options violate the caller contract (e.g. max_secondary <= 0)."""


class CorpusMismatchError(AlumSearchError):
    """Raised when an alias index references identifiers absent from the corpus."""

    def __init__(self, missing: set[str]) -> None:
        self.missing = frozenset(missing)
        preview = ", ".join(sorted(self.missing)[:5])
        more = f" (+{len(self.missing) - 5} more)" if len(self.missing) > 5 else ""
        super().__init__(
            f"Alias index references {len(self.missing)} identifier(s) absent "
            f"from the corpus: {preview}{more}"
        )
