"""Tier 2 approximate fallback matching.

Weighted multi-field fuzzy match over the enriched corpus. Each query
word is compared against a field's tokens with rapidfuzz's ``ratio``;
a word below the threshold counts as zero, and the field similarity is
the mean over the query words (or the whole query's ratio against the
closest token, if higher). A field therefore scores lower as more
query words go unmatched. The match is accent-insensitive.

A record matches when any field's similarity reaches the threshold; its
rank value is the weighted sum of every field similarity at or above it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from rapidfuzz import fuzz, process

from alumsearch.config import FuzzyConfig
from alumsearch.models import EnrichedRecord, TokenField
from alumsearch.text import normalize, strip_diacritics

logger = logging.getLogger(__name__)

NAME_FIELD = "name"


@dataclass(frozen=True)
class FuzzyHit:
    """A tier 2 match with its weighted rank value."""

    record: EnrichedRecord
    rank: float
    best_field: str
    best_similarity: float


def _field_choices(record: EnrichedRecord, field_name: str) -> tuple[str, ...]:
    if field_name == NAME_FIELD:
        name = normalize(strip_diacritics(record.name))
        if not name:
            return ()
        return (name, *dict.fromkeys(name.split()))
    return tuple(sorted(record.tokens(TokenField(field_name))))


class FuzzyMatcher:
    """Pre-indexed fuzzy matcher over one corpus snapshot.

    Choices are built once per corpus; :meth:`search` only scores.
    Field names are ``"name"`` or any :class:`TokenField` value; unknown
    names in the weight table are skipped with a warning.
    """

    def __init__(self, corpus: Sequence[EnrichedRecord], config: FuzzyConfig | None = None):
        self.config = config or FuzzyConfig()
        self._fields: list[tuple[str, float]] = []
        valid = {NAME_FIELD, *(f.value for f in TokenField)}
        for field_name, weight in self.config.field_weights.items():
            if field_name not in valid:
                logger.warning("Ignoring unknown fuzzy field %r", field_name)
                continue
            if weight > 0:
                self._fields.append((field_name, weight))

        self._corpus = list(corpus)
        self._choices = [
            {name: _field_choices(record, name) for name, _ in self._fields}
            for record in self._corpus
        ]
        logger.debug(
            "Fuzzy matcher ready: %d records, %d fields", len(self._corpus), len(self._fields)
        )

    def __len__(self) -> int:
        return len(self._corpus)

    def _best(self, text: str, choices: tuple[str, ...]) -> float:
        """Closest choice's ratio, or 0 when none reaches the threshold."""
        match = process.extractOne(
            text,
            choices,
            scorer=fuzz.ratio,
            score_cutoff=self.config.threshold,
        )
        return float(match[1]) if match else 0.0

    def _similarity(self, query: str, words: list[str], choices: tuple[str, ...]) -> float:
        if not choices:
            return 0.0
        per_word = sum(self._best(word, choices) for word in words) / len(words)
        if len(words) == 1:
            return per_word
        return max(per_word, self._best(query, choices))

    def search(self, query: str) -> list[FuzzyHit]:
        """Return matching records, best rank first (ties keep corpus order)."""
        q = normalize(strip_diacritics(query))
        if not q:
            return []
        words = list(dict.fromkeys(q.split()))

        hits: list[FuzzyHit] = []
        for record, choices in zip(self._corpus, self._choices):
            rank = 0.0
            best_field = ""
            best_similarity = 0.0
            for field_name, weight in self._fields:
                similarity = self._similarity(q, words, choices[field_name])
                if similarity < self.config.threshold:
                    continue
                rank += weight * similarity
                if similarity > best_similarity:
                    best_field, best_similarity = field_name, similarity
            if best_field:
                hits.append(FuzzyHit(record, rank, best_field, best_similarity))

        hits.sort(key=lambda h: h.rank, reverse=True)
        return hits
