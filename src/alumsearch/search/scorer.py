"""Tier 1 deterministic scorer.

Scores one enriched record against one query with fixed point values
(see :class:`~alumsearch.config.ScoringWeights`):

Whole-query checks (each applied once):
    alias index match, full name exact, quoted phrase, program exact,
    role exact (once per matching declared role), name + location combo.

Per-word checks (each query word, every category independently):
    name, role, program/production, bio, status, identity, location.

Coverage adjustments:
    multi-term bonus, full-coverage bonus, low-coverage penalty.

Example:
    Query "Ecuador" against a record whose only match is location token
    "ecuador": +100 location word, 1/1 words matched so +150 full
    coverage, total 250.
"""

from __future__ import annotations

from dataclasses import dataclass

from alumsearch.config import ScoringWeights
from alumsearch.models import EnrichedRecord, ScoredResult
from alumsearch.search.alias_index import AliasIndex
from alumsearch.text import (
    extract_quoted_phrase,
    normalize,
    normalize_name_no_space,
    query_terms,
    split_listish,
    strip_diacritics,
)


@dataclass(frozen=True)
class ParsedQuery:
    """A query normalized once and shared across every record scored."""

    raw: str
    normalized: str
    terms: tuple[str, ...]
    quoted: str | None

    @classmethod
    def parse(cls, raw: str) -> ParsedQuery:
        return cls(
            raw=raw,
            normalized=normalize(raw),
            terms=tuple(query_terms(raw)),
            quoted=extract_quoted_phrase(raw),
        )

    @property
    def multi_term(self) -> bool:
        return len(self.terms) > 1


def score_record(
    record: EnrichedRecord,
    alias_index: AliasIndex,
    query: ParsedQuery | str,
    weights: ScoringWeights | None = None,
) -> ScoredResult:
    """Compute the tier 1 score, coverage and match reasons for ``record``.

    Never raises; a record with no token data simply scores 0.
    """
    if isinstance(query, str):
        query = ParsedQuery.parse(query)
    if weights is None:
        weights = ScoringWeights()

    q = query.normalized
    score = 0
    reasons: list[str] = []

    # Names match with or without accents ("maria" finds "María") and
    # without inner punctuation ("jnelle" finds "J'nelle").
    spaced_forms = {normalize(record.name), normalize(strip_diacritics(record.name))}
    spaced_forms.discard("")
    name_forms = spaced_forms | {normalize_name_no_space(record.name)}
    name_forms.discard("")
    name_parts = {part for form in spaced_forms for part in form.split()}
    name_parts.update(normalize_name_no_space(word) for word in record.name.split())
    name_parts.discard("")

    # Whole-query checks
    if q and alias_index.lookup(q) & record.identifiers:
        score += weights.alias_index_match
        reasons.append("Alias Index Match")

    if q and q in name_forms:
        score += weights.full_name_exact
        reasons.append("Full Name Exact")

    quoted = query.quoted
    if quoted and (
        any(quoted in form for form in spaced_forms)
        or quoted in record.role_tokens
        or quoted in record.bio_tokens
    ):
        score += weights.quoted_phrase
        reasons.append("Quoted Phrase Match")

    if q and q in record.program_tokens:
        score += weights.program_exact
        reasons.append("Exact Program Match")

    if q:
        for role in split_listish(record.record.roles):
            if normalize(role) == q:
                score += weights.role_exact
                reasons.append(f"Exact Role Match ({role})")

    has_name_term = any(term in name_parts for term in query.terms)
    has_location_term = any(term in record.location_tokens for term in query.terms)
    if has_name_term and has_location_term:
        score += weights.name_location_combo
        reasons.append("Name + Location Combo")

    # Per-word checks
    matched: set[str] = set()
    for term in query.terms:
        if term in name_parts:
            score += weights.name_word
            reasons.append(f"Name Match ({term})")
            matched.add(term)
        if term in record.role_tokens:
            score += weights.role_word
            reasons.append(f"Role Match ({term})")
            matched.add(term)
        if term in record.program_tokens or term in record.production_tokens:
            score += weights.program_word
            reasons.append(f"Program/Production Match ({term})")
            matched.add(term)
        if term in record.bio_tokens:
            score += weights.bio_word
            reasons.append(f"Bio Match ({term})")
            matched.add(term)
        if term in record.status_tokens:
            score += weights.status_word
            reasons.append(f"Status Match ({term})")
            matched.add(term)
        if term in record.identity_tokens:
            score += weights.identity_word
            reasons.append(f"Tag Match ({term})")
            matched.add(term)
        if term in record.location_tokens:
            score += weights.location_word
            reasons.append(f"Location Token Match ({term})")
            matched.add(term)

    # Coverage adjustments
    total = len(query.terms)
    tokens_matched = len(matched)
    coverage = tokens_matched / total if total else 0.0

    if tokens_matched > 1:
        score += weights.multi_term_bonus * (tokens_matched - 1)
        reasons.append("Multi-term Bonus")

    if total and tokens_matched == total:
        score += weights.full_coverage_bonus
        reasons.append("Full Coverage Bonus")

    if query.multi_term and coverage < weights.low_coverage_ratio:
        score -= weights.low_coverage_penalty
        reasons.append("Low Coverage Penalty")

    return ScoredResult(
        record=record,
        score=score,
        coverage=coverage,
        tokens_matched=tokens_matched,
        reasons=reasons,
    )


def is_primary(result: ScoredResult, weights: ScoringWeights | None = None) -> bool:
    """Tier 1 inclusion rule: enough points or enough of the query covered."""
    if weights is None:
        weights = ScoringWeights()
    return result.score >= weights.min_score or result.coverage >= weights.min_coverage
