"""Text normalization and token extraction.

Every token that reaches an enriched record passes through
:func:`normalize`: lowercase, runs of non-``[a-z0-9]`` characters
collapsed to a single space, trimmed. The normalizer only folds ASCII
case; diacritic stripping is a separate step (:func:`strip_diacritics`)
applied to human names and language spellings, never to general text.

Example:
    >>> normalize("Summer 2016 -- Residency!")
    'summer 2016 residency'
    >>> tokens: set[str] = set()
    >>> add_yearish_tokens(tokens, "Summer 2016 residency")
    >>> sorted(tokens)
    ['2016', 'residency', 'summer', 'summer 2016 residency']
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterable, MutableSet

from rapidfuzz.distance import Levenshtein

from alumsearch.constants import SEASON_WORDS

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_LISTISH_SPLIT = re.compile(r"[\n,;|]+")
_YEAR_PATTERN = re.compile(r"\b(?:19|20)\d{2}\b")
_QUOTED_PATTERN = re.compile(r'"([^"]+)"')

_NORMALIZED_SEASON_WORDS: tuple[str, ...] = tuple(
    dict.fromkeys(_NON_ALNUM.sub(" ", w.lower()).strip() for w in SEASON_WORDS)
)


def normalize(text: object) -> str:
    """Canonicalize a value into a comparable, idempotent token string."""
    if text is None:
        return ""
    return _NON_ALNUM.sub(" ", str(text).lower()).strip()


def strip_diacritics(text: object) -> str:
    """Remove combining marks after NFD decomposition ("café" -> "cafe")."""
    if text is None:
        return ""
    decomposed = unicodedata.normalize("NFD", str(text))
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_slug(value: object) -> str:
    """Normalize a slug-like value to hyphen form ("Slug Name " -> "slug-name")."""
    if value is None:
        return ""
    return _NON_ALNUM.sub("-", str(value).strip().lower()).strip("-")


def normalize_name_no_space(text: object) -> str:
    """Normalized name with spaces removed ("J'nelle" -> "jnelle")."""
    return normalize(strip_diacritics(text)).replace(" ", "")


def tokenize(raw: object) -> list[str]:
    """Split normalized text into word tokens."""
    normalized = normalize(raw)
    if not normalized:
        return []
    return normalized.split()


def split_listish(raw: object) -> list[str]:
    """Split a list-ish field on commas, semicolons, pipes and newlines.

    Pieces are trimmed and empty pieces dropped; order is preserved.
    """
    if raw is None:
        return []
    text = str(raw).strip()
    if not text:
        return []
    pieces = (piece.strip() for piece in _LISTISH_SPLIT.split(text))
    return [piece for piece in pieces if piece]


def add_phrase_tokens(dest: MutableSet[str], raw: object) -> None:
    """Add the full normalized phrase and each of its words to ``dest``."""
    normalized = normalize(raw)
    if not normalized:
        return
    dest.add(normalized)
    dest.update(normalized.split())


def extract_years(raw: object) -> list[str]:
    """Return 4-digit 19xx/20xx years found on word boundaries, in order."""
    if raw is None:
        return []
    return _YEAR_PATTERN.findall(str(raw))


def add_yearish_tokens(dest: MutableSet[str], raw: object) -> None:
    """Phrase tokens plus literal years and season words.

    Years are scanned on the raw string; season words are matched as
    substrings of the normalized string.
    """
    if raw is None:
        return
    text = str(raw).strip()
    if not text:
        return

    add_phrase_tokens(dest, text)
    dest.update(extract_years(text))

    normalized = normalize(text)
    for word in _NORMALIZED_SEASON_WORDS:
        if word in normalized:
            dest.add(word)


def add_listish_tokens(dest: MutableSet[str], raw: object) -> None:
    """Run phrase extraction over each piece of a list-ish field."""
    for piece in split_listish(raw):
        add_phrase_tokens(dest, piece)


def extract_quoted_phrase(query: str) -> str | None:
    """Return the first double-quoted phrase of ``query``, normalized, if any."""
    match = _QUOTED_PATTERN.search(query or "")
    if match is None:
        return None
    return normalize(match.group(1)) or None


def query_terms(query: str) -> list[str]:
    """Normalized query words, duplicates removed, first-seen order kept."""
    return list(dict.fromkeys(tokenize(query)))


def contains_word(haystack: str, words: Iterable[str]) -> bool:
    """True if any of ``words`` occurs as a whole word of normalized ``haystack``."""
    padded = f" {haystack} "
    return any(word and f" {word} " in padded for word in words)


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance between two strings.

    Not used by Tier 1 scoring; available for edit-distance tolerant
    alias or name checks.
    """
    return Levenshtein.distance(a or "", b or "")
