"""Language token derivation.

Profiles list languages free-form ("English | Español", "ES, fr").
Each entry is phrase-tokenized, and every recognized spelling adds one
canonical token ("spanish") so filters and queries agree.
"""

from __future__ import annotations

from collections.abc import MutableSet
from pathlib import Path

import yaml

from alumsearch.text import (
    add_phrase_tokens,
    contains_word,
    normalize,
    split_listish,
    strip_diacritics,
)

DEFAULT_LANGUAGES_PATH = Path(__file__).parent.parent / "data" / "languages.yml"

# Module-level language table cache
_languages_cache: dict[str, tuple[str, ...]] | None = None


def load_language_table(path: Path | None = None) -> dict[str, tuple[str, ...]]:
    """Load canonical language -> normalized variant spellings from YAML.

    Variants are diacritic-stripped and normalized on load. Caches the
    default table at module level.
    """
    global _languages_cache

    if _languages_cache is not None and path is None:
        return _languages_cache

    with open(path or DEFAULT_LANGUAGES_PATH) as f:
        raw = yaml.safe_load(f) or {}

    table: dict[str, tuple[str, ...]] = {}
    for canon, variants in raw.items():
        spellings = [normalize(strip_diacritics(v)) for v in [canon, *(variants or [])]]
        table[normalize(canon)] = tuple(dict.fromkeys(s for s in spellings if s))

    if path is None:
        _languages_cache = table
    return table


def add_language_tokens(
    dest: MutableSet[str],
    raw: str,
    table: dict[str, tuple[str, ...]] | None = None,
    *,
    allow_codes: bool = True,
) -> None:
    """Add phrase tokens per list entry plus canonical language tokens.

    With ``allow_codes=False`` two-letter codes ("it", "es") are not
    recognized, so free-form tags such as "IT support" stay language-free.
    """
    entries = split_listish(raw)
    if not entries:
        return
    for entry in entries:
        add_phrase_tokens(dest, entry)

    if table is None:
        table = load_language_table()
    joined = normalize(strip_diacritics(" ".join(entries)))
    for canon, variants in table.items():
        if not allow_codes:
            variants = tuple(v for v in variants if len(v) > 2)
        if contains_word(joined, variants):
            dest.add(canon)
