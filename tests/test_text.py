"""Tests for text normalization and token extraction.

Verifies normalizer idempotence, list splitting order, phrase/year/season
token extraction, quoted-phrase parsing and query term handling.
"""

from __future__ import annotations

import pytest

from alumsearch.text import (
    add_listish_tokens,
    add_phrase_tokens,
    add_yearish_tokens,
    contains_word,
    extract_quoted_phrase,
    extract_years,
    levenshtein_distance,
    normalize,
    normalize_name_no_space,
    normalize_slug,
    query_terms,
    split_listish,
    strip_diacritics,
    tokenize,
)


class TestNormalize:
    """Tests for the canonical normalizer."""

    @pytest.mark.parametrize(
        "raw",
        [
            "Summer 2016 -- Residency!",
            "  Jesse   Baxter ",
            "María López",
            "ACTion: Slovakia",
            "https://instagram.com/jesse_b",
            "",
            "---",
            "Ünïcödé\tand\nnewlines",
        ],
    )
    def test_idempotent(self, raw):
        """normalize(normalize(x)) == normalize(x)."""
        once = normalize(raw)
        assert normalize(once) == once

    def test_lowercases_and_collapses(self):
        assert normalize("Summer 2016 -- Residency!") == "summer 2016 residency"

    def test_none_is_empty(self):
        assert normalize(None) == ""

    def test_non_string_values(self):
        assert normalize(2024) == "2024"
        assert normalize(True) == "true"

    def test_diacritics_not_folded(self):
        """The normalizer itself only folds ASCII; accents become separators."""
        assert normalize("Español") == "espa ol"

    def test_strip_diacritics(self):
        assert strip_diacritics("María López") == "Maria Lopez"
        assert normalize(strip_diacritics("Español")) == "espanol"

    def test_normalize_slug(self):
        assert normalize_slug(" Jesse Baxter ") == "jesse-baxter"
        assert normalize_slug("Jesse--Baxter_") == "jesse-baxter"
        assert normalize_slug(None) == ""

    def test_name_no_space(self):
        assert normalize_name_no_space("J'nelle Ann") == "jnelleann"


class TestListSplitting:
    """Tests for list-ish field splitting."""

    def test_split_order_exact(self):
        """Commas, semicolons, pipes and newlines split in original order."""
        result = split_listish("Actor, Director; Playwright|Producer\nTeacher")
        assert result == ["Actor", "Director", "Playwright", "Producer", "Teacher"]

    def test_empty_pieces_dropped(self):
        assert split_listish(" , ;; Actor ,, ") == ["Actor"]

    def test_empty_and_none(self):
        assert split_listish("") == []
        assert split_listish(None) == []

    def test_listish_tokens(self):
        tokens: set[str] = set()
        add_listish_tokens(tokens, "Stage Manager; Actor")
        assert tokens == {"stage manager", "stage", "manager", "actor"}


class TestPhraseTokens:
    """Tests for phrase and word token extraction."""

    def test_phrase_and_words(self):
        tokens: set[str] = set()
        add_phrase_tokens(tokens, "Heart of Europe")
        assert tokens == {"heart of europe", "heart", "of", "europe"}

    def test_empty_adds_nothing(self):
        tokens: set[str] = set()
        add_phrase_tokens(tokens, "  !!  ")
        add_phrase_tokens(tokens, None)
        assert tokens == set()

    def test_tokenize(self):
        assert tokenize("Brooklyn, NY") == ["brooklyn", "ny"]
        assert tokenize("") == []


class TestYearishTokens:
    """Tests for year and season-word extraction."""

    def test_summer_2016_residency(self):
        tokens: set[str] = set()
        add_yearish_tokens(tokens, "Summer 2016 residency")
        assert "2016" in tokens
        assert "summer" in tokens
        assert tokens == {"summer 2016 residency", "summer", "2016", "residency"}

    def test_years_on_word_boundaries_only(self):
        assert extract_years("Class of 2019 (ID 120190)") == ["2019"]
        assert extract_years("1999-2001") == ["1999", "2001"]
        assert extract_years("3019") == []

    def test_season_word_variants(self):
        tokens: set[str] = set()
        add_yearish_tokens(tokens, "J-Term 2020")
        assert "j term" in tokens
        assert "2020" in tokens

    def test_timestamp_year(self):
        tokens: set[str] = set()
        add_yearish_tokens(tokens, "2024-03-01T00:00:00Z")
        assert "2024" in tokens


class TestQueryParsing:
    """Tests for quoted phrases and query terms."""

    def test_quoted_phrase(self):
        assert extract_quoted_phrase('director "Heart of Europe"') == "heart of europe"

    def test_no_quotes(self):
        assert extract_quoted_phrase("heart of europe") is None

    def test_empty_quotes(self):
        assert extract_quoted_phrase('"  "') is None

    def test_query_terms_dedup_keeps_order(self):
        assert query_terms("Actor actor, Director") == ["actor", "director"]

    def test_contains_word_is_whole_word(self):
        assert contains_word("english es", ["es"])
        assert not contains_word("actress", ["es"])


class TestLevenshtein:
    """Tests for the edit-distance helper."""

    def test_distance(self):
        assert levenshtein_distance("baxter", "baxtor") == 1
        assert levenshtein_distance("", "abc") == 3
        assert levenshtein_distance(None, None) == 0
