"""Tests for alias index construction, overrides and corpus validation."""

from __future__ import annotations

import pytest

from alumsearch.entities.models import ProductionEntry, ProgramEntry
from alumsearch.exceptions import CorpusMismatchError
from alumsearch.search.alias_index import (
    AliasIndex,
    build_alias_index,
    build_alias_index_from_maps,
    load_alias_overrides,
)


@pytest.fixture
def programs() -> dict[str, ProgramEntry]:
    return {
        "slovakia-2024": ProgramEntry(
            title="Teaching Artist Residency Slovakia 2024",
            program="ACTion: Slovakia",
            location="Slovakia",
            year="2024",
            artists={"jesse-baxter": True, "Maria Lopez": True},
        ),
        "slovakia-2023": ProgramEntry(
            title="Heart of Europe",
            program="ACTion: Slovakia",
            location="Slovakia",
            year="2023",
            artists={"jesse-baxter": True, "sam-rivera": True},
        ),
    }


@pytest.fixture
def productions() -> dict[str, ProductionEntry]:
    return {
        "tempest": ProductionEntry(
            title="The Tempest",
            location="Edinburgh",
            year="2022",
            festival="Edinburgh Fringe: Made in Scotland",
            artists={"jesse-baxter": True},
        ),
        "quito-nights": ProductionEntry(
            title="Quito Nights",
            location="Quito",
            year="2019",
            artists={"maria-lopez": True},
        ),
    }


class TestBuild:
    """Tests for alias phrase generation."""

    def test_program_aliases(self, programs, productions):
        index = build_alias_index(programs, productions, overrides={})
        assert index["teaching artist residency slovakia 2024"] == {"jesse-baxter", "maria-lopez"}
        assert index["action slovakia"] == {"jesse-baxter", "maria-lopez", "sam-rivera"}
        assert "slovakia" in index
        assert "action slovakia 2023" in index
        assert "action slovakia slovakia" in index
        assert "action slovakia slovakia 2024" in index

    def test_production_aliases(self, programs, productions):
        index = build_alias_index(programs, productions, overrides={})
        assert index["the tempest"] == {"jesse-baxter"}
        assert index["edinburgh fringe"] == {"jesse-baxter"}
        assert index["made in scotland"] == {"jesse-baxter"}
        assert index["edinburgh"] == {"jesse-baxter"}
        assert index["the tempest 2022"] == {"jesse-baxter"}

    def test_identifiers_slug_normalized(self, programs, productions):
        """Roster keys are stored in hyphen slug form."""
        index = build_alias_index(programs, productions, overrides={})
        assert "maria-lopez" in index.identifiers()
        assert "Maria Lopez" not in index.identifiers()

    def test_lookup_normalizes(self, programs, productions):
        index = build_alias_index(programs, productions, overrides={})
        assert index.lookup("The  TEMPEST!") == {"jesse-baxter"}
        assert index.lookup("nowhere") == frozenset()

    def test_empty_aliases_absent(self):
        index = build_alias_index({"x": ProgramEntry(artists={})}, {}, overrides={})
        assert len(index) == 0


class TestDeterminism:
    """Building twice yields identical, duplicate-free membership."""

    def test_build_twice_identical(self, programs, productions):
        first = build_alias_index(programs, productions, overrides={})
        second = build_alias_index(dict(reversed(programs.items())), productions, overrides={})
        assert dict(first) == dict(second)
        assert list(first) == sorted(first)

    def test_no_duplicate_identifiers(self, programs, productions):
        index = build_alias_index(programs, productions, overrides={})
        for members in index.values():
            assert isinstance(members, frozenset)


class TestOverrides:
    """Tests for manual alias overrides."""

    def test_override_links_target(self, programs, productions):
        index = build_alias_index(
            programs, productions, overrides={"quito": ["the tempest"]}
        )
        assert index["quito"] == {"maria-lopez", "jesse-baxter"}

    def test_override_creates_new_alias(self, programs, productions):
        index = build_alias_index(
            programs, productions, overrides={"scottish run": ["made in scotland"]}
        )
        assert index["scottish run"] == {"jesse-baxter"}

    def test_override_one_hop_only(self, programs, productions):
        """An override never follows another override's result."""
        overrides = {
            "scottish run": ["made in scotland"],
            "quito": ["scottish run"],
        }
        index = build_alias_index(programs, productions, overrides=overrides)
        assert index["quito"] == {"maria-lopez"}

    def test_unknown_target_ignored(self, programs, productions):
        index = build_alias_index(programs, productions, overrides={"nowhere": ["atlantis"]})
        assert "nowhere" not in index

    def test_packaged_overrides_load(self):
        overrides = load_alias_overrides()
        assert overrides["ecuador"] == ["andes", "amazon"]
        assert "heart of europe" in overrides["slovakia"]

    def test_packaged_slovakia_override(self, programs, productions):
        """'slovakia' also reaches everyone indexed under 'heart of europe'."""
        index = build_alias_index(programs, productions)
        assert "sam-rivera" in index["slovakia"]


class TestValidation:
    """Tests for corpus/index mismatch detection."""

    def test_matching_corpus_passes(self, external_maps, corpus):
        index = build_alias_index_from_maps(external_maps)
        index.validate_against(corpus)

    def test_renamed_profile_found_through_slug_alias(self, external_maps, corpus):
        """The Ecuador roster lists old-maria; the renamed record still validates."""
        index = build_alias_index_from_maps(external_maps)
        assert index["ecuador"] == {"old-maria"}
        index.validate_against(corpus)

    def test_missing_identifier_raises(self, corpus):
        index = AliasIndex({"ghost program": ["nobody-here", "jesse-baxter"]})
        with pytest.raises(CorpusMismatchError) as exc_info:
            index.validate_against(corpus)
        assert exc_info.value.missing == frozenset({"nobody-here"})
        assert "nobody-here" in str(exc_info.value)
