"""Tests for slug forward resolution and alias sets."""

from __future__ import annotations

from alumsearch.entities.slug_aliases import SlugAliasTable


class TestResolve:
    """Tests for canonical slug resolution."""

    def test_unknown_slug_resolves_to_itself(self):
        table = SlugAliasTable()
        assert table.resolve("Jesse Baxter") == "jesse-baxter"

    def test_single_forward(self):
        table = SlugAliasTable.from_forwards({"old-maria": "maria-lopez"})
        assert table.resolve("old-maria") == "maria-lopez"
        assert table.resolve("maria-lopez") == "maria-lopez"

    def test_chain_followed(self):
        table = SlugAliasTable.from_forwards({"a": "b", "b": "c"})
        assert table.resolve("a") == "c"

    def test_cycle_terminates(self):
        """A forward cycle never loops forever; resolution stops at the repeat."""
        table = SlugAliasTable.from_forwards({"a": "b", "b": "a"})
        assert table.resolve("a") in {"a", "b"}
        assert table.resolve("b") in {"a", "b"}

    def test_self_forward_and_blank_rows_dropped(self):
        table = SlugAliasTable([("a", "a"), ("", "b"), ("c", " ")])
        assert len(table) == 0

    def test_later_rows_win(self):
        table = SlugAliasTable([("a", "b"), ("a", "c")])
        assert table.resolve("a") == "c"
        assert table.aliases_for("b") == {"b"}
        assert table.aliases_for("c") == {"a", "c"}


class TestAliasesFor:
    """Tests for full alias set computation."""

    def test_includes_canonical_and_sources(self):
        table = SlugAliasTable.from_forwards({"old-maria": "maria-lopez"})
        assert table.aliases_for("maria-lopez") == {"maria-lopez", "old-maria"}
        assert table.aliases_for("old-maria") == {"maria-lopez", "old-maria"}

    def test_chained_sources_absorbed(self):
        table = SlugAliasTable.from_forwards({"a": "b", "b": "c"})
        assert table.aliases_for("c") == {"a", "b", "c"}

    def test_empty_slug(self):
        assert SlugAliasTable().aliases_for("") == set()
