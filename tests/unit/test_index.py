"""
tests/unit/test_index.py
========================
Tests for the bidirectional Relation and the key-provenance index.
"""
from autoplug.core.relation import Relation
from autoplug.core.types import AutoPlugin, SettingKey
from autoplug.debug.index import defined_keys, key_names


class TestRelation:
    def test_forward_and_reverse(self):
        r = Relation([("a", 1), ("a", 2), ("b", 2)])
        assert r.forward("a") == {1, 2}
        assert r.reverse(2) == {"a", "b"}
        assert r.reverse(1) == {"a"}

    def test_unknown_lookups_are_empty(self):
        r = Relation()
        assert r.forward("missing") == frozenset()
        assert r.reverse("missing") == frozenset()

    def test_lookup_does_not_grow_relation(self):
        r = Relation([("a", 1)])
        r.forward("ghost")
        r.reverse("ghost")
        assert r.domain == {"a"}
        assert r.range == {1}

    def test_add_without_targets_registers_domain(self):
        r = Relation().add("a", [])
        assert r.domain == {"a"}
        assert len(r) == 0

    def test_duplicates_counted_once(self):
        r = Relation([("a", 1), ("a", 1)])
        assert len(r) == 1
        assert list(r.all()) == [("a", 1)]

    def test_contains(self):
        r = Relation([("a", 1)])
        assert r.contains("a", 1)
        assert not r.contains("a", 2)
        assert not r.contains("b", 1)


class TestDefinedKeys:
    def test_collects_all_three_scopes(self, toy):
        relation = defined_keys([toy["P"]])
        assert {k.label for k in relation.forward(toy["P"])} == {"compile", "scalaVersion"}

    def test_shared_key_maps_to_every_definer(self, available, toy):
        relation = defined_keys(available)
        assert relation.reverse(SettingKey("compile")) == {toy["P"], toy["R"]}
        assert relation.reverse(SettingKey("publish")) == {toy["Q"]}

    def test_plugin_without_settings_is_in_domain(self):
        bare = AutoPlugin("Bare")
        relation = defined_keys([bare])
        assert bare in relation.domain
        assert relation.forward(bare) == frozenset()

    def test_key_names(self, available):
        names = key_names(defined_keys(available))
        assert set(names) == {"compile", "scalaVersion", "publish"}
        assert names["compile"] == SettingKey("compile")
