"""
tests/unit/test_formula.py
==========================
Tests for the formula model and its primitives: flatten, satisfied,
construction and partition helpers.
"""
import pytest

from autoplug.core.types import EMPTY, And, AutoPlugin, Exclude, Nature
from autoplug.logic.formula import (
    conjunction,
    exclude,
    exclude_all,
    excludes,
    flatten,
    format_formula,
    include_all,
    natures,
    plugins,
    satisfied,
)


class TestAtoms:
    def test_nature_identity_by_label(self):
        assert Nature("N1") == Nature("N1")
        assert len({Nature("N1"), Nature("N1")}) == 1

    def test_plugin_identity_by_label(self):
        a = AutoPlugin("A")
        b = AutoPlugin("A", select=Nature("N1"))
        assert a == b
        assert hash(a) == hash(b)
        assert a != AutoPlugin("B")

    def test_plugin_not_equal_to_nature(self):
        assert AutoPlugin("X") != Nature("X")

    def test_empty_select_by_default(self):
        assert AutoPlugin("A").select == EMPTY

    def test_lazy_select_allows_forward_reference(self):
        a = AutoPlugin("A", select=lambda: Exclude(b))
        b = AutoPlugin("B", select=a)
        assert a.select == Exclude(b)
        assert b.select == a

    def test_requires_sets_select(self, n1):
        a = AutoPlugin("A").requires(n1)
        assert a.select == n1

    def test_all_settings_concatenates_scopes(self, toy):
        keys = [s.key.label for s in toy["P"].all_settings]
        assert keys == ["compile", "scalaVersion"]

    def test_str_forms(self, n1, toy):
        assert str(n1) == "N1"
        assert str(Exclude(toy["Q"])) == "!Q"
        assert str(EMPTY) == "<none>"
        assert repr(toy["P"]) == "AutoPlugin(P)"


class TestFlatten:
    def test_single_atom(self, n1):
        assert flatten(n1) == [n1]

    def test_empty(self):
        assert flatten(EMPTY) == []

    def test_nested_conjunction_preserves_order(self, n1, n2, toy):
        f = And((n1, And((toy["P"], Exclude(toy["Q"]))), n2))
        assert flatten(f) == [n1, toy["P"], Exclude(toy["Q"]), n2]

    def test_and_operator_builds_conjunction(self, n1, n2, toy):
        f = n1 & n2 & Exclude(toy["Q"])
        assert flatten(f) == [n1, n2, Exclude(toy["Q"])]

    def test_rejects_non_formula(self):
        with pytest.raises(TypeError):
            flatten(And(("N1",)))


class TestSatisfied:
    def test_nature_required(self, n1):
        assert satisfied(n1, set(), {n1})
        assert not satisfied(n1, set(), set())

    def test_plugin_required(self, toy):
        assert satisfied(toy["R"], {toy["R"]}, set())
        assert not satisfied(toy["R"], set(), set())

    def test_exclusion(self, toy):
        assert satisfied(Exclude(toy["Q"]), set(), set())
        assert not satisfied(Exclude(toy["Q"]), {toy["Q"]}, set())

    def test_empty_always_satisfied(self):
        assert satisfied(EMPTY, set(), set())

    def test_toy_p_select(self, toy, n1):
        select = toy["P"].select
        assert satisfied(select, set(), {n1})
        assert not satisfied(select, {toy["Q"]}, {n1})


class TestConstruction:
    def test_conjunction_of_one_is_identity(self, n1):
        assert conjunction([n1]) == n1

    def test_conjunction_of_none_is_empty(self):
        assert conjunction([]) == EMPTY

    def test_conjunction_of_many(self, n1, n2):
        assert conjunction([n1, n2]) == And((n1, n2))

    def test_exclude(self, toy):
        assert exclude(toy["Q"]) == Exclude(toy["Q"])

    def test_include_all_is_order_independent(self, n1, n2):
        assert include_all({n2, n1}) == include_all([n1, n2])
        assert flatten(include_all({n2, n1})) == [n1, n2]

    def test_exclude_all(self, toy):
        f = exclude_all({toy["R"], toy["Q"]})
        assert flatten(f) == [Exclude(toy["Q"]), Exclude(toy["R"])]


class TestPartition:
    def test_partition_atoms(self, n1, toy):
        atoms = [n1, toy["P"], Exclude(toy["Q"])]
        assert natures(atoms) == {n1}
        assert plugins(atoms) == {toy["P"]}
        assert excludes(atoms) == {toy["Q"]}

    def test_format_formula(self, n1, toy):
        assert format_formula(n1 & Exclude(toy["Q"])) == "N1 && !Q"
        assert format_formula(EMPTY) == "<none>"
