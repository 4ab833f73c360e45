"""tests/unit/test_dag.py"""
from autoplug.logic.dag import topological_sort_unchecked


def test_dependencies_before_dependents():
    deps = {"a": ["b", "c"], "b": ["c"], "c": []}
    order = topological_sort_unchecked("a", deps.__getitem__)
    assert order == ["c", "b", "a"]


def test_single_node():
    assert topological_sort_unchecked("a", lambda n: []) == ["a"]


def test_unreachable_nodes_excluded():
    deps = {"a": ["b"], "b": [], "z": ["a"]}
    assert set(topological_sort_unchecked("a", deps.__getitem__)) == {"a", "b"}


def test_cycle_returns_every_node_once():
    deps = {"a": ["b"], "b": ["c"], "c": ["a", "d"], "d": []}
    order = topological_sort_unchecked("a", deps.__getitem__)
    assert sorted(order) == ["a", "b", "c", "d"]
    assert order[-1] == "a"


def test_self_loop():
    assert topological_sort_unchecked("a", lambda n: ["a"]) == ["a"]


def test_deep_chain_does_not_recurse():
    n = 20000
    order = topological_sort_unchecked(0, lambda i: [i + 1] if i < n else [])
    assert order[0] == n
    assert order[-1] == 0
    assert len(order) == n + 1
