"""
autoplug/logic/dag.py
=====================
Traversal of a dependency graph given by a neighbour function.

topological_sort_unchecked(root, deps) returns every node reachable from
``root`` with dependencies listed before their dependents. On a cyclic
graph every reachable node is still returned exactly once; the relative
order of nodes on a common cycle is then unspecified.

Uses an explicit stack instead of recursion, so deep requirement chains
cannot overflow the interpreter stack.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Set, Tuple, TypeVar

T = TypeVar("T")


def topological_sort_unchecked(
    root: T,
    dependencies: Callable[[T], Iterable[T]],
) -> List[T]:
    """Post-order DFS from ``root``.

    Example:
        deps = {"a": ["b", "c"], "b": ["c"], "c": []}
        topological_sort_unchecked("a", deps.__getitem__) → ["c", "b", "a"]
    """
    visited: Set[T] = {root}
    order: List[T] = []
    # (node, iterator over its not yet explored dependencies)
    stack: List[Tuple[T, Iterable[T]]] = [(root, iter(dependencies(root)))]

    while stack:
        node, pending = stack[-1]
        for dep in pending:
            if dep not in visited:
                visited.add(dep)
                stack.append((dep, iter(dependencies(dep))))
                break
        else:
            stack.pop()
            order.append(node)

    return order

