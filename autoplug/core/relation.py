"""
autoplug/core/relation.py
=========================
Bidirectional many-to-many relation.

    forward(a) = { b | (a, b) ∈ R }
    reverse(b) = { a | (a, b) ∈ R }

Built once, queried many times. Lookups of unknown elements return an
empty set rather than raising.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, FrozenSet, Generic, Iterable, Iterator, Set, Tuple, TypeVar

A = TypeVar("A")
B = TypeVar("B")


class Relation(Generic[A, B]):
    """Many-to-many relation with constant-time lookup in both directions."""

    def __init__(self, pairs: Iterable[Tuple[A, B]] = ()):
        self._fwd: Dict[A, Set[B]] = defaultdict(set)
        self._rev: Dict[B, Set[A]] = defaultdict(set)
        for a, b in pairs:
            self.add(a, [b])

    def add(self, a: A, bs: Iterable[B]) -> "Relation[A, B]":
        """Relate ``a`` to every element of ``bs``. ``a`` is registered in
        the domain even when ``bs`` is empty."""
        fwd = self._fwd[a]
        for b in bs:
            fwd.add(b)
            self._rev[b].add(a)
        return self

    def forward(self, a: A) -> FrozenSet[B]:
        return frozenset(self._fwd.get(a, ()))

    def reverse(self, b: B) -> FrozenSet[A]:
        return frozenset(self._rev.get(b, ()))

    @property
    def domain(self) -> FrozenSet[A]:
        return frozenset(self._fwd)

    @property
    def range(self) -> FrozenSet[B]:
        return frozenset(self._rev)

    def all(self) -> Iterator[Tuple[A, B]]:
        for a, bs in self._fwd.items():
            for b in bs:
                yield a, b

    def contains(self, a: A, b: B) -> bool:
        return b in self._fwd.get(a, ())

    def __len__(self) -> int:
        return sum(len(bs) for bs in self._fwd.values())

    def __repr__(self) -> str:
        return f"Relation({len(self._fwd)} → {len(self._rev)}, pairs={len(self)})"
