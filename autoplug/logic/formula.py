"""
autoplug/logic/formula.py
=========================
Formula primitives: flattening, satisfaction, construction.

A formula is a conjunction tree over three kinds of atoms:

    Nature       N       holds iff N is among the active natures
    AutoPlugin   P       holds iff P is in the model
    Exclude      ¬P      holds iff P is NOT in the model

Key operations:
  1. flatten(f)                       → atoms of f, nested ∧ removed
  2. satisfied(f, model, natures)     → does f hold
  3. conjunction / include_all / exclude_all → build formulas
  4. natures / plugins / excludes     → partition an atom list
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, List, Set

from autoplug.core.types import (
    EMPTY,
    And,
    AutoPlugin,
    Basic,
    Exclude,
    Formula,
    Nature,
    label_of,
)

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────
#  FLATTENING
# ─────────────────────────────────────────────

def flatten(formula: Formula) -> List[Basic]:
    """Expand a formula into its atom list.

    Nested conjunctions are removed, atom order is preserved:

        flatten(N1 & (P & !Q)) → [N1, P, !Q]
        flatten(EMPTY)         → []
    """
    atoms: List[Basic] = []
    stack: List[Formula] = [formula]
    while stack:
        node = stack.pop()
        if isinstance(node, And):
            stack.extend(reversed(node.formulas))
        elif isinstance(node, (Nature, AutoPlugin, Exclude)):
            atoms.append(node)
        else:
            raise TypeError(f"Not a formula: {node!r}")
    return atoms


# ─────────────────────────────────────────────
#  SATISFACTION
# ─────────────────────────────────────────────

def satisfied(
    select: Formula,
    model: AbstractSet[AutoPlugin],
    active_natures: AbstractSet[Nature],
) -> bool:
    """True if ``select`` holds for the given plugin model and natures."""
    for atom in flatten(select):
        if isinstance(atom, AutoPlugin):
            if atom not in model:
                return False
        elif isinstance(atom, Nature):
            if atom not in active_natures:
                return False
        elif atom.plugin in model:
            return False
    return True


# ─────────────────────────────────────────────
#  CONSTRUCTION
# ─────────────────────────────────────────────

def conjunction(formulas: Iterable[Formula]) -> Formula:
    """Conjunction of ``formulas``; a single formula is returned as is."""
    items = tuple(formulas)
    if not items:
        return EMPTY
    if len(items) == 1:
        return items[0]
    return And(items)


def exclude(plugin: AutoPlugin) -> Exclude:
    return Exclude(plugin)


def include_all(basics: Iterable[Basic]) -> Formula:
    """Conjunction requiring every atom, sorted by label so that equal sets
    give equal formulas."""
    return And(tuple(sorted(basics, key=label_of)))


def exclude_all(plugins: Iterable[AutoPlugin]) -> Formula:
    return And(tuple(Exclude(p) for p in sorted(plugins, key=label_of)))


# ─────────────────────────────────────────────
#  PARTITIONING
# ─────────────────────────────────────────────

def natures(atoms: Iterable[Basic]) -> Set[Nature]:
    return {a for a in atoms if isinstance(a, Nature)}


def plugins(atoms: Iterable[Basic]) -> Set[AutoPlugin]:
    return {a for a in atoms if isinstance(a, AutoPlugin)}


def excludes(atoms: Iterable[Basic]) -> Set[AutoPlugin]:
    """Plugins wrapped by ``Exclude`` atoms."""
    return {a.plugin for a in atoms if isinstance(a, Exclude)}


def format_formula(formula: Formula) -> str:
    """Human-readable rendering: ``N1 && !Q``."""
    atoms = flatten(formula)
    if not atoms:
        return "<none>"
    return " && ".join(str(a) for a in atoms)
