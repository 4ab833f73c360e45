"""
autoplug/logic/compiler.py
==========================
Reference model compiler: formula → activated plugins.

The resolver only needs *some* function with this contract; this module
provides the default one, built over a plugin universe.

Algorithm (stratified forward chaining):
    1. Stratify the universe. A plugin sits at a level ≥ every plugin it
       requires and > every plugin it excludes. A requirement cycle that
       passes through an exclusion has no stratification → CompileError.
    2. The requested formula gives the facts: its natures are active,
       its plugin atoms are forced into the model, its exclusions
       forbid plugins.
    3. Evaluate strata bottom-up; inside a stratum, add every plugin
       whose ``select`` holds until a fixpoint is reached.

Because a plugin is only evaluated once every plugin it excludes has
reached its final state, an activated plugin is never invalidated later.
Requirement cycles without exclusions are allowed: their plugins stay
inactive unless forced (least fixpoint).
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from autoplug.core.config import DEFAULT_CONFIG, AutoPluginConfig
from autoplug.core.exceptions import CompileError
from autoplug.core.types import (
    AutoPlugin,
    CompileFn,
    Exclude,
    Formula,
    label_of,
)
from autoplug.logic.formula import excludes, flatten, natures, plugins, satisfied

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────
#  STRATIFICATION
# ─────────────────────────────────────────────

def stratify(available: Iterable[AutoPlugin]) -> List[List[AutoPlugin]]:
    """Group plugins into evaluation strata, lowest first.

    Plugins referenced by a ``select`` but missing from ``available``
    count as level 0 and never activate unless forced.

    Raises CompileError if some plugin transitively excludes itself.
    """
    universe = list(available)
    level: Dict[AutoPlugin, int] = {p: 0 for p in universe}
    bound = len(universe)

    changed = True
    while changed:
        changed = False
        for plugin in universe:
            for atom in flatten(plugin.select):
                if isinstance(atom, AutoPlugin):
                    need = level.get(atom, 0)
                elif isinstance(atom, Exclude):
                    need = level.get(atom.plugin, 0) + 1
                else:
                    continue
                if need <= level[plugin]:
                    continue
                if need > bound:
                    raise CompileError(
                        f"Plugin '{plugin.label}' is part of a requirement cycle "
                        f"through an exclusion (via '{label_of(atom)}').",
                        plugins=[plugin.label],
                        context={"atom": str(atom)},
                    )
                level[plugin] = need
                changed = True

    strata: List[List[AutoPlugin]] = [[] for _ in range(max(level.values(), default=-1) + 1)]
    for plugin in universe:
        strata[level[plugin]].append(plugin)
    logger.debug("Stratified %d plugins into %d strata", len(universe), len(strata))
    return strata


# ─────────────────────────────────────────────
#  COMPILATION
# ─────────────────────────────────────────────

def compile_plugins(
    available: Iterable[AutoPlugin],
    config: Optional[AutoPluginConfig] = None,
) -> CompileFn:
    """Build the compile function for a plugin universe.

    Usage:
        compile_model = compile_plugins([P, Q, R])
        compile_model(N1 & Exclude(Q))   → [P, R]

    The returned list follows the order of ``available``; forced plugins
    outside the universe come last, sorted by label.
    """
    cfg = (config or DEFAULT_CONFIG).compiler
    universe = list(available)
    strata = stratify(universe)
    known = set(universe)

    def compile_model(requested: Formula) -> List[AutoPlugin]:
        atoms = flatten(requested)
        active_natures = natures(atoms)
        forced = plugins(atoms)
        banned = excludes(atoms)

        conflict = forced & banned
        if conflict:
            names = sorted(p.label for p in conflict)
            raise CompileError(
                f"Plugins both requested and excluded: {', '.join(names)}",
                plugins=names,
            )

        model = set(forced)

        def ready(stratum: List[AutoPlugin]) -> List[AutoPlugin]:
            return [
                p for p in stratum
                if p not in model
                and p not in banned
                and satisfied(p.select, model, active_natures)
            ]

        for depth, stratum in enumerate(strata):
            for _ in range(cfg.max_passes):
                added = ready(stratum)
                if not added:
                    break
                model.update(added)
            else:
                if ready(stratum):
                    logger.warning(
                        "Stratum %d reached max_passes=%d without a fixpoint. "
                        "Model may be incomplete.",
                        depth,
                        cfg.max_passes,
                    )

        result = [p for p in universe if p in model]
        result.extend(sorted(model - known, key=label_of))
        logger.debug("compile(%s) → %s", requested, [p.label for p in result])
        return result

    return compile_model
