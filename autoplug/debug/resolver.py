"""
autoplug/debug/resolver.py
==========================
Determines how to enable a plugin in a context.

Given the user's formula, the model it produced and a target plugin,
the resolver answers one of:

    PluginActivated     the plugin is already in the model
    PluginImpossible    the plugin's requirements contradict themselves
    PluginRequirements  the changes needed, and their side effects

Worked examples:

    A :- B, !C        C :- D, E        initial: B, D, E
        → C must go: drop D or E, or exclude C directly

    A :- B, !C        initial: B, !A
        → drop the exclusion of A

    A :- B, !C        C :- B           initial: <empty>
        → add B, exclude C

Everything here is a pure function of its arguments. The only call with
unknown cost is ``context.compile``, made once per non-trivial query;
its errors propagate unchanged.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, List

from autoplug.core.types import (
    AutoPlugin,
    Basic,
    Context,
    DeactivatePlugin,
    Nature,
    PluginActivated,
    PluginEnable,
    PluginImpossible,
    PluginRequirements,
    label_of,
)
from autoplug.logic.dag import topological_sort_unchecked
from autoplug.logic.formula import (
    exclude_all,
    excludes,
    flatten,
    include_all,
    natures,
    plugins,
    satisfied,
)

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────
#  MINIMAL MODEL
# ─────────────────────────────────────────────

def _requirements(atom: Basic) -> List[Basic]:
    if isinstance(atom, AutoPlugin):
        return flatten(atom.select)
    return []


def minimal_model(plugin: AutoPlugin) -> List[Basic]:
    """Atoms every model containing ``plugin`` must satisfy.

    Plugins are expanded into the atoms of their ``select``; natures and
    exclusions are leaves. Requirements come before the plugins that need
    them and ``plugin`` itself is last, except on requirement cycles,
    where only membership is meaningful.

    The result may be unsatisfiable (contradictions, cycles) and the
    actual model may be larger, since the selected natures can activate
    other plugins too.
    """
    return topological_sort_unchecked(plugin, _requirements)


# ─────────────────────────────────────────────
#  DEACTIVATION PLANNING
# ─────────────────────────────────────────────

def plan_deactivation(
    plugin: AutoPlugin,
    required_natures: AbstractSet[Nature],
    initial_model: AbstractSet[AutoPlugin],
) -> DeactivatePlugin:
    """Ways to remove ``plugin`` without disturbing ``required_natures``.

    Dropping any one nature ``plugin`` transitively needs, other than the
    required ones, deactivates it. Excluding it directly always works.
    """
    remove_one_of = natures(minimal_model(plugin)) - set(required_natures)
    return DeactivatePlugin(
        plugin=plugin,
        remove_one_of=frozenset(remove_one_of),
        newly_selected=plugin not in initial_model,
    )


# ─────────────────────────────────────────────
#  RESOLUTION
# ─────────────────────────────────────────────

def plugin_enable(context: Context, plugin: AutoPlugin) -> PluginEnable:
    """Determine how to enable ``plugin`` in ``context``."""
    if plugin in context.enabled:
        return PluginActivated(plugin, context)
    return _enable_deactivated(context, plugin)


def _enable_deactivated(context: Context, plugin: AutoPlugin) -> PluginEnable:
    # ── Deconstruct the context ────────────────────────────────
    initial_model = set(context.enabled)
    initial = flatten(context.initial)
    initial_natures = natures(initial)
    initial_excludes = excludes(initial)

    min_model = minimal_model(plugin)

    # Deactivating any one of these deactivates `plugin`.
    min_required_natures = natures(min_model)
    min_required_plugins = plugins(min_model)

    # The presence of any one of these deactivates `plugin`.
    min_absent_plugins = excludes(min_model)

    contradictions = min_absent_plugins & min_required_plugins
    if contradictions:
        logger.info(
            "Plugin %s is impossible: %s required both present and absent",
            plugin.label,
            sorted(p.label for p in contradictions),
        )
        return PluginImpossible(plugin, context, frozenset(contradictions))

    add_to_existing_natures = min_required_natures - initial_natures
    blocking_excludes = initial_excludes & min_required_plugins

    # Keep what the user already has, add the minimum for `plugin`, and
    # drop any current exclusion of a plugin that `plugin` needs.
    incremental_inputs = include_all(min_required_natures | initial_natures) & exclude_all(
        (min_absent_plugins | initial_excludes) - min_required_plugins
    )
    incremental_model = set(context.compile(incremental_inputs))
    logger.debug(
        "Enabling %s: inputs=%s model=%s",
        plugin.label,
        incremental_inputs,
        sorted(p.label for p in incremental_model),
    )

    # Newly enabled by the selected natures but not required by `plugin`;
    # these could be excluded and everything else would stay active.
    extra_plugins = incremental_model - min_required_plugins - initial_model

    will_remove = initial_model - incremental_model - min_required_plugins

    # An absent plugin needs explicit deactivation only if it would still
    # be selected. One whose requirements fail is never activated, and one
    # that depends on another deactivated plugin falls with it.
    incremental_natures = natures(flatten(incremental_inputs))
    min_deactivate = [
        p for p in sorted(min_absent_plugins, key=label_of)
        if satisfied(p.select, incremental_model, incremental_natures)
    ]
    deactivate = tuple(
        plan_deactivation(d, min_required_natures, initial_model)
        for d in min_deactivate
    )

    return PluginRequirements(
        plugin=plugin,
        context=context,
        blocking_excludes=frozenset(blocking_excludes),
        enabling_natures=frozenset(add_to_existing_natures),
        extra_enabled_plugins=frozenset(extra_plugins),
        will_remove=frozenset(will_remove),
        deactivate=deactivate,
    )

