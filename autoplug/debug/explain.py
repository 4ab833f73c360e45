"""
autoplug/debug/explain.py
=========================
PluginEnable → human explanation.

Pure formatting over the three resolution results:

    PluginActivated     "Plugin X already activated."
    PluginImpossible    the contradiction set, to report upstream
    PluginRequirements  one paragraph per kind of change:
                          1. exclusions to lift
                          2. natures to add
                          3. plugins gained
                          4. plugins lost
                          5. plugins to deactivate, with alternatives

Every list is sorted by label so the text is deterministic. A single
item gets a one-line sentence, several items a header plus one indented
line each.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

from autoplug.core.config import DEFAULT_CONFIG, ExplainConfig
from autoplug.core.types import (
    AutoPlugin,
    DeactivatePlugin,
    Nature,
    PluginActivated,
    PluginEnable,
    PluginImpossible,
    PluginRequirements,
    label_of,
)

T = TypeVar("T")


def explain_plugin_enable(
    result: PluginEnable,
    config: Optional[ExplainConfig] = None,
) -> str:
    """String representation of a resolution result, for end users."""
    cfg = config or DEFAULT_CONFIG.explain

    if isinstance(result, PluginRequirements):
        parts = [
            excluded_error(result.blocking_excludes, cfg),
            required(result.enabling_natures, cfg),
            will_add(result.plugin, result.extra_enabled_plugins, cfg),
            will_remove(result.plugin, result.will_remove, cfg),
            need_to_deactivate(result.deactivate, cfg),
        ]
        return "\n".join(p for p in parts if p)
    if isinstance(result, PluginImpossible):
        return plugin_impossible(result.plugin, result.contradictions, cfg)
    if isinstance(result, PluginActivated):
        return f"Plugin {result.plugin.label} already activated."
    raise TypeError(f"Unknown PluginEnable variant: {type(result).__name__}")


# ─────────────────────────────────────────────
#  HELPERS
# ─────────────────────────────────────────────

def _str(
    items: Sequence[T],
    one: Callable[[T], str],
    many: Callable[[Sequence[T]], str],
) -> str:
    if not items:
        return ""
    if len(items) == 1:
        return one(items[0])
    return many(items)


def _sorted(items: Iterable[T]) -> List[T]:
    return sorted(items, key=label_of)


def _block(header: str, lines: Iterable[str], cfg: ExplainConfig) -> str:
    sep = "\n" + cfg.indent
    return header + sep + sep.join(lines)


def labels(items: Iterable[AutoPlugin]) -> List[str]:
    return [p.label for p in _sorted(items)]


def multi(strs: Sequence[str], config: Optional[ExplainConfig] = None) -> str:
    """Join inline, or one per indented line when there are too many."""
    cfg = config or DEFAULT_CONFIG.explain
    if len(strs) > cfg.inline_limit:
        return "\n" + cfg.indent + ("\n" + cfg.indent).join(strs)
    return ", ".join(strs)


# ─────────────────────────────────────────────
#  REQUIREMENT PARAGRAPHS
# ─────────────────────────────────────────────

def excluded_error(dependencies: Iterable[AutoPlugin], cfg: ExplainConfig) -> str:
    return _str(
        _sorted(dependencies),
        lambda d: f"Required dependency {d.label} was excluded.",
        lambda ds: _block("Required dependencies were excluded:", labels(ds), cfg),
    )


def required(natures: Iterable[Nature], cfg: ExplainConfig) -> str:
    return _str(
        _sorted(natures),
        lambda n: f"Required nature {n.label} not present.",
        lambda ns: _block("Required natures not present:", [n.label for n in ns], cfg),
    )


def will_add(base: AutoPlugin, plugins: Iterable[AutoPlugin], cfg: ExplainConfig) -> str:
    return _str(
        _sorted(plugins),
        lambda p: f"Enabling {base.label} will also enable {p.label}",
        lambda ps: _block(f"Enabling {base.label} will also enable:", labels(ps), cfg),
    )


def will_remove(base: AutoPlugin, plugins: Iterable[AutoPlugin], cfg: ExplainConfig) -> str:
    return _str(
        _sorted(plugins),
        lambda p: f"Enabling {base.label} will disable {p.label}",
        lambda ps: _block(f"Enabling {base.label} will disable:", labels(ps), cfg),
    )


def need_to_deactivate(deactivate: Sequence[DeactivatePlugin], cfg: ExplainConfig) -> str:
    ordered = sorted(deactivate, key=lambda d: d.plugin.label)
    return _str(
        ordered,
        lambda d: f"Deactivate {deactivate_string(d)}",
        lambda ds: _block(
            "These plugins need to be deactivated:",
            [f"Deactivate {deactivate_string(d)}" for d in ds],
            cfg,
        ),
    )


def deactivate_string(d: DeactivatePlugin) -> str:
    natures = [n.label for n in d.alternatives]
    if not natures:
        alternatives = ""
    elif len(natures) == 1:
        alternatives = f" or no longer include {natures[0]}"
    else:
        alternatives = f" or remove one of {', '.join(natures)}"
    origin = " (newly selected)" if d.newly_selected else ""
    return f"{d.plugin.label}{origin}: directly exclude it{alternatives}"


# ─────────────────────────────────────────────
#  CONTRADICTIONS
# ─────────────────────────────────────────────

def plugin_impossible(
    plugin: AutoPlugin,
    contradictions: Iterable[AutoPlugin],
    cfg: ExplainConfig,
) -> str:
    return _str(
        _sorted(contradictions),
        lambda c: (
            f"There is no way to enable plugin {plugin.label}.  It (or its dependencies) "
            f"requires plugin {c.label} to both be present and absent.  "
            "Please report the problem to the plugin's author."
        ),
        lambda cs: (
            _block(
                f"There is no way to enable plugin {plugin.label}.  It (or its dependencies) "
                "requires these plugins to be both present and absent:",
                labels(cs),
                cfg,
            )
            + "\nPlease report the problem to the plugin's author."
        ),
    )
