"""
autoplug/core/validators.py
===========================
Input validation utilities for autoplug.

Validates:
    - Labels of natures and plugins
    - Plugin definitions (label, requirement atoms, setting keys)
    - Universes (duplicate labels, dangling references, nature/plugin clashes)

These validators run at API boundaries, not in the resolver. The
resolver assumes a valid universe and does not re-check it.

``validate_*`` functions return a list of error strings (empty = valid);
``assert_valid_*`` raise PluginDefinitionError.
"""
from __future__ import annotations

import re
from typing import Dict, Iterable, List

from autoplug.core.exceptions import PluginDefinitionError
from autoplug.core.types import And, AutoPlugin, Exclude, Nature


# ─── REGEX PATTERNS ───────────────────────────────────────────────

VALID_LABEL_RE = re.compile(r'^[A-Za-z_][A-Za-z0-9_.\-]*$')


# ─── LABELS ───────────────────────────────────────────────────────

def validate_label(label: str, kind: str = "Label") -> List[str]:
    """Labels are non-empty and match ``[A-Za-z_][A-Za-z0-9_.-]*``."""
    if not label:
        return [f"{kind} is empty"]
    if not VALID_LABEL_RE.match(label):
        return [f"{kind} '{label}' invalid: must be [A-Za-z_][A-Za-z0-9_.-]*"]
    return []


# ─── PLUGINS ──────────────────────────────────────────────────────

def validate_plugin(plugin: AutoPlugin) -> List[str]:
    """Validate a single plugin. Returns list of errors.

    Checks:
        1. label is valid
        2. select is built only from formula nodes
        3. every nature and excluded plugin in select has a valid label
        4. setting keys are non-empty
    """
    errors: List[str] = validate_label(plugin.label, "Plugin label")

    stack = [plugin.select]
    while stack:
        node = stack.pop()
        if isinstance(node, And):
            stack.extend(node.formulas)
        elif isinstance(node, Nature):
            errors.extend(
                f"Plugin '{plugin.label}' requires: {e}"
                for e in validate_label(node.label, "Nature label")
            )
        elif isinstance(node, Exclude):
            if not isinstance(node.plugin, AutoPlugin):
                errors.append(
                    f"Plugin '{plugin.label}' excludes non-plugin {node.plugin!r}"
                )
        elif not isinstance(node, AutoPlugin):
            errors.append(f"Plugin '{plugin.label}' select contains {node!r}")

    for setting in plugin.all_settings:
        if not setting.key.label:
            errors.append(f"Plugin '{plugin.label}' defines a setting with an empty key")

    return errors


# ─── UNIVERSES ────────────────────────────────────────────────────

def _referenced(plugin: AutoPlugin) -> Iterable[object]:
    stack = [plugin.select]
    while stack:
        node = stack.pop()
        if isinstance(node, And):
            stack.extend(node.formulas)
        elif isinstance(node, Exclude):
            yield node.plugin
        else:
            yield node


def validate_universe(available: Iterable[AutoPlugin]) -> List[str]:
    """Validate a plugin universe.

    Checks:
        1. each plugin is individually valid
        2. no two plugins share a label
        3. plugins reference only plugins of the universe
        4. no label is used both by a nature and a plugin
    """
    plugins = list(available)
    errors: List[str] = []
    seen: Dict[str, int] = {}

    for index, plugin in enumerate(plugins):
        errors.extend(validate_plugin(plugin))
        if plugin.label in seen:
            errors.append(
                f"Duplicate plugin label '{plugin.label}' "
                f"(first at index {seen[plugin.label]})"
            )
        else:
            seen[plugin.label] = index

    nature_labels = set()
    for plugin in plugins:
        for ref in _referenced(plugin):
            if isinstance(ref, AutoPlugin) and ref.label not in seen:
                errors.append(
                    f"Plugin '{plugin.label}' references '{ref.label}', "
                    "which is not in the universe"
                )
            elif isinstance(ref, Nature):
                nature_labels.add(ref.label)

    for label in sorted(nature_labels & set(seen)):
        errors.append(f"Label '{label}' is used both as a nature and a plugin")

    return errors


# ─── CONVENIENCE VALIDATORS ──────────────────────────────────────

def assert_valid_plugin(plugin: AutoPlugin) -> None:
    """Validate plugin and raise PluginDefinitionError on any violation."""
    errors = validate_plugin(plugin)
    if errors:
        raise PluginDefinitionError(
            f"Invalid plugin '{plugin.label}': {'; '.join(errors)}",
            label=plugin.label,
        )


def assert_valid_universe(available: Iterable[AutoPlugin]) -> None:
    """Validate universe and raise PluginDefinitionError on any violation."""
    errors = validate_universe(available)
    if errors:
        raise PluginDefinitionError(
            f"Invalid plugin universe: {'; '.join(errors)}",
            context={"error_count": len(errors)},
        )
