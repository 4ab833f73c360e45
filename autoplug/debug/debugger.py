"""
autoplug/debug/debugger.py
==========================
PluginDebug: query facade over a plugin universe.

Answers the two questions a user asks when a setting is missing:

    "Which plugins could define key K?"     → providers(K)
    "What must I change to get one?"        → to_enable(K, ctx), debug(K, ctx)

and describes a single plugin with help(P, ctx).

The universe and its key index are computed once in the constructor and
never modified, so one instance can serve concurrent queries.
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, List, Optional

from autoplug.core.config import DEFAULT_CONFIG, AutoPluginConfig
from autoplug.core.relation import Relation
from autoplug.core.types import (
    AutoPlugin,
    Context,
    EnableDeactivated,
    PluginActivated,
    PluginEnable,
    PluginImpossible,
    PluginRequirements,
    SettingKey,
    label_of,
)
from autoplug.debug.explain import explain_plugin_enable, multi
from autoplug.debug.index import defined_keys, key_names
from autoplug.debug.resolver import plugin_enable

logger = logging.getLogger(__name__)


class PluginDebug:
    """Precomputed information for debugging plugin (de)activation.

    Usage:
        debugger = PluginDebug(available)
        print(debugger.debug("compile", context))
        print(debugger.help(jvm_plugin, context))
    """

    def __init__(
        self,
        available: Iterable[AutoPlugin],
        config: Optional[AutoPluginConfig] = None,
    ):
        self.available: List[AutoPlugin] = list(available)
        self.config = config or DEFAULT_CONFIG
        self.provided: Relation[AutoPlugin, SettingKey] = defined_keys(self.available)
        self.name_to_key: Dict[str, SettingKey] = key_names(self.provided)
        logger.info(
            "PluginDebug ready: %d plugins, %d keys",
            len(self.available),
            len(self.name_to_key),
        )

    # ─── QUERIES ───────────────────────────────────────────────────

    def providers(self, key_name: str) -> FrozenSet[AutoPlugin]:
        """Plugins that might define a key named ``key_name``.

        Plugins can define keys in different scopes, so this is only a
        guideline. Unknown keys have no providers.
        """
        key = self.name_to_key.get(key_name)
        if key is None:
            return frozenset()
        return self.provided.reverse(key)

    def to_enable(self, key_name: str, context: Context) -> List[PluginEnable]:
        """Alternative ways of defining ``key_name`` in ``context``,
        one per provider, ordered by plugin label."""
        return [
            plugin_enable(context, plugin)
            for plugin in sorted(self.providers(key_name), key=label_of)
        ]

    # ─── TEXT ──────────────────────────────────────────────────────

    def debug(self, not_found_key: str, context: Context) -> str:
        """Suggest how ``not_found_key`` can be defined in ``context``."""
        results = self.to_enable(not_found_key, context)
        activated = [r for r in results if isinstance(r, PluginActivated)]
        deactivated = [r for r in results if isinstance(r, EnableDeactivated)]

        if not activated:
            return self._debug_deactivated(not_found_key, deactivated)
        names = ", ".join(r.plugin.label for r in activated)
        prefix = f"Some already activated plugins define {not_found_key}: {names}"
        if not deactivated:
            return prefix
        return prefix + "\n" + self._debug_deactivated(not_found_key, deactivated)

    def _debug_deactivated(
        self,
        not_found_key: str,
        deactivated: List[EnableDeactivated],
    ) -> str:
        cfg = self.config.explain
        impossible = [r for r in deactivated if isinstance(r, PluginImpossible)]
        possible = [r for r in deactivated if isinstance(r, PluginRequirements)]

        if possible:
            explained = [explain_plugin_enable(r, cfg) for r in possible]
            if len(explained) > 1:
                numbered = (
                    f"{i}. {text}"
                    for i, text in enumerate(explained, cfg.number_from)
                )
                text = (
                    f"Multiple plugins are available that can provide {not_found_key}:\n"
                    + "\n".join(numbered)
                )
            else:
                text = (
                    f"{not_found_key} is provided by an available (but not activated) plugin:\n"
                    + explained[0]
                )
            if impossible:
                names = ", ".join(r.plugin.label for r in impossible)
                text += (
                    f"\n\nThere are other available plugins that provide {not_found_key}, "
                    f"but they are impossible to add: {names}"
                )
            return text

        if not impossible:
            return f"No available plugin provides key {not_found_key}."

        sep = "\n" + cfg.indent
        return (
            f"Plugins are available that could provide {not_found_key}, "
            f"but they are impossible to add:{sep}"
            + sep.join(explain_plugin_enable(r, cfg) for r in impossible)
        )

    def help(self, plugin: AutoPlugin, context: Context) -> str:
        """Describe ``plugin`` and, if it is not active, how to activate it."""
        if plugin in context.enabled:
            return self._activated_help(plugin)
        return self._deactivated_help(plugin, context)

    def _activated_help(self, plugin: AutoPlugin) -> str:
        keys, configs = self._key_labels(plugin), self._config_names(plugin)
        text = f"{plugin.label} is activated."
        if keys:
            text += f"\nIt may affect these keys: {multi(keys, self.config.explain)}"
        if configs:
            text += f"\nIt defines these configurations: {multi(configs, self.config.explain)}"
        return text

    def _deactivated_help(self, plugin: AutoPlugin, context: Context) -> str:
        keys, configs = self._key_labels(plugin), self._config_names(plugin)
        text = f"{plugin.label} is not activated."
        if keys:
            text += f"\nActivating it may affect these keys: {multi(keys, self.config.explain)}"
        if configs:
            text += (
                "\nActivating it will define these configurations: "
                f"{multi(configs, self.config.explain)}"
            )
        to_activate = explain_plugin_enable(plugin_enable(context, plugin), self.config.explain)
        return f"{text}\n{to_activate}" if to_activate else text

    def _key_labels(self, plugin: AutoPlugin) -> List[str]:
        return sorted(key.label for key in self.provided.forward(plugin))

    @staticmethod
    def _config_names(plugin: AutoPlugin) -> List[str]:
        return [c.name for c in plugin.project_configurations]
