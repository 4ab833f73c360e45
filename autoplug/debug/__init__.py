"""autoplug/debug — Plugin activation resolution and explanation."""

from autoplug.debug.debugger import PluginDebug
from autoplug.debug.explain import explain_plugin_enable
from autoplug.debug.index import defined_keys, key_names
from autoplug.debug.resolver import minimal_model, plan_deactivation, plugin_enable

__all__ = [
    "PluginDebug",
    "explain_plugin_enable",
    "defined_keys",
    "key_names",
    "minimal_model",
    "plan_deactivation",
    "plugin_enable",
]
