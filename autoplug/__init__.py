"""
autoplug/__init__.py — Public API exports
"""

from autoplug.core.exceptions import (
    AutoPluginError,
    CompileError,
    PluginDefinitionError,
)
from autoplug.core.types import (
    EMPTY,
    And,
    AutoPlugin,
    Configuration,
    Context,
    DeactivatePlugin,
    EnableDeactivated,
    Exclude,
    Nature,
    PluginActivated,
    PluginEnable,
    PluginImpossible,
    PluginRequirements,
    Setting,
    SettingKey,
)
from autoplug.debug import (
    PluginDebug,
    explain_plugin_enable,
    minimal_model,
    plugin_enable,
)
from autoplug.logic import compile_plugins, flatten, satisfied
from autoplug.version import __version__

__all__ = [
    "PluginDebug",
    "plugin_enable",
    "minimal_model",
    "explain_plugin_enable",
    "compile_plugins",
    "flatten",
    "satisfied",
    "EMPTY",
    "And",
    "AutoPlugin",
    "Configuration",
    "Context",
    "DeactivatePlugin",
    "EnableDeactivated",
    "Exclude",
    "Nature",
    "PluginActivated",
    "PluginEnable",
    "PluginImpossible",
    "PluginRequirements",
    "Setting",
    "SettingKey",
    "AutoPluginError",
    "CompileError",
    "PluginDefinitionError",
    "__version__",
]
