"""
autoplug/logic/loader.py
========================
Load plugin universes from JSON or dict config.

JSON format:
{
  "natures": ["JvmNature", "ScalaNature"],
  "plugins": [
    {
      "label": "JvmPlugin",
      "requires": ["JvmNature", "!IvyPlugin"],
      "project_settings": ["compile", "run"],
      "build_settings": [],
      "global_settings": ["onLoad"],
      "configurations": ["Compile", "Test"],
      "description": "..."
    }
  ]
}

``requires`` lists atoms: a nature label, a plugin label, or ``!`` plus a
plugin label for an exclusion. Plugins may reference plugins declared
later in the file, including cyclically.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

from autoplug.core.exceptions import PluginDefinitionError
from autoplug.core.types import (
    AutoPlugin,
    Basic,
    Configuration,
    Exclude,
    Formula,
    Nature,
    Setting,
    SettingKey,
)
from autoplug.logic.formula import conjunction, flatten

logger = logging.getLogger(__name__)

_TOKEN_SPLIT_RE = re.compile(r"\s*(?:&&|&|,|\s)\s*")


@dataclass
class Universe:
    """Natures and plugins declared together, addressable by label."""
    natures: Dict[str, Nature]     = field(default_factory=dict)
    plugins: Dict[str, AutoPlugin] = field(default_factory=dict)

    @property
    def available(self) -> List[AutoPlugin]:
        return list(self.plugins.values())

    def atom(self, token: str) -> Basic:
        """Resolve ``"N"``, ``"P"`` or ``"!P"`` to an atom."""
        token = token.strip()
        if token.startswith("!"):
            label = token[1:].strip()
            if label not in self.plugins:
                raise PluginDefinitionError(
                    f"Cannot exclude '{label}': not a known plugin",
                    label=label,
                )
            return Exclude(self.plugins[label])
        if token in self.plugins:
            return self.plugins[token]
        if token in self.natures:
            return self.natures[token]
        raise PluginDefinitionError(
            f"Unknown nature or plugin '{token}'",
            label=token,
            context={"natures": sorted(self.natures), "plugins": sorted(self.plugins)},
        )


def parse_formula(source: Union[str, Iterable[str]], universe: Universe) -> Formula:
    """Parse a user formula.

    Accepts either a string (``"N1 && !Q"``, ``"N1, !Q"``, ``"N1 !Q"``)
    or an iterable of atom tokens. The empty string gives the empty formula.
    """
    if isinstance(source, str):
        tokens = [t for t in _TOKEN_SPLIT_RE.split(source.strip()) if t]
    else:
        tokens = [t for t in source if t.strip()]
    return conjunction(universe.atom(t) for t in tokens)


class UniverseLoader:
    """Load universes from JSON files or already-decoded dicts."""

    @classmethod
    def from_json(cls, path: str) -> Universe:
        data = json.loads(Path(path).read_text())
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Universe:
        universe = Universe()

        for label in data.get("natures", []):
            universe.natures[label] = Nature(label)

        # First pass: create every plugin so requirements can point forward.
        entries = data.get("plugins", [])
        for item in entries:
            label = item["label"]
            if label in universe.plugins:
                raise PluginDefinitionError(f"Duplicate plugin label '{label}'", label=label)
            if label in universe.natures:
                raise PluginDefinitionError(
                    f"Label '{label}' is declared both as a nature and a plugin",
                    label=label,
                )
            universe.plugins[label] = AutoPlugin(
                label,
                project_settings=_settings(item.get("project_settings", [])),
                build_settings=_settings(item.get("build_settings", [])),
                global_settings=_settings(item.get("global_settings", [])),
                project_configurations=[Configuration(c) for c in item.get("configurations", [])],
                description=item.get("description", ""),
            )

        # Second pass: requirements.
        for item in entries:
            plugin = universe.plugins[item["label"]]
            try:
                plugin.requires(parse_formula(item.get("requires", []), universe))
            except PluginDefinitionError as exc:
                raise PluginDefinitionError(
                    f"Plugin '{plugin.label}': {exc}",
                    label=plugin.label,
                    context=exc.context,
                ) from exc

        logger.info(
            "Loaded %d plugins, %d natures.", len(universe.plugins), len(universe.natures)
        )
        return universe

    @classmethod
    def to_dict(cls, universe: Universe) -> Dict[str, Any]:
        return {
            "natures": list(universe.natures),
            "plugins": [
                {
                    "label": p.label,
                    "requires": [str(a) for a in flatten(p.select)],
                    "project_settings": [s.key.label for s in p.project_settings],
                    "build_settings": [s.key.label for s in p.build_settings],
                    "global_settings": [s.key.label for s in p.global_settings],
                    "configurations": [c.name for c in p.project_configurations],
                    "description": p.description,
                }
                for p in universe.plugins.values()
            ],
        }

    @classmethod
    def to_json(cls, universe: Universe, path: str) -> None:
        Path(path).write_text(json.dumps(cls.to_dict(universe), indent=2))


def _settings(key_labels: Iterable[str]) -> List[Setting]:
    return [Setting(SettingKey(label)) for label in key_labels]
