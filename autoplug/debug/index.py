"""
autoplug/debug/index.py
=======================
Key-provenance index: which plugins might define which setting keys.

Built once over the plugin universe, from the keys of each plugin's
project, build and global settings. Plugins can define keys in several
scopes and keys can be overridden, so the index is a guideline and never
a guarantee that a key ends up defined.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable

from autoplug.core.relation import Relation
from autoplug.core.types import AutoPlugin, SettingKey

logger = logging.getLogger(__name__)


def defined_keys(available: Iterable[AutoPlugin]) -> Relation[AutoPlugin, SettingKey]:
    """Relation between plugins and the keys they potentially define."""
    relation: Relation[AutoPlugin, SettingKey] = Relation()
    for plugin in available:
        relation.add(plugin, (setting.key for setting in plugin.all_settings))
    logger.debug("Key index: %r", relation)
    return relation


def key_names(relation: Relation[AutoPlugin, SettingKey]) -> Dict[str, SettingKey]:
    """Map key label → key for every key in the relation."""
    return {key.label: key for key in relation.range}
