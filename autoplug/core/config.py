"""
autoplug/core/config.py
=======================
Global configuration for autoplug.
All tunables in one place.
"""
from __future__ import annotations
from dataclasses import dataclass, field


@dataclass
class ExplainConfig:
    inline_limit: int = 4      # more items than this → one per line
    indent:       str = "\t"
    number_from:  int = 1      # first index of numbered alternatives


@dataclass
class CompilerConfig:
    max_passes: int = 1000     # fixpoint passes per stratum


@dataclass
class AutoPluginConfig:
    explain:  ExplainConfig  = field(default_factory=ExplainConfig)
    compiler: CompilerConfig = field(default_factory=CompilerConfig)

    @classmethod
    def compact(cls) -> "AutoPluginConfig":
        """Config for terminals: lists always broken one per line."""
        cfg = cls()
        cfg.explain.inline_limit = 0
        return cfg


# Singleton default config
DEFAULT_CONFIG = AutoPluginConfig()
