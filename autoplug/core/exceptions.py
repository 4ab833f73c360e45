"""
autoplug/core/exceptions.py
===========================
Custom exception hierarchy for autoplug.

All exceptions carry structured context so callers can
programmatically handle different failure modes.

An unsatisfiable plugin is NOT an exception: it is reported as a
``PluginImpossible`` result.
"""

from __future__ import annotations

from typing import List, Optional


class AutoPluginError(Exception):
    """Base exception for all autoplug errors."""

    def __init__(self, message: str, context: Optional[dict] = None):
        super().__init__(message)
        self.context = context or {}


class CompileError(AutoPluginError):
    """Raised when the model compiler cannot produce a model.

    Either the requested formula both requires and excludes a plugin,
    or the universe contains a requirement cycle through an exclusion.
    """

    def __init__(
        self,
        message: str,
        plugins: List[str],
        context: Optional[dict] = None,
    ):
        super().__init__(message, context)
        self.plugins = plugins


class PluginDefinitionError(AutoPluginError):
    """Raised when a plugin universe definition is malformed
    (unknown references, duplicate or invalid labels)."""

    def __init__(
        self,
        message: str,
        label: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        super().__init__(message, context)
        self.label = label
