"""
autoplug/version.py
===================
Package version. ``pyproject.toml`` reads ``__version__`` from here.
"""

__version__ = "0.1.0"
