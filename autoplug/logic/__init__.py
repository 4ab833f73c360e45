"""autoplug/logic — Formula primitives, traversal and model compilation."""

from autoplug.logic.compiler import compile_plugins, stratify
from autoplug.logic.dag import topological_sort_unchecked
from autoplug.logic.formula import (
    conjunction,
    exclude,
    exclude_all,
    excludes,
    flatten,
    format_formula,
    include_all,
    natures,
    plugins,
    satisfied,
)
from autoplug.logic.loader import Universe, UniverseLoader, parse_formula

__all__ = [
    "compile_plugins",
    "stratify",
    "topological_sort_unchecked",
    "conjunction",
    "exclude",
    "exclude_all",
    "excludes",
    "flatten",
    "format_formula",
    "include_all",
    "natures",
    "plugins",
    "satisfied",
    "Universe",
    "UniverseLoader",
    "parse_formula",
]
