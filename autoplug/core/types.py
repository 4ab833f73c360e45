"""
autoplug/core/types.py
======================
Foundation type system for autoplug.
Every module imports from here. No circular dependencies.

Formula vocabulary:
  - Nature      : atomic named capability       N
  - AutoPlugin  : feature unit selected by a formula over natures/plugins
  - Exclude     : requirement that a plugin be absent      ¬P
  - And         : conjunction of formulas                  F₁ ∧ F₂ ∧ …

A plugin P with ``select = N1 ∧ ¬Q`` activates in every model that has
nature N1 and does not contain plugin Q.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, FrozenSet, Iterable, Sequence, Tuple, Union


# ─────────────────────────────────────────────
#  SETTINGS SURFACE
# ─────────────────────────────────────────────

@dataclass(frozen=True)
class SettingKey:
    """Identifier of a build setting, e.g. ``SettingKey("compile")``."""
    label:       str
    description: str = ""

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class Setting:
    """A setting a plugin contributes. Only its key matters here."""
    key:   SettingKey
    value: Any = None


@dataclass(frozen=True)
class Configuration:
    """A build configuration (``Compile``, ``Test``…) a plugin defines."""
    name:        str
    description: str = ""

    def __str__(self) -> str:
        return self.name


# ─────────────────────────────────────────────
#  FORMULAS
# ─────────────────────────────────────────────

class _Conjoinable:
    """Gives every formula node the ``a & b`` conjunction operator."""

    __slots__ = ()

    def __and__(self, other: "Formula") -> "And":
        return And((self, other))


@dataclass(frozen=True)
class Nature(_Conjoinable):
    """Atomic named boolean capability of a build unit."""
    label: str

    def __str__(self) -> str:
        return self.label


class AutoPlugin(_Conjoinable):
    """A named feature unit with its own activation requirement.

    ``select`` may be passed as a formula or as a zero-argument callable
    returning one. The callable form lets plugins reference plugins
    defined later, including cyclic references:

        P = AutoPlugin("P", select=lambda: N1 & Exclude(Q))
        Q = AutoPlugin("Q", select=N2)

    Identity is by label: two plugins with the same label are equal.
    """

    def __init__(
        self,
        label: str,
        select: Union["Formula", Callable[[], "Formula"], None] = None,
        project_settings: Iterable[Setting] = (),
        build_settings: Iterable[Setting] = (),
        global_settings: Iterable[Setting] = (),
        project_configurations: Iterable[Configuration] = (),
        description: str = "",
    ):
        self.label = label
        self._select = select
        self.project_settings: Tuple[Setting, ...] = tuple(project_settings)
        self.build_settings: Tuple[Setting, ...] = tuple(build_settings)
        self.global_settings: Tuple[Setting, ...] = tuple(global_settings)
        self.project_configurations: Tuple[Configuration, ...] = tuple(project_configurations)
        self.description = description

    @property
    def select(self) -> "Formula":
        sel = self._select
        if sel is None:
            return EMPTY
        if callable(sel):
            return sel()
        return sel

    def requires(self, select: Union["Formula", Callable[[], "Formula"]]) -> "AutoPlugin":
        """Set the requirement formula after construction."""
        self._select = select
        return self

    @property
    def all_settings(self) -> Tuple[Setting, ...]:
        return self.project_settings + self.build_settings + self.global_settings

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AutoPlugin):
            return NotImplemented
        return self.label == other.label

    def __hash__(self) -> int:
        return hash(("AutoPlugin", self.label))

    def __str__(self) -> str:
        return self.label

    def __repr__(self) -> str:
        return f"AutoPlugin({self.label})"


@dataclass(frozen=True)
class Exclude(_Conjoinable):
    """Exclusion atom: ``plugin`` must not be part of the model."""
    plugin: AutoPlugin

    def __str__(self) -> str:
        return f"!{self.plugin.label}"


@dataclass(frozen=True)
class And(_Conjoinable):
    """Conjunction of formulas. ``And(())`` is the empty, always-true formula."""
    formulas: Tuple["Formula", ...] = ()

    def __post_init__(self):
        if not isinstance(self.formulas, tuple):
            object.__setattr__(self, "formulas", tuple(self.formulas))

    def __and__(self, other: "Formula") -> "And":
        return And(self.formulas + (other,))

    def __str__(self) -> str:
        if not self.formulas:
            return "<none>"
        return " && ".join(str(f) for f in self.formulas)


EMPTY = And(())

Basic = Union[Nature, AutoPlugin, Exclude]
Formula = Union[Nature, AutoPlugin, Exclude, And]

# Type of the external model compiler: formula → activated plugins.
CompileFn = Callable[[Formula], Sequence[AutoPlugin]]


# ─────────────────────────────────────────────
#  RESOLUTION CONTEXT
# ─────────────────────────────────────────────

@dataclass(frozen=True)
class Context:
    """Inputs of one resolution request.

    initial:   formula the user configured (natures and exclusions)
    enabled:   the model currently activated from ``initial``
    compile:   function used to compute a model from a formula
    available: every plugin considered (the universe)
    """
    initial:   Formula
    enabled:   Tuple[AutoPlugin, ...]
    compile:   CompileFn
    available: Tuple[AutoPlugin, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "enabled", tuple(self.enabled))
        object.__setattr__(self, "available", tuple(self.available))


# ─────────────────────────────────────────────
#  RESOLUTION RESULTS
# ─────────────────────────────────────────────

@dataclass(frozen=True)
class DeactivatePlugin:
    """A plugin that must be removed so that another plugin can activate.

    The plugin can always be excluded directly (``exclusion``). When
    ``remove_one_of`` is non-empty, dropping any one of those natures also
    deactivates it without affecting the plugin being enabled.
    ``newly_selected`` is False when the plugin was already active in the
    original context.
    """
    plugin:         AutoPlugin
    remove_one_of:  FrozenSet[Nature] = frozenset()
    newly_selected: bool = False

    @property
    def exclusion(self) -> Exclude:
        return Exclude(self.plugin)

    @property
    def alternatives(self) -> Tuple[Nature, ...]:
        return tuple(sorted(self.remove_one_of, key=lambda n: n.label))


class PluginEnable:
    """Describes the steps to activate a plugin in some context.

    Closed union of ``PluginActivated``, ``PluginImpossible`` and
    ``PluginRequirements``.
    """

    __slots__ = ()


class EnableDeactivated(PluginEnable):
    """A plugin that is not active in the context."""

    __slots__ = ()


@dataclass(frozen=True)
class PluginActivated(PluginEnable):
    """The plugin is already part of ``context.enabled``."""
    plugin:  AutoPlugin
    context: Context


@dataclass(frozen=True)
class PluginImpossible(EnableDeactivated):
    """The plugin requires every plugin in ``contradictions`` to be both
    present and absent. No configuration can activate it."""
    plugin:         AutoPlugin
    context:        Context
    contradictions: FrozenSet[AutoPlugin] = frozenset()


@dataclass(frozen=True)
class PluginRequirements(EnableDeactivated):
    """What has to change in ``context`` for ``plugin`` to activate.

    blocking_excludes:     current exclusions that must be dropped
    enabling_natures:      natures to add to the current ones
    extra_enabled_plugins: plugins gained as a side effect, not required
    will_remove:           active plugins that drop out of the model
    deactivate:            plugins that must be deactivated explicitly
    """
    plugin:                AutoPlugin
    context:               Context
    blocking_excludes:     FrozenSet[AutoPlugin] = frozenset()
    enabling_natures:      FrozenSet[Nature] = frozenset()
    extra_enabled_plugins: FrozenSet[AutoPlugin] = frozenset()
    will_remove:           FrozenSet[AutoPlugin] = frozenset()
    deactivate:            Tuple[DeactivatePlugin, ...] = field(default_factory=tuple)

    @property
    def is_trivial(self) -> bool:
        """True when nothing besides the plugin itself changes."""
        return not (
            self.blocking_excludes
            or self.enabling_natures
            or self.extra_enabled_plugins
            or self.will_remove
            or self.deactivate
        )


def label_of(item) -> str:
    """Sort key shared by every human-facing listing."""
    return getattr(item, "label", None) or str(item)
