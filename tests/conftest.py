"""
tests/conftest.py
==================
Shared pytest fixtures for all autoplug tests.

Toy universe:
    natures  N1, N2
    P :- N1, !Q
    Q :- N2
    R :- N1
"""

import pytest
from autoplug.core.types import (
    EMPTY,
    AutoPlugin,
    Configuration,
    Context,
    Exclude,
    Nature,
    Setting,
    SettingKey,
)
from autoplug.logic.compiler import compile_plugins
from autoplug.logic.formula import excludes, flatten, natures, plugins, satisfied


# ─── NATURES ──────────────────────────────────────────────────────


@pytest.fixture
def n1():
    return Nature("N1")


@pytest.fixture
def n2():
    return Nature("N2")


# ─── PLUGINS ──────────────────────────────────────────────────────


@pytest.fixture
def toy(n1, n2):
    """Plugins P, Q, R of the toy universe, by label."""
    compile_key = SettingKey("compile")
    q = AutoPlugin("Q", select=n2, project_settings=[Setting(SettingKey("publish"))])
    p = AutoPlugin(
        "P",
        select=n1 & Exclude(q),
        project_settings=[Setting(compile_key)],
        build_settings=[Setting(SettingKey("scalaVersion"))],
        project_configurations=[Configuration("Compile"), Configuration("Test")],
    )
    r = AutoPlugin("R", select=n1, global_settings=[Setting(compile_key)])
    return {"P": p, "Q": q, "R": r}


@pytest.fixture
def available(toy):
    return [toy["P"], toy["Q"], toy["R"]]


# ─── COMPILERS ────────────────────────────────────────────────────


def make_stub_compile(universe):
    """Activate every plugin whose select holds for the requested natures
    and exclusions; requested plugins are always present."""

    def compile_model(formula):
        atoms = flatten(formula)
        active_natures = natures(atoms)
        banned = excludes(atoms)
        model = set(plugins(atoms))
        changed = True
        while changed:
            changed = False
            for p in universe:
                if p in model or p in banned:
                    continue
                if satisfied(p.select, model, active_natures):
                    model.add(p)
                    changed = True
        return [p for p in universe if p in model]

    return compile_model


@pytest.fixture
def stub_compile(available):
    return make_stub_compile(available)


@pytest.fixture
def reference_compile(available):
    return compile_plugins(available)


# ─── CONTEXTS ─────────────────────────────────────────────────────


@pytest.fixture
def empty_context(available, stub_compile):
    return Context(initial=EMPTY, enabled=[], compile=stub_compile, available=available)


@pytest.fixture
def make_context(available, reference_compile):
    """Context whose enabled model is compiled from ``initial``."""

    def _make(initial=EMPTY, universe=None, compile_model=None):
        universe = available if universe is None else universe
        compile_model = compile_model or (
            reference_compile if universe is available else compile_plugins(universe)
        )
        return Context(
            initial=initial,
            enabled=compile_model(initial),
            compile=compile_model,
            available=universe,
        )

    return _make
