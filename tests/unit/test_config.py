"""tests/unit/test_config.py: configuration defaults and exception payloads."""
from pathlib import Path

from autoplug.core.config import DEFAULT_CONFIG, AutoPluginConfig
from autoplug.core.exceptions import AutoPluginError, CompileError, PluginDefinitionError


def test_defaults():
    cfg = AutoPluginConfig()
    assert cfg.explain.inline_limit == 4
    assert cfg.explain.indent == "\t"
    assert cfg.explain.number_from == 1
    assert cfg.compiler.max_passes == 1000


def test_compact_does_not_touch_default():
    compact = AutoPluginConfig.compact()
    assert compact.explain.inline_limit == 0
    assert DEFAULT_CONFIG.explain.inline_limit == 4


def test_instances_do_not_share_sections():
    a, b = AutoPluginConfig(), AutoPluginConfig()
    a.compiler.max_passes = 5
    assert b.compiler.max_passes == 1000


def test_exception_hierarchy():
    assert issubclass(CompileError, AutoPluginError)
    assert issubclass(PluginDefinitionError, AutoPluginError)


def test_exception_payloads():
    err = CompileError("boom", plugins=["A"], context={"stratum": 0})
    assert str(err) == "boom"
    assert err.plugins == ["A"]
    assert err.context == {"stratum": 0}

    err = PluginDefinitionError("bad")
    assert err.label is None
    assert err.context == {}


def test_version_single_source():
    import autoplug
    from autoplug.version import __version__

    assert autoplug.__version__ == __version__
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    assert 'attr = "autoplug.version.__version__"' in pyproject.read_text()
