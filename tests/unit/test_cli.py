"""
tests/unit/test_cli.py
======================
Tests for scripts/debug_plugins.py.
"""
import importlib.util
import json
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "debug_plugins.py"


@pytest.fixture(scope="module")
def cli():
    module_spec = importlib.util.spec_from_file_location("debug_plugins", SCRIPT)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


@pytest.fixture
def universe_file(tmp_path):
    path = tmp_path / "plugins.json"
    path.write_text(json.dumps({
        "natures": ["N1", "N2"],
        "plugins": [
            {
                "label": "P",
                "requires": ["N1", "!Q"],
                "project_settings": ["compile"],
                "build_settings": ["scalaVersion"],
                "configurations": ["Compile", "Test"],
            },
            {"label": "Q", "requires": ["N2"], "project_settings": ["publish"]},
            {"label": "R", "requires": ["N1"], "global_settings": ["compile"]},
        ],
    }))
    return str(path)


def test_providers(cli, universe_file, capsys):
    assert cli.main(["--universe", universe_file, "--providers", "compile"]) == 0
    assert capsys.readouterr().out == "P\nR\n"


def test_key_already_defined(cli, universe_file, capsys):
    assert cli.main(["--universe", universe_file, "--initial", "N1", "--key", "compile"]) == 0
    assert capsys.readouterr().out == "Some already activated plugins define compile: P, R\n"


def test_missing_key(cli, universe_file, capsys):
    cli.main(["--universe", universe_file, "--key", "publish"])
    assert capsys.readouterr().out == (
        "publish is provided by an available (but not activated) plugin:\n"
        "Required nature N2 not present.\n"
    )


def test_plugin_help(cli, universe_file, capsys):
    cli.main(["--universe", universe_file, "--initial", "N1", "--plugin", "Q"])
    assert capsys.readouterr().out == (
        "Q is not activated.\n"
        "Activating it may affect these keys: publish\n"
        "Required nature N2 not present.\n"
        "Enabling Q will disable P\n"
    )


def test_initial_as_single_string(cli, universe_file, capsys):
    cli.main(["--universe", universe_file, "--initial", "N1 !R", "--plugin", "R"])
    assert capsys.readouterr().out == (
        "R is not activated.\n"
        "Activating it may affect these keys: compile\n"
        "Required dependency R was excluded.\n"
    )


def test_unknown_plugin(cli, universe_file):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--universe", universe_file, "--plugin", "Ghost"])
    assert exc.value.code == 2


def test_target_required(cli, universe_file):
    with pytest.raises(SystemExit):
        cli.main(["--universe", universe_file])
