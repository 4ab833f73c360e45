#!/usr/bin/env python3
"""
scripts/debug_plugins.py
========================
Explain plugin activation from the command line.

Usage:
    # How could key 'compile' be defined?
    python scripts/debug_plugins.py --universe plugins.json --initial "JvmNature !IvyPlugin" --key compile

    # Describe one plugin
    python scripts/debug_plugins.py --universe plugins.json --initial JvmNature --plugin ScalaPlugin

    # Which plugins might define a key?
    python scripts/debug_plugins.py --universe plugins.json --providers compile
"""
import argparse
import logging
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="autoplug activation debugger")
    parser.add_argument("--universe", required=True,
                        help="Path to plugin universe JSON")
    parser.add_argument("--initial", nargs="*", default=[],
                        help="Initial natures/exclusions e.g. 'JvmNature' '!IvyPlugin'")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--key", help="Explain how a missing key can be defined")
    target.add_argument("--plugin", help="Explain how to activate a plugin")
    target.add_argument("--providers", help="List plugins that might define a key")
    parser.add_argument("--compact", action="store_true",
                        help="Always print lists one item per line")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    from autoplug.core.config import AutoPluginConfig
    from autoplug.core.types import Context
    from autoplug.core.validators import assert_valid_universe
    from autoplug.debug.debugger import PluginDebug
    from autoplug.logic.compiler import compile_plugins
    from autoplug.logic.loader import UniverseLoader, parse_formula

    config = AutoPluginConfig.compact() if args.compact else AutoPluginConfig()
    universe = UniverseLoader.from_json(args.universe)
    assert_valid_universe(universe.available)

    debugger = PluginDebug(universe.available, config=config)

    if args.providers:
        for plugin in sorted(debugger.providers(args.providers), key=lambda p: p.label):
            print(plugin.label)
        return 0

    compile_model = compile_plugins(universe.available, config=config)
    initial = parse_formula(" ".join(args.initial), universe)
    context = Context(
        initial=initial,
        enabled=compile_model(initial),
        compile=compile_model,
        available=universe.available,
    )

    if args.key:
        print(debugger.debug(args.key, context))
        return 0

    plugin = universe.plugins.get(args.plugin)
    if plugin is None:
        parser.error(f"Unknown plugin '{args.plugin}'")
    print(debugger.help(plugin, context))
    return 0


if __name__ == "__main__":
    sys.exit(main())
