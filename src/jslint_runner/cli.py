from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path

from .config import LintConfig, RunnerSettings, resolve_config
from .linter import Linter, NodeJSLint, lint_unit
from .source import extract_units, read_source

OUTPUT_MARKER = "*** JSLint output ***"

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Lint a JavaScript or markup buffer with JSLint.")
    parser.add_argument("temp_path", nargs="?", default="", help="File holding the text to lint.")
    parser.add_argument(
        "file_path",
        nargs="?",
        default="",
        help="Original path of the source; its directory starts the .jslintrc search.",
    )
    parser.add_argument("--plugin-dir", help="Plugin installation directory (holds the baseline .jslintrc).")
    parser.add_argument("--jslint", help="Path to the JSLint module run under Node.js.")
    parser.add_argument("--node", help="Node.js executable.")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Enable debug logging.")
    return parser


def main(argv: list[str] | None = None, linter: Linter | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    settings = RunnerSettings.load(plugin_dir=args.plugin_dir, jslint_script=args.jslint, node=args.node)
    source_dir = Path(os.path.dirname(args.file_path) or ".")
    config = resolve_config(source_dir, settings.plugin_dir)

    # Parsed by the host plugin.
    print("Using JSLint globals: " + json.dumps(config.globals, separators=(",", ":"), ensure_ascii=False))
    print("Using JSLint options: " + json.dumps(config.options, indent=2, ensure_ascii=False))

    try:
        text = read_source(args.temp_path)
    except OSError as exc:
        logger.debug("Could not read %s: %s", args.temp_path, exc)
        return 0

    print(OUTPUT_MARKER)
    if linter is None:
        linter = NodeJSLint(script=settings.jslint_script, node=settings.node)
    for line in lint_lines(linter, text, config):
        print(line)
    return 0


def lint_lines(linter: Linter, text: str, config: LintConfig) -> list[str]:
    lines: list[str] = []
    for unit in extract_units(text):
        lines.extend(diagnostic.format() for diagnostic in lint_unit(linter, unit, config))
    return lines
