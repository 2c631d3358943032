"""Run JSLint under Node.js and collect its raw report."""

from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from .config import LintConfig
from .diagnostic import Diagnostic, Report, WarningsReport, report_from_payload
from .source import LintUnit

logger = logging.getLogger(__name__)

# Reads {source, options, globals} from stdin and prints the raw JSLint
# report. Old editions fill ``jslint.errors``; newer ones return
# ``{warnings: [...]}``.
DRIVER = r"""
var fs = require("fs");
var loaded = require(process.argv[1]);
var jslint = loaded.jslint || loaded.default || loaded;
var input = JSON.parse(fs.readFileSync(0, "utf8"));
var result = {};
try {
    result = jslint(input.source, input.options, input.globals) || {};
} catch (ignore) {}
if (jslint.errors) {
    process.stdout.write(JSON.stringify({errors: jslint.errors}));
} else {
    process.stdout.write(JSON.stringify({warnings: result.warnings || []}));
}
"""


class LinterError(RuntimeError):
    pass


class Linter(Protocol):
    def lint(self, source: str, options: dict[str, Any], globals: list[str]) -> Report:
        ...


@dataclass
class NodeJSLint:
    script: Path
    node: str = "node"

    def lint(self, source: str, options: dict[str, Any], globals: list[str]) -> Report:
        payload = json.dumps({"source": source, "options": options, "globals": globals})
        try:
            completed = subprocess.run(
                [self.node, "-e", DRIVER, str(Path(self.script).resolve())],
                input=payload,
                capture_output=True,
                encoding="utf-8",
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            raise LinterError(f"could not run {self.node}: {exc}") from exc
        if completed.returncode != 0:
            raise LinterError(
                f"{self.node} exited with status {completed.returncode}: {completed.stderr.strip()}"
            )
        try:
            report = json.loads(completed.stdout)
        except ValueError as exc:
            raise LinterError(f"unreadable JSLint output: {exc}") from exc
        if not isinstance(report, dict):
            raise LinterError("unreadable JSLint output: expected a JSON object")
        return report_from_payload(report)


def lint_unit(linter: Linter, unit: LintUnit, config: LintConfig) -> list[Diagnostic]:
    try:
        report = linter.lint(unit.text, config.options, config.global_names())
    except LinterError as exc:
        logger.warning("JSLint failed: %s", exc)
        report = WarningsReport()
    return report.diagnostics(unit.line_offset, unit.column_offset)
