from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Protocol, Union

COLUMN_MISMATCH_TEMPLATE = "Expected '{a}' at column {b}, not column {c}."
PLACEHOLDERS = ("a", "b", "c", "d")


@dataclass
class Diagnostic:
    line: int
    column: int
    message: str

    def format(self) -> str:
        return f"{self.line} :: {self.column} :: {self.message}"


class Report(Protocol):
    def diagnostics(self, line_offset: int, column_offset: int) -> list[Diagnostic]:
        ...


@dataclass
class LegacyReport:
    """Errors collected on ``jslint.errors`` by older JSLint editions."""

    errors: list[dict[str, Any] | None] = field(default_factory=list)

    def diagnostics(self, line_offset: int, column_offset: int) -> list[Diagnostic]:
        results: list[Diagnostic] = []
        for entry in self.errors:
            # A null entry means JSLint gave up (too many errors).
            if not entry:
                continue
            results.append(
                Diagnostic(
                    line=_number(entry.get("line")) + line_offset,
                    column=_number(entry.get("character")) + column_offset,
                    message=render_message(entry, column_offset),
                )
            )
        return results


@dataclass
class WarningsReport:
    """The ``warnings`` list of the result object returned by current JSLint.

    Lines and columns are zero based.
    """

    warnings: list[dict[str, Any] | None] = field(default_factory=list)

    def diagnostics(self, line_offset: int, column_offset: int) -> list[Diagnostic]:
        results: list[Diagnostic] = []
        for entry in self.warnings:
            if not entry:
                continue
            results.append(
                Diagnostic(
                    line=_number(entry.get("line")) + 1 + line_offset,
                    column=_number(entry.get("column")) + 1 + column_offset,
                    message=render_message(entry, column_offset),
                )
            )
        return results


AnyReport = Union[LegacyReport, WarningsReport]


def report_from_payload(payload: dict[str, Any]) -> AnyReport:
    errors = payload.get("errors")
    if isinstance(errors, list):
        return LegacyReport(errors=errors)
    warnings = payload.get("warnings")
    return WarningsReport(warnings=warnings if isinstance(warnings, list) else [])


def render_message(entry: dict[str, Any], column_offset: int = 0) -> str:
    raw = entry.get("raw")
    if not raw:
        message = entry.get("message")
        if message is None:
            message = entry.get("reason", "")
        return str(message)
    values = {key: entry[key] for key in PLACEHOLDERS if key in entry}
    # JSLint reports these two columns relative to the extracted script.
    if raw == COLUMN_MISMATCH_TEMPLATE:
        for key in ("b", "c"):
            if _is_number(values.get(key)):
                values[key] += column_offset
    message = raw
    for key in PLACEHOLDERS:
        message = message.replace("{" + key + "}", _js_text(values, key), 1)
    return message


def _js_text(values: dict[str, Any], key: str) -> str:
    if key not in values:
        return "undefined"
    return _js_string(values[key])


def _js_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if value is None or isinstance(value, (bool, int, float)):
        return json.dumps(value)
    # Arrays join their items with commas; null items render empty.
    if isinstance(value, list):
        return ",".join("" if item is None else _js_string(item) for item in value)
    return "[object Object]"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _number(value: Any) -> int:
    return int(value) if _is_number(value) else 0
