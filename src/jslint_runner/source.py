from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

SCRIPT_RE = re.compile(r"<script[^>]*>(.*?)</script\s*>", re.IGNORECASE | re.DOTALL)
MARKUP_RE = re.compile(r"^\s*<")
INDENT_RE = re.compile(r"^ *")


@dataclass
class LintUnit:
    text: str
    line_offset: int = 0
    column_offset: int = 0


def read_source(path: str | Path) -> str:
    return Path(path).read_text(encoding="utf-8", errors="replace")


def is_markup(text: str) -> bool:
    return MARKUP_RE.match(text) is not None


def extract_units(text: str) -> list[LintUnit]:
    """Split a source buffer into the pieces that get linted separately.

    Markup (html, xml, xhtml...) contributes one unit per ``<script>`` block,
    each remembering where it started so diagnostics map back onto the
    original file. Anything else is linted whole.
    """
    if not is_markup(text):
        return [LintUnit(text=text)]
    units: list[LintUnit] = []
    for match in SCRIPT_RE.finditer(text):
        line_offset = text.count("\n", 0, match.start(1))
        body, column_offset = _dedent(match.group(1))
        units.append(LintUnit(text=body, line_offset=line_offset, column_offset=column_offset))
    return units


def _dedent(block: str) -> tuple[str, int]:
    lines = block.split("\n")
    first = next((line for line in lines if line), None)
    if first is None:
        return block, 0
    indent = len(INDENT_RE.match(first).group(0))
    if indent == 0:
        return block, 0
    return "\n".join(_trim_indent(line, indent) for line in lines), indent


def _trim_indent(line: str, indent: int) -> str:
    leading = len(line) - len(line.lstrip(" "))
    return line[min(leading, indent):]
