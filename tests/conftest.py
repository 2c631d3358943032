from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from jslint_runner.diagnostic import WarningsReport
from jslint_runner.linter import LinterError


@dataclass
class FakeLinter:
    """Stands in for Node.js; hands back canned reports and records calls."""

    reports: list[Any] = field(default_factory=list)
    fail: bool = False
    calls: list[tuple[str, dict[str, Any], list[str]]] = field(default_factory=list)

    def lint(self, source, options, globals):
        self.calls.append((source, options, globals))
        if self.fail:
            raise LinterError("boom")
        if self.reports:
            return self.reports.pop(0)
        return WarningsReport()


@pytest.fixture()
def fake_linter():
    return FakeLinter()
