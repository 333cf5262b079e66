#
# src/mcp_test_runner/runtime/reports.py
#
"""
Structured outcomes of an orchestrator invocation. Failure is carried as data
so the caller decides how to present it.
"""

import json

from attrs import define, field

from mcp_test_runner.results import TestCaseResult


@define(frozen=True, slots=True)
class RunReport:
    """Outcome of a run-mode invocation: flat results, or an error message."""

    results: tuple[TestCaseResult, ...] = field(factory=tuple, converter=tuple)
    error: str | None = field(default=None)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_json(self) -> str:
        return json.dumps([result.to_dict() for result in self.results], indent=2)


@define(frozen=True, slots=True)
class WatchReport:
    """Outcome of starting a watch session: an acknowledgement, or an error message."""

    message: str = field(default="")
    error: str | None = field(default=None)

    @property
    def ok(self) -> bool:
        return self.error is None


# 🔼⚙️
