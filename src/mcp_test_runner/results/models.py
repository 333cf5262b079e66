#
# src/mcp_test_runner/results/models.py
#
"""
Flat, serialisable test outcome records.
"""

from typing import Any

from attrs import define, field

FAILED_STATUS = "failed"
PENDING_STATUS = "pending"
MISSING_FAILURE_MESSAGE = "Test failed without an error message"


@define(frozen=True, slots=True)
class TestError:
    """Failure details attached to a failed test case."""

    __test__ = False

    message: str
    stack: str | None = field(default=None)

    def to_dict(self) -> dict[str, str]:
        data = {"message": self.message}
        if self.stack is not None:
            data["stack"] = self.stack
        return data


@define(frozen=True, slots=True)
class TestCaseResult:
    """
    Outcome of a single test case.

    `error` is only ever set when `status` is "failed".
    """

    __test__ = False

    name: str
    status: str
    error: TestError | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "status": self.status}
        if self.error is not None:
            data["error"] = self.error.to_dict()
        return data


# 🔼⚙️
