#
# src/mcp_test_runner/results/extractor.py
#
"""
Flattens a reported-entity tree into an ordered list of test case results.
"""

from collections.abc import Iterable
from typing import Any

import structlog

from mcp_test_runner.telemetry import StructLogger

from .entities import Case, classify, is_missing, read_field
from .models import FAILED_STATUS, MISSING_FAILURE_MESSAGE, TestCaseResult, TestError

log: StructLogger = structlog.get_logger("results.extractor")


def _build_error(raw_error: Any) -> TestError:
    message = read_field(raw_error, "message")
    if not isinstance(message, str) or not message:
        message = MISSING_FAILURE_MESSAGE

    stack = read_field(raw_error, "stack")
    if not isinstance(stack, str) or not stack:
        stack = None

    return TestError(message=message, stack=stack)


def to_result(case: Case) -> TestCaseResult:
    """Normalises a classified case into its flat record."""
    if case.status != FAILED_STATUS:
        return TestCaseResult(name=case.name, status=case.status)
    error = _build_error(None if is_missing(case.error) else case.error)
    return TestCaseResult(name=case.name, status=case.status, error=error)


def extract(roots: Iterable[Any] | None) -> list[TestCaseResult]:
    """
    Walks the trees rooted at `roots` depth-first, pre-order, and returns one
    record per case node in declaration order.

    Collections contribute no record of their own. The walk never raises: a
    node that cannot be handled is skipped and its siblings are still reported.
    """
    if roots is None:
        return []
    try:
        pending = list(roots)
    except TypeError:
        log.debug("Ignoring non-iterable root sequence", roots_type=type(roots).__name__)
        return []

    results: list[TestCaseResult] = []
    # Explicit stack instead of recursion; children pushed in reverse so they pop in order.
    pending.reverse()
    while pending:
        node = pending.pop()
        try:
            entity = classify(node)
            if isinstance(entity, Case):
                results.append(to_result(entity))
            else:
                pending.extend(reversed(entity.children))
        except Exception as e:
            log.debug("Skipping malformed reported entity", error=str(e))

    return results


def count_statuses(results: Iterable[TestCaseResult]) -> dict[str, int]:
    """Tallies results by status, in first-seen order."""
    counts: dict[str, int] = {}
    for result in results:
        counts[result.status] = counts.get(result.status, 0) + 1
    return counts


# 🔼⚙️
