#
# src/mcp_test_runner/pytest_plugin.py
#
"""
pytest plugin that writes the session's results as a JSON tree.

Copied into each session's scratch directory as a top-level module and loaded
into the pytest child process with `-p mcp_test_runner_report --mcp-report=PATH`.
It runs under whichever interpreter the project uses, which may have nothing
but pytest installed, so it must only import pytest and the standard library.

Report layout::

    {"files": [
        {"name": "tests/test_math.py", "children": [
            {"name": "TestAdd", "children": [
                {"name": "test_ints", "status": "passed"},
                {"name": "test_floats", "status": "failed",
                 "error": {"message": "assert 0.30000000000000004 == 0.3", "stack": "..."}}
            ]},
            {"name": "test_skipped", "status": "skipped"}
        ]}
    ]}

A file that failed to import is reported as a failed case in place of its
collection. Items that never reported an outcome carry no status.
"""

import json
import os
from pathlib import Path
from typing import Any

import pytest

REPORT_OPTION = "--mcp-report"
PLUGIN_NAME = "mcp-test-runner-tree-reporter"
SESSION_NODE_NAME = "<session>"

# A later phase only overrides an earlier outcome if it ranks higher.
_STATUS_RANK = {"passed": 0, "skipped": 1, "failed": 2}


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("mcp-test-runner")
    group.addoption(
        REPORT_OPTION,
        action="store",
        dest="mcp_report",
        default=None,
        metavar="PATH",
        help="Write a JSON tree of test outcomes to PATH.",
    )


def pytest_configure(config: pytest.Config) -> None:
    report_path = config.getoption("mcp_report")
    if report_path:
        config.pluginmanager.register(TreeReporter(Path(report_path)), PLUGIN_NAME)


def _first_line(text: str) -> str:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return ""


def _error_of(report: pytest.TestReport | pytest.CollectReport) -> dict[str, str]:
    stack = report.longreprtext or ""
    message = ""
    reprcrash = getattr(report.longrepr, "reprcrash", None)
    if reprcrash is not None:
        message = reprcrash.message or ""
    if not message:
        message = _first_line(stack)
    error = {"message": message}
    if stack:
        error["stack"] = stack
    return error


def _status_of(report: pytest.TestReport) -> str | None:
    if report.failed:
        return "failed"
    if report.skipped:
        # xfail lands here as well.
        return "skipped"
    if report.when == "call":
        return "passed"
    return None


def _split_item(item: pytest.Item) -> tuple[str, list[str]]:
    """Returns the item's file node id and the names of its groups below the file."""
    chain = item.listchain()
    for index, node in enumerate(chain):
        if isinstance(node, pytest.File):
            return node.nodeid, [n.name for n in chain[index + 1 : -1]]
    return item.nodeid.split("::", 1)[0], []


class TreeReporter:
    """Collects outcomes during the session and writes the tree at the end."""

    def __init__(self, path: Path):
        self.path = path
        self._items: list[tuple[str, str, list[str], str]] = []
        self._outcomes: dict[str, dict[str, Any]] = {}
        self._collect_errors: list[dict[str, Any]] = []

    def pytest_collectreport(self, report: pytest.CollectReport) -> None:
        if report.failed:
            self._collect_errors.append(
                {
                    "name": report.nodeid or SESSION_NODE_NAME,
                    "status": "failed",
                    "error": _error_of(report),
                }
            )

    def pytest_collection_finish(self, session: pytest.Session) -> None:
        self._items = []
        for item in session.items:
            file_id, groups = _split_item(item)
            self._items.append((item.nodeid, file_id, groups, item.name))

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        status = _status_of(report)
        if status is None:
            return
        outcome = self._outcomes.get(report.nodeid)
        if outcome is not None and _STATUS_RANK[outcome["status"]] >= _STATUS_RANK[status]:
            return
        outcome = {"status": status}
        if status == "failed":
            outcome["error"] = _error_of(report)
        self._outcomes[report.nodeid] = outcome

    def build_tree(self) -> list[dict[str, Any]]:
        files: list[dict[str, Any]] = list(self._collect_errors)
        collections: dict[tuple[str, ...], dict[str, Any]] = {}

        for nodeid, file_id, groups, name in self._items:
            key: tuple[str, ...] = (file_id,)
            node = collections.get(key)
            if node is None:
                node = collections[key] = {"name": file_id, "children": []}
                files.append(node)
            for group in groups:
                key = (*key, group)
                child = collections.get(key)
                if child is None:
                    child = collections[key] = {"name": group, "children": []}
                    node["children"].append(child)
                node = child

            case: dict[str, Any] = {"name": name}
            case.update(self._outcomes.get(nodeid, {}))
            node["children"].append(case)

        return files

    @pytest.hookimpl(trylast=True)
    def pytest_sessionfinish(self, session: pytest.Session) -> None:
        payload = json.dumps({"files": self.build_tree()})
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(payload, encoding="utf-8")
        os.replace(tmp_path, self.path)


# 🔼⚙️
