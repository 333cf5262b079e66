# src/mcp_test_runner/server/tools.py

"""
Tool handlers behind the MCP surface. Kept free of FastMCP registration so
they can be called directly.
"""

from collections.abc import Sequence

import structlog
from fastmcp.exceptions import ToolError

from mcp_test_runner.config import ServerConfig
from mcp_test_runner.runtime.run_orchestrator import RunOrchestrator
from mcp_test_runner.runtime.watch_orchestrator import WatchOrchestrator
from mcp_test_runner.telemetry import StructLogger
from mcp_test_runner.testing import TestRunner

log: StructLogger = structlog.get_logger("server.tools")

UPDATE_MODES = ("run", "watch")


def normalize_test_files(test_files: str | Sequence[str] | None) -> tuple[str, ...] | None:
    """A single file is a one-element filter; nothing (or nothing non-empty) means no filter."""
    if not test_files:
        return None
    if isinstance(test_files, str):
        return (test_files,)
    files = tuple(f for f in test_files if f)
    return files or None


async def handle_run_tests(
    server_config: ServerConfig,
    runner: TestRunner,
    test_files: str | Sequence[str] | None = None,
    update_mode: str = "run",
) -> str:
    if update_mode not in UPDATE_MODES:
        raise ToolError(
            f"Error: Invalid arguments for run_tests: updateMode must be one of {list(UPDATE_MODES)}, "
            f"got '{update_mode}'"
        )

    files = normalize_test_files(test_files)
    log.info("run_tests invoked", test_files=files, update_mode=update_mode)
    report = await RunOrchestrator(server_config, runner, files, watch=update_mode == "watch").run()
    if not report.ok:
        raise ToolError(f"Error: {report.error}")
    return report.to_json()


async def handle_watch_tests(
    server_config: ServerConfig,
    runner: TestRunner,
    test_files: str | Sequence[str] | None = None,
) -> str:
    files = normalize_test_files(test_files)
    log.info("watch_tests invoked", test_files=files)
    report = await WatchOrchestrator(server_config, runner, files).run()
    if not report.ok:
        raise ToolError(f"Error: {report.error}")
    return report.message


# 🔼⚙️
