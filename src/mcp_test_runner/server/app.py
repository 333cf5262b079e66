# src/mcp_test_runner/server/app.py

"""
FastMCP server exposing the run_tests and watch_tests tools.
"""

from typing import Literal

import structlog
from fastmcp import FastMCP
from pydantic import Field

from mcp_test_runner.config import ServerConfig
from mcp_test_runner.telemetry import StructLogger
from mcp_test_runner.testing import TestRunner, get_test_runner

from .tools import handle_run_tests, handle_watch_tests

log: StructLogger = structlog.get_logger("server.app")

SERVER_NAME = "mcp-test-runner"


def create_server(server_config: ServerConfig, runner: TestRunner | None = None) -> FastMCP:
    """
    Builds the MCP server for one project directory.

    Every tool call opens its own runner session rooted at
    `server_config.project_dir`.
    """
    if runner is None:
        runner = get_test_runner(
            server_config.runner,
            python=server_config.python,
            debounce_delay=server_config.debounce_delay,
        )

    mcp = FastMCP(
        SERVER_NAME,
        instructions=(
            f"Runs the {runner.name} test suite of the project at {server_config.project_dir} "
            "and reports one JSON record per test case."
        ),
    )

    @mcp.tool(
        name="run_tests",
        description=f"""Run {runner.name} tests for the project. Can run specific test files or all tests.

        Returns a JSON array with one object per test case: name, status and,
        for failures, error.message and error.stack.

        Args:
            testFiles: Optional test file or array of test files to run
            updateMode: "run" to run once (default) or "watch" to keep re-running on changes
        """,
    )
    async def run_tests(
        testFiles: str | list[str] | None = Field(  # noqa: N803
            None, description="Optional test file or array of test files to run"
        ),
        updateMode: Literal["run", "watch"] = Field(  # noqa: N803
            "run", description="Whether to run once or watch for changes"
        ),
    ) -> str:
        return await handle_run_tests(server_config, runner, testFiles, updateMode)

    @mcp.tool(
        name="watch_tests",
        description="""Watch test files and run them automatically on changes.

        Returns immediately with an acknowledgement; no test results.

        Args:
            testFiles: Optional test file or array of test files to watch
        """,
    )
    async def watch_tests(
        testFiles: str | list[str] | None = Field(  # noqa: N803
            None, description="Optional test file or array of test files to watch"
        ),
    ) -> str:
        return await handle_watch_tests(server_config, runner, testFiles)

    log.debug("MCP server created", runner=runner.name, project_dir=str(server_config.project_dir))
    return mcp


# 🔼⚙️
