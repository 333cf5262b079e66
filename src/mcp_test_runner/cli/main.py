# src/mcp_test_runner/cli/main.py

"""
Main CLI entry point for mcp-test-runner using Click.
"""

from pathlib import Path

import click
import structlog

from mcp_test_runner import __version__
from mcp_test_runner.cli.utils import logging_options, setup_logging_from_context
from mcp_test_runner.config import ServerConfig
from mcp_test_runner.exceptions import ConfigurationError
from mcp_test_runner.server import create_server
from mcp_test_runner.telemetry import StructLogger
from mcp_test_runner.testing import RUNNER_MAP

log: StructLogger = structlog.get_logger("cli.main")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-V", "--version", package_name="mcp-test-runner")
@click.argument(
    "project_dir",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, resolve_path=True, path_type=Path),
)
@click.option(
    "-r",
    "--runner",
    type=click.Choice(sorted(RUNNER_MAP), case_sensitive=False),
    default="pytest",
    show_default=True,
    envvar="MCP_TEST_RUNNER",
    show_envvar=True,
    help="Test runner used to execute the project's tests.",
)
@click.option(
    "--python",
    type=str,
    default=None,
    envvar="MCP_TEST_RUNNER_PYTHON",
    help="Interpreter that runs pytest (defaults to the current one).",
)
@click.option(
    "--drain-delay",
    type=click.FloatRange(min=0),
    default=0.1,
    show_default=True,
    help="Seconds to wait after a run completes before collecting results.",
)
@click.option(
    "--debounce-delay",
    type=click.FloatRange(min=0),
    default=0.25,
    show_default=True,
    help="Seconds to wait for file changes to settle before a watch re-run.",
)
@click.option(
    "--transport",
    type=click.Choice(["stdio", "sse"]),
    default="stdio",
    show_default=True,
    help="MCP transport.",
)
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address for the sse transport.")
@click.option("--port", type=int, default=8978, show_default=True, help="Port for the sse transport.")
@logging_options
@click.pass_context
def cli(
    ctx: click.Context,
    project_dir: Path,
    runner: str,
    python: str | None,
    drain_delay: float,
    debounce_delay: float,
    transport: str,
    host: str,
    port: int,
    log_level: str | None,
    log_file: str | None,
    json_logs: bool | None,
):
    """
    Serve PROJECT_DIR's test suite to MCP clients.

    Exposes two tools: run_tests (run once, return one JSON record per test
    case) and watch_tests (re-run on every file change).
    """
    ctx.ensure_object(dict)
    ctx.obj["LOG_LEVEL"] = log_level
    ctx.obj["LOG_FILE"] = log_file
    ctx.obj["JSON_LOGS"] = json_logs if json_logs is not None else False
    setup_logging_from_context(ctx)

    try:
        server_config = ServerConfig(
            project_dir=project_dir,
            runner=runner.lower(),
            python=python,
            drain_delay=drain_delay,
            debounce_delay=debounce_delay,
            log_level=log_level or "WARNING",
        )
        mcp = create_server(server_config)
    except (ConfigurationError, ValueError) as e:
        log.critical("Invalid server configuration", error=str(e))
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    log.info(
        "Starting MCP server",
        emoji_key="start",
        project_dir=str(project_dir),
        runner=server_config.runner,
        transport=transport,
    )
    try:
        if transport == "sse":
            mcp.run(transport="sse", host=host, port=port)
        else:
            mcp.run(transport="stdio")
    except Exception as e:
        log.critical("Fatal error running server", error=str(e), exc_info=True)
        click.echo(f"Fatal error running server: {e}", err=True)
        ctx.exit(1)


if __name__ == "__main__":
    cli()

# 🖥️⚙️
