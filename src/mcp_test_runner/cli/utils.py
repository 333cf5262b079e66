# src/mcp_test_runner/cli/utils.py

import logging

import click
import structlog

from mcp_test_runner.telemetry.logger import setup_logging as core_setup_logging

log = structlog.get_logger("cli.utils")

LOG_LEVEL_CHOICES = click.Choice(list(logging._nameToLevel.keys()), case_sensitive=False)


def logging_options(f):
    """Decorator to add logging options to any command."""
    f = click.option(
        "-l",
        "--log-level",
        type=LOG_LEVEL_CHOICES,
        default=None,
        envvar="MCP_TEST_RUNNER_LOG_LEVEL",
        help="Set the logging level.",
    )(f)
    f = click.option(
        "--log-file",
        type=click.Path(dir_okay=False, writable=True, resolve_path=True),
        default=None,
        envvar="MCP_TEST_RUNNER_LOG_FILE",
        help="Path to write logs to a file (JSON format).",
    )(f)
    f = click.option(
        "--json-logs",
        is_flag=True,
        default=None,
        envvar="MCP_TEST_RUNNER_JSON_LOGS",
        help="Output console logs (stderr) as JSON.",
    )(f)
    return f


def setup_logging_from_context(ctx: click.Context, default_log_level: str = "WARNING") -> None:
    """
    Setup logging from the options stored on the click context.
    """
    ctx.ensure_object(dict)
    log_level_str = ctx.obj.get("LOG_LEVEL") or default_log_level
    log_file_path = ctx.obj.get("LOG_FILE")
    use_json_logs = ctx.obj.get("JSON_LOGS", False)

    numeric_level = logging.getLevelName(log_level_str.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
        log_level_str = "INFO"

    core_setup_logging(
        level=numeric_level,
        json_logs=bool(use_json_logs),
        log_file=log_file_path,
    )

    log.debug(
        "CLI logging initialized via utils",
        level=log_level_str,
        file=log_file_path or "stderr",
        json=use_json_logs,
    )

# ⚙️🛠️
