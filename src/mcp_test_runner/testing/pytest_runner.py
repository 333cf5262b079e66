#
# src/mcp_test_runner/testing/pytest_runner.py
#
"""
Runs pytest in a child process and reads back the tree written by the bundled
report plugin.
"""

import glob
import json
import os
import shutil
import sys
from pathlib import Path
from typing import Any

import structlog

import mcp_test_runner
from mcp_test_runner.config import SessionConfig
from mcp_test_runner.telemetry import StructLogger
from mcp_test_runner.testing.subprocess_runner import DEBOUNCE_DELAY, SubprocessTestRunner

log: StructLogger = structlog.get_logger("testing.pytest")

# The plugin is copied into each session's scratch directory under this name, and only
# that directory goes on the child's PYTHONPATH.
PLUGIN_MODULE = "mcp_test_runner_report"
PLUGIN_SOURCE = Path(mcp_test_runner.__file__).resolve().parent / "pytest_plugin.py"
# Must match the option registered by the plugin; the plugin itself is never imported here.
REPORT_OPTION = "--mcp-report"
# 0: all passed, 1: some failed, 2: interrupted (e.g. collection errors), 5: nothing collected.
PYTEST_EXIT_CODES = frozenset({0, 1, 2, 5})


def resolve_targets(root: Path, patterns: tuple[str, ...]) -> list[str]:
    """
    Resolves include patterns to paths under `root`, keeping pattern order.

    Glob patterns are expanded; literal paths are kept if they exist (a pytest
    node id such as `tests/test_a.py::test_x` is kept when its file exists).
    Patterns that match nothing are dropped.
    """
    targets: list[str] = []
    for pattern in patterns:
        if glob.has_magic(pattern):
            matches = sorted(glob.glob(pattern, root_dir=root, recursive=True))
            if not matches:
                log.debug("Include pattern matched nothing", pattern=pattern)
            targets.extend(m for m in matches if m not in targets)
            continue

        file_part = pattern.split("::", 1)[0]
        if (root / file_part).exists():
            if pattern not in targets:
                targets.append(pattern)
        else:
            log.debug("Include path does not exist", pattern=pattern)
    return targets


class PytestRunner(SubprocessTestRunner):
    """Implements the TestRunner protocol for pytest."""

    name = "pytest"
    accepted_exit_codes = PYTEST_EXIT_CODES

    def __init__(self, python: str | None = None, debounce_delay: float = DEBOUNCE_DELAY):
        super().__init__(debounce_delay=debounce_delay)
        self.python = python or sys.executable

    @property
    def executable(self) -> str:
        return self.python

    def prepare_workdir(self, workdir: Path) -> None:
        shutil.copyfile(PLUGIN_SOURCE, workdir / f"{PLUGIN_MODULE}.py")

    def build_command(self, config: SessionConfig, report_path: Path) -> list[str] | None:
        targets: list[str] = []
        if config.include:
            targets = resolve_targets(config.root, config.include)
            if not targets:
                return None

        command = [
            self.python,
            "-m",
            "pytest",
            "-p",
            PLUGIN_MODULE,
            f"{REPORT_OPTION}={report_path}",
            "-p",
            "no:cacheprovider",
            # One file failing to import must not stop the rest from running.
            "--continue-on-collection-errors",
        ]
        if config.silent:
            command.extend(["-q", "--no-header", "--color=no"])
        command.extend(targets)
        return command

    def build_env(self, config: SessionConfig, workdir: Path) -> dict[str, str]:
        env = super().build_env(config, workdir)
        existing = env.get("PYTHONPATH")
        env["PYTHONPATH"] = os.pathsep.join([str(workdir), existing]) if existing else str(workdir)
        env["PYTHONDONTWRITEBYTECODE"] = "1"
        return env

    def parse_report(self, report_path: Path, root: Path) -> list[Any]:
        data = json.loads(report_path.read_text(encoding="utf-8"))
        files = data.get("files") if isinstance(data, dict) else None
        if not isinstance(files, list):
            raise ValueError("report has no 'files' list")
        return files


# 🔼⚙️
