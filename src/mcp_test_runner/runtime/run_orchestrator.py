# src/mcp_test_runner/runtime/run_orchestrator.py

"""
Drives a single run-mode invocation: configure a session, execute it, wait for
outcomes to settle, flatten them, and always release the runner.
"""

import asyncio
from collections.abc import Sequence
from enum import Enum, auto

import structlog

from mcp_test_runner.config import ServerConfig
from mcp_test_runner.exceptions import RunnerStartError
from mcp_test_runner.results import TestCaseResult, count_statuses, extract
from mcp_test_runner.telemetry import StructLogger
from mcp_test_runner.testing import RunSession, TestRunner

from .reports import RunReport
from .watch_orchestrator import spawn_detached

log: StructLogger = structlog.get_logger("runtime.run_orchestrator")


class RunPhase(Enum):
    """Lifecycle of a run-mode invocation."""

    CONFIGURING = auto()
    STARTING = auto()
    AWAITING_DRAIN = auto()  # Execute call returned, waiting for outcomes to settle.
    COLLECTING = auto()
    CLOSING_RUNNER = auto()
    DONE = auto()
    FAILED = auto()


def collect_results(session: RunSession) -> list[TestCaseResult]:
    """Flattens every file the session reported, preserving file order."""
    results: list[TestCaseResult] = []
    for file_entity in session.reported_files():
        results.extend(extract([file_entity]))
    return results


class RunOrchestrator:
    """
    Owns one run-mode invocation from configuration to teardown.

    With `watch=True` the first execution is collected and returned as usual,
    but the session is then handed to the event loop to keep watching instead
    of being closed.
    """

    def __init__(
        self,
        server_config: ServerConfig,
        runner: TestRunner,
        test_files: Sequence[str] | None = None,
        watch: bool = False,
    ):
        self.server_config = server_config
        self.runner = runner
        self.test_files = test_files
        self.watch = watch
        self.phase = RunPhase.CONFIGURING
        self._log = log.bind(runner=runner.name, test_files=test_files, watch=watch)

    def _enter(self, phase: RunPhase) -> None:
        self._log.debug("Run orchestrator phase change", old=self.phase.name, new=phase.name)
        self.phase = phase

    async def run(self) -> RunReport:
        self._log.info("Run invocation starting.")
        session: RunSession | None = None
        handed_off = False
        report: RunReport

        try:
            self._enter(RunPhase.CONFIGURING)
            session_config = self.server_config.session_config(watch=self.watch, include=self.test_files)

            self._enter(RunPhase.STARTING)
            session = await self.runner.start_session(session_config)
            if session is None:
                raise RunnerStartError(f"Failed to start {self.runner.name}", runner=self.runner.name)

            self._enter(RunPhase.AWAITING_DRAIN)
            await session.start()
            await asyncio.sleep(self.server_config.drain_delay)

            self._enter(RunPhase.COLLECTING)
            results = collect_results(session)
            report = RunReport(results=results)
            self._log.info("Run results collected", emoji_key="pass", statuses=count_statuses(results))

            if self.watch:
                spawn_detached(session, already_started=True)
                handed_off = True
        except Exception as e:
            self._log.error("Run invocation failed", error=str(e), phase=self.phase.name)
            self._enter(RunPhase.FAILED)
            report = RunReport(error=str(e))
        finally:
            if session is not None and not handed_off:
                await self._close(session)

        if report.ok:
            self._enter(RunPhase.DONE)
        return report

    async def _close(self, session: RunSession) -> None:
        if self.phase is not RunPhase.FAILED:
            self._enter(RunPhase.CLOSING_RUNNER)
        try:
            await session.close()
        except Exception as e:
            self._log.warning("Failed to close runner session", error=str(e))


# 🔼⚙️
