# src/mcp_test_runner/runtime/watch_orchestrator.py

"""
Starts long-lived watch sessions and hands them off to the event loop.
"""

import asyncio
from collections.abc import Sequence
from enum import Enum, auto

import structlog

from mcp_test_runner.config import ServerConfig
from mcp_test_runner.exceptions import RunnerStartError
from mcp_test_runner.results import count_statuses
from mcp_test_runner.telemetry import StructLogger
from mcp_test_runner.testing import RunSession, TestRunner

from .reports import WatchReport

log: StructLogger = structlog.get_logger("runtime.watch_orchestrator")

WATCH_STARTED_MESSAGE = "Test watch mode started. Tests will run automatically on file changes."

# Strong references to detached session tasks; the event loop itself only keeps weak ones.
_detached_tasks: set[asyncio.Task] = set()


class WatchPhase(Enum):
    """Lifecycle of a watch-mode invocation."""

    CONFIGURING = auto()
    STARTING = auto()
    RUNNING = auto()  # Detached: the session now belongs to the event loop.
    FAILED = auto()


async def _run_detached(session: RunSession, already_started: bool) -> None:
    session_log = log.bind(root=str(session.config.root))
    try:
        if not already_started:
            try:
                await session.start()
                session_log.info(
                    "Initial watch run complete",
                    emoji_key="watch",
                    statuses=count_statuses(session.last_results),
                )
            except Exception as e:
                # A failed initial run still leaves the watch loop running.
                session_log.error("Initial watch run failed", error=str(e))
        await session.watch()
    except asyncio.CancelledError:
        session_log.info("Detached watch session cancelled.")
        raise
    except Exception:
        session_log.exception("Detached watch session stopped with an error.")


def spawn_detached(session: RunSession, already_started: bool = False) -> asyncio.Task:
    """
    Runs the session's watch loop as a fire-and-forget task.

    There is no join point: the task lives until the session is closed or the
    process exits. Nothing in this package closes it.
    """
    task = asyncio.create_task(_run_detached(session, already_started))
    _detached_tasks.add(task)
    task.add_done_callback(_detached_tasks.discard)
    return task


def detached_task_count() -> int:
    return len(_detached_tasks)


class WatchOrchestrator:
    """Owns one watch-mode invocation: configure, start, detach."""

    def __init__(
        self,
        server_config: ServerConfig,
        runner: TestRunner,
        test_files: Sequence[str] | None = None,
    ):
        self.server_config = server_config
        self.runner = runner
        self.test_files = test_files
        self.phase = WatchPhase.CONFIGURING
        self.task: asyncio.Task | None = None
        self._log = log.bind(runner=runner.name, test_files=test_files)

    def _enter(self, phase: WatchPhase) -> None:
        self._log.debug("Watch orchestrator phase change", old=self.phase.name, new=phase.name)
        self.phase = phase

    async def run(self) -> WatchReport:
        self._log.info("Watch invocation starting.")
        try:
            self._enter(WatchPhase.CONFIGURING)
            session_config = self.server_config.session_config(watch=True, include=self.test_files)

            self._enter(WatchPhase.STARTING)
            session = await self.runner.start_session(session_config)
            if session is None:
                raise RunnerStartError(f"Failed to start {self.runner.name}", runner=self.runner.name)

            self.task = spawn_detached(session)
            self._enter(WatchPhase.RUNNING)
        except Exception as e:
            self._log.error("Watch invocation failed", error=str(e))
            self._enter(WatchPhase.FAILED)
            return WatchReport(error=str(e))

        self._log.info("Watch session detached.", emoji_key="watch")
        return WatchReport(message=WATCH_STARTED_MESSAGE)


# 🔼⚙️
