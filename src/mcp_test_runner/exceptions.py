# src/mcp_test_runner/exceptions.py

"""
Exception hierarchy for mcp-test-runner.
"""


class McpTestRunnerError(Exception):
    """Base class for all errors raised by mcp-test-runner."""

    pass


class ConfigurationError(McpTestRunnerError):
    """Invalid server or session configuration."""

    pass


class RunnerError(McpTestRunnerError):
    """Base class for errors raised while driving an external test runner."""

    def __init__(
        self,
        message: str,
        runner: str | None = None,
        details: Exception | None = None,
    ):
        self.runner = runner
        self.details = details
        super().__init__(message)
        if details and hasattr(self, "add_note"):
            self.add_note(f"Original error: {type(details).__name__}: {details}")


class RunnerStartError(RunnerError):
    """The runner could not be initialised or returned no usable session."""

    pass


class RunnerExecutionError(RunnerError):
    """The runner process ran but did not produce a usable report."""

    pass


# 🔼⚙️
