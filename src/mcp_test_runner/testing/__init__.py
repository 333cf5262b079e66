#
# src/mcp_test_runner/testing/__init__.py
#
"""
Test runner adapters: sessions that drive an external runner and expose its
results as a reported-entity tree.
"""
from .factory import RUNNER_MAP, get_test_runner
from .protocols import RunSession, TestRunner
from .pytest_runner import PytestRunner
from .subprocess_runner import SubprocessSession, SubprocessTestRunner
from .vitest_runner import VitestRunner

__all__ = [
    "RUNNER_MAP",
    "PytestRunner",
    "RunSession",
    "SubprocessSession",
    "SubprocessTestRunner",
    "TestRunner",
    "VitestRunner",
    "get_test_runner",
]

# 🔼⚙️
