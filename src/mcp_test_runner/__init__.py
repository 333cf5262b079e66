#
# src/mcp_test_runner/__init__.py
#
"""
mcp-test-runner: run a project's tests on behalf of an MCP client and report
flat, machine-readable outcomes.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("mcp-test-runner")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = ["__version__"]

# 🔼⚙️
