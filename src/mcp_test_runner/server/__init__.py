#
# src/mcp_test_runner/server/__init__.py
#
"""
MCP request surface.
"""

from .app import SERVER_NAME, create_server
from .tools import handle_run_tests, handle_watch_tests, normalize_test_files

__all__ = [
    "SERVER_NAME",
    "create_server",
    "handle_run_tests",
    "handle_watch_tests",
    "normalize_test_files",
]

# 🔼⚙️
