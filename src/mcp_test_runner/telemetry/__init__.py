#
# src/mcp_test_runner/telemetry/__init__.py
#
"""
Logging setup for mcp-test-runner.
"""

from .logger import StructLogger, setup_logging

__all__ = ["StructLogger", "setup_logging"]

# 🔼⚙️
