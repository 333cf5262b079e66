#
# src/mcp_test_runner/telemetry/logger/__init__.py
#
from .base import BASE_LOGGER_NAME, LOG_EMOJIS, StructLogger, setup_logging

__all__ = ["BASE_LOGGER_NAME", "LOG_EMOJIS", "StructLogger", "setup_logging"]

# 🔼⚙️
