#
# config/__init__.py
#
"""
Configuration handling sub-package for mcp-test-runner.
"""

from .models import ServerConfig, SessionConfig

__all__ = [
    "ServerConfig",
    "SessionConfig",
]

# 🔼⚙️
