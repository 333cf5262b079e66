#
# config/models.py
#
"""
Attrs-based data models for mcp-test-runner configuration.
"""

import logging
from pathlib import Path
from typing import Any

from attrs import define, field


# --- Validators ---
def _validate_log_level(inst: Any, attr: Any, value: str) -> None:
    """Validator for standard logging level names."""
    valid = logging._nameToLevel.keys()
    if value.upper() not in valid:
        raise ValueError(f"Invalid log_level '{value}'. Must be one of {list(valid)}.")


def _validate_non_negative(inst: Any, attr: Any, value: float) -> None:
    """Validator ensures a number is zero or positive."""
    if isinstance(value, bool) or not isinstance(value, int | float) or value < 0:
        raise ValueError(f"Field '{attr.name}' must be a non-negative number, got {value!r}")


def _validate_absolute_path(inst: Any, attr: Any, value: Path) -> None:
    if not value.is_absolute():
        raise ValueError(f"Field '{attr.name}' must be an absolute path, got '{value}'")


def _to_include(value: Any) -> tuple[str, ...] | None:
    """Normalise an include filter: a string is a one-element filter, empty means none."""
    if value is None:
        return None
    if isinstance(value, str):
        return (value,) if value else None
    patterns = tuple(str(item) for item in value)
    return patterns or None


# --- Session configuration ---
@define(frozen=True, slots=True)
class SessionConfig:
    """
    Immutable settings for one runner session.

    Built fresh for every tool invocation and owned by the orchestrator that
    created it.
    """

    root: Path = field(validator=_validate_absolute_path)
    watch: bool = field(default=False)
    include: tuple[str, ...] | None = field(default=None, converter=_to_include)
    silent: bool = field(default=True)


# --- Server configuration ---
@define(frozen=True, slots=True)
class ServerConfig:
    """Process-wide settings resolved once at startup."""

    project_dir: Path = field(validator=_validate_absolute_path)
    runner: str = field(default="pytest")
    python: str | None = field(default=None)
    drain_delay: float = field(default=0.1, validator=_validate_non_negative)
    debounce_delay: float = field(default=0.25, validator=_validate_non_negative)
    log_level: str = field(default="WARNING", validator=_validate_log_level)

    def session_config(self, *, watch: bool, include: Any = None) -> SessionConfig:
        """Build the per-invocation session settings rooted at the project directory."""
        return SessionConfig(root=self.project_dir, watch=watch, include=include)


# 🔼⚙️
