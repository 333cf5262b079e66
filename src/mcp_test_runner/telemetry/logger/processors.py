# src/mcp_test_runner/telemetry/logger/processors.py

"""
Custom structlog processors shared by every renderer.
"""

import logging

from structlog.typing import EventDict, WrappedLogger

# Keys that only make sense to the processors below and must not be rendered.
_INTERNAL_KEYS = ("emoji_key",)


def add_emoji_processor(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Prefix the event with an emoji chosen by `emoji_key` or by log level."""
    from .base import LOG_EMOJIS

    emoji_key = event_dict.get("emoji_key")
    if emoji_key is not None and emoji_key in LOG_EMOJIS:
        emoji = LOG_EMOJIS[emoji_key]
    else:
        level_name = str(event_dict.get("level", method_name)).upper()
        emoji = LOG_EMOJIS.get(logging.getLevelName(level_name), LOG_EMOJIS["general"])

    event = event_dict.get("event")
    if isinstance(event, str):
        event_dict["event"] = f"{emoji} {event}"
    return event_dict


def remove_extra_keys_processor(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Drop processor-internal keys before rendering."""
    for key in _INTERNAL_KEYS:
        event_dict.pop(key, None)
    return event_dict


# 🔼⚙️
