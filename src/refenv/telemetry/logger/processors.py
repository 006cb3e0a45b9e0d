# src/refenv/telemetry/logger/processors.py

"""
structlog processors shared by every renderer.
"""

import logging
from typing import Any

from structlog.typing import EventDict, WrappedLogger

LOG_EMOJIS: dict[int | str, str] = {
    logging.DEBUG: "🐛",
    logging.INFO: "ℹ️",
    logging.WARNING: "⚠️",
    logging.ERROR: "❌",
    logging.CRITICAL: "💥",
    "parse": "🔎",
    "run": "▶️",
    "pass": "✅",
    "fail": "🚫",
    "config": "📄",
    "general": "➡️",
}


def add_emoji_processor(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Prefixes the event with an emoji picked by `emoji_key` or by level."""
    key: Any = event_dict.get("emoji_key")
    if key is None:
        key = logging.getLevelName(event_dict.get("level", "info").upper())
    emoji = LOG_EMOJIS.get(key, LOG_EMOJIS["general"])
    event = event_dict.get("event")
    if isinstance(event, str):
        event_dict["event"] = f"{emoji} {event}"
    return event_dict


def remove_extra_keys_processor(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.pop("emoji_key", None)
    return event_dict

# 🔼⚙️
