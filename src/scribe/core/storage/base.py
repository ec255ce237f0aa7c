"""Storage interface for persisted REPL state.

Only command history persists across sessions. Two keys are used:

    command_history              -> {title: [expr, ...]}
    command_history_buffer_size  -> int

Per-title history lives inside a single mapping, so every write is a
read-modify-write of that mapping that leaves other titles untouched.
There is no transaction spanning both keys.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

COMMAND_HISTORY_KEY = "command_history"
BUFFER_SIZE_KEY = "command_history_buffer_size"

DEFAULT_BUFFER_SIZE = 1000


class StorageError(Exception):
    """Error reading or writing persisted REPL state."""

    pass


@runtime_checkable
class Storage(Protocol):
    """Key/value store backing command histories."""

    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...


def load_command_history(storage: Storage, title: str) -> list[str]:
    """Read the command history bucket for a title.

    Returns a fresh list; mutating it does not touch storage.
    """
    buckets = storage.get(COMMAND_HISTORY_KEY) or {}
    return list(buckets.get(title) or [])


def save_command_history(storage: Storage, title: str, commands: list[str]) -> None:
    """Replace the command history bucket for a title."""
    buckets = dict(storage.get(COMMAND_HISTORY_KEY) or {})
    buckets[title] = list(commands)
    storage.set(COMMAND_HISTORY_KEY, buckets)


def load_buffer_size(storage: Storage, default: int = DEFAULT_BUFFER_SIZE) -> int:
    """Read the global history buffer size, falling back to ``default``."""
    value = storage.get(BUFFER_SIZE_KEY)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid stored buffer size: %r", value)
        return default


def save_buffer_size(storage: Storage, size: int) -> None:
    """Persist the global history buffer size."""
    storage.set(BUFFER_SIZE_KEY, size)
