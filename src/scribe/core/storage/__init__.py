"""Persisted REPL state backends."""

from scribe.core.storage.base import (
    BUFFER_SIZE_KEY,
    COMMAND_HISTORY_KEY,
    DEFAULT_BUFFER_SIZE,
    Storage,
    StorageError,
    load_buffer_size,
    load_command_history,
    save_buffer_size,
    save_command_history,
)
from scribe.core.storage.json_store import JSONStorage, get_default_storage_path
from scribe.core.storage.memory import MemoryStorage

__all__ = [
    "BUFFER_SIZE_KEY",
    "COMMAND_HISTORY_KEY",
    "DEFAULT_BUFFER_SIZE",
    "JSONStorage",
    "MemoryStorage",
    "Storage",
    "StorageError",
    "get_default_storage_path",
    "load_buffer_size",
    "load_command_history",
    "save_buffer_size",
    "save_command_history",
]
