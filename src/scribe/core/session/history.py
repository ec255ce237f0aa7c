"""Bounded, persisted command history with previous/next navigation."""

from __future__ import annotations

import logging

from scribe.core.storage.base import (
    DEFAULT_BUFFER_SIZE,
    Storage,
    load_buffer_size,
    load_command_history,
    save_buffer_size,
    save_command_history,
)

logger = logging.getLogger(__name__)


class HistoryBuffer:
    """Expressions entered in a REPL flavor, oldest first.

    The cursor ranges over ``[0, len(commands)]``; ``len(commands)``
    means no historical command is selected (the empty input slot).

    Storage is read once on ``load()`` and written back on every
    mutation. Entries beyond the buffer size are trimmed lazily on the
    next ``add()``, including any excess found in storage.

    Example:
        >>> history = HistoryBuffer("Python REPL", MemoryStorage())
        >>> history.buffer_size = 2
        >>> for expr in ("a", "b", "c"):
        ...     history.add(expr)
        >>> history.commands
        ['b', 'c']
        >>> history.previous()
        'c'
    """

    def __init__(
        self,
        title: str,
        storage: Storage,
        default_buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        self.title = title
        self._storage = storage
        self._default_buffer_size = default_buffer_size
        self.commands: list[str] = []
        self.cursor = 0
        self._buffer_size = default_buffer_size
        self.load()

    def load(self) -> None:
        """(Re)read commands and buffer size from storage."""
        self.commands = load_command_history(self._storage, self.title)
        self._buffer_size = load_buffer_size(self._storage, self._default_buffer_size)
        self.cursor = len(self.commands)

    @property
    def buffer_size(self) -> int:
        """How many commands will be stored in command history."""
        return self._buffer_size

    @buffer_size.setter
    def buffer_size(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"Buffer size must be non-negative, got {size}")
        self._buffer_size = size
        save_buffer_size(self._storage, size)
        logger.info("History buffer size set to %d", size)

    def add(self, expr: str) -> None:
        """Append a command, evicting the oldest beyond the buffer size."""
        self.commands.append(expr)
        overflow = len(self.commands) - self._buffer_size
        if overflow > 0:
            del self.commands[:overflow]
        self.cursor = len(self.commands)
        save_command_history(self._storage, self.title, self.commands)

    def previous(self) -> str | None:
        """The command before the one currently selected.

        Returns:
            The command, or None at the oldest entry or when empty.
        """
        if self.commands and self.cursor > 0:
            self.cursor -= 1
            return self.commands[self.cursor]
        return None

    def next(self) -> str | None:
        """The command after the one currently selected.

        Returns:
            The command, or None after snapping back to the input slot.
        """
        if self.cursor + 1 < len(self.commands):
            self.cursor += 1
            return self.commands[self.cursor]
        self.cursor = len(self.commands)
        return None

    def clear(self) -> None:
        """Empty the persisted bucket for this title and reload."""
        save_command_history(self._storage, self.title, [])
        self.load()

    def __len__(self) -> int:
        return len(self.commands)
