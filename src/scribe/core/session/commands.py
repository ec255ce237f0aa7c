"""Special REPL commands and their dispatch.

Special commands are handled by the engine itself instead of being sent
to the evaluator:

    clear         Wipe the whole transcript down to a bare prompt
    reset         Restore the preamble and empty the persisted history
    help          Show the help block
    buffer        Show the history buffer size
    buffer <int>  Set the history buffer size

``buffer`` followed by anything other than digits is not special and
falls through to the evaluator.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scribe.core.session.engine import SessionEngine

logger = logging.getLogger(__name__)

# Display table for the help block
SPECIAL_COMMANDS: dict[str, str] = {
    "clear": "Clear command output",
    "reset": "Reset REPL to initial state and clear all command history",
    "help": "Display the help dialog",
    "buffer": "Displays command history buffer size",
    "buffer [int]": "Sets command history buffer size",
}

BUFFER_SIZE_PATTERN = re.compile(r"buffer (\d+)", re.ASCII)

# Type alias for command handlers
CommandHandler = Callable[["SessionEngine"], None]


class SpecialCommandNotFoundError(RuntimeError):
    """Router entered for an expression no handler accepts.

    Signals a bug in the dispatch guard, never a user error.
    """

    pass


# =============================================================================
# Command Handlers
#
# Handlers run with the engine lock held, so they use the engine's
# unlocked internals. Each one leaves the transcript ready for input.
# =============================================================================


def cmd_clear(engine: SessionEngine) -> None:
    """Handle 'clear' - discard the entire transcript."""
    engine._clear_history()


def cmd_reset(engine: SessionEngine) -> None:
    """Handle 'reset' - preamble only, empty persisted history."""
    engine._reset_history()


def cmd_help(engine: SessionEngine) -> None:
    """Handle 'help'."""
    engine._append_to_history(engine.help())


def cmd_buffer(engine: SessionEngine) -> None:
    """Handle 'buffer' - report the history buffer size."""
    engine._append_to_history(f"Current buffer size is {engine.history.buffer_size}")


def cmd_set_buffer(engine: SessionEngine, size: int) -> None:
    """Handle 'buffer <int>' - set and persist the history buffer size."""
    engine.history.buffer_size = size
    engine._append_to_history(f"Buffer size set to {engine.history.buffer_size}")


# =============================================================================
# Command Registry
# =============================================================================

COMMANDS: dict[str, CommandHandler] = {
    "clear": cmd_clear,
    "reset": cmd_reset,
    "help": cmd_help,
    "buffer": cmd_buffer,
}


class CommandRouter:
    """Recognizes special commands and routes them to handlers."""

    def __init__(
        self,
        commands: dict[str, CommandHandler] | None = None,
        descriptions: dict[str, str] | None = None,
    ) -> None:
        self.commands = dict(COMMANDS if commands is None else commands)
        self.descriptions = dict(SPECIAL_COMMANDS if descriptions is None else descriptions)

    def is_special(self, expr: str) -> bool:
        """Whether ``expr`` bypasses the evaluator."""
        return expr in self.commands or BUFFER_SIZE_PATTERN.fullmatch(expr) is not None

    def dispatch(self, engine: SessionEngine, expr: str) -> None:
        """Run the handler for a special command.

        Raises:
            SpecialCommandNotFoundError: If no handler accepts ``expr``.
        """
        handler = self.commands.get(expr)
        if handler is not None:
            logger.debug("Special command: %s", expr)
            handler(engine)
            return

        match = BUFFER_SIZE_PATTERN.fullmatch(expr)
        if match:
            cmd_set_buffer(engine, int(match.group(1)))
            return

        raise SpecialCommandNotFoundError(f"Special REPL command not found: {expr}")
