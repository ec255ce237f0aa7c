"""REPL session state: transcript, command history and dispatch.

Classes:
    SessionEngine: Aggregate root driven by commit/evaluate/navigation.
    Transcript: Append-only rendered text with an input offset.
    HistoryBuffer: Bounded, persisted command history.
    CommandRouter: Special command recognition and dispatch.
"""

from scribe.core.session.commands import (
    SPECIAL_COMMANDS,
    CommandRouter,
    SpecialCommandNotFoundError,
)
from scribe.core.session.engine import CHANGE_EVENT, ChangeListener, SessionEngine
from scribe.core.session.history import HistoryBuffer
from scribe.core.session.transcript import (
    ERROR_MARKER,
    OUTPUT_MARKER,
    Transcript,
    entered_expression,
    help_text,
    initial_preamble,
)

__all__ = [
    "CHANGE_EVENT",
    "ERROR_MARKER",
    "OUTPUT_MARKER",
    "SPECIAL_COMMANDS",
    "ChangeListener",
    "CommandRouter",
    "HistoryBuffer",
    "SessionEngine",
    "SpecialCommandNotFoundError",
    "Transcript",
    "entered_expression",
    "help_text",
    "initial_preamble",
]
