"""SessionEngine - the state machine behind a REPL view.

Input arrives as the full current transcript text. The engine extracts
the newest expression, records it in the history buffer, routes it to a
special command or the flavor's evaluator, appends the result to the
transcript and notifies change listeners.

Concurrency: every public operation runs to completion under a single
lock. Evaluation is a blocking call into the evaluator; timeouts belong
to the evaluator. Listeners are called synchronously after the lock is
released, so they may call back into the engine.

Example:
    >>> engine = SessionEngine(flavor, MemoryStorage())
    >>> engine.commit(engine.read() + "1 + 1")
    >>> engine.read().endswith("=> 2\\n>> ")
    True
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from scribe.core.flavor import ReplFlavor
from scribe.core.session.commands import CommandRouter
from scribe.core.session.history import HistoryBuffer
from scribe.core.session.transcript import (
    Transcript,
    entered_expression,
    help_text,
    initial_preamble,
)
from scribe.core.storage.base import DEFAULT_BUFFER_SIZE, Storage

logger = logging.getLogger(__name__)

CHANGE_EVENT = "change"

ChangeListener = Callable[[str], None]


class SessionEngine:
    """One REPL session: transcript, command history and dispatch.

    Attributes:
        flavor: Evaluator and static strings of this REPL.
        transcript: Everything displayed to the user.
        history: Persisted, bounded command history for ``flavor.title``.
        router: Special-command recognizer.
        last_output: Most recent successful evaluation result.
    """

    def __init__(
        self,
        flavor: ReplFlavor,
        storage: Storage,
        default_buffer_size: int = DEFAULT_BUFFER_SIZE,
        router: CommandRouter | None = None,
    ) -> None:
        self.flavor = flavor
        self.router = router or CommandRouter()
        self.last_output: str | None = None
        self.transcript = Transcript(prompt=flavor.prompt, text=self.initial_preamble)
        self.history = HistoryBuffer(flavor.title, storage, default_buffer_size)
        self._lock = threading.Lock()
        self._listeners: list[ChangeListener] = []

    # -------------------------------------------------------------------------
    # Flavor configuration
    # -------------------------------------------------------------------------

    @property
    def title(self) -> str:
        return self.flavor.title

    @property
    def prompt(self) -> str:
        return self.flavor.prompt

    @property
    def grammar_name(self) -> str:
        return self.flavor.grammar_name

    @property
    def initial_preamble(self) -> str:
        """Title line, help hint and a prompt."""
        return initial_preamble(self.title, self.prompt)

    @property
    def special_commands(self) -> dict[str, str]:
        return dict(self.router.descriptions)

    def help(self) -> str:
        """What to display when the help command is run."""
        return help_text(self.title, self.router.descriptions)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    def read(self) -> str:
        """The complete transcript."""
        return self.transcript.text

    @property
    def current_offset(self) -> int:
        """Position at which a command can begin."""
        return self.transcript.current_offset

    @property
    def command_history(self) -> list[str]:
        return list(self.history.commands)

    @property
    def command_index(self) -> int:
        return self.history.cursor

    @property
    def command_history_buffer_size(self) -> int:
        return self.history.buffer_size

    @command_history_buffer_size.setter
    def command_history_buffer_size(self, size: int) -> None:
        with self._lock:
            self.history.buffer_size = size

    def exists(self) -> bool:
        """REPLs have no external resource, so they always exist."""
        return True

    def changed(self) -> bool:
        """REPLs never change except through commit."""
        return False

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------

    def add_listener(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify_listeners(self, event: str) -> None:
        for listener in list(self._listeners):
            listener(event)

    # -------------------------------------------------------------------------
    # Public operations
    # -------------------------------------------------------------------------

    def commit(self, contents: str) -> None:
        """Execute the newest statement in the rendered transcript.

        Args:
            contents: Full transcript text with at least one prompt.
        """
        self.evaluate(self.entered_expression(contents))

    def entered_expression(self, contents: str) -> str:
        return entered_expression(contents, self.prompt)

    def evaluate(self, expr: str) -> None:
        """Record ``expr`` and run it as a special command or expression."""
        with self._lock:
            self._evaluate(expr)
        self._notify_listeners(CHANGE_EVENT)

    def previous_command(self) -> str | None:
        with self._lock:
            return self.history.previous()

    def next_command(self) -> str | None:
        with self._lock:
            return self.history.next()

    def add_command(self, expr: str) -> None:
        """Echo ``expr`` into the transcript and record it in history."""
        with self._lock:
            self._add_command(expr)
        self._notify_listeners(CHANGE_EVENT)

    def append_to_history(self, text: str) -> None:
        """Append an output line followed by a fresh prompt."""
        with self._lock:
            self._append_to_history(text)
        self._notify_listeners(CHANGE_EVENT)

    def clear_history(self) -> None:
        with self._lock:
            self._clear_history()
        self._notify_listeners(CHANGE_EVENT)

    def reset_history(self) -> None:
        with self._lock:
            self._reset_history()
        self._notify_listeners(CHANGE_EVENT)

    # -------------------------------------------------------------------------
    # Internals (caller holds the lock)
    # -------------------------------------------------------------------------

    def _evaluate(self, expr: str) -> None:
        self._add_command(expr)

        if self.router.is_special(expr):
            self.router.dispatch(self, expr)
            return

        try:
            result = self.flavor.evaluator.execute(expr)
            self.transcript.append_output(result)
            self.last_output = result
        except (Exception, SystemExit) as e:
            logger.debug("Evaluation failed for %r: %s", expr, e)
            self.transcript.append_error(self.flavor.format_error(e))
        self.transcript.mark_ready()

    def _add_command(self, expr: str) -> None:
        self.transcript.append(expr + "\n")
        self.history.add(expr)

    def _append_to_history(self, text: str) -> None:
        self.transcript.append_output(text)
        self.transcript.mark_ready()

    def _clear_history(self) -> None:
        self.transcript.replace(self.transcript.ready_marker)

    def _reset_history(self) -> None:
        self.transcript.replace(self.initial_preamble)
        self.history.clear()
        logger.info("Reset REPL '%s' and cleared its command history", self.title)
