"""Interactive terminal loop driving a SessionEngine."""

from __future__ import annotations

import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.document import Document
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.key_binding.key_processor import KeyPressEvent
from rich.console import Console

from scribe.core.session.engine import SessionEngine
from scribe.frontends.cli.repl.display import TranscriptView
from scribe.frontends.cli.repl.themes import get_theme

logger = logging.getLogger(__name__)


def replace_input(buffer: Buffer, text: str) -> None:
    """Replace the line being edited, cursor at the end."""
    buffer.document = Document(text, cursor_position=len(text))


def build_key_bindings(engine: SessionEngine) -> KeyBindings:
    """Up/Down walk the engine's command history instead of prompt_toolkit's."""
    kb = KeyBindings()

    @kb.add("up")
    def recall_previous(event: KeyPressEvent) -> None:
        command = engine.previous_command()
        if command is not None:
            replace_input(event.current_buffer, command)

    @kb.add("down")
    def recall_next(event: KeyPressEvent) -> None:
        command = engine.next_command()
        replace_input(event.current_buffer, command or "")

    return kb


async def run_interactive(
    engine: SessionEngine,
    console: Console | None = None,
    theme_name: str = "default",
) -> None:
    """Run the REPL until EOF (Ctrl-D).

    Every Enter commits, blank lines included, so they are recorded in
    history like any other input.

    Args:
        engine: Session to drive.
        console: Output console (default: themed stdout console).
        theme_name: Theme used when creating the console.
    """
    if console is None:
        console = Console(theme=get_theme(theme_name), highlight=False)

    view = TranscriptView(engine, console)
    engine.add_listener(view.on_change)

    prompt_session: PromptSession[str] = PromptSession(
        key_bindings=build_key_bindings(engine),
    )

    view.render_initial()

    try:
        while True:
            try:
                line = await prompt_session.prompt_async(engine.prompt + " ")
            except KeyboardInterrupt:
                # Ctrl-C at prompt - drop the line and continue
                continue
            except EOFError:
                console.print()
                break

            try:
                view.submit(line)
            except KeyboardInterrupt:
                logger.debug("Evaluation interrupted: %r", line)
                engine.append_to_history("Interrupted")
    finally:
        engine.remove_listener(view.on_change)
