"""Renders a SessionEngine transcript to a rich console.

The prompt and the line being typed are drawn by prompt_toolkit, so the
renderer only prints what the engine appends after them: result and
error lines, help blocks, or a full redraw after ``clear``/``reset``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text

from scribe.core.session.transcript import ERROR_MARKER, OUTPUT_MARKER

if TYPE_CHECKING:
    from rich.console import Console

    from scribe.core.session.engine import SessionEngine


def line_style(line: str, current: str) -> str:
    """Style for a transcript line.

    Lines without a marker continue the style of the line before them,
    so multi-line results and errors stay one color.
    """
    if line.startswith(OUTPUT_MARKER):
        return "transcript.output"
    if line.startswith(ERROR_MARKER):
        return "transcript.error"
    if line.startswith("# "):
        return "transcript.preamble"
    return current


class TranscriptView:
    """Keeps the console in step with the engine transcript.

    Register ``on_change`` as an engine listener.
    """

    def __init__(self, engine: SessionEngine, console: Console) -> None:
        self.engine = engine
        self.console = console
        # Transcript text already visible on screen
        self._shown = ""

    def render_initial(self) -> None:
        self._shown = self.engine.read()
        self._print(self._shown)

    def submit(self, line: str) -> None:
        """Commit a typed line as if appended after the last prompt."""
        contents = self.engine.read() + line
        expr = self.engine.entered_expression(contents)
        # prompt_toolkit already echoed the input line
        self._shown = self.engine.read() + expr + "\n"
        self.engine.commit(contents)

    def on_change(self, event: str) -> None:
        text = self.engine.read()
        if text.startswith(self._shown):
            delta = text[len(self._shown) :]
        else:
            self.console.clear()
            delta = text
        self._shown = text
        self._print(delta)

    def _print(self, delta: str) -> None:
        marker = self.engine.transcript.ready_marker
        if delta.endswith(marker):
            delta = delta[: -len(marker)]
        if delta.endswith("\n"):
            delta = delta[:-1]
        if not delta:
            return

        style = "transcript.input"
        for line in delta.split("\n"):
            style = line_style(line, style)
            self.console.print(Text(line, style=style))
