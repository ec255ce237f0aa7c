"""Transcript construction and expression extraction.

The transcript is everything the user sees: the preamble, each prompt,
the echoed input and the ``=> ``/``x> `` result lines. At rest it always
ends with ``<prompt> `` so the session is ready for the next expression.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field

OUTPUT_MARKER = "=> "
ERROR_MARKER = "x> "


def initial_preamble(title: str, prompt: str) -> str:
    """What to display when the REPL is opened."""
    return f"# {title}\n# type 'help' for help\n\n{prompt} "


def help_text(title: str, commands: Mapping[str, str]) -> str:
    """What to display when the help command is run.

    Args:
        title: REPL title.
        commands: Special command -> description.

    Returns:
        Help block, one ``<cmd> : <description>`` line per command.
    """
    lines = [
        f"Hello! I am a {title}. I am here to assist you in exploring language APIs.\n\n"
        "Commands:\n"
    ]
    for cmd, description in commands.items():
        lines.append(f"{cmd} : {description}\n")
    return "".join(lines)


def entered_expression(contents: str, prompt: str) -> str:
    """What did the user just enter?

    Works on the whole rendered transcript, so it tolerates blank lines
    and any number of earlier prompts.

    Args:
        contents: Full transcript text as edited by the user.
        prompt: Prompt marker of the session.

    Returns:
        The text after the last non-empty prompt segment, stripped.
        Empty when the last line is a prompt followed by whitespace, or
        when no prompt occurs at all.

    Example:
        >>> entered_expression(">> 1 + 1", ">>")
        '1 + 1'
        >>> entered_expression(">> foo\\n>> ", ">>")
        ''
        >>> entered_expression(">> foo\\n>>", ">>")
        'foo'
    """
    # Trailing empty lines don't count as the last line
    lines = contents.rstrip("\n").split("\n")
    if re.search(re.escape(prompt) + r"\s+$", lines[-1]):
        return ""
    if prompt not in contents:
        return ""
    # A bare trailing prompt leaves empty segments; skip them
    segments = contents.split(prompt)
    while segments and not segments[-1]:
        segments.pop()
    return segments[-1].strip() if segments else ""


@dataclass
class Transcript:
    """Append-only text log with a ready-for-input offset.

    ``current_offset`` marks where new input may begin and is
    recomputed by ``mark_ready`` after every mutation.
    """

    prompt: str
    text: str = ""
    current_offset: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.set_current_offset()

    @property
    def ready_marker(self) -> str:
        return self.prompt + " "

    def append(self, text: str) -> None:
        self.text += text

    def append_output(self, text: str) -> None:
        self.text += OUTPUT_MARKER + text

    def append_error(self, text: str) -> None:
        self.text += ERROR_MARKER + text

    def mark_ready(self) -> None:
        """End with a newline and a fresh prompt."""
        self.text += "\n" + self.ready_marker
        self.set_current_offset()

    def replace(self, text: str) -> None:
        self.text = text
        self.set_current_offset()

    def set_current_offset(self) -> None:
        self.current_offset = len(self.text)
