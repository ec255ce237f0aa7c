"""REPL flavor hooks.

A flavor is everything a concrete REPL supplies to the session engine:
the evaluator, how its failures are rendered, and the static strings
(title, prompt, grammar name) shown around the transcript.

Flavors are plain configuration objects rather than engine subclasses,
so many REPL flavors can be composed over one SessionEngine.

Example:
    >>> class Upper:
    ...     def execute(self, expression: str) -> str:
    ...         return expression.upper()
    >>> flavor = ReplFlavor(evaluator=Upper(), title="Shout REPL")
    >>> engine = SessionEngine(flavor, MemoryStorage())
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

DEFAULT_TITLE = "REPL"
DEFAULT_PROMPT = ">>"


class EvaluationError(Exception):
    """Error raised by an evaluator for a user expression."""

    pass


@runtime_checkable
class Evaluator(Protocol):
    """Capability that turns an expression into rendered output.

    Implementations either return the rendered result or raise.
    Empty input must be handled by the evaluator itself.
    """

    def execute(self, expression: str) -> str: ...


ErrorFormatter = Callable[[BaseException], str]


def default_format_error(error: BaseException) -> str:
    """Render an evaluation failure as ``Type: message``."""
    message = str(error)
    if not message:
        return type(error).__name__
    return f"{type(error).__name__}: {message}"


@dataclass(frozen=True)
class ReplFlavor:
    """Static configuration of a concrete REPL.

    Attributes:
        evaluator: Object implementing ``execute(str) -> str``.
        title: Tab title and persisted history bucket name.
        prompt: Marker shown when the REPL is ready for input.
        grammar_name: Syntax-highlighting grammar for the transcript.
        format_error: Renders evaluator failures for display.
    """

    evaluator: Evaluator
    title: str = DEFAULT_TITLE
    prompt: str = DEFAULT_PROMPT
    grammar_name: str = ""
    format_error: ErrorFormatter = default_format_error

    def __post_init__(self) -> None:
        if not self.title:
            raise ValueError("Flavor title is required")
        if not self.prompt:
            raise ValueError("Flavor prompt is required")
