"""Scribe - session engine for embeddable read-eval-print loops.

Scribe keeps the transcript of a REPL view (prompts, echoed input,
results and errors) and a bounded, persisted history of entered
expressions with previous/next navigation. Evaluation itself is
delegated to a pluggable flavor.

Layers:
    core/       Pure session logic (transcript, history, commands, storage)
    frontends/  User interfaces (CLI, interactive terminal REPL)

Quick Start:
    >>> from scribe import MemoryStorage, SessionEngine
    >>> from scribe.core.evaluators import get_flavor
    >>>
    >>> engine = SessionEngine(get_flavor("python"), MemoryStorage())
    >>> engine.commit(engine.read() + "6 * 7")
    >>> engine.last_output
    '42'
    >>> engine.previous_command()
    '6 * 7'
"""

from scribe.__version__ import __version__
from scribe.core import (
    EvaluationError,
    Evaluator,
    JSONStorage,
    MemoryStorage,
    ReplFlavor,
    SessionEngine,
    Storage,
)

__all__ = [
    "__version__",
    "EvaluationError",
    "Evaluator",
    "JSONStorage",
    "MemoryStorage",
    "ReplFlavor",
    "SessionEngine",
    "Storage",
]
