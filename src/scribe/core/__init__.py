"""Core of scribe - pure session logic with no UI dependencies.

Modules:
    flavor          Evaluator protocol and REPL flavor configuration
    session/        Transcript, history buffer, command routing, engine
    storage/        Persisted command history backends
    evaluators/     Concrete flavors (python, shell)
    config          Configuration loading
    logging_config  Logging setup
"""

from scribe.core.flavor import (
    ErrorFormatter,
    EvaluationError,
    Evaluator,
    ReplFlavor,
    default_format_error,
)
from scribe.core.session import (
    CommandRouter,
    HistoryBuffer,
    SessionEngine,
    SpecialCommandNotFoundError,
    Transcript,
)
from scribe.core.storage import JSONStorage, MemoryStorage, Storage, StorageError

__all__ = [
    "CommandRouter",
    "ErrorFormatter",
    "EvaluationError",
    "Evaluator",
    "HistoryBuffer",
    "JSONStorage",
    "MemoryStorage",
    "ReplFlavor",
    "SessionEngine",
    "SpecialCommandNotFoundError",
    "Storage",
    "StorageError",
    "Transcript",
    "default_format_error",
]
