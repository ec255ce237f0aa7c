"""Pytest configuration and fixtures."""

from __future__ import annotations

import os

import pytest

from scribe.core.flavor import ReplFlavor
from scribe.core.session.engine import SessionEngine
from scribe.core.storage.memory import MemoryStorage

SCRIBE_ENV_KEYS = (
    "SCRIBE_STORAGE_PATH",
    "SCRIBE_HISTORY_BUFFER_SIZE",
    "SCRIBE_FLAVOR",
    "SCRIBE_SHELL_TIMEOUT",
    "SCRIBE_LOG_LEVEL",
    "SCRIBE_LOG_FORMAT",
    "SCRIBE_LOG_FILE",
)


class FakeEvaluator:
    """Evaluator that echoes input and fails on request.

    Attributes:
        failures: Expression -> exception to raise for it.
        calls: Every expression passed to execute, in order.
    """

    def __init__(self, failures: dict[str, BaseException] | None = None) -> None:
        self.failures = failures or {}
        self.calls: list[str] = []

    def execute(self, expression: str) -> str:
        self.calls.append(expression)
        if expression in self.failures:
            raise self.failures[expression]
        return f"result:{expression}"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep SCRIBE_* variables (including ones loaded from .env) out of tests."""
    for key in SCRIBE_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    yield
    for key in SCRIBE_ENV_KEYS:
        os.environ.pop(key, None)


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def evaluator() -> FakeEvaluator:
    return FakeEvaluator(failures={"1/0": ZeroDivisionError("division by zero")})


@pytest.fixture
def flavor(evaluator: FakeEvaluator) -> ReplFlavor:
    return ReplFlavor(evaluator=evaluator, title="Test REPL", prompt=">>")


@pytest.fixture
def engine(flavor: ReplFlavor, storage: MemoryStorage) -> SessionEngine:
    return SessionEngine(flavor, storage)
