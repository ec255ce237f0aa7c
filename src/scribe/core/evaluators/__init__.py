"""Concrete REPL flavors and the flavor registry."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from scribe.core.evaluators.python import PythonEvaluator, python_flavor
from scribe.core.evaluators.shell import ShellCommandError, ShellEvaluator, shell_flavor

if TYPE_CHECKING:
    from scribe.core.config import ScribeConfig
    from scribe.core.flavor import ReplFlavor

FlavorFactory = Callable[["ScribeConfig | None"], "ReplFlavor"]

FLAVORS: dict[str, FlavorFactory] = {
    "python": python_flavor,
    "shell": shell_flavor,
}


def list_flavors() -> list[str]:
    return sorted(FLAVORS)


def get_flavor(name: str, config: ScribeConfig | None = None) -> ReplFlavor:
    """Build a flavor by name.

    Raises:
        ValueError: If no flavor is registered under ``name``.
    """
    factory = FLAVORS.get(name.lower())
    if factory is None:
        raise ValueError(f"Unknown flavor: {name} (available: {', '.join(list_flavors())})")
    return factory(config)


__all__ = [
    "FLAVORS",
    "PythonEvaluator",
    "ShellCommandError",
    "ShellEvaluator",
    "get_flavor",
    "list_flavors",
    "python_flavor",
    "shell_flavor",
]
