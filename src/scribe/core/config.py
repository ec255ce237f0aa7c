"""Configuration for scribe.

Values resolve with priority: explicit argument > environment > default.
A ``.env`` file in the working directory is loaded first, without
overriding variables already set.

Environment Variables:
    SCRIBE_STORAGE_PATH: JSON storage file (default ~/.scribe/storage.json)
    SCRIBE_HISTORY_BUFFER_SIZE: Buffer size when storage has none (default 1000)
    SCRIBE_FLAVOR: Flavor used by ``scribe repl`` (default "python")
    SCRIBE_SHELL_TIMEOUT: Shell flavor timeout in seconds (default 30)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from scribe.core.storage.base import DEFAULT_BUFFER_SIZE
from scribe.core.storage.json_store import get_default_storage_path

DEFAULT_FLAVOR = "python"
DEFAULT_SHELL_TIMEOUT = 30.0


@dataclass
class ScribeConfig:
    """Resolved configuration.

    Attributes:
        storage_path: File backing persisted command history.
        history_buffer_size: Default buffer size for fresh storage.
        flavor: Flavor name for interactive sessions.
        shell_timeout: Seconds before a shell command is killed.
    """

    storage_path: Path = field(default_factory=get_default_storage_path)
    history_buffer_size: int = DEFAULT_BUFFER_SIZE
    flavor: str = DEFAULT_FLAVOR
    shell_timeout: float = DEFAULT_SHELL_TIMEOUT

    def __post_init__(self) -> None:
        if self.history_buffer_size < 0:
            raise ValueError(
                f"History buffer size must be non-negative, got {self.history_buffer_size}"
            )
        if self.shell_timeout <= 0:
            raise ValueError(f"Shell timeout must be positive, got {self.shell_timeout}")


def _env_int(key: str, default: int) -> int:
    value = os.environ.get(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got: {value}") from None


def _env_float(key: str, default: float) -> float:
    value = os.environ.get(key)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{key} must be a number, got: {value}") from None


def load_config(
    storage_path: str | Path | None = None,
    history_buffer_size: int | None = None,
    flavor: str | None = None,
    shell_timeout: float | None = None,
    env_file: str | Path | None = None,
) -> ScribeConfig:
    """Resolve configuration from arguments, environment and defaults.

    Args:
        storage_path: Override for the storage file.
        history_buffer_size: Override for the default buffer size.
        flavor: Override for the flavor name.
        shell_timeout: Override for the shell timeout.
        env_file: ``.env`` file to load (default: search from cwd).

    Raises:
        ValueError: If a numeric environment variable is malformed.
    """
    load_dotenv(env_file or find_dotenv(usecwd=True), override=False)

    if storage_path is None:
        env_path = os.environ.get("SCRIBE_STORAGE_PATH")
        resolved_path = Path(env_path) if env_path else get_default_storage_path()
    else:
        resolved_path = Path(storage_path)

    if history_buffer_size is None:
        history_buffer_size = _env_int("SCRIBE_HISTORY_BUFFER_SIZE", DEFAULT_BUFFER_SIZE)

    if shell_timeout is None:
        shell_timeout = _env_float("SCRIBE_SHELL_TIMEOUT", DEFAULT_SHELL_TIMEOUT)

    return ScribeConfig(
        storage_path=resolved_path.expanduser(),
        history_buffer_size=history_buffer_size,
        flavor=flavor or os.environ.get("SCRIBE_FLAVOR") or DEFAULT_FLAVOR,
        shell_timeout=shell_timeout,
    )
