"""JSON file storage backend.

Keeps the whole store in memory and rewrites the file on every ``set``.

Error Handling Policy: FAIL-SOFT
- Write failures are logged as warnings
- The in-memory copy stays authoritative for the running session
- ``load(strict=True)`` raises StorageError for unreadable files
"""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from scribe.core.storage.base import StorageError

logger = logging.getLogger(__name__)


@dataclass
class JSONStorage:
    """Persistent storage in a single JSON file.

    Example:
        >>> storage = JSONStorage.load(Path("~/.scribe/storage.json"))
        >>> storage.set("command_history_buffer_size", 50)
        >>> storage.get("command_history_buffer_size")
        50
    """

    path: Path
    data: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self.data:
            return default
        return copy.deepcopy(self.data[key])

    def set(self, key: str, value: Any) -> None:
        self.data[key] = copy.deepcopy(value)
        self.save()

    def save(self) -> bool:
        """Write the store to disk.

        Creates parent directories if needed.

        Returns:
            True if written successfully, False otherwise.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Failed to write storage %s: %s", self.path, e)
            return False
        return True

    @classmethod
    def load(cls, path: Path | str, strict: bool = False) -> JSONStorage:
        """Load storage from a JSON file.

        Args:
            path: Path to the storage file.
            strict: Raise StorageError instead of starting empty when the
                file exists but cannot be read.

        Returns:
            JSONStorage with loaded data.
            If file doesn't exist, returns empty storage.
        """
        path = Path(path).expanduser()

        if not path.exists():
            return cls(path=path)

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top-level value must be an object")
        except (OSError, ValueError) as e:
            if strict:
                raise StorageError(f"Failed to load storage {path}: {e}") from e
            logger.warning("Ignoring unreadable storage %s: %s", path, e)
            return cls(path=path)

        return cls(path=path, data=data)


def get_default_storage_path() -> Path:
    """Get the default path for REPL storage.

    Returns:
        Path to ~/.scribe/storage.json
    """
    return Path.home() / ".scribe" / "storage.json"
