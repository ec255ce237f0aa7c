"""In-memory storage backend."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any


@dataclass
class MemoryStorage:
    """Dict-backed storage; nothing survives the process.

    Values are deep-copied on the way in and out so callers can never
    mutate stored state behind the engine's back.
    """

    data: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self.data:
            return default
        return copy.deepcopy(self.data[key])

    def set(self, key: str, value: Any) -> None:
        self.data[key] = copy.deepcopy(value)
