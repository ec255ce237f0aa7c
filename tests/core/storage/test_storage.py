"""Tests for storage backends and history bucket helpers."""

from __future__ import annotations

import json
import logging

import pytest

from scribe.core.storage import (
    BUFFER_SIZE_KEY,
    COMMAND_HISTORY_KEY,
    DEFAULT_BUFFER_SIZE,
    JSONStorage,
    MemoryStorage,
    Storage,
    StorageError,
    load_buffer_size,
    load_command_history,
    save_buffer_size,
    save_command_history,
)


class TestMemoryStorage:
    """Tests for MemoryStorage."""

    def test_get_missing_returns_default(self):
        storage = MemoryStorage()
        assert storage.get("nope") is None
        assert storage.get("nope", 5) == 5

    def test_set_then_get(self):
        storage = MemoryStorage()
        storage.set("key", {"a": [1]})
        assert storage.get("key") == {"a": [1]}

    def test_values_are_copied(self):
        """Mutating a value after set or get does not reach storage."""
        storage = MemoryStorage()
        value = {"a": [1]}
        storage.set("key", value)
        value["a"].append(2)

        fetched = storage.get("key")
        fetched["a"].append(3)

        assert storage.get("key") == {"a": [1]}

    def test_satisfies_protocol(self):
        assert isinstance(MemoryStorage(), Storage)


class TestJSONStorage:
    """Tests for JSONStorage."""

    def test_load_missing_file(self, tmp_path):
        """A missing file gives empty storage without creating it."""
        path = tmp_path / "storage.json"
        storage = JSONStorage.load(path)

        assert storage.data == {}
        assert not path.exists()

    def test_set_writes_file(self, tmp_path):
        path = tmp_path / "nested" / "storage.json"
        storage = JSONStorage.load(path)

        storage.set(BUFFER_SIZE_KEY, 50)

        assert json.loads(path.read_text(encoding="utf-8")) == {BUFFER_SIZE_KEY: 50}

    def test_roundtrip_through_file(self, tmp_path):
        path = tmp_path / "storage.json"
        JSONStorage.load(path).set(COMMAND_HISTORY_KEY, {"Python REPL": ["x = 'é'"]})

        reloaded = JSONStorage.load(path)

        assert reloaded.get(COMMAND_HISTORY_KEY) == {"Python REPL": ["x = 'é'"]}

    def test_expands_user(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        storage = JSONStorage.load("~/storage.json")
        assert storage.path == tmp_path / "storage.json"

    def test_corrupt_file_starts_empty(self, tmp_path, caplog):
        """Unreadable JSON is logged and ignored."""
        path = tmp_path / "storage.json"
        path.write_text("{not json", encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            storage = JSONStorage.load(path)

        assert storage.data == {}
        assert "Ignoring unreadable storage" in caplog.text

    def test_non_object_file_starts_empty(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("[1, 2]", encoding="utf-8")

        assert JSONStorage.load(path).data == {}

    def test_strict_load_raises(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(StorageError, match="Failed to load storage"):
            JSONStorage.load(path, strict=True)

    def test_save_failure_is_soft(self, tmp_path, caplog):
        """Write errors are logged; the in-memory value survives."""
        storage = JSONStorage(path=tmp_path)

        with caplog.at_level(logging.WARNING):
            storage.set("key", "value")

        assert storage.get("key") == "value"
        assert storage.save() is False
        assert "Failed to write storage" in caplog.text

    def test_satisfies_protocol(self, tmp_path):
        assert isinstance(JSONStorage(path=tmp_path / "s.json"), Storage)


class TestCommandHistoryBuckets:
    """Tests for per-title history helpers."""

    def test_load_missing_title(self):
        assert load_command_history(MemoryStorage(), "Python REPL") == []

    def test_save_and_load(self):
        storage = MemoryStorage()
        save_command_history(storage, "Python REPL", ["a", "b"])
        assert load_command_history(storage, "Python REPL") == ["a", "b"]

    def test_titles_are_isolated(self):
        """Writing one title leaves the others untouched."""
        storage = MemoryStorage()
        save_command_history(storage, "Python REPL", ["a"])
        save_command_history(storage, "Shell REPL", ["ls"])
        save_command_history(storage, "Python REPL", [])

        assert storage.get(COMMAND_HISTORY_KEY) == {"Python REPL": [], "Shell REPL": ["ls"]}

    def test_loaded_list_is_detached(self):
        storage = MemoryStorage()
        save_command_history(storage, "Python REPL", ["a"])

        commands = load_command_history(storage, "Python REPL")
        commands.append("b")

        assert load_command_history(storage, "Python REPL") == ["a"]


class TestBufferSize:
    """Tests for the global buffer size helpers."""

    def test_default_when_missing(self):
        assert load_buffer_size(MemoryStorage()) == DEFAULT_BUFFER_SIZE
        assert load_buffer_size(MemoryStorage(), 10) == 10

    def test_save_and_load(self):
        storage = MemoryStorage()
        save_buffer_size(storage, 25)
        assert load_buffer_size(storage) == 25

    def test_invalid_value_falls_back(self, caplog):
        storage = MemoryStorage({BUFFER_SIZE_KEY: "lots"})

        with caplog.at_level(logging.WARNING):
            assert load_buffer_size(storage, 10) == 10

        assert "Ignoring invalid stored buffer size" in caplog.text
