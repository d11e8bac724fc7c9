"""Tests for the mem0-backed memory store."""

import sys
import types

import pytest
from unittest.mock import Mock, patch, create_autospec

from mem0 import Memory

from config.settings import Settings, StartupConfigError
from memory.base_store import MemoryStoreError
from memory.mem0_store import Mem0MemoryStore, parse_results
from memory.models import MemoryItem, MemoryEvent


class TestParseResults:
    """Test SDK response validation."""

    def test_results_dict(self):
        """Test the {"results": [...]} shape."""
        raw = {"results": [{"id": "1", "memory": "likes tea", "score": 0.91}]}

        items = parse_results(raw, MemoryItem, "search")

        assert len(items) == 1
        assert items[0].memory == "likes tea"
        assert items[0].score == 0.91

    def test_bare_list(self):
        """Test the older bare list shape."""
        items = parse_results([{"id": "1"}, {"id": "2"}], MemoryItem, "get_all")

        assert [i.id for i in items] == ["1", "2"]

    def test_missing_or_unexpected(self):
        """Test None, missing results and odd types all become empty."""
        assert parse_results(None, MemoryItem, "search") == []
        assert parse_results({}, MemoryItem, "search") == []
        assert parse_results({"results": None}, MemoryItem, "search") == []
        assert parse_results("oops", MemoryItem, "search") == []

    def test_malformed_entries_skipped(self):
        """Test entries failing validation are dropped, order kept."""
        raw = {"results": [{"id": "1"}, {"memory": "no id"}, {"id": "3"}]}

        items = parse_results(raw, MemoryItem, "search")

        assert [i.id for i in items] == ["1", "3"]


class TestMem0MemoryStore:
    """Test store delegation and error wrapping."""

    def setup_method(self):
        """Set up test fixtures."""
        self.client = create_autospec(Memory, instance=True)
        self.store = Mem0MemoryStore(self.client)

    def test_search(self):
        """Test search passes user and limit and keeps relevance order."""
        self.client.search.return_value = {"results": [
            {"id": "2", "memory": "works remotely", "score": 0.9},
            {"id": "1", "memory": "likes tea", "score": 0.5},
        ]}

        items = self.store.search("what do I do?", user_id="u1", limit=3)

        self.client.search.assert_called_once_with(
            "what do I do?", filters={"user_id": "u1"}, top_k=3
        )
        assert [i.id for i in items] == ["2", "1"]

    def test_add_returns_events(self):
        """Test add passes messages through and parses events."""
        messages = [
            {"role": "user", "content": "I like tea"},
            {"role": "assistant", "content": "Noted!"},
        ]
        self.client.add.return_value = {"results": [
            {"id": "1", "memory": "Likes tea", "event": "ADD"},
            {"id": "2", "memory": "Likes green tea", "event": "UPDATE", "previous_memory": "Likes tea"},
        ]}

        events = self.store.add(messages, user_id="u1")

        self.client.add.assert_called_once_with(messages, user_id="u1")
        assert all(isinstance(e, MemoryEvent) for e in events)
        assert [e.event for e in events] == ["ADD", "UPDATE"]
        assert events[1].previous_memory == "Likes tea"

    def test_add_with_no_new_memories(self):
        """Test an empty add result is an empty list."""
        self.client.add.return_value = {"results": []}

        assert self.store.add([], user_id="u1") == []

    def test_get_all(self):
        """Test listing parses items."""
        self.client.get_all.return_value = {"results": [{"id": "1", "memory": "likes tea"}]}

        items = self.store.get_all(user_id="u1")

        self.client.get_all.assert_called_once_with(
            filters={"user_id": "u1"}, top_k=Mem0MemoryStore.LIST_LIMIT
        )
        assert items[0].memory == "likes tea"

    def test_delete_all_returns_message(self):
        """Test wipe returns the SDK message."""
        self.client.delete_all.return_value = {"message": "Memories deleted successfully!"}

        assert self.store.delete_all(user_id="u1") == "Memories deleted successfully!"
        self.client.delete_all.assert_called_once_with(user_id="u1")

    def test_errors_are_wrapped(self):
        """Test SDK exceptions surface as MemoryStoreError naming the operation."""
        self.client.search.side_effect = ConnectionError("redis down")

        with pytest.raises(MemoryStoreError) as exc_info:
            self.store.search("q", user_id="u1")

        assert exc_info.value.operation == "search"
        assert "redis down" in str(exc_info.value)
        assert isinstance(exc_info.value.cause, ConnectionError)

    def test_scoping_uses_filters_not_entity_kwargs(self):
        """Test search and get_all scope by filters, which mem0 2.x requires."""
        self.client.search.return_value = {"results": []}
        self.client.get_all.return_value = {"results": []}

        self.store.search("q", user_id="u1", limit=5)
        self.store.get_all(user_id="u1")

        search_kwargs = self.client.search.call_args.kwargs
        list_kwargs = self.client.get_all.call_args.kwargs
        assert set(search_kwargs) == {"filters", "top_k"}
        assert set(list_kwargs) == {"filters", "top_k"}
        assert search_kwargs["filters"] == {"user_id": "u1"}
        assert search_kwargs["top_k"] == 5
        assert list_kwargs["filters"] == {"user_id": "u1"}

    def test_user_id_required(self):
        """Test a missing user ID is rejected before calling the SDK."""
        with pytest.raises(ValueError, match="User ID is required"):
            self.store.search("q", user_id="")

        with pytest.raises(ValueError):
            self.store.delete_all(user_id="")

        self.client.search.assert_not_called()
        self.client.delete_all.assert_not_called()


class TestMem0StoreFromSettings:
    """Test construction from settings."""

    def setup_method(self):
        """Set up a stand-in mem0 module."""
        self.memory_cls = Mock()
        self.fake_mem0 = types.ModuleType("mem0")
        self.fake_mem0.Memory = self.memory_cls
        self.settings = Settings(openai_api_key="sk-test")

    def test_builds_from_config(self):
        """Test Memory.from_config receives the settings' mem0 config."""
        with patch.dict(sys.modules, {"mem0": self.fake_mem0}):
            store = Mem0MemoryStore.from_settings(self.settings)

        self.memory_cls.from_config.assert_called_once_with(self.settings.to_mem0_config())
        assert store.client is self.memory_cls.from_config.return_value

    def test_init_failure_is_startup_error(self):
        """Test a rejected config becomes a StartupConfigError."""
        self.memory_cls.from_config.side_effect = ValueError("bad config")

        with patch.dict(sys.modules, {"mem0": self.fake_mem0}):
            with pytest.raises(StartupConfigError, match="redis"):
                Mem0MemoryStore.from_settings(self.settings)
