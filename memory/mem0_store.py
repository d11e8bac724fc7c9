"""mem0-backed memory store."""

import logging
from typing import Any, List, Dict, Type, TypeVar

from pydantic import BaseModel, ValidationError

from config.settings import Settings, StartupConfigError
from .base_store import MemoryStore, MemoryStoreError
from .models import MemoryItem, MemoryEvent

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_results(raw: Any, model: Type[ModelT], operation: str) -> List[ModelT]:
    """
    Validate an SDK response into a list of models.

    mem0 returns {"results": [...]} from most calls, but older versions
    return a bare list. Anything else is treated as no results.

    Args:
        raw: Raw SDK response
        model: Model to validate each entry against
        operation: Operation name for log messages

    Returns:
        Validated models in the order the SDK returned them
    """
    if isinstance(raw, dict):
        entries = raw.get("results") or []
    elif isinstance(raw, list):
        entries = raw
    else:
        if raw is not None:
            logger.warning(f"Unexpected {operation} response type: {type(raw).__name__}")
        return []

    items = []
    for entry in entries:
        try:
            items.append(model.model_validate(entry))
        except ValidationError as e:
            logger.warning(f"Skipping malformed memory from {operation}: {e}")
    return items


class Mem0MemoryStore(MemoryStore):
    """Memory store delegating to a mem0 `Memory` instance."""

    # mem0 2.x caps get_all at 20 results unless told otherwise
    LIST_LIMIT = 1000

    def __init__(self, client: Any):
        """
        Initialize store.

        Args:
            client: mem0 Memory instance (or anything with the same methods)
        """
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "Mem0MemoryStore":
        """
        Build a store for the configured vector store and embedder.

        Raises:
            StartupConfigError: If mem0 is missing or rejects the config
        """
        try:
            from mem0 import Memory
        except ImportError:
            raise StartupConfigError("mem0ai package not installed. Run: pip install mem0ai")

        config = settings.to_mem0_config()
        try:
            client = Memory.from_config(config)
        except Exception as e:
            raise StartupConfigError(
                f"Failed to initialize mem0 with {settings.vector_store.provider} "
                f"vector store: {e}"
            ) from e

        logger.info(
            f"mem0 initialized: vector_store={settings.vector_store.provider}, "
            f"embedder={settings.embedder.provider} ({settings.embedder.get_model()})"
        )
        return cls(client)

    @staticmethod
    def _require_user(user_id: str):
        if not user_id:
            raise ValueError("User ID is required")

    def search(self, query: str, user_id: str, limit: int = 3) -> List[MemoryItem]:
        """Search memories for a user, most relevant first."""
        self._require_user(user_id)
        logger.debug(f"Searching memories for user {user_id}")
        try:
            raw = self.client.search(query, filters={"user_id": user_id}, top_k=limit)
        except Exception as e:
            raise MemoryStoreError("search", e) from e

        memories = parse_results(raw, MemoryItem, "search")
        logger.info(f"Found {len(memories)} relevant memories")
        return memories

    def add(self, messages: List[Dict[str, str]], user_id: str) -> List[MemoryEvent]:
        """Store a turn and return the memories mem0 derived from it."""
        self._require_user(user_id)
        try:
            raw = self.client.add(messages, user_id=user_id)
        except Exception as e:
            raise MemoryStoreError("add", e) from e
        return parse_results(raw, MemoryEvent, "add")

    def get_all(self, user_id: str) -> List[MemoryItem]:
        """List every memory for a user."""
        self._require_user(user_id)
        try:
            raw = self.client.get_all(filters={"user_id": user_id}, top_k=self.LIST_LIMIT)
        except Exception as e:
            raise MemoryStoreError("get_all", e) from e
        return parse_results(raw, MemoryItem, "get_all")

    def delete_all(self, user_id: str) -> str:
        """Wipe every memory for a user."""
        self._require_user(user_id)
        try:
            raw = self.client.delete_all(user_id=user_id)
        except Exception as e:
            raise MemoryStoreError("delete_all", e) from e

        if isinstance(raw, dict):
            return str(raw.get("message", ""))
        return "" if raw is None else str(raw)
