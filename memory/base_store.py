"""Memory store interface consumed by the chat loop."""

from abc import ABC, abstractmethod
from typing import List, Dict

from .models import MemoryItem, MemoryEvent


class MemoryStoreError(Exception):
    """A memory store operation failed."""

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} failed: {cause}")


class MemoryStore(ABC):
    """Abstract base class for user-scoped memory stores."""

    @abstractmethod
    def search(self, query: str, user_id: str, limit: int = 3) -> List[MemoryItem]:
        """
        Search memories relevant to a query.

        Args:
            query: Text to search for
            user_id: Owner of the memories
            limit: Maximum number of memories to return

        Returns:
            Memories ordered most relevant first
        """
        pass

    @abstractmethod
    def add(self, messages: List[Dict[str, str]], user_id: str) -> List[MemoryEvent]:
        """
        Store a conversation turn.

        Args:
            messages: Role-tagged messages of the turn
            user_id: Owner of the memories

        Returns:
            Memories created or changed by the turn, possibly empty
        """
        pass

    @abstractmethod
    def get_all(self, user_id: str) -> List[MemoryItem]:
        """Get every memory stored for a user."""
        pass

    @abstractmethod
    def delete_all(self, user_id: str) -> str:
        """Delete every memory stored for a user, returning the store's message."""
        pass
