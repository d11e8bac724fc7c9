"""Long-term memory for the chat loop."""

from .models import MemoryItem, MemoryEvent, Turn, Session
from .base_store import MemoryStore, MemoryStoreError
from .mem0_store import Mem0MemoryStore
from .embedder import warm_embedder

__all__ = [
    "MemoryItem",
    "MemoryEvent",
    "Turn",
    "Session",
    "MemoryStore",
    "MemoryStoreError",
    "Mem0MemoryStore",
    "warm_embedder",
]
