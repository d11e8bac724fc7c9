"""Memory data models."""

from datetime import datetime
from typing import Optional, List, Dict, Any, Union
from pydantic import BaseModel, ConfigDict


class MemoryItem(BaseModel):
    """A single fact the memory store derived from past turns."""

    # Keep SDK fields we don't model so `inspect` can show them verbatim
    model_config = ConfigDict(extra="allow")

    id: str
    memory: Optional[str] = None
    user_id: Optional[str] = None
    hash: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    score: Optional[float] = None  # Only set on search results
    created_at: Optional[Union[str, datetime]] = None
    updated_at: Optional[Union[str, datetime]] = None


class MemoryEvent(MemoryItem):
    """A memory created, updated or deleted as a result of `add`."""
    event: Optional[str] = None  # "ADD", "UPDATE", "DELETE", "NONE"
    previous_memory: Optional[str] = None


class Turn(BaseModel):
    """One user query and the response generated for it."""
    user_query: str
    assistant_response: str

    def to_messages(self) -> List[Dict[str, str]]:
        """Role-tagged messages in conversation order, user first."""
        return [
            {"role": "user", "content": self.user_query},
            {"role": "assistant", "content": self.assistant_response},
        ]


class Session(BaseModel):
    """Process-wide chat session state."""
    model_config = ConfigDict(frozen=True)

    user_id: str
