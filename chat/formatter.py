"""Rendering of memories for prompts and terminal output."""

import json
from typing import Optional, Sequence

from memory.models import MemoryItem

NO_CONTEXT = "No relevant memories found for this context."
CONTEXT_HEADER = "Context from previous interactions:"
MISSING_MEMORY = "N/A"
NO_MEMORIES = "No memories found."


def format_memories_for_prompt(memories: Optional[Sequence[MemoryItem]]) -> str:
    """
    Build the memory context block injected into the system prompt.

    Memories keep the order they were given in (relevance order for search
    results); nothing is deduplicated.
    """
    if not memories:
        return NO_CONTEXT

    lines = [f"- {mem.memory or MISSING_MEMORY}" for mem in memories]
    return CONTEXT_HEADER + "\n" + "\n".join(lines)


def memory_overview(memories: Optional[Sequence[MemoryItem]]) -> str:
    """Human-readable listing for the `list` command."""
    if not memories:
        return NO_MEMORIES

    return "\n".join(
        f"{mem.memory or MISSING_MEMORY}\n  Timestamp: {mem.updated_at or mem.created_at}\n"
        for mem in memories
    )


def memory_dump(memories: Optional[Sequence[MemoryItem]]) -> str:
    """Structured JSON dump for the `inspect` command."""
    payload = [mem.model_dump(exclude_unset=True) for mem in memories or []]
    return json.dumps(payload, indent=2, default=str)
