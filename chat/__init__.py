"""Memory-augmented chat loop and its helpers."""

from .console import ConsoleInput, InputStreamError
from .formatter import format_memories_for_prompt, memory_overview, memory_dump
from .responder import ResponseGenerator
from .loop import ConversationLoop, ChatDependencies

__all__ = [
    "ConsoleInput",
    "InputStreamError",
    "format_memories_for_prompt",
    "memory_overview",
    "memory_dump",
    "ResponseGenerator",
    "ConversationLoop",
    "ChatDependencies",
]
