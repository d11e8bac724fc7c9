"""Interactive memory-augmented chat loop."""

import logging
import sys
from typing import Optional, List, TextIO

from pydantic import BaseModel, ConfigDict

from memory.base_store import MemoryStore
from memory.models import MemoryItem, Session, Turn
from utils.timing import timeit
from .console import ConsoleInput, InputStreamError
from .formatter import format_memories_for_prompt, memory_overview, memory_dump
from .responder import ResponseGenerator

logger = logging.getLogger(__name__)


class ChatDependencies(BaseModel):
    """External collaborators the loop talks to, built once at startup."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    memory_store: MemoryStore
    generator: ResponseGenerator
    search_limit: int = 3


class ConversationLoop:
    """
    Read-eval loop over a console.

    Each line is either a command (quit, exit, reset, list, inspect) or a
    conversational turn. A turn runs search -> format -> generate -> print
    -> add, one blocking step at a time. Failures of external calls
    degrade to a safe default; only losing the input stream ends the loop.
    """

    PROMPT = "You: "
    EXIT_COMMANDS = ("quit", "exit")

    def __init__(
        self,
        dependencies: ChatDependencies,
        session: Session,
        console: ConsoleInput,
        output: Optional[TextIO] = None,
        analyze_performance: bool = False
    ):
        """
        Initialize loop.

        Args:
            dependencies: Memory store and response generator
            session: Session holding the fixed user ID
            console: Input the loop reads from and closes on exit
            output: Stream for user-facing output (default: stdout)
            analyze_performance: Log latency of search, generate and add
        """
        self.deps = dependencies
        self.session = session
        self.console = console
        self.output = output or sys.stdout
        self.analyze_performance = analyze_performance
        self.closed = False

        self._commands = {
            "reset": self._handle_reset,
            "list": self._handle_list,
            "inspect": self._handle_inspect,
        }

    @property
    def user_id(self) -> str:
        return self.session.user_id

    def _print(self, *args):
        print(*args, file=self.output)

    def _timed(self, label: str, fn):
        _, value = timeit(label, fn, enabled=self.analyze_performance)
        return value

    def run(self):
        """Run until an exit command or the input stream fails, then close."""
        self._print(f"\nChat session started for user: {self.user_id}. Type 'quit' to exit.")
        try:
            while self.step():
                pass
        except InputStreamError as e:
            logger.error(f"An error occurred during the chat: {e}")
        finally:
            self.close()

    def step(self) -> bool:
        """
        Read and handle one line of input.

        Returns:
            False once an exit command was read, True otherwise

        Raises:
            InputStreamError: If the console cannot be read
        """
        user_input = self.console.read_line(self.PROMPT)
        command = user_input.strip().lower()

        if not command:
            return True

        if command in self.EXIT_COMMANDS:
            return False

        handler = self._commands.get(command)
        if handler:
            handler()
        else:
            self.handle_turn(user_input)
        return True

    def close(self):
        """Release the console. Safe to call more than once."""
        if self.closed:
            return
        self.closed = True
        self.console.close()
        self._print(f"\nChat session ended for user: {self.user_id}.")

    # Commands

    def _handle_reset(self):
        confirmation = self.console.read_line(
            f"Enter y to confirm memory wipe for user: {self.user_id}: "
        )
        if confirmation.strip().lower() == "y":
            self.wipe_memory()
        else:
            self._print("Memory wipe cancelled.")

    def _handle_list(self):
        memories = self.list_memories()
        self._print(f"Memories listed for user {self.user_id}:\n\n{memory_overview(memories)}")

    def _handle_inspect(self):
        memories = self.list_memories()
        self._print(f"Memories listed for user {self.user_id}: {memory_dump(memories)}")

    # Memory store calls, each a step boundary

    def search_memories(self, query: str) -> List[MemoryItem]:
        """Search memories for the session user; empty on failure."""
        try:
            return self.deps.memory_store.search(
                query, user_id=self.user_id, limit=self.deps.search_limit
            )
        except Exception as e:
            logger.error(f"[Memory] Search Error: {e}")
            return []

    def list_memories(self) -> List[MemoryItem]:
        """List all memories for the session user; empty on failure."""
        logger.info(f"[Memory] Listing memories for user {self.user_id}...")
        try:
            return self.deps.memory_store.get_all(user_id=self.user_id)
        except Exception as e:
            logger.error(f"[Memory] Error listing memories: {e}")
            return []

    def wipe_memory(self) -> bool:
        """Delete all memories for the session user."""
        logger.info(f"[Memory] Wiping memories for user {self.user_id}...")
        try:
            message = self.deps.memory_store.delete_all(user_id=self.user_id)
        except Exception as e:
            logger.error(f"[Memory] Error wiping memories: {e}")
            return False

        logger.info(f"[Memory] Memories wiped for user {self.user_id}. Message from store: {message}")
        self._print(f"Memories wiped for user {self.user_id}.")
        return True

    def add_interaction(self, turn: Turn) -> bool:
        """Persist a completed turn; failures are logged, never raised."""
        logger.info("[Memory] Adding interaction to memory..")
        try:
            events = self._timed(
                "memory.add()",
                lambda: self.deps.memory_store.add(turn.to_messages(), user_id=self.user_id)
            )
        except Exception as e:
            logger.error(f"[Memory] Error adding interaction to memory: {e}")
            return False

        logger.info("[Memory] Interaction added to memory.")
        if events:
            logger.info(f"[Memory] Raw memories:\n{memory_dump(events)}")
        return True

    # Turn pipeline

    def generate_response(self, memory_context: str, user_query: str) -> str:
        try:
            return self._timed(
                "LLM response",
                lambda: self.deps.generator.generate(memory_context, user_query)
            )
        except Exception as e:
            logger.error(f"[Chatbot] Response Error: {e}")
            return ResponseGenerator.ERROR_RESPONSE

    def handle_turn(self, user_input: str) -> str:
        """
        Answer one conversational input and remember it.

        Args:
            user_input: The line as typed

        Returns:
            The reply shown to the user
        """
        logger.info("Gathering memories...")
        memories = self._timed("memory.search()", lambda: self.search_memories(user_input))

        logger.info("Formatting memories...")
        memory_context = format_memories_for_prompt(memories)

        logger.info("Generating response...")
        reply = self.generate_response(memory_context, user_input)
        self._print(f"AI: {reply}")

        self.add_interaction(Turn(user_query=user_input, assistant_response=reply))
        return reply
