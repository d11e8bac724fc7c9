"""Response generation from a user query and memory context."""

import logging

from llm.base_client import BaseLLMClient, Message

logger = logging.getLogger(__name__)


class ResponseGenerator:
    """Generates assistant replies with an LLM client."""

    SYSTEM_PROMPT = (
        "You are a helpful assistant that remembers previous interactions. "
        "Use the provided memory context if relevant."
    )
    ERROR_RESPONSE = "I'm sorry, there was an error generating a response."
    EMPTY_RESPONSE = "I'm sorry, I couldn't formulate a response.."

    def __init__(self, llm_client: BaseLLMClient, max_tokens: int = 2000):
        """
        Initialize generator.

        Args:
            llm_client: Client used for chat completions
            max_tokens: Maximum tokens per reply
        """
        self.llm_client = llm_client
        self.max_tokens = max_tokens

    def build_messages(self, memory_context: str, user_query: str) -> list[Message]:
        """Build the system + user message pair sent to the LLM."""
        return [
            Message(role="system", content=f"{self.SYSTEM_PROMPT}\n{memory_context}"),
            Message(role="user", content=user_query),
        ]

    def generate(self, memory_context: str, user_query: str) -> str:
        """
        Generate a reply. Never raises.

        Args:
            memory_context: Formatted memory block
            user_query: The user's message

        Returns:
            Reply text, or a fixed apology when generation fails or is empty
        """
        logger.debug("Generating response...")
        try:
            response = self.llm_client.chat(
                messages=self.build_messages(memory_context, user_query),
                max_tokens=self.max_tokens
            )
        except Exception as e:
            logger.error(f"[Chatbot] Response Error: {e}")
            return self.ERROR_RESPONSE

        if response.usage:
            logger.debug(
                f"[Chatbot] {self.llm_client.get_provider_name()}/"
                f"{self.llm_client.get_model_name()} usage: "
                f"prompt={response.usage.get('prompt_tokens')}, "
                f"completion={response.usage.get('completion_tokens')}, "
                f"total={response.usage.get('total_tokens')}"
            )

        reply = (response.content or "").strip()
        if not reply:
            logger.warning(
                f"[Chatbot] Empty response from {self.llm_client.get_model_name()} "
                f"(finish_reason={response.finish_reason})"
            )
            return self.EMPTY_RESPONSE

        logger.debug(f"[Chatbot] Generated response: {reply}")
        return reply
