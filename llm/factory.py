"""LLM client factory."""

from enum import Enum
from typing import Optional

from .base_client import BaseLLMClient
from .openai_client import OpenAIClient
from .anthropic_client import AnthropicClient


class LLMProvider(str, Enum):
    """Supported chat LLM providers."""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


_CLIENTS = {
    LLMProvider.OPENAI: OpenAIClient,
    LLMProvider.ANTHROPIC: AnthropicClient,
}


def create_llm_client(
    provider: LLMProvider,
    api_key: Optional[str] = None,
    model: Optional[str] = None
) -> BaseLLMClient:
    """
    Create the chat client that answers user turns.

    Args:
        provider: LLM provider, enum member or its string value
        api_key: API key for the provider
        model: Optional model override

    Returns:
        Configured LLM client

    Raises:
        ValueError: If provider is not supported
    """
    try:
        client_cls = _CLIENTS[LLMProvider(provider)]
    except ValueError:
        raise ValueError(f"Unsupported LLM provider: {provider}")
    return client_cls(api_key=api_key, model=model)
