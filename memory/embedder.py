"""Embedder warm-up for local Ollama models."""

import logging

import requests

from config.settings import EmbedderConfig

logger = logging.getLogger(__name__)


def warm_embedder(config: EmbedderConfig, timeout: int = 30) -> bool:
    """
    Send one throwaway embedding request so the model is loaded before
    the first search.

    Only Ollama needs warming; API-based embedders are skipped.

    Args:
        config: Embedder configuration
        timeout: Request timeout in seconds

    Returns:
        True if the embedder answered, False otherwise
    """
    if config.provider != "ollama":
        logger.debug(f"Skipping warm-up for {config.provider} embedder")
        return False

    model = config.get_model()
    url = f"{config.ollama_url.rstrip('/')}/api/embed"

    try:
        response = requests.post(
            url,
            json={"model": model, "input": "warmup"},
            timeout=timeout
        )
        response.raise_for_status()
        response.json()
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.warning(f"[Warmup] Failed to warm embedder: {e}")
        return False

    logger.info(f"[Warmup] Embedder '{model}' warmed.")
    return True
