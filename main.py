#!/usr/bin/env python3
"""Memory Chat CLI."""

import argparse
import logging
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

from config.settings import Settings, EmbedderConfig, StartupConfigError
from llm.factory import create_llm_client
from memory.mem0_store import Mem0MemoryStore
from memory.embedder import warm_embedder
from memory.models import Session
from chat.console import ConsoleInput
from chat.loop import ConversationLoop, ChatDependencies
from chat.responder import ResponseGenerator

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Memory Chat - terminal chat that remembers you across sessions"
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Path to a YAML config file (see config/default.yaml)"
    )
    parser.add_argument(
        "--user-id",
        "-u",
        type=str,
        help="User ID memories are stored under (default: oss-quickstart-user)"
    )
    parser.add_argument(
        "--vector-store",
        type=str,
        choices=["redis", "pgvector", "qdrant"],
        help="Vector store backend (default: redis)"
    )
    parser.add_argument(
        "--embedder",
        type=str,
        choices=["ollama", "openai"],
        help="Embedding provider (default: ollama)"
    )
    parser.add_argument(
        "--llm-provider",
        type=str,
        choices=["openai", "anthropic"],
        help="Chat LLM provider (default: openai)"
    )
    parser.add_argument(
        "--llm-model",
        type=str,
        help="Override the chat model"
    )
    parser.add_argument(
        "--limit",
        type=int,
        help="Number of memories retrieved per turn (default: 3)"
    )
    parser.add_argument(
        "--no-warmup",
        action="store_true",
        help="Skip the embedder warm-up request"
    )
    parser.add_argument(
        "--no-perf",
        action="store_true",
        help="Don't log call latencies"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output"
    )
    return parser


def build_settings(args: argparse.Namespace) -> Settings:
    """Create settings from an optional config file and CLI overrides."""
    overrides = {
        "user_id": args.user_id,
        "llm_provider": args.llm_provider,
        "llm_model": args.llm_model,
        "search_limit": args.limit,
        "verbose": args.verbose or None,
        "warmup_embedder": False if args.no_warmup else None,
        "analyze_performance": False if args.no_perf else None,
    }

    if args.config:
        settings = Settings.from_yaml(args.config, **overrides)
    else:
        settings = Settings(**{k: v for k, v in overrides.items() if v is not None})

    if args.vector_store:
        settings.vector_store.provider = args.vector_store

    # A different provider means the configured model no longer applies
    if args.embedder and args.embedder != settings.embedder.provider:
        settings.embedder = EmbedderConfig(
            provider=args.embedder,
            ollama_url=settings.embedder.ollama_url
        )

    return settings


def main(argv=None):
    """Main CLI entry point."""
    load_dotenv()
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = build_settings(args)
        api_key = settings.require_llm_api_key()
        memory_store = Mem0MemoryStore.from_settings(settings)
        llm_client = create_llm_client(
            provider=settings.llm_provider,
            api_key=api_key,
            model=settings.llm_model
        )
        print("Clients initialized successfully")
    except (StartupConfigError, ValidationError, ValueError) as e:
        print(f"Initialization Error: {e}", file=sys.stderr)
        sys.exit(1)

    if settings.warmup_embedder:
        warm_embedder(settings.embedder)

    dependencies = ChatDependencies(
        memory_store=memory_store,
        generator=ResponseGenerator(llm_client),
        search_limit=settings.search_limit,
    )
    loop = ConversationLoop(
        dependencies=dependencies,
        session=Session(user_id=settings.user_id),
        console=ConsoleInput(),
        analyze_performance=settings.analyze_performance,
    )
    loop.run()


if __name__ == "__main__":
    main()
