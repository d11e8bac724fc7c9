"""Application settings."""

import os
from pathlib import Path
from typing import Optional, Dict, Any, ClassVar
from urllib.parse import quote

import yaml
from pydantic import BaseModel, Field


class StartupConfigError(RuntimeError):
    """Raised when configuration required at startup is missing or invalid."""


class RedisConfig(BaseModel):
    """Redis connection parameters."""
    redis_url: str = "redis://localhost:6379"
    username: Optional[str] = None
    password: Optional[str] = None

    def connection_url(self) -> str:
        """Return the Redis URL with credentials inlined, if any were given."""
        if not self.username and not self.password:
            return self.redis_url

        scheme, sep, rest = self.redis_url.partition("://")
        if not sep:
            scheme, rest = "redis", self.redis_url
        # Credentials already present in the URL win
        if "@" in rest:
            return self.redis_url

        auth = quote(self.username or "", safe="")
        if self.password:
            auth += ":" + quote(self.password, safe="")
        return f"{scheme}://{auth}@{rest}"


class PgVectorConfig(BaseModel):
    """PostgreSQL + pgvector connection parameters."""
    dbname: str = "postgres"
    user: str = "postgres"
    password: Optional[str] = None
    host: str = "localhost"
    port: int = 5432


class QdrantConfig(BaseModel):
    """Qdrant connection parameters."""
    host: Optional[str] = "localhost"
    port: Optional[int] = 6333
    url: Optional[str] = None  # Takes precedence over host/port (e.g. Qdrant Cloud)
    api_key: Optional[str] = None


class VectorStoreConfig(BaseModel):
    """Vector store backend selection."""
    provider: str = "redis"  # "redis", "pgvector" or "qdrant"
    collection_name: str = "memories"
    redis: RedisConfig = Field(default_factory=RedisConfig)
    pgvector: PgVectorConfig = Field(default_factory=PgVectorConfig)
    qdrant: QdrantConfig = Field(default_factory=QdrantConfig)


class EmbedderConfig(BaseModel):
    """Embedding provider selection."""
    provider: str = "ollama"  # "ollama" or "openai"
    model: Optional[str] = None
    ollama_url: str = "http://127.0.0.1:11434"
    embedding_model_dims: Optional[int] = None

    DEFAULT_MODELS: ClassVar[Dict[str, str]] = {
        "ollama": "all-minilm",
        "openai": "text-embedding-3-small",
    }
    DEFAULT_DIMS: ClassVar[Dict[str, int]] = {
        "all-minilm": 384,
        "nomic-embed-text": 768,
        "text-embedding-3-small": 1536,
        "text-embedding-3-large": 3072,
    }

    def get_model(self) -> str:
        """Get the embedding model, falling back to the provider default."""
        return self.model or self.DEFAULT_MODELS.get(self.provider, "all-minilm")

    def get_dims(self) -> int:
        """Get the embedding dimensionality for the configured model."""
        if self.embedding_model_dims:
            return self.embedding_model_dims
        return self.DEFAULT_DIMS.get(self.get_model(), 1536)


class Settings(BaseModel):
    """Application configuration settings."""

    # Memory backends
    vector_store: VectorStoreConfig = Field(default_factory=VectorStoreConfig)
    embedder: EmbedderConfig = Field(default_factory=EmbedderConfig)

    # LLM Provider settings
    llm_provider: str = "openai"  # "openai" or "anthropic"
    llm_model: Optional[str] = None  # Override default model (gpt-5-mini or claude-sonnet-4)

    # Model used by mem0 itself to extract facts from a turn
    memory_llm_model: str = "gpt-4.1-nano"

    # API Keys
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None

    # Session settings
    user_id: str = "oss-quickstart-user"
    search_limit: int = 3

    # Diagnostics
    analyze_performance: bool = True
    warmup_embedder: bool = True
    verbose: bool = False

    def __init__(self, **data):
        # Auto-load API keys from environment if not provided
        if data.get("openai_api_key") is None:
            data["openai_api_key"] = os.environ.get("OPENAI_API_KEY")

        if data.get("anthropic_api_key") is None:
            data["anthropic_api_key"] = os.environ.get("ANTHROPIC_API_KEY")

        super().__init__(**data)
        self._load_backend_credentials()

    def _load_backend_credentials(self):
        """Fill vector store credentials from the environment when unset."""
        redis = self.vector_store.redis
        if redis.username is None:
            redis.username = os.environ.get("REDIS_USERNAME")
        if redis.password is None:
            redis.password = os.environ.get("REDIS_PASSWORD")

        if self.vector_store.pgvector.password is None:
            self.vector_store.pgvector.password = os.environ.get("PGVECTOR_PASSWORD")

        if self.vector_store.qdrant.api_key is None:
            self.vector_store.qdrant.api_key = os.environ.get("QDRANT_API_KEY")

    @classmethod
    def from_yaml(cls, path: str, **overrides) -> "Settings":
        """
        Load settings from a YAML file.

        Args:
            path: Path to the YAML config file
            **overrides: Values that take precedence over the file

        Returns:
            Settings instance

        Raises:
            StartupConfigError: If the file is missing or not a mapping
        """
        config_path = Path(path)
        if not config_path.exists():
            raise StartupConfigError(f"Config file not found: {config_path}")

        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise StartupConfigError(f"Config file must contain a mapping: {config_path}")

        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**data)

    def get_llm_api_key(self) -> Optional[str]:
        """Get the API key for the configured LLM provider."""
        if self.llm_provider == "openai":
            return self.openai_api_key
        elif self.llm_provider == "anthropic":
            return self.anthropic_api_key
        return None

    def require_llm_api_key(self) -> str:
        """
        Validate the credentials needed to start a chat session.

        mem0 uses OpenAI for fact extraction regardless of the chat provider,
        so OPENAI_API_KEY is always required.

        Returns:
            API key for the configured chat provider

        Raises:
            StartupConfigError: If a required key is missing
        """
        if not self.openai_api_key:
            raise StartupConfigError(
                "OPENAI_API_KEY must be set in environment variables or .env file."
            )

        api_key = self.get_llm_api_key()
        if not api_key:
            raise StartupConfigError(
                f"{self.llm_provider.upper()}_API_KEY must be set in environment "
                "variables or .env file."
            )
        return api_key

    def _vector_store_config(self) -> Dict[str, Any]:
        """Build the provider-specific vector store section."""
        store = self.vector_store
        config: Dict[str, Any] = {
            "collection_name": store.collection_name,
            "embedding_model_dims": self.embedder.get_dims(),
        }

        if store.provider == "redis":
            config["redis_url"] = store.redis.connection_url()
        elif store.provider == "pgvector":
            config.update(store.pgvector.model_dump())
        elif store.provider == "qdrant":
            qdrant = store.qdrant
            if qdrant.url:
                config["url"] = qdrant.url
            else:
                config["host"] = qdrant.host
                config["port"] = qdrant.port
            if qdrant.api_key:
                config["api_key"] = qdrant.api_key
        else:
            raise StartupConfigError(f"Unsupported vector store provider: {store.provider}")

        return {"provider": store.provider, "config": config}

    def _embedder_config(self) -> Dict[str, Any]:
        """Build the embedder section."""
        embedder = self.embedder
        config: Dict[str, Any] = {
            "model": embedder.get_model(),
            "embedding_dims": embedder.get_dims(),
        }

        if embedder.provider == "ollama":
            config["ollama_base_url"] = embedder.ollama_url
        elif embedder.provider == "openai":
            config["api_key"] = self.openai_api_key
        else:
            raise StartupConfigError(f"Unsupported embedder provider: {embedder.provider}")

        return {"provider": embedder.provider, "config": config}

    def to_mem0_config(self) -> Dict[str, Any]:
        """Build the configuration dict accepted by mem0's Memory.from_config."""
        return {
            "vector_store": self._vector_store_config(),
            "embedder": self._embedder_config(),
            "llm": {
                "provider": "openai",
                "config": {
                    "model": self.memory_llm_model,
                    "api_key": self.openai_api_key,
                },
            },
        }
