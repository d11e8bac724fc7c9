"""Configuration for the memory chat."""

from .settings import (
    Settings,
    StartupConfigError,
    VectorStoreConfig,
    EmbedderConfig,
    RedisConfig,
    PgVectorConfig,
    QdrantConfig,
)

__all__ = [
    "Settings",
    "StartupConfigError",
    "VectorStoreConfig",
    "EmbedderConfig",
    "RedisConfig",
    "PgVectorConfig",
    "QdrantConfig",
]
