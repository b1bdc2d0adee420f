"""Generation Cache - Redis-backed cache for generative model outputs.

This package provides a layered architecture for caching model outputs
shared across processes:

Layers:
    - protocols: Interface contracts (KeyValueStore, MessageSerializer)
    - repositories: Shared Redis connection management
    - services: Cache protocol, codec and indexed sequence
    - dto: Credential records and the stored generation record
    - entities: Domain models (internal)

Usage:
    ```python
    from generation_cache import GenerationCache, PlainTextGeneration

    cache = await GenerationCache.init({"redisUrl": "redis://localhost:6379"}, ttl=60_000)
    await cache.update("What is 2+2?", "model-a", [PlainTextGeneration(text="4")])
    generations = await cache.lookup("What is 2+2?", "model-a")
    ```
"""

from generation_cache.config import get_settings, resolve_connection_config, settings
from generation_cache.dto import RedisCacheCredential, RedisCacheUrlCredential, StoredGeneration
from generation_cache.entities import (
    ChatGeneration,
    ChatMessage,
    ConnectionConfig,
    Generation,
    PlainTextGeneration,
)
from generation_cache.errors import (
    CacheCorruptionError,
    ConfigurationError,
    GenerationCacheError,
    StoreUnavailableError,
)
from generation_cache.keys import derive_key
from generation_cache.protocols import KeyValueStore, MessageSerializer
from generation_cache.repositories import RedisConnectionManager, get_connection_manager
from generation_cache.services import (
    ChatMessageSerializer,
    GenerationCache,
    GenerationCodec,
    IndexedSequence,
)

__all__ = [
    # Configuration
    "settings",
    "get_settings",
    "resolve_connection_config",
    # Protocols (interfaces)
    "KeyValueStore",
    "MessageSerializer",
    # Services
    "GenerationCache",
    "GenerationCodec",
    "ChatMessageSerializer",
    "IndexedSequence",
    "derive_key",
    # Repositories
    "RedisConnectionManager",
    "get_connection_manager",
    # Entities (domain models)
    "ConnectionConfig",
    "Generation",
    "PlainTextGeneration",
    "ChatGeneration",
    "ChatMessage",
    # DTOs
    "RedisCacheCredential",
    "RedisCacheUrlCredential",
    "StoredGeneration",
    # Errors
    "GenerationCacheError",
    "ConfigurationError",
    "StoreUnavailableError",
    "CacheCorruptionError",
]
