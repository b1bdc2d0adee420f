"""Generation cache service.

Implements the lookup/update contract a generative-model caller uses to
reuse outputs. Each (prompt, model identity) pair maps to an IndexedSequence
of encoded generations.
"""

import logging
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from generation_cache.config import Settings, parse_ttl, resolve_connection_config, settings
from generation_cache.dto import RedisCacheCredential, RedisCacheUrlCredential
from generation_cache.entities import Generation
from generation_cache.errors import ConfigurationError, StoreUnavailableError
from generation_cache.keys import derive_key
from generation_cache.protocols import KeyValueStore
from generation_cache.repositories import RedisConnectionManager, get_connection_manager
from generation_cache.services.generation_codec import GenerationCodec
from generation_cache.services.indexed_sequence import IndexedSequence

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors() -> Iterator[None]:
    """Translate Redis connectivity failures into StoreUnavailableError."""
    try:
        yield
    except (RedisConnectionError, RedisTimeoutError) as e:
        raise StoreUnavailableError(f"Redis unavailable: {e}") from e


class GenerationCache:
    """Redis-backed cache of model generations.

    Lookups return ``None`` on a miss. Any other outcome that is not a
    list of generations is raised, so callers can tell "not cached" apart
    from "cache broken".

    Example:
        ```python
        cache = await GenerationCache.init({"redisUrl": "redis://localhost:6379"}, ttl=60_000)

        await cache.update("What is 2+2?", "model-a", [PlainTextGeneration(text="4")])
        await cache.lookup("What is 2+2?", "model-a")
        # [PlainTextGeneration(text='4')]
        ```
    """

    def __init__(
        self,
        client: KeyValueStore,
        ttl_ms: int | None = None,
        codec: GenerationCodec | None = None,
        key_prefix: str | None = None,
    ) -> None:
        """Initialize the generation cache.

        Args:
            client: Async Redis-compatible client.
            ttl_ms: Expiry for written entries in milliseconds. None persists them.
            codec: Generation codec. Defaults to GenerationCodec().
            key_prefix: Namespace for cache keys. Defaults to settings.

        Raises:
            ConfigurationError: If ttl_ms is not positive
        """
        if ttl_ms is not None and ttl_ms <= 0:
            raise ConfigurationError(f"Invalid ttl {ttl_ms}: must be positive")

        self._client = client
        self._ttl_ms = ttl_ms
        self._codec = codec or GenerationCodec()
        self._key_prefix = settings.cache_key_prefix if key_prefix is None else key_prefix

    @classmethod
    async def init(
        cls,
        credential: RedisCacheCredential | RedisCacheUrlCredential | Mapping[str, Any] | None = None,
        ttl: int | str | None = None,
        *,
        manager: RedisConnectionManager | None = None,
        app_settings: Settings | None = None,
        codec: GenerationCodec | None = None,
    ) -> "GenerationCache":
        """Resolve configuration, acquire the shared client and build a cache.

        Args:
            credential: Credential DTO or raw mapping. None uses environment defaults.
            ttl: Expiry in milliseconds, as int or numeric string. None uses settings.
            manager: Connection manager. Defaults to the process-wide one.
            app_settings: Settings for environment defaults. Defaults to settings.
            codec: Generation codec. Defaults to GenerationCodec().

        Returns:
            Ready GenerationCache

        Raises:
            ConfigurationError: If the credential, URL or ttl is invalid
        """
        app_settings = app_settings or settings
        config = resolve_connection_config(credential, app_settings)
        ttl_ms = parse_ttl(ttl, app_settings)

        client = await (manager or get_connection_manager()).acquire(config)
        return cls(
            client=client,
            ttl_ms=ttl_ms,
            codec=codec,
            key_prefix=app_settings.cache_key_prefix,
        )

    def _sequence(self, prompt: str, llm_key: str) -> IndexedSequence:
        return IndexedSequence(
            self._client,
            lambda index: derive_key(prompt, llm_key, index, self._key_prefix),
        )

    async def lookup(self, prompt: str, llm_key: str) -> list[Generation] | None:
        """Look up cached generations.

        Args:
            prompt: The prompt text
            llm_key: The model identity string

        Returns:
            Generations in the order they were written, or None on a miss

        Raises:
            StoreUnavailableError: If Redis cannot be reached
            CacheCorruptionError: If a stored value cannot be decoded
        """
        with _store_errors():
            stored = await self._sequence(prompt, llm_key).read()

        if not stored:
            logger.debug("Cache miss for model %s", llm_key)
            return None

        logger.debug("Cache hit for model %s: %d generations", llm_key, len(stored))
        return [self._codec.decode(raw, key=key) for key, raw in stored]

    async def update(self, prompt: str, llm_key: str, generations: Sequence[Generation]) -> None:
        """Store generations, replacing any previous sequence for the pair.

        Entries beyond the new sequence length are deleted. A failure part
        way through leaves the entries already written in place.

        Args:
            prompt: The prompt text
            llm_key: The model identity string
            generations: Generations in order

        Raises:
            StoreUnavailableError: If Redis cannot be reached
        """
        encoded = [self._codec.encode(generation) for generation in generations]
        with _store_errors():
            await self._sequence(prompt, llm_key).write(encoded, ttl_ms=self._ttl_ms)

    async def clear(self, prompt: str, llm_key: str) -> int:
        """Delete every cached generation for the pair.

        Returns:
            Number of entries deleted

        Raises:
            StoreUnavailableError: If Redis cannot be reached
        """
        with _store_errors():
            return await self._sequence(prompt, llm_key).truncate(0)

    @property
    def ttl_ms(self) -> int | None:
        """Get the expiry applied to writes, in milliseconds."""
        return self._ttl_ms

    @property
    def client(self) -> KeyValueStore:
        """Get the underlying client (for testing)."""
        return self._client
