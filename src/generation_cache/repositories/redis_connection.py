"""Process-wide Redis connection management.

One ``redis.asyncio.Redis`` client is shared by every cache in the process.
It is replaced when a caller asks for a different configuration and
otherwise lives until the process exits.
"""

import asyncio
import logging
from collections.abc import Callable
from functools import lru_cache

import redis.asyncio as redis
from redis.exceptions import RedisError

from generation_cache.config import parse_redis_url, settings
from generation_cache.entities import ConnectionConfig

logger = logging.getLogger(__name__)

ClientFactory = Callable[[ConnectionConfig], redis.Redis]


def create_redis_client(config: ConnectionConfig) -> redis.Redis:
    """Create a Redis client instance.

    With ``config.tls`` set the server certificate is NOT verified.
    """
    tls_options = {}
    if config.tls:
        logger.warning(
            "Connecting to Redis at %s:%d over TLS without certificate verification",
            config.host,
            config.port,
        )
        tls_options = {"ssl": True, "ssl_cert_reqs": "none"}

    return redis.Redis(
        host=config.host,
        port=config.port,
        db=config.db,
        username=config.username,
        password=config.password,
        socket_timeout=settings.redis_socket_timeout,
        decode_responses=False,
        **tls_options,
    )


class RedisConnectionManager:
    """Holder for a single shared Redis client.

    Works like a pool of size one: ``acquire`` returns the live client when
    the requested config equals the one that produced it, and otherwise
    closes it and opens a new one. The check-and-replace runs under a lock so
    the remembered config always matches the live client.

    Example:
        ```python
        manager = get_connection_manager()
        client = await manager.acquire(ConnectionConfig(host="localhost"))
        same = await manager.acquire(ConnectionConfig(host="localhost"))
        assert client is same
        ```
    """

    def __init__(self, client_factory: ClientFactory | None = None) -> None:
        """Initialize the connection manager.

        Args:
            client_factory: Builds a client from a config. Defaults to create_redis_client.
        """
        self._client_factory = client_factory or create_redis_client
        self._client: redis.Redis | None = None
        self._config: ConnectionConfig | None = None
        self._lock = asyncio.Lock()

    async def acquire(self, config: ConnectionConfig) -> redis.Redis:
        """Return the shared client for ``config``, reconnecting if it changed.

        Args:
            config: The resolved connection configuration

        Returns:
            The live Redis client
        """
        async with self._lock:
            if self._client is not None and config == self._config:
                return self._client

            if self._client is not None:
                logger.info(
                    "Redis configuration changed, reconnecting to %s:%d",
                    config.host,
                    config.port,
                )
                await self._close_client(self._client)
            else:
                logger.info("Connecting to Redis at %s:%d", config.host, config.port)

            self._client = self._client_factory(config)
            self._config = config
            return self._client

    async def acquire_url(self, url: str) -> redis.Redis:
        """Return the shared client for a connection URL.

        The URL is normalized to a ConnectionConfig first, so a URL and the
        equivalent discrete config share the same client.

        Raises:
            ConfigurationError: If the URL is malformed
        """
        return await self.acquire(parse_redis_url(url))

    async def close(self) -> None:
        """Close the shared client, if any. The next acquire reconnects."""
        async with self._lock:
            if self._client is None:
                return
            await self._close_client(self._client)
            self._client = None
            self._config = None

    async def _close_client(self, client: redis.Redis) -> None:
        """Close a client, logging rather than raising on failure."""
        try:
            await client.aclose()
        except (RedisError, OSError) as e:
            logger.warning("Failed to close Redis client: %s", e)

    @property
    def config(self) -> ConnectionConfig | None:
        """Get the config of the live client, if connected."""
        return self._config

    @property
    def client(self) -> redis.Redis | None:
        """Get the live client (for testing)."""
        return self._client


@lru_cache
def get_connection_manager() -> RedisConnectionManager:
    """Get the process-wide connection manager.

    The manager's lock and client belong to the event loop that first uses
    them. Hosts that run more than one event loop (e.g. repeated
    ``asyncio.run``) should create a RedisConnectionManager per loop and pass
    it to ``GenerationCache.init``, or call ``close()`` before the loop ends.
    """
    return RedisConnectionManager()
