"""Data access implementations.

This package contains the Redis connection management used by the cache
services.
"""

from .redis_connection import (
    RedisConnectionManager,
    create_redis_client,
    get_connection_manager,
)

__all__ = [
    "RedisConnectionManager",
    "create_redis_client",
    "get_connection_manager",
]
