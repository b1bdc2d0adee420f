"""Key-value store protocol.

The subset of the ``redis.asyncio.Redis`` API the cache relies on. Any
client exposing these coroutines satisfies it.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for the async store client used by the cache.

    Example:
        ```python
        import redis.asyncio as redis

        store: KeyValueStore = redis.Redis(host="localhost")
        ```
    """

    async def get(self, name: str) -> bytes | str | None:
        """Read a value, or None if the key is absent."""
        ...

    async def set(self, name: str, value: str, px: int | None = None) -> bool | None:
        """Write a value, expiring after ``px`` milliseconds when given."""
        ...

    async def delete(self, *names: str) -> int:
        """Delete keys and return how many existed."""
        ...

    async def aclose(self) -> None:
        """Close the client's connections."""
        ...
