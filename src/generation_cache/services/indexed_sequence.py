"""Ordered sequence of values stored under indexed Redis keys.

Redis holds one value per key, so a sequence of N values is stored as N keys
derived from a base and the indexes 0..N-1. Reading stops at the first
absent index, which means writes must be dense and start at zero.

Known limitations:
- Writes are independent SETs. If one fails, the keys already written stay
  in place and the error propagates; nothing is rolled back.
- Concurrent writers of the same sequence can interleave.
"""

from collections.abc import Callable, Sequence

from generation_cache.protocols import KeyValueStore

KeyForIndex = Callable[[int], str]


class IndexedSequence:
    """A read-until-miss sequence of string values.

    Example:
        ```python
        seq = IndexedSequence(client, lambda i: f"answers:{i}")
        await seq.write(["a", "b"], ttl_ms=60_000)
        assert await seq.read() == ["a", "b"]
        ```
    """

    def __init__(self, client: KeyValueStore, key_for: KeyForIndex) -> None:
        """Initialize the sequence.

        Args:
            client: Async Redis-compatible client
            key_for: Maps an index to its Redis key
        """
        self._client = client
        self._key_for = key_for

    async def read(self) -> list[tuple[str, str | bytes]]:
        """Read values from index 0 until the first absent key.

        Returns:
            List of (key, raw value) pairs in index order
        """
        values: list[tuple[str, str | bytes]] = []
        while True:
            key = self._key_for(len(values))
            value = await self._client.get(key)
            if value is None:
                return values
            values.append((key, value))

    async def write(self, values: Sequence[str], ttl_ms: int | None = None) -> None:
        """Write values at indexes 0..n-1, then drop any stale tail.

        The TTL is attached by the SET itself (``PX``), never by a separate
        EXPIRE.

        Args:
            values: Encoded values in order
            ttl_ms: Expiry in milliseconds, or None to persist
        """
        for index, value in enumerate(values):
            key = self._key_for(index)
            if ttl_ms is not None:
                await self._client.set(key, value, px=ttl_ms)
            else:
                await self._client.set(key, value)

        await self.truncate(len(values))

    async def truncate(self, start: int) -> int:
        """Delete indexes from ``start`` until one is already absent.

        Args:
            start: First index to delete

        Returns:
            Number of keys deleted
        """
        deleted = 0
        index = start
        while await self._client.delete(self._key_for(index)):
            deleted += 1
            index += 1
        return deleted
