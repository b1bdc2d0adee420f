"""Shared fixtures for generation cache tests."""

import asyncio
import time

import pytest

from generation_cache.config import Settings


def run_async(coro):
    return asyncio.run(coro)


class FakeRedis:
    """In-memory stand-in for redis.asyncio.Redis (GET/SET PX/DEL/aclose)."""

    def __init__(self) -> None:
        self.data: dict[str, tuple[str, float | None]] = {}
        self.set_calls: list[tuple[str, str, int | None]] = []
        self.closed = False

    def _alive(self, key: str) -> bool:
        entry = self.data.get(key)
        if entry is None:
            return False
        expires_at = entry[1]
        if expires_at is not None and time.monotonic() >= expires_at:
            del self.data[key]
            return False
        return True

    async def get(self, name: str) -> str | None:
        if not self._alive(name):
            return None
        return self.data[name][0]

    async def set(self, name: str, value: str, px: int | None = None) -> bool:
        self.set_calls.append((name, value, px))
        expires_at = time.monotonic() + px / 1000 if px is not None else None
        self.data[name] = (value, expires_at)
        return True

    async def delete(self, *names: str) -> int:
        count = 0
        for name in names:
            if self._alive(name):
                del self.data[name]
                count += 1
        return count

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def fake_redis():
    """Create an empty fake Redis client."""
    return FakeRedis()


@pytest.fixture
def empty_settings():
    """Settings with no environment defaults."""
    return Settings(
        redis_url=None,
        redis_host=None,
        redis_port=None,
        redis_user=None,
        redis_password=None,
        redis_socket_timeout=None,
        cache_ttl_ms=None,
        cache_key_prefix="",
    )
