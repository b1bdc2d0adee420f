"""Tests for the shared Redis connection manager."""

import asyncio

import pytest

from generation_cache import ConfigurationError, ConnectionConfig, RedisConnectionManager
from tests.conftest import FakeRedis, run_async


class RecordingFactory:
    """Client factory that records opens and closes in order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []
        self.clients: list[FakeRedis] = []

    def __call__(self, config: ConnectionConfig) -> FakeRedis:
        factory = self

        class Client(FakeRedis):
            async def aclose(self) -> None:
                await super().aclose()
                factory.events.append(("close", config.host))

        client = Client()
        self.events.append(("open", config.host))
        self.clients.append(client)
        return client


@pytest.fixture
def factory():
    """Create a recording client factory."""
    return RecordingFactory()


def test_equal_configs_open_one_connection(factory):
    """Structurally equal configs reuse the live client."""

    async def scenario():
        manager = RedisConnectionManager(client_factory=factory)
        first = await manager.acquire(ConnectionConfig(host="a", port=6379))
        second = await manager.acquire(ConnectionConfig(host="a", port=6379))
        assert first is second

    run_async(scenario())
    assert factory.events == [("open", "a")]


def test_changed_config_closes_then_reopens(factory):
    """A different config closes the old client before opening a new one."""

    async def scenario():
        manager = RedisConnectionManager(client_factory=factory)
        first = await manager.acquire(ConnectionConfig(host="a"))
        second = await manager.acquire(ConnectionConfig(host="b"))
        assert first is not second
        assert first.closed
        assert manager.config == ConnectionConfig(host="b")

    run_async(scenario())
    assert factory.events == [("open", "a"), ("close", "a"), ("open", "b")]


def test_url_and_config_variants_share_client(factory):
    """Switching between URL and discrete forms of one store does not reconnect."""

    async def scenario():
        manager = RedisConnectionManager(client_factory=factory)
        first = await manager.acquire(ConnectionConfig(host="a", port=6379))
        second = await manager.acquire_url("redis://a:6379")
        assert first is second

    run_async(scenario())
    assert factory.events == [("open", "a")]


def test_acquire_url_rejects_malformed_url(factory):
    """A bad URL fails before any connection is attempted."""

    async def scenario():
        manager = RedisConnectionManager(client_factory=factory)
        with pytest.raises(ConfigurationError):
            await manager.acquire_url("http://a")

    run_async(scenario())
    assert factory.events == []


def test_close_failure_is_not_surfaced():
    """Errors while closing the old client do not fail the reconnect."""

    class FailingClose(FakeRedis):
        async def aclose(self) -> None:
            raise ConnectionResetError("gone")

    async def scenario():
        manager = RedisConnectionManager(client_factory=lambda config: FailingClose())
        await manager.acquire(ConnectionConfig(host="a"))
        client = await manager.acquire(ConnectionConfig(host="b"))
        assert manager.client is client

    run_async(scenario())


def test_concurrent_acquires_leave_config_matching_client(factory):
    """Racing acquires end with the remembered config matching the live client."""

    async def scenario():
        manager = RedisConnectionManager(client_factory=factory)
        configs = [ConnectionConfig(host=host) for host in ("a", "b", "a", "c", "c")]
        await asyncio.gather(*(manager.acquire(config) for config in configs))
        return manager

    manager = run_async(scenario())
    opened = [client for client in factory.clients if not client.closed]
    assert opened == [manager.client]
    assert factory.events[-1] == ("open", manager.config.host)


def test_close_then_acquire_reconnects(factory):
    """Explicit close drops the client so the next acquire opens a new one."""

    async def scenario():
        manager = RedisConnectionManager(client_factory=factory)
        await manager.acquire(ConnectionConfig(host="a"))
        await manager.close()
        assert manager.client is None
        await manager.acquire(ConnectionConfig(host="a"))

    run_async(scenario())
    assert factory.events == [("open", "a"), ("close", "a"), ("open", "a")]


def test_create_redis_client_tls_skips_certificate_checks():
    """TLS configs build an SSL client that accepts any certificate."""
    from redis.asyncio.connection import SSLConnection

    from generation_cache.repositories import create_redis_client

    client = create_redis_client(ConnectionConfig(host="h", port=6380, password="pw", tls=True))
    pool = client.connection_pool
    assert pool.connection_class is SSLConnection
    assert pool.connection_kwargs["host"] == "h"
    assert pool.connection_kwargs["port"] == 6380
    assert pool.connection_kwargs["ssl_cert_reqs"] == "none"


def test_create_redis_client_plain():
    """Non-TLS configs build a plain client on the configured database."""
    from redis.asyncio.connection import SSLConnection

    from generation_cache.repositories import create_redis_client

    client = create_redis_client(ConnectionConfig(host="h", db=3))
    assert client.connection_pool.connection_class is not SSLConnection
    assert client.connection_pool.connection_kwargs["db"] == 3


def test_create_redis_client_returns_raw_bytes():
    """Clients leave values undecoded so the codec reports bad encodings."""
    from generation_cache.repositories import create_redis_client

    client = create_redis_client(ConnectionConfig(host="h"))
    assert client.connection_pool.connection_kwargs["decode_responses"] is False
