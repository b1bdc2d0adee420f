#!/usr/bin/env python3
"""
Demo script for the generation cache.

Stores model outputs in Redis and reads them back, showing hits, misses,
chat generations and expiry. Needs a running Redis (REDIS_URL or
localhost:6379).
"""

import asyncio
import time

from redis.exceptions import RedisError

from generation_cache import (
    ChatGeneration,
    ChatMessage,
    GenerationCache,
    GenerationCacheError,
    PlainTextGeneration,
    get_connection_manager,
)


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def demo_basic_cache() -> None:
    """Demonstrate basic cache operations."""
    print_section("Basic Cache Operations")

    cache = await GenerationCache.init()

    print("\n📝 Storing a generation...")
    await cache.update("What is 2+2?", "model-a", [PlainTextGeneration(text="4")])
    print("  ✓ Stored: What is 2+2?")

    start = time.time()
    generations = await cache.lookup("What is 2+2?", "model-a")
    duration = (time.time() - start) * 1000
    print(f"\n🔍 Lookup: {generations} ({duration:.2f}ms)")

    print("\n🔍 Same prompt, different model:")
    print(f"  {await cache.lookup('What is 2+2?', 'model-b')}")

    await cache.clear("What is 2+2?", "model-a")


async def demo_chat_generations() -> None:
    """Demonstrate multiple chat generations for one prompt."""
    print_section("Chat Generations")

    cache = await GenerationCache.init()
    generations = [
        ChatGeneration(text=answer, message=ChatMessage(type="ai", content=answer))
        for answer in ("Hello!", "Hi there!", "Hey!")
    ]

    await cache.update("Say hello", "chat-model", generations)
    cached = await cache.lookup("Say hello", "chat-model")
    print(f"\n📦 Stored {len(generations)}, read back {len(cached or [])}")
    for generation in cached or []:
        print(f"  - {generation.message.type}: {generation.text}")

    await cache.update("Say hello", "chat-model", generations[:1])
    cached = await cache.lookup("Say hello", "chat-model")
    print(f"\n✂️  After overwriting with 1 generation: {len(cached or [])} cached")

    await cache.clear("Say hello", "chat-model")


async def demo_expiry() -> None:
    """Demonstrate TTL expiry."""
    print_section("Expiry")

    cache = await GenerationCache.init(ttl=200)
    await cache.update("Short-lived", "model-a", [PlainTextGeneration(text="soon gone")])
    print(f"\n  Before expiry: {await cache.lookup('Short-lived', 'model-a')}")
    await asyncio.sleep(0.3)
    print(f"  After expiry:  {await cache.lookup('Short-lived', 'model-a')}")


async def main() -> None:
    """Run all demos."""
    print("\n🚀 Generation Cache Demo")
    print("=" * 70)

    try:
        await demo_basic_cache()
        await demo_chat_generations()
        await demo_expiry()

        print("\n" + "=" * 70)
        print("✅ Demo completed successfully!")
        print("=" * 70)

    except (GenerationCacheError, RedisError) as e:
        print(f"\n❌ Error: {e}")
        print("\nMake sure Redis is running:")
        print("  docker run -p 6379:6379 redis")
        print("\nOr set REDIS_URL to your Redis instance.")

    finally:
        await get_connection_manager().close()


if __name__ == "__main__":
    asyncio.run(main())
