"""Fixtures for store integration tests.

Tests skip when Redis is not reachable at TEST_REDIS_URL.
"""

import os
from collections.abc import AsyncIterator
from uuid import uuid4

import pytest
import pytest_asyncio
import redis.asyncio as redis


@pytest.fixture(scope="session")
def redis_url() -> str:
    return os.environ.get("TEST_REDIS_URL", "redis://localhost:6379/15")


@pytest.fixture
def key_prefix() -> str:
    """Unique namespace per test."""
    return f"trustlink-test-{uuid4().hex[:8]}"


@pytest_asyncio.fixture
async def redis_client(redis_url: str, key_prefix: str) -> AsyncIterator[redis.Redis]:
    """Redis client scoped to one test; keys under key_prefix are removed after."""
    client = redis.from_url(redis_url, decode_responses=True)
    try:
        await client.ping()
    except redis.RedisError:
        await client.aclose()
        pytest.skip("Redis not available")

    yield client

    async for key in client.scan_iter(match=f"{key_prefix}:*"):
        await client.delete(key)
    await client.aclose()
