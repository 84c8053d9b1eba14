"""
Integration Test Layer Configuration

Runs the album repository against a real PostgreSQL instance. Each test
gets its own schema, dropped on teardown. Tests are skipped when the
database is not reachable.

Environment:
    POSTGRES_HOST, POSTGRES_PORT, POSTGRES_USER, POSTGRES_PASSWORD,
    POSTGRES_DB_TEST (defaults to album_db_test)

Usage:
    pytest tests/integration -v
"""

import dataclasses
import uuid
from typing import AsyncGenerator

import asyncpg
import pytest
import pytest_asyncio

from core.config import InfraConfig


@pytest.fixture
def infra_config() -> InfraConfig:
    """Infrastructure config with a throwaway schema"""
    base = InfraConfig.from_env()
    return dataclasses.replace(
        base,
        postgres_schema=f"album_it_{uuid.uuid4().hex[:8]}",
        postgres_pool_max=2,
    )


@pytest_asyncio.fixture
async def db_pool(infra_config) -> AsyncGenerator[asyncpg.Pool, None]:
    """asyncpg pool for the test database; skips when unavailable"""
    try:
        pool = await asyncpg.create_pool(
            dsn=infra_config.postgres_dsn,
            min_size=1,
            max_size=infra_config.postgres_pool_max,
            timeout=5,
        )
    except (OSError, asyncpg.PostgresError) as e:
        pytest.skip(f"PostgreSQL not available: {e}")

    try:
        yield pool
    finally:
        async with pool.acquire() as conn:
            await conn.execute(f"DROP SCHEMA IF EXISTS {infra_config.postgres_schema} CASCADE")
        await pool.close()


@pytest_asyncio.fixture
async def album_repository(infra_config, db_pool):
    """Initialized AlbumRepository bound to the test schema"""
    from microservices.album_service.album_repository import AlbumRepository

    # Own pool so the jsonb codec is installed on every connection
    repository = AlbumRepository(config=infra_config)
    await repository.initialize()
    yield repository
    await repository.close()
