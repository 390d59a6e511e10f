"""
Test Suite Configuration
"""
import random
from typing import AsyncGenerator

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from retail_seed.config import get_settings
from retail_seed.database.gateway import PersistenceGateway
from retail_seed.database.models import Base
from retail_seed.seeding.hashing import CredentialHasher
from retail_seed.seeding.loader import SeedLoader

# Lowest bcrypt cost factor keeps the suite fast
TEST_BCRYPT_ROUNDS = 4


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def test_engine():
    """In-memory SQLite engine with the retail schema"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def test_db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Database session bound to the test engine"""
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
def gateway(test_db) -> PersistenceGateway:
    return PersistenceGateway(test_db)


@pytest.fixture
def hasher() -> CredentialHasher:
    return CredentialHasher(rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def make_loader(gateway, hasher):
    """Build a SeedLoader for a profile with a seeded random source"""
    def _make(profile, seed: int = 42, **kwargs) -> SeedLoader:
        return SeedLoader(gateway, profile, hasher=hasher, rng=random.Random(seed), **kwargs)
    return _make


@pytest.fixture
def clean_settings(monkeypatch):
    """Fresh settings per test, with a fast bcrypt cost factor"""
    monkeypatch.setenv("SEED_BCRYPT_ROUNDS", str(TEST_BCRYPT_ROUNDS))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
