"""Pytest configuration and fixtures."""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from solders.pubkey import Pubkey

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DEBUG"] = "false"
os.environ["AUTH_SECRET"] = ""
os.environ["CURVE_CLIENT"] = "dryrun"
os.environ["METEORA_CONFIG_ADDRESS"] = ""
os.environ["CONFIRM_MAX_RETRIES"] = "2"
os.environ["CONFIRM_RETRY_DELAY"] = "0"

from parity.config import get_settings
from parity.curve.dryrun import DryRunCurveClient
from parity.curve.factory import reset_curve_client
from parity.ledger.models import Base
from parity.ledger.repository import LaunchRepository
from parity.utils.locks import clear_launch_locks

get_settings.cache_clear()

CHARITY_WALLET = "66pJhhESDjdeBBDdkKmxYYd7q6GUggYPWjxpMKNX39KV"


def new_address() -> str:
    """A fresh valid Solana address."""
    return str(Pubkey.new_unique())


@pytest.fixture(autouse=True)
def reset_globals():
    """Fresh curve client and lock registry for every test."""
    reset_curve_client()
    clear_launch_locks()
    yield
    reset_curve_client()
    clear_launch_locks()


@pytest_asyncio.fixture
async def db_engine():
    """Create in-memory database engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for testing."""
    session_factory = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def launch_repo(db_session: AsyncSession) -> LaunchRepository:
    """Create launch repository for testing."""
    return LaunchRepository(db_session)


@pytest.fixture
def curve_client() -> DryRunCurveClient:
    """Dry-run client where pools only appear when a test creates them."""
    return DryRunCurveClient(auto_create=False)
