"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from validator_bot.helpers.db import create_session_factory, create_tables

# Registers the subscribers table on Base
from validator_bot.subscribers.db import SubscriberDB  # noqa: F401

from tests.fakes import FakeRates, RecordingTransport


@pytest_asyncio.fixture
async def session_factory(
    tmp_path: Path,
) -> AsyncGenerator[async_sessionmaker[AsyncSession]]:
    """Session factory for a fresh SQLite database with all tables created."""
    engine, factory = create_session_factory(
        f"sqlite+aiosqlite:///{tmp_path / 'bot.db'}"
    )
    await create_tables(engine)
    try:
        yield factory
    finally:
        await engine.dispose()


@pytest.fixture
def transport() -> RecordingTransport:
    """Transport that accepts every message."""
    return RecordingTransport()


@pytest.fixture
def rates() -> FakeRates:
    """Price source quoting 0.02 USD per NIM."""
    return FakeRates(0.02)

