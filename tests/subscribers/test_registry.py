"""Tests for subscriber registries."""

import pytest

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from validator_bot.subscribers.models import Subscriber
from validator_bot.subscribers.registry import (
    InMemorySubscriberRegistry,
    SqlSubscriberRegistry,
    SubscriberRegistry,
)

from tests.fakes import BURN_ADDRESS, OTHER_ADDRESS


@pytest.fixture(params=["memory", "sql"])
def registry(
    request: pytest.FixtureRequest,
    session_factory: async_sessionmaker[AsyncSession],
) -> SubscriberRegistry:
    """Each registry implementation, starting empty."""
    if request.param == "memory":
        return InMemorySubscriberRegistry()
    return SqlSubscriberRegistry(session_factory)


class TestSubscriberRegistry:
    """Behaviour shared by every registry implementation."""

    @pytest.mark.asyncio
    async def test_empty(self, registry: SubscriberRegistry) -> None:
        """Test a new registry has no subscribers."""
        assert await registry.list_all() == []
        assert await registry.get(1) is None

    @pytest.mark.asyncio
    async def test_set_and_get(self, registry: SubscriberRegistry) -> None:
        """Test a registered address can be read back."""
        await registry.set_address(42, BURN_ADDRESS)

        assert await registry.get(42) == Subscriber(id=42, validator_address=BURN_ADDRESS)

    @pytest.mark.asyncio
    async def test_set_overwrites(self, registry: SubscriberRegistry) -> None:
        """Test a chat follows at most one validator."""
        await registry.set_address(42, BURN_ADDRESS)
        await registry.set_address(42, OTHER_ADDRESS)

        assert await registry.list_all() == [
            Subscriber(id=42, validator_address=OTHER_ADDRESS)
        ]

    @pytest.mark.asyncio
    async def test_list_all(self, registry: SubscriberRegistry) -> None:
        """Test every subscriber is listed."""
        await registry.set_address(2, OTHER_ADDRESS)
        await registry.set_address(1, BURN_ADDRESS)

        subscribers = await registry.list_all()

        assert sorted(subscribers, key=lambda s: s.id) == [
            Subscriber(id=1, validator_address=BURN_ADDRESS),
            Subscriber(id=2, validator_address=OTHER_ADDRESS),
        ]

    @pytest.mark.asyncio
    async def test_list_all_is_snapshot(self, registry: SubscriberRegistry) -> None:
        """Test later writes do not change an already returned list."""
        await registry.set_address(1, BURN_ADDRESS)
        snapshot = await registry.list_all()

        await registry.set_address(2, OTHER_ADDRESS)
        await registry.remove(1)

        assert snapshot == [Subscriber(id=1, validator_address=BURN_ADDRESS)]

    @pytest.mark.asyncio
    async def test_remove(self, registry: SubscriberRegistry) -> None:
        """Test removing reports whether a subscriber existed."""
        await registry.set_address(1, BURN_ADDRESS)

        assert await registry.remove(1) is True
        assert await registry.remove(1) is False
        assert await registry.get(1) is None

    @pytest.mark.asyncio
    async def test_large_chat_ids(self, registry: SubscriberRegistry) -> None:
        """Test negative 64-bit group chat ids are stored."""
        chat_id = -1001234567890

        await registry.set_address(chat_id, BURN_ADDRESS)

        subscriber = await registry.get(chat_id)
        assert subscriber is not None
        assert subscriber.id == chat_id


class TestInMemorySubscriberRegistry:
    """Tests specific to the in-memory registry."""

    @pytest.mark.asyncio
    async def test_seeded_entries(self) -> None:
        """Test seeded subscribers, including one without an address."""
        registry = InMemorySubscriberRegistry({1: BURN_ADDRESS, 2: None})

        assert await registry.get(2) == Subscriber(id=2, validator_address=None)
        assert await registry.remove(2) is True
        assert len(await registry.list_all()) == 1
