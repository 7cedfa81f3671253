"""Subscriber registry: which chat listens to which validator."""

from typing import Protocol

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from validator_bot.helpers.db import upsert_models
from validator_bot.helpers.logging import get_logger
from validator_bot.subscribers.db import SubscriberDB
from validator_bot.subscribers.models import Subscriber


logger = get_logger(__name__)


class SubscriberRegistry(Protocol):
    """Storage interface used by the monitor and the command handlers.

    ``list_all`` returns a snapshot: later writes never change a list that
    was already returned.
    """

    async def list_all(self) -> list[Subscriber]:
        """Return every registered subscriber."""
        ...

    async def get(self, subscriber_id: int) -> Subscriber | None:
        """Return one subscriber, or None if unknown."""
        ...

    async def set_address(self, subscriber_id: int, address: str) -> None:
        """Register or overwrite the validator address of a subscriber."""
        ...

    async def remove(self, subscriber_id: int) -> bool:
        """Forget a subscriber; returns whether one was removed."""
        ...


class SqlSubscriberRegistry:
    """Registry stored in the ``subscribers`` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def list_all(self) -> list[Subscriber]:
        async with self.session_factory() as session:
            result = await session.execute(select(SubscriberDB).order_by(SubscriberDB.id))
            rows = result.scalars().all()

        return [
            Subscriber(id=row.id, validator_address=row.validator_address)
            for row in rows
        ]

    async def get(self, subscriber_id: int) -> Subscriber | None:
        async with self.session_factory() as session:
            row = await session.get(SubscriberDB, subscriber_id)

        if row is None:
            return None
        return Subscriber(id=row.id, validator_address=row.validator_address)

    async def set_address(self, subscriber_id: int, address: str) -> None:
        await upsert_models(
            self.session_factory,
            db_model_class=SubscriberDB,
            pydantic_models=[Subscriber(id=subscriber_id, validator_address=address)],
        )
        logger.info("Chat %s now listens to %s", subscriber_id, address)

    async def remove(self, subscriber_id: int) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                delete(SubscriberDB).where(SubscriberDB.id == subscriber_id)
            )
            await session.commit()

        removed = bool(result.rowcount)
        if removed:
            logger.info("Chat %s removed", subscriber_id)
        return removed


class InMemorySubscriberRegistry:
    """Dict-backed registry for tests and throwaway runs."""

    def __init__(self, subscribers: dict[int, str | None] | None = None) -> None:
        self._addresses: dict[int, str | None] = dict(subscribers or {})

    async def list_all(self) -> list[Subscriber]:
        return [
            Subscriber(id=subscriber_id, validator_address=address)
            for subscriber_id, address in list(self._addresses.items())
        ]

    async def get(self, subscriber_id: int) -> Subscriber | None:
        if subscriber_id not in self._addresses:
            return None
        return Subscriber(
            id=subscriber_id, validator_address=self._addresses[subscriber_id]
        )

    async def set_address(self, subscriber_id: int, address: str) -> None:
        self._addresses[subscriber_id] = address

    async def remove(self, subscriber_id: int) -> bool:
        if subscriber_id not in self._addresses:
            return False
        del self._addresses[subscriber_id]
        return True


__all__ = [
    "InMemorySubscriberRegistry",
    "SqlSubscriberRegistry",
    "SubscriberRegistry",
]
