"""Database models for chat subscribers."""

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from validator_bot.helpers.db import Base


class SubscriberDB(Base):
    """Chat id to validator address mapping."""

    __tablename__ = "subscribers"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    validator_address: Mapped[str | None] = mapped_column(
        String(64), nullable=True
    )  # User-friendly form, e.g. "NQ07 0000 ..."


__all__ = ["SubscriberDB"]
