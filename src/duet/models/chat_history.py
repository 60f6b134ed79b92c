"""Conversation ledger model: one row per unordered pair of users."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from duet.db.session import Base
from duet.db.time import utcnow


class ChatHistory(Base):
    """Deduplicated record of an ongoing exchange between two users.

    ``user_one``/``user_two`` keep the order of the first message's sender and
    receiver. ``pair_low``/``pair_high`` hold the same ids sorted so the unique
    constraint treats (A, B) and (B, A) as one conversation.
    """

    __tablename__ = "chat_history"
    __table_args__ = (
        UniqueConstraint("pair_low", "pair_high", name="uq_chat_history_pair"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_one: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    user_two: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    pair_low: Mapped[int] = mapped_column(Integer, nullable=False)
    pair_high: Mapped[int] = mapped_column(Integer, nullable=False)
    time: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    @staticmethod
    def pair_key(first: int, second: int) -> tuple[int, int]:
        """Return the canonical (low, high) key for an unordered pair."""
        return (first, second) if first <= second else (second, first)
