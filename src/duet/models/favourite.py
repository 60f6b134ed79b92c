"""Directed favourite relationships between users who have chatted."""

from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from duet.db.session import Base
from duet.models.chat_history import ChatHistory


class FavouriteList(Base):
    """``sender`` marked ``receiver`` as a favourite chat partner."""

    __tablename__ = "favourite_list"
    __table_args__ = (
        UniqueConstraint("sender", "receiver", name="uq_favourite_list_pair"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sender: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    receiver: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    chat_history_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("chat_history.id", ondelete="CASCADE"), nullable=False
    )

    chat_history: Mapped[ChatHistory] = relationship("ChatHistory")
