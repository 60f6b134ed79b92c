"""Models describing direct messages between users."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from duet.db.session import Base
from duet.db.time import utcnow


class Message(Base):
    """Message content, stored apart from its delivery metadata."""

    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    time: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    chat: Mapped["MessageChat"] = relationship(
        "MessageChat",
        back_populates="message",
        cascade="all, delete-orphan",
        uselist=False,
    )


class MessageChat(Base):
    """Delivery record: who sent a message to whom, and whether it was seen.

    Exactly one row exists per message. ``seen`` only moves from False to True.
    """

    __tablename__ = "message_chat"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sender: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    receiver: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    message_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("messages.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    seen: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    message: Mapped[Message] = relationship("Message", back_populates="chat")
