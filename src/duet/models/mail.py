"""Models for email-style exchanges with contacts outside the app."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from duet.db.session import Base
from duet.db.time import utcnow


class MailUser(Base):
    """External address; created implicitly the first time it is referenced."""

    __tablename__ = "mail_users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    gmail_address: Mapped[str] = mapped_column(Text, unique=True, nullable=False)


class Email(Base):
    """Email content."""

    __tablename__ = "emails"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    subject_line: Mapped[str] = mapped_column(Text, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    time: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    chat: Mapped["MailChat"] = relationship(
        "MailChat",
        back_populates="email",
        cascade="all, delete-orphan",
        uselist=False,
    )


class MailChat(Base):
    """Delivery record tying an email to an app user and a mail contact."""

    __tablename__ = "mail_chat"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    mail_user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("mail_users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    email_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("emails.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    sent_by_app_user: Mapped[bool] = mapped_column(Boolean, nullable=False)

    email: Mapped[Email] = relationship("Email", back_populates="chat")
