"""Message store: direct messages and their delivery records."""

from __future__ import annotations

import logging

from sqlalchemy import and_, or_, select, update
from sqlalchemy.orm import Session, aliased

from duet.core.exceptions import NotFoundError
from duet.db.statements import atomic
from duet.models import Message, MessageChat, User
from duet.schemas.message import (
    ExchangeEntry,
    MessageDetail,
    MessageOut,
    MessageSummary,
    SeenMessage,
)
from duet.services.conversations import ConversationLedger
from duet.services.identity import resolve_by_handle

logger = logging.getLogger(__name__)


class MessageStore:
    """Service persisting messages, delivery records and seen-state changes."""

    @staticmethod
    def find_all(db: Session) -> list[MessageSummary]:
        """Return every message ordered by creation time."""
        messages = db.scalars(select(Message).order_by(Message.time, Message.id))
        return [MessageSummary.model_validate(message) for message in messages]

    @staticmethod
    def send(db: Session, text: str, sender_handle: str, receiver_handle: str) -> MessageOut:
        """Persist a message from `sender_handle` to `receiver_handle`.

        Both users are resolved before anything is written. The message, its
        delivery record (seen=False) and the conversation upsert are committed
        together or not at all. The session holds no open transaction when
        this returns.

        Raises:
            NotFoundError: If either handle does not resolve.
        """
        sender = resolve_by_handle(db, sender_handle)
        receiver = resolve_by_handle(db, receiver_handle)

        with atomic(db):
            message = Message(text=text)
            message.chat = MessageChat(sender=sender.id, receiver=receiver.id, seen=False)
            db.add(message)
            db.flush()
            ConversationLedger.upsert(db, sender, receiver)
            # Commit expires the ORM state; reading it afterwards would begin a new transaction.
            sent = MessageOut(
                id=message.id,
                text=message.text,
                time=message.time,
                sender=sender.username,
                receiver=receiver.username,
            )

        logger.info("Message %s sent from %s to %s", sent.id, sent.sender, sent.receiver)
        return sent

    @staticmethod
    def get(db: Session, message_id: int) -> MessageDetail:
        """Return a message joined with its delivery record and both handles.

        Raises:
            NotFoundError: If the message does not exist.
        """
        sender = aliased(User)
        receiver = aliased(User)
        row = db.execute(
            select(Message, MessageChat.seen, sender.username, receiver.username)
            .join(MessageChat, MessageChat.message_id == Message.id)
            .join(sender, sender.id == MessageChat.sender)
            .join(receiver, receiver.id == MessageChat.receiver)
            .where(Message.id == message_id)
        ).first()
        if row is None:
            raise NotFoundError(f"No message with this id: {message_id}")

        message, seen, sender_name, receiver_name = row
        return MessageDetail(
            id=message.id,
            text=message.text,
            time=message.time,
            sender=sender_name,
            receiver=receiver_name,
            seen=seen,
        )

    @staticmethod
    def exchange(db: Session, first_handle: str, second_handle: str) -> list[ExchangeEntry]:
        """Return every delivery record between two users, oldest first.

        The result is the same for either argument order.

        Raises:
            NotFoundError: If either handle does not resolve.
        """
        first = resolve_by_handle(db, first_handle)
        second = resolve_by_handle(db, second_handle)
        rows = db.execute(
            select(
                MessageChat.id,
                MessageChat.sender,
                MessageChat.receiver,
                MessageChat.message_id,
                Message.time,
            )
            .join(Message, Message.id == MessageChat.message_id)
            .where(
                or_(
                    and_(MessageChat.sender == first.id, MessageChat.receiver == second.id),
                    and_(MessageChat.sender == second.id, MessageChat.receiver == first.id),
                )
            )
            .order_by(Message.time, Message.id)
        ).all()
        return [ExchangeEntry.model_validate(row) for row in rows]

    @staticmethod
    def mark_seen(db: Session, message_id: int) -> SeenMessage:
        """Flip a message's delivery record to seen.

        Marking an already seen message again succeeds without change.

        Raises:
            NotFoundError: If the message does not exist.
        """
        chat = db.scalars(select(MessageChat).where(MessageChat.message_id == message_id)).first()
        if chat is None:
            raise NotFoundError(f"No message with this id: {message_id}")

        if not chat.seen:
            with atomic(db):
                chat.seen = True
        return SeenMessage.model_validate(chat)

    @staticmethod
    def mark_exchange_seen(db: Session, sender_handle: str, receiver_handle: str) -> list[int]:
        """Mark every unseen message from sender to receiver as seen.

        All qualifying records flip in one statement inside one transaction,
        which is closed again when this returns.

        Returns:
            Ids of the messages that changed state, oldest first.

        Raises:
            NotFoundError: If either handle does not resolve.
        """
        sender = resolve_by_handle(db, sender_handle)
        receiver = resolve_by_handle(db, receiver_handle)
        sender_name, receiver_name = sender.username, receiver.username

        with atomic(db):
            newly_seen = list(
                db.scalars(
                    select(MessageChat.message_id)
                    .join(Message, Message.id == MessageChat.message_id)
                    .where(
                        MessageChat.sender == sender.id,
                        MessageChat.receiver == receiver.id,
                        MessageChat.seen.is_(False),
                    )
                    .order_by(Message.time, Message.id)
                    .with_for_update()
                )
            )
            if newly_seen:
                db.execute(
                    update(MessageChat)
                    .where(MessageChat.message_id.in_(newly_seen))
                    .values(seen=True)
                )

        if newly_seen:
            logger.info(
                "Marked %d messages from %s to %s as seen",
                len(newly_seen),
                sender_name,
                receiver_name,
            )
        return newly_seen

    @staticmethod
    def delete(db: Session, message_id: int) -> None:
        """Delete a message together with its delivery record.

        Raises:
            NotFoundError: If the message does not exist.
        """
        message = db.get(Message, message_id)
        if message is None:
            raise NotFoundError(f"No message with this id: {message_id}")

        with atomic(db):
            db.delete(message)
        logger.info("Deleted message %s", message_id)
