"""Conversation ledger: exactly one ``chat_history`` row per pair of users."""

from __future__ import annotations

import logging

from sqlalchemy import desc, or_, select
from sqlalchemy.orm import Session

from duet.db.statements import greatest_for, insert_for
from duet.db.time import utcnow
from duet.models import ChatHistory, User
from duet.services.identity import resolve_by_handle

logger = logging.getLogger(__name__)


class ConversationLedger:
    """Service maintaining the deduplicated conversation record of each pair."""

    @staticmethod
    def upsert(db: Session, party_a: User, party_b: User) -> ChatHistory:
        """Create the pair's conversation or refresh its last-activity time.

        Runs as a single ``INSERT ... ON CONFLICT DO UPDATE`` against the
        unique (pair_low, pair_high) key, so two concurrent sends for the same
        pair converge on one row. An existing row keeps its ``user_one`` and
        ``user_two``; only ``time`` moves forward. The caller owns the commit.

        Args:
            db: Database session
            party_a: Sender of the message that triggered the upsert
            party_b: Receiver of that message

        Returns:
            The stored conversation row
        """
        low, high = ChatHistory.pair_key(party_a.id, party_b.id)
        now = utcnow()
        insert = insert_for(db)
        stmt = insert(ChatHistory).values(
            user_one=party_a.id,
            user_two=party_b.id,
            pair_low=low,
            pair_high=high,
            time=now,
        )
        # Concurrent writers may commit out of clock order; keep the later time.
        latest = greatest_for(db)
        stmt = stmt.on_conflict_do_update(
            index_elements=["pair_low", "pair_high"],
            set_={"time": latest(ChatHistory.time, stmt.excluded.time)},
        ).returning(ChatHistory.id)

        conversation_id = db.execute(stmt).scalar_one()
        conversation = db.scalars(
            select(ChatHistory)
            .where(ChatHistory.id == conversation_id)
            .execution_options(populate_existing=True)
        ).one()
        logger.debug(
            "Upserted conversation %s between users %s and %s",
            conversation_id,
            party_a.id,
            party_b.id,
        )
        return conversation

    @staticmethod
    def find_between(db: Session, first_id: int, second_id: int) -> ChatHistory | None:
        """Return the conversation for an unordered pair of user ids, if any."""
        low, high = ChatHistory.pair_key(first_id, second_id)
        return db.scalars(
            select(ChatHistory).where(
                ChatHistory.pair_low == low,
                ChatHistory.pair_high == high,
            )
        ).first()

    @staticmethod
    def list_for(db: Session, handle: str) -> list[ChatHistory]:
        """Return every conversation of `handle`, most recent first.

        Raises:
            NotFoundError: If the handle does not resolve.
        """
        user = resolve_by_handle(db, handle)
        stmt = (
            select(ChatHistory)
            .where(or_(ChatHistory.user_one == user.id, ChatHistory.user_two == user.id))
            .order_by(desc(ChatHistory.time), desc(ChatHistory.id))
        )
        return list(db.scalars(stmt))
