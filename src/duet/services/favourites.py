"""Favourites index: directed favourites between users who have chatted."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from duet.core.exceptions import BadRequestError, NotFoundError
from duet.db.statements import atomic
from duet.models import ChatHistory, FavouriteList
from duet.schemas.favourite import FavouriteOut
from duet.services.conversations import ConversationLedger
from duet.services.identity import resolve_by_id

__all__ = ["list_for", "add", "delete"]

logger = logging.getLogger(__name__)


def _favourites_query():
    return select(
        FavouriteList.id,
        FavouriteList.sender,
        FavouriteList.receiver,
        ChatHistory.time,
    ).join(ChatHistory, ChatHistory.id == FavouriteList.chat_history_id)


def list_for(db: Session, user_id: int) -> list[FavouriteOut]:
    """Return the favourites `user_id` has marked, by conversation activity.

    Raises:
        NotFoundError: If the user does not exist.
    """
    resolve_by_id(db, user_id)
    rows = db.execute(
        _favourites_query()
        .where(FavouriteList.sender == user_id)
        .order_by(ChatHistory.time, FavouriteList.id)
    ).all()
    return [FavouriteOut.model_validate(row) for row in rows]


def add(db: Session, sender_id: int, receiver_id: int) -> FavouriteOut:
    """Mark `receiver_id` as a favourite of `sender_id`.

    Raises:
        NotFoundError: If either user is missing or the pair never chatted.
        BadRequestError: If the favourite already exists.
    """
    sender = resolve_by_id(db, sender_id)
    receiver = resolve_by_id(db, receiver_id)

    conversation = ConversationLedger.find_between(db, sender.id, receiver.id)
    if conversation is None:
        raise NotFoundError("Can't add users into a favourite list yet, they haven't chat.")

    favourite = FavouriteList(
        sender=sender.id,
        receiver=receiver.id,
        chat_history_id=conversation.id,
    )
    try:
        with atomic(db):
            db.add(favourite)
    except IntegrityError as err:
        raise BadRequestError(
            f"{receiver.username} is already in {sender.username}'s favourite list"
        ) from err

    row = db.execute(_favourites_query().where(FavouriteList.id == favourite.id)).one()
    logger.info("User %s added %s to favourites", sender.username, receiver.username)
    return FavouriteOut.model_validate(row)


def delete(db: Session, sender_id: int, receiver_id: int) -> int:
    """Remove the directed favourite and return its id.

    Raises:
        NotFoundError: If either user is missing or no such favourite exists.
    """
    sender = resolve_by_id(db, sender_id)
    receiver = resolve_by_id(db, receiver_id)
    favourite = db.scalars(
        select(FavouriteList).where(
            FavouriteList.sender == sender.id,
            FavouriteList.receiver == receiver.id,
        )
    ).first()
    if favourite is None:
        raise NotFoundError(
            f"User {receiver.username} is not {sender.username}'s favourite chat user"
        )

    favourite_id = favourite.id
    with atomic(db):
        db.delete(favourite)
    logger.info("User %s removed %s from favourites", sender.username, receiver.username)
    return favourite_id
