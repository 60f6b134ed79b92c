# src/duet/api/v1/endpoints/messages.py
"""Direct message endpoints for the Duet API."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, status
from sqlalchemy.orm import Session

from duet.api.v1.dependencies import (
    AdminDep,
    CurrentUserDep,
    RelayDep,
    SessionDep,
    ensure_correct_user_or_admin,
)
from duet.models import User
from duet.schemas.message import MessageCreate, MessageDetail
from duet.services.messages import MessageStore

router = APIRouter(prefix="/messages", tags=["messages"])


def _get_as_party(db: Session, message_id: int, user: User) -> MessageDetail:
    """Load a message, requiring `user` to be one of its parties or an admin."""
    message = MessageStore.get(db, message_id)
    ensure_correct_user_or_admin(user, message.sender, message.receiver)
    return message


@router.get("/")
async def list_messages(_admin: AdminDep, db: SessionDep) -> dict[str, Any]:
    return {"messages": MessageStore.find_all(db)}


@router.get("/conversation/{first}/{second}")
async def get_conversation(
    first: str,
    second: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, Any]:
    """Return every delivery record exchanged between two users, oldest first."""
    ensure_correct_user_or_admin(current_user, first, second)
    return {"conversation": MessageStore.exchange(db, first, second)}


@router.post("/send/{receiver}", status_code=status.HTTP_201_CREATED)
async def send_message(
    receiver: str,
    payload: MessageCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    relay: RelayDep,
) -> dict[str, Any]:
    """Send a message from the current user and push it to both parties."""
    message = MessageStore.send(db, payload.text, current_user.username, receiver)
    await relay.announce_message(message)
    return {"message": message}


@router.patch("/seen/{message_id}")
async def mark_seen(message_id: int, current_user: CurrentUserDep, db: SessionDep) -> dict[str, Any]:
    _get_as_party(db, message_id, current_user)
    return {"seenMessage": MessageStore.mark_seen(db, message_id)}


@router.get("/{message_id}")
async def get_message(message_id: int, current_user: CurrentUserDep, db: SessionDep) -> dict[str, Any]:
    return {"message": _get_as_party(db, message_id, current_user)}


@router.delete("/{message_id}")
async def delete_message(message_id: int, current_user: CurrentUserDep, db: SessionDep) -> dict[str, Any]:
    _get_as_party(db, message_id, current_user)
    MessageStore.delete(db, message_id)
    return {"deleted": f"Message with id {message_id}"}
