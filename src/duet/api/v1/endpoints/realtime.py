# src/duet/api/v1/endpoints/realtime.py
"""WebSocket endpoint relaying delivery events between connected users.

Frames in both directions are JSON text of the form ``{"event": ..., "data": ...}``.
Inbound events:

* ``join room``: data is the user's own handle; subscribes the socket to it.
* ``chat message``: data is an object (or JSON string) with ``sender`` and
  ``receiver``; echoed as ``receive message`` to both channels.
* ``read messages``: data is ``{"sender", "receiver"}``; marks every unseen
  message from sender to receiver as seen and emits ``read messages update``.

A failing event is answered with an ``error`` frame; the connection stays open.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from duet.api.v1.dependencies import RelayDep, SessionDep, user_from_token
from duet.core.exceptions import BadRequestError, DuetError, UnauthorizedError
from duet.schemas.message import ReadReceipt
from duet.schemas.realtime import ReadMessagesEvent, RealtimeFrame
from duet.services.messages import MessageStore
from duet.services.relay import ERROR, JOINED_ROOM, RECEIVE_MESSAGE, RelaySession

router = APIRouter(tags=["realtime"])
logger = logging.getLogger(__name__)

# Application-defined close code for a missing or invalid token.
WS_CLOSE_UNAUTHORIZED = 4001

Handler = Callable[[RelaySession, Session, Any], Awaitable[None]]


async def _join_room(session: RelaySession, db: Session, data: Any) -> None:
    if not isinstance(data, str):
        raise BadRequestError("join room expects a username")
    session.join(data)
    await session.send(JOINED_ROOM, {"room": session.handle})


async def _chat_message(session: RelaySession, db: Session, data: Any) -> None:
    if isinstance(data, str):
        data = json.loads(data)
    if not isinstance(data, dict) or not data.get("sender") or not data.get("receiver"):
        raise BadRequestError("chat message requires a sender and a receiver")
    sender = str(data["sender"]).strip().lower()
    if sender != session.username:
        raise UnauthorizedError("Cannot send chat messages on behalf of another user")
    receiver = str(data["receiver"]).strip().lower()
    await session.relay.notify_pair(sender, receiver, RECEIVE_MESSAGE, data)


async def _read_messages(session: RelaySession, db: Session, data: Any) -> None:
    event = ReadMessagesEvent.model_validate(data)
    sender = event.sender.strip().lower()
    receiver = event.receiver.strip().lower()
    if receiver != session.username:
        raise UnauthorizedError("Only the receiver can mark messages as read")

    newly_seen = MessageStore.mark_exchange_seen(db, sender, receiver)
    receipt = ReadReceipt(sender=sender, receiver=receiver, new_seen_messages=newly_seen)
    await session.relay.announce_read_receipt(receipt)


HANDLERS: dict[str, Handler] = {
    "join room": _join_room,
    "chat message": _chat_message,
    "read messages": _read_messages,
}


async def dispatch(session: RelaySession, db: Session, raw: str) -> None:
    """Handle one inbound text frame, answering failures with an ``error`` frame."""
    event = None
    error: dict[str, Any] | None = None
    try:
        frame = RealtimeFrame.model_validate_json(raw)
        event = frame.event
        handler = HANDLERS.get(event)
        if handler is None:
            raise BadRequestError(f"Unknown event: {event}")
        await handler(session, db, frame.data)
    except DuetError as err:
        logger.info("Rejected %r from %s: %s", event, session.username, err.message)
        error = {"event": event, **err.to_dict()["error"]}
    except ValueError as err:
        logger.info("Malformed %r from %s: %s", event, session.username, err)
        error = {"event": event, "message": "Malformed event", "status": 400}
    except SQLAlchemyError:
        logger.exception("Failed to handle %r from %s", event, session.username)
        error = {"event": event, "message": "Internal Server Error", "status": 500}
    finally:
        # No transaction (and no SQLite write lock) may outlive the event.
        db.rollback()

    if error is not None:
        await session.send(ERROR, error)


@router.websocket("/ws")
async def realtime(
    websocket: WebSocket,
    db: SessionDep,
    relay: RelayDep,
    token: str | None = None,
) -> None:
    """Authenticate with ``?token=<jwt>`` and exchange relay events."""
    user = user_from_token(db, token)
    username = user.username if user is not None else None
    db.rollback()
    if username is None:
        await websocket.close(code=WS_CLOSE_UNAUTHORIZED)
        return

    session = RelaySession(relay, websocket, username)
    await websocket.accept()
    logger.info("User %s connected", session.username)
    try:
        while True:
            raw = await websocket.receive_text()
            await dispatch(session, db, raw)
    except WebSocketDisconnect:
        logger.info("User %s disconnected", session.username)
    finally:
        session.close()
