"""Conversation history endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from duet.api.v1.dependencies import CurrentUserDep, SessionDep, ensure_correct_user_or_admin
from duet.schemas.chat_history import ConversationOut
from duet.services.conversations import ConversationLedger

router = APIRouter(prefix="/chat-history", tags=["chat-history"])


@router.get("/{username}")
async def list_conversations(
    username: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, Any]:
    """Return the user's conversations, most recently active first."""
    ensure_correct_user_or_admin(current_user, username)
    conversations = ConversationLedger.list_for(db, username)
    return {"conversations": [ConversationOut.model_validate(c) for c in conversations]}
