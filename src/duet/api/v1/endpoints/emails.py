"""Endpoints for emails exchanged with external contacts."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from duet.api.v1.dependencies import (
    AdminDep,
    CurrentUserDep,
    SessionDep,
    ensure_correct_user_or_admin,
)
from duet.schemas.mail import EmailCreate
from duet.services.mail import MailLedger

router = APIRouter(prefix="/emails", tags=["emails"])


@router.get("/")
async def list_emails(_admin: AdminDep, db: SessionDep) -> dict[str, Any]:
    return {"emails": MailLedger.list_all(db)}


@router.get("/{email_id}")
async def get_email(email_id: int, current_user: CurrentUserDep, db: SessionDep) -> dict[str, Any]:
    """Return an email to its sender, its receiver or an admin."""
    email = MailLedger.get(db, email_id)
    ensure_correct_user_or_admin(current_user, email.sender, email.receiver)
    return {"email": email}


@router.post("/")
async def send_email(payload: EmailCreate, current_user: CurrentUserDep, db: SessionDep) -> dict[str, Any]:
    """Record an email on behalf of the current user."""
    ensure_correct_user_or_admin(current_user, payload.app_user)
    email = MailLedger.send(
        db,
        payload.subject_line,
        payload.text,
        payload.app_user,
        payload.mail_user,
        payload.sent_by_app_user,
    )
    return {"email": email}


@router.delete("/{email_id}")
async def delete_email(email_id: int, _admin: AdminDep, db: SessionDep) -> dict[str, Any]:
    MailLedger.delete(db, email_id)
    return {"deleted": f"Email with id {email_id}"}
