"""Endpoints for external mail contacts."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, status

from duet.api.v1.dependencies import AdminDep, CurrentUserDep, SessionDep
from duet.schemas.mail import MailUserCreate, MailUserOut
from duet.services.mail import MailLedger

router = APIRouter(prefix="/mail-users", tags=["mail-users"])


@router.get("/")
async def list_mail_users(_admin: AdminDep, db: SessionDep) -> dict[str, Any]:
    return {"users": [MailUserOut.model_validate(c) for c in MailLedger.list_contacts(db)]}


@router.get("/{contact_id}")
async def get_mail_user(contact_id: int, _admin: AdminDep, db: SessionDep) -> dict[str, Any]:
    return {"user": MailUserOut.model_validate(MailLedger.get_contact(db, contact_id))}


@router.post("/", status_code=status.HTTP_201_CREATED)
async def add_mail_user(
    payload: MailUserCreate,
    _user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, Any]:
    contact = MailLedger.add_contact(db, payload.gmail_address)
    return {"user": MailUserOut.model_validate(contact)}


@router.delete("/{contact_id}")
async def delete_mail_user(contact_id: int, _admin: AdminDep, db: SessionDep) -> dict[str, Any]:
    """Delete a contact and the emails exchanged with it."""
    address = MailLedger.delete_contact(db, contact_id)
    return {"deleted": f"Mail user with email: {address}"}
