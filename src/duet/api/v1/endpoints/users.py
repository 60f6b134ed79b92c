"""User profile endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from duet.api.v1.dependencies import (
    AdminDep,
    CurrentUserDep,
    SessionDep,
    ensure_correct_user_or_admin,
)
from duet.schemas.user import UserDetail, UserOut, UserUpdate
from duet.services import identity

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/")
async def list_users(_admin: AdminDep, db: SessionDep) -> dict[str, Any]:
    """List every registered user (admin only)."""
    return {"users": [UserOut.model_validate(user) for user in identity.list_users(db)]}


@router.get("/id/{user_id}")
async def get_user_by_id(user_id: int, _user: CurrentUserDep, db: SessionDep) -> dict[str, Any]:
    return {"user": UserDetail.model_validate(identity.resolve_by_id(db, user_id))}


@router.get("/{username}")
async def get_user(username: str, _user: CurrentUserDep, db: SessionDep) -> dict[str, Any]:
    return {"user": UserDetail.model_validate(identity.resolve_by_handle(db, username))}


@router.patch("/{username}")
async def update_user(
    username: str,
    payload: UserUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, Any]:
    """Update profile fields; the account's current password must be supplied."""
    ensure_correct_user_or_admin(current_user, username)
    user = identity.update_user(db, username, payload)
    return {"user": UserOut.model_validate(user)}


@router.delete("/{username}")
async def delete_user(username: str, current_user: CurrentUserDep, db: SessionDep) -> dict[str, Any]:
    """Delete an account together with everything that references it."""
    ensure_correct_user_or_admin(current_user, username)
    identity.delete_user(db, username)
    return {"deleted": username}
