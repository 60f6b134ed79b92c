"""Favourite list endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, status

from duet.api.v1.dependencies import CurrentUserDep, SessionDep
from duet.core.exceptions import UnauthorizedError
from duet.models import User
from duet.schemas.favourite import FavouriteRequest
from duet.services import favourites

router = APIRouter(prefix="/favourite", tags=["favourites"])


def _ensure_sender(user: User, payload: FavouriteRequest) -> None:
    if not (user.is_admin or user.id == payload.sender):
        raise UnauthorizedError()


@router.get("/{user_id}")
async def list_favourites(user_id: int, _user: CurrentUserDep, db: SessionDep) -> dict[str, Any]:
    return {"favourite": favourites.list_for(db, user_id)}


@router.post("/", status_code=status.HTTP_201_CREATED)
async def add_favourite(
    payload: FavouriteRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, Any]:
    """Add `receiver` to the favourites of `sender`, who must have chatted with them."""
    _ensure_sender(current_user, payload)
    return {"favourite": favourites.add(db, payload.sender, payload.receiver)}


@router.delete("/")
async def delete_favourite(
    payload: FavouriteRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, Any]:
    _ensure_sender(current_user, payload)
    favourites.delete(db, payload.sender, payload.receiver)
    return {
        "deleted": (
            f"User with id {payload.receiver} from favourite list of user with id {payload.sender}"
        )
    }
