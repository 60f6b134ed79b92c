# src/duet/api/v1/endpoints/auth.py
"""Authentication endpoints: login and self-registration."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, status

from duet.api.v1.dependencies import SessionDep
from duet.core.security import create_access_token
from duet.models import User
from duet.schemas.user import AuthenticatedUser, UserLogin, UserRegister
from duet.services import identity

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


def _with_token(user: User) -> AuthenticatedUser:
    token = create_access_token(user.username, is_admin=user.is_admin)
    return AuthenticatedUser(
        username=user.username,
        first_name=user.first_name,
        last_name=user.last_name,
        gmail_address=user.gmail_address,
        bio=user.bio,
        is_admin=user.is_admin,
        token=token,
    )


@router.post("/login")
async def login(credentials: UserLogin, db: SessionDep) -> dict[str, Any]:
    """Exchange a username and password for an access token."""
    user = identity.authenticate(db, credentials.username, credentials.password)
    logger.debug("User %s logged in", user.username)
    return {"user": _with_token(user)}


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(payload: UserRegister, db: SessionDep) -> dict[str, Any]:
    """Create a regular (non-admin) account and return it with a token."""
    user = identity.register_user(db, payload)
    return {"newUser": _with_token(user)}
