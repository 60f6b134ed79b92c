"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from starlette.requests import HTTPConnection

from duet.core.exceptions import UnauthorizedError
from duet.core.security import decode_access_token
from duet.db.session import get_db
from duet.models import User
from duet.services.relay import DeliveryRelay

# Missing credentials are reported through the JSON error envelope, not FastAPI's 403.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def user_from_token(db: Session, token: str | None) -> User | None:
    """Return the user a JWT belongs to, or None for a missing or bad token."""
    if not token:
        return None
    payload = decode_access_token(token)
    if payload is None:
        return None
    return db.query(User).filter(User.username == payload["sub"]).first()


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User | None:
    """Return the authenticated user, or None when no valid token was sent."""
    return user_from_token(db, credentials.credentials if credentials else None)


def get_current_user(
    user: Annotated[User | None, Depends(get_optional_user)],
) -> User:
    """Get the current authenticated user from the JWT bearer token.

    Raises:
        UnauthorizedError: If the token is missing, invalid, or names no user.
    """
    if user is None:
        raise UnauthorizedError()
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def ensure_admin(user: CurrentUserDep) -> User:
    """Require an authenticated administrator."""
    if not user.is_admin:
        raise UnauthorizedError()
    return user


AdminDep = Annotated[User, Depends(ensure_admin)]


def ensure_correct_user_or_admin(user: User, *usernames: str) -> None:
    """Require `user` to be an admin or one of `usernames`.

    Raises:
        UnauthorizedError: Otherwise.
    """
    if user.is_admin:
        return
    if user.username not in {name.strip().lower() for name in usernames}:
        raise UnauthorizedError()


def get_relay(connection: HTTPConnection) -> DeliveryRelay:
    """Return the process-wide delivery relay created at application start."""
    relay: DeliveryRelay = connection.app.state.relay
    return relay


RelayDep = Annotated[DeliveryRelay, Depends(get_relay)]
