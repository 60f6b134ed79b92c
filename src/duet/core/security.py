"""Password hashing and access token helpers."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import nacl.pwhash
from jose import JWTError, jwt
from nacl.exceptions import InvalidkeyError

from duet.core.settings import settings


def hash_password(password: str) -> str:
    """Return an argon2id hash string for `password`."""
    hashed = nacl.pwhash.str(
        password.encode("utf-8"),
        opslimit=settings.pwhash_opslimit,
        memlimit=settings.pwhash_memlimit,
    )
    return hashed.decode("ascii")


def verify_password(password: str, hashed: str) -> bool:
    """Return True if `password` matches the stored argon2id hash."""
    try:
        return nacl.pwhash.verify(hashed.encode("ascii"), password.encode("utf-8"))
    except InvalidkeyError:
        return False


def create_access_token(username: str, *, is_admin: bool = False) -> str:
    """Create a signed JWT whose subject is the user's handle."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode: dict[str, Any] = {
        "sub": username,
        "is_admin": is_admin,
        "exp": expire,
    }
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Decode and verify a JWT, returning its claims or None when invalid."""
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None
    if not payload.get("sub"):
        return None
    return payload
