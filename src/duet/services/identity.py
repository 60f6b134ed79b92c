"""Identity store: lookup, registration and lifecycle of application users."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from duet.core import security
from duet.core.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from duet.db.statements import atomic
from duet.models import (
    ChatHistory,
    Email,
    FavouriteList,
    MailChat,
    Message,
    MessageChat,
    User,
)
from duet.schemas.user import UserRegister, UserUpdate

__all__ = [
    "resolve_by_handle",
    "resolve_by_id",
    "list_users",
    "register_user",
    "authenticate",
    "update_user",
    "delete_user",
]

logger = logging.getLogger(__name__)


def resolve_by_handle(db: Session, handle: str) -> User:
    """Return the user registered under `handle`.

    Raises:
        NotFoundError: If no such user exists.
    """
    user = db.scalars(select(User).where(User.username == handle.strip().lower())).first()
    if user is None:
        raise NotFoundError(f"No user with this username: {handle}")
    return user


def resolve_by_id(db: Session, user_id: int) -> User:
    """Return the user with primary key `user_id`.

    Raises:
        NotFoundError: If no such user exists.
    """
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError(f"No user with this id: {user_id}")
    return user


def list_users(db: Session) -> Sequence[User]:
    """Return every user ordered by first name."""
    return db.scalars(select(User).order_by(User.first_name, User.id)).all()


def register_user(db: Session, data: UserRegister, *, is_admin: bool = False) -> User:
    """Persist a new user with a hashed password.

    Raises:
        BadRequestError: If the username is already taken.
    """
    if db.scalars(select(User.id).where(User.username == data.username)).first() is not None:
        raise BadRequestError(f"Duplicated username: {data.username}")

    user = User(
        username=data.username,
        password=security.hash_password(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
        gmail_address=data.gmail_address,
        bio=data.bio,
        is_admin=is_admin,
    )
    try:
        with atomic(db):
            db.add(user)
    except IntegrityError as err:
        # Lost a race with a concurrent registration of the same handle.
        raise BadRequestError(f"Duplicated username: {data.username}") from err
    db.refresh(user)
    logger.info("Registered user %s (id=%s)", user.username, user.id)
    return user


def authenticate(db: Session, username: str, password: str) -> User:
    """Return the user if `password` matches.

    Raises:
        UnauthorizedError: On unknown username or wrong password.
    """
    user = db.scalars(select(User).where(User.username == username.strip().lower())).first()
    if user is None or not security.verify_password(password, user.password):
        raise UnauthorizedError("Invalid username/password")
    return user


def update_user(db: Session, username: str, data: UserUpdate) -> User:
    """Apply a partial profile update after re-checking the password.

    Raises:
        NotFoundError: If the user does not exist.
        UnauthorizedError: If the supplied password is wrong.
    """
    user = resolve_by_handle(db, username)
    if not security.verify_password(data.password, user.password):
        raise UnauthorizedError("The password is not correct!")

    changes = data.model_dump(exclude_unset=True, exclude_none=True, exclude={"password"})
    with atomic(db):
        for key, value in changes.items():
            setattr(user, key, value)
    db.refresh(user)
    return user


def delete_user(db: Session, username: str) -> None:
    """Remove a user and every row that references them.

    Favourites, conversations, direct messages (with their delivery records)
    and emails exchanged with the user are deleted in the same transaction.
    """
    user = resolve_by_handle(db, username)
    user_id = user.id

    with atomic(db):
        db.execute(
            delete(FavouriteList).where(
                or_(FavouriteList.sender == user_id, FavouriteList.receiver == user_id)
            )
        )
        db.execute(
            delete(ChatHistory).where(
                or_(ChatHistory.user_one == user_id, ChatHistory.user_two == user_id)
            )
        )

        message_ids = list(
            db.scalars(
                select(MessageChat.message_id).where(
                    or_(MessageChat.sender == user_id, MessageChat.receiver == user_id)
                )
            )
        )
        if message_ids:
            db.execute(delete(MessageChat).where(MessageChat.message_id.in_(message_ids)))
            db.execute(delete(Message).where(Message.id.in_(message_ids)))

        email_ids = list(db.scalars(select(MailChat.email_id).where(MailChat.user_id == user_id)))
        if email_ids:
            db.execute(delete(MailChat).where(MailChat.email_id.in_(email_ids)))
            db.execute(delete(Email).where(Email.id.in_(email_ids)))

        db.delete(user)

    logger.info(
        "Deleted user %s with %d messages and %d emails",
        username,
        len(message_ids),
        len(email_ids),
    )
