"""Tests for user registration, authentication and deletion."""

import pytest
from sqlalchemy import func, select

from duet.core.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from duet.models import ChatHistory, Email, FavouriteList, MailChat, Message, MessageChat, User
from duet.schemas.user import UserRegister, UserUpdate
from duet.services import favourites, identity
from duet.services.mail import MailLedger
from duet.services.messages import MessageStore


def test_register_lowercases_handle_and_hashes_password(db_session) -> None:
    user = identity.register_user(
        db_session,
        UserRegister(username="Dana", password="secret123", firstName="Dana", lastName="Doe"),
    )

    assert user.username == "dana"
    assert user.password != "secret123"
    assert user.is_admin is False
    assert identity.resolve_by_handle(db_session, "DANA").id == user.id


def test_register_duplicate_handle(db_session, alice) -> None:
    payload = UserRegister(username="ALICE", password="secret123", firstName="A", lastName="B")
    with pytest.raises(BadRequestError, match="Duplicated username: alice"):
        identity.register_user(db_session, payload)


def test_resolve_unknown_handle_and_id(db_session) -> None:
    with pytest.raises(NotFoundError, match="No user with this username: ghost"):
        identity.resolve_by_handle(db_session, "ghost")
    with pytest.raises(NotFoundError):
        identity.resolve_by_id(db_session, 12345)


def test_authenticate(db_session, alice) -> None:
    assert identity.authenticate(db_session, "Alice", "password123").id == alice.id
    with pytest.raises(UnauthorizedError):
        identity.authenticate(db_session, "alice", "wrong-password")
    with pytest.raises(UnauthorizedError):
        identity.authenticate(db_session, "nobody", "password123")


def test_list_users_orders_by_first_name(db_session, bob, alice) -> None:
    assert [u.username for u in identity.list_users(db_session)] == ["alice", "bob"]


def test_update_requires_current_password(db_session, alice) -> None:
    with pytest.raises(UnauthorizedError):
        identity.update_user(db_session, "alice", UserUpdate(password="nope", bio="new"))

    updated = identity.update_user(
        db_session,
        "alice",
        UserUpdate(password="password123", bio="Hello there", firstName="Ally"),
    )
    assert updated.bio == "Hello there"
    assert updated.first_name == "Ally"
    assert updated.last_name == "Tester"


def test_delete_user_cascades(db_session, alice, bob, carol) -> None:
    MessageStore.send(db_session, "hi", "alice", "bob")
    MessageStore.send(db_session, "hello", "bob", "alice")
    MessageStore.send(db_session, "untouched", "bob", "carol")
    favourites.add(db_session, bob.id, alice.id)
    MailLedger.send(db_session, "Hi", "Body", "alice", "friend@example.com", True)

    identity.delete_user(db_session, "alice")

    def count(model) -> int:
        return db_session.scalar(select(func.count()).select_from(model))

    assert db_session.scalars(select(User.username).order_by(User.username)).all() == ["bob", "carol"]
    assert count(Message) == 1
    assert count(MessageChat) == 1
    assert count(ChatHistory) == 1
    assert count(FavouriteList) == 0
    assert count(MailChat) == 0
    assert count(Email) == 0
