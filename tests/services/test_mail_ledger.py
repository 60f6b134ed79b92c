"""Tests for mail contacts and email records."""

import pytest
from sqlalchemy import func, select

from duet.core.exceptions import BadRequestError, NotFoundError
from duet.models import Email, MailChat, MailUser
from duet.services.mail import MailLedger


def _count(db_session, model) -> int:
    return db_session.scalar(select(func.count()).select_from(model))


def test_send_creates_contact_once(db_session, alice) -> None:
    first = MailLedger.send(db_session, "Hi", "First", "alice", "pal@example.com", True)
    second = MailLedger.send(db_session, "Re: Hi", "Second", "alice", "pal@example.com", False)

    assert _count(db_session, MailUser) == 1
    assert (first.sender, first.receiver) == ("alice", "pal@example.com")
    assert (second.sender, second.receiver) == ("pal@example.com", "alice")


def test_send_from_unknown_user_writes_nothing(db_session) -> None:
    with pytest.raises(NotFoundError):
        MailLedger.send(db_session, "Hi", "Body", "ghost", "pal@example.com", True)

    assert _count(db_session, MailUser) == 0
    assert _count(db_session, Email) == 0


def test_get_resolves_direction(db_session, alice) -> None:
    sent = MailLedger.send(db_session, "Hi", "Body", "alice", "pal@example.com", False)

    email = MailLedger.get(db_session, sent.id)
    assert email.subject_line == "Hi"
    assert (email.sender, email.receiver) == ("pal@example.com", "alice")

    with pytest.raises(NotFoundError, match="No email with this id"):
        MailLedger.get(db_session, sent.id + 100)


def test_add_contact_rejects_duplicates(db_session) -> None:
    contact = MailLedger.add_contact(db_session, "pal@example.com")
    assert contact.gmail_address == "pal@example.com"

    with pytest.raises(BadRequestError, match="Duplicated mail: pal@example.com"):
        MailLedger.add_contact(db_session, "pal@example.com")
    assert [c.id for c in MailLedger.list_contacts(db_session)] == [contact.id]


def test_delete_contact_removes_its_emails(db_session, alice) -> None:
    MailLedger.send(db_session, "Hi", "Body", "alice", "pal@example.com", True)
    MailLedger.send(db_session, "Hi", "Body", "alice", "other@example.com", True)
    contact = db_session.scalars(
        select(MailUser).where(MailUser.gmail_address == "pal@example.com")
    ).one()

    assert MailLedger.delete_contact(db_session, contact.id) == "pal@example.com"
    assert _count(db_session, Email) == 1
    assert _count(db_session, MailChat) == 1
    with pytest.raises(NotFoundError):
        MailLedger.get_contact(db_session, contact.id)


def test_delete_email(db_session, alice) -> None:
    sent = MailLedger.send(db_session, "Hi", "Body", "alice", "pal@example.com", True)

    MailLedger.delete(db_session, sent.id)

    assert MailLedger.list_all(db_session) == []
    assert _count(db_session, MailChat) == 0
    with pytest.raises(NotFoundError):
        MailLedger.delete(db_session, sent.id)
