"""Mail ledger: external contacts and the emails exchanged with them."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from duet.core.exceptions import BadRequestError, NotFoundError
from duet.db.statements import atomic, insert_for
from duet.models import Email, MailChat, MailUser, User
from duet.schemas.mail import EmailOut, EmailSummary
from duet.services.identity import resolve_by_handle

logger = logging.getLogger(__name__)


class MailLedger:
    """Service for mail contacts and email records."""

    # Contacts

    @staticmethod
    def ensure_contact(db: Session, address: str) -> MailUser:
        """Return the contact for `address`, creating it on first reference.

        Concurrent first references converge on one row through the unique
        address constraint. The caller owns the commit.
        """
        insert = insert_for(db)
        db.execute(
            insert(MailUser)
            .values(gmail_address=address)
            .on_conflict_do_nothing(index_elements=["gmail_address"])
        )
        return db.scalars(select(MailUser).where(MailUser.gmail_address == address)).one()

    @staticmethod
    def add_contact(db: Session, address: str) -> MailUser:
        """Explicitly register a new contact.

        Raises:
            BadRequestError: If the address is already registered.
        """
        insert = insert_for(db)
        with atomic(db):
            contact_id = db.execute(
                insert(MailUser)
                .values(gmail_address=address)
                .on_conflict_do_nothing(index_elements=["gmail_address"])
                .returning(MailUser.id)
            ).scalar_one_or_none()
        if contact_id is None:
            raise BadRequestError(f"Duplicated mail: {address}")

        logger.info("Added mail contact %s (id=%s)", address, contact_id)
        return MailLedger.get_contact(db, contact_id)

    @staticmethod
    def get_contact(db: Session, contact_id: int) -> MailUser:
        """Return a contact by id.

        Raises:
            NotFoundError: If the contact does not exist.
        """
        contact = db.get(MailUser, contact_id)
        if contact is None:
            raise NotFoundError(f"No gmail user with this id: {contact_id}")
        return contact

    @staticmethod
    def list_contacts(db: Session) -> Sequence[MailUser]:
        return db.scalars(select(MailUser).order_by(MailUser.id)).all()

    @staticmethod
    def delete_contact(db: Session, contact_id: int) -> str:
        """Delete a contact with every email exchanged with it.

        Returns:
            The deleted contact's address.

        Raises:
            NotFoundError: If the contact does not exist.
        """
        contact = MailLedger.get_contact(db, contact_id)
        address = contact.gmail_address

        with atomic(db):
            email_ids = list(
                db.scalars(select(MailChat.email_id).where(MailChat.mail_user_id == contact_id))
            )
            if email_ids:
                db.execute(delete(MailChat).where(MailChat.email_id.in_(email_ids)))
                db.execute(delete(Email).where(Email.id.in_(email_ids)))
            db.delete(contact)

        logger.info("Deleted mail contact %s with %d emails", address, len(email_ids))
        return address

    # Emails

    @staticmethod
    def list_all(db: Session) -> list[EmailSummary]:
        """Return every email ordered by time."""
        emails = db.scalars(select(Email).order_by(Email.time, Email.id))
        return [EmailSummary.model_validate(email) for email in emails]

    @staticmethod
    def send(
        db: Session,
        subject: str,
        text: str,
        app_user: str,
        mail_user: str,
        sent_by_app_user: bool,
    ) -> EmailOut:
        """Record an email between an app user and an external address.

        The contact is created if it does not exist yet. The contact, the
        email and its delivery record are committed together.

        Raises:
            NotFoundError: If `app_user` is not a registered handle.
        """
        user = resolve_by_handle(db, app_user)

        with atomic(db):
            contact = MailLedger.ensure_contact(db, mail_user)
            email = Email(subject_line=subject, text=text)
            email.chat = MailChat(
                user_id=user.id,
                mail_user_id=contact.id,
                sent_by_app_user=sent_by_app_user,
            )
            db.add(email)

        logger.info(
            "Recorded email %s between %s and %s",
            email.id,
            user.username,
            contact.gmail_address,
        )
        return _with_parties(email, user.username, contact.gmail_address, sent_by_app_user)

    @staticmethod
    def get(db: Session, email_id: int) -> EmailOut:
        """Return an email with sender and receiver resolved from its direction.

        Raises:
            NotFoundError: If the email does not exist.
        """
        row = db.execute(
            select(Email, User.username, MailUser.gmail_address, MailChat.sent_by_app_user)
            .join(MailChat, MailChat.email_id == Email.id)
            .join(User, User.id == MailChat.user_id)
            .join(MailUser, MailUser.id == MailChat.mail_user_id)
            .where(Email.id == email_id)
        ).first()
        if row is None:
            raise NotFoundError(f"No email with this id: {email_id}")

        email, username, address, sent_by_app_user = row
        return _with_parties(email, username, address, sent_by_app_user)

    @staticmethod
    def delete(db: Session, email_id: int) -> None:
        """Delete an email and its delivery record.

        Raises:
            NotFoundError: If the email does not exist.
        """
        email = db.get(Email, email_id)
        if email is None:
            raise NotFoundError(f"No email with this id: {email_id}")

        with atomic(db):
            db.delete(email)
        logger.info("Deleted email %s", email_id)


def _with_parties(email: Email, username: str, address: str, sent_by_app_user: bool) -> EmailOut:
    sender, receiver = (username, address) if sent_by_app_user else (address, username)
    return EmailOut(
        id=email.id,
        subject_line=email.subject_line,
        text=email.text,
        time=email.time,
        sender=sender,
        receiver=receiver,
    )
