"""initial schema

Revision ID: 5c1e2a9d7b40
Revises:
Create Date: 2026-10-19 09:12:44.318402

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1e2a9d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, direct messages, conversations, favourites and mail tables."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("password", sa.Text(), nullable=False),
        sa.Column("first_name", sa.Text(), nullable=False),
        sa.Column("last_name", sa.Text(), nullable=False),
        sa.Column("gmail_address", sa.Text(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("is_admin", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)

    op.create_table(
        "messages",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("time", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "message_chat",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("sender", sa.Integer(), nullable=False),
        sa.Column("receiver", sa.Integer(), nullable=False),
        sa.Column("message_id", sa.Integer(), nullable=False),
        sa.Column("seen", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["sender"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["receiver"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["message_id"], ["messages.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("message_id"),
    )
    op.create_index(op.f("ix_message_chat_sender"), "message_chat", ["sender"], unique=False)
    op.create_index(op.f("ix_message_chat_receiver"), "message_chat", ["receiver"], unique=False)

    op.create_table(
        "chat_history",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_one", sa.Integer(), nullable=False),
        sa.Column("user_two", sa.Integer(), nullable=False),
        sa.Column("pair_low", sa.Integer(), nullable=False),
        sa.Column("pair_high", sa.Integer(), nullable=False),
        sa.Column("time", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_one"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_two"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("pair_low", "pair_high", name="uq_chat_history_pair"),
    )

    op.create_table(
        "favourite_list",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("sender", sa.Integer(), nullable=False),
        sa.Column("receiver", sa.Integer(), nullable=False),
        sa.Column("chat_history_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["sender"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["receiver"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["chat_history_id"], ["chat_history.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("sender", "receiver", name="uq_favourite_list_pair"),
    )
    op.create_index(op.f("ix_favourite_list_sender"), "favourite_list", ["sender"], unique=False)

    op.create_table(
        "mail_users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("gmail_address", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("gmail_address"),
    )

    op.create_table(
        "emails",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("subject_line", sa.Text(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("time", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "mail_chat",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("mail_user_id", sa.Integer(), nullable=False),
        sa.Column("email_id", sa.Integer(), nullable=False),
        sa.Column("sent_by_app_user", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["mail_user_id"], ["mail_users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["email_id"], ["emails.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email_id"),
    )
    op.create_index(op.f("ix_mail_chat_user_id"), "mail_chat", ["user_id"], unique=False)
    op.create_index(op.f("ix_mail_chat_mail_user_id"), "mail_chat", ["mail_user_id"], unique=False)


def downgrade() -> None:
    """Drop every table in reverse dependency order."""
    op.drop_index(op.f("ix_mail_chat_mail_user_id"), table_name="mail_chat")
    op.drop_index(op.f("ix_mail_chat_user_id"), table_name="mail_chat")
    op.drop_table("mail_chat")
    op.drop_table("emails")
    op.drop_table("mail_users")
    op.drop_index(op.f("ix_favourite_list_sender"), table_name="favourite_list")
    op.drop_table("favourite_list")
    op.drop_table("chat_history")
    op.drop_index(op.f("ix_message_chat_receiver"), table_name="message_chat")
    op.drop_index(op.f("ix_message_chat_sender"), table_name="message_chat")
    op.drop_table("message_chat")
    op.drop_table("messages")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
