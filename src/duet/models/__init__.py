"""SQLAlchemy models for the Duet application."""

from .chat_history import ChatHistory
from .favourite import FavouriteList
from .mail import Email, MailChat, MailUser
from .message import Message, MessageChat
from .user import User

__all__ = [
    "ChatHistory",
    "FavouriteList",
    "Email", "MailChat", "MailUser",
    "Message", "MessageChat",
    "User",
]
