"""
Pydantic schemas for API request/response models.

Response schemas serialize with the camelCase keys the web client expects.
"""

from .chat_history import ConversationOut
from .favourite import FavouriteOut, FavouriteRequest
from .mail import EmailCreate, EmailOut, EmailSummary, MailUserCreate, MailUserOut
from .message import (
    ExchangeEntry,
    MessageCreate,
    MessageDetail,
    MessageOut,
    MessageSummary,
    ReadReceipt,
    SeenMessage,
)
from .realtime import ReadMessagesEvent, RealtimeFrame
from .user import AuthenticatedUser, UserDetail, UserLogin, UserOut, UserRegister, UserUpdate

__all__ = [
    "ConversationOut",
    "FavouriteOut", "FavouriteRequest",
    "EmailCreate", "EmailOut", "EmailSummary", "MailUserCreate", "MailUserOut",
    "ExchangeEntry", "MessageCreate", "MessageDetail", "MessageOut", "MessageSummary",
    "ReadReceipt", "SeenMessage",
    "ReadMessagesEvent", "RealtimeFrame",
    "AuthenticatedUser", "UserDetail", "UserLogin", "UserOut", "UserRegister", "UserUpdate",
]
