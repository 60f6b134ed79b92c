# src/duet/services/__init__.py
"""Business logic services for the Duet application."""

from . import favourites, identity
from .conversations import ConversationLedger
from .mail import MailLedger
from .messages import MessageStore
from .relay import DeliveryRelay, RelaySession

__all__ = [
    "ConversationLedger",
    "DeliveryRelay",
    "MailLedger",
    "MessageStore",
    "RelaySession",
    "favourites",
    "identity",
]
