# src/duet/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .chat_history import router as chat_history_router
from .emails import router as emails_router
from .favourites import router as favourites_router
from .mail_users import router as mail_users_router
from .messages import router as messages_router
from .realtime import router as realtime_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "users_router",
    "messages_router",
    "emails_router",
    "mail_users_router",
    "chat_history_router",
    "favourites_router",
    "realtime_router",
]
