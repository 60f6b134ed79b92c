# src/duet/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    chat_history_router,
    emails_router,
    favourites_router,
    mail_users_router,
    messages_router,
    realtime_router,
    users_router,
)

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
