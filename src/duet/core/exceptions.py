"""Domain exceptions raised by the service layer.

Services raise these instead of ``HTTPException`` so they can be reused by the
WebSocket relay. ``duet.main`` registers a handler that renders them as::

    {"error": {"message": "...", "status": 404}}
"""

from __future__ import annotations

from typing import Any


class DuetError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: Any = None) -> None:
        self.message = message if message is not None else self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the error envelope used in API responses."""
        return {"error": {"message": self.message, "status": self.status_code}}


class NotFoundError(DuetError):
    """A referenced user, message, conversation or favourite is absent."""

    status_code = 404
    default_message = "Not Found"


class BadRequestError(DuetError):
    """Malformed input, duplicates, or a precondition the caller can fix."""

    status_code = 400
    default_message = "Bad Request"


class UnauthorizedError(DuetError):
    """Missing or invalid credentials, or no relationship to the resource."""

    status_code = 401
    default_message = "Unauthorized"
