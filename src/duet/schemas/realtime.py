"""Frames exchanged over the real-time WebSocket."""

from typing import Any

from pydantic import BaseModel, Field


class RealtimeFrame(BaseModel):
    """Envelope for every inbound and outbound WebSocket text frame."""

    event: str = Field(..., min_length=1)
    data: Any = None


class ReadMessagesEvent(BaseModel):
    """Payload of an inbound ``read messages`` event."""

    sender: str = Field(..., min_length=1)
    receiver: str = Field(..., min_length=1)
