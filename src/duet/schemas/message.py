# src/duet/schemas/message.py
"""Direct message-related Pydantic schemas."""

from pydantic import BaseModel, Field

from .common import OutModel, UTCDateTime


class MessageCreate(BaseModel):
    """Schema for sending a new direct message."""

    text: str = Field(..., min_length=1, max_length=5000, description="Message body")


class MessageSummary(OutModel):
    """Message content without delivery metadata."""

    id: int
    text: str
    time: UTCDateTime


class MessageOut(MessageSummary):
    """A freshly sent message with both parties' handles."""

    sender: str
    receiver: str


class MessageDetail(MessageOut):
    """A stored message joined with its delivery record."""

    seen: bool


class ExchangeEntry(OutModel):
    """One delivery record in the exchange between two users."""

    id: int
    sender: int
    receiver: int
    message_id: int = Field(serialization_alias="messageId")
    time: UTCDateTime


class SeenMessage(OutModel):
    """Delivery record after a seen transition."""

    id: int
    sender: int
    receiver: int
    message_id: int = Field(serialization_alias="messageId")
    seen: bool


class ReadReceipt(OutModel):
    """Aggregate notification emitted after a batch of messages was read."""

    sender: str
    receiver: str
    new_seen_messages: list[int] = Field(serialization_alias="newSeenMessages")
