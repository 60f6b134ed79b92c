"""Conversation ledger schemas."""

from pydantic import Field

from .common import OutModel, UTCDateTime


class ConversationOut(OutModel):
    """A conversation between two users with its last-activity time."""

    id: int
    user_one: int = Field(serialization_alias="userOne")
    user_two: int = Field(serialization_alias="userTwo")
    time: UTCDateTime
