"""Favourite list schemas."""

from pydantic import BaseModel, Field

from .common import OutModel, UTCDateTime


class FavouriteRequest(BaseModel):
    """Directed pair of user ids: ``sender`` favourites ``receiver``."""

    sender: int = Field(..., ge=1)
    receiver: int = Field(..., ge=1)


class FavouriteOut(OutModel):
    """Favourite row joined with the linked conversation's time."""

    id: int
    sender: int
    receiver: int
    time: UTCDateTime
