"""Shared Pydantic types for API payloads."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict

from duet.db.time import as_utc

UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]


class OutModel(BaseModel):
    """Base for response schemas built from ORM rows or plain dicts."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
