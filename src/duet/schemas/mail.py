"""Schemas for mail contacts and email-style messages."""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import OutModel, UTCDateTime

_ADDRESS_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _normalize_address(value: str) -> str:
    value = value.strip().lower()
    if not _ADDRESS_RE.match(value):
        raise ValueError("Mail address must look like name@domain.tld")
    return value


class MailUserCreate(BaseModel):
    """Schema for adding an external contact."""

    gmail_address: str = Field(..., alias="gmailAddress", max_length=254)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("gmail_address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        return _normalize_address(v)


class MailUserOut(OutModel):
    """External contact."""

    id: int
    gmail_address: str = Field(serialization_alias="gmailAddress")


class EmailCreate(BaseModel):
    """Schema for recording an email between an app user and a contact."""

    subject_line: str = Field(..., alias="subjectLine", min_length=1, max_length=200)
    text: str = Field(..., min_length=1, max_length=20000)
    app_user: str = Field(..., alias="appUser", min_length=1)
    mail_user: str = Field(..., alias="mailUser", max_length=254)
    sent_by_app_user: bool = Field(..., alias="sentByAppUser")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("mail_user")
    @classmethod
    def validate_mail_user(cls, v: str) -> str:
        return _normalize_address(v)


class EmailSummary(OutModel):
    """Email content without the parties."""

    id: int
    subject_line: str = Field(serialization_alias="subjectLine")
    text: str
    time: UTCDateTime


class EmailOut(EmailSummary):
    """Email with sender and receiver resolved for display."""

    sender: str
    receiver: str
