"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import OutModel


class UserRegister(BaseModel):
    """Schema for registering a new account."""

    username: str = Field(..., min_length=1, max_length=30)
    password: str = Field(..., min_length=5, max_length=128)
    first_name: str = Field(..., alias="firstName", min_length=1, max_length=30)
    last_name: str = Field(..., alias="lastName", min_length=1, max_length=30)
    gmail_address: str | None = Field(None, alias="gmailAddress", max_length=254)
    bio: str | None = Field(None, max_length=500)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str) -> str:
        """Handles are stored lower-cased and must not contain whitespace."""
        v = v.strip().lower()
        if not v or any(ch.isspace() for ch in v):
            raise ValueError("Username must be a single word")
        return v


class UserLogin(BaseModel):
    """Schema for login submissions."""

    username: str = Field(..., min_length=1, max_length=30)
    password: str = Field(..., min_length=1)


class UserUpdate(BaseModel):
    """Profile update; the current password is required to apply it."""

    password: str = Field(..., min_length=1)
    first_name: str | None = Field(None, alias="firstName", min_length=1, max_length=30)
    last_name: str | None = Field(None, alias="lastName", min_length=1, max_length=30)
    gmail_address: str | None = Field(None, alias="gmailAddress", max_length=254)
    bio: str | None = Field(None, max_length=500)

    model_config = ConfigDict(populate_by_name=True)


class UserOut(OutModel):
    """Public profile fields."""

    username: str
    first_name: str = Field(serialization_alias="firstName")
    last_name: str = Field(serialization_alias="lastName")
    gmail_address: str | None = Field(None, serialization_alias="gmailAddress")
    bio: str | None = None
    is_admin: bool = Field(False, serialization_alias="isAdmin")


class UserDetail(UserOut):
    """Profile fields including the numeric id."""

    id: int


class AuthenticatedUser(UserOut):
    """Profile returned from login/register together with an access token."""

    token: str
