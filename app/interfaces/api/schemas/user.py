"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class UserBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=80)
    last_name: str = Field(..., min_length=1, max_length=80)
    email: EmailStr
    phone_number: str | None = Field(default=None, max_length=32)
    is_active: bool = True
    email_enabled: bool = True
    sms_enabled: bool = False
    push_enabled: bool = True
    preferences: list[str] = Field(default_factory=list)


class UserCreate(UserBase):
    model_config = ConfigDict(extra="forbid")


class UserUpdate(BaseModel):
    first_name: str | None = Field(default=None, min_length=1, max_length=80)
    last_name: str | None = Field(default=None, min_length=1, max_length=80)
    email: EmailStr | None = None
    phone_number: str | None = Field(default=None, max_length=32)
    is_active: bool | None = None
    email_enabled: bool | None = None
    sms_enabled: bool | None = None
    push_enabled: bool | None = None
    preferences: list[str] | None = None

    model_config = ConfigDict(extra="forbid")


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    phone_number: str | None = None
    is_active: bool
    email_enabled: bool
    sms_enabled: bool
    push_enabled: bool
    preferences: list[str]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("preferences", mode="before")
    @classmethod
    def _sort_preferences(cls, value):
        return sorted(value) if isinstance(value, (set, frozenset)) else value


__all__ = ["UserCreate", "UserRead", "UserUpdate"]
