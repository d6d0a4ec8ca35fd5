"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserBase(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)


class UserCreate(UserBase):
    send_welcome_email: bool = True


class UserUpdate(BaseModel):
    username: str | None = Field(default=None, min_length=3, max_length=50)
    email: EmailStr | None = None
    first_name: str | None = Field(default=None, min_length=1, max_length=50)
    last_name: str | None = Field(default=None, min_length=1, max_length=50)

    model_config = ConfigDict(extra="forbid")


class UserRead(BaseModel):
    id: int
    username: str
    email: EmailStr
    first_name: str
    last_name: str
    display_name: str
    created_at: datetime | None
    updated_at: datetime | None
    created_by: int | None
    updated_by: int | None
    age_in_days: int
    modified_recently: bool
    modified_after_creation: bool

    model_config = ConfigDict(from_attributes=True)


__all__ = ["UserCreate", "UserRead", "UserUpdate"]
