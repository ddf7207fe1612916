"""
Pydantic models for user data.

Defines schemas for registering, logging in, editing profiles and
reading users.  ``UserRecord`` is the stored form and carries the
password hash; it must never be serialised directly.  Use
``UserRead.from_record`` at the API boundary.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field, model_validator

Role = Literal["investor", "entrepreneur"]


class UserProfile(BaseModel):
    """Optional profile fields shared by investors and entrepreneurs."""

    avatar: Optional[str] = Field(None, examples=["https://example.com/avatar.jpg"])
    bio: Optional[str] = Field(None, examples=["Building fintech for small businesses."])
    company: Optional[str] = Field(None, examples=["PayFlow Solutions"])
    title: Optional[str] = Field(None, examples=["CEO & Founder"])
    location: Optional[str] = Field(None, examples=["San Francisco, CA"])
    website: Optional[str] = None
    linkedin: Optional[str] = None
    industries: Optional[List[str]] = Field(None, examples=[["FinTech", "B2B"]])
    # Investor-only fields
    investment_range: Optional[str] = Field(None, examples=["$2M - $10M"])
    portfolio_size: Optional[int] = Field(None, ge=0)
    # Entrepreneur-only field
    funding_need: Optional[str] = Field(None, examples=["$5M Series A"])


class UserBase(UserProfile):
    email: str = Field(..., examples=["alex.chen@example.com"])
    first_name: str = Field(..., min_length=1, examples=["Alex"])
    last_name: str = Field(..., min_length=1, examples=["Chen"])
    role: Role


class UserCreate(UserBase):
    """Schema for registering a user.

    ``confirm_password`` must repeat ``password``; it is dropped before
    the user is stored.
    """

    email: EmailStr
    password: str = Field(..., min_length=6)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self) -> "UserCreate":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class UserUpdate(UserProfile):
    """Partial profile update.  Only the fields sent are applied."""

    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    role: Optional[Role] = None
    password: Optional[str] = Field(None, min_length=6)


class UserRecord(UserBase):
    """A user as held by the store, password hash included."""

    id: int
    password: str
    created_at: datetime


class UserRead(UserBase):
    """Schema for reading a user from the API."""

    id: int
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }

    @classmethod
    def from_record(cls, record: UserRecord) -> "UserRead":
        return cls.model_validate(record.model_dump(exclude={"password"}))


class AuthResponse(BaseModel):
    user: UserRead
    access_token: str
    token_type: str = "bearer"
