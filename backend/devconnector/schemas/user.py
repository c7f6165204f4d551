"""
DevConnector Backend: Account Schemas
======================================

Request bodies for registration and login, and the token / user responses.
The password hash never appears in any response model.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from devconnector.validation import require, require_email, require_min_length

MIN_PASSWORD_LENGTH = 3


class RegisterRequest(BaseModel):
    """Body of POST /api/users."""
    name: Optional[str] = Field(default=None, validate_default=True)
    email: Optional[str] = Field(default=None, validate_default=True)
    password: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("name", mode="before")
    @classmethod
    def _name_required(cls, value):
        return require(value, "Name is required")

    @field_validator("email", mode="before")
    @classmethod
    def _email_valid(cls, value):
        return require_email(value, "Please include a valid email")

    @field_validator("password", mode="before")
    @classmethod
    def _password_long_enough(cls, value):
        return require_min_length(
            value,
            MIN_PASSWORD_LENGTH,
            f"Please enter a password with {MIN_PASSWORD_LENGTH} or more characters",
        )


class LoginRequest(BaseModel):
    """Body of POST /api/auth."""
    email: Optional[str] = Field(default=None, validate_default=True)
    password: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("email", mode="before")
    @classmethod
    def _email_valid(cls, value):
        return require_email(value, "Email is required")

    @field_validator("password", mode="before")
    @classmethod
    def _password_required(cls, value):
        return require(value, "Password is required")


class TokenResponse(BaseModel):
    token: str = Field(description="Signed access token for the x-auth-token header")


class UserResponse(BaseModel):
    """A user as returned by GET /api/auth (no password)."""
    id: uuid.UUID
    name: str
    email: str
    avatar: str
    date: datetime

    model_config = {"from_attributes": True}
