"""
Authentication schemas.

Dependencies: pydantic
System role: Auth API contracts
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from resourcehub.models.user import UserResponse


class RegisterRequest(BaseModel):
    """Request schema for account registration. Admins cannot self-register."""

    email: str = Field(..., max_length=320)
    password: str = Field(..., max_length=256)
    name: str = Field(default="", max_length=255)
    role: Literal["user", "creator"] = "user"


class LoginRequest(BaseModel):
    email: str = Field(..., max_length=320)
    password: str = Field(..., max_length=256)


class TokenResponse(BaseModel):
    """Bearer token issued at login."""

    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserResponse
