"""
User domain schemas.

Request/response schemas for profiles, settings and admin user management.

Dependencies: pydantic
System role: User API contracts
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class SocialLinks(BaseModel):
    """Optional social profile links."""

    twitter: str | None = Field(None, max_length=512)
    instagram: str | None = Field(None, max_length=512)
    facebook: str | None = Field(None, max_length=512)
    linkedin: str | None = Field(None, max_length=512)


class UserSettings(BaseModel):
    """Effective user preferences."""

    emailNotifications: bool = True
    marketingEmails: bool = False
    resourceUpdates: bool = True
    theme: Literal["light", "dark", "system"] = "system"
    language: str = "en"
    profileVisibility: Literal["public", "private"] = "public"


class UpdateSettingsRequest(BaseModel):
    """Partial settings update; omitted keys keep their stored value."""

    emailNotifications: bool | None = None
    marketingEmails: bool | None = None
    resourceUpdates: bool | None = None
    theme: Literal["light", "dark", "system"] | None = None
    language: str | None = Field(None, min_length=2, max_length=16)
    profileVisibility: Literal["public", "private"] | None = None


class UpdateProfileRequest(BaseModel):
    """Request schema for profile edits. Email and role are not editable here."""

    name: str | None = Field(None, max_length=255)
    bio: str | None = Field(None, max_length=4096)
    website: str | None = Field(None, max_length=512)
    social: SocialLinks | None = None


class ConfirmAvatarRequest(BaseModel):
    """Key returned by the avatar presign call, after the upload finished."""

    key: str = Field(..., min_length=1, max_length=1024)


class UserResponse(BaseModel):
    """Response schema for a user with read-time defaults applied."""

    id: uuid.UUID
    email: str
    name: str
    avatar: str | None
    role: Literal["user", "creator", "admin"]
    status: Literal["active", "suspended", "pending"]
    creator_status: Literal["pending", "approved", "rejected"] | None
    plan: str
    bio: str | None
    website: str | None
    social: dict
    settings: UserSettings
    created_at: datetime
    updated_at: datetime
    last_login: datetime | None


class UpdateRoleRequest(BaseModel):
    role: Literal["user", "creator", "admin"]


class UpdateStatusRequest(BaseModel):
    status: Literal["active", "suspended", "pending"]
