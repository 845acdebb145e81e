"""
Profile API endpoints for the signed-in user.

Routes:
- GET /users/me - Profile
- PATCH /users/me - Update name, bio, website, social links
- PATCH /users/me/settings - Merge preference changes
- POST /users/me/avatar/presigned-url - Presigned avatar upload
- PUT /users/me/avatar - Confirm uploaded avatar
- GET /users/me/purchases - Purchase history

Dependencies: resourcehub.application.services, resourcehub.models
System role: Profile HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from resourcehub.api.deps.dependencies import get_current_user, get_user_service
from resourcehub.api.routers.router_utils import handle_service_errors
from resourcehub.application.services import UserService
from resourcehub.boundary.db.models import UserModel
from resourcehub.models.common import PresignedUploadRequest, PresignedUploadResponse
from resourcehub.models.purchase import PurchaseHistoryResponse
from resourcehub.models.user import (
    ConfirmAvatarRequest,
    UpdateProfileRequest,
    UpdateSettingsRequest,
    UserResponse,
    UserSettings,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users/me", tags=["users"])


@router.get("", response_model=UserResponse)
@handle_service_errors
async def get_profile(
    user: UserModel = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    return UserResponse(**await user_service.get_profile(user.id))


@router.patch("", response_model=UserResponse)
@handle_service_errors
async def update_profile(
    request: UpdateProfileRequest,
    user: UserModel = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """
    Update profile fields. Email and role cannot be changed here.

    Raises:
        HTTPException(404): Account vanished mid-request
    """
    profile = await user_service.update_profile(
        user.id,
        name=request.name,
        bio=request.bio,
        website=request.website,
        social=request.social.model_dump() if request.social else None,
    )
    return UserResponse(**profile)


@router.patch("/settings", response_model=UserSettings)
@handle_service_errors
async def update_settings(
    request: UpdateSettingsRequest,
    user: UserModel = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> UserSettings:
    """Merge preference changes over stored settings and return the result."""
    merged = await user_service.update_settings(user.id, request.model_dump(exclude_none=True))
    return UserSettings(**merged)


@router.post("/avatar/presigned-url", response_model=PresignedUploadResponse)
@handle_service_errors
async def request_avatar_upload(
    request: PresignedUploadRequest,
    user: UserModel = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> PresignedUploadResponse:
    """
    Presigned PUT URL for a new avatar image.

    Raises:
        HTTPException(400): Not an image or too large
        HTTPException(502): Storage failure
    """
    upload = await user_service.request_avatar_upload(
        user.id,
        filename=request.filename,
        content_type=request.content_type,
        file_size=request.file_size,
    )
    return PresignedUploadResponse(**upload)


@router.put("/avatar", response_model=UserResponse)
@handle_service_errors
async def confirm_avatar(
    request: ConfirmAvatarRequest,
    user: UserModel = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Use an uploaded object as the avatar."""
    return UserResponse(**await user_service.confirm_avatar(user.id, request.key))


@router.get("/purchases", response_model=list[PurchaseHistoryResponse])
@handle_service_errors
async def get_purchases(
    user: UserModel = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> list[PurchaseHistoryResponse]:
    purchases = await user_service.get_purchases(user.id)
    logger.info("Purchases retrieved", extra={"user_id": str(user.id), "count": len(purchases)})
    return [PurchaseHistoryResponse(**p) for p in purchases]
