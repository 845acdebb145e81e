"""
Authentication API endpoints.

Routes:
- POST /auth/register - Create an account
- POST /auth/login - Exchange credentials for a bearer token
- GET /auth/me - Current user

Dependencies: resourcehub.application.services, resourcehub.models
System role: Identity HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from resourcehub.api.deps.dependencies import get_auth_service, get_current_user
from resourcehub.api.routers.router_utils import handle_service_errors
from resourcehub.application.services import AuthService
from resourcehub.application.services.mappers import user_to_dict
from resourcehub.boundary.db.models import UserModel
from resourcehub.models.auth import LoginRequest, RegisterRequest, TokenResponse
from resourcehub.models.user import UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=201)
@handle_service_errors
async def register(
    request: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    """
    Register a user or creator account.

    Raises:
        HTTPException(400): Invalid email, short password or role
        HTTPException(409): Email already registered
    """
    user = await auth_service.register(
        email=request.email,
        password=request.password,
        name=request.name,
        role=request.role,
    )
    return UserResponse(**user)


@router.post("/login", response_model=TokenResponse)
@handle_service_errors
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """
    Log in with email and password.

    Raises:
        HTTPException(401): Wrong credentials
        HTTPException(403): Suspended account
    """
    return TokenResponse(**await auth_service.login(request.email, request.password))


@router.get("/me", response_model=UserResponse)
async def me(user: UserModel = Depends(get_current_user)) -> UserResponse:
    """Profile of the token's user."""
    return UserResponse(**user_to_dict(user))
