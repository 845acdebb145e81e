"""
Dependency injection container.

Factory functions for FastAPI dependencies: request-scoped services bound
to the request's database session, the shared storage client, and the
bearer-token auth guards.

Dependencies: resourcehub.configs, resourcehub.application, resourcehub.boundary
System role: DI container for service injection
"""

import logging
from functools import lru_cache
from typing import Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from resourcehub.application.services import (
    AnalyticsService,
    AuthService,
    CategoryService,
    CreatorService,
    MessageService,
    PurchaseService,
    ReportService,
    ResourceService,
    ReviewService,
    UserService,
)
from resourcehub.boundary.aws.s3_client import S3StorageClient
from resourcehub.boundary.db import get_async_db
from resourcehub.boundary.db.models import UserModel, UserRole
from resourcehub.configs import Settings, get_settings
from resourcehub.core.exceptions import AuthenticationError, PermissionDeniedError

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


@lru_cache
def get_storage_client() -> S3StorageClient:
    """
    Get the process-wide S3 storage client.

    Returns:
        S3StorageClient: Client for the configured bucket
    """
    storage = get_settings().storage
    return S3StorageClient(
        bucket=storage.bucket,
        region=storage.region,
        public_base_url=storage.public_base_url,
    )


def get_analytics_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> AnalyticsService:
    return AnalyticsService(db=db, settings=settings)


def get_auth_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> AuthService:
    return AuthService(db=db, settings=settings)


def get_user_service(
    db: AsyncSession = Depends(get_async_db),
    storage: S3StorageClient = Depends(get_storage_client),
    settings: Settings = Depends(get_settings_dependency),
) -> UserService:
    """
    Get user service instance.

    Args:
        db: Async database session (injected via Depends)
        storage: Storage client for avatars
        settings: Application settings

    Returns:
        UserService: User service instance
    """
    return UserService(db=db, storage=storage, settings=settings)


def get_resource_service(
    db: AsyncSession = Depends(get_async_db),
    storage: S3StorageClient = Depends(get_storage_client),
    settings: Settings = Depends(get_settings_dependency),
) -> ResourceService:
    """
    Get resource service instance.

    Args:
        db: Async database session (injected via Depends)
        storage: Storage client for resource files and thumbnails
        settings: Application settings

    Returns:
        ResourceService: Resource service instance
    """
    return ResourceService(db=db, storage=storage, settings=settings)


def get_category_service(db: AsyncSession = Depends(get_async_db)) -> CategoryService:
    return CategoryService(db=db)


def get_creator_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> CreatorService:
    return CreatorService(db=db, settings=settings)


def get_purchase_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> PurchaseService:
    return PurchaseService(db=db, analytics=AnalyticsService(db=db, settings=settings))


def get_review_service(db: AsyncSession = Depends(get_async_db)) -> ReviewService:
    return ReviewService(db=db)


def get_report_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> ReportService:
    return ReportService(db=db, settings=settings)


def get_message_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> MessageService:
    return MessageService(db=db, settings=settings)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserModel:
    """
    Resolve the bearer token to the calling user.

    Raises:
        HTTPException(401): Missing, invalid or expired token
        HTTPException(403): Suspended account
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return await auth_service.resolve_token(credentials.credentials)
    except AuthenticationError as e:
        logger.info("Rejected bearer token", extra={"error": e.message})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserModel | None:
    """Calling user on public routes; anonymous when the token is absent or unusable."""
    if credentials is None or not credentials.credentials:
        return None
    try:
        return await auth_service.resolve_token(credentials.credentials)
    except (AuthenticationError, PermissionDeniedError):
        return None


def require_roles(*roles: UserRole) -> Callable:
    """
    Build a dependency that admits only the given roles.

    Usage:
        @router.get("/admin/dashboard")
        async def dashboard(admin: UserModel = Depends(require_roles(UserRole.ADMIN))):
            ...
    """
    allowed = set(roles)

    async def guard(user: UserModel = Depends(get_current_user)) -> UserModel:
        if user.role not in allowed:
            logger.info(
                "Role check failed",
                extra={"user_id": str(user.id), "role": user.role.value},
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to access this resource",
            )
        return user

    return guard


require_admin = require_roles(UserRole.ADMIN)
require_creator = require_roles(UserRole.CREATOR, UserRole.ADMIN)
