"""
Authentication service orchestrator.

Registers accounts, verifies credentials and resolves bearer tokens to
users.

Dependencies: resourcehub.boundary.db.CRUD, resourcehub.core.security
System role: Identity use case orchestration
"""

import logging
import re
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from resourcehub.application.services.analytics_service import AnalyticsService
from resourcehub.application.services.mappers import enum_value, user_to_dict
from resourcehub.boundary.db.CRUD import user_crud
from resourcehub.boundary.db.base import utcnow
from resourcehub.boundary.db.models import (
    AnalyticsEventType,
    CreatorStatus,
    UserModel,
    UserRole,
    UserStatus,
)
from resourcehub.configs import Settings, get_settings
from resourcehub.core.exceptions import (
    AuthenticationError,
    ConflictError,
    PermissionDeniedError,
    ValidationError,
)
from resourcehub.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 8
SELF_REGISTER_ROLES = {UserRole.USER.value, UserRole.CREATOR.value}


class AuthService:
    """Authentication service orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        settings: Settings | None = None,
        analytics: AnalyticsService | None = None,
    ) -> None:
        """
        Initialize auth service.

        Args:
            db: Async SQLAlchemy session
            settings: Application settings (defaults to the cached singleton)
            analytics: Event tracker (defaults to one bound to db)
        """
        self.db = db
        self.settings = settings or get_settings()
        self.analytics = analytics or AnalyticsService(db, self.settings)

    async def register(
        self,
        email: str,
        password: str,
        name: str = "",
        role: str = UserRole.USER.value,
    ) -> dict:
        """
        Create a new account.

        Creator registrations start with creator_status pending.

        Args:
            email: Login email (stored lower-cased)
            password: Plain password, at least 8 characters
            name: Display name
            role: "user" or "creator"

        Returns:
            dict: Created user

        Raises:
            ValidationError: Malformed email, short password or disallowed role
            ConflictError: Email already registered
        """
        email = (email or "").strip().lower()
        if not EMAIL_PATTERN.match(email):
            raise ValidationError("A valid email address is required", field="email")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                field="password",
            )
        if role not in SELF_REGISTER_ROLES:
            raise ValidationError("Role must be 'user' or 'creator'", field="role")

        if await user_crud.get_by_email(self.db, email):
            raise ConflictError("Email is already registered", {"email": email})

        is_creator = role == UserRole.CREATOR.value
        try:
            user = await user_crud.create(
                self.db,
                email=email,
                password_hash=hash_password(password, self.settings.auth.password_hash_iterations),
                name=(name or "").strip(),
                role=UserRole(role),
                status=UserStatus.ACTIVE,
                creator_status=CreatorStatus.PENDING if is_creator else None,
                social={},
                settings={},
            )
        except IntegrityError as e:
            logger.warning("Duplicate registration race", extra={"email": email})
            raise ConflictError("Email is already registered", {"email": email}) from e

        logger.info("User registered", extra={"user_id": str(user.id), "role": role})
        await self.analytics.track_event(
            AnalyticsEventType.USER_REGISTRATION,
            {"role": role},
            user_id=user.id,
        )
        return user_to_dict(user)

    async def login(self, email: str, password: str) -> dict:
        """
        Verify credentials and issue an access token.

        Returns:
            dict: access_token, token_type, expires_at and the user

        Raises:
            AuthenticationError: Unknown email or wrong password
            PermissionDeniedError: Account is suspended
        """
        user = await user_crud.get_by_email(self.db, email or "")
        if user is None or not verify_password(password or "", user.password_hash):
            logger.info("Rejected login", extra={"email": (email or "").strip().lower()})
            raise AuthenticationError("Invalid email or password")
        if user.status == UserStatus.SUSPENDED:
            raise PermissionDeniedError("Account is suspended", user_id=str(user.id))

        user = await user_crud.update_by_id(self.db, user.id, last_login=utcnow())

        auth = self.settings.auth
        token, expires_at = create_access_token(
            subject=str(user.id),
            claims={"role": enum_value(user.role)},
            secret_key=auth.secret_key,
            algorithm=auth.algorithm,
            expires_minutes=auth.access_token_expire_minutes,
        )

        logger.info("User logged in", extra={"user_id": str(user.id)})
        await self.analytics.track_event(AnalyticsEventType.USER_LOGIN, user_id=user.id)
        return {
            "access_token": token,
            "token_type": "bearer",
            "expires_at": expires_at,
            "user": user_to_dict(user),
        }

    async def resolve_token(self, token: str) -> UserModel:
        """
        Resolve a bearer token to its user.

        Raises:
            AuthenticationError: Invalid/expired token or deleted user
            PermissionDeniedError: Account is suspended
        """
        auth = self.settings.auth
        payload = decode_access_token(token, auth.secret_key, auth.algorithm)
        try:
            user_id = UUID(str(payload["sub"]))
        except ValueError as e:
            raise AuthenticationError("Access token subject is malformed") from e

        user = await user_crud.get_by_id(self.db, user_id)
        if user is None:
            raise AuthenticationError("Account no longer exists")
        if user.status == UserStatus.SUSPENDED:
            raise PermissionDeniedError("Account is suspended", user_id=str(user.id))
        return user
