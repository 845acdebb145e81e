"""
Service error handling for API endpoints.

A decorator that turns domain exceptions raised by services into
HTTPExceptions with a consistent status mapping and log line.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status
from pydantic import ValidationError as PydanticValidationError

from resourcehub.core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])

_STATUS_BY_ERROR: tuple[tuple[type[Exception], int, str], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND, "Entity not found"),
    (ValidationError, status.HTTP_400_BAD_REQUEST, "Invalid request"),
    (ConflictError, status.HTTP_409_CONFLICT, "Conflicting request"),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED, "Authentication failed"),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN, "Permission denied"),
    (StorageError, status.HTTP_502_BAD_GATEWAY, "Storage operation failed"),
)


def handle_service_errors(func: F) -> F:
    """
    Decorator to map service exceptions to HTTPExceptions.

    This centralizes:
    - Logging of errors with their details
    - Mapping domain exceptions to HTTP status codes
    - Hiding unexpected errors behind a generic 500
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except PydanticValidationError as e:
            logger.warning("Pydantic validation error", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=e.errors(include_url=False),
            )

        except (
            NotFoundError,
            ValidationError,
            ConflictError,
            AuthenticationError,
            PermissionDeniedError,
            StorageError,
        ) as e:
            for error_type, status_code, summary in _STATUS_BY_ERROR:
                if isinstance(e, error_type):
                    break
            log = logger.error if status_code >= 500 else logger.warning
            log(summary, extra={"error": e.message, "details": e.details, "endpoint": func.__name__})
            headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
            raise HTTPException(status_code=status_code, detail=e.message, headers=headers)

        except Exception as e:
            logger.exception(
                "Unexpected failure in endpoint",
                extra={"error": str(e), "endpoint": func.__name__},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal error occurred",
            )

    return wrapper  # type: ignore
