"""
FastAPI dependency providers.

Exports service factories, the storage client and auth guards.
"""

from resourcehub.api.deps.dependencies import (
    get_current_user,
    get_optional_user,
    get_storage_client,
    require_admin,
    require_creator,
    require_roles,
)

__all__ = [
    "get_current_user",
    "get_optional_user",
    "get_storage_client",
    "require_admin",
    "require_creator",
    "require_roles",
]
