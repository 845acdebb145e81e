"""
Admin router package.

Every route under /admin requires the admin role.
"""

from fastapi import APIRouter, Depends

from resourcehub.api.deps.dependencies import require_admin

from .catalog_router import router as catalog_router
from .dashboard_router import router as dashboard_router
from .moderation_router import router as moderation_router
from .users_router import router as users_router

router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin)])
router.include_router(dashboard_router)
router.include_router(users_router)
router.include_router(catalog_router)
router.include_router(moderation_router)

__all__ = ["router"]
