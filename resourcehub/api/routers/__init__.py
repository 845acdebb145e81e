"""
API routers package.

Exports every router mounted by the application.
"""

from .admin import router as admin_router
from .auth import router as auth_router
from .categories import router as categories_router
from .creator import router as creator_router
from .health import router as health_router
from .messages import router as messages_router
from .reports import router as reports_router
from .resources import router as resources_router
from .users import router as users_router

__all__ = [
    "admin_router",
    "auth_router",
    "categories_router",
    "creator_router",
    "health_router",
    "messages_router",
    "reports_router",
    "resources_router",
    "users_router",
]
