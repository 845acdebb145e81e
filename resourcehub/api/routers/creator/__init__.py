"""
Creator router package.

Exports the router for creator onboarding, dashboard and upload endpoints.
"""

from .creator_router import router

__all__ = ["router"]
