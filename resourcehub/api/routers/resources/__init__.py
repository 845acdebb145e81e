"""
Resources router package.

Exports the router for public catalog endpoints.
"""

from .resources_router import router

__all__ = ["router"]
