"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_engine(): Sync engine for schema scripts
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management

Models and CRUD singletons are imported from their subpackages:
    from resourcehub.boundary.db.models import ResourceModel
    from resourcehub.boundary.db.CRUD import resource_crud

Dependencies: sqlalchemy, resourcehub.configs
System role: Database adapter for marketplace persistence
"""

from resourcehub.boundary.db.base import Base, TimestampMixin, UUIDMixin
from resourcehub.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
    get_engine,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "get_engine",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
]
