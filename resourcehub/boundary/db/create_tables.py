"""
Database table creation and seeding script.

Creates all tables defined in ORM models and inserts the default
categories when they are missing.

Dependencies: sqlalchemy, resourcehub.configs
System role: Database schema initialization

Usage:
    python -m resourcehub.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from resourcehub.boundary.db.base import Base
from resourcehub.boundary.db.connection import (
    get_async_engine,
    get_async_session_factory,
    get_engine,
)

# Importing the models package registers every table with Base.metadata
from resourcehub.boundary.db.models import CategoryModel

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES: list[dict[str, str]] = [
    {
        "slug": "educational",
        "name": "Educational",
        "description": "Resources for learning and teaching",
        "icon": "book-open",
    },
    {
        "slug": "photography",
        "name": "Photography",
        "description": "High-quality images and photos",
        "icon": "image",
    },
    {
        "slug": "graphic-design",
        "name": "Graphic Design",
        "description": "Templates, mockups, and UI kits",
        "icon": "layers",
    },
    {
        "slug": "video",
        "name": "Video",
        "description": "Stock footage and motion graphics",
        "icon": "video",
    },
    {
        "slug": "audio",
        "name": "Audio",
        "description": "Music, sound effects, and audio files",
        "icon": "music",
    },
    {
        "slug": "templates",
        "name": "Templates",
        "description": "Ready-to-use templates for various purposes",
        "icon": "file-text",
    },
    {
        "slug": "software",
        "name": "Software",
        "description": "Applications, plugins, and code snippets",
        "icon": "code",
    },
    {
        "slug": "ebooks",
        "name": "eBooks",
        "description": "Digital books and publications",
        "icon": "book",
    },
    {
        "slug": "courses",
        "name": "Courses",
        "description": "Online courses and tutorials",
        "icon": "graduation-cap",
    },
]


async def seed_default_categories(session: AsyncSession) -> int:
    """
    Insert default categories whose slug is not present yet.

    Idempotent: existing categories are left untouched.

    Args:
        session: Async database session (caller commits)

    Returns:
        Number of categories inserted
    """
    result = await session.execute(select(CategoryModel.slug))
    existing = set(result.scalars().all())

    inserted = 0
    for category in DEFAULT_CATEGORIES:
        if category["slug"] in existing:
            continue
        session.add(CategoryModel(count=0, featured=False, **category))
        inserted += 1

    if inserted:
        await session.flush()
        logger.info("Seeded default categories", extra={"inserted": inserted})
    return inserted


async def init_database() -> None:
    """
    Create all tables and seed default categories.

    Raises:
        SQLAlchemyError: If the connection or DDL fails
    """
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created")

    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        await seed_default_categories(session)
        await session.commit()


def drop_all_tables() -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.
    """
    engine = get_engine()
    Base.metadata.drop_all(bind=engine)
    logger.warning("All tables dropped")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(init_database())
