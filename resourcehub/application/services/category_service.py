"""
Category service orchestrator.

Public category listing plus admin create/update/delete. Also keeps each
category's count equal to its number of approved resources.

Dependencies: resourcehub.boundary.db.CRUD
System role: Category use case orchestration
"""

import logging
import re
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from resourcehub.application.services.mappers import category_to_dict
from resourcehub.boundary.db.CRUD import category_crud, resource_crud
from resourcehub.core.exceptions import ConflictError, NotFoundError, ValidationError
from resourcehub.core.listing import CategorySort

logger = logging.getLogger(__name__)

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lower-case, hyphen-separated slug of text."""
    return _SLUG_STRIP.sub("-", text.lower()).strip("-")


class CategoryService:
    """Category service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_categories(
        self,
        sort: CategorySort = CategorySort.NAME_ASC,
        featured_only: bool = False,
    ) -> list[dict]:
        categories = await category_crud.list_sorted(self.db, sort=sort, featured_only=featured_only)
        return [category_to_dict(c) for c in categories]

    async def get_category(self, slug: str) -> dict:
        """
        Get category by slug.

        Raises:
            NotFoundError: If no category has this slug
        """
        category = await category_crud.get_by_slug(self.db, slug)
        if category is None:
            raise NotFoundError("category", slug)
        return category_to_dict(category)

    async def category_exists(self, slug: str) -> bool:
        return await category_crud.slug_exists(self.db, slug)

    async def create_category(
        self,
        name: str,
        slug: str | None = None,
        description: str = "",
        icon: str = "folder",
        featured: bool = False,
    ) -> dict:
        """
        Create a category.

        Args:
            name: Display name
            slug: URL key; derived from name when omitted
            description: Short blurb
            icon: Icon identifier
            featured: Highlight on the landing page

        Returns:
            dict: Created category

        Raises:
            ValidationError: Empty name or slug
            ConflictError: Slug already used
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name is required", field="name")
        slug = slugify(slug or name)
        if not slug:
            raise ValidationError("Category slug is empty", field="slug")
        if await category_crud.slug_exists(self.db, slug):
            raise ConflictError(f"Category '{slug}' already exists", {"slug": slug})

        try:
            category = await category_crud.create(
                self.db,
                slug=slug,
                name=name,
                description=description or "",
                icon=icon or "folder",
                featured=featured,
                count=await resource_crud.count_approved_in_category(self.db, slug),
            )
        except Exception as e:
            logger.error("Failed to create category", extra={"error": str(e), "slug": slug})
            raise

        logger.info("Category created", extra={"category_id": str(category.id), "slug": slug})
        return category_to_dict(category)

    async def update_category(self, category_id: UUID, **changes) -> dict:
        """
        Update category fields. A slug change moves its resources along.

        Raises:
            NotFoundError: Unknown category
            ConflictError: New slug already used
        """
        category = await category_crud.get_by_id(self.db, category_id)
        if category is None:
            raise NotFoundError("category", category_id)

        values = {k: v for k, v in changes.items() if v is not None}
        if "name" in values:
            values["name"] = values["name"].strip()
            if not values["name"]:
                raise ValidationError("Category name is required", field="name")

        old_slug = category.slug
        if "slug" in values:
            values["slug"] = slugify(values["slug"])
            if not values["slug"]:
                raise ValidationError("Category slug is empty", field="slug")
            if values["slug"] == old_slug:
                del values["slug"]
            elif await category_crud.slug_exists(self.db, values["slug"]):
                raise ConflictError(
                    f"Category '{values['slug']}' already exists", {"slug": values["slug"]}
                )

        if not values:
            return category_to_dict(category)

        if "slug" in values:
            await category_crud.update_by_id(self.db, category_id, **values)
            # no-op where the foreign key already cascaded the rename
            moved = await resource_crud.reassign_category(self.db, old_slug, values["slug"])
            logger.info(
                "Category slug changed",
                extra={"old_slug": old_slug, "new_slug": values["slug"], "moved": moved},
            )
        else:
            await category_crud.update_by_id(self.db, category_id, **values)

        updated = await category_crud.get_by_id(self.db, category_id)
        return category_to_dict(updated)

    async def delete_category(self, category_id: UUID) -> None:
        """
        Delete a category. Its resources become uncategorized.

        Raises:
            NotFoundError: Unknown category
        """
        category = await category_crud.get_by_id(self.db, category_id)
        if category is None:
            raise NotFoundError("category", category_id)

        moved = await resource_crud.reassign_category(self.db, category.slug, None)
        await category_crud.delete_by_id(self.db, category_id)
        logger.info(
            "Category deleted",
            extra={"category_id": str(category_id), "slug": category.slug, "moved": moved},
        )

    async def refresh_counts(self, *slugs: str | None) -> None:
        """Recompute approved-resource counts for the given categories."""
        for slug in {s for s in slugs if s}:
            count = await resource_crud.count_approved_in_category(self.db, slug)
            await category_crud.set_count(self.db, slug, count)
