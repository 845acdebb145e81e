"""
Listing options shared by browse and moderation views.

Sort keys, filter bundles and page clamping used by the CRUD query layer,
so every listing sorts and paginates the same way.

Dependencies: None
System role: Filter/sort/pagination vocabulary
"""

import enum
from dataclasses import dataclass


class ResourceSort(str, enum.Enum):
    """Sort orders for resource listings."""

    NEWEST = "newest"
    OLDEST = "oldest"
    TITLE_ASC = "title-asc"
    TITLE_DESC = "title-desc"
    PRICE_HIGH = "price-high"
    PRICE_LOW = "price-low"
    DOWNLOADS = "downloads"
    POPULAR = "popular"


class CreatorSort(str, enum.Enum):
    """Sort orders for the admin creator listing."""

    NEWEST = "newest"
    OLDEST = "oldest"
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    RESOURCES = "resources"
    DOWNLOADS = "downloads"
    REVENUE = "revenue"


class CategorySort(str, enum.Enum):
    """Sort orders for category listings."""

    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    COUNT_ASC = "count-asc"
    COUNT_DESC = "count-desc"


@dataclass
class ResourceFilters:
    """
    Filter bundle for resource queries.

    None means "do not filter on this field".
    """

    status: str | None = None
    category: str | None = None
    creator_id: object | None = None
    featured: bool | None = None
    min_price: float | None = None
    max_price: float | None = None
    search: str | None = None


@dataclass
class Page:
    """Offset pagination window."""

    limit: int
    offset: int = 0

    @classmethod
    def clamp(cls, limit: int | None, offset: int | None, default: int, maximum: int) -> "Page":
        """Build a page, bounding limit to [1, maximum] and offset to >= 0."""
        size = default if limit is None else max(1, min(limit, maximum))
        return cls(limit=size, offset=max(0, offset or 0))


def normalize_search(term: str | None) -> str | None:
    """Trim a search term; blank terms disable the search filter."""
    if term is None:
        return None
    term = term.strip()
    return term or None


def parse_tags(raw: str | list[str] | None) -> list[str]:
    """
    Normalize tags from a list or a comma-separated string.

    Entries are trimmed, empty entries dropped, duplicates removed
    keeping first occurrence.
    """
    if raw is None:
        return []
    items = raw.split(",") if isinstance(raw, str) else raw
    tags: list[str] = []
    for item in items:
        tag = str(item).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags
