# personal_blog/services/category_service.py
import base64
import hashlib
import logging
import time
from typing import Any, Dict, Iterable, List, Mapping, Optional

from personal_blog.exceptions import EntityNotFoundError, InvalidArgumentError
from personal_blog.mappers import (
    category_in_to_row,
    category_row_to_out,
    category_view_from_category,
    category_view_from_row,
    merge_category,
    post_summary_from_row,
)
from personal_blog.models.schemas import CategoryIn, CategoryOut, CategoryPostView
from personal_blog.repositories import CategoryRepository

POSTS_PER_CATEGORY = 3


def generate_category_code(name: str, now_ms: Optional[int] = None) -> str:
    """Derive a category code from its name and the current time.

    SHA-256 of ``name + millis`` as lowercase hex, then URL-safe Base64 of
    that hex text. Unique in practice only: the same name within the same
    millisecond gives the same code.
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    digest = hashlib.sha256(f"{name}{now_ms}".encode("utf-8")).hexdigest()
    return base64.urlsafe_b64encode(digest.encode("utf-8")).decode("ascii")


def group_posts_by_category(rows: Iterable[Mapping[str, Any]]) -> List[CategoryPostView]:
    """Fold flat category/post join rows into one view per category.

    Categories keep the order in which they first appear, posts keep row
    order. A row with no post id contributes only its category.
    """
    grouped: Dict[int, CategoryPostView] = {}
    for row in rows:
        view = grouped.get(row["category_id"])
        if view is None:
            view = category_view_from_row(row)
            grouped[row["category_id"]] = view
        if row.get("post_id") is not None:
            view.posts.append(post_summary_from_row(row))
    return list(grouped.values())


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class CategoryService:
    """Category lifecycle: lookup, create/update with generated codes, delete, post views."""

    def __init__(self, repository: CategoryRepository, logger: Optional[logging.Logger] = None):
        self.repository = repository
        self.logger = logger or logging.getLogger(__name__)

    async def list_categories(self) -> List[CategoryOut]:
        self.logger.info("Fetching all categories")
        rows = await self.repository.get_all()
        return [category_row_to_out(row) for row in rows]

    async def get_by_code(self, code: Optional[str]) -> CategoryOut:
        self.logger.info(f"Fetching category by code: {code}")
        self._validate_code(code)
        row = await self.repository.get_by_code(code)
        if row is None:
            self.logger.warning(f"Category with code {code} not found")
            raise EntityNotFoundError(f"Category with code {code} not found")
        return category_row_to_out(row)

    async def save_or_update(self, category: CategoryIn) -> CategoryOut:
        existing = None
        if category.code is not None:
            existing = await self.repository.get_by_code(category.code)

        if existing is None:
            self.logger.info(f"Creating new category: {category.name!r}")
            return await self._create(category)
        self.logger.info(f"Updating existing category with code: {category.code}")
        return await self._update(existing, category)

    async def _create(self, category: CategoryIn) -> CategoryOut:
        self._validate_name(category.name)
        code = generate_category_code(category.name)
        row = await self.repository.create(category_in_to_row(category, code))
        return category_row_to_out(row)

    async def _update(self, existing: Mapping[str, Any], category: CategoryIn) -> CategoryOut:
        merged = merge_category(existing, category)
        self._validate_name(merged["name"])
        row = await self.repository.update(existing["id"], merged)
        if row is None:
            # deleted between the lookup and the write
            raise EntityNotFoundError(f"Category with code {existing['code']} not found")
        return category_row_to_out(row)

    async def delete_by_code(self, code: Optional[str]) -> None:
        self.logger.info(f"Deleting category with code: {code}")
        self._validate_code(code)
        deleted = await self.repository.delete_by_code(code)
        if not deleted:
            self.logger.warning(f"Category with code {code} not found")
            raise EntityNotFoundError(f"Category with code {code} not found")

    async def list_categories_with_recent_posts(self) -> List[CategoryPostView]:
        """Every category with its newest posts, capped per category by the query."""
        self.logger.info("Fetching categories with recent posts")
        rows = await self.repository.fetch_categories_with_recent_posts(POSTS_PER_CATEGORY)
        return group_posts_by_category(rows)

    async def get_posts_by_category_name(self, name: Optional[str]) -> CategoryPostView:
        """A category with all of its posts, newest first (no cap).

        When several categories share the name, the one holding the newest
        post is returned together with its own posts only.
        """
        if _is_blank(name):
            self.logger.warning(f"Invalid category name provided: {name!r}")
            raise InvalidArgumentError("Category name must be a non-empty string")

        rows = await self.repository.fetch_posts_by_category_name(name)
        if not rows:
            self.logger.warning(f"No posts found for category: {name!r}")
            raise EntityNotFoundError(f"No posts found for category: {name}")

        # names are not unique; the category of the newest post owns the view
        owner_id = rows[0]["category_id"]
        category = await self.repository.get_by_id(owner_id)
        if category is None:
            raise EntityNotFoundError(f"Category with name {name} not found")
        posts = [post_summary_from_row(row) for row in rows if row["category_id"] == owner_id]
        return category_view_from_category(category, posts)

    @staticmethod
    def _validate_code(code: Optional[str]) -> None:
        if _is_blank(code):
            raise InvalidArgumentError("Invalid category code")

    @staticmethod
    def _validate_name(name: Optional[str]) -> None:
        if _is_blank(name):
            raise InvalidArgumentError("Category name is required")
