# personal_blog/mappers.py
"""Field-by-field mapping between repository rows and transfer models."""
from typing import Any, Dict, List, Mapping, Optional

from personal_blog.models.schemas import (
    CategoryIn,
    CategoryOut,
    CategoryPostView,
    PostIn,
    PostOut,
    PostSummary,
)


def category_row_to_out(row: Mapping[str, Any]) -> CategoryOut:
    return CategoryOut(
        id=row["id"],
        name=row["name"],
        code=row["code"],
        description=row.get("description"),
        icon_name=row.get("icon_name"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def category_in_to_row(category: CategoryIn, code: str) -> Dict[str, Any]:
    """Columns for a new category row."""
    return {
        "name": category.name,
        "code": code,
        "description": category.description,
        "icon_name": category.icon_name,
    }


def merge_category(existing: Mapping[str, Any], category: CategoryIn) -> Dict[str, Any]:
    """Apply the fields the caller explicitly sent onto an existing row.

    The code is the lookup key and is never rewritten.
    """
    merged = {
        "name": existing["name"],
        "description": existing.get("description"),
        "icon_name": existing.get("icon_name"),
    }
    for column in ("name", "description", "icon_name"):
        if column in category.model_fields_set:
            merged[column] = getattr(category, column)
    return merged


def post_row_to_out(row: Mapping[str, Any]) -> PostOut:
    return PostOut(
        id=row["id"],
        title=row["title"],
        description=row.get("description"),
        author=row.get("author"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
        category_code=row["category_code"],
    )


def post_in_to_row(post: PostIn, category_id: int, author: Optional[str] = None) -> Dict[str, Any]:
    """Columns written for a post; ``author`` is only passed on create."""
    row = {
        "title": post.title,
        "description": post.description,
        "category_id": category_id,
    }
    if author is not None:
        row["author"] = author
    return row


def post_summary_from_row(row: Mapping[str, Any]) -> PostSummary:
    return PostSummary(
        post_id=row["post_id"],
        post_title=row["post_title"],
        post_description=row.get("post_description"),
        category_code=row["category_code"],
    )


def category_view_from_row(row: Mapping[str, Any]) -> CategoryPostView:
    """Empty view from a category/post join row."""
    return CategoryPostView(
        category_id=row["category_id"],
        category_name=row["category_name"],
        category_description=row.get("category_description"),
        icon_name=row.get("icon_name"),
        posts=[],
    )


def category_view_from_category(
    category: Mapping[str, Any], posts: List[PostSummary]
) -> CategoryPostView:
    return CategoryPostView(
        category_id=category["id"],
        category_name=category["name"],
        category_description=category.get("description"),
        icon_name=category.get("icon_name"),
        posts=posts,
    )
