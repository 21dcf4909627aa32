# personal_blog/models/__init__.py
from personal_blog.models.tables import Base, Category, Post, PostMetadata, RecentPost
from personal_blog.models.schemas import (
    CategoryIn,
    CategoryOut,
    CategoryPostView,
    PostIn,
    PostOut,
    PostSummary,
)

__all__ = [
    "Base",
    "Category",
    "Post",
    "PostMetadata",
    "RecentPost",
    "CategoryIn",
    "CategoryOut",
    "CategoryPostView",
    "PostIn",
    "PostOut",
    "PostSummary",
]
