# personal_blog/services/__init__.py
from personal_blog.services.category_service import CategoryService
from personal_blog.services.post_service import PostService

__all__ = ["CategoryService", "PostService"]
