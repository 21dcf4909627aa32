# personal_blog/repositories/__init__.py
from personal_blog.repositories.post_repository import PostRepository
from personal_blog.repositories.category_repository import CategoryRepository

__all__ = ["PostRepository", "CategoryRepository"]
