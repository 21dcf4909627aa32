# personal_blog/routes/__init__.py
from personal_blog.routes import categories, posts

__all__ = ["categories", "posts"]
