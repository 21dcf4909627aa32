# personal_blog/exceptions.py


class BlogServiceError(Exception):
    """Base class for errors raised by the blog services."""


class EntityNotFoundError(BlogServiceError):
    """Requested category, post or category name has no matching row."""


class InvalidArgumentError(BlogServiceError, ValueError):
    """Blank identifying key, blank required field, or unknown category reference."""
