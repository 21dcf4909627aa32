"""Personal blog REST backend: categories and posts."""

__version__ = "1.0.0"
