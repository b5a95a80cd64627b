"""Exception hierarchy shared by the blog indexing pipeline.

Every failure raised by ``blog_index`` derives from :class:`BlogIndexError` so
callers can catch the whole family at once, while the concrete subclasses keep
the builtin base (``ValueError`` or ``LookupError``) that best describes them.

Examples
--------
>>> from blog_index.errors import ConfigurationError, BlogIndexError
>>> issubclass(ConfigurationError, ValueError)
True
>>> issubclass(ConfigurationError, BlogIndexError)
True
"""

from __future__ import annotations


class BlogIndexError(Exception):
    """Base class for errors raised while indexing blog content."""


class ConfigurationError(BlogIndexError, ValueError):
    """Raised when a configuration value is invalid or out of range."""


class SchemaError(BlogIndexError, ValueError):
    """Raised when post or category metadata cannot be parsed or validated."""


class NotFoundError(BlogIndexError, LookupError):
    """Raised when a category, post, or source directory does not exist."""


__all__ = ["BlogIndexError", "ConfigurationError", "NotFoundError", "SchemaError"]
