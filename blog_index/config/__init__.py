"""Load and validate blog configuration YAML.

This subpackage parses the project's ``blog.yaml`` file, applies defaults for
the content tree layout, post pagination and metadata key names, and produces
frozen dataclasses (:class:`BlogConfig`, :class:`PostConfig`, etc.) that the
engine consumes. Every value is validated once, when the dataclasses are
constructed, so downstream stages never re-check them.

Examples
--------
>>> from pathlib import Path
>>> from blog_index.config import load_blog_config
>>> config = load_blog_config(Path("config/blog.yaml"))  # doctest: +SKIP
>>> config.tree.post_folder_name  # doctest: +SKIP
'posts'
"""

from .loader import load_blog_config
from .models import BlogConfig, BlogTreeConfig, PostConfig, RenderConfig

__all__ = [
    "BlogConfig",
    "BlogTreeConfig",
    "PostConfig",
    "RenderConfig",
    "load_blog_config",
]
