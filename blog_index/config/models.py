"""Typed dataclasses describing blog indexing configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from blog_index._constants import (
    DEFAULT_BLOG_FOLDER_NAME,
    DEFAULT_CATEGORY_DESCRIPTION_FILE_NAME,
    DEFAULT_GENERATION_TIME_FIELD,
    DEFAULT_PAGE_SIZE,
    DEFAULT_POST_FOLDER_NAME,
    DEFAULT_TITLE_FIELD,
    MIN_PAGE_SIZE,
)
from blog_index.errors import ConfigurationError
from blog_index.markdown_parser import TocDepthRange


@dc.dataclass(frozen=True, slots=True)
class BlogTreeConfig:
    """Folder and file names making up the content tree.

    The tree looks like ``<blog>/<category>/<posts>/<post file>`` with a
    ``<category>/<description file>`` alongside each category's posts.
    """

    blog_folder_name: str = DEFAULT_BLOG_FOLDER_NAME
    post_folder_name: str = DEFAULT_POST_FOLDER_NAME
    category_description_file_name: str = DEFAULT_CATEGORY_DESCRIPTION_FILE_NAME


@dc.dataclass(frozen=True, slots=True)
class PostConfig:
    """Ordering, pagination and metadata naming for posts."""

    page_size: int = DEFAULT_PAGE_SIZE
    generation_time_field: str = DEFAULT_GENERATION_TIME_FIELD
    title_field: str = DEFAULT_TITLE_FIELD
    toc_depth: TocDepthRange = dc.field(default_factory=TocDepthRange)

    def __post_init__(self) -> None:
        """Reject page sizes that are not integers of at least four."""
        if (
            isinstance(self.page_size, bool)
            or not isinstance(self.page_size, int)
            or self.page_size < MIN_PAGE_SIZE
        ):
            msg = (
                f"page_size must be an integer >= {MIN_PAGE_SIZE}, "
                f"got {self.page_size!r}"
            )
            raise ConfigurationError(msg)
        for name in ("generation_time_field", "title_field"):
            if not getattr(self, name):
                msg = f"{name} must be a non-empty metadata key"
                raise ConfigurationError(msg)


@dc.dataclass(frozen=True, slots=True)
class RenderConfig:
    """Options for rendering post bodies to HTML."""

    pygments_style: str = "monokai"


@dc.dataclass(frozen=True, slots=True)
class BlogConfig:
    """A fully resolved blog configuration.

    Attributes
    ----------
    source_path : Path
        Directory containing the blog folder.
    output_dir : Path
        Directory receiving CLI artifacts such as ``sitemap.xml``.
    url_base_path : str
        Absolute site URL prefixed to sitemap entries.
    link_base_path : str | None
        Optional path segment prefixed to every post link.
    max_workers : int
        Upper bound on concurrent per-post reads; ``1`` runs sequentially.
    file_name_exceptions : tuple[str, ...]
        Directory entries skipped when listing categories and posts.
    tree : BlogTreeConfig
        Folder layout of the content tree.
    posts : PostConfig
        Post ordering, pagination and metadata key names.
    render : RenderConfig
        HTML rendering options.
    """

    source_path: Path
    output_dir: Path = Path("public")
    url_base_path: str = ""
    link_base_path: str | None = None
    max_workers: int = 4
    file_name_exceptions: tuple[str, ...] = ()
    tree: BlogTreeConfig = dc.field(default_factory=BlogTreeConfig)
    posts: PostConfig = dc.field(default_factory=PostConfig)
    render: RenderConfig = dc.field(default_factory=RenderConfig)

    def __post_init__(self) -> None:
        """Reject worker counts below one."""
        if (
            isinstance(self.max_workers, bool)
            or not isinstance(self.max_workers, int)
            or self.max_workers < 1
        ):
            msg = f"max_workers must be a positive integer, got {self.max_workers!r}"
            raise ConfigurationError(msg)


__all__ = ["BlogConfig", "BlogTreeConfig", "PostConfig", "RenderConfig"]
