"""Translate category and post references into file paths and site links.

The content tree is laid out as::

    <source_path>/<blog>/<category>/<description.json>
    <source_path>/<blog>/<category>/<posts>/<post file>

while published posts live at ``/<link base>/<category>/<page>/<post>``.
:class:`BlogPath` owns both translations so the file source and the ordering
pipeline never assemble paths by hand.

Example
-------
>>> from pathlib import Path
>>> from blog_index.paths import BlogPath
>>> blog_path = BlogPath(Path("/content"), link_base_path="/blog/")
>>> blog_path.post_link_path(category="python", page_number=2, post_file_name="intro")
'/blog/python/2/intro'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .config import BlogTreeConfig

if typ.TYPE_CHECKING:
    from pathlib import Path


@dc.dataclass(frozen=True, slots=True)
class PostFileQuery:
    """Reference to a post file on disk.

    Attributes
    ----------
    category : str
        Category folder containing the post.
    post_file_name : str
        File name of the post, including its extension.
    """

    category: str
    post_file_name: str


def remove_file_format(file_name: str) -> str:
    """Return ``file_name`` without its final extension.

    >>> remove_file_format("hello.world.md")
    'hello.world'
    >>> remove_file_format("README")
    'README'
    """
    stem, dot, _suffix = file_name.rpartition(".")
    if not dot or not stem:
        return file_name
    return stem


def _to_link_path(*segments: str) -> str:
    """Join non-empty ``segments`` with ``/`` behind a single leading slash."""
    parts = [segment.strip("/") for segment in segments]
    return "/" + "/".join(part for part in parts if part)


class BlogPath:
    """Resolve source files and link paths for a content tree."""

    def __init__(
        self,
        source_path: Path,
        *,
        tree: BlogTreeConfig | None = None,
        link_base_path: str | None = None,
    ) -> None:
        self.source_path = source_path
        self.tree = tree or BlogTreeConfig()
        self.link_base_path = (link_base_path or "").strip("/") or None

    @property
    def category_file_base_path(self) -> Path:
        """Return the folder whose sub-folders are categories."""
        return self.source_path / self.tree.blog_folder_name

    def category_description_file_path(self, category: str) -> Path:
        """Return the description JSON path for ``category``."""
        return (
            self.category_file_base_path
            / category
            / self.tree.category_description_file_name
        )

    def post_file_base_path(self, category: str) -> Path:
        """Return the folder holding the post files of ``category``."""
        return self.category_file_base_path / category / self.tree.post_folder_name

    def post_file_path(self, query: PostFileQuery) -> Path:
        """Return the file path referenced by ``query``."""
        return self.post_file_base_path(query.category) / query.post_file_name

    def post_link_base_path(self, category: str) -> str:
        """Return the link prefix shared by every post of ``category``."""
        if self.link_base_path:
            return _to_link_path(self.link_base_path, category)
        return _to_link_path(category)

    def post_link_path(
        self, *, category: str, page_number: int, post_file_name: str
    ) -> str:
        """Return the site-relative link of a post on ``page_number``."""
        return _to_link_path(
            self.post_link_base_path(category), str(page_number), post_file_name
        )


__all__ = ["BlogPath", "PostFileQuery", "remove_file_format"]
