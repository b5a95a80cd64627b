"""Read categories and post files from the content tree on disk."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ

from .errors import NotFoundError
from .paths import BlogPath, PostFileQuery

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class CategoryFileQueries:
    """Post file references belonging to one category, in listing order."""

    category: str
    post_file_queries: tuple[PostFileQuery, ...]


class BlogFileSource:
    """List and read the files of a content tree.

    Directory listings are sorted by name so repeated runs see the same
    first-seen order, and names listed in ``file_name_exceptions`` (for
    example ``.DS_Store``) are skipped.
    """

    def __init__(
        self,
        blog_path: BlogPath,
        *,
        file_name_exceptions: cabc.Iterable[str] = (),
        encoding: str = "utf-8",
    ) -> None:
        self.blog_path = blog_path
        self.file_name_exceptions = frozenset(file_name_exceptions)
        self.encoding = encoding

    def _list_names(self, path: Path, *, directories: bool) -> list[str]:
        """Return sorted entry names under ``path`` of the requested kind."""
        if not path.is_dir():
            msg = f"Content directory '{path}' does not exist."
            raise NotFoundError(msg)
        names = [
            entry.name
            for entry in path.iterdir()
            if entry.name not in self.file_name_exceptions
            and (entry.is_dir() if directories else entry.is_file())
        ]
        return sorted(names)

    def _read(self, path: Path) -> str:
        try:
            return path.read_text(encoding=self.encoding)
        except FileNotFoundError as exc:
            msg = f"Content file '{path}' does not exist."
            raise NotFoundError(msg) from exc

    def get_all_category_names(self) -> list[str]:
        """Return the names of every category folder."""
        base = self.blog_path.category_file_base_path
        return self._list_names(base, directories=True)

    def get_category_description_file(self, category: str) -> str:
        """Return the raw description JSON of ``category``."""
        return self._read(self.blog_path.category_description_file_path(category))

    def get_all_post_file_names(self, category: str) -> list[str]:
        """Return the post file names of ``category``."""
        base = self.blog_path.post_file_base_path(category)
        return self._list_names(base, directories=False)

    def get_all_post_file_queries(self) -> list[CategoryFileQueries]:
        """Return every category with references to its post files."""
        groups: list[CategoryFileQueries] = []
        for category in self.get_all_category_names():
            queries = tuple(
                PostFileQuery(category=category, post_file_name=name)
                for name in self.get_all_post_file_names(category)
            )
            logger.debug("found %d post files in category %r", len(queries), category)
            groups.append(CategoryFileQueries(category=category, post_file_queries=queries))
        return groups

    def get_post_file(self, query: PostFileQuery) -> str:
        """Return the raw text of the post file referenced by ``query``."""
        return self._read(self.blog_path.post_file_path(query))


__all__ = ["BlogFileSource", "CategoryFileQueries"]
