"""Project ordered posts into the route parameters a static build needs.

Every post contributes one tuple to each projection, so the category and page
projections repeat values; consumers that need unique routes de-duplicate
themselves (see :mod:`blog_index.sitemap`).
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from .posts import BlogPost, PostMeta


@dc.dataclass(frozen=True, slots=True)
class BuildPathTuple:
    """Route parameters of one static page.

    Category-level tuples leave ``page`` and ``post_file_name`` unset;
    page-level tuples leave ``post_file_name`` unset.
    """

    category: str
    page: str | None = None
    post_file_name: str | None = None

    @classmethod
    def from_meta(cls, meta: PostMeta) -> BuildPathTuple:
        """Return the post-level tuple of an ordered post."""
        return cls(
            category=meta.category,
            page=str(meta.page_number),
            post_file_name=meta.file_name,
        )

    @property
    def segments(self) -> tuple[str, ...]:
        """Return the set path segments in route order."""
        return tuple(
            segment
            for segment in (self.category, self.page, self.post_file_name)
            if segment is not None
        )

    def to_dict(self) -> dict[str, str]:
        """Return the tuple as a mapping without unset fields."""
        return {
            field.name: value
            for field in dc.fields(self)
            if (value := getattr(self, field.name)) is not None
        }


class BuildPathGenerator:
    """Derive category, page and post route parameters from the pipeline."""

    def __init__(self, post_engine: BlogPost) -> None:
        self.post_engine = post_engine

    def _generate_static_params(self) -> list[BuildPathTuple]:
        return [
            BuildPathTuple.from_meta(meta)
            for group in self.post_engine.get_ordered_post_meta_groups()
            for meta in group.posts
        ]

    def generate_static_params_for_category(self) -> list[BuildPathTuple]:
        """Return one ``{category}`` tuple per post."""
        return [
            BuildPathTuple(category=params.category)
            for params in self._generate_static_params()
        ]

    def generate_static_params_for_page(self) -> list[BuildPathTuple]:
        """Return one ``{category, page}`` tuple per post."""
        return [
            BuildPathTuple(category=params.category, page=params.page)
            for params in self._generate_static_params()
        ]

    def generate_static_params_for_post(self) -> list[BuildPathTuple]:
        """Return one ``{category, page, post_file_name}`` tuple per post."""
        return self._generate_static_params()


__all__ = ["BuildPathGenerator", "BuildPathTuple"]
