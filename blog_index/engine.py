"""Single entry point wiring configuration into the indexing components.

Example
-------
>>> from blog_index.config import load_blog_config
>>> from blog_index.engine import BlogEngine
>>> engine = BlogEngine(load_blog_config("config/blog.yaml"))  # doctest: +SKIP
>>> engine.get_total_page_number_of_category("python")  # doctest: +SKIP
2
"""

from __future__ import annotations

import typing as typ

from .build_paths import BuildPathGenerator, BuildPathTuple
from .categories import BlogCategory, CategoryDescription
from .parser import JsonParser, MetaParser, Transformer
from .paths import BlogPath
from .posts import (
    BlogPost,
    CategoryGroup,
    CategorySorter,
    PostMeta,
    PostRecord,
    PostSorter,
)
from .render import HtmlContentRenderer
from .sitemap import SitemapEntry, SitemapGenerator
from .source import BlogFileSource
from .toc import TocNode, get_toc

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    import datetime as dt

    from .config import BlogConfig


class BlogEngine:
    """Answer every query about a content tree described by a :class:`BlogConfig`."""

    def __init__(
        self,
        config: BlogConfig,
        *,
        post_meta_schema: type | None = None,
        post_meta_transformer: Transformer | None = None,
        category_schema: type | None = None,
        category_transformer: Transformer | None = None,
        category_sorter: CategorySorter | None = None,
        post_sorter: PostSorter | None = None,
        clock: cabc.Callable[[], dt.datetime] | None = None,
    ) -> None:
        """Initialize the engine.

        Parameters
        ----------
        config : BlogConfig
            Loaded configuration (see :func:`blog_index.config.load_blog_config`).
        post_meta_schema, category_schema : type, optional
            Schemas for post front matter and category descriptions.
        post_meta_transformer, category_transformer : callable, optional
            Transformers applied after the first validation pass.
        category_sorter, post_sorter : callable, optional
            Comparators overriding the default orderings.
        clock : callable, optional
            Source of "now" for the default freshest-first post ordering.
        """
        self.config = config
        self.blog_path = BlogPath(
            config.source_path,
            tree=config.tree,
            link_base_path=config.link_base_path,
        )
        self.file_source = BlogFileSource(
            self.blog_path, file_name_exceptions=config.file_name_exceptions
        )
        self.renderer = HtmlContentRenderer(pygments_style=config.render.pygments_style)
        self.post = BlogPost(
            blog_path=self.blog_path,
            file_source=self.file_source,
            post_config=config.posts,
            meta_parser=MetaParser(),
            renderer=self.renderer,
            post_meta_schema=post_meta_schema,
            post_meta_transformer=post_meta_transformer,
            category_sorter=category_sorter,
            post_sorter=post_sorter,
            max_workers=config.max_workers,
            clock=clock,
        )
        self.category = BlogCategory(
            file_source=self.file_source,
            json_parser=JsonParser(),
            category_schema=category_schema,
            category_transformer=category_transformer,
        )
        self.build_path = BuildPathGenerator(self.post)
        self.sitemap = SitemapGenerator(self.post, config.url_base_path)

    def get_post(self, category: str, file_name: str) -> PostRecord:
        """Return one fully built post."""
        return self.post.get_single_post(category, file_name)

    def get_all_posts(self) -> list[CategoryGroup[PostRecord]]:
        """Return every category with its fully built posts."""
        return self.post.get_all_posts()

    def get_all_post_meta(self, limit: int | None = None) -> list[PostMeta]:
        """Return ordered post metadata across all categories."""
        return self.post.get_all_post_meta(limit)

    def get_all_post_meta_at_category_group(
        self, category: str, limit: int | None = None
    ) -> list[PostMeta]:
        """Return ordered post metadata of one category."""
        return self.post.get_all_post_meta_at_category_group(category, limit)

    def get_total_page_number_of_category(self, category: str) -> int:
        """Return how many pages ``category`` spans."""
        return self.post.get_total_page_number_of_category(category)

    def get_all_category_descriptions(self) -> list[CategoryDescription]:
        """Return every category description."""
        return self.category.get_all_category_descriptions()

    def get_category_description(self, category: str) -> CategoryDescription:
        """Return the description of ``category``."""
        return self.category.get_category_description(category)

    def generate_static_params_for_category(self) -> list[BuildPathTuple]:
        """Return one category-level build path per post."""
        return self.build_path.generate_static_params_for_category()

    def generate_static_params_for_page(self) -> list[BuildPathTuple]:
        """Return one page-level build path per post."""
        return self.build_path.generate_static_params_for_page()

    def generate_static_params_for_post(self) -> list[BuildPathTuple]:
        """Return one post-level build path per post."""
        return self.build_path.generate_static_params_for_post()

    def generate_sitemap(self) -> list[SitemapEntry]:
        """Return the sitemap entries of the whole blog."""
        return self.sitemap.generate_sitemap()

    def get_toc(self, markdown_text: str) -> list[TocNode]:
        """Return the table of contents of ``markdown_text``."""
        return get_toc(markdown_text, self.config.posts.toc_depth)


__all__ = ["BlogEngine"]
