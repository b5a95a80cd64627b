"""Order, paginate and cross-link the posts of every category.

The pipeline runs in fixed stages on every query:

1. read each post's front matter into a :class:`PostMeta` (in parallel);
2. group the metadata by category, keeping first-seen category order;
3. sort the categories, then the posts inside each category;
4. assign 1-based ``order``, ``page_number`` and ``link`` per category;
5. derive ``prev``/``next`` navigation from the metadata-only sequence and,
   for full queries, render each body and its table of contents.

Nothing is cached between queries; every call rebuilds its view from the
content tree. The stage functions (:func:`group_by_category`,
:func:`sort_categories`, :func:`sort_posts`, :func:`assign_order` and
:func:`build_navigator`) are pure and usable on their own.

Example
-------
>>> from pathlib import Path
>>> from blog_index.config import BlogConfig
>>> from blog_index.engine import BlogEngine
>>> engine = BlogEngine(BlogConfig(source_path=Path("content")))  # doctest: +SKIP
>>> [meta.link for meta in engine.get_all_post_meta(limit=2)]  # doctest: +SKIP
['/python/1/decorators', '/python/1/generators']
"""

from __future__ import annotations

import collections.abc as cabc
import concurrent.futures as cf
import dataclasses as dc
import datetime as dt
import functools
import logging
import math
import typing as typ
import unicodedata

from .config import PostConfig
from .errors import NotFoundError, SchemaError
from .markdown_parser import strip_front_matter
from .parser import MetaParser, Transformer
from .paths import BlogPath, PostFileQuery, remove_file_format
from .render import HtmlContentRenderer
from .toc import TocNode, get_toc

if typ.TYPE_CHECKING:
    from .source import BlogFileSource

logger = logging.getLogger(__name__)

Comparison = int | float | bool
CategorySorter = cabc.Callable[[str, str], Comparison]
PostSorter = cabc.Callable[["PostMeta", "PostMeta"], Comparison]

PostT = typ.TypeVar("PostT")
ItemT = typ.TypeVar("ItemT")
ResultT = typ.TypeVar("ResultT")


@dc.dataclass(frozen=True, slots=True)
class PostMeta:
    """Metadata-only view of a post.

    Attributes
    ----------
    file_name : str
        Post file name without its extension; identifies the post inside its
        category.
    category : str
        Category the post belongs to.
    title : str
        Value of the configured title field.
    generated_at : datetime
        Value of the configured generation-time field, as an aware UTC
        datetime.
    metadata : dict[str, Any]
        The full validated front matter.
    source : PostFileQuery
        Reference to the post file on disk.
    order : int
        1-based position inside the sorted category; ``0`` until assigned.
    page_number : int
        ``ceil(order / page_size)``; ``0`` until assigned.
    link : str
        Site-relative link; empty until assigned.
    """

    file_name: str
    category: str
    title: str
    generated_at: dt.datetime
    metadata: dict[str, typ.Any]
    source: PostFileQuery
    order: int = 0
    page_number: int = 0
    link: str = ""


@dc.dataclass(frozen=True, slots=True)
class NavigatorLink:
    """Title and link of a neighbouring post."""

    title: str
    link: str


@dc.dataclass(frozen=True, slots=True)
class PostNavigator:
    """Links to the previous and next posts of the same category."""

    prev: NavigatorLink | None = None
    next: NavigatorLink | None = None


@dc.dataclass(frozen=True, slots=True)
class PostRecord:
    """A fully built post: ordered metadata, body, contents and navigation."""

    meta: PostMeta
    mdx_source: str
    table_of_contents: tuple[TocNode, ...]
    navigator: PostNavigator

    @property
    def file_name(self) -> str:
        return self.meta.file_name

    @property
    def category(self) -> str:
        return self.meta.category

    @property
    def metadata(self) -> dict[str, typ.Any]:
        return self.meta.metadata

    @property
    def order(self) -> int:
        return self.meta.order

    @property
    def page_number(self) -> int:
        return self.meta.page_number

    @property
    def link(self) -> str:
        return self.meta.link


@dc.dataclass(frozen=True, slots=True)
class CategoryGroup(typ.Generic[PostT]):
    """Posts of one category in pipeline order."""

    category: str
    posts: tuple[PostT, ...]


def parse_generation_time(value: object, *, field: str = "generation time") -> dt.datetime:
    """Return ``value`` as an aware UTC datetime.

    Accepts datetimes, dates (midnight UTC) and ISO 8601 strings (a trailing
    ``Z`` is understood). Naive values are treated as UTC.

    Raises
    ------
    SchemaError
        If ``value`` is of another type or the string cannot be parsed.
    """
    match value:
        case dt.datetime():
            parsed = value
        case dt.date():
            parsed = dt.datetime.combine(value, dt.time())
        case str() as text:
            sanitized = text.strip()
            if sanitized.endswith(("Z", "z")):
                sanitized = sanitized[:-1] + "+00:00"
            try:
                parsed = dt.datetime.fromisoformat(sanitized)
            except ValueError as exc:
                msg = f"{field} {text!r} is not a valid date"
                raise SchemaError(msg) from exc
        case _:
            msg = f"{field} must be a date or ISO 8601 string, got {value!r}"
            raise SchemaError(msg)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


def _coerce_comparison(result: Comparison) -> int | float:
    """Map a comparator result onto a number; ``True`` is 1 and ``False`` is 0."""
    if isinstance(result, bool):
        return int(result)
    return result


def default_category_sorter(current: str, following: str) -> int:
    """Compare category names the way a locale-aware collation would.

    Accents and case are ignored first, then the raw code points break ties so
    the ordering stays total and deterministic.
    """
    current_key = _collation_key(current)
    following_key = _collation_key(following)
    return (current_key > following_key) - (current_key < following_key)


def _collation_key(text: str) -> tuple[str, str]:
    decomposed = unicodedata.normalize("NFKD", text)
    primary = "".join(char for char in decomposed if not unicodedata.combining(char))
    return (primary.casefold(), text)


def _age_in_seconds(generated_at: dt.datetime, now: dt.datetime) -> int:
    return math.trunc((now - generated_at) / dt.timedelta(seconds=1))


def freshness_sorter(now: dt.datetime) -> PostSorter:
    """Return the default post comparator: freshest post first.

    Each post's age is measured in whole seconds against the single ``now``
    snapshot and the comparator returns the difference of the two ages.
    """

    def _compare(current: PostMeta, following: PostMeta) -> int:
        return _age_in_seconds(current.generated_at, now) - _age_in_seconds(
            following.generated_at, now
        )

    return _compare


def group_by_category(
    metas: cabc.Iterable[PostMeta], *, categories: cabc.Iterable[str] = ()
) -> list[CategoryGroup[PostMeta]]:
    """Group ``metas`` by category in first-seen order.

    ``categories`` pre-seeds the order so categories without posts still
    produce an (empty) group.
    """
    grouped: dict[str, list[PostMeta]] = {category: [] for category in categories}
    for meta in metas:
        grouped.setdefault(meta.category, []).append(meta)
    return [
        CategoryGroup(category=category, posts=tuple(posts))
        for category, posts in grouped.items()
    ]


def sort_categories(
    groups: cabc.Iterable[CategoryGroup[PostT]], sorter: CategorySorter
) -> list[CategoryGroup[PostT]]:
    """Return ``groups`` stably sorted by category name with ``sorter``."""

    def _compare(current: CategoryGroup[PostT], following: CategoryGroup[PostT]) -> int | float:
        return _coerce_comparison(sorter(current.category, following.category))

    return sorted(groups, key=functools.cmp_to_key(_compare))


def sort_posts(posts: cabc.Iterable[PostMeta], sorter: PostSorter) -> list[PostMeta]:
    """Return ``posts`` stably sorted with ``sorter``."""

    def _compare(current: PostMeta, following: PostMeta) -> int | float:
        return _coerce_comparison(sorter(current, following))

    return sorted(posts, key=functools.cmp_to_key(_compare))


def page_number_for(order: int, page_size: int) -> int:
    """Return the page that holds the post at 1-based ``order``."""
    return math.ceil(order / page_size)


def assign_order(
    posts: cabc.Iterable[PostMeta],
    *,
    page_size: int,
    link_for: cabc.Callable[[str, int, str], str],
) -> list[PostMeta]:
    """Stamp sorted ``posts`` with order, page number and link.

    ``link_for`` receives ``(category, page_number, file_name)``.
    """
    ordered: list[PostMeta] = []
    for index, meta in enumerate(posts):
        order = index + 1
        page_number = page_number_for(order, page_size)
        ordered.append(
            dc.replace(
                meta,
                order=order,
                page_number=page_number,
                link=link_for(meta.category, page_number, meta.file_name),
            )
        )
    return ordered


def _navigator_link(meta: PostMeta | None) -> NavigatorLink | None:
    if meta is None:
        return None
    return NavigatorLink(title=meta.title, link=meta.link)


def build_navigator(posts: cabc.Sequence[PostMeta], index: int) -> PostNavigator:
    """Return the navigator for ``posts[index]`` within its sorted sequence."""
    previous = posts[index - 1] if index > 0 else None
    following = posts[index + 1] if index + 1 < len(posts) else None
    return PostNavigator(prev=_navigator_link(previous), next=_navigator_link(following))


class BlogPost:
    """Build ordered, paginated and linked post collections from a content tree."""

    def __init__(
        self,
        *,
        blog_path: BlogPath,
        file_source: BlogFileSource,
        post_config: PostConfig | None = None,
        meta_parser: MetaParser | None = None,
        renderer: HtmlContentRenderer | None = None,
        post_meta_schema: type | None = None,
        post_meta_transformer: Transformer | None = None,
        category_sorter: CategorySorter | None = None,
        post_sorter: PostSorter | None = None,
        max_workers: int = 1,
        clock: cabc.Callable[[], dt.datetime] | None = None,
    ) -> None:
        """Initialize the pipeline.

        Parameters
        ----------
        blog_path : BlogPath
            Resolves post link paths.
        file_source : BlogFileSource
            Lists categories and reads post files.
        post_config : PostConfig, optional
            Page size, metadata key names and TOC depth window.
        meta_parser : MetaParser, optional
            Front-matter parser; a default instance is created when omitted.
        renderer : HtmlContentRenderer, optional
            Renders post bodies to HTML.
        post_meta_schema : type, optional
            Schema every post's front matter is validated against.
        post_meta_transformer : callable, optional
            Applied to the validated front matter before revalidation.
        category_sorter : callable, optional
            ``(a, b) -> number | bool`` comparator over category names.
        post_sorter : callable, optional
            ``(a, b) -> number | bool`` comparator over :class:`PostMeta`;
            defaults to freshest-first.
        max_workers : int, optional
            Bound on concurrent per-post reads; ``1`` runs sequentially.
        clock : callable, optional
            Returns the "now" used by the default post sorter.
        """
        self.blog_path = blog_path
        self.file_source = file_source
        self.post_config = post_config or PostConfig()
        self.meta_parser = meta_parser or MetaParser()
        self.renderer = renderer or HtmlContentRenderer()
        self.post_meta_schema = post_meta_schema
        self.post_meta_transformer = post_meta_transformer
        self.category_sorter = category_sorter or default_category_sorter
        self.post_sorter = post_sorter
        self.max_workers = max(1, max_workers)
        self._clock = clock or (lambda: dt.datetime.now(dt.UTC))

    @property
    def page_size(self) -> int:
        return self.post_config.page_size

    @property
    def generation_time_field(self) -> str:
        return self.post_config.generation_time_field

    @property
    def title_field(self) -> str:
        return self.post_config.title_field

    def _map(
        self, func: cabc.Callable[[ItemT], ResultT], items: cabc.Sequence[ItemT]
    ) -> list[ResultT]:
        """Apply ``func`` to ``items`` keeping input order, in parallel when allowed."""
        if self.max_workers == 1 or len(items) < 2:
            return [func(item) for item in items]
        with cf.ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(func, items))

    def _required_fields(self, metadata: dict[str, typ.Any]) -> tuple[str, dt.datetime]:
        """Return the title and generation time named by the post configuration."""
        title = metadata.get(self.title_field)
        if not isinstance(title, str):
            msg = f"{self.title_field!r} must be a string, got {title!r}"
            raise SchemaError(msg)
        if self.generation_time_field not in metadata:
            msg = f"{self.generation_time_field!r} is missing"
            raise SchemaError(msg)
        generated_at = parse_generation_time(
            metadata[self.generation_time_field],
            field=self.generation_time_field,
        )
        return title, generated_at

    def _parse_post_meta(self, query: PostFileQuery) -> PostMeta:
        """Read and validate the front matter of the post behind ``query``."""
        text = self.file_source.get_post_file(query)
        try:
            metadata = self.meta_parser.parse_meta(
                text,
                schema=self.post_meta_schema,
                transformer=self.post_meta_transformer,
            )
            title, generated_at = self._required_fields(metadata)
        except SchemaError as exc:
            msg = f"Invalid metadata in post '{query.category}/{query.post_file_name}': {exc}"
            raise SchemaError(msg) from exc
        return PostMeta(
            file_name=remove_file_format(query.post_file_name),
            category=query.category,
            title=title,
            generated_at=generated_at,
            metadata=metadata,
            source=query,
        )

    def _link_for(self, category: str, page_number: int, file_name: str) -> str:
        return self.blog_path.post_link_path(
            category=category, page_number=page_number, post_file_name=file_name
        )

    def get_ordered_post_meta_groups(self) -> list[CategoryGroup[PostMeta]]:
        """Return every category's metadata sorted, ordered and paginated.

        This is the metadata-only half of the pipeline; post bodies are not
        read beyond their front matter.
        """
        category_queries = self.file_source.get_all_post_file_queries()
        queries = [
            query for group in category_queries for query in group.post_file_queries
        ]
        metas = self._map(self._parse_post_meta, queries)
        groups = group_by_category(
            metas, categories=[group.category for group in category_queries]
        )

        post_sorter = self.post_sorter or freshness_sorter(self._clock())
        ordered_groups: list[CategoryGroup[PostMeta]] = []
        for group in sort_categories(groups, self.category_sorter):
            ordered = assign_order(
                sort_posts(group.posts, post_sorter),
                page_size=self.page_size,
                link_for=self._link_for,
            )
            ordered_groups.append(CategoryGroup(category=group.category, posts=tuple(ordered)))
        logger.debug(
            "ordered %d posts across %d categories", len(metas), len(ordered_groups)
        )
        return ordered_groups

    def _parse_post_content(self, meta: PostMeta) -> tuple[str, tuple[TocNode, ...]]:
        """Return the rendered body and table of contents of ``meta``'s post."""
        text = self.file_source.get_post_file(meta.source)
        table_of_contents = tuple(get_toc(text, self.post_config.toc_depth))
        mdx_source = self.renderer.markdown(strip_front_matter(text))
        return mdx_source, table_of_contents

    def _build_records(self, groups: cabc.Sequence[CategoryGroup[PostMeta]]) -> list[CategoryGroup[PostRecord]]:
        """Attach bodies, contents and navigation to ordered metadata groups."""
        metas = [meta for group in groups for meta in group.posts]
        contents = iter(self._map(self._parse_post_content, metas))
        built: list[CategoryGroup[PostRecord]] = []
        for group in groups:
            records: list[PostRecord] = []
            for index, meta in enumerate(group.posts):
                mdx_source, table_of_contents = next(contents)
                records.append(
                    PostRecord(
                        meta=meta,
                        mdx_source=mdx_source,
                        table_of_contents=table_of_contents,
                        navigator=build_navigator(group.posts, index),
                    )
                )
            built.append(CategoryGroup(category=group.category, posts=tuple(records)))
        return built

    def get_all_posts(self) -> list[CategoryGroup[PostRecord]]:
        """Return every category with its fully built posts."""
        groups = self._build_records(self.get_ordered_post_meta_groups())
        logger.info(
            "built %d posts in %d categories",
            sum(len(group.posts) for group in groups),
            len(groups),
        )
        return groups

    def get_all_post_at_category_group(self, category: str) -> list[PostRecord]:
        """Return the built posts of ``category``; empty when it is unknown."""
        for group in self.get_ordered_post_meta_groups():
            if group.category == category:
                return list(self._build_records([group])[0].posts)
        return []

    def get_single_post(self, category: str, file_name: str) -> PostRecord:
        """Return the post ``file_name`` of ``category``.

        Raises
        ------
        NotFoundError
            If no post with that file name exists in the category.
        """
        for post in self.get_all_post_at_category_group(category):
            if post.file_name == file_name:
                return post
        msg = f"Cannot find post '{file_name}' in category '{category}'"
        raise NotFoundError(msg)

    def get_all_post_meta(self, limit: int | None = None) -> list[PostMeta]:
        """Return the metadata of every post in category then post order."""
        metas = [
            meta for group in self.get_ordered_post_meta_groups() for meta in group.posts
        ]
        return metas[:limit]

    def get_all_post_meta_at_category_group(
        self, category: str, limit: int | None = None
    ) -> list[PostMeta]:
        """Return the metadata of ``category``'s posts in post order."""
        metas = [
            meta
            for group in self.get_ordered_post_meta_groups()
            if group.category == category
            for meta in group.posts
        ]
        return metas[:limit]

    def get_total_page_number_of_category(self, category: str) -> int:
        """Return how many pages ``category`` spans; ``0`` when it has no posts."""
        count = len(self.get_all_post_meta_at_category_group(category))
        return math.ceil(count / self.page_size)


__all__ = [
    "BlogPost",
    "CategoryGroup",
    "CategorySorter",
    "NavigatorLink",
    "PostMeta",
    "PostNavigator",
    "PostRecord",
    "PostSorter",
    "assign_order",
    "build_navigator",
    "default_category_sorter",
    "freshness_sorter",
    "group_by_category",
    "page_number_for",
    "parse_generation_time",
    "sort_categories",
    "sort_posts",
]
