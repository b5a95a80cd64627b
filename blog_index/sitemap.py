"""Build sitemap entries for categories, pages and posts.

Entries come out in three runs: each unique category, each unique
``(category, page)`` pair, then every post with its last-modified time. URLs
are the configured base URL followed by the route segments joined with ``/``.
:func:`render_sitemap_xml` turns the entries into a ``sitemap.xml`` document.
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .build_paths import BuildPathTuple

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .posts import BlogPost

SITEMAP_TEMPLATE = "sitemap.xml.jinja"


@dc.dataclass(frozen=True, slots=True)
class SitemapEntry:
    """One ``<url>`` of the sitemap."""

    url: str
    last_modified: dt.datetime | None = None


def _unique(items: cabc.Iterable[BuildPathTuple]) -> list[BuildPathTuple]:
    """Return ``items`` without repeats, keeping first occurrences."""
    return list(dict.fromkeys(items))


class SitemapGenerator:
    """Turn the ordered post collection into sitemap entries."""

    def __init__(self, post_engine: BlogPost, url_base_path: str) -> None:
        self.post_engine = post_engine
        self.url_base_path = url_base_path.removesuffix("/")

    def transform_build_path_to_url(self, build_path: BuildPathTuple) -> str:
        """Return the absolute URL of ``build_path``."""
        return f"{self.url_base_path}/{'/'.join(build_path.segments)}"

    def generate_sitemap(self) -> list[SitemapEntry]:
        """Return category, page and post entries in that order."""
        metas = [
            meta
            for group in self.post_engine.get_ordered_post_meta_groups()
            for meta in group.posts
        ]
        post_paths = [BuildPathTuple.from_meta(meta) for meta in metas]
        categories = _unique(BuildPathTuple(category=path.category) for path in post_paths)
        pages = _unique(
            BuildPathTuple(category=path.category, page=path.page) for path in post_paths
        )
        return [
            *(SitemapEntry(url=self.transform_build_path_to_url(path)) for path in categories),
            *(SitemapEntry(url=self.transform_build_path_to_url(path)) for path in pages),
            *(
                SitemapEntry(
                    url=self.transform_build_path_to_url(path),
                    last_modified=meta.generated_at,
                )
                for path, meta in zip(post_paths, metas, strict=True)
            ),
        ]


def _format_last_modified(value: dt.datetime) -> str:
    return value.astimezone(dt.UTC).isoformat(timespec="seconds").replace("+00:00", "Z")


def render_sitemap_xml(
    entries: cabc.Iterable[SitemapEntry], *, templates_dir: Path | None = None
) -> str:
    """Render ``entries`` as a sitemaps.org ``urlset`` document.

    Parameters
    ----------
    entries : Iterable[SitemapEntry]
        Entries produced by :meth:`SitemapGenerator.generate_sitemap`.
    templates_dir : Path, optional
        Directory containing ``sitemap.xml.jinja``. Defaults to the
        ``blog_index/templates`` directory when ``None``.

    Returns
    -------
    str
        The XML document, ending with a newline.
    """
    env = Environment(
        loader=FileSystemLoader(str(templates_dir or Path(__file__).parent / "templates")),
        autoescape=select_autoescape(["html", "xml", "jinja"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["lastmod"] = _format_last_modified
    return env.get_template(SITEMAP_TEMPLATE).render(entries=list(entries))


__all__ = ["SitemapEntry", "SitemapGenerator", "render_sitemap_xml"]
