"""Cyclopts CLI entrypoint for indexing a blog content tree.

The ``blog`` console script defined here reads ``config/blog.yaml``, walks the
content tree it points at and writes the artifacts a static site build needs:
``sitemap.xml``, ``build-paths.json`` and the stylesheet for highlighted code.
It can also print the route parameters of every static page, or the table of
contents of a single Markdown file.

Examples
--------
Build every artifact for the default configuration:

>>> from blog_index.cli import main
>>> main()  # doctest: +SKIP

Print the page-level routes of a custom configuration:

>>> from blog_index.cli import app
>>> app(["paths", "--level", "page", "--config", "site/blog.yaml"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json as msgspec_json
from cyclopts import App, Parameter

from ._constants import BUILD_PATHS_FILENAME, SITEMAP_FILENAME
from .config import load_blog_config
from .engine import BlogEngine
from .markdown_parser import TocDepthRange
from .sitemap import render_sitemap_xml
from .toc import get_toc, toc_to_payload

DEFAULT_CONFIG = Path("config/blog.yaml")
STYLESHEET_FILENAME = "codehilite.css"

logger = logging.getLogger(__name__)

app = App(name="blog", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]

BuildPathLevel = typ.Literal["category", "page", "post"]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _encode_json(payload: object) -> str:
    return msgspec_json.format(msgspec_json.encode(payload), indent=2).decode() + "\n"


@app.command(help="Write sitemap.xml, build-paths.json and the code stylesheet.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to blog config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Log pipeline progress to stderr")
    ] = False,
) -> None:
    """Index the content tree and write the build artifacts.

    Parameters
    ----------
    config : Path, optional
        Path to the ``blog.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    output_dir : Path or None, optional
        Directory receiving the artifacts; defaults to the configured
        ``output_dir``.
    verbose : bool, optional
        Enable debug logging.
    """
    _configure_logging(verbose=verbose)
    blog_config = load_blog_config(config)
    engine = BlogEngine(blog_config)
    target_dir = output_dir or blog_config.output_dir
    target_dir.mkdir(parents=True, exist_ok=True)

    sitemap_path = target_dir / SITEMAP_FILENAME
    sitemap_path.write_text(render_sitemap_xml(engine.generate_sitemap()), encoding="utf-8")

    build_paths_path = target_dir / BUILD_PATHS_FILENAME
    build_paths = [params.to_dict() for params in engine.generate_static_params_for_post()]
    build_paths_path.write_text(_encode_json(build_paths), encoding="utf-8")

    stylesheet_path = target_dir / STYLESHEET_FILENAME
    stylesheet_path.write_text(engine.renderer.stylesheet + "\n", encoding="utf-8")

    written = [sitemap_path, build_paths_path, stylesheet_path]
    logger.info("indexed %d posts", len(build_paths))
    for path in written:
        print(f"wrote {_format_path(path)}")


@app.command(help="Print the build-path tuples of every static page as JSON.")
def paths(
    *,
    level: typ.Annotated[
        BuildPathLevel, Parameter(help="Route granularity", env_var="INPUT_LEVEL")
    ] = "post",
    config: typ.Annotated[
        Path, Parameter(help="Path to blog config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Print category, page or post route parameters, one entry per post."""
    engine = BlogEngine(load_blog_config(config))
    generators = {
        "category": engine.generate_static_params_for_category,
        "page": engine.generate_static_params_for_page,
        "post": engine.generate_static_params_for_post,
    }
    payload = [params.to_dict() for params in generators[level]()]
    print(_encode_json(payload), end="")


@app.command(help="Print the table of contents of a Markdown file as JSON.")
def toc(
    file: typ.Annotated[Path, Parameter(help="Markdown file to outline")],
    *,
    min_depth: typ.Annotated[
        int, Parameter(name="--min", help="Shallowest heading level kept")
    ] = 1,
    max_depth: typ.Annotated[
        int, Parameter(name="--max", help="Deepest heading level kept")
    ] = 5,
) -> None:
    """Print the nested heading outline of ``file``."""
    depth_range = TocDepthRange(min=min_depth, max=max_depth)
    text = file.read_text(encoding="utf-8")
    print(_encode_json(toc_to_payload(get_toc(text, depth_range))), end="")


def main() -> None:
    """Invoke the Cyclopts application that powers the `blog` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
