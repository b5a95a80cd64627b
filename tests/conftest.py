"""Shared fixtures that build throwaway content trees under ``tmp_path``.

The ``sample_blog`` tree holds two categories:

- ``python``: five posts (``alpha`` freshest through ``echo`` oldest) so a page
  size of four spills onto a second page;
- ``tooling``: two posts (``zeta`` then ``eta``).

Every category carries a ``description.json``. Engines built from
``blog_config`` use ``fixed_now`` as the build time so orderings are
deterministic.
"""

from __future__ import annotations

import datetime as dt
import functools
import json
import typing as typ

import pytest

from blog_index.config import BlogConfig
from blog_index.engine import BlogEngine

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

PostWriter = typ.Callable[..., "Path"]

SAMPLE_POSTS: dict[str, list[tuple[str, str, str]]] = {
    "python": [
        ("charlie.md", "Charlie", "2024-03-01"),
        ("alpha.md", "Alpha", "2024-05-01"),
        ("echo.md", "Echo", "2024-01-01"),
        ("bravo.md", "Bravo", "2024-04-01"),
        ("delta.md", "Delta", "2024-02-01"),
    ],
    "tooling": [
        ("eta.md", "Eta", "2023-12-01"),
        ("zeta.md", "Zeta", "2024-05-20T08:00:00Z"),
    ],
}

SAMPLE_BODY = """
# Overview

Intro paragraph.

## Details

```python
print("hi")
```

### Deep dive

## Summary
"""


def write_post(
    blog_dir: Path,
    category: str,
    file_name: str,
    *,
    title: str,
    update: str,
    body: str = SAMPLE_BODY,
    extra: cabc.Mapping[str, str] | None = None,
) -> Path:
    """Write a post with YAML front matter and return its path."""
    posts_dir = blog_dir / category / "posts"
    posts_dir.mkdir(parents=True, exist_ok=True)
    lines = [f"title: {title}", f"update: {update}"]
    lines.extend(f"{key}: {value}" for key, value in (extra or {}).items())
    path = posts_dir / file_name
    path.write_text("---\n" + "\n".join(lines) + "\n---\n" + body, encoding="utf-8")
    return path


def write_description(blog_dir: Path, category: str, payload: cabc.Mapping[str, typ.Any]) -> Path:
    """Write ``description.json`` for ``category`` and return its path."""
    category_dir = blog_dir / category
    category_dir.mkdir(parents=True, exist_ok=True)
    path = category_dir / "description.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def fixed_now() -> dt.datetime:
    """Return the build time used by engines under test."""
    return dt.datetime(2024, 6, 1, tzinfo=dt.UTC)


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """Return the root folder that holds the ``blog`` directory."""
    root = tmp_path / "content"
    (root / "blog").mkdir(parents=True)
    return root


@pytest.fixture
def post_writer(content_root: Path) -> PostWriter:
    """Return :func:`write_post` bound to the temporary blog directory."""
    return functools.partial(write_post, content_root / "blog")


@pytest.fixture
def sample_blog(content_root: Path, post_writer: PostWriter) -> Path:
    """Populate the temporary content tree with the sample categories."""
    for category, posts in SAMPLE_POSTS.items():
        write_description(
            content_root / "blog",
            category,
            {"description": f"All about {category}", "emoji": "*"},
        )
        for file_name, title, update in posts:
            post_writer(category, file_name, title=title, update=update)
    return content_root


@pytest.fixture
def blog_config(content_root: Path, tmp_path: Path) -> BlogConfig:
    """Return a configuration pointing at the temporary content tree."""
    return BlogConfig(
        source_path=content_root,
        output_dir=tmp_path / "public",
        url_base_path="https://example.com/",
        max_workers=1,
    )


@pytest.fixture
def engine(sample_blog: Path, blog_config: BlogConfig, fixed_now: dt.datetime) -> BlogEngine:
    """Return an engine over the sample blog with a frozen build time."""
    return BlogEngine(blog_config, clock=lambda: fixed_now)
