"""Behaviour tests for indexing a content tree end to end.

The scenarios in ``blog_index.feature`` build the ``sample_blog`` tree from
``tests/conftest.py`` and query it through ``BlogEngine``: pagination of a
category, the three runs of sitemap entries, and the error raised for an
unknown post.

Usage
-----
Run ``pytest tests/bdd/test_blog_index_bdd.py -v``. The scenarios only touch
``tmp_path`` so no external services are required.
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from blog_index.engine import BlogEngine
from blog_index.errors import NotFoundError

if typ.TYPE_CHECKING:
    from blog_index.config import BlogConfig
    from blog_index.posts import PostMeta
    from blog_index.sitemap import SitemapEntry

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "blog_index.feature"
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("a blog with five python posts and two tooling posts")
def given_sample_blog(
    sample_blog: Path,
    blog_config: BlogConfig,
    fixed_now: dt.datetime,
    scenario_state: dict[str, object],
) -> None:
    """Build an engine over the sample content tree."""
    scenario_state["engine"] = BlogEngine(blog_config, clock=lambda: fixed_now)


@when(parsers.parse('I list the post metadata of the "{category}" category'))
def when_list_meta(category: str, scenario_state: dict[str, object]) -> None:
    engine = typ.cast("BlogEngine", scenario_state["engine"])
    scenario_state["metas"] = engine.get_all_post_meta_at_category_group(category)


@when("I generate the sitemap")
def when_generate_sitemap(scenario_state: dict[str, object]) -> None:
    engine = typ.cast("BlogEngine", scenario_state["engine"])
    scenario_state["sitemap"] = engine.generate_sitemap()


@when(parsers.parse('I request the post "{file_name}" in the "{category}" category'))
def when_request_post(
    file_name: str, category: str, scenario_state: dict[str, object]
) -> None:
    engine = typ.cast("BlogEngine", scenario_state["engine"])
    try:
        engine.get_post(category, file_name)
    except NotFoundError as exc:
        scenario_state["error"] = exc


@then(parsers.parse('the page numbers are "{pages}"'))
def then_page_numbers(pages: str, scenario_state: dict[str, object]) -> None:
    metas = typ.cast("list[PostMeta]", scenario_state["metas"])
    expected = [int(page) for page in pages.split(",")]
    actual = [meta.page_number for meta in metas]
    assert actual == expected, f"Expected pages {expected}, got {actual}"


@then(parsers.parse('the first post links to "{link}"'))
def then_first_link(link: str, scenario_state: dict[str, object]) -> None:
    metas = typ.cast("list[PostMeta]", scenario_state["metas"])
    assert metas[0].link == link, f"Expected {link!r}, got {metas[0].link!r}"


@then(
    parsers.parse(
        "the sitemap has {categories:d} category entries, {pages:d} page entries "
        "and {posts:d} post entries"
    )
)
def then_sitemap_counts(
    categories: int, pages: int, posts: int, scenario_state: dict[str, object]
) -> None:
    entries = typ.cast("list[SitemapEntry]", scenario_state["sitemap"])
    depths = [entry.url.removeprefix("https://example.com/").count("/") for entry in entries]
    assert depths == [0] * categories + [1] * pages + [2] * posts, (
        f"Unexpected sitemap layout {[entry.url for entry in entries]!r}"
    )


@then("a not-found error is raised")
def then_not_found(scenario_state: dict[str, object]) -> None:
    assert isinstance(scenario_state.get("error"), NotFoundError), (
        "expected get_post to raise NotFoundError"
    )
