"""Tests for loading category descriptions."""

from __future__ import annotations

import typing as typ

import msgspec
import pytest

from blog_index.engine import BlogEngine
from blog_index.errors import NotFoundError, SchemaError

if typ.TYPE_CHECKING:
    from pathlib import Path

    from blog_index.config import BlogConfig


class CategorySchema(msgspec.Struct):
    description: str
    emoji: str


def test_all_descriptions_in_listing_order(engine: BlogEngine) -> None:
    descriptions = engine.get_all_category_descriptions()
    assert [item.category for item in descriptions] == ["python", "tooling"]
    assert descriptions[0].to_dict() == {
        "description": "All about python",
        "emoji": "*",
        "category": "python",
    }


def test_single_description(engine: BlogEngine) -> None:
    description = engine.get_category_description("tooling")
    assert description.description["description"] == "All about tooling"


def test_unknown_category_raises_not_found(engine: BlogEngine) -> None:
    with pytest.raises(NotFoundError, match="Category cooking not found"):
        engine.get_category_description("cooking")


def test_schema_and_transformer(sample_blog: Path, blog_config: BlogConfig) -> None:
    engine = BlogEngine(
        blog_config,
        category_schema=CategorySchema,
        category_transformer=lambda data: {**data, "description": data["description"].upper()},
    )
    assert engine.get_category_description("python").description == {
        "description": "ALL ABOUT PYTHON",
        "emoji": "*",
    }


def test_schema_violation_raises(sample_blog: Path, blog_config: BlogConfig) -> None:
    (sample_blog / "blog" / "python" / "description.json").write_text(
        '{"description": 3}', encoding="utf-8"
    )
    engine = BlogEngine(blog_config, category_schema=CategorySchema)
    with pytest.raises(SchemaError):
        engine.get_all_category_descriptions()


def test_missing_description_file_raises(sample_blog: Path, blog_config: BlogConfig) -> None:
    (sample_blog / "blog" / "python" / "description.json").unlink()
    with pytest.raises(NotFoundError):
        BlogEngine(blog_config).get_category_description("python")
