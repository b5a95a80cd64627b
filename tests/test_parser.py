"""Unit tests for front-matter and JSON parsing with optional schemas."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt

import msgspec
import pytest

from blog_index.errors import SchemaError
from blog_index.parser import JsonParser, MetaParser


class PostSchema(msgspec.Struct):
    title: str
    update: dt.date
    tags: list[str] = []


@dc.dataclass
class CategorySchema:
    description: str
    emoji: str = ""


POST = "---\ntitle: Hello\nupdate: 2024-01-02\ntags: [a, b]\n---\n# Body\n"


def test_parse_meta_without_schema_returns_mapping() -> None:
    meta = MetaParser().parse_meta(POST)
    assert meta["title"] == "Hello"
    assert meta["tags"] == ["a", "b"]


def test_parse_meta_with_struct_schema() -> None:
    """Struct schemas should be validated and flattened back to a dict."""
    meta = MetaParser().parse_meta(POST, schema=PostSchema)
    assert meta == {
        "title": "Hello",
        "update": dt.date(2024, 1, 2),
        "tags": ["a", "b"],
    }, f"Unexpected metadata {meta!r}"


def test_transformer_output_is_revalidated() -> None:
    """A transformer may rewrite fields but must keep the schema satisfied."""
    parser = MetaParser()
    meta = parser.parse_meta(
        POST,
        schema=PostSchema,
        transformer=lambda data: {**data, "title": data["title"].upper()},
    )
    assert meta["title"] == "HELLO"

    with pytest.raises(SchemaError):
        parser.parse_meta(
            POST,
            schema=PostSchema,
            transformer=lambda data: {key: value for key, value in data.items() if key != "title"},
        )


def test_missing_required_field_raises_schema_error() -> None:
    with pytest.raises(SchemaError, match="front matter failed schema validation"):
        MetaParser().parse_meta("---\nupdate: 2024-01-02\n---\n", schema=PostSchema)


def test_invalid_yaml_raises_schema_error() -> None:
    with pytest.raises(SchemaError, match="not valid YAML"):
        MetaParser().parse_meta("---\ntitle: [unclosed\n---\n")


def test_non_mapping_front_matter_raises_schema_error() -> None:
    with pytest.raises(SchemaError):
        MetaParser().parse_meta("---\n- a\n- b\n---\n")


def test_missing_front_matter_is_empty() -> None:
    assert MetaParser().parse_meta("# Just a body\n") == {}


def test_parse_json_with_dataclass_schema() -> None:
    payload = JsonParser().parse_json(
        '{"description": "Snakes", "emoji": "s"}', schema=CategorySchema
    )
    assert payload == {"description": "Snakes", "emoji": "s"}


def test_parse_json_rejects_malformed_document() -> None:
    with pytest.raises(SchemaError, match="could not be decoded"):
        JsonParser().parse_json("{not json")
