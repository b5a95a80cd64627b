r"""Parse post front matter and category JSON into validated mappings.

Both parsers share one validation routine: the raw document is decoded, checked
against an optional schema with :func:`msgspec.convert`, passed through an
optional transformer, validated again, and finally normalised into a plain
``dict``. A schema can be any type ``msgspec`` understands as an object (a
:class:`msgspec.Struct` subclass, a dataclass or a ``TypedDict``); without a
schema the document only has to be a string-keyed mapping.

Example
-------
>>> from blog_index.parser import MetaParser
>>> MetaParser().parse_meta("---\ntitle: Hello\n---\nBody")
{'title': 'Hello'}
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import io
import typing as typ

import msgspec
import msgspec.json as msgspec_json
import msgspec.structs
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import SchemaError
from .markdown_parser import FRONT_MATTER_PATTERN

Transformer = cabc.Callable[[dict[str, typ.Any]], cabc.Mapping[str, typ.Any]]

_PLAIN_MAPPING = dict[str, typ.Any]


def _to_mapping(value: object) -> dict[str, typ.Any]:
    """Return ``value`` as a plain dict, whatever shape the schema produced."""
    if isinstance(value, msgspec.Struct):
        return msgspec.structs.asdict(value)
    if dc.is_dataclass(value) and not isinstance(value, type):
        return {field.name: getattr(value, field.name) for field in dc.fields(value)}
    if isinstance(value, cabc.Mapping):
        return dict(value)
    msg = f"expected a mapping, got {type(value).__name__}"
    raise SchemaError(msg)


class DataParser:
    """Validate decoded documents against optional schemas."""

    def parse_data_with_schema(
        self,
        data: object,
        *,
        schema: type | None = None,
        transformer: Transformer | None = None,
        source: str = "document",
    ) -> dict[str, typ.Any]:
        """Validate ``data``, apply ``transformer`` and validate the result again.

        Parameters
        ----------
        data : object
            Decoded document (usually a mapping).
        schema : type, optional
            Target type for :func:`msgspec.convert`; ``None`` accepts any
            string-keyed mapping.
        transformer : callable, optional
            Receives the validated mapping and returns a replacement mapping.
        source : str, optional
            Label used in error messages.

        Returns
        -------
        dict[str, Any]
            The validated (and transformed) document.

        Raises
        ------
        SchemaError
            If validation fails before or after the transformation.
        """
        target = schema or _PLAIN_MAPPING
        validated = self._convert(data, target, source)
        if transformer is None:
            return validated
        return self._convert(transformer(validated), target, source)

    @staticmethod
    def _convert(data: object, target: type, source: str) -> dict[str, typ.Any]:
        try:
            converted = msgspec.convert(data, type=target, strict=False)
        except msgspec.ValidationError as exc:
            msg = f"{source} failed schema validation: {exc}"
            raise SchemaError(msg) from exc
        return _to_mapping(converted)


class MetaParser(DataParser):
    """Parse YAML front matter at the top of a post file."""

    @staticmethod
    def _build_loader() -> YAML:
        loader = YAML(typ="safe")
        loader.version = (1, 2)
        return loader

    def load_front_matter(self, text: str) -> object:
        """Return the decoded front-matter block, or ``{}`` when there is none."""
        match = FRONT_MATTER_PATTERN.match(text.replace("\r\n", "\n"))
        if not match or not (match.group(1) or "").strip():
            return {}
        try:
            loaded = self._build_loader().load(io.StringIO(match.group(1)))
        except YAMLError as exc:
            msg = f"front matter is not valid YAML: {exc}"
            raise SchemaError(msg) from exc
        return {} if loaded is None else loaded

    def parse_meta(
        self,
        text: str,
        *,
        schema: type | None = None,
        transformer: Transformer | None = None,
    ) -> dict[str, typ.Any]:
        """Return the validated front matter of ``text``."""
        return self.parse_data_with_schema(
            self.load_front_matter(text),
            schema=schema,
            transformer=transformer,
            source="front matter",
        )


class JsonParser(DataParser):
    """Parse JSON documents such as category descriptions."""

    def parse_json(
        self,
        text: str,
        *,
        schema: type | None = None,
        transformer: Transformer | None = None,
    ) -> dict[str, typ.Any]:
        """Return the validated JSON object encoded in ``text``."""
        try:
            decoded = msgspec_json.decode(text)
        except msgspec.DecodeError as exc:
            msg = f"JSON document could not be decoded: {exc}"
            raise SchemaError(msg) from exc
        return self.parse_data_with_schema(
            decoded, schema=schema, transformer=transformer, source="JSON document"
        )


__all__ = ["DataParser", "JsonParser", "MetaParser", "Transformer"]
