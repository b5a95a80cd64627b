"""Load the ``description.json`` document of each category."""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from .errors import NotFoundError
from .parser import JsonParser, Transformer

if typ.TYPE_CHECKING:
    from .source import BlogFileSource

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class CategoryDescription:
    """A category name paired with its validated description document."""

    category: str
    description: dict[str, typ.Any]

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the description fields merged with the category name."""
        return {**self.description, "category": self.category}


class BlogCategory:
    """Read and validate category descriptions."""

    def __init__(
        self,
        *,
        file_source: BlogFileSource,
        json_parser: JsonParser | None = None,
        category_schema: type | None = None,
        category_transformer: Transformer | None = None,
    ) -> None:
        self.file_source = file_source
        self.json_parser = json_parser or JsonParser()
        self.category_schema = category_schema
        self.category_transformer = category_transformer

    def _load(self, category: str) -> CategoryDescription:
        raw = self.file_source.get_category_description_file(category)
        description = self.json_parser.parse_json(
            raw, schema=self.category_schema, transformer=self.category_transformer
        )
        return CategoryDescription(category=category, description=description)

    def get_all_category_descriptions(self) -> list[CategoryDescription]:
        """Return the description of every category in listing order."""
        descriptions = [
            self._load(category) for category in self.file_source.get_all_category_names()
        ]
        logger.debug("loaded %d category descriptions", len(descriptions))
        return descriptions

    def get_category_description(self, category: str) -> CategoryDescription:
        """Return the description of ``category``.

        Raises
        ------
        NotFoundError
            If no category folder named ``category`` exists.
        """
        if category not in self.file_source.get_all_category_names():
            msg = f"Category {category} not found"
            raise NotFoundError(msg)
        return self._load(category)


__all__ = ["BlogCategory", "CategoryDescription"]
