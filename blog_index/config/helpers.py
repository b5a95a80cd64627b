"""Utility helpers shared by the blog configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from blog_index.errors import ConfigurationError
from blog_index.markdown_parser import TocDepthRange

from .models import BlogTreeConfig, PostConfig, RenderConfig


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _section(
    payload: typ.Mapping[str, typ.Any], key: str
) -> typ.Mapping[str, typ.Any]:
    """Return the nested mapping stored under ``key`` (empty when unset)."""
    value = payload.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"'{key}' must be a mapping, got {type(value).__name__}"
        raise ConfigurationError(msg)
    return value


def _resolve_path(value: object, base_dir: Path) -> Path:
    """Resolve ``value`` relative to ``base_dir`` unless it is absolute."""
    path = Path(str(value)).expanduser()
    if path.is_absolute():
        return path
    return base_dir / path


def _normalize_names(value: object | None) -> tuple[str, ...]:
    """Normalize a file-name exception list into a tuple of non-empty strings."""
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        msg = "'file_name_exceptions' must be a list of file names"
        raise ConfigurationError(msg)
    names: list[str] = []
    for entry in value:
        text = str(entry).strip()
        if text:
            names.append(text)
    return tuple(names)


def _build_tree_config(payload: typ.Mapping[str, typ.Any]) -> BlogTreeConfig:
    """Build a BlogTreeConfig from the ``tree`` mapping, keeping defaults."""
    base = BlogTreeConfig()
    return BlogTreeConfig(
        blog_folder_name=payload.get("blog_folder_name", base.blog_folder_name),
        post_folder_name=payload.get("post_folder_name", base.post_folder_name),
        category_description_file_name=payload.get(
            "category_description_file_name", base.category_description_file_name
        ),
    )


def _build_depth_range(payload: typ.Mapping[str, typ.Any]) -> TocDepthRange:
    """Build the TOC depth window from the ``posts.toc_depth`` mapping."""
    base = TocDepthRange()
    try:
        minimum = int(payload.get("min", base.min))
        maximum = int(payload.get("max", base.max))
    except (TypeError, ValueError) as exc:
        msg = f"'toc_depth' bounds must be integers: {exc}"
        raise ConfigurationError(msg) from exc
    return TocDepthRange(min=minimum, max=maximum)


def _build_post_config(payload: typ.Mapping[str, typ.Any]) -> PostConfig:
    """Build a PostConfig from the ``posts`` mapping, keeping defaults."""
    base = PostConfig()
    return PostConfig(
        page_size=payload.get("page_size", base.page_size),
        generation_time_field=payload.get(
            "generation_time_field", base.generation_time_field
        ),
        title_field=payload.get("title_field", base.title_field),
        toc_depth=_build_depth_range(_section(payload, "toc_depth")),
    )


def _build_render_config(payload: typ.Mapping[str, typ.Any]) -> RenderConfig:
    """Build a RenderConfig from the ``render`` mapping, keeping defaults."""
    base = RenderConfig()
    return RenderConfig(
        pygments_style=payload.get("pygments_style", base.pygments_style)
    )


__all__ = [
    "_build_depth_range",
    "_build_post_config",
    "_build_render_config",
    "_build_tree_config",
    "_normalize_names",
    "_optional_str",
    "_resolve_path",
    "_section",
]
