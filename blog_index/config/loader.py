"""Load blog configuration YAML into typed dataclasses."""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from blog_index.errors import ConfigurationError

from .helpers import (
    _build_post_config,
    _build_render_config,
    _build_tree_config,
    _normalize_names,
    _optional_str,
    _resolve_path,
    _section,
)
from .models import BlogConfig

logger = logging.getLogger(__name__)


def load_blog_config(path: Path) -> BlogConfig:
    """Load the YAML configuration describing the content tree and pipeline.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/blog.yaml``). Relative paths inside the file resolve against
        the file's directory.

    Returns
    -------
    BlogConfig
        Parsed configuration with defaults applied.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    ConfigurationError
        If the YAML cannot be parsed, the top-level structure is not a mapping,
        ``source_path`` is missing, or a value fails validation.

    Examples
    --------
    >>> from pathlib import Path
    >>> from blog_index.config import load_blog_config
    >>> config = load_blog_config(Path("config/blog.yaml"))  # doctest: +SKIP
    >>> config.posts.page_size  # doctest: +SKIP
    4
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except YAMLError as exc:
        msg = f"Configuration file '{path}' is not valid YAML: {exc}"
        raise ConfigurationError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise ConfigurationError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base_dir = path.parent

    source_path = raw.get("source_path")
    if not source_path:
        msg = f"Configuration file '{path}' is missing 'source_path'."
        raise ConfigurationError(msg)

    config = BlogConfig(
        source_path=_resolve_path(source_path, base_dir),
        output_dir=_resolve_path(raw.get("output_dir", "public"), base_dir),
        url_base_path=_optional_str(raw.get("url_base_path")) or "",
        link_base_path=_optional_str(raw.get("link_base_path")),
        max_workers=raw.get("max_workers", 4),
        file_name_exceptions=_normalize_names(raw.get("file_name_exceptions")),
        tree=_build_tree_config(_section(raw, "tree")),
        posts=_build_post_config(_section(raw, "posts")),
        render=_build_render_config(_section(raw, "render")),
    )
    logger.debug("loaded blog config from %s: source=%s", path, config.source_path)
    return config


__all__ = ["load_blog_config"]
