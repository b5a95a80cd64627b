"""Render post bodies to HTML with highlighted code and heading anchors."""

from .heading_anchors import HeadingAnchorExtension
from .renderer import CODE_BLOCK_PATTERN, HtmlContentRenderer, fence_languages, normalize_fences

__all__ = [
    "CODE_BLOCK_PATTERN",
    "HeadingAnchorExtension",
    "HtmlContentRenderer",
    "fence_languages",
    "normalize_fences",
]
