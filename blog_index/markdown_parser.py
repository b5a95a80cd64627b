r"""Extract depth-tagged heading tokens from Markdown post bodies.

Headings are read from the same Python-Markdown tree that
:class:`blog_index.render.HtmlContentRenderer` builds, so a table of contents
lists exactly the headings a rendered post contains (including those nested in
blockquotes and list items), and each token's text equals the ``id`` stamped on
the rendered heading. A leading YAML front-matter block is skipped. Tokens come
back in document order, filtered to the depth window of a
:class:`TocDepthRange`.

Example
-------
>>> from blog_index.markdown_parser import extract_heading_nodes, TocDepthRange
>>> tokens = extract_heading_nodes("# Intro\n## Details\n### Deep", TocDepthRange(1, 2))
>>> [(token.depth, token.text) for token in tokens]
[(1, 'Intro'), (2, 'Details')]
"""

from __future__ import annotations

import dataclasses as dc
import re

from markdown import Markdown

from ._constants import EMPTY_HEADING_TEXT, MAX_TOC_DEPTH, MIN_TOC_DEPTH
from .errors import ConfigurationError
from .render.heading_anchors import HeadingAnchorExtension
from .render.renderer import BLOCK_EXTENSIONS, normalize_fences

FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\n(?:(.*?)\n)?(?:---|\.\.\.)[ \t]*(?:\n|\Z)", re.DOTALL
)


@dc.dataclass(frozen=True, slots=True)
class HeadingToken:
    """A single heading found in a Markdown document.

    Attributes
    ----------
    depth : int
        Heading level, ``1`` for ``#`` through ``6`` for ``######``.
    text : str
        Plain heading text with inline markup removed.
    """

    depth: int
    text: str


@dc.dataclass(frozen=True, slots=True)
class TocDepthRange:
    """Inclusive window of heading depths to extract.

    Raises
    ------
    ConfigurationError
        If ``min`` is below 1, ``max`` is above 5, or ``min`` exceeds ``max``.
    """

    min: int = MIN_TOC_DEPTH
    max: int = MAX_TOC_DEPTH

    def __post_init__(self) -> None:
        """Validate the window bounds."""
        if self.min < MIN_TOC_DEPTH or self.max > MAX_TOC_DEPTH:
            msg = (
                f"toc depth range must be between {MIN_TOC_DEPTH} and "
                f"{MAX_TOC_DEPTH}, got {self.min}..{self.max}"
            )
            raise ConfigurationError(msg)
        if self.min > self.max:
            msg = f"toc depth range min ({self.min}) must not exceed max ({self.max})"
            raise ConfigurationError(msg)

    def __contains__(self, depth: object) -> bool:
        """Return whether ``depth`` falls within the window."""
        return isinstance(depth, int) and self.min <= depth <= self.max


def strip_front_matter(markdown_text: str) -> str:
    """Return ``markdown_text`` without its leading ``---`` front-matter block."""
    normalized = markdown_text.replace("\r\n", "\n")
    match = FRONT_MATTER_PATTERN.match(normalized)
    if not match:
        return normalized
    return normalized[match.end() :]


def _scan_headings(body: str) -> list[HeadingToken]:
    """Return every heading in ``body`` in document order, unfiltered."""
    anchors = HeadingAnchorExtension()
    Markdown(extensions=[*BLOCK_EXTENSIONS, anchors]).convert(normalize_fences(body))
    return [HeadingToken(depth=depth, text=text) for depth, text in anchors.headings]


def extract_heading_nodes(
    markdown_text: str, depth_range: TocDepthRange | None = None
) -> list[HeadingToken]:
    """Return the headings of ``markdown_text`` whose depth lies in the window.

    Parameters
    ----------
    markdown_text : str
        Raw Markdown, optionally starting with a YAML front-matter block which
        is skipped.
    depth_range : TocDepthRange, optional
        Inclusive depth window; defaults to ``1..5``.

    Returns
    -------
    list[HeadingToken]
        Matching headings in document order. Returns an empty list when the
        document has no headings inside the window.
    """
    window = depth_range or TocDepthRange()
    body = strip_front_matter(markdown_text)
    return [token for token in _scan_headings(body) if token.depth in window]


__all__ = [
    "EMPTY_HEADING_TEXT",
    "FRONT_MATTER_PATTERN",
    "HeadingToken",
    "TocDepthRange",
    "extract_heading_nodes",
    "strip_front_matter",
]
