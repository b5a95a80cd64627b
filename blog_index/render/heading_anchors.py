"""Stamp rendered headings with ids matching table-of-contents links."""

from __future__ import annotations

import collections.abc as cabc
import html
import re
import typing as typ

from markdown import util
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from .._constants import EMPTY_HEADING_TEXT

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

HEADING_DEPTHS = {f"h{depth}": depth for depth in range(1, 7)}
ESCAPE_PLACEHOLDER_PATTERN = re.compile(f"{util.STX}([0-9]+){util.ETX}")
TAG_PATTERN = re.compile(r"<[^>]+>")


def _iter_text(element: Element) -> cabc.Iterator[str]:
    """Yield the text chunks of ``element``, using ``alt`` for images."""
    if element.tag == "img":
        yield element.get("alt", "")
    elif element.text:
        yield element.text
    for child in element:
        yield from _iter_text(child)
        if child.tail:
            yield child.tail


def heading_text(md: Markdown, element: Element) -> str:
    """Return the plain, whitespace-normalised text of a heading element.

    Inline code is stored entity-escaped, raw inline HTML and entities sit in
    the HTML stash and backslash escapes are still placeholders once inline
    processing has run; all of them are resolved here. A heading without any
    text is reported as ``"empty header"``.
    """
    parts = [
        html.unescape(chunk) if isinstance(chunk, util.AtomicString) else chunk
        for chunk in _iter_text(element)
    ]

    def _stashed_text(match: re.Match[str]) -> str:
        raw = md.htmlStash.rawHtmlBlocks[int(match.group(1))]
        return html.unescape(TAG_PATTERN.sub("", raw)) if isinstance(raw, str) else ""

    text = util.HTML_PLACEHOLDER_RE.sub(_stashed_text, "".join(parts))
    text = ESCAPE_PLACEHOLDER_PATTERN.sub(lambda match: chr(int(match.group(1))), text)
    return " ".join(text.split()) or EMPTY_HEADING_TEXT


class HeadingAnchorExtension(Extension):
    """Give every heading an ``id`` equal to its text.

    Table-of-contents entries link to ``"#" + heading text``; registering this
    extension on a ``markdown.Markdown`` instance makes those fragments resolve
    in the rendered post body. After a conversion, :attr:`headings` holds the
    ``(depth, text)`` pair of every heading in document order, including the
    ones nested in blockquotes and list items.
    """

    def __init__(self, **kwargs: typ.Any) -> None:
        self.headings: list[tuple[int, str]] = []
        super().__init__(**kwargs)

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the heading-anchor treeprocessor on the Markdown instance."""
        md.treeprocessors.register(
            HeadingAnchorTreeprocessor(md, self.headings), "blog_heading_anchors", 5
        )


class HeadingAnchorTreeprocessor(Treeprocessor):
    """Record every heading and set ``id`` on those that do not carry one."""

    def __init__(self, md: Markdown, headings: list[tuple[int, str]]) -> None:
        super().__init__(md)
        self.headings = headings

    def run(self, root: Element) -> Element:
        """Annotate each heading element found under ``root``."""
        self.headings.clear()
        for element in root.iter():
            depth = HEADING_DEPTHS.get(element.tag)
            if depth is None:
                continue
            text = heading_text(self.md, element)
            self.headings.append((depth, text))
            if not element.get("id"):
                element.set("id", text)
        return root


__all__ = ["HeadingAnchorExtension", "HeadingAnchorTreeprocessor", "heading_text"]
