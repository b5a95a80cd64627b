r"""Build nested tables of contents from flat heading tokens.

:func:`build_toc` turns the depth-tagged tokens produced by
:func:`blog_index.markdown_parser.extract_heading_nodes` into a forest of
immutable :class:`TocNode` values. Only depth-1 headings start a root entry.
Each node's children are found by scanning the node's scope, which runs until
the next heading at the same depth or shallower, and accepting every heading
whose depth is one deeper than the scope head (or equal to it).

Example
-------
>>> from blog_index.toc import get_toc
>>> toc = get_toc("# A\n## B\n### C\n## D")
>>> [child.text for child in toc[0].children]
['B', 'D']
>>> toc[0].children[1].children is None
True
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from .markdown_parser import HeadingToken, TocDepthRange, extract_heading_nodes

ROOT_DEPTH = 1


@dc.dataclass(frozen=True, slots=True)
class TocNode:
    """A table-of-contents entry and its nested entries.

    Attributes
    ----------
    depth : int
        Heading level of the entry.
    text : str
        Heading text shown in the contents list.
    href : str
        In-page anchor, ``"#" + text``.
    children : tuple[TocNode, ...] | None
        Nested entries in document order, or ``None`` when there are none.
    """

    depth: int
    text: str
    href: str
    children: tuple[TocNode, ...] | None = None

    def to_dict(self) -> dict[str, typ.Any]:
        """Return a plain mapping, omitting ``children`` when absent."""
        payload: dict[str, typ.Any] = {
            "depth": self.depth,
            "text": self.text,
            "href": self.href,
        }
        if self.children is not None:
            payload["children"] = [child.to_dict() for child in self.children]
        return payload


def _heading_href(text: str) -> str:
    return f"#{text}"


def _scope_of(nodes: cabc.Sequence[HeadingToken]) -> cabc.Sequence[HeadingToken]:
    """Return ``nodes`` up to (excluding) the next heading no deeper than the head."""
    head = nodes[0]
    for offset, token in enumerate(nodes[1:], start=1):
        if token.depth <= head.depth:
            return nodes[:offset]
    return nodes


def _build_children(
    nodes: cabc.Sequence[HeadingToken],
) -> tuple[TocNode, ...] | None:
    """Return the child entries of ``nodes[0]`` or ``None`` when it has none."""
    head = nodes[0]
    scope = _scope_of(nodes)
    children = tuple(
        _build_node(candidate, nodes[position:])
        for position, candidate in enumerate(scope[1:], start=1)
        if candidate.depth in (head.depth + 1, head.depth)
    )
    return children or None


def _build_node(token: HeadingToken, nodes: cabc.Sequence[HeadingToken]) -> TocNode:
    return TocNode(
        depth=token.depth,
        text=token.text,
        href=_heading_href(token.text),
        children=_build_children(nodes),
    )


def build_toc(tokens: cabc.Sequence[HeadingToken]) -> list[TocNode]:
    """Return the table-of-contents forest for ``tokens``.

    Parameters
    ----------
    tokens : Sequence[HeadingToken]
        Window-filtered headings in document order.

    Returns
    -------
    list[TocNode]
        One root per depth-1 heading, in document order. Empty when no depth-1
        heading is present.
    """
    headings = list(tokens)
    return [
        _build_node(token, headings[index:])
        for index, token in enumerate(headings)
        if token.depth == ROOT_DEPTH
    ]


def get_toc(markdown_text: str, depth_range: TocDepthRange | None = None) -> list[TocNode]:
    """Extract headings from ``markdown_text`` and build its table of contents."""
    return build_toc(extract_heading_nodes(markdown_text, depth_range))


def toc_to_payload(toc: cabc.Iterable[TocNode]) -> list[dict[str, typ.Any]]:
    """Return ``toc`` as a list of plain mappings suitable for JSON encoding."""
    return [node.to_dict() for node in toc]


__all__ = ["ROOT_DEPTH", "TocNode", "build_toc", "get_toc", "toc_to_payload"]
