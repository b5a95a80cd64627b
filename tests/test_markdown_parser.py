"""Unit tests for heading extraction and front-matter handling.

Extraction must report ATX and setext headings in document order, including
those nested in blockquotes and list items. Nothing inside fenced code counts,
inline markup is reduced to plain text and the depth window is honoured.
"""

from __future__ import annotations

import pytest

from blog_index.errors import ConfigurationError
from blog_index.markdown_parser import (
    EMPTY_HEADING_TEXT,
    HeadingToken,
    TocDepthRange,
    extract_heading_nodes,
    strip_front_matter,
)


def test_atx_and_setext_headings_in_order() -> None:
    """Both heading syntaxes should be reported with their depths."""
    text = "# Title\n\nSub title\n---------\n\nBig\n===\n\n### Third ###\n"
    tokens = extract_heading_nodes(text)
    assert tokens == [
        HeadingToken(1, "Title"),
        HeadingToken(2, "Sub title"),
        HeadingToken(1, "Big"),
        HeadingToken(3, "Third"),
    ], f"Unexpected tokens {tokens!r}"


def test_headings_inside_fences_are_ignored() -> None:
    """Lines inside fenced code blocks must never become headings."""
    text = "# Real\n\n```bash\n# not a heading\n```\n\n~~~\n## still code\n~~~\n## After\n"
    tokens = extract_heading_nodes(text)
    assert [token.text for token in tokens] == ["Real", "After"]


def test_inline_markup_is_reduced_to_text() -> None:
    """Links, emphasis, code spans and tags should collapse to their text."""
    text = (
        "# **Bold** and _em_ text\n"
        "## [Link](https://example.com) with `code`\n"
        "## <span>Tagged</span> \\#escaped\n"
        "## snake_case_name stays\n"
    )
    texts = [token.text for token in extract_heading_nodes(text)]
    assert texts == [
        "Bold and em text",
        "Link with code",
        "Tagged #escaped",
        "snake_case_name stays",
    ], f"Unexpected heading texts {texts!r}"


def test_headings_nested_in_quotes_and_lists_are_found() -> None:
    """Headings inside blockquotes and list items belong to the outline too."""
    text = "# Top\n\n> ## Quoted\n\n- ## In list\n\n## After\n"
    tokens = extract_heading_nodes(text)
    assert tokens == [
        HeadingToken(1, "Top"),
        HeadingToken(2, "Quoted"),
        HeadingToken(2, "In list"),
        HeadingToken(2, "After"),
    ], f"Unexpected tokens {tokens!r}"


@pytest.mark.parametrize(
    ("heading", "expected"),
    [
        ("# Use `a*b*c` here", "Use a*b*c here"),
        ("# Old ~~plan~~", "Old ~~plan~~"),
        ("# ![Logo](logo.png) Project", "Logo Project"),
        ("# Q&amp;A", "Q&A"),
    ],
)
def test_literal_text_survives_cleaning(heading: str, expected: str) -> None:
    """Code spans and unsupported markup keep their characters."""
    tokens = extract_heading_nodes(heading)
    assert [token.text for token in tokens] == [expected]


def test_empty_heading_gets_placeholder_text() -> None:
    """A heading with no text should still produce a token."""
    tokens = extract_heading_nodes("#\n## ![](img.png)\n")
    assert [token.text for token in tokens] == [EMPTY_HEADING_TEXT, EMPTY_HEADING_TEXT]


def test_depth_window_filters_tokens() -> None:
    """Only headings within the inclusive window should be kept."""
    text = "# One\n## Two\n### Three\n#### Four\n###### Six\n"
    tokens = extract_heading_nodes(text, TocDepthRange(min=2, max=3))
    assert [token.depth for token in tokens] == [2, 3]


def test_default_window_excludes_level_six() -> None:
    """The default window stops at depth five."""
    tokens = extract_heading_nodes("##### Five\n###### Six\n")
    assert [token.depth for token in tokens] == [5]


def test_front_matter_is_skipped() -> None:
    """Front matter delimiters must not be read as setext underlines."""
    text = "---\ntitle: Hello\nupdate: 2024-01-01\n---\n# Body\n"
    assert extract_heading_nodes(text) == [HeadingToken(1, "Body")]
    assert strip_front_matter(text) == "# Body\n"


def test_strip_front_matter_leaves_plain_text() -> None:
    """Documents without front matter are returned unchanged."""
    assert strip_front_matter("# Title\n") == "# Title\n"


def test_no_headings_yields_empty_list() -> None:
    assert extract_heading_nodes("Just a paragraph.\n") == []


@pytest.mark.parametrize(
    ("minimum", "maximum"),
    [(0, 3), (1, 6), (4, 2)],
)
def test_invalid_depth_range_rejected(minimum: int, maximum: int) -> None:
    """Depth windows outside 1..5 or inverted should be rejected."""
    with pytest.raises(ConfigurationError):
        TocDepthRange(min=minimum, max=maximum)
