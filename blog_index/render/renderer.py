"""Render post bodies to HTML with highlighted code and anchored headings."""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from .heading_anchors import HeadingAnchorExtension

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

CODEHILITE_CLASS = "codehilite"
# Extensions that decide block structure, and so which headings exist.
BLOCK_EXTENSIONS: tuple[str, ...] = ("fenced_code", "tables", "sane_lists")

# Opening fence (``` or ~~~) with an optional language word, then the body up
# to a closing fence made of the same character.
CODE_BLOCK_PATTERN = re.compile(
    r"^(?P<fence>`{3,}|~{3,})[ \t]*(?P<lang>[A-Za-z0-9_+#.-]+)?[^\n]*\n"
    r"(?P<body>.*?)^(?P=fence)",
    re.DOTALL | re.MULTILINE,
)
INDENTED_FENCE_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_ATTRIBUTES_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?,[^\r\n]+$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(rf'<div class="{CODEHILITE_CLASS}">')


def normalize_fences(text: str) -> str:
    """Return ``text`` with fences dedented and comma attributes dropped.

    ``fenced_code`` only recognises fences at column zero with a bare language
    word, so ``   ```rust,no_run`` becomes ``rust`` fenced at the margin.
    """
    dedented = INDENTED_FENCE_PATTERN.sub(r"\1", text)
    return FENCE_ATTRIBUTES_PATTERN.sub(
        lambda match: f"{match.group(1)}{match.group(2) or ''}", dedented
    )


def fence_languages(text: str) -> list[str]:
    """Return the language of every fenced block in ``text``, ``"text"`` if unset."""
    return [match.group("lang") or "text" for match in CODE_BLOCK_PATTERN.finditer(text)]


class HtmlContentRenderer:
    """Render post bodies with Pygments highlighting and heading anchors.

    Each call builds its own ``Markdown`` instance, so a single renderer can be
    shared by the worker threads rendering posts in parallel.
    """

    def __init__(
        self,
        pygments_style: str = "monokai",
        extra_extensions: typ.Sequence[Extension | str] = (),
    ) -> None:
        """Initialize a renderer.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        extra_extensions : Sequence[Extension | str], optional
            Additional Python-Markdown extensions appended after the built-in
            set.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass=CODEHILITE_CLASS)
        self._extra_extensions = tuple(extra_extensions)

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(f".{CODEHILITE_CLASS}")

    def _build_markdown(self) -> Markdown:
        return Markdown(
            extensions=[
                *BLOCK_EXTENSIONS,
                "codehilite",
                HeadingAnchorExtension(),
                *self._extra_extensions,
            ],
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": CODEHILITE_CLASS,
                    "pygments_style": self.pygments_style,
                }
            },
        )

    def markdown(self, text: str) -> str:
        """Return the HTML for the Markdown post body ``text``."""
        normalized = normalize_fences(text)
        if not normalized.strip():
            return ""
        html = self._build_markdown().convert(normalized)
        return self._tag_languages(html, fence_languages(normalized))

    @staticmethod
    def _tag_languages(html: str, languages: list[str]) -> str:
        """Add ``data-language`` to highlighted blocks in document order."""
        if not languages:
            return html
        pending = iter(languages)

        def _with_language(_match: re.Match[str]) -> str:
            language = escape(next(pending, "text"), quote=True)
            return f'<div class="{CODEHILITE_CLASS}" data-language="{language}">'

        return CODEHILITE_OPEN_TAG.sub(_with_language, html, count=len(languages))


__all__ = [
    "BLOCK_EXTENSIONS",
    "CODE_BLOCK_PATTERN",
    "HtmlContentRenderer",
    "fence_languages",
    "normalize_fences",
]
