"""Index a Markdown blog content tree for static site builds.

This package exposes the ``blog`` CLI used to write ``sitemap.xml`` and
``build-paths.json`` for a content tree, plus :class:`~blog_index.engine.BlogEngine`
for querying ordered posts, category descriptions and tables of contents from
Python.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``BlogEngine``: Facade answering every post, category and route query.

Examples
--------
>>> from blog_index import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main
from .engine import BlogEngine

__all__ = ["BlogEngine", "app", "main"]
