"""Content indexing, rendering, and retrieval for markdown-authored sites.

This package scans a content tree into an ordered manifest, parses markdown
files with YAML frontmatter into typed entities, writes the pre-built JSON
indices consumed at runtime, and provides the tiered-cache services that serve
content from those indices (falling back to per-file parsing when they are
absent).

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from mdsite import main
>>> main()  # doctest: +SKIP
>>> from mdsite import app
>>> app(["scan", "--content-path", "site/content"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
