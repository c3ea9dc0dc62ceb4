"""Build ``search-index.json`` for client-side search."""

from __future__ import annotations

import logging
import threading  # noqa: TC003 - used for runtime type metadata
import typing as typ
from pathlib import Path

from mdsite._constants import (
    ARTICLES,
    BLOG,
    DOCS,
    PROJECTS,
    ROUTE_PREFIXES,
    SEARCH_INDEX_PATH,
    SEARCH_TEXT_LENGTH,
)
from mdsite.models import SearchIndexEntry
from mdsite.rendering import MarkdownRenderer, truncate_text

from ._files import load_all_headers, write_json_atomic

if typ.TYPE_CHECKING:
    from mdsite.models import ContentIndex
    from mdsite.parser import ContentHeader

logger = logging.getLogger(__name__)

SEARCHABLE_CATEGORIES = (BLOG, PROJECTS, ARTICLES, DOCS)
ENTRY_TYPES = {BLOG: "blog", PROJECTS: "project", ARTICLES: "article", DOCS: "docs"}


def route_for(category: str, routes: typ.Mapping[str, str] | None = None) -> str:
    """Return the URL prefix for ``category`` without slashes.

    >>> route_for("projects")
    'project'
    >>> route_for("tutorials", {"tutorials": "/learn/"})
    'learn'
    """
    if routes and category in routes:
        return routes[category].strip("/")
    return ROUTE_PREFIXES.get(category, category)


def search_entry_from_header(
    header: ContentHeader,
    *,
    routes: typ.Mapping[str, str] | None = None,
    max_length: int = SEARCH_TEXT_LENGTH,
) -> SearchIndexEntry:
    """Return the search entry for one header."""
    data = header.frontmatter
    plain = MarkdownRenderer.extract_plain_text(header.body)
    return SearchIndexEntry(
        slug=header.slug,
        title=header.title,
        description=data.description or data.summary or "",
        type=ENTRY_TYPES.get(header.category, header.category),
        url=f"/{route_for(header.category, routes)}/{header.slug}",
        tags=list(data.tags),
        content=truncate_text(plain, max_length),
    )


class SearchIndexGenerator:
    """Write the search index for blog posts, projects, articles, docs and sections."""

    def __init__(
        self,
        content_path: Path,
        output_path: Path,
        *,
        routes: typ.Mapping[str, str] | None = None,
    ) -> None:
        self.content_path = Path(content_path)
        self.output_path = Path(output_path)
        self.routes = dict(routes or {})

    def build(
        self, content_index: ContentIndex, cancel: threading.Event | None = None
    ) -> list[SearchIndexEntry]:
        """Return one entry per readable content file."""
        headers = load_all_headers(
            self.content_path, content_index, SEARCHABLE_CATEGORIES, cancel
        )
        return [
            search_entry_from_header(header, routes=self.routes)
            for items in headers.values()
            for header in items
        ]

    def generate(
        self, content_index: ContentIndex, cancel: threading.Event | None = None
    ) -> Path:
        """Build the entries and write ``search-index.json``."""
        entries = self.build(content_index, cancel)
        path = write_json_atomic(
            self.output_path / SEARCH_INDEX_PATH, [entry.to_dict() for entry in entries]
        )
        logger.info("Search index: %d entries", len(entries))
        return path


__all__ = [
    "SEARCHABLE_CATEGORIES",
    "SearchIndexGenerator",
    "route_for",
    "search_entry_from_header",
]
