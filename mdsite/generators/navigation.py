"""Build ``navigation-index.json`` from content frontmatter."""

from __future__ import annotations

import logging
import threading  # noqa: TC003 - used for runtime type metadata
import typing as typ
from pathlib import Path

from mdsite._constants import (
    ARTICLES,
    DOCS,
    FIXED_CATEGORIES,
    NAVIGATION_INDEX_PATH,
    PROJECTS,
)
from mdsite.models import NavigationIndex, NavigationMenuItem

from ._files import load_all_headers, write_json_atomic

if typ.TYPE_CHECKING:
    from mdsite.models import ContentIndex
    from mdsite.parser import ContentHeader

logger = logging.getLogger(__name__)

NAVIGATION_CATEGORIES = (PROJECTS, ARTICLES, DOCS)


def menu_item_from_header(header: ContentHeader) -> NavigationMenuItem:
    """Return the menu entry for one parsed header."""
    data = header.frontmatter
    return NavigationMenuItem(
        slug=header.slug,
        title=header.title,
        menu_title=data.menu_title,
        order=header.order,
        show_in_menu=data.show_in_menu,
        show_in_header=data.show_in_header,
    )


def build_navigation_index(
    headers: typ.Mapping[str, typ.Sequence[ContentHeader]],
) -> NavigationIndex:
    """Fold already sorted headers per category into a navigation index.

    Only projects, articles, docs and dynamic sections get menus; sections
    without any items are left out.
    """
    index = NavigationIndex()
    for category, items in headers.items():
        menu = [menu_item_from_header(header) for header in items]
        if category in NAVIGATION_CATEGORIES:
            setattr(index, category, menu)
        elif category not in FIXED_CATEGORIES and menu:
            index.sections[category] = menu
    return index


class NavigationIndexGenerator:
    """Write the navigation index for a content tree."""

    def __init__(self, content_path: Path, output_path: Path) -> None:
        self.content_path = Path(content_path)
        self.output_path = Path(output_path)

    def build(
        self, content_index: ContentIndex, cancel: threading.Event | None = None
    ) -> NavigationIndex:
        """Parse the frontmatter of every listed file and return the index."""
        headers = load_all_headers(
            self.content_path, content_index, NAVIGATION_CATEGORIES, cancel
        )
        return build_navigation_index(headers)

    def generate(
        self, content_index: ContentIndex, cancel: threading.Event | None = None
    ) -> Path:
        """Build the index and write ``navigation-index.json``."""
        index = self.build(content_index, cancel)
        path = write_json_atomic(self.output_path / NAVIGATION_INDEX_PATH, index.to_dict())
        total = (
            len(index.projects)
            + len(index.articles)
            + len(index.docs)
            + sum(len(items) for items in index.sections.values())
        )
        logger.info("Navigation index: %d menu items", total)
        return path


__all__ = [
    "NAVIGATION_CATEGORIES",
    "NavigationIndexGenerator",
    "build_navigation_index",
    "menu_item_from_header",
]
