"""Menu data for site navigation, from ``navigation-index.json`` or content files."""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from mdsite._constants import ARTICLES, DOCS, NAVIGATION_INDEX_PATH, PROJECTS
from mdsite.generators.navigation import NAVIGATION_CATEGORIES, build_navigation_index
from mdsite.models import NavigationIndex, NavigationMenuItem

from ._prebuilt import fetch_prebuilt
from .cache import CategoryCache
from .content_service import ContentService

if typ.TYPE_CHECKING:
    from .transport import ContentTransport

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True, frozen=True)
class _NavigationSnapshot:
    index: NavigationIndex
    prebuilt: bool


class NavigationService:
    """Serve menu items for projects, articles, docs and dynamic sections.

    The pre-built navigation index is fetched once. When it is missing or
    malformed the index is rebuilt from the frontmatter of every listed file
    through ``content_service``.
    """

    def __init__(
        self, transport: ContentTransport, content_service: ContentService | None = None
    ) -> None:
        self.transport = transport
        self.content_service = content_service or ContentService(transport)
        self._cache: CategoryCache[_NavigationSnapshot] = CategoryCache("navigation index")

    async def get_navigation_index(self) -> NavigationIndex:
        """Return the navigation index, loading it once."""
        snapshot = await self._cache.get_or_load(self._load)
        return snapshot.index

    async def get_menu_items(self, category: str) -> list[NavigationMenuItem]:
        """Return the visible menu items of ``category`` or a section."""
        index = await self.get_navigation_index()
        return [item for item in index.items_for(category) if item.show_in_menu]

    async def get_project_menu_items(self) -> list[NavigationMenuItem]:
        """Return the visible project menu items."""
        return await self.get_menu_items(PROJECTS)

    async def get_article_menu_items(self) -> list[NavigationMenuItem]:
        """Return the visible article menu items."""
        return await self.get_menu_items(ARTICLES)

    async def get_doc_menu_items(self) -> list[NavigationMenuItem]:
        """Return the visible doc menu items."""
        return await self.get_menu_items(DOCS)

    async def get_section_menu_items(self, name: str) -> list[NavigationMenuItem]:
        """Return the visible menu items of the dynamic section ``name``."""
        return await self.get_menu_items(name)

    async def get_header_items(self) -> list[NavigationMenuItem]:
        """Return the projects flagged for the site header."""
        index = await self.get_navigation_index()
        return [item for item in index.projects if item.show_in_header]

    async def is_index_available(self) -> bool:
        """Return ``True`` when the pre-built navigation index was loaded."""
        snapshot = await self._cache.get_or_load(self._load)
        return snapshot.prebuilt

    def invalidate(self) -> None:
        """Drop the cached navigation index."""
        self._cache.invalidate()

    async def _load(self) -> _NavigationSnapshot:
        index = await fetch_prebuilt(
            self.transport,
            NAVIGATION_INDEX_PATH,
            NavigationIndex.from_dict,
            label="navigation index",
        )
        if index is not None:
            return _NavigationSnapshot(index, prebuilt=True)
        headers = await self.content_service.load_header_map(NAVIGATION_CATEGORIES)
        rebuilt = build_navigation_index(headers)
        logger.info(
            "Rebuilt navigation index from content: %d projects, %d articles, %d docs",
            len(rebuilt.projects),
            len(rebuilt.articles),
            len(rebuilt.docs),
        )
        return _NavigationSnapshot(rebuilt, prebuilt=False)


__all__ = ["NavigationService"]
