"""Listing metadata from ``content-metadata.json`` or, failing that, content files."""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from mdsite._constants import CONTENT_METADATA_PATH
from mdsite.generators.metadata import ContentMetadataGenerator, build_metadata_index
from mdsite.models import (
    ArticleMetadata,
    BlogPostMetadata,
    ContentMetadataIndex,
    DocMetadata,
    FeatureMetadata,
    ProjectMetadata,
)

from ._prebuilt import fetch_prebuilt
from .cache import CategoryCache
from .content_service import ContentService

if typ.TYPE_CHECKING:
    from .transport import ContentTransport

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True, frozen=True)
class _MetadataSnapshot:
    index: ContentMetadataIndex
    prebuilt: bool


class ContentMetadataService:
    """Serve lightweight per-category records for listing pages."""

    def __init__(
        self, transport: ContentTransport, content_service: ContentService | None = None
    ) -> None:
        self.transport = transport
        self.content_service = content_service or ContentService(transport)
        self._cache: CategoryCache[_MetadataSnapshot] = CategoryCache("metadata index")

    async def get_metadata_index(self) -> ContentMetadataIndex:
        """Return the metadata index, loading it once."""
        snapshot = await self._cache.get_or_load(self._load)
        return snapshot.index

    async def get_blog_posts_metadata(self) -> list[BlogPostMetadata]:
        """Return blog post records, newest first."""
        return list((await self.get_metadata_index()).blog)

    async def get_projects_metadata(self) -> list[ProjectMetadata]:
        """Return project records by order."""
        return list((await self.get_metadata_index()).projects)

    async def get_articles_metadata(self) -> list[ArticleMetadata]:
        """Return article records by order."""
        return list((await self.get_metadata_index()).articles)

    async def get_docs_metadata(self) -> list[DocMetadata]:
        """Return doc page records by order."""
        return list((await self.get_metadata_index()).docs)

    async def get_features_metadata(self) -> list[FeatureMetadata]:
        """Return feature card records by order."""
        return list((await self.get_metadata_index()).features)

    async def get_section_metadata(self, name: str) -> list[ArticleMetadata]:
        """Return the records of the dynamic section ``name``; unknown names are empty."""
        return list((await self.get_metadata_index()).sections.get(name, []))

    async def is_index_available(self) -> bool:
        """Return ``True`` when the pre-built metadata index was loaded."""
        snapshot = await self._cache.get_or_load(self._load)
        return snapshot.prebuilt

    def invalidate(self) -> None:
        """Drop the cached metadata index."""
        self._cache.invalidate()

    async def _load(self) -> _MetadataSnapshot:
        index = await fetch_prebuilt(
            self.transport,
            CONTENT_METADATA_PATH,
            ContentMetadataIndex.from_dict,
            label="metadata index",
        )
        if index is not None:
            return _MetadataSnapshot(index, prebuilt=True)
        headers = await self.content_service.load_header_map(ContentMetadataGenerator.CATEGORIES)
        rebuilt = build_metadata_index(headers)
        logger.info("Rebuilt metadata index from content: %d items", rebuilt.total_records())
        return _MetadataSnapshot(rebuilt, prebuilt=False)


__all__ = ["ContentMetadataService"]
