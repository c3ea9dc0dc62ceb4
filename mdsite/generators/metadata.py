"""Build ``content-metadata.json``: listing data without rendered bodies."""

from __future__ import annotations

import logging
import threading  # noqa: TC003 - used for runtime type metadata
import typing as typ
from pathlib import Path

from mdsite._constants import (
    ARTICLES,
    BLOG,
    CONTENT_METADATA_PATH,
    DOCS,
    FEATURES,
    FIXED_CATEGORIES,
    PROJECTS,
)
from mdsite.models import (
    ArticleMetadata,
    BlogPostMetadata,
    ContentMetadataIndex,
    DocMetadata,
    FeatureMetadata,
    ProjectMetadata,
)
from mdsite.rendering import MarkdownRenderer

from ._files import load_all_headers, write_json_atomic

if typ.TYPE_CHECKING:
    from mdsite.models import ContentIndex
    from mdsite.parser import ContentHeader

logger = logging.getLogger(__name__)

MetadataRecord: typ.TypeAlias = (
    BlogPostMetadata | ProjectMetadata | ArticleMetadata | DocMetadata | FeatureMetadata
)


def metadata_from_header(header: ContentHeader) -> MetadataRecord:
    """Return the metadata record matching the header's category.

    Descriptions stay as written in the frontmatter; they are not rendered.
    """
    data = header.frontmatter
    common = {
        "slug": header.slug,
        "title": header.title,
        "description": data.description or "",
    }
    match header.category:
        case "blog":
            return BlogPostMetadata(
                **common,
                summary=data.summary or "",
                publish_date=data.publish_date,
                author=data.author or "",
                tags=list(data.tags),
                reading_time_minutes=MarkdownRenderer.calculate_reading_time(header.body),
                featured_image=data.featured_image or "",
            )
        case "projects":
            return ProjectMetadata(
                **common,
                summary=data.summary or "",
                order=header.order,
                tags=list(data.tags),
                url=data.url or "",
            )
        case "docs":
            return DocMetadata(**common, order=header.order, parent_slug=data.parent or "")
        case "features":
            return FeatureMetadata(
                **common,
                order=header.order,
                icon=data.icon or "",
                icon_svg=data.icon_svg or "",
            )
        case _:
            return ArticleMetadata(
                **common,
                order=header.order,
                tags=list(data.tags),
                publish_date=data.publish_date,
            )


def build_metadata_index(
    headers: typ.Mapping[str, typ.Sequence[ContentHeader]],
) -> ContentMetadataIndex:
    """Fold already sorted headers per category into a metadata index."""
    index = ContentMetadataIndex()
    for category, items in headers.items():
        records = [metadata_from_header(header) for header in items]
        if category in FIXED_CATEGORIES:
            setattr(index, category, records)
        elif records:
            index.sections[category] = typ.cast("list[ArticleMetadata]", records)
    return index


class ContentMetadataGenerator:
    """Write the metadata index for a content tree."""

    CATEGORIES = (BLOG, PROJECTS, ARTICLES, DOCS, FEATURES)

    def __init__(self, content_path: Path, output_path: Path) -> None:
        self.content_path = Path(content_path)
        self.output_path = Path(output_path)

    def build(
        self, content_index: ContentIndex, cancel: threading.Event | None = None
    ) -> ContentMetadataIndex:
        """Parse the frontmatter of every listed file and return the index."""
        headers = load_all_headers(self.content_path, content_index, self.CATEGORIES, cancel)
        return build_metadata_index(headers)

    def generate(
        self, content_index: ContentIndex, cancel: threading.Event | None = None
    ) -> Path:
        """Build the index and write ``content-metadata.json``."""
        index = self.build(content_index, cancel)
        path = write_json_atomic(self.output_path / CONTENT_METADATA_PATH, index.to_dict())
        logger.info("Content metadata index: %d items", index.total_records())
        return path


__all__ = [
    "ContentMetadataGenerator",
    "MetadataRecord",
    "build_metadata_index",
    "metadata_from_header",
]
