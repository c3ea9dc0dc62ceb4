"""Content entities and the JSON index shapes exchanged between build and runtime.

Entities (:class:`BlogPost`, :class:`ProjectCard`, :class:`ArticleCard`,
:class:`DocPage`, :class:`FeatureCard`) carry rendered content; the index
records (:class:`ContentIndex`, :class:`NavigationIndex`,
:class:`ContentMetadataIndex`, :class:`SearchIndexEntry`) are the lightweight
artifacts written by the generators. All of them serialise to camelCase JSON.

Examples
--------
>>> from mdsite.models import NavigationMenuItem
>>> NavigationMenuItem(slug="guide", title="Guide", menu_title="Start").display_title
'Start'
"""

from .entities import (
    ArticleCard,
    BlogPost,
    ContentEntity,
    DocNavLink,
    DocPage,
    FeatureCard,
    ProjectCard,
)
from .indices import (
    ArticleMetadata,
    BlogPostMetadata,
    ContentIndex,
    ContentMetadataIndex,
    DocMetadata,
    FeatureMetadata,
    NavigationIndex,
    NavigationMenuItem,
    ProjectMetadata,
    SearchIndexEntry,
)

__all__ = [
    "ArticleCard",
    "ArticleMetadata",
    "BlogPost",
    "BlogPostMetadata",
    "ContentEntity",
    "ContentIndex",
    "ContentMetadataIndex",
    "DocMetadata",
    "DocNavLink",
    "DocPage",
    "FeatureCard",
    "FeatureMetadata",
    "NavigationIndex",
    "NavigationMenuItem",
    "ProjectCard",
    "ProjectMetadata",
    "SearchIndexEntry",
]
