"""Aggregate JSON artifacts: content, navigation, metadata and search indices.

Each index serialises to the camelCase JSON persisted by the generators and
reads back with ``from_dict``. ``from_dict`` raises ``TypeError`` or
``ValueError`` for structurally invalid payloads; the runtime services treat
either as "index unavailable".

Example
-------
>>> from mdsite.models import ContentIndex
>>> index = ContentIndex.from_dict({"blog": ["2024-01-01-a.md"]})
>>> index.files_for("blog"), index.to_dict()["sections"]
(('2024-01-01-a.md',), {})
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
import typing as typ

from mdsite._constants import ARTICLES, BLOG, DOCS, FEATURES, FIXED_CATEGORIES, PROJECTS

from ._serialization import record_from_dict, record_to_dict

_T = typ.TypeVar("_T")


def _require_mapping(payload: object, label: str) -> cabc.Mapping[str, typ.Any]:
    if not isinstance(payload, cabc.Mapping):
        msg = f"{label} must be a JSON object, got {type(payload).__name__}."
        raise TypeError(msg)
    return payload


def _require_list(payload: cabc.Mapping[str, typ.Any], key: str) -> list[typ.Any]:
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        msg = f"'{key}' must be a JSON array, got {type(value).__name__}."
        raise TypeError(msg)
    return value


def _paths(payload: cabc.Mapping[str, typ.Any], key: str) -> tuple[str, ...]:
    values = _require_list(payload, key)
    for value in values:
        if not isinstance(value, str):
            msg = f"'{key}' entries must be strings, got {type(value).__name__}."
            raise TypeError(msg)
    return tuple(values)


def _records(
    cls: type[_T], payload: cabc.Mapping[str, typ.Any], key: str
) -> list[_T]:
    return [record_from_dict(cls, item) for item in _require_list(payload, key)]


def _sections(
    payload: cabc.Mapping[str, typ.Any],
    build: cabc.Callable[[cabc.Mapping[str, typ.Any], str], _T],
) -> dict[str, _T]:
    raw = payload.get("sections")
    if raw is None:
        return {}
    sections = _require_mapping(raw, "'sections'")
    return {str(name): build(sections, name) for name in sections}


@dc.dataclass(slots=True, frozen=True)
class ContentIndex:
    """Ordered file lists per category, relative to each category folder.

    Attributes
    ----------
    blog, projects, features, articles, docs : tuple[str, ...]
        Entries of the fixed categories, already sorted by the scanner.
    sections : Mapping[str, tuple[str, ...]]
        Entries of configured dynamic sections keyed by folder name.
    """

    blog: tuple[str, ...] = ()
    projects: tuple[str, ...] = ()
    features: tuple[str, ...] = ()
    articles: tuple[str, ...] = ()
    docs: tuple[str, ...] = ()
    sections: cabc.Mapping[str, tuple[str, ...]] = dc.field(default_factory=dict)

    def files_for(self, category: str) -> tuple[str, ...]:
        """Return the entries of a fixed category or dynamic section."""
        if category in FIXED_CATEGORIES:
            return getattr(self, category)
        return tuple(self.sections.get(category, ()))

    def total_files(self) -> int:
        """Return the number of entries across all categories and sections."""
        fixed = sum(len(getattr(self, name)) for name in FIXED_CATEGORIES)
        return fixed + sum(len(files) for files in self.sections.values())

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the ``content/index.json`` shape."""
        payload: dict[str, typ.Any] = {
            name: list(getattr(self, name)) for name in FIXED_CATEGORIES
        }
        payload["sections"] = {name: list(files) for name, files in self.sections.items()}
        return payload

    @classmethod
    def from_dict(cls, payload: object) -> ContentIndex:
        """Parse ``content/index.json``; missing categories are empty."""
        data = _require_mapping(payload, "content index")
        fixed = {name: _paths(data, name) for name in FIXED_CATEGORIES}
        return cls(**fixed, sections=_sections(data, _paths))


@dc.dataclass(slots=True, kw_only=True)
class NavigationMenuItem:
    """Menu entry derived from one content file's frontmatter."""

    slug: str = ""
    title: str = ""
    menu_title: str | None = None
    order: int = 0
    show_in_menu: bool = True
    show_in_header: bool = False

    @property
    def display_title(self) -> str:
        """Return the menu title when set, else the title."""
        return self.menu_title or self.title

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the camelCase JSON shape."""
        return record_to_dict(self)


@dc.dataclass(slots=True)
class NavigationIndex:
    """Menu items for the categories that appear in site navigation."""

    projects: list[NavigationMenuItem] = dc.field(default_factory=list)
    articles: list[NavigationMenuItem] = dc.field(default_factory=list)
    docs: list[NavigationMenuItem] = dc.field(default_factory=list)
    sections: dict[str, list[NavigationMenuItem]] = dc.field(default_factory=dict)

    def items_for(self, category: str) -> list[NavigationMenuItem]:
        """Return the menu items for ``category`` or a dynamic section."""
        if category in (PROJECTS, ARTICLES, DOCS):
            return getattr(self, category)
        return self.sections.get(category, [])

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the ``navigation-index.json`` shape."""
        return record_to_dict(self)

    @classmethod
    def from_dict(cls, payload: object) -> NavigationIndex:
        """Parse ``navigation-index.json``."""
        data = _require_mapping(payload, "navigation index")

        def _items(source: cabc.Mapping[str, typ.Any], key: str) -> list[NavigationMenuItem]:
            return _records(NavigationMenuItem, source, key)

        return cls(
            projects=_items(data, PROJECTS),
            articles=_items(data, ARTICLES),
            docs=_items(data, DOCS),
            sections=_sections(data, _items),
        )


@dc.dataclass(slots=True, kw_only=True)
class BlogPostMetadata:
    """Listing data for a blog post, without rendered content."""

    slug: str = ""
    title: str = ""
    description: str = ""
    summary: str = ""
    publish_date: dt.datetime | None = None
    author: str = ""
    tags: list[str] = dc.field(default_factory=list)
    reading_time_minutes: int = 1
    featured_image: str = ""

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the camelCase JSON shape."""
        return record_to_dict(self)


@dc.dataclass(slots=True, kw_only=True)
class ProjectMetadata:
    """Listing data for a project card."""

    slug: str = ""
    title: str = ""
    description: str = ""
    summary: str = ""
    order: int = 0
    tags: list[str] = dc.field(default_factory=list)
    url: str = ""

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the camelCase JSON shape."""
        return record_to_dict(self)


@dc.dataclass(slots=True, kw_only=True)
class ArticleMetadata:
    """Listing data for an article or dynamic-section entry."""

    slug: str = ""
    title: str = ""
    description: str = ""
    order: int = 0
    tags: list[str] = dc.field(default_factory=list)
    publish_date: dt.datetime | None = None

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the camelCase JSON shape."""
        return record_to_dict(self)


@dc.dataclass(slots=True, kw_only=True)
class DocMetadata:
    """Listing data for a documentation page."""

    slug: str = ""
    title: str = ""
    description: str = ""
    order: int = 0
    parent_slug: str = ""

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the camelCase JSON shape."""
        return record_to_dict(self)


@dc.dataclass(slots=True, kw_only=True)
class FeatureMetadata:
    """Listing data for a feature card."""

    slug: str = ""
    title: str = ""
    description: str = ""
    order: int = 0
    icon: str = ""
    icon_svg: str = ""

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the camelCase JSON shape."""
        return record_to_dict(self)


@dc.dataclass(slots=True)
class ContentMetadataIndex:
    """Lightweight per-category metadata, as written to ``content-metadata.json``."""

    blog: list[BlogPostMetadata] = dc.field(default_factory=list)
    projects: list[ProjectMetadata] = dc.field(default_factory=list)
    articles: list[ArticleMetadata] = dc.field(default_factory=list)
    docs: list[DocMetadata] = dc.field(default_factory=list)
    features: list[FeatureMetadata] = dc.field(default_factory=list)
    sections: dict[str, list[ArticleMetadata]] = dc.field(default_factory=dict)

    def total_records(self) -> int:
        """Return the number of records across all categories and sections."""
        fixed = sum(len(getattr(self, name)) for name in FIXED_CATEGORIES)
        return fixed + sum(len(items) for items in self.sections.values())

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the ``content-metadata.json`` shape."""
        return record_to_dict(self)

    @classmethod
    def from_dict(cls, payload: object) -> ContentMetadataIndex:
        """Parse ``content-metadata.json``."""
        data = _require_mapping(payload, "content metadata index")

        def _articles(source: cabc.Mapping[str, typ.Any], key: str) -> list[ArticleMetadata]:
            return _records(ArticleMetadata, source, key)

        return cls(
            blog=_records(BlogPostMetadata, data, BLOG),
            projects=_records(ProjectMetadata, data, PROJECTS),
            articles=_articles(data, ARTICLES),
            docs=_records(DocMetadata, data, DOCS),
            features=_records(FeatureMetadata, data, FEATURES),
            sections=_sections(data, _articles),
        )


@dc.dataclass(slots=True, kw_only=True)
class SearchIndexEntry:
    """One searchable item in ``search-index.json``."""

    slug: str
    title: str
    description: str = ""
    type: str = ""
    url: str = ""
    tags: list[str] = dc.field(default_factory=list)
    content: str = ""

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the camelCase JSON shape."""
        return record_to_dict(self)


__all__ = [
    "ArticleMetadata",
    "BlogPostMetadata",
    "ContentIndex",
    "ContentMetadataIndex",
    "DocMetadata",
    "FeatureMetadata",
    "NavigationIndex",
    "NavigationMenuItem",
    "ProjectMetadata",
    "SearchIndexEntry",
]
