"""Typed content entities produced by :class:`mdsite.parser.ContentParser`."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
import typing as typ

from mdsite.components import EmbeddedComponent  # noqa: TC001 - dataclass field type
from mdsite.markdown_parser import TocItem  # noqa: TC001 - dataclass field type

from ._serialization import record_to_dict


@dc.dataclass(slots=True, kw_only=True)
class ContentEntity:
    """Fields shared by every content shape.

    Attributes
    ----------
    slug : str
        URL identifier, unique within its category after deduplication.
    title : str
        Frontmatter title, or the slug when the title is missing.
    description : str
        Inline HTML rendered from the frontmatter description.
    source : str
        Index-relative path of the file the entity was parsed from.
    html_content : str
        Rendered body with component placeholders in place.
    raw_content : str
        Markdown body without frontmatter.
    embedded_components : list[EmbeddedComponent]
        Component descriptors extracted from the body.
    """

    slug: str
    title: str
    description: str = ""
    source: str = ""
    html_content: str = ""
    raw_content: str = ""
    embedded_components: list[EmbeddedComponent] = dc.field(default_factory=list)

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the camelCase JSON shape of the entity."""
        return record_to_dict(self)


@dc.dataclass(slots=True, kw_only=True)
class BlogPost(ContentEntity):
    """Dated blog post, listed newest first."""

    summary: str = ""
    publish_date: dt.datetime | None = None
    tags: list[str] = dc.field(default_factory=list)
    featured_image: str = ""
    author: str = ""
    reading_time_minutes: int = 1


@dc.dataclass(slots=True, kw_only=True)
class ProjectCard(ContentEntity):
    """Portfolio project ordered by its filename prefix."""

    order: int = 0
    summary: str = ""
    tags: list[str] = dc.field(default_factory=list)
    url: str = ""
    menu_title: str = ""
    show_in_menu: bool = True
    show_in_header: bool = False
    is_first_project: bool = False


@dc.dataclass(slots=True, kw_only=True)
class ArticleCard(ContentEntity):
    """Article from the ``articles`` category or a configured section."""

    order: int = 0
    section: str = "articles"
    publish_date: dt.datetime | None = None
    tags: list[str] = dc.field(default_factory=list)
    menu_title: str = ""
    show_in_menu: bool = True
    table_of_contents: list[TocItem] = dc.field(default_factory=list)
    toc_depth: int = 3


@dc.dataclass(slots=True)
class DocNavLink:
    """Previous/next link between neighbouring doc pages."""

    slug: str
    title: str

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the JSON shape of the link."""
        return {"slug": self.slug, "title": self.title}


@dc.dataclass(slots=True, kw_only=True)
class DocPage(ContentEntity):
    """Documentation page.

    ``previous_page`` and ``next_page`` are only populated when the whole
    docs collection has been loaded in order.
    """

    order: int = 0
    parent_slug: str = ""
    table_of_contents: list[TocItem] = dc.field(default_factory=list)
    previous_page: DocNavLink | None = None
    next_page: DocNavLink | None = None


@dc.dataclass(slots=True, kw_only=True)
class FeatureCard(ContentEntity):
    """Feature highlight with an icon."""

    order: int = 0
    icon: str = ""
    icon_svg: str = ""


__all__ = [
    "ArticleCard",
    "BlogPost",
    "ContentEntity",
    "DocNavLink",
    "DocPage",
    "FeatureCard",
    "ProjectCard",
]
