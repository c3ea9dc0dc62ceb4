"""Turn one raw content file into a typed content entity.

:class:`ContentParser` combines frontmatter extraction, component directive
extraction, markdown rendering and table-of-contents building. The same
parser serves the generators (build time) and the runtime services (on
demand), so both produce identical slugs, ids and HTML.

A file whose frontmatter block is present but malformed raises
:class:`ContentParseError`; callers that process whole categories use
:meth:`ContentParser.parse_outcome` and drop such files.

Example
-------
>>> from mdsite.parser import ContentParser
>>> post = ContentParser().parse("blog", "2024-01-15-hello.md", "---\\ntitle: Hi\\n---\\nBody")
>>> post.slug, post.title
('hello', 'Hi')
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
import logging
import posixpath
import typing as typ

from ._constants import (
    ARTICLES,
    BLOG,
    CONTENT_DIR,
    DEFAULT_TOC_DEPTH,
    DOCS,
    FEATURES,
    PROJECTS,
)
from .components import EmbeddedComponent, EmbeddedComponentParser
from .frontmatter import FrontmatterData, extract_frontmatter
from .markdown_parser import extract_toc
from .models import ArticleCard, BlogPost, ContentEntity, DocPage, FeatureCard, ProjectCard
from .outcomes import Outcome
from .rendering import MarkdownRenderer
from .slugs import get_order_and_slug_from_filename, get_slug_from_filename

logger = logging.getLogger(__name__)


class ContentParseError(ValueError):
    """Raised when a content file cannot be turned into an entity."""


@dc.dataclass(slots=True)
class ContentHeader:
    """Frontmatter-only view of a content file, used by the index builders.

    Attributes
    ----------
    category : str
        Fixed category or dynamic section the file belongs to.
    source : str
        Path relative to the category folder, as listed in the content index.
    slug, order : str, int
        Identity derived from the filename (blog posts always have order 0).
    frontmatter : FrontmatterData
        Parsed metadata.
    body : str
        Markdown body without the frontmatter block.
    """

    category: str
    source: str
    slug: str
    order: int
    frontmatter: FrontmatterData
    body: str

    @property
    def title(self) -> str:
        """Return the frontmatter title, falling back to the slug."""
        return self.frontmatter.title or self.slug

    @property
    def publish_date(self) -> dt.datetime | None:
        """Return the frontmatter publish date."""
        return self.frontmatter.publish_date


def category_base_path(category: str, filename: str) -> str:
    """Return the asset base path for ``filename`` inside ``category``.

    >>> category_base_path("projects", "01-biography/index.md")
    'content/projects/01-biography'
    >>> category_base_path("blog", "2024-01-01-a.md")
    'content/blog'
    """
    folder = posixpath.dirname(filename.replace("\\", "/").strip("/"))
    if folder:
        return f"{CONTENT_DIR}/{category}/{folder}"
    return f"{CONTENT_DIR}/{category}"


def identity_for(category: str, filename: str) -> tuple[int, str]:
    """Return ``(order, slug)`` for a listed file; blog posts have no order.

    >>> identity_for("blog", "2024-01-15-hello.md")
    (0, 'hello')
    >>> identity_for("docs", "02-setup/index.md")
    (2, 'setup')
    """
    if category == BLOG:
        return 0, get_slug_from_filename(filename)
    return get_order_and_slug_from_filename(filename)


def read_header(category: str, filename: str, raw: str) -> ContentHeader:
    """Parse only the frontmatter and filename identity of a content file.

    Raises
    ------
    ContentParseError
        If the frontmatter block is malformed.
    """
    result = extract_frontmatter(raw)
    if result.is_malformed:
        msg = f"malformed frontmatter in {category}/{filename}: {result.error}"
        raise ContentParseError(msg)
    order, slug = identity_for(category, filename)
    if not slug:
        msg = f"cannot derive a slug from {category}/{filename}"
        raise ContentParseError(msg)
    return ContentHeader(
        category=category,
        source=filename,
        slug=slug,
        order=order,
        frontmatter=result.data,
        body=result.body,
    )


@dc.dataclass(slots=True)
class _PreparedBody:
    header: ContentHeader
    html: str
    components: list[EmbeddedComponent]


class ContentParser:
    """Parse raw files into :mod:`mdsite.models` entities."""

    def __init__(
        self,
        renderer: MarkdownRenderer | None = None,
        component_parser: EmbeddedComponentParser | None = None,
    ) -> None:
        self.renderer = renderer or MarkdownRenderer()
        self.component_parser = component_parser or EmbeddedComponentParser()

    def parse(self, category: str, filename: str, raw: str) -> ContentEntity:
        """Parse ``raw`` into the entity shape of ``category``.

        Categories other than the fixed ones are dynamic sections and produce
        :class:`ArticleCard` entities tagged with the section name.

        Raises
        ------
        ContentParseError
            If the frontmatter is malformed or no slug can be derived.
        """
        match category:
            case "blog":
                return self.parse_blog_post(filename, raw)
            case "projects":
                return self.parse_project(filename, raw)
            case "docs":
                return self.parse_doc(filename, raw)
            case "features":
                return self.parse_feature(filename, raw)
            case _:
                return self.parse_article(filename, raw, section=category)

    def parse_outcome(self, category: str, filename: str, raw: str) -> Outcome[ContentEntity]:
        """Return :meth:`parse` wrapped in an :class:`Outcome`."""
        try:
            entity = self.parse(category, filename, raw)
        except ContentParseError as exc:
            return Outcome.failed(f"{category}/{filename}", exc)
        return Outcome.ok(entity, source=f"{category}/{filename}")

    def parse_blog_post(self, filename: str, raw: str) -> BlogPost:
        """Parse a dated blog post."""
        prepared = self._prepare(BLOG, filename, raw)
        header = prepared.header
        data = header.frontmatter
        return BlogPost(
            slug=header.slug,
            title=header.title,
            description=self.renderer.to_html_inline(data.description or ""),
            summary=self.renderer.to_html_inline(data.summary or ""),
            publish_date=data.publish_date,
            tags=list(data.tags),
            featured_image=data.featured_image or "",
            author=data.author or "",
            reading_time_minutes=self.renderer.calculate_reading_time(header.body),
            **self._common(prepared),
        )

    def parse_project(self, filename: str, raw: str) -> ProjectCard:
        """Parse a project card."""
        prepared = self._prepare(PROJECTS, filename, raw)
        header = prepared.header
        data = header.frontmatter
        return ProjectCard(
            slug=header.slug,
            title=header.title,
            description=self.renderer.to_html_inline(data.description or ""),
            summary=self.renderer.to_html_inline(data.summary or ""),
            order=header.order,
            tags=list(data.tags),
            url=data.url or "",
            menu_title=data.menu_title or "",
            show_in_menu=data.show_in_menu,
            show_in_header=data.show_in_header,
            is_first_project=data.is_first_project,
            **self._common(prepared),
        )

    def parse_article(self, filename: str, raw: str, section: str = ARTICLES) -> ArticleCard:
        """Parse an article from ``articles`` or a dynamic section.

        The table of contents is built from the markdown body with the
        frontmatter ``tocDepth`` (default 3) as the deepest level.
        """
        prepared = self._prepare(section, filename, raw)
        header = prepared.header
        data = header.frontmatter
        toc_depth = data.toc_depth or DEFAULT_TOC_DEPTH
        return ArticleCard(
            slug=header.slug,
            title=header.title,
            description=self.renderer.to_html_inline(data.description or ""),
            order=header.order,
            section=section,
            publish_date=data.publish_date,
            tags=list(data.tags),
            menu_title=data.menu_title or "",
            show_in_menu=data.show_in_menu,
            table_of_contents=extract_toc(header.body, toc_depth),
            toc_depth=toc_depth,
            **self._common(prepared),
        )

    def parse_doc(self, filename: str, raw: str) -> DocPage:
        """Parse a documentation page; navigation links are left unset."""
        prepared = self._prepare(DOCS, filename, raw)
        header = prepared.header
        data = header.frontmatter
        return DocPage(
            slug=header.slug,
            title=header.title,
            description=self.renderer.to_html_inline(data.description or ""),
            order=header.order,
            parent_slug=data.parent or "",
            table_of_contents=self.renderer.extract_table_of_contents(header.body),
            **self._common(prepared),
        )

    def parse_feature(self, filename: str, raw: str) -> FeatureCard:
        """Parse a feature card."""
        prepared = self._prepare(FEATURES, filename, raw)
        header = prepared.header
        data = header.frontmatter
        return FeatureCard(
            slug=header.slug,
            title=header.title,
            description=self.renderer.to_html_inline(data.description or ""),
            order=header.order,
            icon=data.icon or "",
            icon_svg=data.icon_svg or "",
            **self._common(prepared),
        )

    def _prepare(self, category: str, filename: str, raw: str) -> _PreparedBody:
        header = read_header(category, filename, raw)
        processed, components = self.component_parser.transform(header.body)
        base_path = category_base_path(category, filename)
        for component in components:
            component.base_path = base_path
        html = self.renderer.to_html(processed)
        logger.debug(
            "Parsed %s/%s as '%s' (%d components)",
            category,
            filename,
            header.slug,
            len(components),
        )
        return _PreparedBody(header=header, html=html, components=components)

    @staticmethod
    def _common(prepared: _PreparedBody) -> dict[str, typ.Any]:
        return {
            "source": prepared.header.source,
            "html_content": prepared.html,
            "raw_content": prepared.header.body,
            "embedded_components": prepared.components,
        }


__all__ = [
    "ContentHeader",
    "ContentParseError",
    "ContentParser",
    "category_base_path",
    "identity_for",
    "read_header",
]
