"""Serve parsed content entities with per-category tiered caching.

:class:`ContentService` answers two kinds of request:

- ``get_all(category)`` loads every file listed for the category in the
  content index, parses them concurrently, drops failures, deduplicates by
  slug and sorts. The result is cached per category; concurrent first
  calls share one load.
- ``get_by_slug(category, slug)`` answers from the cached collection when it
  exists. Otherwise it finds the one matching filename in the content index
  and fetches only that file, leaving the rest of the category untouched.
  Doc pages loaded this way carry no previous/next links.

The content index itself is cached separately. When ``content/index.json``
is missing or malformed the transport may rebuild it (a local scan);
otherwise the index is empty and every category reads as "no content".

Example
-------
>>> import asyncio
>>> from pathlib import Path
>>> from mdsite.runtime import ContentService, FileSystemTransport
>>> service = ContentService(FileSystemTransport(Path("site")))
>>> posts = asyncio.run(service.get_blog_posts())  # doctest: +SKIP
>>> [post.slug for post in posts]  # doctest: +SKIP
['newest', 'older']
"""

from __future__ import annotations

import asyncio
import dataclasses as dc
import functools
import logging
import typing as typ

from mdsite._constants import (
    ARTICLES,
    BLOG,
    CONTENT_DIR,
    CONTENT_INDEX_PATH,
    DOCS,
    FEATURES,
    PROJECTS,
)
from mdsite.models import (
    ArticleCard,
    BlogPost,
    ContentEntity,
    ContentIndex,
    DocNavLink,
    DocPage,
    FeatureCard,
    ProjectCard,
)
from mdsite.ordering import dedupe_and_sort
from mdsite.outcomes import Outcome, collect_successes
from mdsite.parser import ContentHeader, ContentParseError, ContentParser, identity_for, read_header

from ._prebuilt import fetch_prebuilt
from .cache import CategoryCache
from .transport import ContentFetchError

if typ.TYPE_CHECKING:
    from .transport import ContentTransport

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True, frozen=True)
class _IndexSnapshot:
    index: ContentIndex
    prebuilt: bool


def link_doc_pages(pages: typ.Sequence[DocPage]) -> None:
    """Set previous/next links between neighbouring pages, in sequence order."""
    for position, page in enumerate(pages):
        previous = pages[position - 1] if position > 0 else None
        following = pages[position + 1] if position + 1 < len(pages) else None
        page.previous_page = DocNavLink(previous.slug, previous.title) if previous else None
        page.next_page = DocNavLink(following.slug, following.title) if following else None


def content_path_for(category: str, filename: str) -> str:
    """Return the site-relative path of a listed content file.

    >>> content_path_for("docs", "02-setup/index.md")
    'content/docs/02-setup/index.md'
    """
    return f"{CONTENT_DIR}/{category}/{filename}"


class ContentService:
    """Parsed content for every category and section, fetched through a transport."""

    def __init__(self, transport: ContentTransport, parser: ContentParser | None = None) -> None:
        self.transport = transport
        self.parser = parser or ContentParser()
        self._index_cache: CategoryCache[_IndexSnapshot] = CategoryCache("content index")
        self._caches: dict[str, CategoryCache[tuple[ContentEntity, ...]]] = {}

    async def get_content_index(self) -> ContentIndex:
        """Return the content index, loading it once."""
        snapshot = await self._index_cache.get_or_load(self._load_index)
        return snapshot.index

    async def is_index_available(self) -> bool:
        """Return ``True`` when a pre-built ``content/index.json`` was loaded.

        The answer is cached with the index, so a missing index is only
        requested once until :meth:`invalidate`.
        """
        snapshot = await self._index_cache.get_or_load(self._load_index)
        return snapshot.prebuilt

    async def get_all(self, category: str) -> list[ContentEntity]:
        """Return every entity of ``category`` in listing order."""
        cache = self._cache_for(category)
        items = await cache.get_or_load(functools.partial(self._load_category, category))
        return list(items)

    async def get_by_slug(self, category: str, slug: str) -> ContentEntity | None:
        """Return the entity of ``category`` whose slug matches, ignoring case.

        Returns ``None`` when no listed file matches or the file cannot be
        fetched or parsed.
        """
        wanted = slug.lower()
        cached = self._cache_for(category).value
        if cached is not None:
            return next((item for item in cached if item.slug.lower() == wanted), None)

        index = await self.get_content_index()
        for filename in index.files_for(category):
            _, file_slug = identity_for(category, filename)
            if file_slug.lower() != wanted:
                continue
            outcome = await self._fetch_entity(category, filename)
            if outcome.succeeded:
                return outcome.value
            logger.warning("Skipping %s file %s: %s", category, outcome.source, outcome.error)
            return None
        logger.debug("No %s file for slug '%s'", category, slug)
        return None

    async def get_section(self, name: str) -> list[ArticleCard]:
        """Return the articles of the dynamic section ``name``."""
        return typ.cast("list[ArticleCard]", await self.get_all(name))

    async def get_section_item(self, name: str, slug: str) -> ArticleCard | None:
        """Return one article of the dynamic section ``name``."""
        return typ.cast("ArticleCard | None", await self.get_by_slug(name, slug))

    async def get_blog_posts(self) -> list[BlogPost]:
        """Return blog posts, newest first."""
        return typ.cast("list[BlogPost]", await self.get_all(BLOG))

    async def get_blog_post(self, slug: str) -> BlogPost | None:
        """Return one blog post."""
        return typ.cast("BlogPost | None", await self.get_by_slug(BLOG, slug))

    async def get_projects(self) -> list[ProjectCard]:
        """Return projects by order."""
        return typ.cast("list[ProjectCard]", await self.get_all(PROJECTS))

    async def get_project(self, slug: str) -> ProjectCard | None:
        """Return one project."""
        return typ.cast("ProjectCard | None", await self.get_by_slug(PROJECTS, slug))

    async def get_articles(self) -> list[ArticleCard]:
        """Return articles by order."""
        return typ.cast("list[ArticleCard]", await self.get_all(ARTICLES))

    async def get_article(self, slug: str) -> ArticleCard | None:
        """Return one article."""
        return typ.cast("ArticleCard | None", await self.get_by_slug(ARTICLES, slug))

    async def get_docs(self) -> list[DocPage]:
        """Return doc pages by order, linked to their neighbours."""
        return typ.cast("list[DocPage]", await self.get_all(DOCS))

    async def get_doc(self, slug: str) -> DocPage | None:
        """Return one doc page; links are only set when all docs are cached."""
        return typ.cast("DocPage | None", await self.get_by_slug(DOCS, slug))

    async def get_features(self) -> list[FeatureCard]:
        """Return feature cards by order."""
        return typ.cast("list[FeatureCard]", await self.get_all(FEATURES))

    async def get_feature(self, slug: str) -> FeatureCard | None:
        """Return one feature card."""
        return typ.cast("FeatureCard | None", await self.get_by_slug(FEATURES, slug))

    async def load_headers(self, category: str) -> list[ContentHeader]:
        """Return the frontmatter of every file in ``category``, deduplicated and sorted.

        Bodies are not rendered. Results are not cached; the navigation and
        metadata services cache what they build from them.
        """
        index = await self.get_content_index()
        outcomes = await asyncio.gather(
            *(self._fetch_header(category, filename) for filename in index.files_for(category))
        )
        return dedupe_and_sort(category, collect_successes(outcomes, context=category))

    async def load_header_map(
        self, categories: typ.Iterable[str]
    ) -> dict[str, list[ContentHeader]]:
        """Return :meth:`load_headers` for ``categories`` plus every section."""
        index = await self.get_content_index()
        names = list(categories)
        names += [name for name in index.sections if name not in names]
        results = await asyncio.gather(*(self.load_headers(name) for name in names))
        return dict(zip(names, results, strict=True))

    def invalidate(self) -> None:
        """Drop the cached index and every cached category."""
        self._index_cache.invalidate()
        for cache in self._caches.values():
            cache.invalidate()
        logger.debug("Content caches invalidated")

    def _cache_for(self, category: str) -> CategoryCache[tuple[ContentEntity, ...]]:
        cache = self._caches.get(category)
        if cache is None:
            cache = self._caches[category] = CategoryCache(category)
        return cache

    async def _load_index(self) -> _IndexSnapshot:
        index = await fetch_prebuilt(
            self.transport, CONTENT_INDEX_PATH, ContentIndex.from_dict, label="content index"
        )
        if index is not None:
            return _IndexSnapshot(index, prebuilt=True)
        discovered = await self.transport.discover_index()
        if discovered is None:
            logger.info("No content index available; serving empty categories")
            discovered = ContentIndex()
        return _IndexSnapshot(discovered, prebuilt=False)

    async def _load_category(self, category: str) -> tuple[ContentEntity, ...]:
        index = await self.get_content_index()
        files = index.files_for(category)
        outcomes = await asyncio.gather(
            *(self._fetch_entity(category, filename) for filename in files)
        )
        items = dedupe_and_sort(category, collect_successes(outcomes, context=category))
        if category == DOCS:
            link_doc_pages(typ.cast("list[DocPage]", items))
        logger.info("Loaded %d of %d %s files", len(items), len(files), category)
        return tuple(items)

    async def _fetch_entity(self, category: str, filename: str) -> Outcome[ContentEntity]:
        try:
            raw = await self.transport.fetch_text(content_path_for(category, filename))
        except ContentFetchError as exc:
            return Outcome.failed(f"{category}/{filename}", exc)
        return self.parser.parse_outcome(category, filename, raw)

    async def _fetch_header(self, category: str, filename: str) -> Outcome[ContentHeader]:
        source = f"{category}/{filename}"
        try:
            raw = await self.transport.fetch_text(content_path_for(category, filename))
            header = read_header(category, filename, raw)
        except (ContentFetchError, ContentParseError) as exc:
            return Outcome.failed(source, exc)
        return Outcome.ok(header, source=source)


__all__ = ["ContentService", "content_path_for", "link_doc_pages"]
