"""Render ``sitemap.xml`` and ``robots.txt`` from the content index."""

from __future__ import annotations

import dataclasses as dc
import logging
import threading  # noqa: TC003 - used for runtime type metadata
import typing as typ
from pathlib import Path

from mdsite._constants import (
    ARTICLES,
    BLOG,
    DOCS,
    PROJECTS,
    ROBOTS_PATH,
    SITEMAP_PATH,
)

from ._files import load_all_headers, template_environment, write_text_atomic
from .search import route_for

if typ.TYPE_CHECKING:
    from mdsite.models import ContentIndex
    from mdsite.parser import ContentHeader

logger = logging.getLogger(__name__)

SITEMAP_CATEGORIES = (BLOG, PROJECTS, ARTICLES, DOCS)


@dc.dataclass(slots=True)
class SitemapEntry:
    """One ``<url>`` element."""

    loc: str
    lastmod: str = ""
    changefreq: str = "monthly"
    priority: str = "0.5"


class SitemapGenerator:
    """Write ``sitemap.xml`` and ``robots.txt`` for the site root."""

    def __init__(
        self,
        content_path: Path,
        output_path: Path,
        site_url: str,
        *,
        routes: typ.Mapping[str, str] | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        self.content_path = Path(content_path)
        self.output_path = Path(output_path)
        self.site_url = site_url.rstrip("/")
        self.routes = dict(routes or {})
        self.env = template_environment(templates_dir)
        self.sitemap_template = self.env.get_template("sitemap.xml.jinja")
        self.robots_template = self.env.get_template("robots.txt.jinja")

    def build(
        self, content_index: ContentIndex, cancel: threading.Event | None = None
    ) -> list[SitemapEntry]:
        """Return the home page, category listings and every content page."""
        headers = load_all_headers(self.content_path, content_index, SITEMAP_CATEGORIES, cancel)
        entries = [SitemapEntry(loc=f"{self.site_url}/", changefreq="weekly", priority="1.0")]
        for category, items in headers.items():
            if not items:
                continue
            route = route_for(category, self.routes)
            entries.append(
                SitemapEntry(loc=f"{self.site_url}/{route}", changefreq="weekly", priority="0.8")
            )
            entries.extend(self._entry(route, header) for header in items)
        return entries

    def generate(
        self, content_index: ContentIndex, cancel: threading.Event | None = None
    ) -> list[Path]:
        """Write both files and return their paths."""
        entries = self.build(content_index, cancel)
        sitemap = write_text_atomic(
            self.output_path / SITEMAP_PATH, self.sitemap_template.render(entries=entries)
        )
        robots = write_text_atomic(
            self.output_path / ROBOTS_PATH,
            self.robots_template.render(sitemap_url=f"{self.site_url}/{SITEMAP_PATH}"),
        )
        logger.info("Sitemap: %d URLs", len(entries))
        return [sitemap, robots]

    def _entry(self, route: str, header: ContentHeader) -> SitemapEntry:
        published = header.publish_date
        return SitemapEntry(
            loc=f"{self.site_url}/{route}/{header.slug}",
            lastmod=published.date().isoformat() if published else "",
            priority="0.7" if header.category == BLOG else "0.6",
        )


__all__ = ["SITEMAP_CATEGORIES", "SitemapEntry", "SitemapGenerator"]
