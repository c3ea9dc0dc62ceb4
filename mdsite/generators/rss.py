"""Render the blog RSS 2.0 feed."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import logging
import threading  # noqa: TC003 - used for runtime type metadata
import typing as typ
from email.utils import format_datetime
from pathlib import Path

from mdsite._constants import BLOG, FEED_ITEM_LIMIT, FEED_PATH

from ._files import load_category_headers, template_environment, write_text_atomic
from .search import route_for

if typ.TYPE_CHECKING:
    from mdsite.models import ContentIndex
    from mdsite.parser import ContentHeader

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class FeedItem:
    """One ``<item>`` element."""

    title: str
    link: str
    description: str = ""
    pub_date: str = ""
    author: str = ""
    tags: list[str] = dc.field(default_factory=list)


class RssFeedGenerator:
    """Write ``feed.xml`` listing the newest blog posts first."""

    def __init__(
        self,
        content_path: Path,
        output_path: Path,
        site_url: str,
        site_name: str,
        *,
        description: str = "",
        limit: int = FEED_ITEM_LIMIT,
        templates_dir: Path | None = None,
    ) -> None:
        self.content_path = Path(content_path)
        self.output_path = Path(output_path)
        self.site_url = site_url.rstrip("/")
        self.site_name = site_name
        self.description = description or f"Latest posts from {site_name}"
        self.limit = limit
        self.template = template_environment(templates_dir).get_template("feed.xml.jinja")

    def build(
        self, content_index: ContentIndex, cancel: threading.Event | None = None
    ) -> list[FeedItem]:
        """Return feed items for the newest ``limit`` blog posts."""
        headers = load_category_headers(
            self.content_path, BLOG, content_index.files_for(BLOG), cancel
        )
        return [self._item(header) for header in headers[: self.limit]]

    def generate(
        self,
        content_index: ContentIndex,
        cancel: threading.Event | None = None,
        *,
        now: dt.datetime | None = None,
    ) -> Path:
        """Write ``feed.xml`` and return its path."""
        items = self.build(content_index, cancel)
        build_date = (now or dt.datetime.now(dt.UTC)).astimezone(dt.UTC)
        xml = self.template.render(
            site_name=self.site_name,
            site_url=self.site_url,
            description=self.description,
            feed_url=f"{self.site_url}/{FEED_PATH}",
            build_date=format_datetime(build_date, usegmt=True),
            items=items,
        )
        path = write_text_atomic(self.output_path / FEED_PATH, xml)
        logger.info("RSS feed: %d items", len(items))
        return path

    def _item(self, header: ContentHeader) -> FeedItem:
        data = header.frontmatter
        published = header.publish_date
        return FeedItem(
            title=header.title,
            link=f"{self.site_url}/{route_for(BLOG)}/{header.slug}",
            description=data.description or data.summary or "",
            pub_date=format_datetime(published, usegmt=True) if published else "",
            author=data.author or "",
            tags=list(data.tags),
        )


__all__ = ["FeedItem", "RssFeedGenerator"]
