"""Build-time generators that turn a content tree into JSON, XML and text artifacts.

Every generator reads only frontmatter (bodies are never rendered to HTML),
skips files it cannot parse, and writes its artifact atomically once the
whole category set has been processed.

Examples
--------
>>> from pathlib import Path
>>> from mdsite.generators import NavigationIndexGenerator
>>> from mdsite.scanner import ContentScanner
>>> index = ContentScanner(Path("site/content")).scan()  # doctest: +SKIP
>>> NavigationIndexGenerator(Path("site/content"), Path("site")).generate(index)  # doctest: +SKIP
PosixPath('site/navigation-index.json')
"""

from .content_index import ContentIndexWriter
from .metadata import ContentMetadataGenerator, build_metadata_index, metadata_from_header
from .navigation import NavigationIndexGenerator, build_navigation_index, menu_item_from_header
from .rss import RssFeedGenerator
from .search import SearchIndexGenerator, route_for
from .sitemap import SitemapGenerator

__all__ = [
    "ContentIndexWriter",
    "ContentMetadataGenerator",
    "NavigationIndexGenerator",
    "RssFeedGenerator",
    "SearchIndexGenerator",
    "SitemapGenerator",
    "build_metadata_index",
    "build_navigation_index",
    "menu_item_from_header",
    "metadata_from_header",
    "route_for",
]
