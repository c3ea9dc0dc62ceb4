"""Asynchronous retrieval services backed by pre-built indices and content files.

Every service caches what it loads per category and shares one load between
concurrent first callers. Content problems never raise out of the services:
missing files and malformed payloads degrade to empty or partial results.

Examples
--------
>>> import asyncio
>>> from pathlib import Path
>>> from mdsite.runtime import ContentService, FileSystemTransport
>>> service = ContentService(FileSystemTransport(Path("site")))
>>> asyncio.run(service.get_doc("setup"))  # doctest: +SKIP
DocPage(slug='setup', ...)
"""

from .cache import CategoryCache
from .content_service import ContentService, content_path_for, link_doc_pages
from .metadata_service import ContentMetadataService
from .navigation_service import NavigationService
from .preloader import ContentPreloader
from .transport import (
    ContentFetchError,
    ContentNotFoundError,
    ContentTransport,
    FileSystemTransport,
    HttpTransport,
)

__all__ = [
    "CategoryCache",
    "ContentFetchError",
    "ContentMetadataService",
    "ContentNotFoundError",
    "ContentPreloader",
    "ContentService",
    "ContentTransport",
    "FileSystemTransport",
    "HttpTransport",
    "NavigationService",
    "content_path_for",
    "link_doc_pages",
]
