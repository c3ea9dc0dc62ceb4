"""Warm the runtime indices concurrently at application start."""

from __future__ import annotations

import asyncio
import logging
import typing as typ

if typ.TYPE_CHECKING:
    from .content_service import ContentService
    from .metadata_service import ContentMetadataService
    from .navigation_service import NavigationService

logger = logging.getLogger(__name__)


class ContentPreloader:
    """Load the content, navigation and metadata indices in parallel, once.

    Example
    -------
    >>> import asyncio
    >>> from pathlib import Path
    >>> from mdsite.runtime import (
    ...     ContentMetadataService, ContentPreloader, ContentService,
    ...     FileSystemTransport, NavigationService,
    ... )
    >>> transport = FileSystemTransport(Path("site"))
    >>> content = ContentService(transport)
    >>> preloader = ContentPreloader(
    ...     NavigationService(transport, content),
    ...     ContentMetadataService(transport, content),
    ...     content,
    ... )
    >>> asyncio.run(preloader.preload())  # doctest: +SKIP
    """

    def __init__(
        self,
        navigation_service: NavigationService,
        metadata_service: ContentMetadataService,
        content_service: ContentService,
    ) -> None:
        self.navigation_service = navigation_service
        self.metadata_service = metadata_service
        self.content_service = content_service
        self._task: asyncio.Task[None] | None = None

    @property
    def is_preloaded(self) -> bool:
        """Return ``True`` once :meth:`preload` has finished."""
        return self._task is not None and self._task.done()

    async def preload(self) -> None:
        """Start the loads on first call; every caller awaits the same run.

        Failures are logged and never raised.
        """
        if self._task is None:
            self._task = asyncio.ensure_future(self._run())
        await asyncio.shield(self._task)

    async def _run(self) -> None:
        names = ("navigation index", "metadata index", "content index")
        results = await asyncio.gather(
            self.navigation_service.get_navigation_index(),
            self.metadata_service.get_metadata_index(),
            self.content_service.get_content_index(),
            return_exceptions=True,
        )
        for name, result in zip(names, results, strict=True):
            if isinstance(result, BaseException):
                logger.error("Preloading %s failed: %s", name, result)
        logger.debug("Content preload finished")


__all__ = ["ContentPreloader"]
