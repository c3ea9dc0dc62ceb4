"""Persist the scanned content index as ``content/index.json``."""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from mdsite._constants import CONTENT_INDEX_FILENAME

from ._files import write_json_atomic

if typ.TYPE_CHECKING:
    from mdsite.models import ContentIndex

logger = logging.getLogger(__name__)


class ContentIndexWriter:
    """Write a :class:`~mdsite.models.ContentIndex` next to the content it lists."""

    def __init__(self, content_path: Path) -> None:
        self.content_path = Path(content_path)

    @property
    def output_path(self) -> Path:
        """Return the ``index.json`` path inside the content directory."""
        return self.content_path / CONTENT_INDEX_FILENAME

    def write(self, index: ContentIndex) -> Path:
        """Write ``index`` in full and return the written path."""
        path = write_json_atomic(self.output_path, index.to_dict())
        logger.info(
            "Content index: %d blog posts, %d projects, %d articles, %d docs, "
            "%d features, %d sections",
            len(index.blog),
            len(index.projects),
            len(index.articles),
            len(index.docs),
            len(index.features),
            len(index.sections),
        )
        return path


__all__ = ["ContentIndexWriter"]
