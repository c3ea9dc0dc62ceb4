"""Deduplicate and order content items the same way at build time and runtime."""

from __future__ import annotations

import datetime as dt
import logging
import typing as typ

from ._constants import BLOG

logger = logging.getLogger(__name__)

_T = typ.TypeVar("_T")

_OLDEST = dt.datetime.min.replace(tzinfo=dt.UTC)


def dedupe_by_slug(items: typ.Iterable[_T], *, context: str = "content") -> list[_T]:
    """Keep the first item for each slug (case-insensitive), preserving order.

    Items are anything with a ``slug`` attribute. Dropped duplicates are
    logged because they usually mean two source files share a name.
    """
    seen: set[str] = set()
    unique: list[_T] = []
    for item in items:
        key = str(getattr(item, "slug", "")).lower()
        if key in seen:
            logger.warning("Duplicate %s slug '%s' ignored", context, key)
            continue
        seen.add(key)
        unique.append(item)
    return unique


def _publish_key(item: object) -> dt.datetime:
    published = getattr(item, "publish_date", None)
    return published if isinstance(published, dt.datetime) else _OLDEST


def sort_for_category(category: str, items: typ.Iterable[_T]) -> list[_T]:
    """Return ``items`` in listing order for ``category``.

    Blog posts sort newest first, undated posts last. Every other category
    sorts by ascending ``order``. Both sorts are stable.
    """
    if category == BLOG:
        return sorted(items, key=_publish_key, reverse=True)
    return sorted(items, key=lambda item: int(getattr(item, "order", 0) or 0))


def dedupe_and_sort(
    category: str, items: typ.Iterable[_T], *, context: str | None = None
) -> list[_T]:
    """Apply :func:`dedupe_by_slug` then :func:`sort_for_category`."""
    return sort_for_category(category, dedupe_by_slug(items, context=context or category))


__all__ = ["dedupe_and_sort", "dedupe_by_slug", "sort_for_category"]
