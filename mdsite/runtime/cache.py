"""Async once-cells guarding lazily loaded runtime state."""

from __future__ import annotations

import asyncio
import logging
import typing as typ

logger = logging.getLogger(__name__)

_T = typ.TypeVar("_T")


class CategoryCache(typ.Generic[_T]):
    """Hold one lazily loaded value with at-most-one concurrent load.

    The first caller runs the loader under the cache's lock; callers that
    arrive meanwhile wait on the lock and then see the published value.
    Readers never take the lock once a value is published. Values must be
    fully built before the loader returns them.

    Example
    -------
    >>> import asyncio
    >>> cache: CategoryCache[tuple[int, ...]] = CategoryCache("numbers")
    >>> async def load() -> tuple[int, ...]:
    ...     return (1, 2)
    >>> asyncio.run(cache.get_or_load(load))
    (1, 2)
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._value: _T | None = None
        self._lock = asyncio.Lock()
        self._epoch = 0

    @property
    def value(self) -> _T | None:
        """Return the published value without loading."""
        return self._value

    @property
    def is_populated(self) -> bool:
        """Return ``True`` once a value has been published."""
        return self._value is not None

    async def get_or_load(self, loader: typ.Callable[[], typ.Awaitable[_T]]) -> _T:
        """Return the cached value, running ``loader`` once if needed.

        A load that finishes after :meth:`invalidate` was called still
        returns its result to the waiting callers but is not published.
        """
        value = self._value
        if value is not None:
            return value
        async with self._lock:
            value = self._value
            if value is not None:
                return value
            epoch = self._epoch
            loaded = await loader()
            if epoch == self._epoch:
                self._value = loaded
            else:
                logger.debug("Discarding %s load finished after invalidation", self.name)
            return loaded

    def invalidate(self) -> None:
        """Forget the published value; in-flight loads are not cancelled."""
        self._value = None
        self._epoch += 1


__all__ = ["CategoryCache"]
