"""Load pre-built JSON indices, treating absence or damage as "unavailable"."""

from __future__ import annotations

import logging
import typing as typ

from .transport import ContentFetchError, ContentNotFoundError

if typ.TYPE_CHECKING:
    from .transport import ContentTransport

logger = logging.getLogger(__name__)

_T = typ.TypeVar("_T")


async def fetch_prebuilt(
    transport: ContentTransport,
    path: str,
    build: typ.Callable[[object], _T],
    *,
    label: str,
) -> _T | None:
    """Return the index at ``path`` parsed by ``build``, or ``None``.

    A missing file is the normal state before generation has run and is
    logged at INFO; fetch failures and malformed payloads are logged at
    WARNING. Nothing is raised.
    """
    try:
        payload = await transport.fetch_json(path)
    except ContentNotFoundError:
        logger.info("No pre-built %s at %s; using content files", label, path)
        return None
    except ContentFetchError as exc:
        logger.warning("Could not load %s from %s: %s", label, path, exc)
        return None
    try:
        return build(payload)
    except (TypeError, ValueError) as exc:
        logger.warning("Ignoring malformed %s at %s: %s", label, path, exc)
        return None


__all__ = ["fetch_prebuilt"]
