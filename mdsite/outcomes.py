"""Per-file results for loads that must continue past individual failures.

Loading a category touches many files; one unreadable or malformed file must
not abort the rest. Each file therefore produces an :class:`Outcome` and the
caller keeps the successes with :func:`collect_successes`, which logs every
failure it discards.

Example
-------
>>> from mdsite.outcomes import Outcome, collect_successes
>>> collect_successes([Outcome.ok(1), Outcome.failed("b.md", "bad yaml")])
[1]
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

logger = logging.getLogger(__name__)

_T = typ.TypeVar("_T")


@dc.dataclass(slots=True, frozen=True)
class Outcome(typ.Generic[_T]):
    """Result of processing one source file.

    Attributes
    ----------
    source : str
        File the outcome belongs to, used in diagnostics.
    value : _T | None
        Parsed item on success.
    error : str | None
        Reason for the failure; ``None`` on success.
    """

    source: str
    value: _T | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        """Return ``True`` when the file produced a value."""
        return self.error is None

    @classmethod
    def ok(cls, value: _T, source: str = "") -> Outcome[_T]:
        """Return a successful outcome carrying ``value``."""
        return cls(source=source, value=value)

    @classmethod
    def failed(cls, source: str, reason: str | BaseException) -> Outcome[_T]:
        """Return a failed outcome for ``source``."""
        return cls(source=source, error=str(reason) or type(reason).__name__)


def collect_successes(
    outcomes: typ.Iterable[Outcome[_T]], *, context: str = "content"
) -> list[_T]:
    """Return the values of successful outcomes, logging each failure.

    Parameters
    ----------
    outcomes : Iterable[Outcome]
        Per-file outcomes in source order.
    context : str, optional
        Label (usually the category) included in the log messages.
    """
    values: list[_T] = []
    for outcome in outcomes:
        if outcome.succeeded:
            values.append(typ.cast("_T", outcome.value))
            continue
        logger.warning("Skipping %s file %s: %s", context, outcome.source, outcome.error)
    return values


__all__ = ["Outcome", "collect_successes"]
