"""camelCase JSON helpers shared by the content and index models."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import datetime as dt
import re
import typing as typ

_CAMEL_BOUNDARY = re.compile(r"_([a-z0-9])")

_INT_FIELDS = {"order", "reading_time_minutes", "toc_depth", "level"}
_BOOL_FIELDS = {"show_in_menu", "show_in_header", "is_first_project"}
_DATETIME_FIELDS = {"publish_date"}
_LIST_FIELDS = {"tags"}
_OPTIONAL_FIELDS = {"menu_title", "toc_depth", "publish_date"}


def to_camel(name: str) -> str:
    """Return the camelCase JSON key for a snake_case field name.

    >>> to_camel("reading_time_minutes")
    'readingTimeMinutes'
    """
    return _CAMEL_BOUNDARY.sub(lambda match: match.group(1).upper(), name)


def encode_value(value: object) -> object:
    """Return a JSON-compatible representation of ``value``."""
    match value:
        case dt.datetime():
            return value.isoformat()
        case list() | tuple():
            return [encode_value(item) for item in value]
        case dict():
            return {str(key): encode_value(item) for key, item in value.items()}
        case _ if hasattr(value, "to_dict"):
            return value.to_dict()  # type: ignore[union-attr]
        case _:
            return value


def record_to_dict(record: object) -> dict[str, typ.Any]:
    """Return the camelCase dict for a dataclass ``record``."""
    return {
        to_camel(field.name): encode_value(getattr(record, field.name))
        for field in dc.fields(record)  # type: ignore[arg-type]
    }


def parse_datetime(value: object) -> dt.datetime | None:
    """Return an aware UTC datetime from an ISO string, date or datetime, else None."""
    match value:
        case dt.datetime():
            parsed = value
        case dt.date():
            parsed = dt.datetime(value.year, value.month, value.day)
        case str() as text if text.strip():
            sanitized = text.strip()
            if sanitized.endswith("Z"):
                sanitized = sanitized[:-1] + "+00:00"
            try:
                parsed = dt.datetime.fromisoformat(sanitized)
            except ValueError:
                return None
        case _:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


_R = typ.TypeVar("_R")


def record_from_dict(cls: type[_R], payload: typ.Mapping[str, typ.Any]) -> _R:
    """Build a flat record dataclass from its camelCase JSON shape.

    Raises
    ------
    TypeError
        If ``payload`` is not a mapping.
    ValueError
        If a numeric field holds a non-numeric value.
    """
    if not isinstance(payload, cabc.Mapping):
        msg = f"Expected a mapping for {cls.__name__}, got {type(payload).__name__}."
        raise TypeError(msg)
    values: dict[str, typ.Any] = {}
    for field in dc.fields(cls):  # type: ignore[arg-type]
        key = to_camel(field.name)
        if key not in payload:
            continue
        raw = payload[key]
        if raw is None and field.name in _OPTIONAL_FIELDS:
            values[field.name] = None
        elif field.name in _INT_FIELDS:
            values[field.name] = int(raw)
        elif field.name in _BOOL_FIELDS:
            values[field.name] = bool(raw)
        elif field.name in _DATETIME_FIELDS:
            values[field.name] = parse_datetime(raw)
        elif field.name in _LIST_FIELDS:
            values[field.name] = [str(item) for item in raw or []]
        else:
            values[field.name] = "" if raw is None else str(raw)
    return cls(**values)


__all__ = [
    "encode_value",
    "parse_datetime",
    "record_from_dict",
    "record_to_dict",
    "to_camel",
]
