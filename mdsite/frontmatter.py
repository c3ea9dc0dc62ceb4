r"""Split raw content files into YAML frontmatter and a markdown body.

Content files may start with a YAML block delimited by ``---`` marker lines.
The block is parsed with ruamel.yaml (safe loader, YAML 1.2) into a
:class:`FrontmatterData`; keys use camelCase (``publishDate``, ``menuTitle``,
``showInMenu``) and unknown keys are ignored.

Parsing never raises for a single bad file. A malformed block yields default
metadata with ``status == "malformed"`` so callers can decide whether to drop
the file, and the body after the block is still returned.

Example
-------
>>> from mdsite.frontmatter import extract_frontmatter
>>> result = extract_frontmatter("---\ntitle: Hello\n---\n\n# Body\n")
>>> result.data.title, result.body
('Hello', '# Body\n')
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import io
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .models._serialization import parse_datetime

FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(?:(?P<yaml>.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)", re.DOTALL
)

FrontmatterStatus = typ.Literal["ok", "missing", "malformed"]


@dc.dataclass(slots=True)
class FrontmatterData:
    """Metadata declared in a content file's YAML block.

    Attributes
    ----------
    title, description, summary : str | None
        Display copy. Descriptions and summaries may contain inline markdown.
    publish_date : datetime | None
        Timezone-aware (UTC) publish timestamp; dates become midnight UTC.
    tags : list[str]
        Free-form tags; order carries no meaning.
    featured_image, author, url : str | None
        Optional presentation metadata.
    menu_title : str | None
        Short label used by navigation menus.
    show_in_menu, show_in_header, is_first_project : bool
        Visibility flags. ``show_in_menu`` defaults to ``True``.
    parent : str | None
        Parent slug for hierarchical docs.
    icon, icon_svg : str | None
        Emoji/path icon or inline SVG markup for feature cards.
    toc_depth : int | None
        Deepest heading level included in the table of contents.
    """

    title: str | None = None
    description: str | None = None
    summary: str | None = None
    publish_date: dt.datetime | None = None
    tags: list[str] = dc.field(default_factory=list)
    featured_image: str | None = None
    author: str | None = None
    url: str | None = None
    menu_title: str | None = None
    show_in_menu: bool = True
    show_in_header: bool = False
    is_first_project: bool = False
    parent: str | None = None
    icon: str | None = None
    icon_svg: str | None = None
    toc_depth: int | None = None


@dc.dataclass(slots=True)
class FrontmatterResult:
    """Outcome of splitting one raw file."""

    data: FrontmatterData
    body: str
    status: FrontmatterStatus
    error: str | None = None

    @property
    def is_malformed(self) -> bool:
        """Return ``True`` when a YAML block was present but unusable."""
        return self.status == "malformed"


_STRING_KEYS: dict[str, str] = {
    "title": "title",
    "description": "description",
    "summary": "summary",
    "featuredImage": "featured_image",
    "author": "author",
    "url": "url",
    "menuTitle": "menu_title",
    "parent": "parent",
    "icon": "icon",
    "iconSvg": "icon_svg",
}
_BOOL_KEYS: dict[str, str] = {
    "showInMenu": "show_in_menu",
    "showInHeader": "show_in_header",
    "isFirstProject": "is_first_project",
}


def _yaml_loader() -> YAML:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    return loader


def extract_frontmatter(text: str) -> FrontmatterResult:
    """Split ``text`` into parsed metadata and the remaining markdown body.

    Parameters
    ----------
    text : str
        Raw file contents. The frontmatter block must start on the very
        first line.

    Returns
    -------
    FrontmatterResult
        Parsed metadata (defaults when absent or malformed), the body with
        leading whitespace trimmed, and a status flag.
    """
    match = FRONTMATTER_PATTERN.match(text or "")
    if not match:
        return FrontmatterResult(FrontmatterData(), (text or "").lstrip(), "missing")

    body = text[match.end() :].lstrip()
    try:
        loaded = _yaml_loader().load(match.group("yaml") or "")
    except (YAMLError, ValueError) as exc:
        # impossible timestamps such as 2024-13-45 raise ValueError
        return FrontmatterResult(FrontmatterData(), body, "malformed", str(exc))
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        msg = "frontmatter must be a mapping"
        return FrontmatterResult(FrontmatterData(), body, "malformed", msg)
    return FrontmatterResult(_build_frontmatter(loaded), body, "ok")


def strip_frontmatter(text: str) -> str:
    """Return ``text`` without a leading frontmatter block."""
    match = FRONTMATTER_PATTERN.match(text or "")
    if not match:
        return text or ""
    return text[match.end() :].lstrip()


def _build_frontmatter(raw: typ.Mapping[str, typ.Any]) -> FrontmatterData:
    """Build FrontmatterData from a loaded YAML mapping, ignoring unknown keys."""
    values: dict[str, typ.Any] = {}
    for key, field_name in _STRING_KEYS.items():
        text = _optional_str(raw.get(key))
        if text is not None:
            values[field_name] = text
    for key, field_name in _BOOL_KEYS.items():
        if key in raw:
            values[field_name] = _coerce_bool(raw[key], default=field_name == "show_in_menu")
    values["tags"] = _coerce_tags(raw.get("tags"))
    values["publish_date"] = parse_datetime(raw.get("publishDate"))
    values["toc_depth"] = _coerce_int(raw.get("tocDepth"))
    return FrontmatterData(**values)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coerce_bool(value: object, *, default: bool) -> bool:
    match value:
        case bool():
            return value
        case str() as text:
            lowered = text.strip().lower()
            if lowered in {"true", "yes", "on", "1"}:
                return True
            if lowered in {"false", "no", "off", "0"}:
                return False
            return default
        case int():
            return bool(value)
        case _:
            return default


def _coerce_tags(value: object) -> list[str]:
    match value:
        case str() as text:
            candidates: list[object] = list(text.split(","))
        case list() | tuple() | set():
            candidates = list(value)
        case _:
            return []
    tags: list[str] = []
    for candidate in candidates:
        tag = _optional_str(candidate)
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def _coerce_int(value: object) -> int | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def dump_frontmatter(data: FrontmatterData, body: str = "") -> str:
    """Serialise ``data`` back into a ``---`` delimited block followed by ``body``.

    Only fields that differ from their defaults are written, using the same
    camelCase keys :func:`extract_frontmatter` reads.
    """
    payload: dict[str, typ.Any] = {}
    for key, field_name in _STRING_KEYS.items():
        value = getattr(data, field_name)
        if value:
            payload[key] = value
    if data.publish_date is not None:
        payload["publishDate"] = data.publish_date.isoformat()
    if data.tags:
        payload["tags"] = list(data.tags)
    for key, field_name in _BOOL_KEYS.items():
        value = getattr(data, field_name)
        if value != (field_name == "show_in_menu"):
            payload[key] = value
    if data.toc_depth is not None:
        payload["tocDepth"] = data.toc_depth

    dumper = YAML(typ="safe")
    dumper.default_flow_style = False
    buffer = io.StringIO()
    dumper.dump(payload, buffer)
    return f"---\n{buffer.getvalue()}---\n\n{body}"


__all__ = [
    "FRONTMATTER_PATTERN",
    "FrontmatterData",
    "FrontmatterResult",
    "dump_frontmatter",
    "extract_frontmatter",
    "strip_frontmatter",
]
