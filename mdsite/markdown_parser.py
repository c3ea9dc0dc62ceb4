r"""Extract markdown headings into a nested table of contents.

Headings are collected line by line (skipping fenced code blocks), given
anchor ids that match the ids the HTML renderer assigns, and folded into a
tree where each node's children are the deeper headings that follow it.

Example
-------
>>> from mdsite.markdown_parser import extract_toc
>>> toc = extract_toc("# Intro\n## Setup\n## Usage\n# Reference\n")
>>> [(item.text, [child.id for child in item.children]) for item in toc]
[('Intro', ['setup', 'usage']), ('Reference', [])]
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from ._constants import DEFAULT_TOC_DEPTH, MAX_HEADING_LEVEL
from .slugs import generate_slug

FENCE_MARKER = "```"
FALLBACK_ANCHOR = "section"


@dc.dataclass(slots=True)
class Heading:
    """Flat heading captured from the document before ids are assigned."""

    level: int
    text: str


@dc.dataclass(slots=True)
class TocItem:
    """Node of the table-of-contents tree.

    Attributes
    ----------
    level : int
        Heading level (1 for ``#``, 2 for ``##`` ...).
    id : str
        Anchor id, unique within the document.
    text : str
        Display text of the heading.
    children : list[TocItem]
        Deeper headings nested under this one, in document order.
    """

    level: int
    id: str
    text: str
    children: list[TocItem] = dc.field(default_factory=list)

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the camelCase JSON shape of this node and its children."""
        return {
            "level": self.level,
            "id": self.id,
            "text": self.text,
            "children": [child.to_dict() for child in self.children],
        }

    @classmethod
    def from_dict(cls, payload: typ.Mapping[str, typ.Any]) -> TocItem:
        """Rebuild a node (and its subtree) from :meth:`to_dict` output."""
        return cls(
            level=int(payload.get("level", 1)),
            id=str(payload.get("id", "")),
            text=str(payload.get("text", "")),
            children=[cls.from_dict(child) for child in payload.get("children") or []],
        )


class AnchorRegistry:
    """Hand out document-unique anchor ids for heading text.

    The first heading with a given slug keeps it; later repeats get ``-1``,
    ``-2`` ... appended. Text that slugifies to nothing uses ``"section"``.
    """

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}
        self._used: set[str] = set()

    def anchor_for(self, text: str) -> str:
        """Return the next unique anchor id for ``text``."""
        base = generate_slug(text) or FALLBACK_ANCHOR
        key = base.lower()
        count = self._counts.get(key, 0)
        candidate = base if count == 0 else f"{base}-{count}"
        while candidate in self._used:
            count += 1
            candidate = f"{base}-{count}"
        self._counts[key] = count + 1
        self._used.add(candidate)
        return candidate


def _clean_heading(text: str) -> str:
    """Return heading text without escapes, closing hashes, or outer whitespace."""
    cleaned = text.replace("\\", "").strip()
    stripped = cleaned.rstrip("#")
    if stripped != cleaned and (not stripped or stripped[-1] in " \t"):
        cleaned = stripped
    return cleaned.strip()


def scan_headings(markdown_text: str, max_depth: int = DEFAULT_TOC_DEPTH) -> list[Heading]:
    """Return ATX headings outside fenced code blocks, in document order.

    A line counts as a heading when it starts with one or more ``#`` followed
    by a single space and non-empty text. Headings deeper than ``max_depth``
    are dropped.
    """
    depth = max(1, min(max_depth, MAX_HEADING_LEVEL))
    headings: list[Heading] = []
    in_code_block = False
    for line in (markdown_text or "").splitlines():
        trimmed = line.lstrip()
        if trimmed.startswith(FENCE_MARKER):
            in_code_block = not in_code_block
            continue
        if in_code_block or not trimmed.startswith("#"):
            continue

        level = len(trimmed) - len(trimmed.lstrip("#"))
        if level > depth:
            continue
        if level >= len(trimmed) or trimmed[level] != " ":
            continue
        text = _clean_heading(trimmed[level + 1 :])
        if text:
            headings.append(Heading(level=level, text=text))
    return headings


def assign_anchor_ids(headings: typ.Iterable[Heading]) -> list[TocItem]:
    """Return flat TocItems with disambiguated anchor ids."""
    registry = AnchorRegistry()
    return [
        TocItem(level=heading.level, id=registry.anchor_for(heading.text), text=heading.text)
        for heading in headings
    ]


def build_toc_hierarchy(items: typ.Iterable[TocItem]) -> list[TocItem]:
    """Fold a flat, document-ordered heading list into a forest.

    Each heading closes every open heading at the same or a deeper level;
    whatever remains open on the stack becomes its parent.
    """
    roots: list[TocItem] = []
    stack: list[TocItem] = []
    for item in items:
        while stack and stack[-1].level >= item.level:
            stack.pop()
        if stack:
            stack[-1].children.append(item)
        else:
            roots.append(item)
        stack.append(item)
    return roots


def extract_toc(markdown_text: str, max_depth: int = DEFAULT_TOC_DEPTH) -> list[TocItem]:
    """Return the nested table of contents for ``markdown_text``.

    Parameters
    ----------
    markdown_text : str
        Markdown body (frontmatter already removed).
    max_depth : int, optional
        Deepest heading level to include; defaults to ``3``.

    Returns
    -------
    list[TocItem]
        Top-level headings with their nested children.
    """
    return build_toc_hierarchy(assign_anchor_ids(scan_headings(markdown_text, max_depth)))


__all__ = [
    "AnchorRegistry",
    "Heading",
    "TocItem",
    "assign_anchor_ids",
    "build_toc_hierarchy",
    "extract_toc",
    "scan_headings",
]
