"""Assign deterministic anchor ids to rendered headings."""

from __future__ import annotations

import typing as typ

from markdown.extensions import Extension
from markdown.extensions.toc import stashedHTML2text, unescape
from markdown.treeprocessors import Treeprocessor

from mdsite.markdown_parser import AnchorRegistry, TocItem

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

HEADING_TAGS = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}


class HeadingAnchorExtension(Extension):
    """Give every heading an ``id`` using the table-of-contents slug rules.

    Repeated heading text gets ``-1``, ``-2`` ... suffixes so the ids in the
    HTML match the ids produced by :func:`mdsite.markdown_parser.extract_toc`.
    The headings seen during the last conversion are kept on ``headings``.
    """

    def __init__(self) -> None:
        super().__init__()
        self.headings: list[TocItem] = []

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the heading-anchor treeprocessor on the Markdown instance."""
        md.registerExtension(self)
        processor = HeadingAnchorTreeprocessor(md, self)
        md.treeprocessors.register(processor, "mdsite_heading_anchors", 5)

    def reset(self) -> None:
        """Forget headings from a previous conversion."""
        self.headings = []


class HeadingAnchorTreeprocessor(Treeprocessor):
    """Set ``id`` attributes on heading elements in document order."""

    def __init__(self, md: Markdown, extension: HeadingAnchorExtension) -> None:
        super().__init__(md)
        self.extension = extension

    def run(self, root: Element) -> Element:
        """Assign ids to headings that do not already carry one."""
        registry = AnchorRegistry()
        for element in root.iter():
            level = HEADING_TAGS.get(element.tag)
            if level is None:
                continue
            text = unescape(stashedHTML2text("".join(element.itertext()), self.md)).strip()
            anchor = element.get("id") or registry.anchor_for(text)
            element.set("id", anchor)
            self.extension.headings.append(TocItem(level=level, id=anchor, text=text))
        return root


__all__ = ["HeadingAnchorExtension", "HeadingAnchorTreeprocessor"]
