"""Markdown rendering with Pygments highlighting and deterministic heading ids."""

from .anchors import HeadingAnchorExtension
from .renderer import MarkdownRenderer, truncate_text

__all__ = ["HeadingAnchorExtension", "MarkdownRenderer", "truncate_text"]
