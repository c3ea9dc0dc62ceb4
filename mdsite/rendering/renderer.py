"""Render markdown to HTML and derive text metrics from markdown bodies."""

from __future__ import annotations

import math
import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter
from pymdownx import emoji

from mdsite._constants import MAX_HEADING_LEVEL, SEARCH_TEXT_LENGTH, WORDS_PER_MINUTE
from mdsite.frontmatter import FRONTMATTER_PATTERN
from mdsite.markdown_parser import TocItem, build_toc_hierarchy

from .anchors import HeadingAnchorExtension

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

CODE_BLOCK_PATTERN = re.compile(r"```([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)```", re.DOTALL)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
MARKDOWN_SYNTAX_PATTERN = re.compile(r"[#*`\[\]()>!_~\-]")
WHITESPACE_PATTERN = re.compile(r"\s+")


class MarkdownRenderer:
    """Render markdown with a fixed extension set and consistent heading ids."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        """Initialize a renderer with the Pygments style used for code blocks.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults
            to ``"monokai"``.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def to_html(self, text: str) -> str:
        """Render block-level markdown into HTML.

        Headings receive deterministic ``id`` attributes, fenced code is
        highlighted with Pygments, and tables, task lists and emoji
        shortcodes are supported.
        """
        html, _headings = self._convert(text)
        return html

    def to_html_inline(self, text: str) -> str:
        """Render short markdown without a wrapping paragraph.

        Used for descriptions and summaries shown inside inline contexts. The
        ``<p>`` wrapper is removed only when the output is a single paragraph.
        """
        if not text:
            return ""
        html = self.to_html(text).strip()
        if html.startswith("<p>") and html.endswith("</p>") and html.count("<p>") == 1:
            html = html[3:-4]
        return html

    def extract_table_of_contents(
        self, text: str, max_depth: int = MAX_HEADING_LEVEL
    ) -> list[TocItem]:
        """Return the nested heading tree of a fully parsed markdown document.

        Headings inside code blocks are never reported because the markdown
        engine does not treat them as headings. Ids match :meth:`to_html`.
        """
        _html, headings = self._convert(text)
        return build_toc_hierarchy(
            TocItem(level=item.level, id=item.id, text=item.text)
            for item in headings
            if item.level <= max_depth
        )

    @staticmethod
    def calculate_reading_time(text: str, words_per_minute: int = WORDS_PER_MINUTE) -> int:
        """Return the estimated reading time in whole minutes (at least 1)."""
        word_count = MarkdownRenderer.calculate_word_count(text)
        return max(1, math.ceil(word_count / max(1, words_per_minute)))

    @staticmethod
    def extract_plain_text(text: str) -> str:
        """Return searchable plain text with frontmatter and markdown syntax removed."""
        content = FRONTMATTER_PATTERN.sub("", text or "", count=1)
        content = MARKDOWN_SYNTAX_PATTERN.sub(" ", content)
        return WHITESPACE_PATTERN.sub(" ", content).strip()

    @staticmethod
    def calculate_word_count(text: str) -> int:
        """Return the number of words left after markdown syntax is removed."""
        return len(MARKDOWN_SYNTAX_PATTERN.sub(" ", text or "").split())

    def _convert(self, text: str) -> tuple[str, list[TocItem]]:
        normalized = self._normalize_fenced_blocks(text or "")
        if not normalized.strip():
            return "", []
        anchors = HeadingAnchorExtension()
        extensions: list[Extension | str] = [
            "fenced_code",
            "codehilite",
            "tables",
            "sane_lists",
            "pymdownx.tasklist",
            "pymdownx.emoji",
            anchors,
        ]
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                },
                "pymdownx.emoji": {"emoji_generator": emoji.to_alt},
            },
            output_format="html",
        )
        html = md.convert(normalized)
        return self._annotate_codehilite(html, normalized), list(anchors.headings)

    def _annotate_codehilite(self, html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block in converted markdown."""
        languages = [
            match.group(1) or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            return f"{fence}{language or ''}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


def truncate_text(text: str, max_length: int = SEARCH_TEXT_LENGTH) -> str:
    """Return ``text`` cut to ``max_length`` characters plus ``...`` when longer.

    >>> truncate_text("abcdef", 3)
    'abc...'
    """
    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}..."


__all__ = ["CODE_BLOCK_PATTERN", "MarkdownRenderer", "truncate_text"]
