r"""Turn filenames and heading text into URL-safe slugs.

Content files follow two naming conventions: blog posts carry a date prefix
(``2024-01-15-my-post.md``) and ordered collections carry a numeric prefix
(``02-guide.md``). Folder-based entries (``01-biography/index.md``) take their
slug and order from the folder name instead of the leaf filename.

Example
-------
>>> from mdsite.slugs import generate_slug, get_order_and_slug_from_filename
>>> generate_slug("Hello, World!")
'hello-world'
>>> get_order_and_slug_from_filename("02-guide.md")
(2, 'guide')
"""

from __future__ import annotations

import posixpath
import re
import unicodedata

from ._constants import CONTENT_EXTENSIONS, INDEX_FILENAMES

NON_ALNUM_PATTERN = re.compile(r"[^a-z0-9]+")
DATE_PREFIX_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}-")
ORDER_PREFIX_PATTERN = re.compile(r"^(\d+)-")


def generate_slug(text: str) -> str:
    """Return a lowercase, hyphen-separated slug for ``text``.

    Accented characters are folded to their ASCII base letter, runs of any
    other non-alphanumeric characters collapse into a single hyphen, and
    leading/trailing hyphens are trimmed. The result may be empty when
    ``text`` has no alphanumeric characters; callers decide how to treat that.

    >>> generate_slug("  Café -- Menu  ")
    'cafe-menu'
    >>> generate_slug(generate_slug("A  B"))
    'a-b'
    """
    folded = unicodedata.normalize("NFKD", text or "")
    ascii_text = folded.encode("ascii", "ignore").decode("ascii").lower()
    return NON_ALNUM_PATTERN.sub("-", ascii_text).strip("-")


def _strip_extension(name: str) -> str:
    lower = name.lower()
    for extension in CONTENT_EXTENSIONS:
        if lower.endswith(extension):
            return name[: -len(extension)]
    return name


def _entry_name(filename: str) -> str:
    """Return the name that carries slug information for ``filename``.

    For folder-based content (``folder/index.md``) this is the folder name;
    otherwise it is the leaf filename without its content extension.
    """
    normalized = filename.replace("\\", "/").strip("/")
    leaf = posixpath.basename(normalized)
    if leaf.lower() in INDEX_FILENAMES:
        parent = posixpath.basename(posixpath.dirname(normalized))
        if parent:
            return parent
    return _strip_extension(leaf)


def get_slug_from_filename(filename: str) -> str:
    """Return the slug for a content filename or relative path.

    >>> get_slug_from_filename("2024-01-15-my-post.md")
    'my-post'
    >>> get_slug_from_filename("01-biography/index.md")
    'biography'
    """
    name = _entry_name(filename)
    name = DATE_PREFIX_PATTERN.sub("", name, count=1)
    name = ORDER_PREFIX_PATTERN.sub("", name, count=1)
    return generate_slug(name)


def get_order_and_slug_from_filename(filename: str) -> tuple[int, str]:
    """Return ``(order, slug)`` parsed from a content filename or path.

    The order is the leading integer run before the first hyphen. Date
    prefixes are not orders: a dated name yields order ``0``, as does a name
    with no numeric prefix at all.

    >>> get_order_and_slug_from_filename("guide.md")
    (0, 'guide')
    >>> get_order_and_slug_from_filename("10-setup/index.mdx")
    (10, 'setup')
    """
    name = _entry_name(filename)
    if DATE_PREFIX_PATTERN.match(name):
        return 0, generate_slug(DATE_PREFIX_PATTERN.sub("", name, count=1))
    match = ORDER_PREFIX_PATTERN.match(name)
    if not match:
        return 0, generate_slug(name)
    return int(match.group(1)), generate_slug(name[match.end() :])


__all__ = [
    "generate_slug",
    "get_order_and_slug_from_filename",
    "get_slug_from_filename",
]
