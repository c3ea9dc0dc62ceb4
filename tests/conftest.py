"""Shared fixtures for building throwaway content trees."""

from __future__ import annotations

import typing as typ

import pytest

if typ.TYPE_CHECKING:
    from pathlib import Path


def frontmatter_file(body: str = "Body text.", **fields: str) -> str:
    """Return a markdown document with a simple ``key: value`` frontmatter block."""
    lines = ["---", *(f"{key}: {value}" for key, value in fields.items()), "---", "", body]
    return "\n".join(lines) + "\n"


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Return a site root holding an empty ``content`` directory."""
    (tmp_path / "content").mkdir()
    return tmp_path


@pytest.fixture
def write_content(site_root: Path) -> typ.Callable[[str, str], Path]:
    """Return a helper writing ``content/<relative>`` files under ``site_root``."""

    def _write(relative: str, text: str) -> Path:
        path = site_root / "content" / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
