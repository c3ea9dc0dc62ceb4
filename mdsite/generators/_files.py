"""File helpers shared by the generators: atomic writes and header loading."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading  # noqa: TC003 - used for runtime type metadata
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from mdsite.ordering import dedupe_and_sort
from mdsite.outcomes import Outcome, collect_successes
from mdsite.parser import ContentHeader, ContentParseError, read_header
from mdsite.scanner import check_cancelled

if typ.TYPE_CHECKING:
    from mdsite.models import ContentIndex

logger = logging.getLogger(__name__)


TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def template_environment(templates_dir: Path | None = None) -> Environment:
    """Return the Jinja2 environment used for XML and text artifacts."""
    return Environment(
        loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml", "jinja"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def write_text_atomic(path: Path, text: str) -> Path:
    """Write ``text`` to ``path`` through a temporary file and rename.

    Readers never observe a partially written file: the content lands in a
    sibling temporary file that replaces ``path`` in one step.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        tmp.replace(path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    return path


def write_json_atomic(path: Path, payload: object) -> Path:
    """Serialise ``payload`` as indented JSON and write it atomically."""
    return write_text_atomic(path, json.dumps(payload, indent=2, ensure_ascii=False) + "\n")


def read_header_outcome(content_path: Path, category: str, filename: str) -> Outcome[ContentHeader]:
    """Read one listed file and parse its frontmatter into an outcome."""
    source = f"{category}/{filename}"
    file_path = content_path / category / filename
    try:
        raw = file_path.read_text(encoding="utf-8")
        header = read_header(category, filename, raw)
    except (OSError, UnicodeDecodeError, ContentParseError) as exc:
        return Outcome.failed(source, exc)
    return Outcome.ok(header, source=source)


def load_category_headers(
    content_path: Path,
    category: str,
    files: typ.Iterable[str],
    cancel: threading.Event | None = None,
) -> list[ContentHeader]:
    """Return the deduplicated, sorted headers of every readable file.

    Unreadable and malformed files are logged and skipped.

    Raises
    ------
    GenerationCancelled
        If ``cancel`` is set between files.
    """
    outcomes: list[Outcome[ContentHeader]] = []
    for filename in files:
        check_cancelled(cancel, f"{category} indexing")
        outcomes.append(read_header_outcome(content_path, category, filename))
    headers = collect_successes(outcomes, context=category)
    return dedupe_and_sort(category, headers)


def load_all_headers(
    content_path: Path,
    index: ContentIndex,
    categories: typ.Iterable[str],
    cancel: threading.Event | None = None,
) -> dict[str, list[ContentHeader]]:
    """Return headers for ``categories`` plus every section of ``index``."""
    names = list(categories)
    names += [name for name in index.sections if name not in names]
    return {
        name: load_category_headers(content_path, name, index.files_for(name), cancel)
        for name in names
    }


__all__ = [
    "TEMPLATES_DIR",
    "load_all_headers",
    "load_category_headers",
    "read_header_outcome",
    "template_environment",
    "write_json_atomic",
    "write_text_atomic",
]
