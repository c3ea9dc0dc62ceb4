"""Unit tests for markdown rendering and text metrics."""

from __future__ import annotations

from bs4 import BeautifulSoup

from mdsite.rendering import MarkdownRenderer, truncate_text


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def test_heading_ids_match_table_of_contents() -> None:
    """Rendered heading ids agree with the extracted TOC ids."""
    renderer = MarkdownRenderer()
    text = "# Intro\n\nText.\n\n## Intro\n\n## Usage: Setup\n"
    soup = _soup(renderer.to_html(text))
    html_ids = [tag["id"] for tag in soup.find_all(["h1", "h2"])]
    toc = renderer.extract_table_of_contents(text)
    toc_ids = [toc[0].id, *(child.id for child in toc[0].children)]
    assert html_ids == ["intro", "intro-1", "usage-setup"]
    assert toc_ids == html_ids


def test_fenced_code_is_highlighted_with_language() -> None:
    html = MarkdownRenderer().to_html("```python\nprint('hi')\n```\n")
    block = _soup(html).select_one("div.codehilite")
    assert block is not None, "expected a highlighted code block"
    assert block.get("data-language") == "python"


def test_code_fence_headings_do_not_become_headings() -> None:
    html = MarkdownRenderer().to_html("```\n# not a heading\n```\n")
    assert _soup(html).find("h1") is None


def test_tables_and_task_lists_render() -> None:
    text = "| a | b |\n| - | - |\n| 1 | 2 |\n\n- [x] done\n- [ ] todo\n"
    soup = _soup(MarkdownRenderer().to_html(text))
    assert soup.find("table") is not None
    assert len(soup.select("input[type=checkbox]")) == 2


def test_inline_render_drops_single_paragraph_wrapper() -> None:
    assert MarkdownRenderer().to_html_inline("Some *emphasis*") == "Some <em>emphasis</em>"


def test_reading_time_rounds_up_with_floor_of_one() -> None:
    assert MarkdownRenderer.calculate_reading_time(" ".join(["word"] * 400)) == 2
    assert MarkdownRenderer.calculate_reading_time(" ".join(["word"] * 401)) == 3
    assert MarkdownRenderer.calculate_reading_time("word") == 1
    assert MarkdownRenderer.calculate_reading_time("") == 1


def test_plain_text_strips_frontmatter_and_syntax() -> None:
    text = "---\ntitle: x\n---\n# Heading\n\n**bold** [link](url)\n"
    assert MarkdownRenderer.extract_plain_text(text) == "Heading bold link url"


def test_truncate_text_appends_ellipsis_only_when_cut() -> None:
    assert truncate_text("short", 10) == "short"
    assert truncate_text("x" * 12, 10) == "x" * 10 + "..."


def test_indented_fences_with_labels_keep_language() -> None:
    """Fences nested under list items and carrying extra labels still highlight."""
    text = (
        "## Intro\n"
        "- **Example** demonstrates inline code\n\n"
        "  ```rust,no_run\n"
        '  fn main() { println!("hi"); }\n'
        "  ```\n"
    )
    soup = _soup(MarkdownRenderer().to_html(text))
    blocks = soup.select(".codehilite code")
    assert any("fn main" in block.get_text() for block in blocks), (
        "expected a highlighted block containing 'fn main'"
    )
    assert any(
        block.find_parent("div", class_="codehilite").get("data-language") == "rust"
        for block in blocks
    )
