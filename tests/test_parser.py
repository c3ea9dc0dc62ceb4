"""Unit tests for turning raw content files into typed entities."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from mdsite.models import ArticleCard, BlogPost, DocPage, FeatureCard, ProjectCard
from mdsite.parser import ContentParseError, ContentParser, category_base_path, read_header


@pytest.fixture
def parser() -> ContentParser:
    return ContentParser()


def test_blog_post_fields(parser: ContentParser) -> None:
    raw = (
        "---\ntitle: Hello\ndescription: A *short* note\npublishDate: 2024-01-15\n"
        "tags: [intro]\nauthor: Sam\n---\n\n# Heading\n\nBody.\n"
    )
    post = parser.parse("blog", "2024-01-15-hello.md", raw)
    assert isinstance(post, BlogPost)
    assert post.slug == "hello"
    assert post.description == "A <em>short</em> note"
    assert post.publish_date is not None
    assert post.publish_date.year == 2024
    assert post.tags == ["intro"]
    assert post.reading_time_minutes == 1
    assert post.raw_content.startswith("# Heading")
    assert BeautifulSoup(post.html_content, "html.parser").find("h1")["id"] == "heading"


def test_project_uses_filename_order(parser: ContentParser) -> None:
    raw = "---\ntitle: Demo\nmenuTitle: D\nshowInHeader: true\n---\nBody\n"
    project = parser.parse("projects", "03-demo/index.md", raw)
    assert isinstance(project, ProjectCard)
    assert (project.order, project.slug, project.menu_title) == (3, "demo", "D")
    assert project.show_in_header is True


def test_article_toc_honours_toc_depth(parser: ContentParser) -> None:
    raw = "---\ntitle: Guide\ntocDepth: 2\n---\n# A\n## B\n### C\n"
    article = parser.parse("articles", "01-guide.md", raw)
    assert isinstance(article, ArticleCard)
    assert article.toc_depth == 2
    assert [child.text for child in article.table_of_contents[0].children] == ["B"]
    assert article.table_of_contents[0].children[0].children == []


def test_unknown_category_is_a_section_article(parser: ContentParser) -> None:
    article = parser.parse("tutorials", "02-basics.md", "---\ntitle: Basics\n---\nText\n")
    assert isinstance(article, ArticleCard)
    assert article.section == "tutorials"
    assert article.order == 2


def test_doc_page_has_no_links_when_parsed_alone(parser: ContentParser) -> None:
    doc = parser.parse("docs", "02-setup.md", "---\ntitle: Setup\nparent: intro\n---\n# Setup\n")
    assert isinstance(doc, DocPage)
    assert doc.parent_slug == "intro"
    assert doc.previous_page is None
    assert doc.next_page is None
    assert [item.id for item in doc.table_of_contents] == ["setup"]


def test_feature_card(parser: ContentParser) -> None:
    feature = parser.parse("features", "01-fast.md", "---\ntitle: Fast\nicon: ⚡\n---\n")
    assert isinstance(feature, FeatureCard)
    assert feature.icon == "⚡"


def test_missing_title_falls_back_to_slug(parser: ContentParser) -> None:
    assert parser.parse("articles", "01-untitled.md", "Just text\n").title == "untitled"


def test_components_receive_base_path(parser: ContentParser) -> None:
    raw = '---\ntitle: Demo\n---\n[[Svg src="logo.svg"]]\n'
    project = parser.parse("projects", "01-demo/index.md", raw)
    component = project.embedded_components[0]
    assert component.base_path == "content/projects/01-demo"
    assert component.placeholder in project.html_content


def test_malformed_frontmatter_raises_and_outcome_fails(parser: ContentParser) -> None:
    raw = "---\ntitle: [broken\n---\nBody\n"
    with pytest.raises(ContentParseError):
        read_header("blog", "2024-01-01-x.md", raw)
    outcome = parser.parse_outcome("blog", "2024-01-01-x.md", raw)
    assert not outcome.succeeded
    assert outcome.source == "blog/2024-01-01-x.md"


def test_category_base_path_for_flat_file() -> None:
    assert category_base_path("blog", "2024-01-01-a.md") == "content/blog"
