"""Tests for the JSON shapes of the index models."""

from __future__ import annotations

import pytest

from mdsite.models import (
    ContentIndex,
    ContentMetadataIndex,
    NavigationIndex,
    NavigationMenuItem,
)


def test_content_index_from_dict_defaults_missing_categories() -> None:
    index = ContentIndex.from_dict({"docs": ["01-a.md"], "sections": {"guides": ["01-x.md"]}})
    assert index.docs == ("01-a.md",)
    assert index.blog == ()
    assert index.files_for("guides") == ("01-x.md",)
    assert index.files_for("unknown") == ()


@pytest.mark.parametrize(
    "payload",
    [["blog"], {"blog": "not-a-list"}, {"blog": [1]}, {"sections": []}],
)
def test_content_index_rejects_bad_shapes(payload: object) -> None:
    with pytest.raises(TypeError):
        ContentIndex.from_dict(payload)


def test_navigation_index_reads_camel_case_items() -> None:
    index = NavigationIndex.from_dict(
        {
            "projects": [
                {"slug": "demo", "title": "Demo", "menuTitle": "D", "order": 2, "showInHeader": True}
            ],
            "sections": {"guides": [{"slug": "intro", "title": "Intro"}]},
        }
    )
    item = index.projects[0]
    assert (item.slug, item.order, item.show_in_header, item.show_in_menu) == (
        "demo",
        2,
        True,
        True,
    )
    assert item.display_title == "D"
    assert index.items_for("guides")[0].display_title == "Intro"


def test_menu_item_serialises_camel_case() -> None:
    payload = NavigationMenuItem(slug="a", title="A", order=1).to_dict()
    assert payload == {
        "slug": "a",
        "title": "A",
        "menuTitle": None,
        "order": 1,
        "showInMenu": True,
        "showInHeader": False,
    }


def test_metadata_index_rejects_non_numeric_order() -> None:
    with pytest.raises(ValueError, match="invalid literal"):
        ContentMetadataIndex.from_dict({"docs": [{"slug": "a", "order": "first"}]})
