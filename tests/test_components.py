"""Unit tests for embedded component directives and the component registry."""

from __future__ import annotations

from mdsite.components import ComponentRegistry, EmbeddedComponentParser, parse_attributes


def test_directive_is_replaced_with_placeholder() -> None:
    text, components = EmbeddedComponentParser().transform(
        'Intro\n\n[[youtube id="abc123" title=\'Talk\']]\n'
    )
    assert "[[" not in text
    assert components[0].placeholder in text
    assert components[0].type == "YouTube", "registered names use canonical casing"
    assert components[0].attributes == {"id": "abc123", "title": "Talk"}
    assert components[0].registered


def test_unknown_directive_is_kept_as_unregistered() -> None:
    _text, components = EmbeddedComponentParser().transform("[[Chart data=sales.csv]]")
    assert components[0].type == "Chart"
    assert components[0].registered is False


def test_directives_inside_code_fences_are_left_alone() -> None:
    source = "```\n[[Svg src=a.svg]]\n```\n"
    text, components = EmbeddedComponentParser().transform(source)
    assert text == source
    assert components == []


def test_registry_is_case_insensitive() -> None:
    registry = ComponentRegistry()
    registry.register("Chart", factory="chart-widget")
    assert registry.is_registered("CHART")
    assert registry.resolve("floatingimage") == "FloatingImage"
    assert registry.factory_for("chart") == "chart-widget"
    assert set(registry.registered_types()) == {"YouTube", "FloatingImage", "Svg", "Chart"}


def test_bare_attributes_become_true() -> None:
    assert parse_attributes("autoplay width=640") == {"autoplay": "true", "width": "640"}


def test_relative_asset_urls_resolve_against_base_path() -> None:
    _text, components = EmbeddedComponentParser().transform(
        '[[FloatingImage src="./diagram.png" link="https://example.com/x.png"]]'
    )
    component = components[0]
    component.base_path = "content/projects/01-demo"
    assert component.resolve_url("src") == "content/projects/01-demo/diagram.png"
    assert component.resolve_url("link") == "https://example.com/x.png"
    assert component.resolve_url("missing") is None
