r"""Extract embedded component directives from markdown bodies.

Authors embed rich widgets with a bracketed directive on a markdown line::

    [[YouTube id="dQw4w9WgXcQ" title="Launch talk"]]
    [[FloatingImage src="diagram.png" align=right]]

:class:`EmbeddedComponentParser` replaces each directive with an HTML comment
placeholder (which the markdown renderer passes through untouched) and returns
one :class:`EmbeddedComponent` descriptor per directive. Rendering the widget
is left to the UI layer, which looks the descriptor's type up in a
:class:`ComponentRegistry`.

Example
-------
>>> from mdsite.components import EmbeddedComponentParser
>>> text, components = EmbeddedComponentParser().transform('[[Svg src="a.svg"]]')
>>> text
'<!--mdsite-component:0-->'
>>> components[0].type, components[0].attributes
('Svg', {'src': 'a.svg'})
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

DIRECTIVE_PATTERN = re.compile(r"\[\[(?P<name>[A-Za-z][\w-]*)(?P<attrs>(?:\s+[^\]]*)?)\]\]")
ATTRIBUTE_PATTERN = re.compile(
    r"""(?P<key>[A-Za-z_][\w-]*)(?:\s*=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<bare>[^\s"']+)))?"""
)
PLACEHOLDER_TEMPLATE = "<!--mdsite-component:{index}-->"
FENCE_PREFIXES = ("```", "~~~")
BUILTIN_COMPONENTS = ("YouTube", "FloatingImage", "Svg")


@dc.dataclass(slots=True)
class EmbeddedComponent:
    """Descriptor for one embedded widget.

    Attributes
    ----------
    type : str
        Component name; canonical casing when the name is registered.
    attributes : dict[str, str]
        Directive attributes. Bare flags are recorded as ``"true"``.
    index : int
        Position of the directive in the document.
    placeholder : str
        Token that replaced the directive in the markdown body.
    registered : bool
        ``False`` for names unknown to the registry (passed through as-is).
    base_path : str
        Location of the owning file, used to resolve relative asset paths.
        Assigned by the content parser after extraction.
    """

    type: str
    attributes: dict[str, str]
    index: int
    placeholder: str
    registered: bool = True
    base_path: str = ""

    def resolve_url(self, key: str) -> str | None:
        """Return attribute ``key`` resolved against :attr:`base_path`."""
        value = self.attributes.get(key)
        if not value:
            return None
        if value.startswith(("/", "#", "data:")) or "://" in value or not self.base_path:
            return value
        return f"{self.base_path.rstrip('/')}/{value.removeprefix('./')}"

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the camelCase JSON shape of the descriptor."""
        return {
            "type": self.type,
            "attributes": dict(self.attributes),
            "index": self.index,
            "placeholder": self.placeholder,
            "registered": self.registered,
            "basePath": self.base_path,
        }

    @classmethod
    def from_dict(cls, payload: typ.Mapping[str, typ.Any]) -> EmbeddedComponent:
        """Rebuild a descriptor from :meth:`to_dict` output."""
        index = int(payload.get("index", 0))
        return cls(
            type=str(payload.get("type", "")),
            attributes={str(k): str(v) for k, v in (payload.get("attributes") or {}).items()},
            index=index,
            placeholder=str(payload.get("placeholder") or PLACEHOLDER_TEMPLATE.format(index=index)),
            registered=bool(payload.get("registered", True)),
            base_path=str(payload.get("basePath", "")),
        )


class ComponentRegistry:
    """Case-insensitive mapping from directive names to component descriptors.

    The value registered for a name is opaque to this package; the UI layer
    stores whatever factory or type it renders with.
    """

    def __init__(self, *, include_builtins: bool = True) -> None:
        self._components: dict[str, tuple[str, object]] = {}
        if include_builtins:
            for name in BUILTIN_COMPONENTS:
                self.register(name)

    def register(self, name: str, factory: object | None = None) -> None:
        """Register ``name`` with an optional renderer ``factory``."""
        self._components[name.lower()] = (name, factory if factory is not None else name)

    def resolve(self, name: str) -> str | None:
        """Return the canonical registered name for ``name``, or None."""
        entry = self._components.get(name.lower())
        return entry[0] if entry else None

    def factory_for(self, name: str) -> object | None:
        """Return the factory registered for ``name``, or None."""
        entry = self._components.get(name.lower())
        return entry[1] if entry else None

    def is_registered(self, name: str) -> bool:
        """Return ``True`` when ``name`` is a registered component."""
        return name.lower() in self._components

    def registered_types(self) -> list[str]:
        """Return the canonical names of all registered components."""
        return [canonical for canonical, _factory in self._components.values()]


def parse_attributes(raw: str) -> dict[str, str]:
    """Return ``key=value`` pairs from a directive's attribute text.

    >>> parse_attributes('id="abc" autoplay width=640')
    {'id': 'abc', 'autoplay': 'true', 'width': '640'}
    """
    attributes: dict[str, str] = {}
    for match in ATTRIBUTE_PATTERN.finditer(raw or ""):
        value = match.group("dq")
        if value is None:
            value = match.group("sq")
        if value is None:
            value = match.group("bare")
        attributes[match.group("key")] = "true" if value is None else value
    return attributes


class EmbeddedComponentParser:
    """Replace component directives with placeholders and collect descriptors."""

    def __init__(self, registry: ComponentRegistry | None = None) -> None:
        self.registry = registry or ComponentRegistry()

    def transform(self, markdown_text: str) -> tuple[str, list[EmbeddedComponent]]:
        """Return the placeholder-substituted body and the extracted components.

        Directives inside fenced code blocks are left alone so documentation
        can show the directive syntax itself.
        """
        components: list[EmbeddedComponent] = []
        lines: list[str] = []
        in_code_block = False

        def _replace(match: re.Match[str]) -> str:
            name = match.group("name")
            canonical = self.registry.resolve(name)
            index = len(components)
            placeholder = PLACEHOLDER_TEMPLATE.format(index=index)
            components.append(
                EmbeddedComponent(
                    type=canonical or name,
                    attributes=parse_attributes(match.group("attrs")),
                    index=index,
                    placeholder=placeholder,
                    registered=canonical is not None,
                )
            )
            return placeholder

        for line in (markdown_text or "").split("\n"):
            if line.lstrip().startswith(FENCE_PREFIXES):
                in_code_block = not in_code_block
                lines.append(line)
                continue
            lines.append(line if in_code_block else DIRECTIVE_PATTERN.sub(_replace, line))
        return "\n".join(lines), components


__all__ = [
    "ComponentRegistry",
    "EmbeddedComponent",
    "EmbeddedComponentParser",
    "PLACEHOLDER_TEMPLATE",
    "parse_attributes",
]
