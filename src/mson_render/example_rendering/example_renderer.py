"""Example value rendering for refracted MSON elements.

Handles simple types, enums, arrays, objects, named type references, mixins
and arrays with members of different types. One-of property groups always
render their first option.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from mson_render.element_model.element_models import (
    PRIMITIVE_KINDS,
    Element,
    ElementKind,
    SymbolTable,
)
from mson_render.type_inheritance.inheritance_resolver import resolve_inheritance
from mson_render.type_inheritance.mixin_expansion import expand_members

PLACEHOLDER_VALUES: Mapping[ElementKind, Any] = {
    ElementKind.BOOLEAN: True,
    ElementKind.NUMBER: 1,
    ElementKind.STRING: "Hello, world!",
}


def render_example(element: Element, symbol_table: SymbolTable) -> Any:
    """Render a representative value for ``element``.

    ``None`` means the element contributes nothing; objects omit such members.
    """
    kind = element.kind
    if kind in PRIMITIVE_KINDS:
        return PLACEHOLDER_VALUES[kind] if element.content is None else element.content
    if kind is ElementKind.ENUM:
        choices = element.children
        return render_example(choices[0], symbol_table) if choices else None
    if kind is ElementKind.ARRAY:
        return [render_example(item, symbol_table) for item in element.children]
    if kind in (ElementKind.OBJECT, ElementKind.OPTION):
        return _render_object(element.children, symbol_table)
    if kind is ElementKind.OPTION_SET:
        return _render_object((element,), symbol_table)
    if kind is ElementKind.REFERENCE:
        target = symbol_table.get(element.content) if isinstance(element.content, str) else None
        return None if target is None else render_example(target, symbol_table)
    if kind is ElementKind.MEMBER:
        return None

    base = symbol_table.get(element.element)
    if base is None:
        return None
    return render_example(resolve_inheritance(base, element), symbol_table)


def _render_object(members: Iterable[Element], symbol_table: SymbolTable) -> dict[str, Any]:
    example: dict[str, Any] = {}
    for member in expand_members(members, symbol_table):
        if member.kind is ElementKind.OPTION_SET:
            options = member.children
            if options:
                example.update(_render_object(options[0].children, symbol_table))
            continue
        key = member.member_key
        value = member.member_value
        if member.kind is not ElementKind.MEMBER or key is None or value is None:
            continue
        rendered = render_example(value, symbol_table)
        if rendered is not None:
            example[key] = rendered
    return example
