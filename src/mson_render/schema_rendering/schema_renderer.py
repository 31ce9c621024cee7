"""JSON Schema rendering for refracted MSON elements.

Supported features:

* simple types, enums, arrays and objects
* property descriptions
* required, default and nullable properties
* named type references and mixins (includes)
* arrays with members of different types
* one-of (mutually exclusive) property groups

The output is a draft-04 compatible mapping; attaching ``$schema`` is left to
the caller.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from mson_render.element_model.element_models import (
    PRIMITIVE_KINDS,
    Element,
    ElementKind,
    SymbolTable,
)
from mson_render.type_inheritance.inheritance_resolver import resolve_inheritance
from mson_render.type_inheritance.mixin_expansion import expand_members

from .schema_equality import all_schemas_equal

REQUIRED = "required"
NULLABLE = "nullable"
NULL_TYPE = "null"

_ANNOTATION_KEYS = frozenset({"description"})


def render_schema(element: Element, symbol_table: SymbolTable) -> dict[str, Any]:
    """Render ``element`` into a JSON Schema mapping."""
    kind = element.kind
    if kind in PRIMITIVE_KINDS:
        schema = _render_primitive(element)
    elif kind is ElementKind.ENUM:
        schema = {"enum": [choice.content for choice in element.children]}
    elif kind is ElementKind.ARRAY:
        schema = _render_array(element, symbol_table)
    elif kind in (ElementKind.OBJECT, ElementKind.OPTION):
        schema = _render_object(element.children, symbol_table)
    elif kind is ElementKind.OPTION_SET:
        schema = _render_object((element,), symbol_table)
    elif kind is ElementKind.REFERENCE:
        target = symbol_table.get(element.content) if isinstance(element.content, str) else None
        schema = {} if target is None else render_schema(target, symbol_table)
    elif kind is ElementKind.MEMBER:
        schema = {}
    else:
        base = symbol_table.get(element.element)
        if base is None:
            schema = {}
        else:
            schema = render_schema(resolve_inheritance(base, element), symbol_table)

    if element.description is not None:
        schema["description"] = element.description
    if element.has_type_attribute(NULLABLE):
        schema = widen_nullable(schema)
    return schema


def widen_nullable(schema: dict[str, Any]) -> dict[str, Any]:
    """Allow ``null`` in addition to whatever ``schema`` accepts.

    A scalar ``type`` becomes ``[type, "null"]``. Schemas without a scalar
    type get ``None`` added to their ``enum`` or are wrapped in an ``anyOf``
    with a null branch; an unconstrained schema already accepts null.
    Widening an already nullable schema leaves it unchanged.
    """
    schema_type = schema.get("type")
    if isinstance(schema_type, str):
        if schema_type != NULL_TYPE:
            schema["type"] = [schema_type, NULL_TYPE]
        return schema
    if isinstance(schema_type, list):
        if NULL_TYPE not in schema_type:
            schema["type"] = [*schema_type, NULL_TYPE]
        return schema
    if "enum" in schema:
        if None not in schema["enum"]:
            schema["enum"] = [*schema["enum"], None]
        return schema
    constraints = {key: value for key, value in schema.items() if key not in _ANNOTATION_KEYS}
    if not constraints or {"type": NULL_TYPE} in schema.get("anyOf", ()):
        return schema
    widened: dict[str, Any] = {"anyOf": [constraints, {"type": NULL_TYPE}]}
    widened.update((key, schema[key]) for key in schema if key in _ANNOTATION_KEYS)
    return widened


def _render_primitive(element: Element) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": element.element}
    default = element.attributes.get("default")
    if default is not None:
        schema["default"] = default
    return schema


def _render_array(element: Element, symbol_table: SymbolTable) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "array"}
    items = [render_schema(child, symbol_table) for child in element.children]
    if len(items) == 1:
        schema["items"] = items[0]
    elif items:
        schema["items"] = items[0] if all_schemas_equal(items) else {"anyOf": items}
    return schema


def _render_object(members: Iterable[Element], symbol_table: SymbolTable) -> dict[str, Any]:
    properties: dict[str, Any] = {}
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    required: list[str] = []

    for member in expand_members(members, symbol_table):
        if member.kind is ElementKind.OPTION_SET:
            exclusive = _render_option_set(member, properties, symbol_table)
            schema.setdefault("allOf", []).append({"not": {"required": exclusive}})
            continue
        key = member.member_key
        if member.kind is not ElementKind.MEMBER or key is None:
            continue

        value = member.member_value
        prop = {} if value is None else render_schema(value, symbol_table)
        if member.description is not None:
            prop["description"] = member.description
        if member.has_type_attribute(REQUIRED) and key not in required:
            required.append(key)
        if member.has_type_attribute(NULLABLE):
            prop = widen_nullable(prop)
        properties[key] = prop

    if required:
        schema[REQUIRED] = required
    return schema


def _render_option_set(
    option_set: Element, properties: dict[str, Any], symbol_table: SymbolTable
) -> list[str]:
    """Merge every option's properties and return the union of their names."""
    exclusive: list[str] = []
    for option in option_set.children:
        option_schema = render_schema(option, symbol_table)
        for key, prop in option_schema.get("properties", {}).items():
            if key not in exclusive:
                exclusive.append(key)
            properties[key] = prop
    return exclusive
