"""Symbol table construction and reference cycle detection."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from mson_render.element_model.element_models import Element, ElementKind, SymbolTable
from mson_render.element_model.refract_parsing import ElementFormatError, parse_element

_LOGGER = logging.getLogger(__name__)

DATA_STRUCTURE_ELEMENT = "dataStructure"


def build_symbol_table(api_description: Mapping[str, Any]) -> SymbolTable:
    """Collect every identified data structure declared in an API description.

    Later declarations of the same name replace earlier ones. Malformed declarations are
    skipped with a warning, so references to them resolve like unknown names.
    """
    entries: dict[str, Element] = {}
    for node in _iter_data_structures(api_description):
        definition = data_structure_definition(node)
        if definition is None:
            continue
        try:
            element = parse_element(definition)
        except ElementFormatError as exc:
            _LOGGER.warning(
                "Skipping malformed data structure %s: %s", _declared_name(definition), exc
            )
            continue
        name = element.meta.get("id")
        if isinstance(name, str) and name:
            entries[name] = element
    _LOGGER.debug("Known data structures: %s", ", ".join(entries) or "<none>")
    return MappingProxyType(entries)


def data_structure_definition(node: Mapping[str, Any]) -> Mapping[str, Any] | None:
    """Return the refract element wrapped by a ``dataStructure`` node."""
    content = node.get("content")
    if isinstance(content, list) and content and isinstance(content[0], Mapping):
        return content[0]
    if isinstance(content, Mapping):
        return content
    return None


def reachable_names(element: Element, symbol_table: SymbolTable) -> frozenset[str]:
    """Return every symbol-table name rendering ``element`` may visit."""
    reached: set[str] = set()
    pending = list(_referenced_names(element, symbol_table))
    while pending:
        name = pending.pop()
        if name in reached:
            continue
        reached.add(name)
        pending.extend(_referenced_names(symbol_table[name], symbol_table))
    return frozenset(reached)


def find_reference_cycles(symbol_table: SymbolTable) -> frozenset[str]:
    """Return the names of types that reach themselves through references."""
    return frozenset(
        name
        for name, element in symbol_table.items()
        if name in reachable_names(element, symbol_table)
    )


def _referenced_names(element: Element, symbol_table: SymbolTable) -> set[str]:
    names: set[str] = set()
    stack = [element]
    while stack:
        current = stack.pop()
        kind = current.kind
        if kind is None and current.element in symbol_table:
            names.add(current.element)
        elif kind is ElementKind.REFERENCE:
            if isinstance(current.content, str) and current.content in symbol_table:
                names.add(current.content)
            continue
        elif kind is ElementKind.MEMBER:
            value = current.member_value
            if value is not None:
                stack.append(value)
            continue
        stack.extend(current.children)
    return names


def _iter_data_structures(node: Any) -> Iterator[Mapping[str, Any]]:
    if isinstance(node, Mapping):
        if node.get("element") == DATA_STRUCTURE_ELEMENT:
            yield node
            return
        content = node.get("content")
        if isinstance(content, list):
            yield from _iter_data_structures(content)
    elif isinstance(node, list):
        for child in node:
            yield from _iter_data_structures(child)


def _declared_name(definition: Mapping[str, Any]) -> str:
    meta = definition.get("meta")
    name = meta.get("id") if isinstance(meta, Mapping) else None
    if isinstance(name, Mapping):
        name = name.get("content")
    return name if isinstance(name, str) and name else "<unnamed>"
