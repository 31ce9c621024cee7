"""Request/response payload discovery in API descriptions."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from mson_render.type_inheritance.symbol_table import (
    DATA_STRUCTURE_ELEMENT,
    data_structure_definition,
)

from .payload_contracts import PayloadDirection, PayloadLocation

_DIRECTION_KEYS: tuple[tuple[str, PayloadDirection], ...] = (
    ("requests", PayloadDirection.REQUEST),
    ("responses", PayloadDirection.RESPONSE),
)


def discover_payloads(api_description: Mapping[str, Any]) -> tuple[PayloadLocation, ...]:
    """Return every request and response declared under the resource groups."""
    return tuple(_iter_payloads(api_description))


def _iter_payloads(api_description: Mapping[str, Any]) -> Iterator[PayloadLocation]:
    for group in _mappings(api_description.get("resourceGroups")):
        for resource in _mappings(group.get("resources")):
            resource_name = resource.get("name") or resource.get("uriTemplate")
            for action in _mappings(resource.get("actions")):
                prefix = _label(group.get("name"), resource_name, action.get("method"))
                for example in _mappings(action.get("examples")):
                    for key, direction in _DIRECTION_KEYS:
                        for index, item in enumerate(_mappings(example.get(key)), start=1):
                            label = f"{prefix} / {direction.value} {index}"
                            yield _build_location(item, label, direction)


def _build_location(
    item: Mapping[str, Any], label: str, direction: PayloadDirection
) -> PayloadLocation:
    data_structure = None
    # The last data structure of a payload wins.
    for node in _mappings(item.get("content")):
        if node.get("element") == DATA_STRUCTURE_ELEMENT:
            data_structure = data_structure_definition(node)
    return PayloadLocation(
        label=label,
        direction=direction,
        data_structure=data_structure,
        provided_schema=_non_empty_text(item.get("schema")),
        provided_body=_non_empty_text(item.get("body")),
    )


def _label(*parts: Any) -> str:
    named = [str(part).strip() for part in parts if isinstance(part, str) and part.strip()]
    return " / ".join(named) if named else "(unnamed)"


def _mappings(value: Any) -> Iterator[Mapping[str, Any]]:
    if isinstance(value, Sequence) and not isinstance(value, str):
        for item in value:
            if isinstance(item, Mapping):
                yield item


def _non_empty_text(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None
