"""Refract JSON to element model parsing."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .element_models import Element, ElementKind, MemberContent, kind_of


class ElementFormatError(Exception):
    """Raised when a refract node cannot be turned into an element."""


def parse_element(node: Any) -> Element:
    """Parse one refract mapping (and its subtree) into an ``Element``."""
    if not isinstance(node, Mapping):
        raise ElementFormatError(f"Refract elements must be objects, got {type(node).__name__}.")
    name = node.get("element")
    if not isinstance(name, str) or not name:
        raise ElementFormatError("Refract element is missing its 'element' name.")

    meta = _parse_properties(node.get("meta"), "meta")
    attributes = _parse_properties(node.get("attributes"), "attributes")
    if "typeAttributes" in attributes:
        attributes["typeAttributes"] = _normalize_type_attributes(attributes["typeAttributes"])

    return Element(
        element=name,
        content=_parse_content(kind_of(name), node.get("content")),
        meta=meta,
        attributes=attributes,
    )


def _parse_content(kind: ElementKind | None, raw: Any) -> Any:
    if raw is None:
        return None
    if kind is ElementKind.MEMBER:
        return _parse_member_content(raw)
    if kind is ElementKind.REFERENCE:
        return _parse_reference_target(raw)
    if isinstance(raw, list):
        return tuple(parse_element(child) for child in raw)
    if isinstance(raw, Mapping) and "element" in raw:
        # A lone wrapped child is treated as a one-element collection.
        return (parse_element(raw),)
    return raw


def _parse_member_content(raw: Any) -> MemberContent:
    if not isinstance(raw, Mapping):
        raise ElementFormatError("Member content must be an object with key and value.")
    key = raw.get("key")
    if key is None:
        raise ElementFormatError("Member content requires a key element.")
    value = raw.get("value")
    return MemberContent(
        key=parse_element(key),
        value=None if value is None else parse_element(value),
    )


def _parse_reference_target(raw: Any) -> str:
    if isinstance(raw, str):
        return raw
    if isinstance(raw, Mapping) and isinstance(raw.get("href"), str):
        return raw["href"]
    raise ElementFormatError("Reference content requires an href target.")


def _parse_properties(value: Any, label: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ElementFormatError(f"Refract {label} must be an object.")
    return {str(key): _plain_value(item) for key, item in value.items()}


def _plain_value(value: Any) -> Any:
    """Unwrap refract-wrapped values such as ``{"element": "string", "content": "x"}``."""
    if isinstance(value, Mapping) and "element" in value and set(value) <= {
        "element",
        "content",
        "meta",
        "attributes",
    }:
        return _plain_value(value.get("content"))
    if isinstance(value, list):
        return [_plain_value(item) for item in value]
    if isinstance(value, Mapping):
        return {str(key): _plain_value(item) for key, item in value.items()}
    return value


def _normalize_type_attributes(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Sequence):
        return tuple(str(flag) for flag in value if flag is not None)
    raise ElementFormatError("typeAttributes must be a list of flags.")
