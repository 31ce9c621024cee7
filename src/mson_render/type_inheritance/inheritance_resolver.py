"""Named type inheritance.

A derived type may override attributes, descriptions and members of its base
type. For example the ``id`` member below becomes a string in ``Another Type``::

    # My Type
    + id (number)
    + name (string)

    # Another Type (My Type)
    + id (string)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from copy import deepcopy
from typing import Any

from mson_render.element_model.element_models import Element, ElementKind


def resolve_inheritance(base: Element, derived: Element) -> Element:
    """Return a new element combining ``derived`` overrides onto ``base``."""
    meta = _overwrite_by_key(base.meta, derived.meta)
    attributes = _overwrite_by_key(base.attributes, derived.attributes)
    return Element(
        element=base.element,
        content=_combine_content(deepcopy(base.content), deepcopy(derived.content)),
        meta=meta,
        attributes=attributes,
    )


def unique_members(children: Sequence[Element]) -> tuple[Element, ...]:
    """Drop duplicate member keys; the last definition wins at the first position.

    Elements that are not members (mixins, option sets) keep their position.
    """
    slots: dict[object, Element] = {}
    for index, child in enumerate(children):
        key = child.member_key if child.kind is ElementKind.MEMBER else None
        slots[("member", key) if key is not None else ("position", index)] = child
    return tuple(slots.values())


def _overwrite_by_key(base: Mapping[str, Any], derived: Mapping[str, Any]) -> dict[str, Any]:
    combined = deepcopy(dict(base))
    for key, value in derived.items():
        combined[key] = deepcopy(value)
    return combined


def _combine_content(base: Any, derived: Any) -> Any:
    if derived is None:
        return base
    if base is None:
        return derived
    if isinstance(base, tuple) and isinstance(derived, tuple):
        children = base + derived
        if children and children[0].kind is ElementKind.MEMBER:
            return unique_members(children)
        return children
    # Scalars and mismatched shapes fall back to overwriting.
    return derived
