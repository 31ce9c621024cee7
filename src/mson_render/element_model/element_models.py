"""Refracted MSON element entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ElementKind(str, Enum):
    """Element discriminators the renderers understand natively."""

    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER = "number"
    ENUM = "enum"
    ARRAY = "array"
    OBJECT = "object"
    OPTION_SET = "select"
    OPTION = "option"
    MEMBER = "member"
    REFERENCE = "ref"


PRIMITIVE_KINDS: frozenset[ElementKind] = frozenset(
    {ElementKind.BOOLEAN, ElementKind.STRING, ElementKind.NUMBER}
)

_KIND_ALIASES: Mapping[str, ElementKind] = {
    "option-set": ElementKind.OPTION_SET,
    "reference": ElementKind.REFERENCE,
}


def kind_of(name: str) -> ElementKind | None:
    """Return the native kind for an element name, or None for a named type."""
    alias = _KIND_ALIASES.get(name)
    if alias is not None:
        return alias
    try:
        return ElementKind(name)
    except ValueError:
        return None


@dataclass(frozen=True)
class MemberContent:
    """Key/value pair carried by a member element."""

    key: Element
    value: Element | None


@dataclass(frozen=True)
class Element:
    """One node of a refracted data structure tree.

    ``content`` is a scalar for primitives, a tuple of child elements for
    collections, a ``MemberContent`` for members and the target name for
    references. ``None`` means the element declares no content.
    """

    element: str
    content: Any = None
    meta: Mapping[str, Any] = field(default_factory=dict)
    attributes: Mapping[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> ElementKind | None:
        return kind_of(self.element)

    @property
    def description(self) -> str | None:
        return self.meta.get("description")

    @property
    def type_attributes(self) -> tuple[str, ...]:
        flags = self.attributes.get("typeAttributes") or ()
        if isinstance(flags, str):
            return (flags,)
        return tuple(flags)

    def has_type_attribute(self, flag: str) -> bool:
        return flag in self.type_attributes

    @property
    def children(self) -> tuple[Element, ...]:
        """Child elements, or an empty tuple when content is not collection-shaped."""
        if isinstance(self.content, tuple):
            return self.content
        return ()

    @property
    def member_key(self) -> str | None:
        """Textual key of a member element."""
        if isinstance(self.content, MemberContent):
            key = self.content.key.content
            return None if key is None else str(key)
        return None

    @property
    def member_value(self) -> Element | None:
        if isinstance(self.content, MemberContent):
            return self.content.value
        return None


SymbolTable = Mapping[str, Element]
