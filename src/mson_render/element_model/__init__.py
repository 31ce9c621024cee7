"""Element model exports."""

from .element_models import (
    PRIMITIVE_KINDS,
    Element,
    ElementKind,
    MemberContent,
    SymbolTable,
    kind_of,
)
from .refract_parsing import ElementFormatError, parse_element

__all__ = [
    "Element",
    "ElementKind",
    "ElementFormatError",
    "MemberContent",
    "PRIMITIVE_KINDS",
    "SymbolTable",
    "kind_of",
    "parse_element",
]
