"""Render JSON Schemas and example bodies from refracted MSON data structures."""

import logging

from .element_model import Element, ElementKind, MemberContent, parse_element
from .example_rendering import render_example
from .schema_rendering import render_schema
from .type_inheritance import build_symbol_table, resolve_inheritance

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Element",
    "ElementKind",
    "MemberContent",
    "build_symbol_table",
    "parse_element",
    "render_example",
    "render_schema",
    "resolve_inheritance",
]
