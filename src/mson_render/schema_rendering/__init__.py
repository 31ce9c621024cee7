"""Schema rendering exports."""

from .schema_equality import all_schemas_equal, schemas_equal
from .schema_renderer import render_schema, widen_nullable

__all__ = [
    "all_schemas_equal",
    "render_schema",
    "schemas_equal",
    "widen_nullable",
]
