"""Type inheritance exports."""

from .inheritance_resolver import resolve_inheritance, unique_members
from .mixin_expansion import expand_members
from .symbol_table import (
    build_symbol_table,
    data_structure_definition,
    find_reference_cycles,
    reachable_names,
)

__all__ = [
    "build_symbol_table",
    "data_structure_definition",
    "expand_members",
    "find_reference_cycles",
    "reachable_names",
    "resolve_inheritance",
    "unique_members",
]
