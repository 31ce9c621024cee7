"""Structural equality over rendered schema values."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def schemas_equal(left: Any, right: Any) -> bool:
    """Compare two schema values structurally.

    Mappings compare by key set and value, sequences element-wise in order.
    Booleans never equal numbers, unlike plain ``==`` in Python.
    """
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        if left.keys() != right.keys():
            return False
        return all(schemas_equal(left[key], right[key]) for key in left)
    if _is_sequence(left) and _is_sequence(right):
        if len(left) != len(right):
            return False
        return all(schemas_equal(item_l, item_r) for item_l, item_r in zip(left, right))
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if _is_number(left) and _is_number(right):
        return left == right
    return type(left) is type(right) and left == right


def all_schemas_equal(schemas: Sequence[Any]) -> bool:
    """Return True when every schema equals the first one."""
    return all(schemas_equal(schemas[0], other) for other in schemas[1:])


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float))
