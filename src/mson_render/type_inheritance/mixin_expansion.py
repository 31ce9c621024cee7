"""Positional expansion of mixin references inside member lists."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator

from mson_render.element_model.element_models import Element, ElementKind, SymbolTable


def expand_members(members: Iterable[Element], symbol_table: SymbolTable) -> Iterator[Element]:
    """Yield members in order, replacing each ``ref`` with the referenced type's members.

    Expanded members are scanned again, so a mixin may itself include mixins.
    Unresolved references contribute nothing.
    """
    pending = deque(members)
    while pending:
        member = pending.popleft()
        if member.kind is ElementKind.REFERENCE:
            target = symbol_table.get(member.content) if isinstance(member.content, str) else None
            if target is not None:
                pending.extendleft(reversed(target.children))
            continue
        yield member
