"""Persistent edits over the declaration tree.

An Edit addresses one slot of one class (a base type, an attribute or a
member) and either inserts a node there or replaces the node in it.
Applying an edit copies only the path from the root to that slot; every
other node of the new tree is the very same object as in the old tree.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

from nepguard.tree.models import Attribute, ClassDeclaration, CompilationUnit, Member

EditCollection = Literal["base_types", "attributes", "members"]
EditAction = Literal["insert", "replace"]


@dataclass(frozen=True, slots=True)
class Edit:
    """A single tree edit.

    ``index`` is the insertion position for ``insert`` (``len(collection)``
    appends) and the position of the replaced node for ``replace``.
    """

    class_index: int
    collection: EditCollection
    action: EditAction
    index: int
    node: str | Attribute | Member

    def describe(self, unit: CompilationUnit) -> str:
        cls = unit.classes[self.class_index] if self.class_index < len(unit.classes) else None
        owner = cls.name if cls else f"class #{self.class_index}"
        return f"{self.action} {owner}.{self.collection}[{self.index}]"


def _edit_collection(items: tuple[object, ...], edit: Edit) -> tuple[object, ...]:
    if edit.action == "insert":
        if not 0 <= edit.index <= len(items):
            raise IndexError(f"insert position {edit.index} out of range for {edit.collection}")
        return (*items[: edit.index], edit.node, *items[edit.index :])
    if not 0 <= edit.index < len(items):
        raise IndexError(f"replace position {edit.index} out of range for {edit.collection}")
    return (*items[: edit.index], edit.node, *items[edit.index + 1 :])


def apply_edit(unit: CompilationUnit, edit: Edit) -> CompilationUnit:
    """Return a new unit with ``edit`` applied. ``unit`` is left untouched."""
    cls: ClassDeclaration = unit.classes[edit.class_index]
    items: tuple[object, ...] = getattr(cls, edit.collection)
    new_cls = replace(cls, **{edit.collection: _edit_collection(items, edit)})
    classes = (*unit.classes[: edit.class_index], new_cls, *unit.classes[edit.class_index + 1 :])
    return unit.with_classes(classes)


def apply_edits(unit: CompilationUnit, edits: list[Edit]) -> CompilationUnit:
    """Apply edits in order. Later edits see the result of earlier ones."""
    for edit in edits:
        unit = apply_edit(unit, edit)
    return unit
