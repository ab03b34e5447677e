"""Fix models - the fix menu and fix results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from nepguard.diagnostics.models import Diagnostic
from nepguard.tree.edits import Edit
from nepguard.tree.models import CompilationUnit


class FixKind(Enum):
    """Kinds of fixes. Each kind has its own entry point in synthesizer.py."""

    ADD_BASE_TYPE = "add_base_type"
    ADD_MARKER_ATTRIBUTE = "add_marker_attribute"
    ADD_MEMBER_STUB = "add_member_stub"
    ADD_SAFE_MARKER = "add_safe_marker"
    REMOVE_SAFE_MARKER = "remove_safe_marker"


@dataclass(frozen=True, slots=True)
class CodeFix:
    """One entry of the fix menu offered for a diagnostic."""

    kind: FixKind
    title: str
    diagnostic: Diagnostic


@dataclass(frozen=True, slots=True)
class FixResult:
    """Outcome of applying a fix.

    ``applied`` is False when the target was already conformant or could no
    longer be located; ``unit`` is then the input unit itself.
    """

    unit: CompilationUnit
    applied: bool
    edits: tuple[Edit, ...] = ()
    diff: str = ""
    fixes: list[CodeFix] = field(default_factory=list)  # fixes applied, in order

    @property
    def edit_count(self) -> int:
        return len(self.edits)
