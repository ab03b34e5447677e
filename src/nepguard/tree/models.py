"""Declaration tree models.

The tree is produced by a parser collaborator (or loaded from its YAML/JSON
dump, see schema.py) and is read-only: every node is a frozen dataclass and
every child collection is a tuple. Fixes build new trees that share all
untouched nodes with the original (see edits.py).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

AccessorKind = Literal["get", "set", "init"]
EventTypeKind = Literal["function_pointer", "delegate"]


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """A source range. Lines and columns are 1-based."""

    path: str = ""
    start_line: int = 0
    start_column: int = 0
    end_line: int = 0
    end_column: int = 0

    def __str__(self) -> str:
        if self.start_column:
            return f"{self.path}:{self.start_line}:{self.start_column}"
        return f"{self.path}:{self.start_line}"


@dataclass(frozen=True, slots=True)
class Attribute:
    """An attribute usage, e.g. ``[SupportedStandards(NepStandard.Nep17)]``."""

    name: str
    arguments: tuple[str, ...] = ()

    @property
    def argument_text(self) -> str:
        return ", ".join(self.arguments)


@dataclass(frozen=True, slots=True)
class Parameter:
    type: str
    name: str


@dataclass(frozen=True, slots=True)
class Accessor:
    """Property accessor. ``body`` is the expression or block text, if any."""

    kind: AccessorKind
    attributes: tuple[Attribute, ...] = ()
    body: str | None = None


@dataclass(frozen=True, slots=True)
class MethodDeclaration:
    name: str
    return_type: str
    parameters: tuple[Parameter, ...] = ()
    attributes: tuple[Attribute, ...] = ()
    modifiers: tuple[str, ...] = ()
    body: str | None = None
    span: SourceSpan | None = None

    @property
    def arity(self) -> int:
        return len(self.parameters)

    @property
    def parameter_types(self) -> tuple[str, ...]:
        return tuple(p.type for p in self.parameters)


@dataclass(frozen=True, slots=True)
class PropertyDeclaration:
    name: str
    type: str
    accessors: tuple[Accessor, ...] = ()
    attributes: tuple[Attribute, ...] = ()
    modifiers: tuple[str, ...] = ()
    span: SourceSpan | None = None

    @property
    def getter(self) -> Accessor | None:
        for accessor in self.accessors:
            if accessor.kind == "get":
                return accessor
        return None


@dataclass(frozen=True, slots=True)
class EventDeclaration:
    """Event field declaration.

    A ``function_pointer`` event (``delegate*<...>``) must carry its
    ``parameter_types``; a ``delegate`` event names its delegate type in
    ``type_name`` instead.
    """

    name: str
    type_kind: EventTypeKind = "function_pointer"
    parameter_types: tuple[str, ...] | None = None
    type_name: str | None = None
    attributes: tuple[Attribute, ...] = ()
    modifiers: tuple[str, ...] = ()
    span: SourceSpan | None = None


@dataclass(frozen=True, slots=True)
class FieldDeclaration:
    name: str
    type: str
    attributes: tuple[Attribute, ...] = ()
    modifiers: tuple[str, ...] = ()
    span: SourceSpan | None = None


Member = MethodDeclaration | PropertyDeclaration | EventDeclaration | FieldDeclaration


@dataclass(frozen=True, slots=True)
class ClassDeclaration:
    name: str
    base_types: tuple[str, ...] = ()
    attributes: tuple[Attribute, ...] = ()
    members: tuple[Member, ...] = ()
    modifiers: tuple[str, ...] = ()
    span: SourceSpan | None = None
    identifier_span: SourceSpan | None = None

    @property
    def location(self) -> SourceSpan | None:
        """Where diagnostics for this class are anchored."""
        return self.identifier_span or self.span

    def methods(self) -> list[MethodDeclaration]:
        return [m for m in self.members if isinstance(m, MethodDeclaration)]

    def properties(self) -> list[PropertyDeclaration]:
        return [m for m in self.members if isinstance(m, PropertyDeclaration)]

    def events(self) -> list[EventDeclaration]:
        return [m for m in self.members if isinstance(m, EventDeclaration)]


@dataclass(frozen=True, slots=True)
class CompilationUnit:
    """Root of a declaration tree: one source file."""

    path: str = ""
    usings: tuple[str, ...] = ()
    namespace: str | None = None
    classes: tuple[ClassDeclaration, ...] = ()

    def find_class(self, name: str) -> ClassDeclaration | None:
        for cls in self.classes:
            if cls.name == name:
                return cls
        return None

    def class_index(self, name: str) -> int | None:
        for i, cls in enumerate(self.classes):
            if cls.name == name:
                return i
        return None

    def with_classes(self, classes: tuple[ClassDeclaration, ...]) -> CompilationUnit:
        return replace(self, classes=classes)
