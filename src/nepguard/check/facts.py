"""Class facts - the flattened view of a class the matcher works on."""

from __future__ import annotations

from dataclasses import dataclass

from nepguard.core.errors import TreeError
from nepguard.profiles.models import MemberKind
from nepguard.tree.models import (
    ClassDeclaration,
    EventDeclaration,
    MethodDeclaration,
    PropertyDeclaration,
)


@dataclass(frozen=True, slots=True)
class DeclaredMember:
    """A method, property or event as declared on the class.

    For properties ``attributes`` are those of the getter, where the safety
    marker lives, and ``return_type`` is the property type.
    """

    name: str
    kind: MemberKind
    parameter_types: tuple[str, ...] = ()
    return_type: str | None = None
    attributes: frozenset[str] = frozenset()
    has_getter: bool = False
    is_function_pointer: bool = False
    type_name: str | None = None  # delegate events only

    @property
    def arity(self) -> int:
        return len(self.parameter_types)


@dataclass(frozen=True, slots=True)
class ClassFacts:
    name: str
    base_types: frozenset[str]
    marker_attributes: frozenset[tuple[str, str]]  # (name, argument text)
    members: tuple[DeclaredMember, ...]

    def methods_named(self, name: str) -> list[DeclaredMember]:
        return [m for m in self.members if m.kind == MemberKind.METHOD and m.name == name]

    def property_named(self, name: str) -> DeclaredMember | None:
        for member in self.members:
            if member.kind == MemberKind.PROPERTY and member.name == name:
                return member
        return None

    def events_named(self, name: str) -> list[DeclaredMember]:
        return [m for m in self.members if m.kind == MemberKind.EVENT and m.name == name]


def _attribute_names(attributes) -> frozenset[str]:
    return frozenset(a.name for a in attributes)


def extract_facts(cls: ClassDeclaration) -> ClassFacts:
    """Derive facts from a class node.

    Raises:
        TreeError: A function-pointer event carries no parameter list.
    """
    members: list[DeclaredMember] = []
    for member in cls.members:
        if isinstance(member, MethodDeclaration):
            members.append(
                DeclaredMember(
                    name=member.name,
                    kind=MemberKind.METHOD,
                    parameter_types=member.parameter_types,
                    return_type=member.return_type,
                    attributes=_attribute_names(member.attributes),
                )
            )
        elif isinstance(member, PropertyDeclaration):
            getter = member.getter
            members.append(
                DeclaredMember(
                    name=member.name,
                    kind=MemberKind.PROPERTY,
                    return_type=member.type,
                    attributes=_attribute_names(getter.attributes) if getter else frozenset(),
                    has_getter=getter is not None,
                )
            )
        elif isinstance(member, EventDeclaration):
            is_function_pointer = member.type_kind == "function_pointer"
            if is_function_pointer and member.parameter_types is None:
                raise TreeError.malformed(
                    f"{cls.name}.{member.name}",
                    "function pointer event has no parameter type list",
                )
            members.append(
                DeclaredMember(
                    name=member.name,
                    kind=MemberKind.EVENT,
                    parameter_types=member.parameter_types or (),
                    attributes=_attribute_names(member.attributes),
                    is_function_pointer=is_function_pointer,
                    type_name=member.type_name,
                )
            )
        # Fields never satisfy a requirement

    return ClassFacts(
        name=cls.name,
        base_types=frozenset(cls.base_types),
        marker_attributes=frozenset((a.name, a.argument_text) for a in cls.attributes),
        members=tuple(members),
    )
