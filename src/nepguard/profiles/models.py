"""Profile models - the declarative shape of a token standard."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Safety(Enum):
    """Required safety classification of a member.

    A ``[Safe]`` member promises not to write storage or emit events. The
    checker only verifies the marker is present or absent.
    """

    SAFE = "safe"
    UNSAFE = "unsafe"
    UNCONSTRAINED = "unconstrained"


class MemberKind(Enum):
    """Kind of a required or declared member."""

    METHOD = "method"
    PROPERTY = "property"
    EVENT = "event"


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    type: str
    name: str  # used for generated stubs only


@dataclass(frozen=True, slots=True)
class OverloadSignature:
    """One acceptable parameter list of a required member."""

    parameters: tuple[ParameterSpec, ...] = ()

    @property
    def types(self) -> tuple[str, ...]:
        return tuple(p.type for p in self.parameters)

    @property
    def arity(self) -> int:
        return len(self.parameters)

    def display(self) -> str:
        return "(" + ", ".join(self.types) + ")"


def sig(*params: tuple[str, str]) -> OverloadSignature:
    """Build a signature from ``(type, name)`` pairs."""
    return OverloadSignature(tuple(ParameterSpec(type=t, name=n) for t, n in params))


@dataclass(frozen=True, slots=True)
class RequiredMember:
    """A member a profile requires.

    Methods carry one signature, or several when ``overloaded``. Properties
    carry a single empty signature and their type in ``return_types``.
    Events carry their ordered parameter types as a single signature.
    """

    name: str
    kind: MemberKind
    signatures: tuple[OverloadSignature, ...] = (OverloadSignature(),)
    return_types: tuple[str, ...] = ("void",)
    safety: Safety = Safety.UNCONSTRAINED
    overloaded: bool = False

    @property
    def return_type(self) -> str:
        """Preferred return type, used for stubs and messages."""
        return self.return_types[0]

    @property
    def signature(self) -> OverloadSignature:
        return self.signatures[0]

    def display_return_types(self) -> str:
        return " or ".join(self.return_types)


@dataclass(frozen=True, slots=True)
class ApplicabilityRule:
    """How a class signals it intends to implement a standard.

    The first base type is the canonical (fully qualified) name inserted by
    fixes; the others are accepted spellings.
    """

    base_types: tuple[str, ...]
    marker_attribute: str
    standard_identifier: str

    @property
    def canonical_base_type(self) -> str:
        return self.base_types[0]

    @property
    def short_base_type(self) -> str:
        return self.canonical_base_type.rsplit(".", 1)[-1]


@dataclass(frozen=True, slots=True)
class Profile:
    """A named token standard: applicability plus required members.

    ``members`` are checked in order; ``payment_hook`` is checked after them
    regardless of their outcome.
    """

    profile_id: str
    standard: str  # display name, e.g. "NEP-17"
    rule_code: str
    title: str
    description: str
    applicability: ApplicabilityRule
    members: tuple[RequiredMember, ...] = field(default_factory=tuple)
    payment_hook: RequiredMember | None = None
    # {standard}, {name} and {noun} ("method", "property" or "event")
    missing_message: str = "Incomplete {standard} implementation: {name} {noun} is missing"

    def all_members(self) -> tuple[RequiredMember, ...]:
        if self.payment_hook is None:
            return self.members
        return (*self.members, self.payment_hook)

    def find_member(self, name: str, kind: MemberKind) -> RequiredMember | None:
        for member in self.all_members():
            if member.name == name and member.kind == kind:
                return member
        return None
