"""Stub construction for missing members."""

from __future__ import annotations

from nepguard.check.matcher import SAFE_ATTRIBUTE
from nepguard.profiles.models import OverloadSignature, RequiredMember, Safety
from nepguard.tree.models import (
    Accessor,
    Attribute,
    EventDeclaration,
    MethodDeclaration,
    Parameter,
    PropertyDeclaration,
)

METHOD_MODIFIERS = ("public", "static")
PROPERTY_MODIFIERS = ("public",)
EVENT_MODIFIERS = ("public", "static")

_DEFAULT_VALUES: dict[str, str] = {
    "bool": "false",
    "byte": "0",
    "sbyte": "0",
    "short": "0",
    "ushort": "0",
    "int": "0",
    "uint": "0",
    "long": "0",
    "ulong": "0",
    "BigInteger": "0",
    "string": '""',
    "UInt160": "UInt160.Zero",
}


def default_value(type_name: str) -> str:
    """Trivial value of ``type_name`` for a stub body."""
    return _DEFAULT_VALUES.get(type_name, "default")


def _safety_attributes(requirement: RequiredMember) -> tuple[Attribute, ...]:
    if requirement.safety == Safety.SAFE:
        return (Attribute(SAFE_ATTRIBUTE),)
    return ()


def method_stub(requirement: RequiredMember, signature: OverloadSignature) -> MethodDeclaration:
    return_type = requirement.return_type
    body = "" if return_type == "void" else f"return {default_value(return_type)};"
    return MethodDeclaration(
        name=requirement.name,
        return_type=return_type,
        parameters=tuple(Parameter(type=p.type, name=p.name) for p in signature.parameters),
        attributes=_safety_attributes(requirement),
        modifiers=METHOD_MODIFIERS,
        body=body,
    )


def property_stub(requirement: RequiredMember) -> PropertyDeclaration:
    """Read-only property whose getter carries the safety marker."""
    getter = Accessor(
        kind="get",
        attributes=_safety_attributes(requirement),
        body=default_value(requirement.return_type),
    )
    return PropertyDeclaration(
        name=requirement.name,
        type=requirement.return_type,
        accessors=(getter,),
        modifiers=PROPERTY_MODIFIERS,
    )


def event_stub(requirement: RequiredMember) -> EventDeclaration:
    return EventDeclaration(
        name=requirement.name,
        type_kind="function_pointer",
        parameter_types=requirement.signature.types,
        modifiers=EVENT_MODIFIERS,
    )
