"""Fix synthesizer - minimal tree rewrites for single diagnostics.

Each fix kind has two forms: ``plan_<kind>(unit, diagnostic)`` returns the
edits, and ``<kind>(unit, diagnostic)`` returns the edited unit. Plans are
computed against the unit they are given, so a diagnostic that went stale
(the class was renamed, or the member already conforms) plans no edits and
the unit comes back unchanged.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace

import structlog

from nepguard.check.facts import extract_facts
from nepguard.check.matcher import SAFE_ATTRIBUTE, is_applicable
from nepguard.check.models import Finding, FindingKind
from nepguard.diagnostics.models import Diagnostic
from nepguard.fixes.models import FixKind
from nepguard.fixes.stubs import event_stub, method_stub, property_stub
from nepguard.profiles.models import MemberKind, Profile, RequiredMember
from nepguard.profiles.registry import registry
from nepguard.tree.edits import Edit, apply_edits
from nepguard.tree.models import (
    Attribute,
    ClassDeclaration,
    CompilationUnit,
    EventDeclaration,
    Member,
    MethodDeclaration,
    PropertyDeclaration,
)

logger = structlog.get_logger()

Plan = Callable[[CompilationUnit, Diagnostic], list[Edit]]

_MEMBER_TYPES: dict[MemberKind, type] = {
    MemberKind.METHOD: MethodDeclaration,
    MemberKind.PROPERTY: PropertyDeclaration,
    MemberKind.EVENT: EventDeclaration,
}


# =============================================================================
# Locating targets
# =============================================================================


def _locate_class(unit: CompilationUnit, diagnostic: Diagnostic) -> int | None:
    if diagnostic.class_name:
        return unit.class_index(diagnostic.class_name)
    if len(unit.classes) == 1:
        return 0
    return None


def _locate_member(cls: ClassDeclaration, finding: Finding) -> int | None:
    """Find the member a finding is about.

    Matches kind and name, then arity for methods. Among several same-arity
    overloads the one whose parameter types were recorded wins; otherwise
    the first declared.
    """
    if finding.member_kind is None:
        return None
    node_type = _MEMBER_TYPES[finding.member_kind]
    fallback = None
    for index, member in enumerate(cls.members):
        if not isinstance(member, node_type) or member.name != finding.member_name:
            continue
        if not isinstance(member, MethodDeclaration):
            return index
        if finding.arity is not None and member.arity != finding.arity:
            continue
        if finding.candidate_types is None or member.parameter_types == finding.candidate_types:
            return index
        if fallback is None:
            fallback = index
    return fallback


def _profile_of(diagnostic: Diagnostic) -> Profile:
    return registry.require(diagnostic.finding.profile_id)


def _requirement_of(finding: Finding) -> RequiredMember | None:
    if finding.member_kind is None:
        return None
    return registry.require(finding.profile_id).find_member(finding.member_name, finding.member_kind)


# =============================================================================
# Applicability
# =============================================================================


def plan_add_base_type(unit: CompilationUnit, diagnostic: Diagnostic) -> list[Edit]:
    class_index = _locate_class(unit, diagnostic)
    if class_index is None:
        return []
    cls = unit.classes[class_index]
    profile = _profile_of(diagnostic)
    if is_applicable(extract_facts(cls), profile):
        return []
    rule = profile.applicability
    return [
        Edit(
            class_index=class_index,
            collection="base_types",
            action="insert",
            index=len(cls.base_types),
            node=rule.canonical_base_type,
        )
    ]


def plan_add_marker_attribute(unit: CompilationUnit, diagnostic: Diagnostic) -> list[Edit]:
    class_index = _locate_class(unit, diagnostic)
    if class_index is None:
        return []
    cls = unit.classes[class_index]
    profile = _profile_of(diagnostic)
    if is_applicable(extract_facts(cls), profile):
        return []
    rule = profile.applicability
    return [
        Edit(
            class_index=class_index,
            collection="attributes",
            action="insert",
            index=len(cls.attributes),
            node=Attribute(rule.marker_attribute, (rule.standard_identifier,)),
        )
    ]


# =============================================================================
# Member stubs
# =============================================================================


def _has_arity(cls: ClassDeclaration, name: str, arity: int) -> bool:
    return any(m.name == name and m.arity == arity for m in cls.methods())


def _stub_members(cls: ClassDeclaration, finding: Finding, requirement: RequiredMember) -> list[Member]:
    if requirement.kind == MemberKind.PROPERTY:
        if any(p.name == requirement.name for p in cls.properties()):
            return []
        return [property_stub(requirement)]

    if finding.kind == FindingKind.MISSING and finding.signature_index is not None:
        indices = [finding.signature_index]
    else:
        indices = list(range(len(requirement.signatures)))

    stubs: list[Member] = []
    for index in indices:
        if index >= len(requirement.signatures):
            continue
        signature = requirement.signatures[index]
        if not _has_arity(cls, requirement.name, signature.arity):
            stubs.append(method_stub(requirement, signature))
    return stubs


def _plan_event(class_index: int, cls: ClassDeclaration, requirement: RequiredMember) -> list[Edit]:
    expected = requirement.signature.types
    events = [(i, m) for i, m in enumerate(cls.members) if isinstance(m, EventDeclaration)]
    same_name = [(i, e) for i, e in events if e.name == requirement.name]
    if any(e.type_kind == "function_pointer" and e.parameter_types == expected for _, e in same_name):
        return []
    if same_name:
        index, existing = same_name[0]
        fixed = replace(
            existing,
            type_kind="function_pointer",
            parameter_types=expected,
            type_name=None,
        )
        return [Edit(class_index, "members", "replace", index, fixed)]
    return [Edit(class_index, "members", "insert", len(cls.members), event_stub(requirement))]


def plan_add_member_stub(unit: CompilationUnit, diagnostic: Diagnostic) -> list[Edit]:
    finding = diagnostic.finding
    class_index = _locate_class(unit, diagnostic)
    requirement = _requirement_of(finding)
    if class_index is None or requirement is None:
        return []
    cls = unit.classes[class_index]

    if requirement.kind == MemberKind.EVENT:
        return _plan_event(class_index, cls, requirement)

    edits = []
    position = len(cls.members)
    for stub in _stub_members(cls, finding, requirement):
        edits.append(Edit(class_index, "members", "insert", position, stub))
        position += 1
    return edits


# =============================================================================
# Safety marker
# =============================================================================


def _with_marker(attributes: tuple[Attribute, ...], present: bool) -> tuple[Attribute, ...] | None:
    """New attribute tuple with the marker added or removed; None if unchanged."""
    has_marker = any(a.name == SAFE_ATTRIBUTE for a in attributes)
    if has_marker == present:
        return None
    if present:
        return (*attributes, Attribute(SAFE_ATTRIBUTE))
    return tuple(a for a in attributes if a.name != SAFE_ATTRIBUTE)


def _plan_safe_marker(unit: CompilationUnit, diagnostic: Diagnostic, present: bool) -> list[Edit]:
    class_index = _locate_class(unit, diagnostic)
    if class_index is None:
        return []
    cls = unit.classes[class_index]
    member_index = _locate_member(cls, diagnostic.finding)
    if member_index is None:
        return []
    member = cls.members[member_index]

    if isinstance(member, PropertyDeclaration):
        getter = member.getter
        if getter is None:
            return []
        attributes = _with_marker(getter.attributes, present)
        if attributes is None:
            return []
        accessors = tuple(
            replace(a, attributes=attributes) if a is getter else a for a in member.accessors
        )
        updated: Member = replace(member, accessors=accessors)
    else:
        attributes = _with_marker(member.attributes, present)
        if attributes is None:
            return []
        updated = replace(member, attributes=attributes)

    return [Edit(class_index, "members", "replace", member_index, updated)]


def plan_add_safe_marker(unit: CompilationUnit, diagnostic: Diagnostic) -> list[Edit]:
    return _plan_safe_marker(unit, diagnostic, present=True)


def plan_remove_safe_marker(unit: CompilationUnit, diagnostic: Diagnostic) -> list[Edit]:
    return _plan_safe_marker(unit, diagnostic, present=False)


# =============================================================================
# Entry points
# =============================================================================

PLANS: dict[FixKind, Plan] = {
    FixKind.ADD_BASE_TYPE: plan_add_base_type,
    FixKind.ADD_MARKER_ATTRIBUTE: plan_add_marker_attribute,
    FixKind.ADD_MEMBER_STUB: plan_add_member_stub,
    FixKind.ADD_SAFE_MARKER: plan_add_safe_marker,
    FixKind.REMOVE_SAFE_MARKER: plan_remove_safe_marker,
}


def plan(unit: CompilationUnit, diagnostic: Diagnostic, kind: FixKind) -> list[Edit]:
    edits = PLANS[kind](unit, diagnostic)
    logger.debug(
        "fix_planned",
        kind=kind.value,
        cls=diagnostic.class_name,
        member=diagnostic.finding.member_name,
        edits=len(edits),
    )
    return edits


def synthesize(unit: CompilationUnit, diagnostic: Diagnostic, kind: FixKind) -> CompilationUnit:
    """Apply one fix kind for one diagnostic. Returns ``unit`` itself if nothing changes."""
    edits = plan(unit, diagnostic, kind)
    if not edits:
        return unit
    return apply_edits(unit, edits)


def add_base_type(unit: CompilationUnit, diagnostic: Diagnostic) -> CompilationUnit:
    return synthesize(unit, diagnostic, FixKind.ADD_BASE_TYPE)


def add_marker_attribute(unit: CompilationUnit, diagnostic: Diagnostic) -> CompilationUnit:
    return synthesize(unit, diagnostic, FixKind.ADD_MARKER_ATTRIBUTE)


def add_member_stub(unit: CompilationUnit, diagnostic: Diagnostic) -> CompilationUnit:
    return synthesize(unit, diagnostic, FixKind.ADD_MEMBER_STUB)


def add_safe_marker(unit: CompilationUnit, diagnostic: Diagnostic) -> CompilationUnit:
    return synthesize(unit, diagnostic, FixKind.ADD_SAFE_MARKER)


def remove_safe_marker(unit: CompilationUnit, diagnostic: Diagnostic) -> CompilationUnit:
    return synthesize(unit, diagnostic, FixKind.REMOVE_SAFE_MARKER)
