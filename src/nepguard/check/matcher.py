"""Structural matcher - compare class facts against a profile.

``check`` is a pure function of its inputs. Absent or mismatched members
are reported as findings and never raise.

Methods are resolved one required signature at a time:

1. An exact candidate (same name, arity and parameter types, acceptable
   return type) satisfies the signature; only its safety is checked.
2. Otherwise the first same-arity candidate is compared field by field
   and every difference is reported.
3. A signature with no same-arity candidate is unresolved. How unresolved
   signatures are reported depends on whether the requirement is
   overloaded (see ``_report_unresolved``).
"""

from __future__ import annotations

import structlog

from nepguard.check.facts import ClassFacts, DeclaredMember
from nepguard.check.models import Finding, FindingKind
from nepguard.profiles.models import MemberKind, Profile, RequiredMember, Safety

logger = structlog.get_logger()

SAFE_ATTRIBUTE = "Safe"


def is_applicable(facts: ClassFacts, profile: Profile) -> bool:
    """Whether the class signals intent to implement the profile."""
    rule = profile.applicability
    if any(base in facts.base_types for base in rule.base_types):
        return True
    return any(
        name == rule.marker_attribute and rule.standard_identifier in arguments
        for name, arguments in facts.marker_attributes
    )


def check(facts: ClassFacts, profile: Profile) -> list[Finding]:
    """Check one class against one profile.

    Returns findings in profile declaration order; an empty list means the
    class is compliant. A class that is not applicable gets exactly one
    ``MISSING_APPLICABILITY_MARKER`` and no member findings.
    """
    if not is_applicable(facts, profile):
        logger.debug("profile_not_applicable", cls=facts.name, profile=profile.profile_id)
        return [
            Finding(
                profile_id=profile.profile_id,
                member_name=facts.name,
                kind=FindingKind.MISSING_APPLICABILITY_MARKER,
            )
        ]

    findings: list[Finding] = []
    for requirement in profile.all_members():
        if requirement.kind == MemberKind.METHOD:
            findings.extend(_check_method(facts, profile, requirement))
        elif requirement.kind == MemberKind.PROPERTY:
            findings.extend(_check_property(facts, profile, requirement))
        else:
            findings.extend(_check_event(facts, profile, requirement))

    logger.debug(
        "profile_check_complete",
        cls=facts.name,
        profile=profile.profile_id,
        findings=len(findings),
    )
    return findings


# =============================================================================
# Safety
# =============================================================================


def _check_safety(
    profile: Profile,
    requirement: RequiredMember,
    member: DeclaredMember,
) -> Finding | None:
    if requirement.safety == Safety.UNCONSTRAINED:
        return None
    has_marker = SAFE_ATTRIBUTE in member.attributes
    if has_marker == (requirement.safety == Safety.SAFE):
        return None
    return Finding(
        profile_id=profile.profile_id,
        member_name=requirement.name,
        kind=FindingKind.WRONG_SAFETY,
        member_kind=requirement.kind,
        arity=member.arity,
        candidate_types=member.parameter_types,
        expected_safety=requirement.safety,
        expected=requirement.safety.value,
        found=Safety.SAFE.value if has_marker else Safety.UNSAFE.value,
    )


# =============================================================================
# Methods
# =============================================================================


def _is_exact(member: DeclaredMember, requirement: RequiredMember, types: tuple[str, ...]) -> bool:
    return member.parameter_types == types and member.return_type in requirement.return_types


def _resolve(
    candidates: list[DeclaredMember],
    requirement: RequiredMember,
    types: tuple[str, ...],
) -> tuple[DeclaredMember | None, bool]:
    """Pick the candidate for one signature. Returns (candidate, exact)."""
    for candidate in candidates:
        if _is_exact(candidate, requirement, types):
            return candidate, True
    for candidate in candidates:
        if candidate.arity == len(types):
            return candidate, False
    return None, False


def _compare_candidate(
    profile: Profile,
    requirement: RequiredMember,
    candidate: DeclaredMember,
    types: tuple[str, ...],
) -> list[Finding]:
    findings: list[Finding] = []
    if candidate.return_type not in requirement.return_types:
        findings.append(
            Finding(
                profile_id=profile.profile_id,
                member_name=requirement.name,
                kind=FindingKind.WRONG_RETURN_TYPE,
                member_kind=MemberKind.METHOD,
                arity=candidate.arity,
                candidate_types=candidate.parameter_types,
                expected=requirement.display_return_types(),
                found=candidate.return_type,
            )
        )
    for i, (expected, found) in enumerate(zip(types, candidate.parameter_types, strict=True)):
        if expected != found:
            findings.append(
                Finding(
                    profile_id=profile.profile_id,
                    member_name=requirement.name,
                    kind=FindingKind.WRONG_PARAM_TYPE,
                    member_kind=MemberKind.METHOD,
                    arity=candidate.arity,
                    candidate_types=candidate.parameter_types,
                    param_index=i,
                    expected=expected,
                    found=found,
                )
            )
    return findings


def _check_method(facts: ClassFacts, profile: Profile, requirement: RequiredMember) -> list[Finding]:
    candidates = facts.methods_named(requirement.name)
    findings: list[Finding] = []
    unresolved: list[int] = []

    for index, signature in enumerate(requirement.signatures):
        candidate, exact = _resolve(candidates, requirement, signature.types)
        if candidate is None:
            unresolved.append(index)
            continue
        if not exact:
            findings.extend(_compare_candidate(profile, requirement, candidate, signature.types))
        safety = _check_safety(profile, requirement, candidate)
        if safety is not None:
            findings.append(safety)

    if unresolved:
        findings.extend(_report_unresolved(profile, requirement, candidates, unresolved))
    return findings


def _report_unresolved(
    profile: Profile,
    requirement: RequiredMember,
    candidates: list[DeclaredMember],
    unresolved: list[int],
) -> list[Finding]:
    """Report signatures with no same-arity candidate.

    A simple requirement is MISSING. An overloaded requirement is MISSING as
    a whole when nothing shares its name, WRONG_PARAM_COUNT when every
    signature is unresolved but the name exists, and otherwise MISSING per
    unresolved signature.
    """
    if requirement.overloaded and not candidates:
        return [
            Finding(
                profile_id=profile.profile_id,
                member_name=requirement.name,
                kind=FindingKind.MISSING,
                member_kind=MemberKind.METHOD,
            )
        ]

    if requirement.overloaded and len(unresolved) == len(requirement.signatures):
        target = requirement.signature.arity
        closest = min(candidates, key=lambda c: abs(c.arity - target))
        return [
            Finding(
                profile_id=profile.profile_id,
                member_name=requirement.name,
                kind=FindingKind.WRONG_PARAM_COUNT,
                member_kind=MemberKind.METHOD,
                arity=closest.arity,
                candidate_types=closest.parameter_types,
                expected=" or ".join(str(s.arity) for s in requirement.signatures),
                found=str(closest.arity),
            )
        ]

    findings = []
    for index in unresolved:
        signature = requirement.signatures[index]
        found = ", ".join(str(c.arity) for c in candidates) if candidates else None
        findings.append(
            Finding(
                profile_id=profile.profile_id,
                member_name=requirement.name,
                kind=FindingKind.MISSING,
                member_kind=MemberKind.METHOD,
                arity=signature.arity,
                candidate_types=signature.types,
                expected=str(signature.arity),
                found=found,
                signature_index=index,
                detail=signature.display() if requirement.overloaded else "",
            )
        )
    return findings


# =============================================================================
# Properties
# =============================================================================


def _check_property(
    facts: ClassFacts, profile: Profile, requirement: RequiredMember
) -> list[Finding]:
    member = facts.property_named(requirement.name)
    if member is None:
        return [
            Finding(
                profile_id=profile.profile_id,
                member_name=requirement.name,
                kind=FindingKind.MISSING,
                member_kind=MemberKind.PROPERTY,
                arity=0,
                candidate_types=(),
            )
        ]

    findings: list[Finding] = []
    if member.return_type not in requirement.return_types:
        findings.append(
            Finding(
                profile_id=profile.profile_id,
                member_name=requirement.name,
                kind=FindingKind.WRONG_RETURN_TYPE,
                member_kind=MemberKind.PROPERTY,
                arity=0,
                candidate_types=(),
                expected=requirement.display_return_types(),
                found=member.return_type,
            )
        )
    if not member.has_getter:
        findings.append(
            Finding(
                profile_id=profile.profile_id,
                member_name=requirement.name,
                kind=FindingKind.MISSING_GETTER,
                member_kind=MemberKind.PROPERTY,
                arity=0,
                candidate_types=(),
            )
        )
        return findings

    safety = _check_safety(profile, requirement, member)
    if safety is not None:
        findings.append(safety)
    return findings


# =============================================================================
# Events
# =============================================================================


def _describe_event_mismatch(event: DeclaredMember, expected: tuple[str, ...]) -> str:
    if not event.is_function_pointer:
        return f"Incorrect event type: {event.type_name or 'delegate'}"
    if event.arity != len(expected):
        return f"Incorrect number of parameters. Expected: {len(expected)}, Found: {event.arity}"
    for i, (want, got) in enumerate(zip(expected, event.parameter_types, strict=True)):
        if want != got:
            return f"Incorrect parameter type. Parameter {i + 1} expected: {want}, Found: {got}"
    return ""


def _check_event(facts: ClassFacts, profile: Profile, requirement: RequiredMember) -> list[Finding]:
    expected = requirement.signature.types
    events = facts.events_named(requirement.name)
    if any(e.is_function_pointer and e.parameter_types == expected for e in events):
        return []

    detail = ""
    found = None
    if events:
        detail = _describe_event_mismatch(events[0], expected)
        found = events[0].type_name or "(" + ", ".join(events[0].parameter_types) + ")"
    return [
        Finding(
            profile_id=profile.profile_id,
            member_name=requirement.name,
            kind=FindingKind.MISSING_EVENT,
            detail=detail,
            member_kind=MemberKind.EVENT,
            arity=len(expected),
            candidate_types=expected,
            expected=requirement.signature.display(),
            found=found,
        )
    ]
