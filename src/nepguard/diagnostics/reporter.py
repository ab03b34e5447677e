"""Diagnostic reporter - turn findings into messages.

Formatting is pure. Each profile owns one rule code shared by all of its
finding kinds, and every diagnostic is a warning: a non-conformant contract
may still be deployable.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol

from nepguard.check.models import Finding, FindingKind
from nepguard.core.errors import InternalError
from nepguard.diagnostics.models import Diagnostic, DiagnosticRule, Severity
from nepguard.profiles.models import MemberKind, Profile, Safety
from nepguard.profiles.registry import registry
from nepguard.tree.models import SourceSpan


class DiagnosticSink(Protocol):
    """Where reported diagnostics go."""

    def append(self, diagnostic: Diagnostic) -> None: ...


class ListSink:
    """Collects diagnostics in report order."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def append(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def __len__(self) -> int:
        return len(self.diagnostics)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.diagnostics)


def rule_for(profile: Profile) -> DiagnosticRule:
    return DiagnosticRule(
        code=profile.rule_code,
        title=profile.title,
        description=profile.description,
    )


def _noun(finding: Finding) -> str:
    if finding.member_kind == MemberKind.PROPERTY:
        return "property"
    if finding.member_kind == MemberKind.EVENT:
        return "event"
    return "method"


def _missing(finding: Finding, profile: Profile) -> str:
    return profile.missing_message.format(
        standard=profile.standard, name=finding.member_name, noun=_noun(finding)
    )


def format_message(finding: Finding, profile: Profile) -> str:
    """Render the message for one finding."""
    name = finding.member_name
    std = profile.standard
    kind = finding.kind

    if kind == FindingKind.MISSING_APPLICABILITY_MARKER:
        rule = profile.applicability
        return (
            f"{std} contract should inherit from {rule.short_base_type} or have "
            f"[{rule.marker_attribute}({rule.standard_identifier})] attribute"
        )

    if kind == FindingKind.MISSING:
        if finding.signature_index is not None and finding.detail:
            return f"Missing valid overload for method: {name}{finding.detail}"
        return _missing(finding, profile)

    if kind == FindingKind.WRONG_RETURN_TYPE:
        if finding.member_kind == MemberKind.PROPERTY:
            return (
                f"Incorrect type for {name} property. "
                f"Expected: {finding.expected}, Found: {finding.found}"
            )
        return (
            f"Incorrect return type for {name} method. "
            f"Expected: {finding.expected}, Found: {finding.found}"
        )

    if kind == FindingKind.WRONG_PARAM_COUNT:
        return (
            f"Incorrect number of parameters for {name} method. "
            f"Expected: {finding.expected}, Found: {finding.found}"
        )

    if kind == FindingKind.WRONG_PARAM_TYPE:
        position = (finding.param_index or 0) + 1
        return (
            f"Incorrect type for parameter {position} in {name} method. "
            f"Expected: {finding.expected}, Found: {finding.found}"
        )

    if kind == FindingKind.WRONG_SAFETY:
        if finding.member_kind == MemberKind.PROPERTY:
            subject = f"{name} property getter"
        else:
            subject = f"{name} method"
        if finding.expected_safety == Safety.SAFE:
            return f"{subject} must have [Safe] attribute"
        return (
            f"{subject} should not have [Safe] attribute. "
            "[Safe] forbids writing to storage and emitting events."
        )

    if kind == FindingKind.MISSING_EVENT:
        if finding.detail:
            return f"Incorrect event {name}{finding.expected or ''}. {finding.detail}"
        return _missing(finding, profile)

    if kind == FindingKind.MISSING_GETTER:
        return f"{name} property must have a getter"

    raise InternalError.unexpected(f"unhandled finding kind {kind.value}", kind=kind.value)


def report(location: SourceSpan | None, finding: Finding, class_name: str = "") -> Diagnostic:
    """Build the diagnostic for one finding, anchored at ``location``."""
    profile = registry.require(finding.profile_id)
    return Diagnostic(
        rule_code=profile.rule_code,
        message=format_message(finding, profile),
        finding=finding,
        location=location,
        class_name=class_name,
        severity=Severity.WARNING,
    )


def report_all(
    location: SourceSpan | None,
    findings: list[Finding],
    sink: DiagnosticSink,
    class_name: str = "",
) -> None:
    """Report findings into ``sink`` in order."""
    for finding in findings:
        sink.append(report(location, finding, class_name))
