"""Fix operations - fix menu, single fixes and fix-all."""

from __future__ import annotations

import difflib

import structlog

from nepguard.analysis.ops import AnalysisOps
from nepguard.check.models import FindingKind
from nepguard.config.models import NepGuardConfig
from nepguard.core.logging import unit_context
from nepguard.diagnostics.models import Diagnostic
from nepguard.fixes.models import CodeFix, FixKind, FixResult
from nepguard.fixes.synthesizer import plan
from nepguard.profiles.models import MemberKind, Safety
from nepguard.profiles.registry import registry
from nepguard.tree.edits import Edit, apply_edits
from nepguard.tree.models import CompilationUnit
from nepguard.tree.render import render_class, render_unit

logger = structlog.get_logger()

_STUB_KINDS = frozenset(
    {FindingKind.MISSING, FindingKind.WRONG_PARAM_COUNT, FindingKind.MISSING_EVENT}
)


def _diff(before: list[str], after: list[str], path: str) -> str:
    name = path or "<unit>"
    lines = difflib.unified_diff(before, after, fromfile=f"a/{name}", tofile=f"b/{name}", lineterm="")
    return "\n".join(lines)


def class_diff(before: CompilationUnit, after: CompilationUnit, class_name: str) -> str:
    """Unified diff of one rendered class between two units."""
    old = before.find_class(class_name)
    new = after.find_class(class_name)
    return _diff(
        render_class(old) if old else [],
        render_class(new) if new else [],
        before.path,
    )


def unit_diff(before: CompilationUnit, after: CompilationUnit) -> str:
    return _diff(render_unit(before).splitlines(), render_unit(after).splitlines(), before.path)


class FixOps:
    """Offer and apply fixes for diagnostics.

    Every fix maps a unit to a new unit; inputs are never modified.
    """

    def __init__(self, config: NepGuardConfig | None = None) -> None:
        self._config = config or NepGuardConfig()
        self._analysis = AnalysisOps(self._config)

    def available_fixes(self, diagnostic: Diagnostic) -> list[CodeFix]:
        """Fix menu for one diagnostic. Findings without a safe rewrite get none."""
        finding = diagnostic.finding
        name = finding.member_name
        noun = "property getter" if finding.member_kind == MemberKind.PROPERTY else "method"

        if finding.kind == FindingKind.MISSING_APPLICABILITY_MARKER:
            profile = registry.require(finding.profile_id)
            rule = profile.applicability
            return [
                CodeFix(
                    FixKind.ADD_BASE_TYPE,
                    f"Implement {profile.standard} interface ({rule.short_base_type})",
                    diagnostic,
                ),
                CodeFix(
                    FixKind.ADD_MARKER_ATTRIBUTE,
                    f"Add [{rule.marker_attribute}] attribute",
                    diagnostic,
                ),
            ]

        if finding.kind in _STUB_KINDS:
            if finding.kind == FindingKind.MISSING_EVENT:
                title = f"Declare conformant {name} event"
            elif finding.kind == FindingKind.WRONG_PARAM_COUNT:
                title = f"Add required {name} overloads"
            elif finding.member_kind == MemberKind.PROPERTY:
                title = f"Add {name} property"
            else:
                title = f"Add {name} method stub"
            return [CodeFix(FixKind.ADD_MEMBER_STUB, title, diagnostic)]

        if finding.kind == FindingKind.WRONG_SAFETY:
            if finding.expected_safety == Safety.SAFE:
                return [
                    CodeFix(FixKind.ADD_SAFE_MARKER, f"Add [Safe] attribute to {name} {noun}", diagnostic)
                ]
            return [
                CodeFix(
                    FixKind.REMOVE_SAFE_MARKER, f"Remove [Safe] attribute from {name} {noun}", diagnostic
                )
            ]

        return []

    def apply(self, unit: CompilationUnit, fix: CodeFix) -> FixResult:
        """Apply one fix. A stale or already-satisfied target leaves ``unit`` as is."""
        edits = plan(unit, fix.diagnostic, fix.kind)
        if not edits:
            logger.info("fix_not_applicable", kind=fix.kind.value, cls=fix.diagnostic.class_name)
            return FixResult(unit=unit, applied=False)

        fixed = apply_edits(unit, edits)
        logger.info(
            "fix_applied",
            kind=fix.kind.value,
            cls=fix.diagnostic.class_name,
            edits=[e.describe(unit) for e in edits],
        )
        return FixResult(
            unit=fixed,
            applied=True,
            edits=tuple(edits),
            diff=class_diff(unit, fixed, fix.diagnostic.class_name),
            fixes=[fix],
        )

    def _preferred(self, fixes: list[CodeFix]) -> CodeFix:
        preferred = (
            FixKind.ADD_BASE_TYPE
            if self._config.fixes.applicability == "base_type"
            else FixKind.ADD_MARKER_ATTRIBUTE
        )
        for fix in fixes:
            if fix.kind == preferred:
                return fix
        return fixes[0]

    def _fix_pass(
        self,
        unit: CompilationUnit,
        profile_ids: list[str],
        fix_applicability: bool,
    ) -> tuple[CompilationUnit, list[Edit], list[CodeFix]]:
        """Re-check ``unit`` and apply the preferred fix for each diagnostic."""
        current = unit
        edits: list[Edit] = []
        applied: list[CodeFix] = []
        for diagnostic in self._analysis.analyze(unit, profile_ids=profile_ids).diagnostics:
            if (
                diagnostic.finding.kind == FindingKind.MISSING_APPLICABILITY_MARKER
                and not fix_applicability
            ):
                continue
            fixes = self.available_fixes(diagnostic)
            if not fixes:
                continue
            fix = self._preferred(fixes)
            step = plan(current, diagnostic, fix.kind)
            if not step:
                continue
            current = apply_edits(current, step)
            edits.extend(step)
            applied.append(fix)
        return current, edits, applied

    def fix_all(
        self,
        unit: CompilationUnit,
        *,
        profile_ids: list[str] | None = None,
    ) -> FixResult:
        """Repeatedly fix every fixable diagnostic until none remain.

        Each pass re-checks the unit and applies one fix per diagnostic.
        Applicability fixes are only applied when a single profile is
        selected: with several, which standard a bare class means is
        ambiguous.
        """
        profiles = self._analysis.resolve_profiles(profile_ids)
        selected = [p.profile_id for p in profiles]
        fix_applicability = len(selected) == 1

        current = unit
        edits: list[Edit] = []
        applied: list[CodeFix] = []

        with unit_context(unit.path):
            for pass_number in range(1, self._config.fixes.max_passes + 1):
                current, pass_edits, pass_fixes = self._fix_pass(current, selected, fix_applicability)
                edits.extend(pass_edits)
                applied.extend(pass_fixes)
                logger.debug("fix_all_pass", number=pass_number, fixes=len(pass_fixes))
                if not pass_edits:
                    break

            logger.info("fix_all_complete", fixes=len(applied), edits=len(edits))

        return FixResult(
            unit=current,
            applied=bool(edits),
            edits=tuple(edits),
            diff=unit_diff(unit, current) if edits else "",
            fixes=applied,
        )
