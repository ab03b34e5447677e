"""Tests for fixes/synthesizer.py.

Each fix is verified by re-checking the fixed unit: the diagnostic it
targeted is gone and nothing else changed.
"""

from __future__ import annotations

from dataclasses import replace

from nepguard.analysis import AnalysisOps
from nepguard.check.models import FindingKind
from nepguard.diagnostics import Diagnostic
from nepguard.fixes import (
    add_base_type,
    add_marker_attribute,
    add_member_stub,
    add_safe_marker,
    remove_safe_marker,
)
from nepguard.profiles import NEP11, NEP17
from nepguard.tree.models import (
    Accessor,
    Attribute,
    ClassDeclaration,
    CompilationUnit,
    EventDeclaration,
    MethodDeclaration,
    PropertyDeclaration,
)


def _diagnostics(unit: CompilationUnit, profile_id: str) -> list[Diagnostic]:
    return AnalysisOps().analyze(unit, profile_ids=[profile_id]).diagnostics


def _single(unit: CompilationUnit, profile_id: str) -> Diagnostic:
    diagnostics = _diagnostics(unit, profile_id)
    assert len(diagnostics) == 1, [d.message for d in diagnostics]
    return diagnostics[0]


def _with_class(unit: CompilationUnit, cls: ClassDeclaration) -> CompilationUnit:
    return unit.with_classes((cls,))


def _with_members(unit: CompilationUnit, *members: object) -> CompilationUnit:
    return _with_class(unit, replace(unit.classes[0], members=tuple(members)))


class TestApplicabilityFixes:
    def test_given_bare_class_when_base_type_added_then_applicable(
        self, nep17_unit: CompilationUnit, nep17_class: ClassDeclaration
    ) -> None:
        # Given
        unit = _with_class(nep17_unit, replace(nep17_class, base_types=("SmartContract",)))
        diagnostic = _single(unit, NEP17)
        assert diagnostic.finding.kind == FindingKind.MISSING_APPLICABILITY_MARKER

        # When
        fixed = add_base_type(unit, diagnostic)

        # Then
        assert fixed.classes[0].base_types == (
            "SmartContract",
            "Neo.SmartContract.Framework.Nep17Token",
        )
        assert _diagnostics(fixed, NEP17) == []
        assert unit.classes[0].base_types == ("SmartContract",)

    def test_given_bare_class_when_marker_added_then_applicable(
        self, nep17_unit: CompilationUnit, nep17_class: ClassDeclaration
    ) -> None:
        # Given
        unit = _with_class(nep17_unit, replace(nep17_class, base_types=()))
        diagnostic = _single(unit, NEP17)

        # When
        fixed = add_marker_attribute(unit, diagnostic)

        # Then
        assert fixed.classes[0].attributes == (
            Attribute("SupportedStandards", ("NepStandard.Nep17",)),
        )
        assert _diagnostics(fixed, NEP17) == []

    def test_given_fix_applied_twice_then_second_is_no_op(
        self, nep17_unit: CompilationUnit, nep17_class: ClassDeclaration
    ) -> None:
        unit = _with_class(nep17_unit, replace(nep17_class, base_types=()))
        diagnostic = _single(unit, NEP17)
        once = add_marker_attribute(unit, diagnostic)
        assert add_marker_attribute(once, diagnostic) is once

    def test_given_attribute_added_when_base_type_offered_then_no_op(
        self, nep17_unit: CompilationUnit, nep17_class: ClassDeclaration
    ) -> None:
        """The two applicability fixes are alternatives; a class gets one marker."""
        # Given
        unit = _with_class(nep17_unit, replace(nep17_class, base_types=()))
        diagnostic = _single(unit, NEP17)
        marked = add_marker_attribute(unit, diagnostic)

        # When
        fixed = add_base_type(marked, diagnostic)

        # Then
        assert fixed is marked
        assert fixed.classes[0].base_types == ()

    def test_given_base_type_added_when_attribute_offered_then_no_op(
        self, nep17_unit: CompilationUnit, nep17_class: ClassDeclaration
    ) -> None:
        unit = _with_class(nep17_unit, replace(nep17_class, base_types=()))
        diagnostic = _single(unit, NEP17)
        based = add_base_type(unit, diagnostic)
        assert add_marker_attribute(based, diagnostic) is based


class TestMemberStubs:
    def test_given_missing_method_when_stubbed_then_only_that_finding_removed(
        self, nep17_unit: CompilationUnit, drop_members
    ) -> None:
        """Stubbing a missing member changes nothing else in the class."""
        # Given
        cls = drop_members(nep17_unit.classes[0], "TotalSupply")
        unit = _with_class(nep17_unit, cls)
        diagnostic = _single(unit, NEP17)

        # When
        fixed = add_member_stub(unit, diagnostic)

        # Then
        assert _diagnostics(fixed, NEP17) == []
        new_members = fixed.classes[0].members
        assert len(new_members) == len(cls.members) + 1
        assert all(a is b for a, b in zip(cls.members, new_members, strict=False))
        stub = new_members[-1]
        assert isinstance(stub, MethodDeclaration)
        assert stub.name == "TotalSupply"

    def test_given_missing_property_when_stubbed_then_clean(
        self, nep17_unit: CompilationUnit, drop_members
    ) -> None:
        unit = _with_class(nep17_unit, drop_members(nep17_unit.classes[0], "Symbol"))
        fixed = add_member_stub(unit, _single(unit, NEP17))
        assert _diagnostics(fixed, NEP17) == []
        assert isinstance(fixed.classes[0].members[-1], PropertyDeclaration)

    def test_given_missing_overload_when_stubbed_then_only_that_overload_added(
        self, nep11_unit: CompilationUnit, drop_members
    ) -> None:
        # Given
        unit = _with_class(nep11_unit, drop_members(nep11_unit.classes[0], "BalanceOf", arity=2))
        diagnostic = _single(unit, NEP11)

        # When
        fixed = add_member_stub(unit, diagnostic)

        # Then
        assert _diagnostics(fixed, NEP11) == []
        added = fixed.classes[0].members[-1]
        assert isinstance(added, MethodDeclaration)
        assert added.parameter_types == ("UInt160", "ByteString")

    def test_given_wrong_param_count_when_stubbed_then_all_overloads_added(
        self, nep11_unit: CompilationUnit, nep11_class: ClassDeclaration, make_method
    ) -> None:
        # Given
        members = [m for m in nep11_class.members if getattr(m, "name", "") != "BalanceOf"]
        members.append(
            make_method(
                "BalanceOf",
                "BigInteger",
                ("UInt160", "a"),
                ("UInt160", "b"),
                ("ByteString", "c"),
                safe=True,
            )
        )
        unit = _with_members(nep11_unit, *members)
        diagnostic = _single(unit, NEP11)
        assert diagnostic.finding.kind == FindingKind.WRONG_PARAM_COUNT

        # When
        fixed = add_member_stub(unit, diagnostic)

        # Then
        assert _diagnostics(fixed, NEP11) == []
        assert len(fixed.classes[0].members) == len(members) + 2

    def test_given_mismatched_event_when_fixed_then_replaced_in_place(
        self, nep17_unit: CompilationUnit, nep17_class: ClassDeclaration
    ) -> None:
        # Given
        members = list(nep17_class.members)
        members[5] = EventDeclaration("Transfer", type_kind="delegate", type_name="Action<UInt160>")
        unit = _with_members(nep17_unit, *members)
        diagnostic = _single(unit, NEP17)

        # When
        fixed = add_member_stub(unit, diagnostic)

        # Then
        assert _diagnostics(fixed, NEP17) == []
        event = fixed.classes[0].members[5]
        assert isinstance(event, EventDeclaration)
        assert event.type_kind == "function_pointer"
        assert event.type_name is None
        assert len(fixed.classes[0].members) == len(members)

    def test_given_missing_event_when_stubbed_then_appended(
        self, nep17_unit: CompilationUnit, drop_members
    ) -> None:
        unit = _with_class(nep17_unit, drop_members(nep17_unit.classes[0], "Transfer", EventDeclaration))
        fixed = add_member_stub(unit, _single(unit, NEP17))
        assert _diagnostics(fixed, NEP17) == []


class TestSafetyFixes:
    def test_given_safe_transfer_when_marker_removed_then_nothing_else_changes(
        self, nep17_unit: CompilationUnit, nep17_class: ClassDeclaration
    ) -> None:
        """Only the Transfer node is replaced; siblings are shared."""
        # Given
        members = list(nep17_class.members)
        members[4] = replace(members[4], attributes=(Attribute("Safe"),))
        unit = _with_members(nep17_unit, *members)
        diagnostic = _single(unit, NEP17)

        # When
        fixed = remove_safe_marker(unit, diagnostic)

        # Then
        assert _diagnostics(fixed, NEP17) == []
        new_members = fixed.classes[0].members
        assert new_members[4].attributes == ()
        assert all(new_members[i] is members[i] for i in range(len(members)) if i != 4)

    def test_given_unsafe_getter_when_marker_added_then_getter_marked(
        self, nep17_unit: CompilationUnit, nep17_class: ClassDeclaration
    ) -> None:
        # Given
        members = list(nep17_class.members)
        members[0] = PropertyDeclaration("Symbol", "string", (Accessor("get", (), '"SMP"'),))
        unit = _with_members(nep17_unit, *members)

        # When
        fixed = add_safe_marker(unit, _single(unit, NEP17))

        # Then
        symbol = fixed.classes[0].members[0]
        assert isinstance(symbol, PropertyDeclaration)
        assert symbol.getter is not None
        assert symbol.getter.attributes == (Attribute("Safe"),)
        assert symbol.attributes == ()
        assert _diagnostics(fixed, NEP17) == []

    def test_given_other_attributes_when_marker_removed_then_kept(
        self, nep17_unit: CompilationUnit, nep17_class: ClassDeclaration
    ) -> None:
        members = list(nep17_class.members)
        members[4] = replace(members[4], attributes=(Attribute("DisplayName", ('"transfer"',)), Attribute("Safe")))
        unit = _with_members(nep17_unit, *members)
        fixed = remove_safe_marker(unit, _single(unit, NEP17))
        assert fixed.classes[0].members[4].attributes == (Attribute("DisplayName", ('"transfer"',)),)


class TestStaleTargets:
    """A fix whose target is gone or already fixed returns the unit unchanged."""

    def test_given_class_renamed_then_no_op(
        self, nep17_unit: CompilationUnit, drop_members
    ) -> None:
        # Given
        unit = _with_class(nep17_unit, drop_members(nep17_unit.classes[0], "TotalSupply"))
        diagnostic = _single(unit, NEP17)
        renamed = _with_class(unit, replace(unit.classes[0], name="Renamed"))

        # When / Then
        assert add_member_stub(renamed, diagnostic) is renamed

    def test_given_member_already_present_then_no_op(
        self, nep17_unit: CompilationUnit, drop_members
    ) -> None:
        unit = _with_class(nep17_unit, drop_members(nep17_unit.classes[0], "TotalSupply"))
        diagnostic = _single(unit, NEP17)
        assert add_member_stub(nep17_unit, diagnostic) is nep17_unit

    def test_given_marker_already_removed_then_no_op(
        self, nep17_unit: CompilationUnit, nep17_class: ClassDeclaration
    ) -> None:
        members = list(nep17_class.members)
        members[4] = replace(members[4], attributes=(Attribute("Safe"),))
        diagnostic = _single(_with_members(nep17_unit, *members), NEP17)
        assert remove_safe_marker(nep17_unit, diagnostic) is nep17_unit


class TestMultipleClasses:
    def test_given_two_classes_then_fix_targets_named_class(
        self, nep17_unit: CompilationUnit, nep17_class: ClassDeclaration, drop_members
    ) -> None:
        # Given
        broken = replace(drop_members(nep17_class, "TotalSupply"), name="Broken")
        unit = nep17_unit.with_classes((nep17_class, broken))
        diagnostic = _single(unit, NEP17)
        assert diagnostic.class_name == "Broken"

        # When
        fixed = add_member_stub(unit, diagnostic)

        # Then
        assert fixed.classes[0] is nep17_class
        assert _diagnostics(fixed, NEP17) == []
