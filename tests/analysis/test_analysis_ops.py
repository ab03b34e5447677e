"""Tests for analysis/ops.py."""

from __future__ import annotations

from dataclasses import replace

import pytest

from nepguard.analysis import AnalysisOps
from nepguard.config.models import CheckConfig, NepGuardConfig
from nepguard.core.errors import ProfileError, TreeError
from nepguard.profiles import NEP11, NEP17
from nepguard.tree.models import ClassDeclaration, CompilationUnit, EventDeclaration


class TestAnalyze:
    def test_given_conformant_unit_then_clean(self, nep17_unit: CompilationUnit) -> None:
        # When
        result = AnalysisOps().analyze(nep17_unit)

        # Then
        assert result.status == "clean"
        assert result.profiles == [NEP17, NEP11]
        assert result.path == "SampleToken.cs"
        assert [c.class_name for c in result.classes] == ["SampleToken"]
        assert result.classes[0].applicable_profiles == [NEP17]

    def test_given_bare_class_then_one_marker_diagnostic_per_profile(self) -> None:
        unit = CompilationUnit(path="Empty.cs", classes=(ClassDeclaration("Empty"),))
        result = AnalysisOps().analyze(unit)
        assert [d.rule_code for d in result.diagnostics] == ["NC4024", "NC4025"]
        assert result.status == "dirty"

    def test_diagnostics_anchor_at_class_identifier(
        self, nep17_unit: CompilationUnit, drop_members
    ) -> None:
        cls = drop_members(nep17_unit.classes[0], "TotalSupply")
        result = AnalysisOps().analyze(nep17_unit.with_classes((cls,)))
        (diagnostic,) = result.diagnostics
        assert diagnostic.location == cls.identifier_span
        assert diagnostic.class_name == "SampleToken"

    def test_given_unknown_profile_then_raises(self, nep17_unit: CompilationUnit) -> None:
        with pytest.raises(ProfileError):
            AnalysisOps().analyze(nep17_unit, profile_ids=["nep-5"])

    def test_given_malformed_tree_then_raises(self, nep17_unit: CompilationUnit) -> None:
        cls = replace(nep17_unit.classes[0], members=(EventDeclaration("Transfer"),))
        with pytest.raises(TreeError):
            AnalysisOps().analyze(nep17_unit.with_classes((cls,)))


class TestProfileSelection:
    def test_configured_profiles_used_by_default(self, nep17_unit: CompilationUnit) -> None:
        config = NepGuardConfig(check=CheckConfig(profiles=[NEP11]))
        result = AnalysisOps(config).analyze(nep17_unit)
        assert result.profiles == [NEP11]
        assert [d.rule_code for d in result.diagnostics] == ["NC4025"]

    def test_explicit_profiles_override_config(self, nep17_unit: CompilationUnit) -> None:
        config = NepGuardConfig(check=CheckConfig(profiles=[NEP11]))
        result = AnalysisOps(config).analyze(nep17_unit, profile_ids=[NEP17])
        assert result.profiles == [NEP17]
        assert result.status == "clean"


class TestForeignMarkers:
    """A class claiming one standard is not nagged about the others."""

    def test_given_claimed_profile_then_other_marker_suppressed(
        self, nep17_unit: CompilationUnit
    ) -> None:
        assert AnalysisOps().analyze(nep17_unit).diagnostics == []

    def test_given_suppression_disabled_then_other_marker_reported(
        self, nep17_unit: CompilationUnit
    ) -> None:
        config = NepGuardConfig(check=CheckConfig(skip_foreign_markers=False))
        (diagnostic,) = AnalysisOps(config).analyze(nep17_unit).diagnostics
        assert diagnostic.rule_code == "NC4025"


class TestParallelChecks:
    def test_given_workers_then_class_order_kept(
        self, nep17_class: ClassDeclaration, nep11_class: ClassDeclaration
    ) -> None:
        # Given
        classes = tuple(
            replace(nep17_class if i % 2 else nep11_class, name=f"Token{i}") for i in range(8)
        )
        unit = CompilationUnit(path="Many.cs", classes=classes)
        config = NepGuardConfig(check=CheckConfig(max_workers=4))

        # When
        parallel = AnalysisOps(config).analyze(unit)
        serial = AnalysisOps().analyze(unit)

        # Then
        assert [c.class_name for c in parallel.classes] == [f"Token{i}" for i in range(8)]
        assert [c.applicable_profiles for c in parallel.classes] == [
            c.applicable_profiles for c in serial.classes
        ]
        assert parallel.status == "clean"
