"""Analysis operations - check a compilation unit against enabled profiles."""

from __future__ import annotations

import contextvars
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Literal

import structlog

from nepguard.check.facts import extract_facts
from nepguard.check.matcher import check, is_applicable
from nepguard.check.models import Finding
from nepguard.config.models import NepGuardConfig
from nepguard.core.logging import unit_context
from nepguard.diagnostics.models import Diagnostic
from nepguard.diagnostics.reporter import ListSink, report_all
from nepguard.profiles.models import Profile
from nepguard.profiles.registry import registry
from nepguard.tree.models import ClassDeclaration, CompilationUnit

logger = structlog.get_logger()


@dataclass
class ClassResult:
    """Diagnostics for one class, in profile order."""

    class_name: str
    applicable_profiles: list[str] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


@dataclass
class AnalysisResult:
    """Aggregated result of checking one compilation unit."""

    path: str
    profiles: list[str]
    classes: list[ClassResult] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [d for c in self.classes for d in c.diagnostics]

    @property
    def total_diagnostics(self) -> int:
        return sum(len(c.diagnostics) for c in self.classes)

    @property
    def status(self) -> Literal["clean", "dirty"]:
        return "dirty" if self.total_diagnostics else "clean"


class AnalysisOps:
    """Run the structural matcher over every class of a unit.

    Class checks are independent, so they fan out on a thread pool when
    ``check.max_workers`` is above one. Results keep class order.
    """

    def __init__(self, config: NepGuardConfig | None = None) -> None:
        self._config = config or NepGuardConfig()

    @property
    def config(self) -> NepGuardConfig:
        return self._config

    def resolve_profiles(self, profile_ids: list[str] | None = None) -> list[Profile]:
        """Explicit ids win over configured ones; neither means every profile."""
        return registry.select(profile_ids or self._config.check.profiles)

    def check_class(self, cls: ClassDeclaration, profiles: list[Profile]) -> ClassResult:
        facts = extract_facts(cls)
        applicable = [p.profile_id for p in profiles if is_applicable(facts, p)]

        findings: list[Finding] = []
        for profile in profiles:
            profile_findings = check(facts, profile)
            if (
                self._config.check.skip_foreign_markers
                and applicable
                and profile.profile_id not in applicable
            ):
                profile_findings = [f for f in profile_findings if f.is_member_finding]
            findings.extend(profile_findings)

        sink = ListSink()
        report_all(cls.location, findings, sink, class_name=cls.name)
        return ClassResult(
            class_name=cls.name,
            applicable_profiles=applicable,
            diagnostics=sink.diagnostics,
        )

    def analyze(
        self,
        unit: CompilationUnit,
        *,
        profile_ids: list[str] | None = None,
    ) -> AnalysisResult:
        """Check every class of ``unit`` against the selected profiles.

        Raises:
            ProfileError: An unknown profile id was requested.
            TreeError: The tree is malformed.
        """
        start = time.monotonic()
        profiles = self.resolve_profiles(profile_ids)
        workers = self._config.check.max_workers

        with unit_context(unit.path):
            logger.debug(
                "analysis_started",
                classes=len(unit.classes),
                profiles=[p.profile_id for p in profiles],
                workers=workers,
            )

            if workers > 1 and len(unit.classes) > 1:
                # Tasks run in a copy of the submitting context (unit binding, run id)
                with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="nepguard-check") as pool:
                    futures = [
                        pool.submit(contextvars.copy_context().run, self.check_class, c, profiles)
                        for c in unit.classes
                    ]
                    classes = [f.result() for f in futures]
            else:
                classes = [self.check_class(c, profiles) for c in unit.classes]

            result = AnalysisResult(
                path=unit.path,
                profiles=[p.profile_id for p in profiles],
                classes=classes,
                duration_seconds=time.monotonic() - start,
            )
            logger.info(
                "analysis_complete",
                classes=len(classes),
                diagnostics=result.total_diagnostics,
                status=result.status,
            )
        return result
