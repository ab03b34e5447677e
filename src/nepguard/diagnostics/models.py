"""Diagnostic models - user-facing records produced from findings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from nepguard.check.models import Finding
from nepguard.tree.models import SourceSpan


class Severity(Enum):
    """Diagnostic severity level. Both token-standard rules report warnings."""

    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class DiagnosticRule:
    """Rule identity shared by every finding of one profile."""

    code: str  # "NC4024"
    title: str
    description: str
    category: str = "Usage"
    severity: Severity = Severity.WARNING


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single diagnostic anchored at a class identifier."""

    rule_code: str
    message: str
    finding: Finding
    location: SourceSpan | None = None
    class_name: str = ""
    severity: Severity = Severity.WARNING

    def to_dict(self) -> dict[str, Any]:
        location = None
        if self.location is not None:
            location = {
                "path": self.location.path,
                "line": self.location.start_line,
                "column": self.location.start_column,
                "end_line": self.location.end_line,
                "end_column": self.location.end_column,
            }
        return {
            "rule_code": self.rule_code,
            "message": self.message,
            "severity": self.severity.value,
            "class_name": self.class_name,
            "location": location,
            "finding": self.finding.to_dict(),
        }
