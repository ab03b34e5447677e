"""Diagnostics module - messages and sinks for findings."""

from nepguard.diagnostics.models import Diagnostic, DiagnosticRule, Severity
from nepguard.diagnostics.reporter import (
    DiagnosticSink,
    ListSink,
    format_message,
    report,
    report_all,
    rule_for,
)

__all__ = [
    "Diagnostic",
    "DiagnosticRule",
    "DiagnosticSink",
    "ListSink",
    "Severity",
    "format_message",
    "report",
    "report_all",
    "rule_for",
]
