"""Check module - structural matching of classes against profiles."""

from nepguard.check.facts import ClassFacts, DeclaredMember, extract_facts
from nepguard.check.matcher import SAFE_ATTRIBUTE, check, is_applicable
from nepguard.check.models import Finding, FindingKind

__all__ = [
    "SAFE_ATTRIBUTE",
    "ClassFacts",
    "DeclaredMember",
    "Finding",
    "FindingKind",
    "check",
    "extract_facts",
    "is_applicable",
]
