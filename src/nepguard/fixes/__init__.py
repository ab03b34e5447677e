"""Fixes module - synthesize tree rewrites for diagnostics."""

from nepguard.fixes.models import CodeFix, FixKind, FixResult
from nepguard.fixes.ops import FixOps, class_diff, unit_diff
from nepguard.fixes.synthesizer import (
    add_base_type,
    add_marker_attribute,
    add_member_stub,
    add_safe_marker,
    plan,
    remove_safe_marker,
    synthesize,
)

__all__ = [
    "CodeFix",
    "FixKind",
    "FixOps",
    "FixResult",
    "add_base_type",
    "add_marker_attribute",
    "add_member_stub",
    "add_safe_marker",
    "class_diff",
    "plan",
    "remove_safe_marker",
    "synthesize",
    "unit_diff",
]
