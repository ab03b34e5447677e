"""Check models - findings produced by the structural matcher."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from nepguard.profiles.models import MemberKind, Safety


class FindingKind(Enum):
    """What is wrong with a class relative to a profile."""

    MISSING = "missing"
    WRONG_RETURN_TYPE = "wrong_return_type"
    WRONG_PARAM_COUNT = "wrong_param_count"
    WRONG_PARAM_TYPE = "wrong_param_type"
    WRONG_SAFETY = "wrong_safety"
    MISSING_EVENT = "missing_event"
    MISSING_APPLICABILITY_MARKER = "missing_applicability_marker"
    MISSING_GETTER = "missing_getter"


@dataclass(frozen=True, slots=True)
class Finding:
    """One mismatch between a class and a profile.

    ``arity`` and ``candidate_types`` identify the declared overload the
    finding is about. For a ``MISSING`` signature they describe the required
    signature instead, and ``signature_index`` points into the requirement's
    signature list. A whole-member ``MISSING`` leaves all three unset.
    """

    profile_id: str
    member_name: str
    kind: FindingKind
    detail: str = ""
    member_kind: MemberKind | None = None
    arity: int | None = None
    candidate_types: tuple[str, ...] | None = None
    param_index: int | None = None  # 0-based, WRONG_PARAM_TYPE only
    expected: str | None = None
    found: str | None = None
    expected_safety: Safety | None = None
    signature_index: int | None = None

    @property
    def is_member_finding(self) -> bool:
        return self.kind != FindingKind.MISSING_APPLICABILITY_MARKER

    def to_dict(self) -> dict[str, object]:
        return {
            "profile_id": self.profile_id,
            "member_name": self.member_name,
            "kind": self.kind.value,
            "detail": self.detail,
            "member_kind": self.member_kind.value if self.member_kind else None,
            "arity": self.arity,
            "candidate_types": list(self.candidate_types)
            if self.candidate_types is not None
            else None,
            "param_index": self.param_index,
            "expected": self.expected,
            "found": self.found,
            "expected_safety": self.expected_safety.value if self.expected_safety else None,
            "signature_index": self.signature_index,
        }
