"""nepguard error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Declaration tree
- 4xxx: Profile registry
- 9xxx: Internal

Conformance problems are never errors: they are reported as findings.
These types cover contract violations by callers and collaborators.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Declaration tree (3xxx)
    TREE_MALFORMED = 3001
    TREE_LOAD_ERROR = 3002

    # Profiles (4xxx)
    PROFILE_NOT_FOUND = 4001
    PROFILE_DUPLICATE = 4002

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class NepGuardError(Exception):
    """Base error with structured context for CLI and JSON output."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'TREE_MALFORMED')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(NepGuardError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class TreeError(NepGuardError):
    """Declaration tree shape violations.

    Raised when the parser collaborator hands over a tree that does not
    follow the documented shape. The checker fails closed rather than guess.
    """

    @classmethod
    def malformed(cls, node: str, reason: str) -> "TreeError":
        return cls(
            code=ErrorCode.TREE_MALFORMED,
            message=f"Malformed declaration tree at {node}: {reason}",
            details={"node": node, "reason": reason},
        )

    @classmethod
    def load_error(cls, source: str, reason: str) -> "TreeError":
        return cls(
            code=ErrorCode.TREE_LOAD_ERROR,
            message=f"Failed to load declaration tree from {source}: {reason}",
            details={"source": source, "reason": reason},
        )


class ProfileError(NepGuardError):
    """Profile registry errors."""

    @classmethod
    def not_found(cls, profile_id: str, known: list[str]) -> "ProfileError":
        return cls(
            code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Unknown profile '{profile_id}'. Known profiles: {', '.join(known)}",
            details={"profile_id": profile_id, "known": known},
        )

    @classmethod
    def duplicate(cls, profile_id: str) -> "ProfileError":
        return cls(
            code=ErrorCode.PROFILE_DUPLICATE,
            message=f"Profile already registered: {profile_id}",
            details={"profile_id": profile_id},
        )


class InternalError(NepGuardError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
