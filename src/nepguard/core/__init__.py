"""Core module exports."""

from nepguard.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    NepGuardError,
    ProfileError,
    TreeError,
)
from nepguard.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from nepguard.core.progress import check_summary, fix_summary, pluralize, status

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "NepGuardError",
    "ProfileError",
    "TreeError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Console
    "check_summary",
    "fix_summary",
    "pluralize",
    "status",
]
