"""Config module exports."""

from nepguard.config.loader import load_config
from nepguard.config.models import (
    CheckConfig,
    FixConfig,
    LoggingConfig,
    LogOutputConfig,
    NepGuardConfig,
)

__all__ = [
    "load_config",
    "CheckConfig",
    "FixConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "NepGuardConfig",
]
