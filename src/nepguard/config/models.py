"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (NEPGUARD__SECTION__KEY)
3. Repo YAML (.nepguard.yaml)
4. Global YAML (~/.config/nepguard/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    NEPGUARD__<SECTION>__<KEY>=<VALUE>

Examples:
    NEPGUARD__LOGGING__LEVEL=DEBUG
    NEPGUARD__CHECK__MAX_WORKERS=4
    NEPGUARD__FIXES__APPLICABILITY=attribute
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        NEPGUARD__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. The CLI raises this to DEBUG with --verbose.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class CheckConfig(BaseModel):
    """Conformance check configuration.

    Env vars:
        NEPGUARD__CHECK__PROFILES: JSON list of profile ids to run
        NEPGUARD__CHECK__SKIP_FOREIGN_MARKERS: Suppress marker findings for unclaimed profiles
        NEPGUARD__CHECK__MAX_WORKERS: Parallel class-check workers
    """

    profiles: list[str] = Field(
        default_factory=list,
        description="Profile ids to check. Empty means every registered profile.",
    )
    skip_foreign_markers: bool = Field(
        default=True,
        description="When a class already claims one enabled profile, do not report "
        "missing applicability markers for the other profiles.",
    )
    max_workers: int = Field(
        default=1,
        description="Parallel class-check workers. Checks are pure, so any value is safe; "
        ">1 only pays off for large compilation units.",
    )

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_workers must be >= 1, got {v}")
        return v


class FixConfig(BaseModel):
    """Fix synthesis configuration.

    Env vars:
        NEPGUARD__FIXES__APPLICABILITY: Preferred applicability fix for fix-all
        NEPGUARD__FIXES__MAX_PASSES: Max fix-all passes
    """

    applicability: Literal["base_type", "attribute"] = Field(
        default="base_type",
        description="Which applicability fix fix-all picks: inherit the standard's base "
        "type or add the [SupportedStandards] attribute.",
    )
    max_passes: int = Field(
        default=10,
        description="Max fix-all passes. Each pass applies one fix per diagnostic.",
    )

    @field_validator("max_passes")
    @classmethod
    def validate_max_passes(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_passes must be >= 1, got {v}")
        return v


class NepGuardConfig(BaseModel):
    """Root configuration for nepguard.

    All settings can be configured via:
    1. Environment variables: NEPGUARD__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    check: CheckConfig = Field(default_factory=CheckConfig)
    fixes: FixConfig = Field(default_factory=FixConfig)
