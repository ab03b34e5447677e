"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (NEPGUARD__SECTION__KEY)
3. Repo config (.nepguard.yaml in the working directory)
4. Global config (~/.config/nepguard/config.yaml)
5. Built-in defaults (lowest priority)
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from nepguard.config.models import (
    CheckConfig,
    FixConfig,
    LoggingConfig,
    NepGuardConfig,
)
from nepguard.core.errors import ConfigError
from nepguard.profiles.registry import registry

GLOBAL_CONFIG_PATH = Path("~/.config/nepguard/config.yaml").expanduser()
REPO_CONFIG_NAME = ".nepguard.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top-level value must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class with instance-based YAML source (thread-safe)."""

    class NepGuardSettings(BaseSettings):
        """Root config. Env vars: NEPGUARD__LOGGING__LEVEL, NEPGUARD__CHECK__PROFILES, etc."""

        model_config = SettingsConfigDict(
            env_prefix="NEPGUARD__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        check: CheckConfig = CheckConfig()
        fixes: FixConfig = FixConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml files
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return NepGuardSettings


def load_config(
    project_root: Path | None = None,
    *,
    config_file: Path | None = None,
    **kwargs: Any,
) -> NepGuardConfig:
    """Load config: defaults < global yaml < repo yaml < env vars < kwargs.

    Args:
        project_root: Directory holding .nepguard.yaml.
                      Defaults to current working directory.
        config_file: Explicit config file, used instead of .nepguard.yaml.
        **kwargs: Override values (highest precedence).

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On invalid YAML syntax or validation errors.
    """
    project_root = project_root or Path.cwd()
    repo_path = config_file or project_root / REPO_CONFIG_NAME

    yaml_config = _deep_merge(_load_yaml(GLOBAL_CONFIG_PATH), _load_yaml(repo_path))

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
    config = NepGuardConfig.model_validate(settings.model_dump())
    _check_profile_ids(config)
    return config


def _check_profile_ids(config: NepGuardConfig) -> None:
    """Reject configured profile ids that are not registered."""
    for profile_id in config.check.profiles:
        if registry.get(profile_id) is None:
            raise ConfigError.invalid_value(
                "check.profiles",
                profile_id,
                f"unknown profile; known profiles: {', '.join(registry.ids())}",
            )
