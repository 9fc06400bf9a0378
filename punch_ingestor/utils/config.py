"""Configuration loader and settings helpers for punch_ingestor."""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic import (
    ValidationError as PydanticValidationError,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import ConfigurationError


logger = logging.getLogger(__name__)


def load_yaml_config(config_path: str | Path) -> dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        ConfigurationError: If file not found or invalid YAML
    """
    try:
        with open(config_path) as f:
            config = yaml.safe_load(f)
            return config if config else {}
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}")


class DatabasePoolSettings(BaseModel):
    """Connection pooling configuration for the SQLAlchemy engine."""

    model_config = ConfigDict(extra="forbid")

    pool_size: int = Field(default=5, ge=1)
    max_overflow: int = Field(default=10, ge=0)
    timeout: float = Field(default=30.0, gt=0)
    recycle_seconds: int = Field(default=1800, ge=0)
    pre_ping: bool = True


class ParsingSettings(BaseModel):
    """Limits applied to incoming attendance text."""

    model_config = ConfigDict(extra="forbid")

    max_text_chars: int = Field(default=10_000_000, ge=1)
    diagnostic_excerpt_chars: int = Field(default=5000, ge=0)


class DiagnosticThresholds(BaseModel):
    """Threshold rules used by the diagnostic classification guess."""

    model_config = ConfigDict(extra="forbid")

    summary_min_dates: int = Field(default=20, ge=0)
    summary_min_times: int = Field(default=40, ge=0)
    punch_min_headers: int = Field(default=5, ge=0)
    punch_min_times: int = Field(default=20, ge=0)
    status_min_tokens: int = Field(default=10, ge=0)
    fragmentation_ratio: float = Field(default=0.5, ge=0, le=1)
    time_only_min_lines: int = Field(default=5, ge=0)
    numeric_only_min_lines: int = Field(default=10, ge=0)
    short_line_length: int = Field(default=10, ge=0)


class ServiceConfiguration(BaseModel):
    """Validated runtime configuration merged from base and environment overrides."""

    version: int = Field(default=1, ge=1)
    environment: str = "development"
    required_env: list[str] = Field(default_factory=list)

    @field_validator("environment")
    @classmethod
    def _normalize_environment(cls, value: str) -> str:
        return value.lower()


class GlobalSettings(BaseSettings):
    """Global application settings sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PUNCH_",
        env_nested_delimiter="__",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = "development"
    config_profile: str | None = None
    log_level: str = "INFO"
    database_url: str | None = None
    database: DatabasePoolSettings = DatabasePoolSettings()
    config_dir: Path = Path("config")
    api_keys: list[str] = Field(default_factory=list)
    parsing: ParsingSettings = ParsingSettings()
    diagnostics: DiagnosticThresholds = DiagnosticThresholds()

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        """Ensure log level values are uppercase for logging config."""

        return value.upper()

    @field_validator("api_keys", mode="before")
    @classmethod
    def _parse_api_keys(cls, value: Any) -> list[str]:
        """Support comma-separated strings or iterables for API key configuration."""

        if value is None:
            return []
        if isinstance(value, str):
            keys = [item.strip() for item in value.split(",")]
            return [key for key in keys if key]
        if isinstance(value, list | tuple | set):
            return [str(item) for item in value if str(item).strip()]
        raise ValueError("api_keys must be a comma-separated string or iterable of strings")

    @field_validator("config_dir", mode="before")
    @classmethod
    def _expand_paths(cls, value: Any) -> Any:
        """Allow string paths and expand user markers."""

        if isinstance(value, Path):
            return value
        if isinstance(value, str):
            return Path(value).expanduser()
        return value

    @field_validator("config_profile", mode="before")
    @classmethod
    def _normalize_config_profile(cls, value: Any) -> Any:
        if value is None:
            return value
        if not isinstance(value, str) or not value.strip():
            raise ValueError("config_profile must be a non-empty string if provided")
        return value.strip().lower()


def _deep_merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries without mutating the inputs."""

    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge_dicts(result[key], value)
        else:
            result[key] = value
    return result


@lru_cache(maxsize=8)
def _load_service_configuration_cached(config_dir: str, profile: str) -> ServiceConfiguration:
    """Load and cache the service configuration for a given profile."""

    directory = Path(config_dir)
    base_path = directory / "settings.base.yaml"
    if not base_path.exists():
        logger.debug("No base configuration template at '%s'; using defaults", base_path)
        return ServiceConfiguration(environment=profile)

    base_config = load_yaml_config(base_path)

    profile_path = directory / f"settings.{profile}.yaml"
    profile_config: dict[str, Any] = {}
    if profile_path.exists():
        profile_config = load_yaml_config(profile_path)
    else:
        logger.debug("No configuration override found for profile '%s'", profile)

    merged = _deep_merge_dicts(base_config, profile_config)
    merged.setdefault("environment", profile)

    try:
        return ServiceConfiguration.model_validate(merged)
    except PydanticValidationError as exc:
        raise ConfigurationError(
            "Invalid configuration template for profile "
            f"'{profile}': {exc}"
        ) from exc


def get_service_configuration(
    settings: GlobalSettings | None = None,
    *,
    reload: bool = False,
) -> ServiceConfiguration:
    """Return the merged service configuration for the active profile."""

    if settings is None:
        settings = get_settings()

    profile = settings.config_profile or settings.environment

    if reload:
        _load_service_configuration_cached.cache_clear()

    return _load_service_configuration_cached(str(settings.config_dir), profile.lower())


def ensure_runtime_configuration(settings: GlobalSettings | None = None) -> GlobalSettings:
    """Validate configuration templates and ensure required env vars are present."""

    settings = settings or get_settings()

    service_config = get_service_configuration(settings=settings, reload=True)

    required_env: set[str] = set(service_config.required_env)
    required_env.update({"PUNCH_DATABASE_URL", "PUNCH_API_KEYS"})

    missing = sorted(var for var in required_env if not os.environ.get(var))

    if missing:
        joined = ", ".join(missing)
        raise ConfigurationError(
            "Missing required environment variables: "
            f"{joined}. Configure them via configuration templates or .env files."
        )

    return settings


@lru_cache(maxsize=1)
def _get_settings_cached() -> GlobalSettings:
    return GlobalSettings()


def get_settings(*, reload: bool = False) -> GlobalSettings:
    """Return cached settings, optionally forcing a reload."""

    if reload:
        _get_settings_cached.cache_clear()
    return _get_settings_cached()
