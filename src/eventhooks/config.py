"""Configuration loading and validation for the event hook registry."""

from __future__ import annotations

from copy import deepcopy
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

from .exceptions import ConfigValidationError

import tomllib  # stdlib since Python 3.11 (project requires >=3.11)

LOGGER = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "eventhooks"
CONFIG_PATH = CONFIG_DIR / "config.toml"
CONFIG_ENV_VAR = "EVENTHOOKS_CONFIG"

VALID_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class RegistryConfig(BaseModel):
    """Behaviour switches for an ``EventRegistry``."""

    validate_handlers: bool = True
    strict_names: bool = False
    log_fires: bool = True


class LoggingConfig(BaseModel):
    """Logging behavior and output destinations."""

    level: str = "INFO"
    structured: bool = True
    log_to_file: bool = False
    log_file_path: str = "~/.local/state/eventhooks/eventhooks.log"

    @field_validator("level", mode="before")
    @classmethod
    def _validate_level(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("Logging level must be a string.")
        normalized = value.strip().upper()
        if normalized not in VALID_LOG_LEVELS:
            raise ValueError(f"Unsupported log level {normalized!r}.")
        return normalized

    @field_validator("log_file_path", mode="before")
    @classmethod
    def _validate_log_file_path(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("log_file_path must be a string.")
        normalized = value.strip()
        if not normalized:
            raise ValueError("log_file_path must not be empty.")
        return normalized


class Config(BaseModel):
    """Root configuration model for all sections."""

    registry: RegistryConfig = RegistryConfig()
    logging: LoggingConfig = LoggingConfig()


DEFAULT_CONFIG: dict[str, dict[str, Any]] = Config().model_dump()


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override values onto base values."""
    merged: dict[str, Any] = deepcopy(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _safe_default_config() -> dict[str, dict[str, Any]]:
    """Return a deep copy of validated default config data."""
    return deepcopy(DEFAULT_CONFIG)


def _validate_config(raw: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Validate merged config and fallback to safe defaults when possible."""
    try:
        config = Config.model_validate(raw)
        return config.model_dump()
    except ValidationError as exc:
        LOGGER.warning("Configuration validation failed, using safe defaults: %s", exc)
        return _safe_default_config()
    except Exception as exc:  # noqa: BLE001 - unexpected model construction failure.
        raise ConfigValidationError(f"Unable to validate configuration: {exc}") from exc


def resolve_config_path(config_path: Path | None = None) -> Path:
    """Pick the explicit path, then ``$EVENTHOOKS_CONFIG``, then the default."""
    if config_path is not None:
        return config_path
    env_path = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if env_path:
        return Path(env_path).expanduser()
    return CONFIG_PATH


def load_config(config_path: Path | None = None) -> dict[str, dict[str, Any]]:
    """
    Load configuration from TOML, merge with defaults, and validate.

    A missing file is not an error; defaults are returned instead.
    """
    target_path = resolve_config_path(config_path)

    raw_data: dict[str, Any] = {}
    if target_path.exists():
        try:
            raw_data = tomllib.loads(target_path.read_text(encoding="utf-8"))
        except (
            Exception
        ) as exc:  # noqa: BLE001 - we must not crash on invalid user config.
            LOGGER.warning("Failed to parse config at %s: %s", target_path, exc)
            raw_data = {}

    merged = (
        _deep_merge(DEFAULT_CONFIG, raw_data)
        if isinstance(raw_data, dict)
        else _safe_default_config()
    )
    return _validate_config(merged)
