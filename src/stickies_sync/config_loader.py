"""Config file discovery and loading."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import DotEnvSettingsSource, EnvSettingsSource

from .config_settings import Config
from .error_codes import ErrorCode
from .exceptions import ConfigurationError
from .utils.logging import get_logger

_config: Config | None = None


def _find_config_file(config_path: Path | None) -> Path | None:
    logger = get_logger(__name__)

    candidate_paths: list[Path] = []
    if config_path:
        candidate_paths.append(config_path.expanduser())
        logger.debug("config_searching", source="cli_argument", path=str(config_path))
    else:
        env_path = os.getenv("STICKIES_CONFIG")
        if env_path:
            candidate_paths.append(Path(env_path).expanduser())
            logger.debug(
                "config_searching", source="environment_variable", path=env_path
            )
        candidate_paths.append(Path.cwd() / "config.yaml")

    for candidate in candidate_paths:
        if candidate.exists():
            logger.debug("config_file_found", config_path=str(candidate))
            return candidate

    if config_path:
        msg = f"Config file not found: {config_path}"
        raise ConfigurationError(msg, error_code=ErrorCode.CFG_INVALID.value)

    logger.debug(
        "config_file_not_found", searched_paths=[str(p) for p in candidate_paths]
    )
    return None


def _read_yaml(path: Path) -> dict[str, Any]:
    logger = get_logger(__name__)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(
            "config_yaml_load_error",
            config_path=str(path),
            error=str(e),
            error_type=type(e).__name__,
        )
        msg = f"Failed to parse config file: {path}"
        suggestion = (
            "Check YAML syntax (indentation, colons, quotes). "
            f"Original error: {e}"
        )
        raise ConfigurationError(
            msg, suggestion=suggestion, error_code=ErrorCode.CFG_PARSE_FAILED.value
        ) from e

    if not isinstance(data, dict):
        msg = f"Config file must contain a mapping, got {type(data).__name__}"
        raise ConfigurationError(msg, error_code=ErrorCode.CFG_PARSE_FAILED.value)
    return data


def _fields_set_by_environment() -> set[str]:
    """Names of Config fields given by STICKIES_* variables or the .env file."""
    return set(EnvSettingsSource(Config)()) | set(DotEnvSettingsSource(Config)())


def load_config(config_path: Path | None = None, **overrides: Any) -> Config:
    """Load configuration from config.yaml, environment and explicit overrides.

    Precedence, lowest first: field defaults, YAML file, ``STICKIES_*``
    environment variables (and ``.env``), keyword overrides.
    """
    logger = get_logger(__name__)

    resolved = _find_config_file(config_path)
    yaml_data = _read_yaml(resolved) if resolved else {}

    # Environment (including .env) wins over YAML.
    env_fields = _fields_set_by_environment()
    config_kwargs = {
        key: value for key, value in yaml_data.items() if key not in env_fields
    }
    config_kwargs.update({k: v for k, v in overrides.items() if v is not None})

    try:
        config = Config(**config_kwargs)
        config.validate_config()
    except ValidationError as e:
        logger.error(
            "config_validation_error",
            error=str(e),
            config_path=str(resolved) if resolved else None,
        )
        msg = "Invalid configuration"
        raise ConfigurationError(
            msg,
            suggestion=str(e),
            error_code=ErrorCode.CFG_INVALID.value,
            context={"config_path": str(resolved) if resolved else None},
        ) from e

    logger.debug(
        "config_loaded",
        api_base_url=config.api_base_url,
        debounce_seconds=config.debounce_seconds,
        config_path=str(resolved) if resolved else None,
    )
    return config


def get_config() -> Config:
    """Get singleton config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Config) -> None:
    """Set singleton config instance (for testing)."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset global config instance (for testing only)."""
    global _config
    _config = None


__all__ = ["Config", "get_config", "load_config", "reset_config", "set_config"]
