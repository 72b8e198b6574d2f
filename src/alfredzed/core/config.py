"""Application configuration management.

Handles loading and validating configuration from:
    - Environment variables set by the launcher (projects_directories, HOME)
    - ALFREDZED_* environment variables
    - An optional TOML/JSON config file at a fixed location
    - Default values

Key components:
    - AppConfig: Main configuration model
    - load_config(): Safe config loading with fallback
    - ConfigLoadResult: Metadata about config source
    - user_config_root(): Platform configuration directory
"""

from __future__ import annotations

import json
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import platformdirs
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from alfredzed.core.result import ConfigUnavailableError

APP_NAME = "alfred-zed"
CONFIG_ENV_VAR = "ALFREDZED_CONFIG"


class ConfigError(RuntimeError):
    """Raised when the config file cannot be parsed."""


class AppConfig(BaseSettings):
    """Settings read once per invocation and passed into the sources."""

    model_config = SettingsConfigDict(
        env_prefix="ALFREDZED_",
        extra="ignore",
        populate_by_name=True,
    )

    projects_directories: str = Field(
        default="",
        validation_alias="projects_directories",
        description="Newline-delimited list of project root directories.",
    )
    home: str = Field(
        default="",
        validation_alias="HOME",
        description="Home directory used to expand a leading ~ in project roots.",
    )
    history_db: Path | None = Field(
        default=None, description="Override for the Zed workspace history database."
    )
    log_level: str = Field(default="WARNING", description="Log level for stderr output.")

    @property
    def projects_roots(self) -> list[str]:
        """Non-blank, trimmed lines of ``projects_directories``."""
        return [line.strip() for line in self.projects_directories.splitlines() if line.strip()]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
    ]:
        # Ensure environment variables override config file entries.
        return (env_settings, init_settings, dotenv_settings, file_secret_settings)


@dataclass
class ConfigLoadResult:
    path: Path
    file_loaded: bool
    env_overrides: set[str]
    error: str | None = None


def user_config_root() -> Path:
    """Return the platform configuration directory.

    Raises:
        ConfigUnavailableError: if the directory cannot be determined.
    """
    base = platformdirs.user_config_dir(roaming=True)
    if not base or base.startswith("~"):
        raise ConfigUnavailableError(
            "Cannot resolve the user configuration directory", context={"candidate": base}
        )
    return Path(base)


def _resolve_config_path(config_path: Path | None) -> Path:
    if config_path is not None:
        return config_path.expanduser()
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    app_dir = platformdirs.user_config_dir(APP_NAME, appauthor=False, roaming=True)
    return Path(app_dir) / "config.toml"


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc

    parser = json.loads if path.suffix.lower() == ".json" else tomllib.loads

    try:
        data = parser(raw)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Syntax error in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config root in {path} must be a mapping.")

    return data


def _detect_env_overrides() -> set[str]:
    """Return the names of fields set through environment variables."""
    prefix = AppConfig.model_config.get("env_prefix", "")
    environ = {key.lower() for key in os.environ}
    overrides: set[str] = set()

    for name, field in AppConfig.model_fields.items():
        alias = field.validation_alias
        env_key = alias if isinstance(alias, str) else f"{prefix}{name}"
        if env_key.lower() in environ:
            overrides.add(name)

    return overrides


def load_config(config_path: Path | None = None) -> tuple[AppConfig, ConfigLoadResult]:
    """
    Load configuration with Safe Mode fallback.
    If the file is invalid, returns environment-only config + error message.
    """
    resolved_path = _resolve_config_path(config_path)
    env_overrides = _detect_env_overrides()

    error: str | None = None
    file_loaded = False
    file_data: dict[str, Any] = {}

    try:
        file_data = _read_config_file(resolved_path)
        file_loaded = resolved_path.is_file()
    except ConfigError as exc:
        error = str(exc)

    try:
        config = AppConfig(**file_data)
    except ValidationError as exc:
        error = str(exc)
        config = AppConfig()

    load_result = ConfigLoadResult(
        path=resolved_path,
        file_loaded=file_loaded,
        env_overrides=env_overrides,
        error=error,
    )

    return config, load_result


__all__ = [
    "APP_NAME",
    "CONFIG_ENV_VAR",
    "AppConfig",
    "ConfigError",
    "ConfigLoadResult",
    "load_config",
    "user_config_root",
]
