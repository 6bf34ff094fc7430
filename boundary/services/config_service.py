#!/usr/bin/env python3
# ======================================================================
#  Config Service - Settings loading and caching
#  - Loads settings from defaults, YAML files, overrides and env vars
#  - Caches composed settings
#  - Provides reload() for runtime changes
# ======================================================================

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from boundary.helpers.exceptions import ConfigError

# ======================================================================
# Defaults
# ======================================================================

DEFAULT_CONFIG: dict[str, Any] = {
    "warnings_as_errors": False,
    "force": False,
    "log_level": "INFO",
    "user_apps": [],
}

CONFIG_FILE_CANDIDATES = (Path("boundary.yaml"), Path("config") / "boundary.yaml")
CONFIG_PATH_ENV = "BOUNDARY_CONFIG_PATH"
ENV_PREFIX = "BOUNDARY_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class BoundarySettings:
    """
    Typed view of the composed settings.

    Attributes:
        warnings_as_errors: Fail the run when any violation is reported
        force: Ignore the cached view and rebuild
        log_level: Logging level name
        user_apps: Extra user-owned packages (local path deps)
    """

    warnings_as_errors: bool = False
    force: bool = False
    log_level: str = "INFO"
    user_apps: tuple[str, ...] = ()


class ConfigService:
    """
    Service for loading and caching boundary settings.

    Later sources override earlier ones:
      1) Built-in defaults
      2) ./boundary.yaml or ./config/boundary.yaml (if present)
      3) $BOUNDARY_CONFIG_PATH (if set)
      4) overrides dict passed in
      5) Environment variables (BOUNDARY_*)
    """

    def __init__(self, overrides: dict[str, Any] | None = None, base_dir: Path | None = None) -> None:
        self._overrides = dict(overrides or {})
        self._base_dir = base_dir or Path.cwd()
        self._config: dict[str, Any] | None = None
        self._logger = logging.getLogger(__name__)

    def get_config(self, force_reload: bool = False) -> dict[str, Any]:
        """
        Get the composed configuration.

        Args:
            force_reload: If True, bypass cache and reload from sources

        Returns:
            Complete configuration dict
        """
        if self._config is None or force_reload:
            self._config = self._compose()
        return self._config

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a config value by dotted path.

        Example:
            >>> service.get("warnings_as_errors")
            False
        """
        node: Any = self.get_config()
        for part in key_path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def reload(self) -> dict[str, Any]:
        """Force reload configuration from all sources."""
        self._logger.info("Reloading boundary settings from all sources")
        return self.get_config(force_reload=True)

    def settings(self) -> BoundarySettings:
        """Composed configuration as a validated BoundarySettings."""
        cfg = self.get_config()

        user_apps = cfg.get("user_apps") or []
        if isinstance(user_apps, str):
            user_apps = [app.strip() for app in user_apps.split(",") if app.strip()]
        if not isinstance(user_apps, list) or not all(isinstance(app, str) for app in user_apps):
            raise ConfigError(f"user_apps must be a list of package ids, got {user_apps!r}")

        return BoundarySettings(
            warnings_as_errors=_as_bool("warnings_as_errors", cfg.get("warnings_as_errors")),
            force=_as_bool("force", cfg.get("force")),
            log_level=str(cfg.get("log_level", "INFO")).upper(),
            user_apps=tuple(user_apps),
        )

    # ----------------------------------------------------------------------
    # Private composition logic
    # ----------------------------------------------------------------------

    def _compose(self) -> dict[str, Any]:
        cfg: dict[str, Any] = dict(DEFAULT_CONFIG)

        for candidate in CONFIG_FILE_CANDIDATES:
            path = self._base_dir / candidate
            if path.is_file():
                cfg.update(self._load_yaml(path))
                break

        env_path = os.environ.get(CONFIG_PATH_ENV)
        if env_path:
            path = Path(env_path)
            if not path.is_file():
                raise ConfigError(f"{CONFIG_PATH_ENV} points to a missing file: {path}")
            cfg.update(self._load_yaml(path))

        cfg.update(self._overrides)

        for key in DEFAULT_CONFIG:
            env_value = os.environ.get(f"{ENV_PREFIX}{key.upper()}")
            if env_value is not None:
                cfg[key] = env_value

        return cfg

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Settings file {path} must contain a mapping")

        self._logger.debug(f"[ConfigService] Loaded settings from {path}")
        return data


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ConfigError(f"{key} must be a boolean, got {value!r}")
