"""Configuration for protoforge.

Settings come from, in increasing precedence:

1. Defaults on ProtoforgeSettings
2. A config file: ``protoforge.toml`` or the ``[tool.protoforge]`` table of
   ``pyproject.toml`` in the current directory, or an explicit TOML, YAML or
   JSON file
3. Environment variables ``PROTOFORGE_STRICT_BUILDERS`` and
   ``PROTOFORGE_LOG_LEVEL``

Only the CLI reads config files. Library code such as Builder() uses
get_settings(), which starts from defaults and the environment unless the
settings were installed with configure().
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

from protoforge.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ProtoforgeSettings(BaseModel):
    """Process-wide settings.

    Attributes:
        strict_builders: Builders reject any use after build().
        log_level: Level applied by the CLI when configuring logging.
        bootstrap: Registration files the CLI loads before running a command.
    """

    strict_builders: bool = True
    log_level: str = "WARNING"
    bootstrap: list[str] = []

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_LOG_LEVELS}, got {value!r}")
        return value


class ConfigLoader:
    """Load configuration from TOML, YAML or JSON files.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load()
        >>> config.get("strict_builders", True)
        True
    """

    DEFAULT_CONFIG_NAMES = ["protoforge.toml", "pyproject.toml"]

    def load(self, config_path: Path | None = None) -> dict[str, Any]:
        """Load configuration from file.

        Args:
            config_path: Explicit config path, or None to auto-discover

        Returns:
            Configuration dictionary (empty if nothing was found)

        Raises:
            ConfigurationError: If the file is missing, unreadable or has an
                unsupported format
        """
        if config_path:
            return self._load_file(Path(config_path))

        for name in self.DEFAULT_CONFIG_NAMES:
            path = Path.cwd() / name
            if path.exists():
                return self._load_file(path)

        return {}

    def _load_file(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")
        try:
            if path.suffix == ".toml":
                data = self._load_toml(path)
            elif path.suffix in (".yaml", ".yml"):
                data = self._load_yaml(path)
            elif path.suffix == ".json":
                data = json.loads(path.read_text())
            else:
                raise ConfigurationError(f"Unsupported config format: {path.suffix}")
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Failed to parse {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping at top level")
        return data

    def _load_toml(self, path: Path) -> dict[str, Any]:
        try:
            import tomllib
        except ImportError:
            import tomli as tomllib

        with open(path, "rb") as f:
            data = tomllib.load(f)

        # pyproject.toml keeps our section under [tool.protoforge]
        if "tool" in data and "protoforge" in data["tool"]:
            return data["tool"]["protoforge"]
        if path.name == "pyproject.toml":
            return {}
        return data.get("protoforge", data)

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        import yaml

        return yaml.safe_load(path.read_text()) or {}


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}

    strict = os.getenv("PROTOFORGE_STRICT_BUILDERS")
    if strict is not None:
        value = strict.strip().lower()
        if value in ("1", "true", "yes", "on"):
            overrides["strict_builders"] = True
        elif value in ("0", "false", "no", "off"):
            overrides["strict_builders"] = False
        else:
            logger.warning("Invalid PROTOFORGE_STRICT_BUILDERS=%r, keeping configured value", strict)

    level = os.getenv("PROTOFORGE_LOG_LEVEL")
    if level is not None:
        if level.strip().upper() in _LOG_LEVELS:
            overrides["log_level"] = level.strip().upper()
        else:
            logger.warning("Invalid PROTOFORGE_LOG_LEVEL=%r, keeping configured value", level)

    return overrides


def load_settings(config_path: Path | None = None) -> ProtoforgeSettings:
    """Build settings from defaults, a config file and the environment.

    Raises:
        ConfigurationError: If the config file is invalid.
    """
    data = ConfigLoader().load(config_path)
    data.update(_env_overrides())
    try:
        return ProtoforgeSettings(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid protoforge settings: {e}") from e


_settings: ProtoforgeSettings | None = None
_settings_lock = threading.Lock()


def get_settings() -> ProtoforgeSettings:
    """Get the process settings.

    On first use, without a prior configure(), settings are built from
    defaults and environment variables. Project files in the current
    directory are not read.
    """
    global _settings
    if _settings is None:
        with _settings_lock:
            if _settings is None:
                _settings = ProtoforgeSettings(**_env_overrides())
    return _settings


def configure(settings: ProtoforgeSettings) -> None:
    """Replace the process settings."""
    global _settings
    with _settings_lock:
        _settings = settings


def reset_settings() -> None:
    """Forget loaded settings so the next get_settings() reloads them."""
    global _settings
    with _settings_lock:
        _settings = None
