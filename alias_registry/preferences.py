"""User settings for the alias registry.

Loads settings from ``<config-root>/alias-registry/settings.yaml`` (or the
file named by ``$ALIAS_REGISTRY_SETTINGS``). Falls back to sensible
defaults if the file doesn't exist or is invalid. Creates a default file
on first run so users can discover and edit it.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .constants import CLIENT_NAME
from .log import logger
from .platform import CONFIG_DIR_ENV, aliases_file, client_config_dir, config_root

SETTINGS_ENV = "ALIAS_REGISTRY_SETTINGS"

_DEFAULT_YAML = """\
# Alias registry settings
# Delete this file to reset to defaults.

client:
  name: "alias-registry"         # aliases live in <config-dir>/<name>/<name>_aliases.json

paths:
  config_dir: ""                 # override the per-platform config root (empty = auto)

logging:
  level: "WARNING"               # DEBUG, INFO, WARNING, ERROR
"""

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ClientSettings:
    """Identity of the client whose aliases are stored."""

    name: str = CLIENT_NAME


@dataclass
class PathSettings:
    """Filesystem overrides."""

    config_dir: str = ""  # Empty means use the platform config root


@dataclass
class LoggingSettings:
    """Logging level for the package logger."""

    level: str = "WARNING"


@dataclass
class Settings:
    """Top-level settings."""

    client: ClientSettings = field(default_factory=ClientSettings)
    paths: PathSettings = field(default_factory=PathSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    def resolved_config_root(self) -> Path:
        """Return the config root, honouring the environment then the file."""
        if not os.environ.get(CONFIG_DIR_ENV) and self.paths.config_dir:
            return Path(self.paths.config_dir).expanduser()
        return config_root()

    def aliases_path(self) -> Path:
        """Return the alias file for the configured client."""
        return aliases_file(self.client.name, self.resolved_config_root())

    def log_level(self) -> int:
        """Return the configured level as a :mod:`logging` constant."""
        return getattr(logging, self.logging.level, logging.WARNING)


def settings_path() -> Path:
    """Return the settings file location."""
    override = os.environ.get(SETTINGS_ENV)
    if override:
        return Path(override).expanduser()
    return client_config_dir(CLIENT_NAME) / "settings.yaml"


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from YAML file.

    Falls back to sensible defaults if the file doesn't exist or is invalid.
    Creates a default settings file on first run.
    """
    path = path or settings_path()
    settings = Settings()

    if path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            if isinstance(data.get("client"), dict):
                name = str(data["client"].get("name") or "").strip()
                if name:
                    settings.client.name = name
            if isinstance(data.get("paths"), dict):
                settings.paths.config_dir = str(data["paths"].get("config_dir") or "")
            if isinstance(data.get("logging"), dict):
                level = str(data["logging"].get("level") or "").upper()
                if level in _LOG_LEVELS:
                    settings.logging.level = level
        except (OSError, UnicodeDecodeError, yaml.YAMLError, AttributeError):
            logger.debug("Invalid settings file %s, using defaults", path, exc_info=True)
            return Settings()
    else:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_DEFAULT_YAML, encoding="utf-8")
        except OSError:
            logger.debug("Could not write default settings to %s", path, exc_info=True)

    return settings
