"""Cross-platform abstractions for the alias registry.

Detects the runtime platform once at import time and provides
platform-appropriate config paths. Every other module imports from here
instead of doing its own platform detection.

Supported platforms:
  - linux   (native Linux)
  - wsl     (Windows Subsystem for Linux)
  - macos   (macOS / Darwin)
  - windows (native Windows)
"""

from __future__ import annotations

import os
import platform
from pathlib import Path

from .constants import ALIASES_FILE_SUFFIX, CLIENT_NAME
from .log import logger

# ---------------------------------------------------------------------------
# Platform detection (runs once at import time)
# ---------------------------------------------------------------------------

_system = platform.system()  # "Linux", "Darwin", "Windows"

try:
    _uname_release = platform.uname().release.lower()
except OSError:
    _uname_release = ""

IS_WINDOWS = _system == "Windows"
IS_MACOS = _system == "Darwin"
IS_LINUX = _system == "Linux"
IS_WSL = IS_LINUX and "microsoft" in _uname_release

if IS_WINDOWS:
    PLATFORM = "windows"
elif IS_WSL:
    PLATFORM = "wsl"
elif IS_MACOS:
    PLATFORM = "macos"
else:
    PLATFORM = "linux"

CONFIG_DIR_ENV = "ALIAS_REGISTRY_CONFIG_DIR"

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


def config_root() -> Path:
    """Return the per-user configuration root for the current platform.

    ``$ALIAS_REGISTRY_CONFIG_DIR`` wins everywhere. Otherwise:
    ``$XDG_CONFIG_HOME`` or ``~/.config`` on Linux/WSL,
    ``~/Library/Preferences`` on macOS and ``%LOCALAPPDATA%`` on Windows.
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()

    if IS_WINDOWS:
        local = os.environ.get("LOCALAPPDATA", "")
        if local:
            return Path(local)
        return Path.home() / "AppData" / "Local"
    if IS_MACOS:
        return Path.home() / "Library" / "Preferences"

    # Linux / WSL
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


def client_config_dir(client_name: str = CLIENT_NAME, root: Path | None = None) -> Path:
    """Return ``<config-root>/<client_name>``."""
    return (root or config_root()) / client_name


def aliases_file(client_name: str = CLIENT_NAME, root: Path | None = None) -> Path:
    """Return the alias file location, ``<client>/<client>_aliases.json``."""
    path = client_config_dir(client_name, root) / f"{client_name}{ALIASES_FILE_SUFFIX}"
    logger.debug("Alias file resolved to %s (%s)", path, PLATFORM)
    return path


# ---------------------------------------------------------------------------
# Path display helpers
# ---------------------------------------------------------------------------


def abbreviate_home(path_str: str) -> str:
    """Replace the user's home directory prefix with ``~``."""
    home = str(Path.home())
    if path_str.startswith(home):
        return "~" + path_str[len(home) :]
    return path_str
