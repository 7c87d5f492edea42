"""Module-level constants for the alias registry."""

from __future__ import annotations

# Default client name; the alias file lives under <config-root>/<client>/
CLIENT_NAME = "alias-registry"

# Context used for fresh registries and for files written before contexts
DEFAULT_CONTEXT = "default"

# Working-directory policies
WORKING_DIR_MAP = "map"
WORKING_DIR_DEFAULT = "default"
WORKING_DIRECTORIES: tuple[str, ...] = (WORKING_DIR_MAP, WORKING_DIR_DEFAULT)

ALIASES_FILE_SUFFIX = "_aliases.json"
BACKUP_SUFFIX = ".bak"

# On-disk document keys
ACTIVE_CONTEXT_KEY = "active-context"
CONTEXTS_KEY = "contexts"
