"""Base JSON persistence store."""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
from pathlib import Path

from ..constants import BACKUP_SUFFIX
from ..errors import AliasFileError
from ..log import logger


class JsonStore:
    """JSON file store with lenient load and crash-safe write.

    A save never touches the live file until the new content is fully on
    disk: the data goes to a temporary sibling first, the current file is
    rotated to ``<name>.bak`` and the temporary file is then renamed into
    place. At every point there is at least one complete file on disk.

    Subclasses override ``_default()`` to provide the empty-state value
    (``{}`` for dicts, ``[]`` for lists) and ``kind`` to name the data in
    error messages.
    """

    kind = "data"

    def __init__(self, path: Path) -> None:
        self.path = path

    @property
    def backup_path(self) -> Path:
        return self.path.with_name(self.path.name + BACKUP_SUFFIX)

    # -- core I/O -------------------------------------------------------------

    def load_raw(self) -> dict | list:
        """Read and parse the JSON file.

        A missing file or malformed content yields ``_default()``; a file
        that exists but cannot be read raises :class:`AliasFileError`.
        """
        if not self.path.exists():
            logger.debug("%s does not exist, starting empty", self.path)
            return self._default()
        try:
            raw = self.path.read_bytes()
        except OSError as exc:
            raise AliasFileError(f"Error opening file '{self.path}'", self.path) from exc
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            logger.debug("failed to parse JSON store %s", self.path, exc_info=True)
        return self._default()

    def save_raw(self, data: dict | list, *, sort_keys: bool = False) -> None:
        """Write *data* as pretty-printed JSON, keeping one backup generation."""
        text = json.dumps(data, indent=2, ensure_ascii=False, sort_keys=sort_keys)
        temp_path = self._write_temp(text + "\n")
        self._rotate_backup()
        self._promote(temp_path)

    # -- save steps -----------------------------------------------------------

    def _write_temp(self, text: str) -> Path:
        """Write *text* to a new file beside the target and return its path."""
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, name = tempfile.mkstemp(
                prefix=f"{self.path.name}.", suffix=".tmp", dir=directory
            )
        except OSError as exc:
            raise AliasFileError(
                f"cannot create temporary file in {directory}", directory
            ) from exc

        temp_path = Path(name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
                fh.flush()
                os.fsync(fh.fileno())
        except OSError as exc:
            with contextlib.suppress(OSError):
                temp_path.unlink()
            raise AliasFileError(
                f"cannot write temporary file {temp_path}", temp_path
            ) from exc

        logger.debug("wrote %d bytes to %s", len(text), temp_path)
        return temp_path

    def _rotate_backup(self) -> None:
        """Move the current file to ``.bak``, replacing any older backup."""
        if not self.path.exists():
            return

        backup = self.backup_path
        if backup.exists():
            try:
                backup.unlink()
            except OSError as exc:
                raise AliasFileError(
                    f"cannot remove old {self.kind} backup file {backup}", backup
                ) from exc

        try:
            self.path.rename(backup)
        except OSError as exc:
            raise AliasFileError(
                f"cannot rename {self.kind} config to {backup}", backup
            ) from exc
        logger.debug("rotated %s to %s", self.path, backup)

    def _promote(self, temp_path: Path) -> None:
        """Atomically rename *temp_path* onto the target path."""
        try:
            temp_path.replace(self.path)
        except OSError as exc:
            raise AliasFileError(
                f"cannot create {self.kind} config file {self.path}", self.path
            ) from exc
        logger.debug("saved %s", self.path)

    # -- override point -------------------------------------------------------

    def _default(self) -> dict | list:  # noqa: PLR6301
        """Return the empty-state value for this store (dict by default)."""
        return {}
