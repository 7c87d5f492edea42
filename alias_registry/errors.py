"""Exceptions raised by the alias registry."""

from __future__ import annotations

from pathlib import Path


class AliasError(Exception):
    """Base class for alias registry failures."""


class AliasFileError(AliasError):
    """A filesystem step on the alias file (or its backup) failed."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class InvalidWorkingDirectoryError(AliasError, ValueError):
    """An alias carries a working-directory policy other than map/default."""

    def __init__(self, value: object) -> None:
        super().__init__(f'invalid working_directory string "{value}"')
        self.value = value
