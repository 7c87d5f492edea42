"""Alias persistence store.

Aliases are grouped into named contexts, one of which is active at a time.
The whole registry is read once at construction and written back once,
when it is closed, and only if something changed in between.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType

from ..constants import (
    ACTIVE_CONTEXT_KEY,
    CONTEXTS_KEY,
    DEFAULT_CONTEXT,
    WORKING_DIR_DEFAULT,
    WORKING_DIRECTORIES,
)
from ..errors import AliasError, InvalidWorkingDirectoryError
from ..log import logger
from ..preferences import load_settings
from ..terminal import Terminal
from ._base import JsonStore


def check_working_directory(value: object) -> None:
    """Raise :class:`InvalidWorkingDirectoryError` unless *value* is map/default."""
    if value not in WORKING_DIRECTORIES:
        raise InvalidWorkingDirectoryError(value)


@dataclass(frozen=True)
class AliasDefinition:
    """What an alias runs: *command* on *instance*, from *working_directory*."""

    instance: str
    command: str
    working_directory: str = WORKING_DIR_DEFAULT

    def to_json(self) -> dict[str, str]:
        check_working_directory(self.working_directory)
        return {
            "instance": self.instance,
            "command": self.command,
            "working-directory": self.working_directory,
        }

    @classmethod
    def from_json(cls, record: dict) -> AliasDefinition:
        """Build a definition from an on-disk record.

        A missing or blank ``working-directory`` means ``"default"``; any
        other value must be one of the two policies.
        """
        working_directory = record.get("working-directory")
        if not isinstance(working_directory, str) or not working_directory:
            working_directory = WORKING_DIR_DEFAULT
        check_working_directory(working_directory)

        instance = record.get("instance")
        command = record.get("command")
        return cls(
            instance=instance if isinstance(instance, str) else "",
            command=command if isinstance(command, str) else "",
            working_directory=working_directory,
        )


AliasContext = dict[str, AliasDefinition]


class AliasDict(JsonStore):
    """Contexts of command aliases (``{context: {alias: AliasDefinition}}``).

    Use as a context manager so pending changes are flushed on every exit
    path::

        with AliasDict(terminal) as aliases:
            aliases.add_alias("lsp", AliasDefinition("primary", "ls"))
    """

    kind = "aliases"

    def __init__(self, terminal: Terminal, path: Path | None = None) -> None:
        if path is None:
            path = load_settings().aliases_path()
        super().__init__(path)
        self._terminal = terminal
        self._active_context = DEFAULT_CONTEXT
        self._contexts: dict[str, AliasContext] = {}
        self._closed = False
        self.modified = False
        self._load()

    # -- lifecycle ------------------------------------------------------------

    def __enter__(self) -> AliasDict:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Persist pending changes, reporting (not raising) any failure."""
        if self._closed:
            return
        self._closed = True
        if not self.modified:
            return
        try:
            self._save()
        except AliasError as exc:
            logger.debug("saving aliases to %s failed", self.path, exc_info=True)
            self._terminal.error(f"Error saving aliases dictionary: {exc}")

    # -- contexts -------------------------------------------------------------

    @property
    def active_context(self) -> str:
        return self._active_context

    def set_active_context(self, name: str) -> None:
        """Make *name* the active context, creating it empty if needed."""
        self._active_context = name
        self._contexts.setdefault(name, {})

    def get_active_context(self) -> str:
        return self._active_context

    def remove_context(self, name: str) -> bool:
        """Drop context *name* and its aliases. Return ``False`` if absent.

        Removing the active context makes ``"default"`` active again.
        """
        if name not in self._contexts:
            return False
        del self._contexts[name]
        self.modified = True
        if name == self._active_context:
            self.set_active_context(DEFAULT_CONTEXT)
        return True

    # -- aliases in the active context -----------------------------------------

    def add_alias(self, alias: str, definition: AliasDefinition) -> bool:
        """Add *alias*. Return ``False`` (and keep the old one) if it exists."""
        context = self._contexts.setdefault(self._active_context, {})
        if alias in context:
            return False
        context[alias] = definition
        self.modified = True
        return True

    def exists_alias(self, alias: str) -> bool:
        return alias in self._contexts.get(self._active_context, {})

    def get_alias(self, alias: str) -> AliasDefinition | None:
        return self._contexts.get(self._active_context, {}).get(alias)

    def remove_alias(self, alias: str) -> bool:
        """Remove *alias*. Return ``False`` if not found."""
        context = self._contexts.get(self._active_context)
        if context is None or alias not in context:
            return False
        del context[alias]
        self.modified = True
        return True

    def remove_aliases_for_instance(self, instance: str) -> list[str]:
        """Remove every alias pointing at *instance*; return their names."""
        context = self._contexts.get(self._active_context, {})
        removed = [
            name for name, definition in context.items() if definition.instance == instance
        ]
        for name in removed:
            del context[name]
        if removed:
            self.modified = True
        return removed

    # -- whole-registry access --------------------------------------------------

    def __iter__(self) -> Iterator[str]:
        return iter(self._contexts)

    def __len__(self) -> int:
        return len(self._contexts)

    def __contains__(self, name: object) -> bool:
        return name in self._contexts

    def __getitem__(self, name: str) -> AliasContext:
        return self._contexts[name]

    def items(self):
        return self._contexts.items()

    def empty(self) -> bool:
        return not self._contexts

    def size(self) -> int:
        return len(self._contexts)

    def clear(self) -> None:
        """Drop every alias and context, leaving the active context empty.

        Marks the registry dirty only if it held any context.
        """
        if self._contexts:
            self.modified = True
            self._contexts.clear()
        self._contexts.setdefault(self._active_context, {})

    # -- serialization ------------------------------------------------------------

    def to_json(self) -> dict:
        """Return the on-disk document.

        Raises :class:`InvalidWorkingDirectoryError` if any alias carries
        a bad working-directory policy.
        """
        return {
            ACTIVE_CONTEXT_KEY: self._active_context,
            CONTEXTS_KEY: {
                context_name: {
                    alias: definition.to_json() for alias, definition in context.items()
                }
                for context_name, context in self._contexts.items()
            },
        }

    # -- load / save ----------------------------------------------------------------

    def _load(self) -> None:
        records = self.load_raw()
        if not isinstance(records, dict) or not records:
            logger.debug("no usable aliases in %s", self.path)
            return

        if ACTIVE_CONTEXT_KEY in records:
            active = records[ACTIVE_CONTEXT_KEY]
            contexts = records.get(CONTEXTS_KEY)
            if not isinstance(contexts, dict):
                contexts = {}
            for context_name, context_records in contexts.items():
                self._contexts[context_name] = self._records_to_context(context_records)
            if not isinstance(active, str) or not active:
                active = DEFAULT_CONTEXT
            self.set_active_context(active)
        else:
            # Files written before contexts existed hold bare alias records
            logger.debug("%s uses the pre-context format", self.path)
            self._contexts[DEFAULT_CONTEXT] = self._records_to_context(records)
            self._active_context = DEFAULT_CONTEXT

    @staticmethod
    def _records_to_context(records: object) -> AliasContext:
        context: AliasContext = {}
        if not isinstance(records, dict):
            return context
        for alias, record in records.items():
            if not isinstance(record, dict) or not record:
                logger.debug("skipping malformed alias record %r", alias)
                continue
            context[alias] = AliasDefinition.from_json(record)
        return context

    def _sanitize_contexts(self) -> None:
        """Drop empty contexts other than the active one."""
        empty = [
            name
            for name, context in self._contexts.items()
            if name != self._active_context and not context
        ]
        for name in empty:
            del self._contexts[name]
        if empty:
            self.modified = True

    def _save(self) -> None:
        self._sanitize_contexts()
        self.save_raw(self.to_json(), sort_keys=True)
        self.modified = False
