"""Shared test fixtures for alias-registry test suite."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from alias_registry.persistence import AliasDict
from alias_registry.terminal import Terminal


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every config lookup at a temporary directory."""
    root = tmp_path / "config"
    monkeypatch.setenv("ALIAS_REGISTRY_CONFIG_DIR", str(root))
    monkeypatch.setenv("ALIAS_REGISTRY_SETTINGS", str(tmp_path / "settings.yaml"))
    return root


@pytest.fixture
def terminal() -> Terminal:
    """Terminal whose streams are captured in memory.

    Read them back with ``terminal.out.file.getvalue()`` and
    ``terminal.err.file.getvalue()``.
    """
    return Terminal(
        out=Console(file=io.StringIO(), width=200),
        err=Console(file=io.StringIO(), width=200),
    )


@pytest.fixture
def aliases_path(tmp_path: Path) -> Path:
    return tmp_path / "client" / "client_aliases.json"


@pytest.fixture
def open_aliases(terminal: Terminal, aliases_path: Path):
    """Factory returning a fresh registry bound to ``aliases_path``."""

    def _open() -> AliasDict:
        return AliasDict(terminal, path=aliases_path)

    return _open
