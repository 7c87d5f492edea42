"""Tests for the __main__ entry point."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from alias_registry.__main__ import main


@pytest.fixture
def run(terminal):
    """Run the CLI against the captured terminal and return its exit code."""

    def _run(*argv: str) -> int:
        return main(list(argv), terminal=terminal)

    return _run


def _out(terminal) -> str:
    return terminal.out.file.getvalue()


def _err(terminal) -> str:
    return terminal.err.file.getvalue()


def _document(run, terminal) -> dict:
    terminal.out.file.seek(0)
    terminal.out.file.truncate()
    assert run("aliases", "--format", "json") == 0
    return json.loads(_out(terminal))


class TestAlias:
    def test_add_alias(self, run, terminal, isolated_config: Path):
        assert run("alias", "primary:ls -la", "lsp") == 0
        document = _document(run, terminal)
        assert document["contexts"]["default"]["lsp"] == {
            "instance": "primary",
            "command": "ls -la",
            "working-directory": "map",
        }
        assert (isolated_config / "alias-registry" / "alias-registry_aliases.json").exists()

    def test_no_map_working_directory(self, run, terminal):
        assert run("alias", "primary:top", "top", "--no-map-working-directory") == 0
        document = _document(run, terminal)
        assert document["contexts"]["default"]["top"]["working-directory"] == "default"

    def test_duplicate_alias(self, run, terminal):
        run("alias", "primary:ls", "lsp")
        assert run("alias", "secondary:df", "lsp") == 2
        assert "already exists" in _err(terminal)
        document = _document(run, terminal)
        assert document["contexts"]["default"]["lsp"]["instance"] == "primary"

    def test_name_comes_after_definition(self, run, terminal):
        assert run("alias", "lsp", "primary:ls") == 1
        assert "INSTANCE:COMMAND" in _err(terminal)

    @pytest.mark.parametrize("definition", ["primary", ":ls", "primary:"])
    def test_bad_definition(self, run, terminal, definition):
        assert run("alias", definition, "lsp") == 1
        assert "INSTANCE:COMMAND" in _err(terminal)


class TestUnalias:
    def test_remove(self, run, terminal):
        run("alias", "primary:ls", "lsp")
        run("alias", "primary:top", "top")
        assert run("unalias", "lsp") == 0
        assert set(_document(run, terminal)["contexts"]["default"]) == {"top"}

    def test_nonexistent_removes_nothing(self, run, terminal):
        run("alias", "primary:ls", "lsp")
        assert run("unalias", "lsp", "nope") == 2
        assert "Nonexistent alias: nope" in _err(terminal)
        assert set(_document(run, terminal)["contexts"]["default"]) == {"lsp"}


class TestContexts:
    def test_prefer_persists(self, run, terminal):
        assert run("prefer", "work") == 0
        run("alias", "primary:ls", "lsp")
        document = _document(run, terminal)
        assert document["active-context"] == "work"
        assert set(document["contexts"]["work"]) == {"lsp"}

    def test_remove_context(self, run, terminal):
        run("prefer", "work")
        run("alias", "primary:ls", "lsp")
        run("prefer", "default")
        assert run("remove-context", "work") == 0
        assert "work" not in _document(run, terminal)["contexts"]

    def test_remove_missing_context(self, run, terminal):
        assert run("remove-context", "nope") == 2
        assert "No context 'nope' found" in _err(terminal)


class TestPurgeInstance:
    def test_purge(self, run, terminal):
        run("alias", "X:one", "a1")
        run("alias", "Y:two", "a2")
        run("alias", "X:three", "a3")
        assert run("purge-instance", "X") == 0
        out = _out(terminal)
        assert "Removed alias 'a1'" in out
        assert "Removed alias 'a3'" in out
        assert set(_document(run, terminal)["contexts"]["default"]) == {"a2"}

    def test_purge_nothing(self, run, terminal):
        assert run("purge-instance", "X") == 0
        assert "No aliases for instance 'X'" in _out(terminal)


class TestListing:
    def test_empty_table(self, run, terminal):
        assert run("aliases") == 0
        assert "No aliases defined." in _out(terminal)

    def test_table_marks_active_context(self, run, terminal):
        run("alias", "primary:ls", "lsp")
        assert run("aliases") == 0
        out = _out(terminal)
        assert "lsp" in out
        assert "default*" in out

    def test_yaml(self, run, terminal):
        run("alias", "primary:ls", "lsp")
        assert run("aliases", "--format", "yaml") == 0
        document = yaml.safe_load(_out(terminal))
        assert document["contexts"]["default"]["lsp"]["command"] == "ls"

    def test_csv(self, run, terminal):
        run("alias", "primary:ls", "lsp")
        assert run("aliases", "--format", "csv") == 0
        lines = _out(terminal).strip().splitlines()
        assert lines[0] == "Alias,Instance,Command,Context,Working directory"
        assert lines[1] == "lsp,primary,ls,default,map"


class TestLoadFailure:
    def test_unreadable_alias_file(self, run, terminal, isolated_config: Path):
        (isolated_config / "alias-registry" / "alias-registry_aliases.json").mkdir(parents=True)
        assert run("aliases") == 1
        assert "Cannot load aliases" in _err(terminal)


class TestVersion:
    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "alias-registry 0.1.0" in capsys.readouterr().out
