"""Tests for the two-stream terminal sink."""

from __future__ import annotations

from alias_registry.terminal import Terminal


def test_streams_are_separate(terminal):
    terminal.print("hello")
    terminal.error("broken")
    assert terminal.out.file.getvalue() == "hello\n"
    assert terminal.err.file.getvalue() == "broken\n"


def test_markup_is_not_interpreted(terminal):
    terminal.error("Error saving aliases dictionary: [bold]x[/bold] :smile:")
    assert "[bold]x[/bold] :smile:" in terminal.err.file.getvalue()


def test_default_consoles():
    terminal = Terminal()
    assert terminal.err.stderr is True
    assert terminal.out.stderr is False
