"""Output sink handed to the registry: one console per stream."""

from __future__ import annotations

from rich.console import Console


class Terminal:
    """Pair of rich consoles, ``out`` for normal output and ``err`` for errors."""

    def __init__(self, out: Console | None = None, err: Console | None = None) -> None:
        self.out = out or Console()
        self.err = err or Console(stderr=True)

    def print(self, message: str) -> None:
        self.out.print(message, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def error(self, message: str) -> None:
        self.err.print(message, markup=False, highlight=False, emoji=False, soft_wrap=True)
