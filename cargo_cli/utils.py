"""Shared terminal-output helpers for cargo-cli.

Provides the Rich consoles used by the tool, the ``Reporter`` that prints
cargo-style status lines (``     Created LICENSE-MIT``) gated by the active
output level, and the error printer used by the command-line entry point.
"""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.markup import escape

from .config import Color, OutputLevel

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

VERB_WIDTH = 12


class Event(Protocol):
    verb: str
    path: str
    level: OutputLevel


# ---------------------------------------------------------------------------
# Reporter
# ---------------------------------------------------------------------------


class Reporter:
    """Formats structured events for the terminal.

    Events below ``level`` are dropped, so ``--quiet`` hides everything but
    warnings and ``-v`` reveals the per-file ``Created`` / ``Updated`` lines.
    """

    def __init__(
        self,
        level: OutputLevel = OutputLevel.INFO,
        color: Color = Color.AUTO,
        out: Console | None = None,
    ) -> None:
        self.level = level
        self.console = out or _console_for(color)

    def enabled(self, level: OutputLevel) -> bool:
        return level >= self.level

    def log(self, verb: str, message: str, level: OutputLevel = OutputLevel.INFO) -> None:
        """Print ``verb`` right-aligned in bold green, followed by ``message``."""
        if not self.enabled(level):
            return
        self.console.print(
            f"[bold bright_green]{escape(verb):>{VERB_WIDTH}}[/bold bright_green] {escape(message)}"
        )

    def emit(self, event: Event) -> None:
        self.log(event.verb, event.path, event.level)

    def trace(self, verb: str, message: str) -> None:
        self.log(verb, message, OutputLevel.TRACE)

    def debug(self, verb: str, message: str) -> None:
        self.log(verb, message, OutputLevel.DEBUG)

    def info(self, verb: str, message: str) -> None:
        self.log(verb, message, OutputLevel.INFO)


def _console_for(color: Color) -> Console:
    if color is Color.ALWAYS:
        return Console(highlight=False, force_terminal=True)
    if color is Color.NEVER:
        return Console(highlight=False, no_color=True)
    return console


# ---------------------------------------------------------------------------
# Error output
# ---------------------------------------------------------------------------


def print_error(message: str) -> None:
    """Print a red error message to stderr."""
    err_console.print(f"[bold red]error:[/bold red] {escape(message)}")
