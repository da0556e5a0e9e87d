"""Error types raised by the selector engine."""

from __future__ import annotations


class SelectorError(Exception):
    """Base class for selector failures surfaced to the caller."""


class TerminalUnavailableError(SelectorError):
    """No interactive terminal backs the run (stdin is not a TTY)."""

    hint = "Run from an interactive terminal, or pipe items in and keep /dev/tty available."


class UnexpectedStateError(SelectorError):
    """The engine reached a state that indicates a programming error."""
