"""Collaborators the selector uses but does not own.

The engine only asks for "last N distinct history entries", "clear the
history", "remember this theme name" and "run this command". Where those
live (files, a database, nothing at all) is up to the application.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol


class HistorySource(Protocol):
    def last_unique(self, limit: int) -> list[str]:
        """Most recent distinct entries, newest first."""
        ...

    def clear(self) -> None: ...


class ThemeStore(Protocol):
    def load(self) -> str | None: ...

    def save(self, name: str) -> None: ...


CommandExecutor = Callable[[str], object]


@dataclass
class Services:
    """Bundle handed to every selector run, nested runs included."""

    history: HistorySource | None = None
    theme_store: ThemeStore | None = None
    executor: CommandExecutor | None = None
    history_limit: int = 5
    history_wrap_width: int = 80
    mouse: bool = True

    def save_theme(self, name: str) -> None:
        if self.theme_store is not None:
            self.theme_store.save(name)
