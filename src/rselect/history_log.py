"""Persistent command history: an append-only, newline-delimited file."""

from __future__ import annotations

import logging
from pathlib import Path

from rich_select.history import last_unique

from . import config

logger = logging.getLogger(__name__)


class HistoryLog:
    """History file used by the history sub-menu."""

    def __init__(self, path: Path | None = None):
        self.path = path or config.get_history_path()

    def entries(self) -> list[str]:
        """All entries, oldest first. An unreadable file counts as empty."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.warning("Cannot read history %s: %s", self.path, e)
            return []
        return [line for line in text.splitlines() if line.strip()]

    def append(self, entry: str) -> None:
        entry = " ".join(entry.splitlines()).strip()
        if not entry:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(entry + "\n")

    def last_unique(self, limit: int) -> list[str]:
        return last_unique(self.entries(), limit)

    def clear(self) -> None:
        """Truncate the log to empty."""
        if self.path.exists():
            self.path.write_text("", encoding="utf-8")
        logger.debug("History %s cleared", self.path)
