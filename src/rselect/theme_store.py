"""Remembers the chosen theme between runs."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from rich_select.themes import DEFAULT_THEME, ThemeContext, get_theme

from . import config

logger = logging.getLogger(__name__)

THEME_ENV = "RSELECT_THEME"


class ThemeStore:
    """Single-line file holding a theme name."""

    def __init__(self, path: Path | None = None):
        self.path = path or config.get_theme_path()

    def load(self) -> str | None:
        try:
            name = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Cannot read theme file %s: %s", self.path, e)
            return None
        return name or None

    def save(self, name: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(name, encoding="utf-8")
        try:
            os.chmod(self.path, 0o600)
        except OSError as e:
            logger.debug("Cannot restrict permissions of %s: %s", self.path, e)
        logger.debug("Saved theme %r to %s", name, self.path)


def initial_theme_context(store: ThemeStore) -> ThemeContext:
    """Theme for this process: RSELECT_THEME, then the saved name, then the default."""
    for name in (os.environ.get(THEME_ENV), store.load()):
        theme = get_theme(name)
        if theme is not None:
            return ThemeContext(theme)
        if name:
            logger.warning("Unknown theme %r, ignoring", name)
    return ThemeContext(DEFAULT_THEME)
