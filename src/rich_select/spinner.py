"""Theme-aware loading spinner."""

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.live import Live
from rich.text import Text

from .themes import Theme, ThemeContext

FRAME_SECONDS = 0.1


def spinner_frame(theme: Theme, elapsed: float) -> str:
    frames = theme.spinner_frames or ("",)
    return frames[int(elapsed / FRAME_SECONDS) % len(frames)]


class ThemeSpinner:
    """Renderable cycling through a theme's spinner frames."""

    def __init__(self, theme: Theme, message: str | None = None):
        self.theme = theme
        self.message = message or theme.loading_hint
        self.started = time.monotonic()

    def __rich__(self) -> Text:
        frame = spinner_frame(self.theme, time.monotonic() - self.started)
        return Text(f"{frame} {self.message}", style=self.theme.title_style)


@contextmanager
def loading(
    themes: ThemeContext, message: str | None = None, console: Console | None = None
) -> Iterator[None]:
    """Show the current theme's spinner while the body runs."""
    spinner = ThemeSpinner(themes.current, message)
    with Live(spinner, console=console, refresh_per_second=12, transient=True):
        yield
