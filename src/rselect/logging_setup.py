"""Debug logging for the rselect CLI."""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(debug: bool, log_path: Path) -> None:
    """Send rselect and rich_select logs to ``log_path`` when debugging.

    Logging never goes to the terminal: the selector owns the screen.
    """
    if not debug:
        return
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    for name in ("rselect", "rich_select"):
        log = logging.getLogger(name)
        log.setLevel(logging.DEBUG)
        log.addHandler(handler)
