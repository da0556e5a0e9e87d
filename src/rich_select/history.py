"""History sub-menu: pick a previous command, or wipe the history.

Entries are shown soft-wrapped but always returned verbatim. A reserved
"clear history" entry is appended; choosing it clears the backing log and
restarts the menu with only that entry left.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from rich.console import Console

from .engine import Choice, Selector
from .errors import UnexpectedStateError
from .events import EventSource
from .services import Services

logger = logging.getLogger(__name__)

# NUL never appears in a logged command line, so this cannot collide with a real entry.
CLEAR_HISTORY = "\x00clear-history\x00"
CLEAR_HISTORY_LABEL = "🗑️  Clear History"
DEFAULT_WRAP_WIDTH = 80


def last_unique(entries: Iterable[str], limit: int) -> list[str]:
    """Last ``limit`` distinct entries, newest first.

    Scans backwards so the most recent occurrence of each value wins.
    Blank entries are skipped.
    """
    result: list[str] = []
    seen: set[str] = set()
    for entry in reversed(list(entries)):
        if not entry.strip() or entry in seen:
            continue
        seen.add(entry)
        result.append(entry)
        if len(result) >= limit:
            break
    return result


def soft_wrap(text: str, width: int = DEFAULT_WRAP_WIDTH) -> str:
    """Break ``text`` after the first space at or after every ``width`` characters.

    The space stays at the end of the broken line.
    """
    out: list[str] = []
    count = 0
    for ch in text:
        out.append(ch)
        count += 1
        if count >= width and ch == " ":
            out.append("\n")
            count = 0
    return "".join(out)


def history_label(entry: str, width: int = DEFAULT_WRAP_WIDTH) -> str:
    if entry == CLEAR_HISTORY:
        return CLEAR_HISTORY_LABEL
    return soft_wrap(entry, width)


def history_select(
    label: str,
    entries: Sequence[str],
    *,
    events: EventSource | None = None,
    console: Console | None = None,
    services: Services | None = None,
    **options,
) -> str | None:
    """Show the history menu and return the chosen original entry.

    ``entries`` should already be deduplicated and capped (see last_unique).
    Returns None on Escape, and also for a mouse pick: a clicked entry is
    printed for copying instead of being returned for execution.
    """
    console = console or Console(highlight=False)
    services = services or Services()
    width = services.history_wrap_width
    items = [*entries, CLEAR_HISTORY]

    while True:
        selector = Selector(
            label,
            items,
            console=console,
            services=services,
            history_mode=True,
            formatter=lambda entry: history_label(entry, width),
            **options,
        )
        choice = selector.run(events)
        if not isinstance(choice, Choice):
            raise UnexpectedStateError(f"History menu returned {choice!r}")
        if not choice.selected:
            return None

        if choice.item == CLEAR_HISTORY:
            if services.history is not None:
                services.history.clear()
            logger.info("Command history cleared")
            console.print("History cleared.")
            items = [CLEAR_HISTORY]
            continue

        if choice.via_click:
            console.print(f"\nCopied to clipboard (select and copy):\n{choice.item}", markup=False)
            return None
        return choice.item
