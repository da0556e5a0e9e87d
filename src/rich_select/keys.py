"""Keyboard and mouse input helpers for rich_select.

Key predicates replace repeated inline conditionals in the engine. Mouse
clicks arrive as SGR reports (``ESC [ < b ; x ; y M``) which readchar
returns only partially, so ``read_key`` finishes reading them.
"""

from __future__ import annotations

import re

import readchar

# Enable/disable button-event mouse tracking with SGR coordinates.
MOUSE_ON = "\x1b[?1000h\x1b[?1006h"
MOUSE_OFF = "\x1b[?1006l\x1b[?1000l"

SGR_MOUSE_PREFIX = "\x1b[<"
_SGR_MOUSE_RE = re.compile(r"^\x1b\[<(\d+);(\d+);(\d+)([Mm])$")

CTRL_B = "\x02"
CTRL_R = "\x12"
CTRL_T = "\x14"
CTRL_LEFT = "\x1b[1;5D"


def read_key() -> str:
    """Read one key press, completing SGR mouse reports."""
    key = readchar.readkey()
    if key.startswith(SGR_MOUSE_PREFIX):
        while not key.endswith(("M", "m")):
            key += readchar.readchar()
    elif key == "\x1b[1;":
        # modifier + arrow: readchar stops after the separator
        key += readchar.readchar() + readchar.readchar()
    return key


def parse_mouse(key: str) -> tuple[int, int] | None:
    """Decode an SGR mouse report into a left click, or None.

    Only button 0 presses count; releases, drags, wheel and other buttons
    are ignored. Reported coordinates are 1-based.
    """
    match = _SGR_MOUSE_RE.match(key)
    if match is None:
        return None
    button, x, y, kind = match.groups()
    if kind != "M" or int(button) != 0:
        return None
    return int(x) - 1, int(y) - 1


def is_enter(key: str) -> bool:
    """Enter, whichever newline byte the terminal sends."""
    return key in (readchar.key.ENTER, "\r", "\n")


def is_escape(key: str) -> bool:
    """Escape, alone or paired with the key read after it.

    On posix readchar waits for a second byte after ESC, so a single Esc
    press arrives together with the next key (``"\\x1bj"``). That pair, and
    Esc pressed twice, count as Escape; CSI/SS3 sequences do not.
    """
    if key == readchar.key.ESC:
        return True
    return len(key) == 2 and key[0] == "\x1b" and key[1] not in "[O"


def is_exit(key: str) -> bool:
    """q or Q, the quit letters."""
    return key in ("q", "Q")


def is_up(key: str) -> bool:
    """Up arrow or k."""
    return key in ("k", readchar.key.UP)


def is_down(key: str) -> bool:
    """Down arrow or j."""
    return key in ("j", readchar.key.DOWN)


def is_page_up(key: str) -> bool:
    return key == readchar.key.PAGE_UP


def is_page_down(key: str) -> bool:
    return key == readchar.key.PAGE_DOWN


def is_backspace(key: str) -> bool:
    """Backspace, sent as DEL or BS."""
    return key in (readchar.key.BACKSPACE, "\x7f", "\b")


def is_filter(key: str) -> bool:
    return key == "/"


def is_go_back(key: str) -> bool:
    """Ctrl+B or Ctrl+Left."""
    return key in (CTRL_B, CTRL_LEFT)


def is_history(key: str) -> bool:
    return key == CTRL_R


def is_theme(key: str) -> bool:
    return key == CTRL_T


def is_printable(key: str) -> bool:
    """A single printable character, as typed into the filter."""
    return len(key) == 1 and key.isprintable()
