"""Input events and the sources that produce them.

The engine consumes one ordered stream of events: key presses, mouse
clicks and animation ticks. ``TerminalEvents`` reads the real terminal;
``ScriptedEvents`` replays a fixed sequence (tests, demos).
"""

from __future__ import annotations

import logging
import queue
import sys
import threading
from collections import deque
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Protocol, Union

from rich.console import Console

from .errors import TerminalUnavailableError
from .keys import MOUSE_OFF, MOUSE_ON, SGR_MOUSE_PREFIX, parse_mouse, read_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Key:
    """A key press as returned by readchar (escape sequences included)."""

    value: str


@dataclass(frozen=True)
class Click:
    """Left mouse button press at a 0-based terminal cell."""

    x: int
    y: int


@dataclass(frozen=True)
class Tick:
    """Periodic wake-up used for animation frames."""


Event = Union[Key, Click, Tick]


class EventSource(Protocol):
    def next_event(self, timeout: float | None = None) -> Event: ...

    def suspended(self) -> Iterator[None]: ...


def _to_event(key: str) -> Event:
    click = parse_mouse(key)
    if click is not None:
        return Click(*click)
    if key.startswith(SGR_MOUSE_PREFIX):
        # release / wheel / drag reports carry no action
        return Key("")
    return Key(key)


class TerminalEvents:
    """Event source backed by the process's terminal.

    Use as a context manager: entering checks that stdin is a TTY and turns
    on mouse reporting, leaving turns it off again. With a ``timeout`` the
    key read happens on a helper thread so a Tick can be returned when no key
    arrives in time; the read stays pending and its key is delivered by the
    next call, so events are never reordered or dropped.
    """

    def __init__(self, console: Console, *, mouse: bool = True):
        self.console = console
        self.mouse = mouse
        self._keys: queue.Queue = queue.Queue()
        self._pending = False
        self._mouse_on = False

    def __enter__(self) -> TerminalEvents:
        if not sys.stdin or not sys.stdin.isatty():
            raise TerminalUnavailableError("stdin is not attached to a terminal")
        if not self.console.is_terminal:
            raise TerminalUnavailableError("output is not a terminal")
        self._enable_mouse()
        return self

    def __exit__(self, *exc_info) -> bool:
        self._disable_mouse()
        return False

    def _enable_mouse(self) -> None:
        if self.mouse and not self._mouse_on:
            self.console.file.write(MOUSE_ON)
            self.console.file.flush()
            self._mouse_on = True

    def _disable_mouse(self) -> None:
        if self._mouse_on:
            self.console.file.write(MOUSE_OFF)
            self.console.file.flush()
            self._mouse_on = False

    def _read_into_queue(self) -> None:
        try:
            self._keys.put(read_key())
        except (KeyboardInterrupt, EOFError, OSError) as exc:
            self._keys.put(exc)

    def next_event(self, timeout: float | None = None) -> Event:
        if timeout is None and not self._pending:
            return _to_event(read_key())

        if not self._pending:
            self._pending = True
            threading.Thread(target=self._read_into_queue, daemon=True).start()
        try:
            item = self._keys.get(timeout=timeout)
        except queue.Empty:
            return Tick()
        self._pending = False
        if isinstance(item, BaseException):
            raise item
        return _to_event(item)

    @contextmanager
    def suspended(self) -> Iterator[None]:
        """Hand the terminal to something else (a subprocess, a nested menu)."""
        was_on = self._mouse_on
        self._disable_mouse()
        try:
            yield
        finally:
            if was_on:
                self._enable_mouse()


class ScriptedEvents:
    """Replays a fixed event sequence; plain strings become Key events.

    Raises EOFError once the script is exhausted, which the engine treats
    like a cancel.
    """

    def __init__(self, events: Iterable[Event | str]):
        self._events: deque[Event | str] = deque(events)

    def __enter__(self) -> ScriptedEvents:
        return self

    def __exit__(self, *exc_info) -> bool:
        return False

    @property
    def remaining(self) -> int:
        return len(self._events)

    def next_event(self, timeout: float | None = None) -> Event:
        if not self._events:
            raise EOFError("event script exhausted")
        event = self._events.popleft()
        if isinstance(event, str):
            return Key(event)
        return event

    @contextmanager
    def suspended(self) -> Iterator[None]:
        yield
