"""Selection engine: the state machine behind every selector run.

One ``Selector`` owns one run: it reads events from an event source,
updates its ``ListModel`` and mode, redraws through ``render_frame`` and
stops once ``result`` is set. History and theme sub-menus are nested
``Selector`` runs started from inside the loop; the parent is suspended
until they return and only looks at their returned ``Choice``.

Example:
    from rich_select import select

    choice = select("Cluster", ["prod", "staging", "dev"], default_selected="staging")
    if choice.selected:
        print(choice.item)
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum

from rich.console import Console, RenderableType
from rich.live import Live

from .errors import UnexpectedStateError
from .events import Click, Event, EventSource, Key, TerminalEvents, Tick
from .hit_test import hit_test
from .keys import (
    is_backspace,
    is_down,
    is_enter,
    is_escape,
    is_exit,
    is_filter,
    is_go_back,
    is_history,
    is_page_down,
    is_page_up,
    is_printable,
    is_theme,
    is_up,
)
from .model import ListModel
from .render import FrameLayout, FrameState, MatrixRain, flourish_for, layout_frame, render_frame
from .services import Services
from .themes import THEMES, Theme, ThemeContext, get_theme_names

logger = logging.getLogger(__name__)

TICK_INTERVAL = 0.08
MIN_ITEMS_PER_PAGE = 5
MAX_ITEMS_PER_PAGE = 20
THEME_MENU_LABEL = "Select Theme"


class Mode(str, Enum):
    BROWSING = "browsing"
    FILTERING = "filtering"
    DONE = "done"

    def __str__(self) -> str:
        return self.value


class ChoiceKind(str, Enum):
    SELECTED = "selected"
    WENT_BACK = "went_back"
    CANCELLED = "cancelled"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Choice:
    """Outcome of a selector run.

    Attributes:
        kind: Selected, went back, or cancelled.
        item: The chosen item (only for SELECTED).
        via_click: True when the item was picked with the mouse rather than Enter.
    """

    kind: ChoiceKind
    item: str | None = None
    via_click: bool = False

    @classmethod
    def of(cls, item: str, via_click: bool = False) -> Choice:
        return cls(ChoiceKind.SELECTED, item, via_click)

    @classmethod
    def back(cls) -> Choice:
        return cls(ChoiceKind.WENT_BACK)

    @classmethod
    def cancel(cls) -> Choice:
        return cls(ChoiceKind.CANCELLED)

    @property
    def selected(self) -> bool:
        return self.kind is ChoiceKind.SELECTED

    @property
    def went_back(self) -> bool:
        return self.kind is ChoiceKind.WENT_BACK

    @property
    def cancelled(self) -> bool:
        return self.kind is ChoiceKind.CANCELLED


def items_per_page_for_height(height: int) -> int:
    """Rows per page for a terminal height: half the free lines, within 5..20."""
    available = height - 8
    return max(MIN_ITEMS_PER_PAGE, min(available // 2, MAX_ITEMS_PER_PAGE))


class Selector:
    """Interactive single-choice list.

    Keyboard controls:
        - Up/Down or j/k: move (crossing page boundaries)
        - PageUp/PageDown: jump a page
        - Enter: choose the highlighted item
        - /: filter (type, Backspace, Enter to apply, Esc to leave filter mode)
        - Esc/q/Ctrl+C: cancel (a single Esc registers with the next key;
          Esc twice cancels at once)
        - Ctrl+B or Ctrl+Left: go back
        - Ctrl+R: command history sub-menu
        - Ctrl+T: theme sub-menu with live preview
        - Left click: choose the clicked row

    Args:
        label: Title shown in the panel border.
        items: Strings to choose from, in display order.
        default_selected: Item highlighted initially (ignored if absent).
        allow_go_back: Show the go-back hint in the help line.
        console: Rich Console to draw on.
        themes: Current-theme context for this run.
        services: History/theme-store/executor collaborators.
        items_per_page: Fixed page size; derived from the terminal height if None.
        history_mode: Run as the history sub-menu (no filter, short help).
        theme_selection: Items are theme names; preview them as the cursor moves.
        formatter: Maps an item to its display label.
        seed: Seed for the animation RNG.
    """

    def __init__(
        self,
        label: str,
        items: Sequence[str],
        default_selected: str = "",
        allow_go_back: bool = False,
        *,
        console: Console | None = None,
        themes: ThemeContext | None = None,
        services: Services | None = None,
        items_per_page: int | None = None,
        history_mode: bool = False,
        theme_selection: bool = False,
        formatter: Callable[[str], str] | None = None,
        seed: int | None = None,
        _history_open: bool = False,
        _theme_menu_open: bool = False,
    ):
        self.label = label
        self.allow_go_back = allow_go_back
        self.console = console or Console(highlight=False)
        self.themes = themes or ThemeContext()
        self.services = services or Services()
        self.history_mode = history_mode
        self.theme_selection = theme_selection
        self.formatter = formatter
        self._auto_page_size = items_per_page is None
        self.model = ListModel(
            items, items_per_page or items_per_page_for_height(self.console.size.height)
        )
        if default_selected:
            self.model.select_item(default_selected)

        self.mode = Mode.BROWSING
        self.result: Choice | None = None
        self.original_theme: Theme | None = self.themes.current if theme_selection else None
        self.preview_theme: Theme | None = None

        self._history_open = _history_open or history_mode
        self._theme_menu_open = _theme_menu_open or theme_selection
        self._rng = random.Random(seed)
        self.rain = MatrixRain()
        self._live: Live | None = None
        self._events: EventSource | None = None

        self._update_preview()
        self._sync_animation()

    # -- views ----------------------------------------------------------

    def label_of(self, item: str) -> str:
        return self.formatter(item) if self.formatter else item

    def frame_state(self) -> FrameState:
        """Snapshot of everything the renderer reads."""
        animated = flourish_for(self.themes.current).animated
        return FrameState(
            label=self.label,
            rows=tuple(self.label_of(item) for item in self.model.visible_items()),
            cursor=self.model.cursor,
            page=self.model.page,
            page_count=self.model.page_count(),
            first_index=self.model.page_start,
            filter_text=self.model.filter_text,
            filter_mode=self.mode is Mode.FILTERING,
            history_mode=self.history_mode,
            show_go_back=self.allow_go_back,
            show_shortcuts=not self.history_mode,
            rain=tuple(self.rain.lines) if animated else (),
            width=self.console.size.width,
        )

    def render(self) -> RenderableType:
        return render_frame(self.frame_state(), self.themes.current)

    def layout(self) -> FrameLayout:
        return layout_frame(self.frame_state(), self.themes.current)

    def tick_interval(self) -> float | None:
        """Seconds between animation ticks, or None when nothing animates."""
        return TICK_INTERVAL if flourish_for(self.themes.current).animated else None

    # -- state machine --------------------------------------------------

    def handle(self, event: Event) -> None:
        """Apply one input event. Ignored once the run is done."""
        if self.mode is Mode.DONE:
            return
        if isinstance(event, Tick):
            self._on_tick()
        elif isinstance(event, Click):
            if self.mode is Mode.BROWSING:
                self._on_click(event)
        elif isinstance(event, Key):
            if self.mode is Mode.FILTERING:
                self._handle_filter_key(event.value)
            else:
                self._handle_browse_key(event.value)
        else:
            raise UnexpectedStateError(f"Unknown event: {event!r}")

    def _handle_filter_key(self, key: str) -> None:
        if is_escape(key) or is_enter(key):
            self.mode = Mode.BROWSING
        elif is_backspace(key):
            if self.model.filter_text:
                self._apply_filter(self.model.filter_text[:-1])
        elif is_printable(key):
            self._apply_filter(self.model.filter_text + key)

    def _handle_browse_key(self, key: str) -> None:
        if is_escape(key) or is_exit(key):
            self.cancel()
        elif is_enter(key):
            self._choose()
        elif is_up(key):
            self._moved(self.model.move_up())
        elif is_down(key):
            self._moved(self.model.move_down())
        elif is_page_up(key):
            self._moved(self.model.page_up())
        elif is_page_down(key):
            self._moved(self.model.page_down())
        elif is_filter(key):
            if not self.history_mode:
                self.mode = Mode.FILTERING
        elif is_go_back(key):
            self._finish(Choice.back())
        elif is_history(key):
            self.open_history()
        elif is_theme(key):
            self.open_theme_menu()

    def _apply_filter(self, text: str) -> None:
        self.model.set_filter(text)
        self._update_preview()

    def _moved(self, moved: bool) -> None:
        if moved:
            self._update_preview()

    def _on_click(self, click: Click) -> None:
        row = hit_test(self.layout(), click.y)
        if row is None:
            return
        self.model.cursor = row
        self._update_preview()
        self._choose(via_click=True)

    def _on_tick(self) -> None:
        if flourish_for(self.themes.current).animated:
            self.rain.advance(self._rng)

    def _choose(self, via_click: bool = False) -> None:
        item = self.model.current_item()
        if item is None:
            return
        if self.theme_selection and self.preview_theme is not None:
            self.themes.current = self.preview_theme
            self.services.save_theme(self.preview_theme.name)
            logger.debug("Theme %r applied", self.preview_theme.name)
        self._finish(Choice.of(item, via_click=via_click))

    def cancel(self) -> None:
        """End the run without a choice, undoing any theme preview."""
        if self.theme_selection and self.original_theme is not None:
            self.themes.current = self.original_theme
        self._finish(Choice.cancel())

    def _finish(self, choice: Choice) -> None:
        self.result = choice
        self.mode = Mode.DONE
        logger.debug("Selector %r finished: %s %r", self.label, choice.kind, choice.item)

    def _update_preview(self) -> None:
        """Make the highlighted theme name the current theme (theme runs only)."""
        if not self.theme_selection:
            return
        theme = THEMES.get(self.model.current_item() or "")
        if theme is None:
            return
        self.preview_theme = theme
        self.themes.current = theme
        self._sync_animation()

    def _sync_animation(self) -> None:
        if flourish_for(self.themes.current).animated and not self.rain.lines:
            self.rain.seed(self._rng)

    def _reset(self) -> None:
        """Back to the initial view after a nested run."""
        self.mode = Mode.BROWSING
        self.model.reset()
        self._update_preview()
        self._sync_animation()

    def _sync_page_size(self) -> None:
        """Follow terminal height changes when the page size is automatic."""
        if not self._auto_page_size:
            return
        per_page = items_per_page_for_height(self.console.size.height)
        if per_page != self.model.items_per_page:
            index = self.model.absolute_index
            self.model.items_per_page = per_page
            self.model.page = self.model.cursor = 0
            self.model.select_index(index)

    # -- nested runs ----------------------------------------------------

    @contextmanager
    def _suspended(self) -> Iterator[None]:
        """Stop drawing while a nested run or a command owns the terminal."""
        live = self._live
        if live is not None:
            live.stop()
        try:
            if self._events is not None:
                with self._events.suspended():
                    yield
            else:
                yield
        finally:
            self._reset()
            if live is not None:
                live.start(refresh=False)
                live.update(self.render(), refresh=True)

    def _nested_options(self) -> dict:
        return {
            "console": self.console,
            "themes": self.themes.child(),
            "services": self.services,
            "items_per_page": None if self._auto_page_size else self.model.items_per_page,
        }

    def open_history(self) -> None:
        """Run the history sub-menu and execute the chosen command."""
        if self._history_open or self.services.history is None:
            return
        entries = self.services.history.last_unique(self.services.history_limit)
        if not entries:
            return

        from .history import history_select

        logger.debug("Opening history with %d entries", len(entries))
        with self._suspended():
            selected = history_select(
                f"Command History (last {self.services.history_limit} unique)",
                entries,
                events=self._events,
                _theme_menu_open=self._theme_menu_open,
                **self._nested_options(),
            )
            if selected and self.services.executor is not None:
                self.console.print(f"\nExecuting: {selected}", markup=False)
                self.services.executor(selected)

    def open_theme_menu(self) -> None:
        """Run the theme sub-menu and apply its choice to this run."""
        if self._theme_menu_open:
            return
        logger.debug("Opening theme menu from %r", self.label)
        with self._suspended():
            child = Selector(
                THEME_MENU_LABEL,
                get_theme_names(),
                self.themes.current.name,
                theme_selection=True,
                _history_open=self._history_open,
                **self._nested_options(),
            )
            choice = child.run(self._events)
            if not isinstance(choice, Choice):
                raise UnexpectedStateError(f"Theme menu returned {choice!r}")
            # the theme run already saved its choice
            if choice.selected and choice.item:
                self.themes.set_by_name(choice.item)

    # -- loop -----------------------------------------------------------

    def run(self, events: EventSource | None = None) -> Choice:
        """Block until the user chooses, goes back or cancels.

        Without an event source the process terminal is used; that raises
        TerminalUnavailableError when stdin or the console is not a terminal.
        """
        if events is not None:
            return self._loop(events)
        with TerminalEvents(self.console, mouse=self.services.mouse) as terminal:
            return self._loop(terminal)

    def _loop(self, events: EventSource) -> Choice:
        self._events = events
        logger.debug("Selector %r started with %d items", self.label, len(self.model.items))
        try:
            with Live(
                self.render(),
                console=self.console,
                screen=True,
                auto_refresh=False,
                transient=True,
            ) as live:
                self._live = live
                while self.mode is not Mode.DONE:
                    try:
                        event = events.next_event(self.tick_interval())
                    except (KeyboardInterrupt, EOFError):
                        self.cancel()
                        break
                    self.handle(event)
                    self._sync_page_size()
                    live.update(self.render(), refresh=True)
        finally:
            self._live = None
            self._events = None

        if self.result is None:
            raise UnexpectedStateError(f"Selector {self.label!r} stopped without a result")
        return self.result


def select(
    label: str,
    items: Sequence[str],
    default_selected: str = "",
    allow_go_back: bool = False,
    *,
    events: EventSource | None = None,
    **options,
) -> Choice:
    """Show a selector and return the user's Choice.

    Callers that do not offer going back get CANCELLED instead of WENT_BACK.
    """
    choice = Selector(label, items, default_selected, allow_go_back, **options).run(events)
    if choice.went_back and not allow_go_back:
        return Choice.cancel()
    return choice


def select_theme(
    themes: ThemeContext,
    *,
    events: EventSource | None = None,
    **options,
) -> Choice:
    """Pick a theme with live preview applied to ``themes``.

    On cancel ``themes.current`` is exactly what it was before the call.
    """
    return Selector(
        THEME_MENU_LABEL,
        get_theme_names(),
        themes.current.name,
        themes=themes,
        theme_selection=True,
        **options,
    ).run(events)
