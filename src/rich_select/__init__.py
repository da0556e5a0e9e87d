"""Rich.Live-based interactive list selector.

A reusable single-choice picker with paging, filtering, mouse clicks,
themes with live preview and a command-history sub-menu.

Example:
    from rich_select import select

    choice = select("Service", ["api", "worker", "scheduler"], allow_go_back=True)
    if choice.selected:
        deploy(choice.item)
    elif choice.went_back:
        ...
"""

import logging

from .engine import (
    Choice,
    ChoiceKind,
    Mode,
    Selector,
    items_per_page_for_height,
    select,
    select_theme,
)
from .errors import SelectorError, TerminalUnavailableError, UnexpectedStateError
from .events import Click, Key, ScriptedEvents, TerminalEvents, Tick
from .hit_test import hit_test
from .history import CLEAR_HISTORY, history_select, last_unique, soft_wrap
from .model import ListModel, filter_items
from .render import FLOURISHES, FrameState, layout_frame, render_frame
from .services import HistorySource, Services, ThemeStore
from .spinner import loading
from .themes import DEFAULT_THEME, THEMES, Theme, ThemeContext, get_theme, get_theme_names

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Engine
    "select",
    "select_theme",
    "history_select",
    "Selector",
    "Choice",
    "ChoiceKind",
    "Mode",
    "items_per_page_for_height",
    # Model / geometry
    "ListModel",
    "filter_items",
    "FrameState",
    "render_frame",
    "layout_frame",
    "hit_test",
    "FLOURISHES",
    # History
    "CLEAR_HISTORY",
    "last_unique",
    "soft_wrap",
    # Events
    "Key",
    "Click",
    "Tick",
    "ScriptedEvents",
    "TerminalEvents",
    # Collaborators
    "Services",
    "HistorySource",
    "ThemeStore",
    # Theming
    "Theme",
    "ThemeContext",
    "THEMES",
    "DEFAULT_THEME",
    "get_theme",
    "get_theme_names",
    "loading",
    # Errors
    "SelectorError",
    "TerminalUnavailableError",
    "UnexpectedStateError",
]
