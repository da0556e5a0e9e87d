"""Pure rendering of a selector frame.

``render_frame`` turns a ``FrameState`` snapshot and a ``Theme`` into a Rich
renderable; ``layout_frame`` reports which terminal lines each item row
occupies in that same frame. Mouse hit-testing reads the layout, so the two
functions are kept next to each other and built from the same pieces.

Frame lines, top to bottom (row 0 is the first terminal line):

    0                panel top border carrying the label
    1                "Filter: ..." line, only while filtering
    ...              theme flourish header lines (Pac-Man maze, Matrix frame)
    ...              item rows (wrapped labels span several lines)
    ...              flourish footer, page indicator, help line
    last             panel bottom border
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from rich.align import Align
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from .themes import Theme

PANEL_TOP_LINES = 1
MAX_PANEL_WIDTH = 100

HELP_KEYS = "↑↓ Move • Enter Select • / Filter • q Quit"
HELP_BACK = "ctrl+b Back"
HELP_EXTRA = "ctrl+r History • ctrl+t Theme"
HELP_FILTERING = "Esc: Exit Filter • Enter Apply Filter"
HELP_HISTORY = "To go back press esc key"


@dataclass(frozen=True)
class FrameState:
    """Everything the renderer needs from one engine state, read-only."""

    label: str
    rows: tuple[str, ...]
    cursor: int = 0
    page: int = 0
    page_count: int = 0
    first_index: int = 0
    filter_text: str = ""
    filter_mode: bool = False
    history_mode: bool = False
    show_go_back: bool = False
    show_shortcuts: bool = True
    rain: tuple[str, ...] = ()
    width: int = MAX_PANEL_WIDTH


@dataclass(frozen=True)
class RowSpan:
    """Terminal lines occupied by one visible item row."""

    index: int
    top: int
    height: int


@dataclass(frozen=True)
class FrameLayout:
    rows_top: int
    rows: tuple[RowSpan, ...]


RowRenderer = Callable[[str, int, bool, Theme], Text]


@dataclass(frozen=True)
class Flourish:
    """Theme-specific decoration: extra lines around the rows and a row painter."""

    row: RowRenderer
    header: tuple[tuple[str, str], ...] = ()
    footer: tuple[tuple[str, str], ...] = ()
    animated: bool = False
    rain_style: str = ""


def _row_lines(label: str, prefix: str) -> str:
    """Prefix the first line of a label and indent its continuation lines."""
    indent = " " * len(prefix)
    lines = label.split("\n")
    return "\n".join([prefix + lines[0]] + [indent + line for line in lines[1:]])


def _default_row(label: str, index: int, selected: bool, theme: Theme) -> Text:
    if selected:
        body = _row_lines(label, f"{theme.selection_icon} ")
        return Text(body + " " * theme.selected_padding_right, style=theme.selected_style)
    style = theme.item_alt_style if index % 2 else theme.item_style
    return Text(_row_lines(label, f"{theme.unselected_icon} "), style=style)


_GHOSTS = ("👻", "👾")
_DOTS = "·" * 8


def _pacman_row(label: str, index: int, selected: bool, theme: Theme) -> Text:
    if selected:
        return Text(_row_lines(label, f"🟡{_DOTS} "), style=theme.selected_style)
    icon = _GHOSTS[index % len(_GHOSTS)]
    return Text(_row_lines(label, f"{icon}{_DOTS} "), style=theme.item_style)


def _matrix_row(label: str, index: int, selected: bool, theme: Theme) -> Text:
    if selected:
        return Text(_row_lines(label, "▣ ") + " ", style=theme.selected_style)
    return Text(_row_lines(label, "░ ") + " ", style=theme.item_style)


_PACMAN_YELLOW = "#fff200"
_MATRIX_GREEN = "#00ff41"

DEFAULT_FLOURISH = Flourish(row=_default_row)

FLOURISHES: dict[str, Flourish] = {
    "Pac-Man": Flourish(
        row=_pacman_row,
        header=(("╔" + "═" * 34 + "╗", _PACMAN_YELLOW),),
        footer=(("╚" + "═" * 34 + "╝", _PACMAN_YELLOW),),
    ),
    "Matrix": Flourish(
        row=_matrix_row,
        header=(("┏" + "━" * 34 + "┓", _MATRIX_GREEN),),
        footer=(
            ("┗" + "━" * 34 + "┛", _MATRIX_GREEN),
            ("  ᚠᚮᛚᛚᚮᚡ ᚦᛂ ᚡᚻᛁᛐᛂ ᚱᛆᛒᛒᛁᛐ  ", _MATRIX_GREEN),
        ),
        animated=True,
        rain_style=_MATRIX_GREEN,
    ),
}


def flourish_for(theme: Theme) -> Flourish:
    return FLOURISHES.get(theme.name, DEFAULT_FLOURISH)


def rows_top(state: FrameState, theme: Theme) -> int:
    """First terminal line of the item rows."""
    top = PANEL_TOP_LINES
    if state.filter_mode:
        top += 1
    return top + len(flourish_for(theme).header)


def layout_frame(state: FrameState, theme: Theme) -> FrameLayout:
    """Compute the line span of every visible row, matching render_frame."""
    top = rows_top(state, theme)
    spans = []
    line = top
    for i, label in enumerate(state.rows):
        height = label.count("\n") + 1
        spans.append(RowSpan(index=i, top=line, height=height))
        line += height
    return FrameLayout(rows_top=top, rows=tuple(spans))


def help_text(state: FrameState, theme: Theme) -> str:
    if state.filter_mode:
        return HELP_FILTERING
    if state.history_mode:
        return HELP_HISTORY
    parts = [HELP_KEYS]
    if state.show_go_back:
        parts.append(HELP_BACK)
    if state.show_shortcuts:
        parts.append(HELP_EXTRA)
    shortcuts = " • ".join(parts)
    if theme.help_hint:
        return f"{theme.help_hint}  {shortcuts}"
    return shortcuts


def render_frame(state: FrameState, theme: Theme) -> RenderableType:
    """Render one frame. Pure: same state and theme give the same output."""
    flourish = flourish_for(theme)
    lines: list[RenderableType] = []

    if state.filter_mode:
        lines.append(Text(f"Filter: {state.filter_text}█", style=theme.filter_style, no_wrap=True))

    for text, style in flourish.header:
        lines.append(Text(text, style=style, no_wrap=True, overflow="crop"))

    for i, label in enumerate(state.rows):
        row = flourish.row(label, state.first_index + i, i == state.cursor, theme)
        row.no_wrap = True
        row.overflow = "ellipsis"
        lines.append(row)

    if not state.rows:
        lines.append(Text("(no matching items)", style="dim"))

    for text, style in flourish.footer:
        lines.append(Text(text, style=style, no_wrap=True, overflow="crop"))

    if state.page_count > 1:
        lines.append(Text(""))
        lines.append(Text(f"Page {state.page + 1}/{state.page_count}"))

    lines.append(Text(""))
    lines.append(Text(help_text(state, theme), style=theme.help_style))

    subtitle = None
    if state.filter_text and not state.filter_mode:
        subtitle = Text(f"filter: {state.filter_text}", style=theme.filter_style)

    panel = Panel(
        Group(*lines),
        title=Text(f" {state.label} ", style=theme.title_style),
        subtitle=subtitle,
        border_style=theme.border_style,
        box=theme.box,
        width=min(state.width, MAX_PANEL_WIDTH),
    )
    frame: list[RenderableType] = [Align(panel, align=theme.alignment)]

    if flourish.animated and state.rain:
        frame.extend(Text(line, style=flourish.rain_style, no_wrap=True) for line in state.rain)

    return Group(*frame)


@dataclass
class MatrixRain:
    """Falling-code animation state, advanced one line per tick."""

    width: int = 40
    height: int = 16
    density: float = 0.2
    lines: list[str] = field(default_factory=list)

    CHARS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789@#$%&"

    def seed(self, rng) -> None:
        self.lines = [self._line(rng) for _ in range(self.height)]

    def advance(self, rng) -> None:
        if not self.lines:
            self.seed(rng)
            return
        self.lines = [self._line(rng)] + self.lines[:-1]

    def _line(self, rng) -> str:
        return "".join(
            rng.choice(self.CHARS) if rng.random() < self.density else " "
            for _ in range(self.width)
        )
