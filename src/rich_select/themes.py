"""Theme catalog and the per-run current-theme context.

Each Theme is a frozen bundle of Rich styles, icons and spinner frames.
The registry is fixed at import time; only a ThemeContext ever changes
which theme is "current", and it is owned by the selector run that uses it.
"""

from __future__ import annotations

from dataclasses import dataclass

from rich import box
from rich.box import Box


@dataclass(frozen=True)
class Theme:
    """Visual theme for the selector.

    All styles use Rich style syntax (e.g. "bold #eaeaea on #A7C7E7").

    Attributes:
        name: Unique key in the registry, also shown in the theme picker.
        title_style: Style for the panel title (the selector label).
        item_style: Style for unselected rows on even positions.
        item_alt_style: Style for unselected rows on odd positions.
        selected_style: Style for the highlighted row.
        filter_style: Style for the filter input line.
        help_style: Style for the help/footer line.
        border_style: Colour of the panel border.
        box: Rich box drawing used for the panel border.
        selection_icon: Marker in front of the highlighted row.
        unselected_icon: Marker in front of other rows.
        loading_hint: Text shown next to the spinner.
        spinner_frames: Frames cycled by the spinner.
        selected_padding_right: Extra spaces appended to the highlighted row.
        alignment: Horizontal placement of the panel ("left", "center", "right").
        help_hint: Theme-specific text prepended to the key help.
    """

    name: str
    title_style: str
    item_style: str
    item_alt_style: str
    selected_style: str
    filter_style: str
    help_style: str
    border_style: str
    box: Box = box.SQUARE
    selection_icon: str = "▶"
    unselected_icon: str = " "
    loading_hint: str = "Loading..."
    spinner_frames: tuple[str, ...] = ("-", "\\", "|", "/")
    selected_padding_right: int = 4
    alignment: str = "center"
    help_hint: str = ""


def _theme(
    name: str,
    *,
    fg: str,
    bg: str,
    alt_bg: str,
    accent: str,
    title_bg: str,
    help_bg: str,
    filter_bg: str | None = None,
    alt_fg: str | None = None,
    item_fg: str | None = None,
    italic: bool = False,
    **extra,
) -> Theme:
    """Build a Theme from a small palette.

    The selected row, the filter line and the border share the accent
    colour; the selected row text uses the item background.
    """
    slant = " italic" if italic else ""
    row_fg = item_fg or fg
    return Theme(
        name=name,
        title_style=f"bold{slant} {fg} on {title_bg}",
        item_style=f"{row_fg} on {bg}",
        item_alt_style=f"{alt_fg or row_fg} on {alt_bg}",
        selected_style=f"bold {bg} on {accent}",
        filter_style=f"{bg} on {filter_bg or accent}",
        help_style=f"{fg}{slant} on {help_bg}",
        border_style=accent,
        **extra,
    )


_ALL_THEMES: tuple[Theme, ...] = (
    _theme(
        "Turbo C++",
        fg="color(15)", bg="color(17)", alt_bg="color(18)", accent="color(14)",
        title_bg="color(4)", help_bg="color(4)",
        selection_icon=">",
        help_hint="C++",
    ),
    _theme(
        "Modern Pastel",
        fg="#eaeaea", bg="#232946", alt_bg="#2d3250", accent="#ffd6e0",
        title_bg="#A7C7E7", help_bg="#C7CEEA", filter_bg="#FFF5BA",
        box=box.DOUBLE,
        loading_hint="Connecting to the cloud...",
        spinner_frames=("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"),
    ),
    _theme(
        "Ghosty",
        fg="#e0e6f0", bg="#232946", alt_bg="#282a36", accent="#b8c0ff",
        title_bg="#6c6f93", help_bg="#6c6f93", filter_bg="#e0e6f0", italic=True,
        box=box.ROUNDED,
        selection_icon="👻",
        loading_hint="Summoning ghosts...",
        spinner_frames=("🌫️ ", "👻 ", "🌫️ ", " ", " ", " ", " ", " ", " ", " "),
        selected_padding_right=6,
        help_hint="👻",
    ),
    _theme(
        "Solarized Dark",
        fg="#93a1a1", bg="#002b36", alt_bg="#073642", accent="#b58900",
        title_bg="#073642", help_bg="#073642",
        selection_icon="⦿",
        loading_hint="Solarizing...",
        spinner_frames=("☀", "☼", "☀", "☼"),
    ),
    _theme(
        "Dracula",
        fg="#f8f8f2", bg="#282a36", alt_bg="#44475a", accent="#bd93f9",
        title_bg="#282a36", help_bg="#282a36",
        box=box.DOUBLE,
        selection_icon="🦇",
        loading_hint="Awakening Dracula...",
        spinner_frames=("🦇", " ", "🦇", " "),
        help_hint="🦇",
    ),
    _theme(
        "Pac-Man",
        fg="#fff200", bg="#000000", alt_bg="#22223b", accent="#fff200",
        title_bg="#000000", help_bg="#000000",
        selection_icon="🟡",
        loading_hint="Eating dots...",
        spinner_frames=("C", "c", "o", ".", " ", ".", "o", "c", "C"),
        selected_padding_right=6,
        help_hint="🟡",
    ),
    _theme(
        "Matrix",
        fg="#00ff41", bg="#000000", alt_bg="#22223b", accent="#00ff41",
        title_bg="#000000", help_bg="#000000",
        selection_icon="▣",
        loading_hint="Following the white rabbit...",
        spinner_frames=("|", "/", "-", "\\"),
        selected_padding_right=6,
        help_hint="▣",
    ),
    _theme(
        "Gameboy",
        fg="#9bbc0f", bg="#0f380f", alt_bg="#306230", accent="#9bbc0f",
        title_bg="#0f380f", help_bg="#0f380f",
        selection_icon="♥",
        loading_hint="Blowing cartridge...",
        spinner_frames=("░", "▒", "▓", "█"),
        help_hint="♥",
    ),
    _theme(
        "DOS ANSI",
        fg="color(226)", bg="color(19)", alt_bg="color(21)", accent="color(226)",
        title_bg="color(19)", help_bg="color(19)",
        selection_icon="█",
        loading_hint="Booting up...",
        spinner_frames=("█", "▒", "░", " "),
    ),
    _theme(
        "Cyberpunk",
        fg="#ff00c8", bg="#0f1021", alt_bg="#232946", accent="#ff00c8",
        title_bg="#0f1021", help_bg="#0f1021", item_fg="#00fff7", alt_fg="#ff00c8",
        box=box.DOUBLE,
        selection_icon="⮞",
        loading_hint="Hacking the planet...",
        spinner_frames=("⠿", "⠾", "⠽", "⠻", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"),
        selected_padding_right=6,
        help_hint="⮞",
    ),
    _theme(
        "Zelda",
        fg="#f9d923", bg="#1e212b", alt_bg="#232946", accent="#f9d923",
        title_bg="#1e212b", help_bg="#1e212b",
        box=box.ROUNDED,
        selection_icon="💚",
        loading_hint="Finding the Triforce...",
        spinner_frames=("▲", "△", "▲", "△"),
        selected_padding_right=6,
        help_hint="💚",
    ),
    _theme(
        "Mac Classic",
        fg="#000000", bg="#c0c0c0", alt_bg="#e0e0e0", accent="#000000",
        title_bg="#c0c0c0", help_bg="#c0c0c0", filter_bg="#c0c0c0",
        selection_icon="",
        loading_hint="Welcome to Macintosh...",
        spinner_frames=("⌛", "⏳", "⌛", "⏳"),
    ),
    _theme(
        "Commodore 64",
        fg="#7869c4", bg="#40318d", alt_bg="#5a4fcf", accent="#7869c4",
        title_bg="#40318d", help_bg="#40318d",
        selection_icon="█",
        loading_hint="READY.",
        spinner_frames=("█", " ", "█", " "),
        help_hint="READY.",
    ),
    _theme(
        "Synthwave '84",
        fg="#f5f5f5", bg="#2b213a", alt_bg="#3a2b5f", accent="#ff5fd2",
        title_bg="#ff5fd2", help_bg="#ff5fd2", italic=True,
        box=box.DOUBLE,
        selection_icon="🌴",
        loading_hint="Booting up the DeLorean...",
        spinner_frames=("🕹️", "🌴", "🦩", "🌅"),
        selected_padding_right=6,
        help_hint="Vaporwave mode",
    ),
    _theme(
        "Fairyfloss",
        fg="#f8f8f2", bg="#8c7dd1", alt_bg="#ffd7ef", accent="#ffb8d1",
        title_bg="#ffb8d1", help_bg="#ffb8d1",
        box=box.ROUNDED,
        selection_icon="🧚",
        loading_hint="Sprinkling fairy dust...",
        spinner_frames=("✨", "🧚", "🌸", "✨"),
        selected_padding_right=6,
        help_hint="✨ Dream in code",
    ),
    _theme(
        "Nord",
        fg="#d8dee9", bg="#3b4252", alt_bg="#434c5e", accent="#88c0d0",
        title_bg="#2e3440", help_bg="#2e3440",
        selection_icon="❄️",
        loading_hint="Crossing the fjord...",
        spinner_frames=("❄️", "🌨️", "💧", " "),
        help_hint="Stay frosty",
    ),
    _theme(
        "Catppuccin",
        fg="#f5e0dc", bg="#45475a", alt_bg="#a6adc8", accent="#f5e0dc",
        title_bg="#a6adc8", help_bg="#a6adc8",
        box=box.ROUNDED,
        selection_icon="🐾",
        loading_hint="Warming the milk...",
        spinner_frames=("🐱", "🐾", "☕", " "),
        selected_padding_right=6,
        help_hint="Meow!",
    ),
    _theme(
        "Blackbird",
        fg="#f6c177", bg="#181818", alt_bg="#22223b", accent="#f6c177",
        title_bg="#181818", help_bg="#181818",
        selection_icon="🐦",
        loading_hint="Taking flight...",
        spinner_frames=("🐦", "⬛", "⬜", " "),
        help_hint="Fly high",
    ),
)

THEMES: dict[str, Theme] = {theme.name: theme for theme in _ALL_THEMES}

if len(THEMES) != len(_ALL_THEMES):
    raise RuntimeError("Theme names must be unique")

DEFAULT_THEME = THEMES["Modern Pastel"]


def normalize_theme_key(value: str) -> str:
    return value.strip().lower().replace("_", "-").replace(" ", "-")


def get_theme_names() -> list[str]:
    """Return theme names in catalog order."""
    return [theme.name for theme in _ALL_THEMES]


def get_theme(name: str | None) -> Theme | None:
    """Look up a theme by exact name, falling back to a normalized match."""
    if not name:
        return None
    if name in THEMES:
        return THEMES[name]
    key = normalize_theme_key(name)
    for theme in _ALL_THEMES:
        if normalize_theme_key(theme.name) == key:
            return theme
    return None


class ThemeContext:
    """The current theme for one selector run.

    Render and preview code read and write ``current`` through this object
    instead of a module global, so nested or sequential runs never observe
    each other's provisional previews.
    """

    def __init__(self, current: Theme | None = None):
        self.current = current or DEFAULT_THEME

    def set_by_name(self, name: str) -> bool:
        """Make the named theme current. Returns False for unknown names."""
        theme = get_theme(name)
        if theme is None:
            return False
        self.current = theme
        return True

    def child(self) -> ThemeContext:
        """Independent context starting from this one's current theme."""
        return ThemeContext(self.current)

    def __repr__(self) -> str:
        return f"ThemeContext(current={self.current.name!r})"
