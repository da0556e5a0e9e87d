"""Command-line interface for rselect.

    rselect a b c                 pick one of the arguments
    ls | rselect --label Files    pick one of the stdin lines
    rselect --history             re-run a recent command
    rselect --theme               choose a theme with live preview
    rselect --list-themes         print theme names

The choice goes to stdout; the menu itself is drawn on stderr so the
command works inside ``$(...)``.
"""

from __future__ import annotations

import argparse
import sys

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from rich_select import (
    SelectorError,
    Services,
    TerminalUnavailableError,
    history_select,
    loading,
    select,
    select_theme,
)
from rich_select.events import EventSource
from rich_select.themes import ThemeContext, get_theme_names

from . import __version__, config
from .executor import run_command
from .history_log import HistoryLog
from .logging_setup import configure_logging
from .theme_store import ThemeStore, initial_theme_context

EXIT_SELECTED = 0
EXIT_CANCELLED = 1
EXIT_WENT_BACK = 2
EXIT_ERROR = 3
EXIT_INTERRUPTED = 130


def _event_source() -> EventSource | None:
    """Event source for menus; None means the process terminal."""
    return None


def report_error(console: Console, message: str, error: BaseException, fix: str = "") -> None:
    """Print a single formatted error block."""
    body = Text()
    body.append(f"ERROR: {message}\n", style="bold red")
    body.append(f"Details: {error}")
    if fix:
        body.append("\nPotential Fix: ")
        body.append(fix, style="bold blue")
    console.print(Panel(body, border_style="red", expand=False))


def _attach_terminal() -> None:
    """Point stdin back at the terminal after reading piped items."""
    if sys.stdin is not None and sys.stdin.isatty():
        return
    try:
        sys.stdin = open("/dev/tty", encoding="utf-8")  # noqa: SIM115
    except OSError as e:
        raise TerminalUnavailableError(f"cannot open /dev/tty: {e}") from e


def _read_items(args: argparse.Namespace, themes: ThemeContext, console: Console) -> list[str]:
    if args.items:
        return list(args.items)
    if sys.stdin is None or sys.stdin.isatty():
        return []
    with loading(themes, console=console):
        lines = sys.stdin.read().splitlines()
    _attach_terminal()
    return [line for line in lines if line.strip()]


def cmd_pick(args, console, themes, services, options) -> int:
    items = _read_items(args, themes, console)
    choice = select(
        args.label,
        items,
        args.default or "",
        args.allow_back,
        console=console,
        themes=themes,
        services=services,
        **options,
    )
    if choice.selected:
        print(choice.item)
        if args.record and services.history is not None:
            services.history.append(choice.item)
        return EXIT_SELECTED
    if choice.went_back:
        return EXIT_WENT_BACK
    return EXIT_CANCELLED


def cmd_history(args, console, themes, services, options) -> int:
    limit = services.history_limit
    entries = services.history.last_unique(limit) if services.history is not None else []
    if not entries:
        console.print("No command history found.")
        return EXIT_SELECTED

    selected = history_select(
        f"Command History (last {limit} unique)",
        entries,
        console=console,
        themes=themes,
        services=services,
        **options,
    )
    if not selected:
        return EXIT_CANCELLED
    console.print(f"\nExecuting: {selected}", markup=False)
    return run_command(selected)


def cmd_theme(args, console, themes, services, options) -> int:
    choice = select_theme(themes, console=console, services=services, **options)
    if choice.selected:
        console.print(f"Theme set to [bold]{themes.current.name}[/bold]")
        return EXIT_SELECTED
    return EXIT_CANCELLED


def cmd_list_themes(args, console, themes, services, options) -> int:
    for name in get_theme_names():
        marker = "*" if name == themes.current.name else " "
        print(f"{marker} {name}")
    return EXIT_SELECTED


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="rselect",
        description="rselect: pick one line interactively",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"rselect {__version__}")
    parser.add_argument("items", nargs="*", help="Items to choose from (default: stdin lines)")
    parser.add_argument("-l", "--label", default="Select", help="Menu title")
    parser.add_argument("-d", "--default", help="Item highlighted initially")
    parser.add_argument("--per-page", type=int, help="Rows per page (default: fit terminal)")
    parser.add_argument("--allow-back", action="store_true",
                        help="Offer ctrl+b to go back (exit status 2)")
    parser.add_argument("--record", action="store_true",
                        help="Append the chosen item to the history log")
    parser.add_argument("--no-mouse", action="store_true", help="Disable mouse clicks")
    parser.add_argument("--debug", action="store_true", help="Write a debug log")

    modes = parser.add_mutually_exclusive_group()
    modes.add_argument("--history", dest="func", action="store_const", const=cmd_history,
                       help="Pick and run a recent command")
    modes.add_argument("--theme", dest="func", action="store_const", const=cmd_theme,
                       help="Choose a theme with live preview")
    modes.add_argument("--list-themes", dest="func", action="store_const", const=cmd_list_themes,
                       help="Print available themes")
    parser.set_defaults(func=cmd_pick)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.per_page is not None and args.per_page < 1:
        parser.error("--per-page must be at least 1")

    cfg = config.load_config()
    configure_logging(args.debug or config.is_debug_enabled(cfg), config.get_log_path())

    console = Console(stderr=True, highlight=False)
    store = ThemeStore()
    themes = initial_theme_context(store)
    services = Services(
        history=HistoryLog(),
        theme_store=store,
        executor=run_command,
        history_limit=config.get_int(cfg, "history_limit"),
        history_wrap_width=config.get_int(cfg, "history_wrap_width"),
        mouse=bool(cfg.get("mouse", True)) and not args.no_mouse,
    )
    options = {
        "items_per_page": args.per_page or config.get_int(cfg, "items_per_page"),
        "events": _event_source(),
    }

    try:
        return args.func(args, console, themes, services, options)
    except TerminalUnavailableError as e:
        report_error(console, "No interactive terminal", e, e.hint)
    except SelectorError as e:
        report_error(console, "Selector failed", e)
    except OSError as e:
        report_error(console, "Cannot access rselect files", e,
                     f"Check permissions of {config.get_config_dir()}")
    except KeyboardInterrupt:
        print()
        return EXIT_INTERRUPTED
    return EXIT_ERROR


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
