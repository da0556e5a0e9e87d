"""Pytest fixtures for rich-select tests."""

import io

import pytest
from rich.console import Console

from rich_select import Services, ThemeContext


class FakeHistory:
    """In-memory history source."""

    def __init__(self, entries=()):
        self.entries = list(entries)
        self.cleared = 0

    def last_unique(self, limit):
        return self.entries[:limit]

    def clear(self):
        self.entries = []
        self.cleared += 1


class FakeThemeStore:
    def __init__(self, name=None):
        self.name = name
        self.saved = []

    def load(self):
        return self.name

    def save(self, name):
        self.name = name
        self.saved.append(name)


class RecordingExecutor:
    def __init__(self):
        self.commands = []

    def __call__(self, command):
        self.commands.append(command)
        return 0


def make_console(width=100, height=30):
    return Console(
        file=io.StringIO(),
        width=width,
        height=height,
        force_terminal=False,
        color_system=None,
        highlight=False,
    )


def console_output(console):
    return console.file.getvalue()


@pytest.fixture
def console():
    return make_console()


@pytest.fixture
def themes():
    return ThemeContext()


@pytest.fixture
def history():
    return FakeHistory(["git status", "make test"])


@pytest.fixture
def theme_store():
    return FakeThemeStore()


@pytest.fixture
def executor():
    return RecordingExecutor()


@pytest.fixture
def services(history, theme_store, executor):
    return Services(history=history, theme_store=theme_store, executor=executor)


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    """Point the rselect config directory at a temp dir."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.delenv("RSELECT_THEME", raising=False)
    monkeypatch.delenv("RSELECT_DEBUG", raising=False)
    config_dir = tmp_path / "rselect"
    config_dir.mkdir()
    return config_dir
