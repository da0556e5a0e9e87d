import io

import pytest
import readchar

from rich_select import keys, select
from rich_select.errors import TerminalUnavailableError
from rich_select.events import Click, Key, ScriptedEvents, TerminalEvents, Tick, _to_event


def test_parse_mouse_left_press_is_zero_based():
    assert keys.parse_mouse("\x1b[<0;5;3M") == (4, 2)


def test_parse_mouse_ignores_release_wheel_and_other_buttons():
    assert keys.parse_mouse("\x1b[<0;5;3m") is None
    assert keys.parse_mouse("\x1b[<64;1;1M") is None
    assert keys.parse_mouse("\x1b[<2;1;1M") is None
    assert keys.parse_mouse("x") is None


def test_key_predicates():
    assert keys.is_enter("\r")
    assert keys.is_escape("\x1b")
    assert keys.is_exit("q")
    assert keys.is_up("k") and keys.is_up(readchar.key.UP)
    assert keys.is_down("j") and keys.is_down(readchar.key.DOWN)
    assert keys.is_go_back(keys.CTRL_B) and keys.is_go_back(keys.CTRL_LEFT)
    assert not keys.is_go_back(readchar.key.LEFT)
    assert keys.is_history(keys.CTRL_R)
    assert keys.is_theme(keys.CTRL_T)
    assert keys.is_backspace("\x7f")


def test_escape_paired_with_next_key():
    assert keys.is_escape("\x1bj")
    assert keys.is_escape("\x1b\x1b")
    assert not keys.is_escape(readchar.key.UP)
    assert not keys.is_escape("j")


def test_is_printable_rejects_control_and_sequences():
    assert keys.is_printable("a")
    assert keys.is_printable(" ")
    assert not keys.is_printable("\x02")
    assert not keys.is_printable(readchar.key.UP)
    assert not keys.is_printable("")


class TestEvents:
    def test_mouse_report_becomes_click(self):
        assert _to_event("\x1b[<0;10;2M") == Click(9, 1)

    def test_mouse_release_becomes_empty_key(self):
        assert _to_event("\x1b[<0;10;2m") == Key("")

    def test_plain_key(self):
        assert _to_event("j") == Key("j")

    def test_scripted_events_replay_then_eof(self):
        events = ScriptedEvents(["j", Tick(), Click(1, 2)])
        assert events.next_event() == Key("j")
        assert events.next_event(0.1) == Tick()
        assert events.next_event() == Click(1, 2)
        assert events.remaining == 0
        with pytest.raises(EOFError):
            events.next_event()

    def test_terminal_events_require_tty(self, monkeypatch, console):
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        with pytest.raises(TerminalUnavailableError):
            with TerminalEvents(console):
                pass

    def test_terminal_events_require_terminal_output(self, monkeypatch, console):
        class FakeTty(io.StringIO):
            def isatty(self):
                return True

        monkeypatch.setattr("sys.stdin", FakeTty(""))
        with pytest.raises(TerminalUnavailableError, match="output is not a terminal"):
            with TerminalEvents(console):
                pass

    def test_select_refuses_plain_output(self, monkeypatch, console):
        class FakeTty(io.StringIO):
            def isatty(self):
                return True

        monkeypatch.setattr("sys.stdin", FakeTty(""))
        monkeypatch.setattr("readchar.readkey", lambda: "\r")
        with pytest.raises(TerminalUnavailableError):
            select("P", ["a", "b"], console=console)
