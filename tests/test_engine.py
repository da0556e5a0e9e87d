"""Tests for the selector state machine, driven by scripted events."""

import readchar

from rich_select import (
    Choice,
    ChoiceKind,
    Click,
    Key,
    Mode,
    ScriptedEvents,
    Selector,
    Services,
    items_per_page_for_height,
    select,
)
from rich_select.keys import CTRL_B, CTRL_LEFT, CTRL_R

ENTER = "\r"
ESC = "\x1b"

FRUIT = ["apple", "banana", "cherry", "date", "elderberry"]


def run(console, items, script, **kwargs):
    return select("Fruit", items, events=ScriptedEvents(script), console=console, **kwargs)


class TestSelection:
    def test_enter_selects_highlighted(self, console):
        choice = run(console, FRUIT, ["j", "j", ENTER])
        assert choice == Choice(ChoiceKind.SELECTED, "cherry")
        assert choice.selected

    def test_default_selected_is_highlighted(self, console):
        choice = run(console, FRUIT, [ENTER], default_selected="date")
        assert choice.item == "date"

    def test_unknown_default_falls_back_to_first(self, console):
        choice = run(console, FRUIT, [ENTER], default_selected="fig")
        assert choice.item == "apple"

    def test_down_across_pages(self, console):
        choice = run(console, FRUIT, ["j", "j", ENTER], items_per_page=2)
        assert choice.item == "cherry"

    def test_up_back_onto_previous_page(self, console):
        choice = run(console, FRUIT, ["j", "j", "k", ENTER], items_per_page=2)
        assert choice.item == "banana"

    def test_page_down_then_select(self, console):
        choice = run(console, FRUIT, [readchar.key.PAGE_DOWN, ENTER], items_per_page=2)
        assert choice.item == "cherry"

    def test_escape_cancels(self, console):
        assert run(console, FRUIT, [ESC]).cancelled

    def test_escape_read_with_next_key_cancels(self, console):
        assert run(console, FRUIT, [ESC + "j"]).cancelled

    def test_double_escape_cancels(self, console):
        assert run(console, FRUIT, [ESC + ESC]).cancelled

    def test_q_cancels(self, console):
        assert run(console, FRUIT, ["q"]).cancelled

    def test_keyboard_interrupt_cancels(self, console):
        class Interrupting(ScriptedEvents):
            def next_event(self, timeout=None):
                raise KeyboardInterrupt

        choice = Selector("Fruit", FRUIT, console=console).run(Interrupting([]))
        assert choice.cancelled

    def test_empty_items_enter_is_ignored(self, console):
        selector = Selector("Nothing", [], console=console)
        selector.handle(Key(ENTER))
        assert selector.mode is Mode.BROWSING
        assert selector.result is None

    def test_events_after_done_are_ignored(self, console):
        selector = Selector("Fruit", FRUIT, console=console)
        selector.handle(Key(ENTER))
        selector.handle(Key("j"))
        selector.handle(Key(ESC))
        assert selector.result == Choice.of("apple")


class TestGoBack:
    def test_ctrl_b_goes_back_when_allowed(self, console):
        choice = run(console, FRUIT, [CTRL_B], allow_go_back=True)
        assert choice.went_back
        assert choice.item is None

    def test_ctrl_left_goes_back(self, console):
        assert run(console, FRUIT, [CTRL_LEFT], allow_go_back=True).went_back

    def test_go_back_without_permission_is_cancel(self, console):
        assert run(console, FRUIT, [CTRL_B]).cancelled


class TestFiltering:
    def test_filter_then_select(self, console):
        choice = run(console, FRUIT, ["/", "a", "n", ENTER, ENTER])
        assert choice.item == "banana"

    def test_filter_accepts_letters_that_are_bindings(self, console):
        selector = Selector("Fruit", ["jq", "kk"], console=console)
        for key in ["/", "j", "q"]:
            selector.handle(Key(key))
        assert selector.model.filter_text == "jq"
        assert selector.mode is Mode.FILTERING

    def test_escape_leaves_filter_mode_and_keeps_filter(self, console):
        selector = Selector("Fruit", FRUIT, console=console)
        for key in ["/", "e", "r", ESC]:
            selector.handle(Key(key))
        assert selector.mode is Mode.BROWSING
        assert selector.model.filter_text == "er"
        assert selector.model.filtered_items == ["cherry", "elderberry"]

    def test_backspace_drops_last_character(self, console):
        selector = Selector("Fruit", FRUIT, console=console)
        for key in ["/", "x", "\x7f"]:
            selector.handle(Key(key))
        assert selector.model.filter_text == ""
        assert len(selector.model.filtered_items) == len(FRUIT)

    def test_backspace_on_empty_filter_is_noop(self, console):
        selector = Selector("Fruit", FRUIT, console=console)
        selector.handle(Key("/"))
        selector.handle(Key("\x7f"))
        assert selector.mode is Mode.FILTERING
        assert selector.model.filter_text == ""

    def test_no_match_enter_does_nothing(self, console):
        selector = Selector("Fruit", FRUIT, console=console)
        for key in ["/", "z", "z", ENTER, ENTER]:
            selector.handle(Key(key))
        assert selector.result is None
        selector.handle(Key(ESC))
        assert selector.result.cancelled

    def test_filter_change_resets_cursor(self, console):
        selector = Selector("Fruit", FRUIT, console=console)
        for key in ["j", "j", "/", "e"]:
            selector.handle(Key(key))
        assert selector.model.cursor == 0
        assert selector.model.current_item() == "apple"


class TestMouse:
    def test_click_on_row_selects_it(self, console):
        # Default theme: panel border on line 0, rows start on line 1.
        choice = run(console, FRUIT, [Click(5, 3)])
        assert choice.item == "cherry"
        assert choice.via_click

    def test_click_below_rows_is_ignored(self, console):
        choice = run(console, FRUIT, [Click(5, 1 + len(FRUIT)), ENTER])
        assert choice.item == "apple"
        assert not choice.via_click

    def test_click_on_border_is_ignored(self, console):
        assert run(console, FRUIT, [Click(0, 0), ESC]).cancelled

    def test_click_on_second_page(self, console):
        choice = run(console, FRUIT, [readchar.key.PAGE_DOWN, Click(2, 2)], items_per_page=2)
        assert choice.item == "date"


class TestHistoryKey:
    def test_history_runs_chosen_command(self, console, services, executor):
        selector = Selector("Fruit", FRUIT, console=console, services=services)
        choice = selector.run(ScriptedEvents([CTRL_R, "j", ENTER, ENTER]))
        assert executor.commands == ["make test"]
        assert choice.item == "apple"
        assert "Executing: make test" in console.file.getvalue()

    def test_history_escape_returns_to_parent(self, console, services, executor):
        selector = Selector("Fruit", FRUIT, console=console, services=services)
        choice = selector.run(ScriptedEvents(["j", CTRL_R, ESC, ENTER]))
        assert executor.commands == []
        # parent view is reset after a nested run
        assert choice.item == "apple"

    def test_history_without_entries_is_noop(self, console, executor):
        services = Services(executor=executor)
        choice = select(
            "Fruit", FRUIT, events=ScriptedEvents([CTRL_R, ENTER]), console=console,
            services=services,
        )
        assert choice.item == "apple"
        assert executor.commands == []


def test_items_per_page_for_height():
    assert items_per_page_for_height(10) == 5
    assert items_per_page_for_height(30) == 11
    assert items_per_page_for_height(200) == 20
