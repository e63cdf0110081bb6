"""Tests for thingy.console.state.ConsoleState."""

from __future__ import annotations

import threading

from thingy.console.input import InputMode
from thingy.console.state import ConsoleState


class TestShutdownFlag:
    """The shutdown flag starts clear and stays set."""

    def test_initially_clear(self, state: ConsoleState) -> None:
        assert state.should_shutdown() is False

    def test_shutdown_sets_flag(self, state: ConsoleState) -> None:
        state.shutdown()
        state.shutdown()
        assert state.should_shutdown() is True


class TestRedrawer:
    """A single replaceable redraw callback."""

    def test_redraw_without_callback_is_noop(self, state: ConsoleState) -> None:
        state.redraw()

    def test_redraw_invokes_callback(self, state: ConsoleState, redraws) -> None:
        state.redraw()
        state.redraw()
        assert redraws.count == 2

    def test_callback_is_replaced(self, state: ConsoleState) -> None:
        calls: list[str] = []
        state.set_redrawer(lambda: calls.append("first"))
        state.set_redrawer(lambda: calls.append("second"))
        state.redraw()
        assert calls == ["second"]

    def test_callback_can_be_removed(self, state: ConsoleState) -> None:
        calls: list[str] = []
        state.set_redrawer(lambda: calls.append("x"))
        state.set_redrawer(None)
        state.redraw()
        assert calls == []

    def test_callback_may_read_state(self, state: ConsoleState) -> None:
        # Redraw runs outside the field locks
        seen: list[str] = []
        state.set_redrawer(lambda: seen.append(state.input_snapshot().text))
        state.push("x")
        state.redraw()
        assert seen == [""]


class TestFieldOperations:
    """Input and scrollback helpers lock their own field."""

    def test_push_and_clear_scrollback(self, state: ConsoleState) -> None:
        state.push("one")
        state.push("two")
        with state.locked_scrollback() as scrollback:
            assert [entry.text for entry in scrollback.entries] == ["two", "one"]
        state.clear_scrollback()
        with state.locked_scrollback() as scrollback:
            assert len(scrollback) == 0

    def test_scroll_to_current(self, state: ConsoleState) -> None:
        for i in range(30):
            state.push(f"line {i}")
        with state.locked_scrollback() as scrollback:
            scrollback.recompute_bounds(rendered_rows=10, input_rows=1)
        state.scroll_by(5)
        state.scroll_to_current()
        with state.locked_scrollback() as scrollback:
            assert scrollback.scroll == 0

    def test_initial_columns_from_config(self, state: ConsoleState) -> None:
        with state.locked_scrollback() as scrollback:
            assert scrollback.columns == 20

    def test_suggestion_and_secure(self, state: ConsoleState) -> None:
        state.set_suggestion("abc")
        assert state.input_snapshot().mode is InputMode.SUGGESTING
        state.set_secure()
        assert state.input_snapshot().mode is InputMode.SECURE
        state.clear_secure()
        assert state.input_snapshot().mode is InputMode.PLAIN

    def test_clear_input(self, state: ConsoleState) -> None:
        with state.locked_input() as input_state:
            input_state.append("a")
        state.clear_input()
        assert state.input_snapshot().text == ""

    def test_concurrent_pushes_are_all_kept(self, state: ConsoleState) -> None:
        def push_many(tag: str) -> None:
            for i in range(200):
                state.push(f"{tag}{i}")

        threads = [threading.Thread(target=push_many, args=(tag,)) for tag in "abcd"]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        with state.locked_scrollback() as scrollback:
            assert len(scrollback) == 800
