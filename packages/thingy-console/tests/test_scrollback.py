"""Tests for thingy.console.scrollback.Scrollback."""

from __future__ import annotations

import sys

import pytest

from thingy.console.scrollback import Scrollback


def _filled(columns: int = 10, lines: int = 20) -> Scrollback:
    scrollback = Scrollback(columns)
    for i in range(lines):
        scrollback.push(f"line {i}")
    return scrollback


class TestPush:
    """Entries are inserted newest-first."""

    def test_push_inserts_at_front(self) -> None:
        scrollback = Scrollback()
        scrollback.push("first")
        scrollback.push("second")
        assert [entry.text for entry in scrollback.entries] == ["second", "first"]

    def test_push_at_bottom_leaves_scroll_alone(self) -> None:
        scrollback = Scrollback(10)
        scrollback.push("hello world")
        assert scrollback.scroll == 0

    def test_push_while_scrolled_keeps_viewport(self) -> None:
        scrollback = _filled()
        scrollback.recompute_bounds(rendered_rows=5, input_rows=1)
        scrollback.scroll_by(3)
        before = list(scrollback.rendered_lines())[scrollback.scroll:scrollback.scroll + 4]

        scrollback.push("hello world")  # two lines at 10 columns

        assert scrollback.scroll == 5
        after = list(scrollback.rendered_lines())[scrollback.scroll:scrollback.scroll + 4]
        assert after == before

    def test_rendered_lines_are_bottom_up(self) -> None:
        scrollback = Scrollback(10)
        scrollback.push("old")
        scrollback.push("hello world")
        assert list(scrollback.rendered_lines()) == ["world", "hello ", "old"]


class TestScrollBy:
    """scroll_by saturates at both ends."""

    def test_positive_clamps_at_maximum(self) -> None:
        scrollback = _filled()
        scrollback.recompute_bounds(rendered_rows=5, input_rows=1)
        assert scrollback.maximum_scroll == 16
        scrollback.scroll_by(100)
        assert scrollback.scroll == 16

    def test_negative_clamps_at_zero(self) -> None:
        scrollback = _filled()
        scrollback.recompute_bounds(rendered_rows=5, input_rows=1)
        scrollback.scroll_by(4)
        scrollback.scroll_by(-10)
        assert scrollback.scroll == 0

    @pytest.mark.parametrize(
        "delta", [sys.maxsize, -sys.maxsize - 1, 2**63 - 1, -(2**63), 2**200, -(2**200)]
    )
    def test_extreme_deltas_stay_in_bounds(self, delta: int) -> None:
        scrollback = _filled()
        scrollback.recompute_bounds(rendered_rows=5, input_rows=1)
        scrollback.scroll_by(5)
        scrollback.scroll_by(delta)
        assert 0 <= scrollback.scroll <= scrollback.maximum_scroll

    def test_sequence_of_deltas_stays_in_bounds(self) -> None:
        scrollback = _filled()
        scrollback.recompute_bounds(rendered_rows=5, input_rows=1)
        for delta in (3, -1, 50, -2**63, 7, 2**63 - 1, -4, 0):
            scrollback.scroll_by(delta)
            assert 0 <= scrollback.scroll <= scrollback.maximum_scroll

    def test_no_scrolling_without_history(self) -> None:
        scrollback = Scrollback()
        scrollback.recompute_bounds(rendered_rows=24, input_rows=1)
        scrollback.scroll_by(5)
        assert scrollback.scroll == 0


class TestRecomputeBounds:
    """maximum_scroll tracks line count minus visible rows."""

    def test_maximum_is_total_minus_visible(self) -> None:
        scrollback = _filled(lines=10)
        scrollback.recompute_bounds(rendered_rows=6, input_rows=2)
        assert scrollback.maximum_scroll == 6

    def test_maximum_floors_at_zero(self) -> None:
        scrollback = _filled(lines=3)
        assert scrollback.recompute_bounds(rendered_rows=24, input_rows=1) is False
        assert scrollback.maximum_scroll == 0

    def test_input_taller_than_viewport(self) -> None:
        scrollback = _filled(lines=3)
        scrollback.recompute_bounds(rendered_rows=2, input_rows=5)
        assert scrollback.maximum_scroll == 3

    def test_clamp_reports_change(self) -> None:
        scrollback = _filled(lines=10)
        scrollback.recompute_bounds(rendered_rows=5, input_rows=1)
        scrollback.scroll_by(6)
        assert scrollback.recompute_bounds(rendered_rows=10, input_rows=1) is True
        assert scrollback.scroll == 1

    def test_no_clamp_reports_no_change(self) -> None:
        scrollback = _filled(lines=10)
        scrollback.recompute_bounds(rendered_rows=5, input_rows=1)
        scrollback.scroll_by(2)
        assert scrollback.recompute_bounds(rendered_rows=5, input_rows=1) is False
        assert scrollback.scroll == 2

    def test_wider_columns_reduce_line_count(self) -> None:
        scrollback = Scrollback(5)
        scrollback.push("hello world")
        assert scrollback.line_count() == 3
        scrollback.set_columns(20)
        assert scrollback.line_count() == 1


class TestReset:
    """clear and reset_scroll."""

    def test_clear_empties_and_resets_scroll(self) -> None:
        scrollback = _filled()
        scrollback.recompute_bounds(rendered_rows=5, input_rows=1)
        scrollback.scroll_by(3)
        scrollback.clear()
        assert len(scrollback) == 0
        assert scrollback.scroll == 0

    def test_reset_scroll_keeps_entries(self) -> None:
        scrollback = _filled()
        scrollback.recompute_bounds(rendered_rows=5, input_rows=1)
        scrollback.scroll_by(3)
        scrollback.reset_scroll()
        assert scrollback.scroll == 0
        assert len(scrollback) == 20

    def test_zero_columns_clamped(self) -> None:
        scrollback = Scrollback()
        scrollback.set_columns(0)
        assert scrollback.columns == 1
