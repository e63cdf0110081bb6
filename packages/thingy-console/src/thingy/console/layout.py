"""The non-visual half of a render pass.

A presentation backend calls :func:`compose_frame` once per frame with its
viewport size in character cells and draws the returned :class:`Frame`:
input lines top-down at the bottom of the viewport, scrollback lines
bottom-up above them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import islice

from thingy.console.input import InputMode
from thingy.console.state import ConsoleState
from thingy.console.wrap import Wrapped


@dataclass
class Frame:
    """Everything a backend needs to draw one frame."""

    columns: int
    rows: int
    input_lines: list[str] = field(default_factory=list)
    suggestion: str = ""
    input_mode: InputMode = InputMode.PLAIN
    # Newest first: index 0 sits directly above the input area.
    scrollback_lines: list[str] = field(default_factory=list)
    scroll: int = 0
    maximum_scroll: int = 0
    needs_redraw: bool = False

    @property
    def input_rows(self) -> int:
        return len(self.input_lines)

    def screen_lines(self) -> list[str]:
        """Flatten to top-to-bottom lines, at most ``rows`` of them."""
        visible = list(reversed(self.scrollback_lines)) + self.input_lines
        if self.suggestion and visible:
            visible[-1] = visible[-1] + self.suggestion
        return visible[-self.rows:] if self.rows > 0 else []


def compose_frame(state: ConsoleState, columns: int, rows: int) -> Frame:
    """Wrap input and scrollback for a ``columns`` x ``rows`` viewport.

    Also recomputes the scroll bounds. If the scroll offset had to be
    clamped, a redraw is requested and ``Frame.needs_redraw`` is set.
    """
    columns = max(columns, 1)
    rows = max(rows, 0)
    frame = Frame(columns=columns, rows=rows)

    with state.locked_input() as input_state:
        frame.input_mode = input_state.mode
        frame.suggestion = input_state.suggestion
        if input_state.is_secure:
            masked = Wrapped(input_state.display_text(state.config.secure_mask))
            frame.input_lines = list(masked.lines(columns))
        else:
            frame.input_lines = list(input_state.buffer.lines(columns))

    input_rows = len(frame.input_lines)
    with state.locked_scrollback() as scrollback:
        scrollback.set_columns(columns)
        available = max(rows - input_rows, 0)
        lines = islice(scrollback.rendered_lines(), scrollback.scroll, scrollback.scroll + available)
        frame.scrollback_lines = list(lines)
        frame.needs_redraw = scrollback.recompute_bounds(rows, input_rows)
        frame.scroll = scrollback.scroll
        frame.maximum_scroll = scrollback.maximum_scroll

    if frame.needs_redraw:
        state.redraw()
    return frame

