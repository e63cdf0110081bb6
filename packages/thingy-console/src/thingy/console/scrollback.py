"""Scrollback history: wrapped entries, newest first, plus a scroll offset."""

from __future__ import annotations

from collections import deque
from typing import Iterator

from thingy.console.wrap import Wrapped


class Scrollback:
    """Ordered history of pushed messages.

    ``scroll`` counts rendered lines scrolled back from the newest line.
    ``maximum_scroll`` is recomputed by :meth:`recompute_bounds` once per
    render pass; writes are never rejected, only clamped.
    """

    def __init__(self, columns: int = 80) -> None:
        self.entries: deque[Wrapped] = deque()
        self.scroll: int = 0
        self.maximum_scroll: int = 0
        self.columns: int = max(columns, 1)

    def push(self, text: str) -> None:
        entry = Wrapped(text)
        if self.scroll != 0:
            # Keep the viewport on the same content while scrolled back
            self.scroll += entry.line_count(self.columns)
        self.entries.appendleft(entry)

    def set_columns(self, columns: int) -> None:
        self.columns = max(columns, 1)

    def scroll_by(self, delta: int) -> None:
        """Move toward older (positive) or newer (negative) content."""
        if delta > 0:
            self.scroll = min(self.scroll + delta, self.maximum_scroll)
        elif delta < 0:
            self.scroll = max(self.scroll + delta, 0)

    def line_count(self) -> int:
        return sum(entry.line_count(self.columns) for entry in self.entries)

    def recompute_bounds(self, rendered_rows: int, input_rows: int) -> bool:
        """Recompute ``maximum_scroll`` and clamp ``scroll`` to it.

        Returns ``True`` if ``scroll`` had to be clamped, which means the
        frame just rendered is stale and another pass is needed.
        """
        visible_rows = max(rendered_rows - input_rows, 0)
        self.maximum_scroll = max(self.line_count() - visible_rows, 0)
        if self.scroll > self.maximum_scroll:
            self.scroll = self.maximum_scroll
            return True
        return False

    def rendered_lines(self) -> Iterator[str]:
        """Yield every line newest-first, in bottom-up drawing order."""
        for entry in self.entries:
            yield from reversed(entry.lines(self.columns))

    def clear(self) -> None:
        self.entries.clear()
        self.scroll = 0

    def reset_scroll(self) -> None:
        self.scroll = 0

    def __len__(self) -> int:
        return len(self.entries)
