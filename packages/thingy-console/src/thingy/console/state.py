"""State shared between the application and presentation threads.

Every field sits behind its own lock. Nothing here updates two fields as one
transaction: an input change and a scrollback change are independent.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Iterator

from thingy.console.config import ConsoleConfig
from thingy.console.input import InputSnapshot, InputState
from thingy.console.scrollback import Scrollback

logger = logging.getLogger(__name__)

Redrawer = Callable[[], None]


class ConsoleState:
    """Lock-protected aggregate of input, scrollback, shutdown flag and redraw hook."""

    def __init__(self, config: ConsoleConfig | None = None) -> None:
        self.config = config or ConsoleConfig()
        self._input = InputState()
        self._input_lock = threading.Lock()
        self._scrollback = Scrollback(self.config.initial_columns)
        self._scrollback_lock = threading.Lock()
        self._shutdown = False
        self._shutdown_lock = threading.Lock()
        self._redrawer: Redrawer | None = None
        self._redrawer_lock = threading.Lock()

    # -- field access -------------------------------------------------------

    @contextmanager
    def locked_input(self) -> Iterator[InputState]:
        with self._input_lock:
            yield self._input

    @contextmanager
    def locked_scrollback(self) -> Iterator[Scrollback]:
        with self._scrollback_lock:
            yield self._scrollback

    # -- shutdown flag ------------------------------------------------------

    def should_shutdown(self) -> bool:
        with self._shutdown_lock:
            return self._shutdown

    def shutdown(self) -> None:
        with self._shutdown_lock:
            if self._shutdown:
                return
            self._shutdown = True
        logger.debug("Console state marked for shutdown")

    # -- redraw hook --------------------------------------------------------

    def set_redrawer(self, redrawer: Redrawer | None) -> None:
        """Install the callback that asks the presentation side to redraw.

        Replaces any previous callback; ``None`` removes it.
        """
        with self._redrawer_lock:
            self._redrawer = redrawer

    def redraw(self) -> None:
        with self._redrawer_lock:
            redrawer = self._redrawer
        if redrawer is not None:
            redrawer()

    # -- input --------------------------------------------------------------

    def input_snapshot(self) -> InputSnapshot:
        with self._input_lock:
            return self._input.snapshot()

    def set_suggestion(self, suggestion: str) -> None:
        with self._input_lock:
            self._input.set_suggestion(suggestion)

    def set_secure(self) -> None:
        with self._input_lock:
            self._input.enter_secure()

    def clear_secure(self) -> None:
        with self._input_lock:
            self._input.exit_secure()

    def clear_input(self) -> None:
        with self._input_lock:
            self._input.clear()

    # -- scrollback ---------------------------------------------------------

    def push(self, line: str) -> None:
        with self._scrollback_lock:
            self._scrollback.push(line)

    def clear_scrollback(self) -> None:
        with self._scrollback_lock:
            self._scrollback.clear()

    def scroll_to_current(self) -> None:
        with self._scrollback_lock:
            self._scrollback.reset_scroll()

    def scroll_by(self, lines: int) -> None:
        with self._scrollback_lock:
            self._scrollback.scroll_by(lines)
