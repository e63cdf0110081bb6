"""Input line state: the edit buffer, suggestion text and secure mode."""

from __future__ import annotations

import enum
from dataclasses import dataclass

import grapheme

from thingy.console.wrap import Wrapped, is_control_char

BACKSPACE_CHARS = ("\x08", "\x7f")
SUBMIT_CHARS = ("\r", "\n")
TAB = "\t"


class InputMode(enum.Enum):
    PLAIN = "plain"
    SUGGESTING = "suggesting"
    SECURE = "secure"


class InputChange(enum.Enum):
    """What a single character of input did to the buffer."""

    CHANGED = "changed"
    SUBMITTED = "submitted"
    IGNORED = "ignored"


@dataclass(frozen=True)
class InputSnapshot:
    """Detached copy of the input line handed to the application thread."""

    text: str = ""
    mode: InputMode = InputMode.PLAIN
    suggestion: str = ""

    @property
    def is_secure(self) -> bool:
        return self.mode is InputMode.SECURE

    def __str__(self) -> str:
        return self.text


class InputState:
    """The text being edited plus its exclusive mode.

    ``suggestion`` is only meaningful while the mode is ``SUGGESTING`` and
    reads as an empty string otherwise.
    """

    def __init__(self) -> None:
        self.buffer = Wrapped()
        self.mode = InputMode.PLAIN
        self._suggestion = ""

    @property
    def text(self) -> str:
        return self.buffer.text

    @property
    def suggestion(self) -> str:
        if self.mode is InputMode.SUGGESTING:
            return self._suggestion
        return ""

    @property
    def is_secure(self) -> bool:
        return self.mode is InputMode.SECURE

    def append(self, ch: str) -> InputChange:
        """Apply one character of keyboard input."""
        if ch in BACKSPACE_CHARS:
            self.buffer.pop()
            self._suggestion = ""
            return InputChange.CHANGED
        if ch in SUBMIT_CHARS:
            return InputChange.SUBMITTED
        if ch == TAB or is_control_char(ch):
            return InputChange.IGNORED

        self.buffer.push(ch)
        if self.mode is InputMode.SUGGESTING and self._suggestion:
            if self._suggestion.startswith(ch):
                self._suggestion = self._suggestion[len(ch):]
            else:
                self._suggestion = ""
        return InputChange.CHANGED

    def set_suggestion(self, suggestion: str) -> None:
        if self.mode is InputMode.SECURE:
            return
        self.mode = InputMode.SUGGESTING
        self._suggestion = suggestion

    def complete_suggestion(self) -> bool:
        """Move the remaining suggestion into the buffer.

        Returns ``False`` and leaves the buffer alone when there is nothing
        to complete.
        """
        suggestion = self.suggestion
        if not suggestion:
            return False
        self.buffer.push(suggestion)
        self._suggestion = ""
        return True

    def enter_secure(self) -> None:
        self.mode = InputMode.SECURE
        self._suggestion = ""

    def exit_secure(self) -> None:
        self.mode = InputMode.PLAIN
        self.buffer.scrub()

    def clear(self) -> None:
        self.buffer.clear()
        if self.mode is InputMode.SUGGESTING:
            self.mode = InputMode.PLAIN
            self._suggestion = ""

    def display_text(self, mask: str = "*") -> str:
        """Text to draw: the buffer itself, or one mask per character when secure."""
        if self.mode is InputMode.SECURE:
            return mask * grapheme.length(self.buffer.text)
        return self.buffer.text

    def snapshot(self) -> InputSnapshot:
        return InputSnapshot(text=self.buffer.text, mode=self.mode, suggestion=self.suggestion)
