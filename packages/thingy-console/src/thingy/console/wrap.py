"""Lazy, memoized word wrapping for console text.

``Wrapped`` owns a mutable string and caches the line spans produced for the
last requested width. Widths are counted in code points: one column per
character, no grapheme or East-Asian width handling.
"""

from __future__ import annotations

import re
from typing import Iterator, Sequence, overload

Span = tuple[int, int]

# Same set as ``string.punctuation``
_PUNCTUATION_REGEX = re.compile(r"[!-/:-@\[-`{-~]")


def is_punctuation_char(char: str) -> bool:
    """Return ``True`` if *char* is ASCII punctuation."""
    return bool(_PUNCTUATION_REGEX.match(char))


def is_control_char(char: str) -> bool:
    """Return ``True`` if *char* is an ASCII control character."""
    cp = ord(char)
    return cp < 0x20 or cp == 0x7F


def is_break_char(char: str) -> bool:
    """Return ``True`` if a line may be broken after *char*."""
    return char in (" ", "\t") or is_punctuation_char(char) or is_control_char(char)


def wrap_spans(text: str, width: int) -> list[Span]:
    """Split *text* into half-open ``(start, end)`` spans at most *width* wide.

    ``\\n`` and ``\\r`` each end a line and are not part of any span. Lines
    break preferentially after a break character; a word wider than the
    whole line is hard-wrapped at *width*.
    """
    width = max(width, 1)
    spans: list[Span] = []

    line_start = 0
    line_length = 0
    is_after_breakable = True
    word_start = 0
    word_length = 0
    end = len(text)

    for index, ch in enumerate(text):
        if ch == "\n" or ch == "\r":
            # \r\n produces two breaks
            spans.append((line_start, index))
            line_start = index + 1
            line_length = 0
            word_start = line_start
            word_length = 0
            is_after_breakable = True
            continue

        line_length += 1
        if is_break_char(ch):
            is_after_breakable = True
            word_length = 0
        elif is_after_breakable:
            is_after_breakable = False
            word_start = index
            word_length = 1
        else:
            word_length += 1

        next_index = index + 1
        if line_length < width or next_index >= end or text[next_index] in "\r\n":
            continue

        if is_after_breakable or word_start <= line_start:
            # Break right after the current character: either it is a break
            # character or the word alone fills the line.
            spans.append((line_start, next_index))
            line_start = next_index
            line_length = 0
            word_start = next_index
            word_length = 0
        else:
            spans.append((line_start, word_start))
            line_start = word_start
            line_length = word_length

    if line_length > 0:
        spans.append((line_start, end))
    elif not spans:
        spans.append((0, 0))

    return spans


class Lines(Sequence[str]):
    """Read-only view of wrapped lines, cheap to walk in either direction."""

    __slots__ = ("_source", "_spans")

    def __init__(self, source: str, spans: list[Span]) -> None:
        self._source = source
        self._spans = spans

    def __len__(self) -> int:
        return len(self._spans)

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> list[str]: ...

    def __getitem__(self, index: int | slice) -> str | list[str]:
        if isinstance(index, slice):
            return [self._source[start:stop] for start, stop in self._spans[index]]
        start, stop = self._spans[index]
        return self._source[start:stop]

    def __iter__(self) -> Iterator[str]:
        for start, stop in self._spans:
            yield self._source[start:stop]

    def __reversed__(self) -> Iterator[str]:
        for start, stop in reversed(self._spans):
            yield self._source[start:stop]

    def __repr__(self) -> str:
        return f"Lines({list(self)!r})"


class Wrapped:
    """A string plus the line spans it wraps to at the last requested width.

    Any mutation marks the cache dirty; the next :meth:`lines` call rescans.
    """

    __slots__ = ("_text", "_width", "_spans", "_dirty")

    def __init__(self, text: str = "") -> None:
        self._text = text
        self._width = 0
        self._spans: list[Span] = []
        self._dirty = True

    # -- text access --------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def dirty(self) -> bool:
        return self._dirty

    def set_text(self, text: str) -> None:
        self._text = text
        self._dirty = True

    def push(self, text: str) -> None:
        """Append *text* to the end of the string."""
        if text:
            self._text += text
            self._dirty = True

    def pop(self) -> str | None:
        """Remove and return the last character, or ``None`` when empty."""
        if not self._text:
            return None
        last = self._text[-1]
        self._text = self._text[:-1]
        self._dirty = True
        return last

    def clear(self) -> None:
        self.set_text("")

    def scrub(self) -> None:
        """Overwrite the contents with NULs, then clear.

        Best effort only: earlier copies of an immutable ``str`` may still
        be reachable until the interpreter reclaims them.
        """
        self.set_text("\0" * len(self._text))
        self._spans = []
        self.clear()

    # -- wrapping -----------------------------------------------------------

    def spans(self, width: int) -> list[Span]:
        """Return the cached spans for *width*, rewrapping if needed."""
        width = max(width, 1)
        if self._dirty or self._width != width:
            self._spans = wrap_spans(self._text, width)
            self._width = width
            self._dirty = False
        return self._spans

    def lines(self, width: int) -> Lines:
        return Lines(self._text, self.spans(width))

    def line_count(self, width: int) -> int:
        return len(self.spans(width))

    # -- dunder -------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Wrapped):
            return self._text == other._text
        if isinstance(other, str):
            return self._text == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"Wrapped({self._text!r})"
