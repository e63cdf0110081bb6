"""Raw terminal key sequences mapped to key identifiers.

Covers the legacy xterm/VT sequences a terminal presentation backend hands
over for the keys the console reacts to. Identifiers use the ``"shift+up"``
style: modifiers first, joined with ``+``.
"""

from __future__ import annotations

KeyId = str


class Key:
    """Named key constants."""

    enter = "enter"
    tab = "tab"
    backspace = "backspace"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"
    shift_up = "shift+up"
    shift_down = "shift+down"


# Legacy escape sequences -> key ids (CSI and SS3 forms)
LEGACY_KEY_SEQUENCES: dict[str, KeyId] = {
    "\x1b[A": Key.up,
    "\x1b[B": Key.down,
    "\x1b[C": Key.right,
    "\x1b[D": Key.left,
    "\x1bOA": Key.up,
    "\x1bOB": Key.down,
    "\x1bOC": Key.right,
    "\x1bOD": Key.left,
    "\x1b[5~": Key.page_up,
    "\x1b[6~": Key.page_down,
    "\x1b[1;2A": Key.shift_up,
    "\x1b[1;2B": Key.shift_down,
}

_SINGLE_BYTE_KEYS: dict[str, KeyId] = {
    "\r": Key.enter,
    "\n": Key.enter,
    "\t": Key.tab,
    "\x7f": Key.backspace,
    "\x08": Key.backspace,
}


def parse_key(data: str) -> KeyId | None:
    """Parse raw terminal input and return the key identifier, or ``None``.

    Printable single characters come back as themselves.
    """
    if not data:
        return None
    key = LEGACY_KEY_SEQUENCES.get(data) or _SINGLE_BYTE_KEYS.get(data)
    if key is not None:
        return key
    if len(data) == 1 and data.isprintable():
        return data
    return None


def is_text(data: str) -> bool:
    """Return ``True`` for pasted or typed text with no escape sequences in it."""
    return bool(data) and "\x1b" not in data and all(
        ch.isprintable() or ch in "\r\n\t" for ch in data
    )
