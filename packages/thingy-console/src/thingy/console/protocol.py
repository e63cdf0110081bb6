"""Messages exchanged between the application and presentation threads."""

from __future__ import annotations

from dataclasses import dataclass


# --- Presentation -> application events ---


@dataclass(frozen=True)
class InputBufferChanged:
    type: str = "input_buffer_changed"


@dataclass(frozen=True)
class InputSubmitted:
    type: str = "input"


ConsoleEvent = InputBufferChanged | InputSubmitted


# --- Application -> presentation commands ---


@dataclass(frozen=True)
class Push:
    line: str = ""
    type: str = "push"


@dataclass(frozen=True)
class SetSuggestion:
    suggestion: str = ""
    type: str = "set_suggestion"


@dataclass(frozen=True)
class ResetInput:
    type: str = "reset_input"


@dataclass(frozen=True)
class ResetScroll:
    type: str = "reset_scroll"


@dataclass(frozen=True)
class ResetScrollback:
    type: str = "reset_scrollback"


@dataclass(frozen=True)
class SetSecure:
    type: str = "set_secure"


@dataclass(frozen=True)
class ClearSecure:
    type: str = "clear_secure"


@dataclass(frozen=True)
class Shutdown:
    type: str = "shutdown"


ConsoleCommand = (
    Push
    | SetSuggestion
    | ResetInput
    | ResetScroll
    | ResetScrollback
    | SetSecure
    | ClearSecure
    | Shutdown
)
