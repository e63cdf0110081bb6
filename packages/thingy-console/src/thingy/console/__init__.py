"""thingy-console: the non-visual core of an embeddable interactive console."""

# Channels
from thingy.console.channel import Receiver, Sender, unbounded

# Configuration
from thingy.console.config import ConsoleConfig

# Application / presentation handles
from thingy.console.console import (
    App,
    Console,
    ConsoleHandle,
    PresentationBackend,
    run,
    spawn,
)

# Errors
from thingy.console.errors import ConsoleError, Disconnected

# Input line
from thingy.console.input import InputChange, InputMode, InputSnapshot, InputState

# Keys
from thingy.console.keys import Key, KeyId, parse_key

# Render layout
from thingy.console.layout import Frame, compose_frame

# Commands and events
from thingy.console.protocol import (
    ClearSecure,
    ConsoleCommand,
    ConsoleEvent,
    InputBufferChanged,
    InputSubmitted,
    Push,
    ResetInput,
    ResetScroll,
    ResetScrollback,
    SetSecure,
    SetSuggestion,
    Shutdown,
)

# Scrollback
from thingy.console.scrollback import Scrollback

# Shared state
from thingy.console.state import ConsoleState, Redrawer

# Word wrapping
from thingy.console.wrap import Lines, Wrapped, wrap_spans

__all__ = [
    # Channels
    "Receiver",
    "Sender",
    "unbounded",
    # Configuration
    "ConsoleConfig",
    # Handles
    "App",
    "Console",
    "ConsoleHandle",
    "PresentationBackend",
    "run",
    "spawn",
    # Errors
    "ConsoleError",
    "Disconnected",
    # Input
    "InputChange",
    "InputMode",
    "InputSnapshot",
    "InputState",
    # Keys
    "Key",
    "KeyId",
    "parse_key",
    # Layout
    "Frame",
    "compose_frame",
    # Protocol
    "ClearSecure",
    "ConsoleCommand",
    "ConsoleEvent",
    "InputBufferChanged",
    "InputSubmitted",
    "Push",
    "ResetInput",
    "ResetScroll",
    "ResetScrollback",
    "SetSecure",
    "SetSuggestion",
    "Shutdown",
    # Scrollback
    "Scrollback",
    # State
    "ConsoleState",
    "Redrawer",
    # Wrapping
    "Lines",
    "Wrapped",
    "wrap_spans",
]
