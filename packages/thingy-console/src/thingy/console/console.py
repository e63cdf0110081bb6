"""Application and presentation handles connected by two channels.

The application runs on its own thread with a :class:`Console`. It blocks on
:meth:`Console.next_event` and answers with commands. The presentation side
holds the :class:`ConsoleHandle`: it feeds keystrokes in, emits events, and
applies commands to the shared :class:`ConsoleState` from a background loop
before each render pass.

Shutdown is a handshake. Either the application returns (its endpoints close
and the command loop sees the channel disconnect), or the presentation side
requests it. In both cases the owner of the handle calls
:meth:`ConsoleHandle.shutdown`, which sets the shared flag, closes the event
channel so a blocked :meth:`Console.next_event` wakes, and joins the
application thread, re-raising anything it raised.

An application that never returns and never waits on :meth:`Console.next_event`
keeps :meth:`ConsoleHandle.shutdown` blocked in the join. There is
deliberately no timeout.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterator, Protocol

from thingy.console.channel import Receiver, Sender, unbounded
from thingy.console.config import ConsoleConfig
from thingy.console.errors import Disconnected
from thingy.console.input import InputChange, InputSnapshot
from thingy.console.keys import Key, is_text, parse_key
from thingy.console.layout import Frame, compose_frame
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
from thingy.console.state import ConsoleState

logger = logging.getLogger(__name__)

App = Callable[["Console"], None]


# ---------------------------------------------------------------------------
# Application side
# ---------------------------------------------------------------------------


class Console:
    """The application thread's view of the console.

    Every mutator enqueues a command; the presentation side applies it before
    the next render. Reads (:meth:`input`, :meth:`should_shutdown`) go to the
    shared state directly.
    """

    def __init__(
        self,
        state: ConsoleState,
        commands: Sender[ConsoleCommand],
        events: Receiver[ConsoleEvent],
    ) -> None:
        self._state = state
        self._commands = commands
        self._events = events

    def _send(self, command: ConsoleCommand) -> None:
        try:
            self._commands.send(command)
        except Disconnected:
            logger.debug("Dropping %s command: presentation side has shut down", command.type)

    # -- commands -----------------------------------------------------------

    def push_line(self, line: str) -> None:
        self._send(Push(line=str(line)))

    def set_suggestion(self, suggestion: str) -> None:
        self._send(SetSuggestion(suggestion=suggestion))

    def clear_input(self) -> None:
        self._send(ResetInput())

    def clear_scrollback(self) -> None:
        self._send(ResetScrollback())

    def reset_scroll(self) -> None:
        self._send(ResetScroll())

    def set_secure(self) -> None:
        self._send(SetSecure())

    def clear_secure(self) -> None:
        self._send(ClearSecure())

    def request_shutdown(self) -> None:
        self._send(Shutdown())

    # -- reads --------------------------------------------------------------

    def input(self) -> InputSnapshot:
        return self._state.input_snapshot()

    def next_event(self, timeout: float | None = None) -> ConsoleEvent:
        """Block until the presentation side emits an event.

        Raises :class:`Disconnected` once the presentation side has shut down.
        """
        return self._events.recv(timeout)

    def events(self) -> Iterator[ConsoleEvent]:
        """Iterate over events until the presentation side shuts down."""
        return iter(self._events)

    def should_shutdown(self) -> bool:
        return self._state.should_shutdown()

    # -- lifecycle ----------------------------------------------------------

    def clone(self) -> Console:
        """Another handle for a background producer thread."""
        return Console(self._state, self._commands.clone(), self._events.clone())

    def close(self) -> None:
        self._commands.close()
        self._events.close()

    def __enter__(self) -> Console:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class _AppThread:
    """Runs the application callable and keeps whatever it raised."""

    def __init__(self, app: App, console: Console, state: ConsoleState, name: str) -> None:
        self._app = app
        self._console = console
        self._state = state
        self.error: BaseException | None = None
        self.thread = threading.Thread(target=self._run, name=name, daemon=True)

    def start(self) -> None:
        self.thread.start()

    def _run(self) -> None:
        try:
            self._app(self._console)
        except Disconnected:
            logger.debug("Application thread %r stopped: console disconnected", self.thread.name)
        except BaseException as exc:  # re-raised by ConsoleHandle.shutdown()
            logger.exception("Application thread %r failed", self.thread.name)
            self.error = exc
        finally:
            self._console.close()
            logger.debug("Application thread %r finished", self.thread.name)
            self._state.redraw()

    def is_finished(self) -> bool:
        return not self.thread.is_alive()

    def join(self) -> None:
        self.thread.join()


# ---------------------------------------------------------------------------
# Presentation side
# ---------------------------------------------------------------------------


class ConsoleHandle:
    """The presentation thread's side of a console session."""

    def __init__(
        self,
        state: ConsoleState,
        app_thread: _AppThread | None,
        events: Sender[ConsoleEvent],
        commands: Receiver[ConsoleCommand],
    ) -> None:
        self.state = state
        self._app_thread = app_thread
        self._events: Sender[ConsoleEvent] | None = events
        self._commands = commands
        self._command_thread: threading.Thread | None = None

    # -- events -------------------------------------------------------------

    def send(self, event: ConsoleEvent) -> None:
        if self._events is None:
            return
        try:
            self._events.send(event)
        except Disconnected:
            logger.debug("Dropping %s event: application has stopped listening", event.type)

    def input(self, ch: str) -> None:
        """Feed one character of keyboard input into the input line."""
        with self.state.locked_input() as input_state:
            change = input_state.append(ch)
        if change is InputChange.CHANGED:
            self.send(InputBufferChanged())
        elif change is InputChange.SUBMITTED:
            self.send(InputSubmitted())
        self.state.redraw()

    def complete_suggestion(self) -> bool:
        with self.state.locked_input() as input_state:
            completed = input_state.complete_suggestion()
        if completed:
            self.state.redraw()
            self.send(InputBufferChanged())
        return completed

    def scroll(self, lines: int) -> None:
        """Scroll toward older (positive) or newer (negative) output."""
        self.state.scroll_by(lines)
        self.state.redraw()

    def handle_key(self, data: str) -> bool:
        """Translate raw terminal input; returns whether it was consumed."""
        key = parse_key(data)
        page = self.state.config.page_scroll_lines
        match key:
            case Key.tab | Key.right:
                self.complete_suggestion()
                return True
            case Key.page_up:
                self.scroll(page)
                return True
            case Key.page_down:
                self.scroll(-page)
                return True
            case Key.up | Key.shift_up:
                self.scroll(1)
                return True
            case Key.down | Key.shift_down:
                self.scroll(-1)
                return True
            case Key.backspace:
                self.input(data)
                return True
        if is_text(data):
            for ch in data:
                self.input(ch)
            return True
        return False

    def layout(self, columns: int, rows: int) -> Frame:
        """Compute the next frame for a ``columns`` x ``rows`` viewport."""
        return compose_frame(self.state, columns, rows)

    # -- commands -----------------------------------------------------------

    def apply(self, command: ConsoleCommand) -> None:
        state = self.state
        match command:
            case Push():
                state.push(command.line)
            case SetSuggestion():
                state.set_suggestion(command.suggestion)
            case ResetInput():
                state.clear_input()
            case ResetScroll():
                state.scroll_to_current()
            case ResetScrollback():
                state.clear_scrollback()
            case SetSecure():
                state.set_secure()
            case ClearSecure():
                state.clear_secure()
            case Shutdown():
                logger.debug("Shutdown requested over the command channel")
                state.shutdown()
            case _:
                raise TypeError(f"Unknown console command: {command!r}")

    def _disconnected(self) -> None:
        logger.debug("Command channel disconnected")
        self.state.shutdown()
        self.state.redraw()

    def run_commands(self) -> None:
        """Apply commands as they arrive until shutdown. Blocks.

        A command or redraw that raises ends the session: the failure is
        logged and the shutdown flag is set so the backend stops waiting.
        """
        try:
            while not self.state.should_shutdown():
                try:
                    command = self._commands.recv()
                except Disconnected:
                    self._disconnected()
                    return
                if self.state.should_shutdown():
                    break
                self.apply(command)
                self.state.redraw()
        except Exception:
            logger.exception("Command loop failed")
            self.state.shutdown()

    def drain_commands(self) -> int:
        """Apply every queued command without blocking.

        For backends that prefer to pump commands from their own render loop
        instead of :meth:`start_command_loop`. Returns the number applied.
        A failure sets the shutdown flag before propagating.
        """
        applied = 0
        try:
            while not self.state.should_shutdown():
                try:
                    command = self._commands.try_recv()
                except Disconnected:
                    self._disconnected()
                    break
                if command is None:
                    break
                self.apply(command)
                applied += 1
            if applied:
                self.state.redraw()
        except Exception:
            logger.exception("Applying console commands failed")
            self.state.shutdown()
            raise
        return applied

    def start_command_loop(self) -> threading.Thread:
        """Run :meth:`run_commands` on a background thread."""
        if self._command_thread is not None:
            return self._command_thread
        self._command_thread = threading.Thread(
            target=self.run_commands,
            name=self.state.config.command_thread_name,
            daemon=True,
        )
        self._command_thread.start()
        return self._command_thread

    # -- lifecycle ----------------------------------------------------------

    def should_shutdown(self) -> bool:
        if self.state.should_shutdown():
            return True
        return self._app_thread is None or self._app_thread.is_finished()

    def request_shutdown(self) -> None:
        """Presentation-initiated shutdown: apply ``Shutdown`` and stop the loop."""
        self.apply(Shutdown())
        self._commands.close()
        self.state.redraw()

    def shutdown(self) -> None:
        """Finish the session, re-raising anything the application raised."""
        self.state.shutdown()
        # Stops the command loop; queued commands are no longer dispatched
        self._commands.close()
        if self._events is not None:
            self._events.close()
            self._events = None

        app_thread, self._app_thread = self._app_thread, None
        if app_thread is not None:
            app_thread.join()

        command_thread = self._command_thread
        if command_thread is not None and command_thread is not threading.current_thread():
            command_thread.join()

        if app_thread is not None and app_thread.error is not None:
            raise app_thread.error


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------


class PresentationBackend(Protocol):
    """A renderer that drives a :class:`ConsoleHandle` until it is done.

    Implementations install a redraw callback with
    ``handle.state.set_redrawer``, call :meth:`ConsoleHandle.layout` once per
    frame, forward keystrokes, and return once
    :meth:`ConsoleHandle.should_shutdown` reports ``True``.
    """

    def run(self, handle: ConsoleHandle) -> None: ...


def spawn(app: App, state: ConsoleState | None = None) -> ConsoleHandle:
    """Start *app* on its own thread and return the presentation handle."""
    state = state or ConsoleState()
    event_tx, event_rx = unbounded()
    command_tx, command_rx = unbounded()
    console = Console(state, command_tx, event_rx)
    app_thread = _AppThread(app, console, state, state.config.app_thread_name)
    handle = ConsoleHandle(state, app_thread, event_tx, command_rx)
    app_thread.start()
    logger.debug("Spawned application thread %r", state.config.app_thread_name)
    return handle


def run(app: App, backend: PresentationBackend, config: ConsoleConfig | None = None) -> None:
    """Run *app* against *backend* until either side shuts the session down.

    The backend runs on the calling thread. Anything the application raised
    is re-raised here after the backend returns.
    """
    handle = spawn(app, ConsoleState(config or ConsoleConfig()))
    handle.start_command_loop()
    try:
        backend.run(handle)
    finally:
        handle.shutdown()
