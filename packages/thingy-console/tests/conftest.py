"""Shared fixtures: a fresh console state and a redraw recorder."""

from __future__ import annotations

import threading
import time
from typing import Callable

import pytest

from thingy.console.config import ConsoleConfig
from thingy.console.state import ConsoleState


class RedrawRecorder:
    """Stands in for a presentation backend's redraw request."""

    def __init__(self) -> None:
        self.count = 0
        self._lock = threading.Lock()

    def __call__(self) -> None:
        with self._lock:
            self.count += 1


@pytest.fixture
def config() -> ConsoleConfig:
    return ConsoleConfig(initial_columns=20)


@pytest.fixture
def state(config: ConsoleConfig) -> ConsoleState:
    return ConsoleState(config)


@pytest.fixture
def redraws(state: ConsoleState) -> RedrawRecorder:
    recorder = RedrawRecorder()
    state.set_redrawer(recorder)
    return recorder


@pytest.fixture
def wait_until() -> Callable[[Callable[[], bool]], bool]:
    """Poll a predicate for up to two seconds."""

    def _wait(predicate: Callable[[], bool], timeout: float = 2.0) -> bool:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if predicate():
                return True
            time.sleep(0.005)
        return predicate()

    return _wait
