"""Exceptions raised by the console core."""

from __future__ import annotations


class ConsoleError(Exception):
    """Base class for console errors."""


class Disconnected(ConsoleError):
    """The other side of a channel has gone away.

    Receiving this is a shutdown signal, not a failure.
    """
