"""Unbounded multi-producer, multi-consumer channels with disconnect detection.

``queue.Queue`` has no notion of the other side going away, so this keeps a
count of open senders and receivers next to the items. A receiver blocked in
:meth:`Receiver.recv` wakes with :class:`Disconnected` once the queue is empty
and the last sender has closed; :meth:`Sender.send` fails the same way once
the last receiver has closed. Closing a receiver also wakes a
:meth:`Receiver.recv` blocked on it.
"""

from __future__ import annotations

import threading
from collections import deque
from typing import Generic, Iterator, TypeVar

from thingy.console.errors import Disconnected

T = TypeVar("T")


class _Shared(Generic[T]):
    def __init__(self) -> None:
        self.items: deque[T] = deque()
        self.ready = threading.Condition(threading.Lock())
        self.senders = 1
        self.receivers = 1


class Sender(Generic[T]):
    """Sending half of a channel. ``clone()`` it for additional producers."""

    def __init__(self, shared: _Shared[T]) -> None:
        self._shared = shared
        self._closed = False

    def send(self, item: T) -> None:
        shared = self._shared
        with shared.ready:
            if self._closed or shared.receivers == 0:
                raise Disconnected("channel has no receivers")
            shared.items.append(item)
            shared.ready.notify()

    def clone(self) -> Sender[T]:
        shared = self._shared
        with shared.ready:
            if self._closed:
                raise Disconnected("sender is closed")
            shared.senders += 1
        return Sender(shared)

    def close(self) -> None:
        """Drop this sender. Closing twice is a no-op."""
        shared = self._shared
        with shared.ready:
            if self._closed:
                return
            self._closed = True
            shared.senders -= 1
            if shared.senders == 0:
                shared.ready.notify_all()

    def is_disconnected(self) -> bool:
        with self._shared.ready:
            return self._shared.receivers == 0


class Receiver(Generic[T]):
    """Receiving half of a channel. Items are delivered first-in, first-out."""

    def __init__(self, shared: _Shared[T]) -> None:
        self._shared = shared
        self._closed = False

    def recv(self, timeout: float | None = None) -> T:
        """Block until an item arrives.

        Raises :class:`Disconnected` once the channel is empty and every
        sender has closed, and :class:`TimeoutError` if *timeout* seconds
        pass without an item.
        """
        shared = self._shared
        with shared.ready:
            if self._closed:
                raise Disconnected("receiver is closed")
            ok = shared.ready.wait_for(
                lambda: shared.items or shared.senders == 0 or self._closed, timeout
            )
            if not ok:
                raise TimeoutError("no item received before timeout")
            if shared.items and not self._closed:
                return shared.items.popleft()
            raise Disconnected("channel has no senders")

    def try_recv(self) -> T | None:
        """Return the next item without blocking, or ``None`` if there is none.

        Still raises :class:`Disconnected` for an empty, abandoned channel.
        """
        shared = self._shared
        with shared.ready:
            if self._closed:
                raise Disconnected("receiver is closed")
            if shared.items:
                return shared.items.popleft()
            if shared.senders == 0:
                raise Disconnected("channel has no senders")
            return None

    def clone(self) -> Receiver[T]:
        shared = self._shared
        with shared.ready:
            if self._closed:
                raise Disconnected("receiver is closed")
            shared.receivers += 1
        return Receiver(shared)

    def close(self) -> None:
        shared = self._shared
        with shared.ready:
            if self._closed:
                return
            self._closed = True
            shared.receivers -= 1
            if shared.receivers == 0:
                shared.items.clear()
            # Wake a recv() blocked on this receiver
            shared.ready.notify_all()

    def __len__(self) -> int:
        with self._shared.ready:
            return len(self._shared.items)

    def __iter__(self) -> Iterator[T]:
        """Yield items until the channel disconnects."""
        while True:
            try:
                yield self.recv()
            except Disconnected:
                return


def unbounded() -> tuple[Sender[T], Receiver[T]]:
    """Create a connected ``(sender, receiver)`` pair."""
    shared: _Shared[T] = _Shared()
    return Sender(shared), Receiver(shared)
