"""Change and error notifications delivered on the foreground thread.

The foreground is the thread that runs the asyncio event loop (or, before
a loop is bound, the thread that created the dispatcher). Callbacks emitted
from any other thread are handed to the loop with ``call_soon_threadsafe``
so subscribers never run concurrently with foreground code.
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Callable
from typing import Any


class ForegroundDispatcher:
    """Routes callbacks onto the foreground thread."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._thread_id = threading.get_ident()

    @property
    def loop(self) -> asyncio.AbstractEventLoop | None:
        return self._loop

    def bind(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Adopt *loop* (default: the running loop) and its thread as foreground.

        Must be called from the loop's own thread.
        """
        self._loop = loop or asyncio.get_running_loop()
        self._thread_id = threading.get_ident()

    def ensure_bound(self) -> None:
        """Bind to the running loop unless already bound to it."""
        running = asyncio.get_running_loop()
        if self._loop is not running:
            self.bind(running)

    def on_foreground(self) -> bool:
        return threading.get_ident() == self._thread_id

    def deliver(self, callback: Callable[..., Any], *args: Any) -> None:
        """Invoke *callback* on the foreground thread.

        Runs inline when already on the foreground, otherwise schedules it
        on the bound loop.

        Raises:
            RuntimeError: If called off the foreground with no usable loop.
        """
        if self.on_foreground():
            callback(*args)
            return
        if self._loop is None or self._loop.is_closed():
            raise RuntimeError("No foreground event loop bound for cross-thread delivery")
        self._loop.call_soon_threadsafe(callback, *args)


class Channel:
    """A named notification channel with any number of subscribers."""

    def __init__(self, name: str, dispatcher: ForegroundDispatcher) -> None:
        self.name = name
        self._dispatcher = dispatcher
        self._subscribers: list[Callable[..., Any]] = []

    def __len__(self) -> int:
        return len(self._subscribers)

    def connect(self, callback: Callable[..., Any]) -> Callable[[], None]:
        """Subscribe *callback*; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def disconnect() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return disconnect

    def emit(self, *args: Any) -> None:
        for callback in list(self._subscribers):
            self._dispatcher.deliver(callback, *args)
