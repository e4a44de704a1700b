"""Tick sources driving the focus timer"""
import asyncio
from typing import Callable, Optional, Protocol

TickCallback = Callable[[], None]


class TickHandle:
    """Subscription returned by a TickSource; pass it back to cancel()"""

    def __init__(self):
        self.cancelled = False
        self._timer: Optional[asyncio.TimerHandle] = None


class TickSource(Protocol):
    """Fires a callback once per elapsed second while subscribed"""

    def subscribe(self, callback: TickCallback) -> TickHandle:
        ...

    def cancel(self, handle: TickHandle) -> None:
        ...


class AsyncioTickSource:
    """
    Tick source backed by the running asyncio event loop.

    Ticks are scheduled against a fixed monotonic anchor (``anchor + n * interval``)
    so slow callbacks do not make the countdown drift. Only one timer per
    subscription is pending at any time, and a cancelled handle never fires:
    the cancel flag is checked again when the loop runs the callback.
    """

    def __init__(self, interval: float = 1.0, loop: Optional[asyncio.AbstractEventLoop] = None):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._interval = interval
        self._loop = loop

    def subscribe(self, callback: TickCallback) -> TickHandle:
        loop = self._loop or asyncio.get_running_loop()
        handle = TickHandle()
        self._schedule(loop, handle, callback, loop.time(), 1)
        return handle

    def cancel(self, handle: TickHandle) -> None:
        handle.cancelled = True
        if handle._timer is not None:
            handle._timer.cancel()
            handle._timer = None

    def _schedule(
        self,
        loop: asyncio.AbstractEventLoop,
        handle: TickHandle,
        callback: TickCallback,
        anchor: float,
        n: int,
    ) -> None:
        handle._timer = loop.call_at(
            anchor + n * self._interval, self._fire, loop, handle, callback, anchor, n
        )

    def _fire(
        self,
        loop: asyncio.AbstractEventLoop,
        handle: TickHandle,
        callback: TickCallback,
        anchor: float,
        n: int,
    ) -> None:
        if handle.cancelled:
            return
        # Queue the next tick first; a cancel() from inside the callback then clears it
        self._schedule(loop, handle, callback, anchor, n + 1)
        callback()
