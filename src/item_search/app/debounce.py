"""Trailing-edge debounce gate for downstream query notifications.

Each submit() stops the pending timer and starts a new one, so only the last
value of a burst is delivered, `interval` seconds after the burst ends.

Timers come from a `set_timer(delay, callback)` factory whose return value
has `stop()`. Textual's `App.set_timer` / `Widget.set_timer` satisfy this;
`loop_timer`, the default, schedules on the running asyncio loop, so
callbacks run on the loop thread like every other event handler.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_S = 0.3


class TimerHandle(Protocol):
    def stop(self) -> None: ...


SetTimer = Callable[[float, Callable[[], None]], TimerHandle]


class _LoopTimerHandle:
    def __init__(self, handle: asyncio.TimerHandle):
        self._handle = handle

    def stop(self) -> None:
        self._handle.cancel()


def loop_timer(delay: float, callback: Callable[[], None]) -> TimerHandle:
    """set_timer factory backed by the running asyncio loop's call_later.

    Must be called from a coroutine or callback on that loop.
    """
    return _LoopTimerHandle(asyncio.get_running_loop().call_later(delay, callback))


class DebounceGate:
    """Delivers at most one value per quiet interval to `callback`."""

    def __init__(
        self,
        callback: Callable[[str], None],
        interval: float = DEFAULT_INTERVAL_S,
        set_timer: SetTimer | None = None,
    ):
        self._callback = callback
        self.interval = interval
        self._set_timer = set_timer or loop_timer
        self._timer: TimerHandle | None = None
        self._pending_value: str | None = None
        self._generation = 0
        self._closed = False

    @property
    def pending(self) -> bool:
        return self._timer is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def schedule(self, value: str) -> None:
        """Replace any pending delivery with `value`, restarting the interval."""
        if self._closed:
            logger.debug("debounce gate closed, dropping %r", value)
            return
        self._stop_timer()
        self._generation += 1
        self._pending_value = value
        generation = self._generation
        self._timer = self._set_timer(self.interval, lambda: self._fire(generation))

    submit = schedule

    def cancel(self) -> None:
        """Drop the pending delivery, if any. The gate stays usable."""
        self._stop_timer()
        self._pending_value = None

    def close(self) -> None:
        """Cancel permanently: nothing is delivered after this."""
        self.cancel()
        self._closed = True

    def _stop_timer(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    def _fire(self, generation: int) -> None:
        # A timer that was stopped after it started running is stale
        if generation != self._generation:
            return
        value = self._pending_value
        self._timer = None
        self._pending_value = None
        if self._closed or value is None:
            return
        try:
            self._callback(value)
        except Exception:
            logger.exception("Debounced change callback failed for %r", value)
