"""
Trailing-edge debounce of attribute mutations.

Structural attributes (the chart type) bypass the batch and trigger an
immediate rebuild; everything else lands in a pending batch that is flushed
once no further mutation arrives within the quiescence window.
"""
from __future__ import annotations
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Protocol, Tuple
import heapq
import itertools
import logging

log = logging.getLogger(__name__)

Batch = Dict[str, Optional[str]]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class TimerBackend(Protocol):
    def call_later(self, delay_s: float, callback: Callable[[], Any]) -> TimerHandle: ...


# ---------- timer backends ----------

class _ManualHandle:
    def __init__(self, due: float):
        self.due = due
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualTimers:
    """Virtual clock; callbacks run only when the host calls `advance`."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: List[Tuple[float, int, _ManualHandle, Callable[[], Any]]] = []
        self._seq = itertools.count()

    def call_later(self, delay_s: float, callback: Callable[[], Any]) -> _ManualHandle:
        handle = _ManualHandle(self.now + max(0.0, delay_s))
        heapq.heappush(self._queue, (handle.due, next(self._seq), handle, callback))
        return handle

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running due callbacks in order. Returns how many ran."""
        target = self.now + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle, callback = heapq.heappop(self._queue)
            self.now = max(self.now, due)
            if not handle.cancelled:
                callback()
                ran += 1
        self.now = target
        return ran

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h, _ in self._queue if not h.cancelled)


class AsyncioTimers:
    """Schedules on a running asyncio event loop."""

    def __init__(self, loop=None):
        import asyncio
        self._loop = loop or asyncio.get_running_loop()

    def call_later(self, delay_s: float, callback: Callable[[], Any]) -> TimerHandle:
        return self._loop.call_later(delay_s, callback)


# ---------- scheduler ----------

class SchedulerState(str, Enum):
    IDLE = "idle"
    PENDING = "pending_batch"
    FLUSHING = "flushing"


class UpdateScheduler:
    def __init__(
        self,
        timers: TimerBackend,
        on_flush: Callable[[Batch], Any],
        on_structural: Callable[[str, Optional[str]], Any],
        *,
        delay_ms: int = 100,
        structural: FrozenSet[str] = frozenset({"type"}),
    ):
        self._timers = timers
        self._on_flush = on_flush
        self._on_structural = on_structural
        self._delay_ms = max(0, int(delay_ms))
        self._structural = structural
        self._pending: Batch = {}
        self._handle: Optional[TimerHandle] = None
        self.state = SchedulerState.IDLE

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    def set_delay(self, delay_ms: int) -> None:
        self._delay_ms = max(0, int(delay_ms))

    @property
    def pending(self) -> Batch:
        return dict(self._pending)

    def notify(self, name: str, value: Optional[str]) -> None:
        if name in self._structural:
            self.state = SchedulerState.FLUSHING
            try:
                self._on_structural(name, value)
            finally:
                self.state = SchedulerState.PENDING if self._pending else SchedulerState.IDLE
            return
        self._pending[name] = value
        self._restart()

    def _restart(self) -> None:
        self._cancel_timer()
        self._handle = self._timers.call_later(self._delay_ms / 1000.0, self._expire)
        self.state = SchedulerState.PENDING

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _expire(self) -> None:
        self._handle = None
        self.flush()

    def force_now(self) -> None:
        """Skip the rest of the quiescence window."""
        self._cancel_timer()
        self.flush()

    def flush(self) -> None:
        if not self._pending:
            self.state = SchedulerState.IDLE
            return
        batch, self._pending = self._pending, {}
        self.state = SchedulerState.FLUSHING
        try:
            self._on_flush(batch)
        finally:
            self.state = SchedulerState.PENDING if self._pending else SchedulerState.IDLE
        log.debug("flushed batch", extra={"attributes": sorted(batch)})

    def cancel(self) -> None:
        """Drop the pending batch and timer (teardown)."""
        self._cancel_timer()
        self._pending = {}
        self.state = SchedulerState.IDLE
