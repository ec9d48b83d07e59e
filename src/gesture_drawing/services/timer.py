"""Per-image countdown for the slideshow.

The engine is a small state machine driven by one-second ticks. It owns at
most one scheduled callback at a time: either the next tick of a running
countdown or the grace delay before the next image's countdown starts.
Every ``start``, ``reset`` and ``cancel`` replaces or clears that handle.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Protocol

TICK_SECONDS = 1.0
GRACE_DELAY_SECONDS = 1.0

_logger = logging.getLogger(__name__)


class TimerState(StrEnum):
    """Lifecycle states of the countdown."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    EXPIRED = "expired"


class ScheduledHandle(Protocol):
    """A scheduled callback that can be cancelled."""

    def cancel(self) -> None:
        """Prevent the callback from running."""


class Scheduler(Protocol):
    """Source of delayed wake-ups."""

    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> ScheduledHandle:
        """Run ``callback`` once after ``delay`` seconds."""


class AsyncioScheduler(Scheduler):
    """Scheduler backed by the running asyncio event loop."""

    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> ScheduledHandle:
        return asyncio.get_running_loop().call_later(delay, callback)


@dataclass
class TimerEngine:
    """Countdown bound to the image currently on screen.

    ``on_expire`` is called when a countdown runs out. It must advance the
    slideshow and return ``True`` when a new image is now current; the
    engine then restarts itself after the grace delay. ``False`` means the
    last image expired and the engine settles at ``IDLE``.
    """

    on_expire: Callable[[], bool]
    scheduler: Scheduler = field(default_factory=AsyncioScheduler)
    state: TimerState = field(default=TimerState.IDLE, init=False)
    remaining_seconds: int | None = field(default=None, init=False)
    duration: int | None = field(default=None, init=False)
    _handle: ScheduledHandle | None = field(default=None, init=False, repr=False)

    @property
    def is_running(self) -> bool:
        """Whether a countdown is ticking."""
        return self.state is TimerState.RUNNING

    @property
    def is_paused(self) -> bool:
        """Whether the countdown is frozen by a pause."""
        return self.state is TimerState.PAUSED

    @property
    def has_live_handle(self) -> bool:
        """Return True while a tick or grace callback is scheduled."""
        return self._handle is not None

    def start(self, duration: int) -> None:
        """Begin a countdown of ``duration`` seconds."""
        if duration <= 0:
            raise ValueError("countdown duration must be positive")
        self._clear_handle()
        self.duration = duration
        self.remaining_seconds = duration
        self.state = TimerState.RUNNING
        self._schedule(TICK_SECONDS, self._tick)

    def reset(self, duration: int) -> None:
        """Drop any live countdown and start a fresh one."""
        self._clear_handle()
        self.start(duration)

    def pause(self) -> None:
        """Freeze a running countdown."""
        if self.state is not TimerState.RUNNING:
            return
        self._clear_handle()
        self.state = TimerState.PAUSED

    def resume(self) -> None:
        """Continue a paused countdown from where it stopped."""
        if self.state is not TimerState.PAUSED or not self.remaining_seconds:
            return
        self.state = TimerState.RUNNING
        self._schedule(TICK_SECONDS, self._tick)

    def cancel(self) -> None:
        """Stop everything and return to ``IDLE``."""
        self._clear_handle()
        self.state = TimerState.IDLE
        self.remaining_seconds = None

    def toggle(self) -> None:
        """Pause when running, resume when paused, otherwise do nothing."""
        if self.state is TimerState.RUNNING:
            self.pause()
        else:
            self.resume()

    def _tick(self) -> None:
        self._handle = None
        if self.state is not TimerState.RUNNING or self.remaining_seconds is None:
            return
        if self.remaining_seconds > 1:
            self.remaining_seconds -= 1
            self._schedule(TICK_SECONDS, self._tick)
            return
        self._expire()

    def _expire(self) -> None:
        self.state = TimerState.EXPIRED
        self.remaining_seconds = None
        advanced = self.on_expire()
        if self.state is not TimerState.EXPIRED:
            # on_expire already restarted or cancelled the countdown
            return
        if not advanced:
            _logger.debug("Last image expired; countdown idle")
            self.state = TimerState.IDLE
            return
        self._schedule(GRACE_DELAY_SECONDS, self._restart_after_grace)

    def _restart_after_grace(self) -> None:
        self._handle = None
        if self.state is TimerState.EXPIRED and self.duration:
            self.start(self.duration)

    def _schedule(self, delay: float, callback: Callable[[], None]) -> None:
        self._clear_handle()
        self._handle = self.scheduler.call_later(delay, callback)

    def _clear_handle(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
