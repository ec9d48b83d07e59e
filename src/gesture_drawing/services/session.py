"""Slideshow session controller."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from gesture_drawing.domain.images import ImageRecord
from gesture_drawing.domain.routine import RoutineConfig
from gesture_drawing.services.pool import SessionPoolBuilder
from gesture_drawing.services.timer import AsyncioScheduler, Scheduler, TimerEngine

_logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    """Mutable state of one slideshow session."""

    images: list[ImageRecord] = field(default_factory=list)
    current_index: int = 0
    remaining_seconds: int | None = None
    is_paused: bool = False
    is_loading: bool = False
    error: str | None = None
    session_start: float = 0.0


class SessionController:
    """Wire the image pool and the countdown into a navigable slideshow.

    The controller is the only writer of its :class:`SessionState`. Timer
    expiry and user navigation both go through it, and the engine keeps a
    single countdown alive, so the two never race.
    """

    def __init__(
        self,
        config: RoutineConfig,
        pool_builder: SessionPoolBuilder,
        *,
        scheduler: Scheduler | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self.pool_builder = pool_builder
        self._clock = clock
        self.timer = TimerEngine(
            on_expire=self._advance_on_expiry,
            scheduler=scheduler or AsyncioScheduler(),
        )
        self._state = SessionState(session_start=clock())
        self._load_generation = 0
        self._closed = False

    @property
    def state(self) -> SessionState:
        """Return a snapshot of the session state with countdown fields synced."""
        return replace(
            self._state,
            remaining_seconds=(
                self.timer.remaining_seconds if self.config.has_timer else None
            ),
            is_paused=self.timer.is_paused,
        )

    @property
    def current_image(self) -> ImageRecord | None:
        """Return the image on screen, or None before a pool is loaded."""
        images = self._state.images
        if not images:
            return None
        return images[self._state.current_index]

    @property
    def closed(self) -> bool:
        """Whether the session was torn down."""
        return self._closed

    async def load(self) -> None:
        """Fetch a fresh image pool and restart the slideshow."""
        if self._closed:
            return
        self._load_generation += 1
        generation = self._load_generation
        self.timer.cancel()
        self._state.is_loading = True
        self._state.error = None

        images, error = await self.pool_builder.build(self.config)

        if self._closed or generation != self._load_generation:
            if self._closed:
                self._state.is_loading = False
            _logger.debug("Discarding superseded image pool (load %s)", generation)
            return

        self._state.is_loading = False
        self._state.current_index = 0
        if error is not None:
            self._state.images = []
            self._state.error = error
            return

        self._state.images = images
        if images and self.config.has_timer:
            self.timer.reset(self.config.time_per_image)

    async def retry(self) -> None:
        """Clear the last error and load again."""
        self._state.error = None
        await self.load()

    def next(self) -> None:
        """Show the next image, restarting its countdown."""
        if self._state.current_index >= len(self._state.images) - 1:
            return
        self._state.current_index += 1
        self._restart_countdown()

    def previous(self) -> None:
        """Show the previous image, restarting its countdown."""
        if self._state.current_index <= 0 or not self._state.images:
            return
        self._state.current_index -= 1
        self._restart_countdown()

    def toggle_pause(self) -> None:
        """Pause a running countdown, or resume a paused one."""
        self.timer.toggle()

    def session_progress(self, now: float | None = None) -> float:
        """Return elapsed session time as a percentage of the planned total."""
        if not self.config.has_timer:
            raise ValueError("session progress requires a per-image timer")
        if not self._state.images:
            raise ValueError("session progress requires loaded images")
        current = self._clock() if now is None else now
        elapsed = max(0.0, current - self._state.session_start)
        total = self.config.time_per_image * len(self._state.images)
        return min(1.0, elapsed / total) * 100

    def countdown_label(self) -> str | None:
        """Return the remaining time as m:ss, or None without a countdown."""
        remaining = self.timer.remaining_seconds
        if not self.config.has_timer or remaining is None:
            return None
        return format_countdown(remaining)

    def close(self) -> None:
        """Tear down the session and release its countdown."""
        self._closed = True
        self.timer.cancel()

    def _restart_countdown(self) -> None:
        if self.config.has_timer and not self._closed:
            self.timer.reset(self.config.time_per_image)

    def _advance_on_expiry(self) -> bool:
        if self._state.current_index >= len(self._state.images) - 1:
            return False
        self._state.current_index += 1
        return True


def format_countdown(seconds: int) -> str:
    """Format seconds as ``m:ss``."""
    minutes, secs = divmod(seconds, 60)
    return f"{minutes}:{secs:02d}"
