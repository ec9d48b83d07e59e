"""In-memory registry of live slideshow sessions."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from uuid import UUID, uuid4

from gesture_drawing.domain.errors import SessionNotFoundError
from gesture_drawing.domain.routine import RoutineConfig
from gesture_drawing.services.pool import SessionPoolBuilder
from gesture_drawing.services.session import SessionController

_logger = logging.getLogger(__name__)


@dataclass
class _SessionEntry:
    controller: SessionController
    last_access: float


@dataclass
class SessionRegistry:
    """Track the controllers of sessions that are currently open.

    Sessions not touched for ``idle_ttl_seconds`` are closed and dropped the
    next time the registry is used.
    """

    pool_builder: SessionPoolBuilder
    controller_factory: Callable[
        [RoutineConfig, SessionPoolBuilder], SessionController
    ] = SessionController
    idle_ttl_seconds: float = 3600
    clock: Callable[[], float] = time.monotonic
    _sessions: dict[UUID, _SessionEntry] = field(default_factory=dict)

    def open(self, config: RoutineConfig) -> tuple[UUID, SessionController]:
        """Create a controller for a new session."""
        self.evict_idle()
        session_id = uuid4()
        controller = self.controller_factory(config, self.pool_builder)
        self._sessions[session_id] = _SessionEntry(controller, self.clock())
        _logger.info(
            "Opened session %s: parts=%s count=%s timer=%s",
            session_id,
            ",".join(sorted(config.body_parts)),
            config.image_count,
            config.time_per_image,
        )
        return session_id, controller

    def get(self, session_id: UUID) -> SessionController:
        """Return the controller for an open session and mark it active."""
        self.evict_idle()
        entry = self._sessions.get(session_id)
        if entry is None:
            raise SessionNotFoundError(str(session_id))
        entry.last_access = self.clock()
        return entry.controller

    def close(self, session_id: UUID) -> None:
        """Tear down a session and forget it."""
        entry = self._sessions.pop(session_id, None)
        if entry is None:
            raise SessionNotFoundError(str(session_id))
        entry.controller.close()
        _logger.info("Closed session %s", session_id)

    def evict_idle(self) -> int:
        """Close sessions idle past the TTL and return how many were dropped."""
        now = self.clock()
        expired = [
            session_id
            for session_id, entry in self._sessions.items()
            if now - entry.last_access >= self.idle_ttl_seconds
        ]
        for session_id in expired:
            self._sessions.pop(session_id).controller.close()
            _logger.info("Evicted idle session %s", session_id)
        return len(expired)

    def close_all(self) -> None:
        """Tear down every open session."""
        for entry in self._sessions.values():
            entry.controller.close()
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)
