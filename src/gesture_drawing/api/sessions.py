"""Slideshow session endpoints."""

from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status

from gesture_drawing.api.models import SessionView, build_session_view
from gesture_drawing.domain.errors import SessionNotFoundError
from gesture_drawing.domain.routine import RoutineConfig
from gesture_drawing.services.registry import SessionRegistry
from gesture_drawing.services.session import SessionController

if TYPE_CHECKING:
    from gesture_drawing.containers import AppContainer

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_registry(request: Request) -> SessionRegistry:
    container: AppContainer = request.app.state.container
    return container.session_registry


def _get_controller(
    session_id: UUID, registry: SessionRegistry = Depends(_get_registry)
) -> SessionController:
    try:
        return registry.get(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Session not found"
        ) from exc


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_session(
    config: RoutineConfig, registry: SessionRegistry = Depends(_get_registry)
) -> SessionView:
    """Open a session for the routine and load its images."""
    session_id, controller = registry.open(config)
    await controller.load()
    return build_session_view(session_id, controller)


@router.get("/{session_id}")
async def get_session(
    session_id: UUID, controller: SessionController = Depends(_get_controller)
) -> SessionView:
    """Return the current slideshow state."""
    return build_session_view(session_id, controller)


@router.post("/{session_id}/next")
async def next_image(
    session_id: UUID, controller: SessionController = Depends(_get_controller)
) -> SessionView:
    """Advance to the next image."""
    controller.next()
    return build_session_view(session_id, controller)


@router.post("/{session_id}/previous")
async def previous_image(
    session_id: UUID, controller: SessionController = Depends(_get_controller)
) -> SessionView:
    """Go back to the previous image."""
    controller.previous()
    return build_session_view(session_id, controller)


@router.post("/{session_id}/toggle-pause")
async def toggle_pause(
    session_id: UUID, controller: SessionController = Depends(_get_controller)
) -> SessionView:
    """Pause or resume the countdown."""
    controller.toggle_pause()
    return build_session_view(session_id, controller)


@router.post("/{session_id}/retry")
async def retry_session(
    session_id: UUID, controller: SessionController = Depends(_get_controller)
) -> SessionView:
    """Reload the image pool."""
    await controller.retry()
    return build_session_view(session_id, controller)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_session(
    session_id: UUID, registry: SessionRegistry = Depends(_get_registry)
) -> None:
    """Leave the session and release its countdown."""
    try:
        registry.close(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Session not found"
        ) from exc
