"""Pydantic response models for the HTTP API."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from gesture_drawing.domain.images import ImageRecord
from gesture_drawing.domain.routine import (
    BODY_PART_OPTIONS,
    TIMER_OPTIONS,
    BodyPart,
    ContentType,
    estimated_session_minutes,
)
from gesture_drawing.services.session import SessionController
from gesture_drawing.services.timer import TimerState


class ImageView(BaseModel):
    """Reference image payload."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    url: str
    thumbnail_url: str
    alt_text: str
    photographer: str
    photographer_profile_url: str
    download_url: str | None = None


class RoutineSummary(BaseModel):
    """Configuration recap shown under the slideshow."""

    body_parts: list[BodyPart]
    content_type: ContentType
    image_count: int
    time_per_image: int
    estimated_minutes: int


class SessionView(BaseModel):
    """Snapshot of a slideshow session."""

    session_id: UUID
    images: list[ImageView]
    current_index: int
    current_image: ImageView | None
    remaining_seconds: int | None
    countdown: str | None
    timer_state: TimerState
    is_paused: bool
    is_loading: bool
    error: str | None
    progress: float | None
    routine: RoutineSummary


class BodyPartOptionView(BaseModel):
    """Selectable body part."""

    id: BodyPart
    label: str
    description: str
    icon: str


class TimerOptionView(BaseModel):
    """Timer preset."""

    value: int
    label: str


class OptionsView(BaseModel):
    """Choices offered by the configuration form."""

    body_parts: list[BodyPartOptionView]
    timer_options: list[TimerOptionView]


def build_session_view(session_id: UUID, controller: SessionController) -> SessionView:
    """Render a controller's state for the API."""
    state = controller.state
    config = controller.config
    current = controller.current_image
    progress = None
    if config.has_timer and state.images:
        progress = round(controller.session_progress(), 2)
    return SessionView(
        session_id=session_id,
        images=[ImageView.model_validate(image) for image in state.images],
        current_index=state.current_index,
        current_image=ImageView.model_validate(current) if current else None,
        remaining_seconds=state.remaining_seconds,
        countdown=controller.countdown_label(),
        timer_state=controller.timer.state,
        is_paused=state.is_paused,
        is_loading=state.is_loading,
        error=state.error,
        progress=progress,
        routine=RoutineSummary(
            body_parts=sorted(config.body_parts),
            content_type=config.content_type,
            image_count=config.image_count,
            time_per_image=config.time_per_image,
            estimated_minutes=estimated_session_minutes(config),
        ),
    )


def build_options_view() -> OptionsView:
    """Return the body part catalogue and timer presets."""
    return OptionsView(
        body_parts=[
            BodyPartOptionView(
                id=option.id,
                label=option.label,
                description=option.description,
                icon=option.icon,
            )
            for option in BODY_PART_OPTIONS
        ],
        timer_options=[
            TimerOptionView(value=option.value, label=option.label)
            for option in TIMER_OPTIONS
        ],
    )


def proxy_image_payload(image: ImageRecord) -> dict[str, object]:
    """Shape an image the way the ``/api/unsplash`` route returns it."""
    return {
        "id": image.id,
        "url": image.url,
        "thumb": image.thumbnail_url,
        "alt": image.alt_text,
        "photographer": image.photographer,
        "photographerUrl": image.photographer_profile_url,
        "downloadUrl": image.download_url,
    }
