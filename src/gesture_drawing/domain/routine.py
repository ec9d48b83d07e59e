"""Routine configuration models."""

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_IMAGE_COUNT = 6
MAX_IMAGE_COUNT = 24
MIN_TIME_PER_IMAGE = 15
MAX_TIME_PER_IMAGE = 600
NO_TIMER = 0


class BodyPart(StrEnum):
    """Anatomical focus used to pick reference photos."""

    FULL_BODY = "full-body"
    HANDS = "hands"
    HEADS = "heads"
    FEET = "feet"
    TORSO = "torso"


class ContentType(StrEnum):
    """Content rating for the reference search."""

    SFW = "sfw"
    NSFW = "nsfw"


class RoutineConfig(BaseModel):
    """Validated, immutable settings for one drawing session."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    body_parts: frozenset[BodyPart] = Field(alias="bodyParts", min_length=1)
    content_type: ContentType = Field(default=ContentType.SFW, alias="contentType")
    image_count: int = Field(
        default=12, alias="imageCount", ge=MIN_IMAGE_COUNT, le=MAX_IMAGE_COUNT
    )
    time_per_image: int = Field(default=60, alias="timePerImage")

    @field_validator("time_per_image")
    @classmethod
    def _check_time_per_image(cls, value: int) -> int:
        if value == NO_TIMER:
            return value
        if not MIN_TIME_PER_IMAGE <= value <= MAX_TIME_PER_IMAGE:
            raise ValueError(
                f"time_per_image must be {NO_TIMER} or between "
                f"{MIN_TIME_PER_IMAGE} and {MAX_TIME_PER_IMAGE} seconds"
            )
        return value

    @property
    def has_timer(self) -> bool:
        """Return True when each image gets a countdown."""
        return self.time_per_image > NO_TIMER


@dataclass(frozen=True)
class BodyPartOption:
    """Display metadata for a selectable body part."""

    id: BodyPart
    label: str
    description: str
    icon: str


@dataclass(frozen=True)
class TimerOption:
    """A preset for the per-image timer."""

    value: int
    label: str


BODY_PART_OPTIONS: tuple[BodyPartOption, ...] = (
    BodyPartOption(
        id=BodyPart.FULL_BODY,
        label="Full Body",
        description="Complete figure poses with dynamic movement",
        icon="🧍",
    ),
    BodyPartOption(
        id=BodyPart.HANDS,
        label="Hands",
        description="Hand gestures, finger positions, and grip studies",
        icon="✋",
    ),
    BodyPartOption(
        id=BodyPart.HEADS,
        label="Heads & Faces",
        description="Portraits, facial expressions, and head angles",
        icon="👤",
    ),
    BodyPartOption(
        id=BodyPart.FEET,
        label="Feet",
        description="Foot anatomy, toe positions, and ankle studies",
        icon="🦶",
    ),
    BodyPartOption(
        id=BodyPart.TORSO,
        label="Torso",
        description="Chest, back, shoulders, and core anatomy",
        icon="🫁",
    ),
)

TIMER_OPTIONS: tuple[TimerOption, ...] = (
    TimerOption(value=30, label="30 seconds"),
    TimerOption(value=60, label="1 minute"),
    TimerOption(value=120, label="2 minutes"),
    TimerOption(value=300, label="5 minutes"),
    TimerOption(value=600, label="10 minutes"),
    TimerOption(value=NO_TIMER, label="No timer"),
)


def estimated_session_minutes(config: RoutineConfig) -> int:
    """Return the rounded total session length in minutes."""
    return round(config.time_per_image * config.image_count / 60)
