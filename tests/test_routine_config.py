"""Tests for routine configuration validation."""

import pytest
from pydantic import ValidationError

from gesture_drawing.domain.routine import (
    BODY_PART_OPTIONS,
    BodyPart,
    ContentType,
    RoutineConfig,
    estimated_session_minutes,
)


def test_accepts_form_payload_aliases() -> None:
    config = RoutineConfig.model_validate(
        {
            "bodyParts": ["hands", "feet"],
            "contentType": "nsfw",
            "imageCount": 9,
            "timePerImage": 45,
        }
    )

    assert config.body_parts == frozenset({BodyPart.HANDS, BodyPart.FEET})
    assert config.content_type is ContentType.NSFW
    assert config.image_count == 9
    assert config.time_per_image == 45
    assert config.has_timer


@pytest.mark.parametrize("seconds", [0, 15, 300, 600])
def test_time_per_image_valid_values(seconds: int) -> None:
    config = RoutineConfig(body_parts={BodyPart.HEADS}, time_per_image=seconds)
    assert config.time_per_image == seconds
    assert config.has_timer is (seconds > 0)


@pytest.mark.parametrize("seconds", [-1, 1, 14, 601])
def test_time_per_image_rejects_out_of_range(seconds: int) -> None:
    with pytest.raises(ValidationError):
        RoutineConfig(body_parts={BodyPart.HEADS}, time_per_image=seconds)


@pytest.mark.parametrize("count", [5, 25])
def test_image_count_bounds(count: int) -> None:
    with pytest.raises(ValidationError):
        RoutineConfig(body_parts={BodyPart.HEADS}, image_count=count)


def test_body_parts_must_not_be_empty() -> None:
    with pytest.raises(ValidationError):
        RoutineConfig(body_parts=set())


def test_unknown_body_part_rejected() -> None:
    with pytest.raises(ValidationError):
        RoutineConfig.model_validate({"bodyParts": ["elbows"]})


def test_config_is_immutable() -> None:
    config = RoutineConfig(body_parts={BodyPart.TORSO})

    with pytest.raises(ValidationError):
        config.image_count = 24  # type: ignore[misc]


def test_estimated_session_minutes() -> None:
    config = RoutineConfig(
        body_parts={BodyPart.FULL_BODY}, image_count=12, time_per_image=60
    )
    assert estimated_session_minutes(config) == 12


def test_every_body_part_has_an_option() -> None:
    assert {option.id for option in BODY_PART_OPTIONS} == set(BodyPart)
