"""Shared test fixtures."""

import asyncio
import random
from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from gesture_drawing.adapters.unsplash_client import ImageProviderClient
from gesture_drawing.config import Settings
from gesture_drawing.containers import AppContainer
from gesture_drawing.domain.errors import ProviderError
from gesture_drawing.domain.images import ImageRecord
from gesture_drawing.domain.routine import BodyPart, ContentType, RoutineConfig
from gesture_drawing.services.pool import SessionPoolBuilder
from gesture_drawing.services.registry import SessionRegistry
from gesture_drawing.services.session import SessionController


def make_image(image_id: str) -> ImageRecord:
    return ImageRecord(
        id=image_id,
        url=f"https://images.test/{image_id}.jpg",
        thumbnail_url=f"https://images.test/{image_id}-thumb.jpg",
        alt_text=f"reference {image_id}",
        photographer="Ada Lens",
        photographer_profile_url="https://unsplash.com/@ada",
        download_url=f"https://api.test/photos/{image_id}/download",
    )


@dataclass
class FakeImageProviderClient(ImageProviderClient):
    """Fake provider returning ``per_call`` images tagged by body part."""

    per_call: int | None = None
    calls: list[tuple[BodyPart, ContentType, int]] = field(default_factory=list)

    async def fetch_reference_images(
        self, body_part: BodyPart, content_type: ContentType, count: int
    ) -> list[ImageRecord]:
        self.calls.append((body_part, content_type, count))
        total = count if self.per_call is None else self.per_call
        return [make_image(f"{body_part}-{index}") for index in range(total)]


@dataclass
class FailingImageProviderClient(ImageProviderClient):
    """Fake provider that fails for selected body parts."""

    failing_parts: set[BodyPart] | None = None
    message: str = "Failed to fetch images"
    calls: int = 0

    async def fetch_reference_images(
        self, body_part: BodyPart, content_type: ContentType, count: int
    ) -> list[ImageRecord]:
        self.calls += 1
        if self.failing_parts is None or body_part in self.failing_parts:
            raise ProviderError(self.message, status_code=500)
        return [make_image(f"{body_part}-{index}") for index in range(count)]


@dataclass
class GatedImageProviderClient(ImageProviderClient):
    """Fake provider whose calls block until released, tagged by call order."""

    gates: list[asyncio.Event] = field(default_factory=list)

    async def fetch_reference_images(
        self, body_part: BodyPart, content_type: ContentType, count: int
    ) -> list[ImageRecord]:
        call_index = len(self.gates)
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        return [make_image(f"call{call_index}-{index}") for index in range(count)]


class _ManualHandle:
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler driven by a fake clock advanced from tests."""

    def __init__(self) -> None:
        self.now = 0.0
        self._pending: list[_ManualHandle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> _ManualHandle:
        handle = _ManualHandle(self.now + delay, callback)
        self._pending.append(handle)
        return handle

    @property
    def live_count(self) -> int:
        return sum(1 for handle in self._pending if not handle.cancelled)

    def clock(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            self._pending = [handle for handle in self._pending if not handle.cancelled]
            due = [handle for handle in self._pending if handle.due <= target]
            if not due:
                break
            handle = min(due, key=lambda item: item.due)
            self._pending.remove(handle)
            self.now = handle.due
            handle.callback()
        self.now = target


@pytest.fixture
def settings() -> Settings:
    return Settings(
        unsplash_access_key="unsplash-key",
        unsplash_base_url="https://api.test",
        session_idle_ttl_seconds=600,
    )


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def provider() -> FakeImageProviderClient:
    return FakeImageProviderClient()


@pytest.fixture
def routine() -> RoutineConfig:
    return RoutineConfig(
        body_parts={BodyPart.HANDS},
        content_type=ContentType.SFW,
        image_count=6,
        time_per_image=30,
    )


def make_controller(
    config: RoutineConfig,
    client: ImageProviderClient,
    scheduler: ManualScheduler,
) -> SessionController:
    return SessionController(
        config,
        SessionPoolBuilder(client, rng=random.Random(7)),
        scheduler=scheduler,
        clock=scheduler.clock,
    )


@pytest.fixture
def container(
    settings: Settings,
    provider: FakeImageProviderClient,
    scheduler: ManualScheduler,
) -> AppContainer:
    pool_builder = SessionPoolBuilder(provider, rng=random.Random(7))

    def controller_factory(
        config: RoutineConfig, builder: SessionPoolBuilder
    ) -> SessionController:
        return SessionController(
            config, builder, scheduler=scheduler, clock=scheduler.clock
        )

    session_registry = SessionRegistry(
        pool_builder,
        controller_factory=controller_factory,
        idle_ttl_seconds=settings.session_idle_ttl_seconds,
        clock=scheduler.clock,
    )

    async def close_resources() -> None:
        session_registry.close_all()

    return AppContainer(
        settings=settings,
        image_client=provider,
        pool_builder=pool_builder,
        session_registry=session_registry,
        close_resources=close_resources,
    )
