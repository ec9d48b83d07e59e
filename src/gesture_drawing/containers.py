"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from gesture_drawing.adapters.unsplash_client import (
    HttpxUnsplashClient,
    ImageProviderClient,
)
from gesture_drawing.config import Settings
from gesture_drawing.services.pool import SessionPoolBuilder
from gesture_drawing.services.registry import SessionRegistry


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    image_client: ImageProviderClient
    pool_builder: SessionPoolBuilder
    session_registry: SessionRegistry
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    image_client = HttpxUnsplashClient.create(
        access_key=resolved_settings.unsplash_access_key,
        base_url=resolved_settings.unsplash_base_url,
        timeout_seconds=resolved_settings.unsplash_timeout_seconds,
    )
    pool_builder = SessionPoolBuilder(image_client)
    session_registry = SessionRegistry(
        pool_builder, idle_ttl_seconds=resolved_settings.session_idle_ttl_seconds
    )

    async def close_resources() -> None:
        session_registry.close_all()
        await image_client.close()

    return AppContainer(
        settings=resolved_settings,
        image_client=image_client,
        pool_builder=pool_builder,
        session_registry=session_registry,
        close_resources=close_resources,
    )
