"""Tests for container wiring."""

import asyncio

from gesture_drawing.adapters.unsplash_client import HttpxUnsplashClient
from gesture_drawing.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert isinstance(container.image_client, HttpxUnsplashClient)
    assert container.image_client.base_url == "https://api.test"
    assert container.pool_builder.client is container.image_client
    assert container.session_registry.pool_builder is container.pool_builder
    assert container.session_registry.idle_ttl_seconds == 600
    asyncio.run(container.close_resources())
