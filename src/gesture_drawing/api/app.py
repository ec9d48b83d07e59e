"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse

from gesture_drawing.api.models import (
    OptionsView,
    build_options_view,
    proxy_image_payload,
)
from gesture_drawing.api.sessions import router as sessions_router
from gesture_drawing.app_logging import configure_logging
from gesture_drawing.containers import AppContainer
from gesture_drawing.domain.errors import ProviderError
from gesture_drawing.domain.routine import BodyPart, ContentType

DEFAULT_PROXY_COUNT = 12


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if not app.state.container.settings.unsplash_access_key:
            logger.warning("UNSPLASH_ACCESS_KEY is not set; image fetches will fail")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(sessions_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/options")
    async def options() -> OptionsView:
        """Return body part choices and timer presets."""
        return build_options_view()

    @app.get("/api/unsplash", response_model=None)
    async def unsplash_proxy(
        request: Request,
        body_part: str = Query(default=BodyPart.FULL_BODY.value, alias="bodyPart"),
        content_type: str = Query(default=ContentType.SFW.value, alias="contentType"),
        count: int = Query(default=DEFAULT_PROXY_COUNT),
    ) -> dict[str, object] | JSONResponse:
        """Fetch reference images for a single body part."""
        state_container: AppContainer = request.app.state.container
        part = _parse_body_part(body_part)
        rating = _parse_content_type(content_type)
        try:
            images = await state_container.image_client.fetch_reference_images(
                part, rating, count
            )
        except ProviderError as exc:
            logger.exception("Error fetching from Unsplash")
            return JSONResponse(status_code=500, content={"error": exc.message})
        return {"images": [proxy_image_payload(image) for image in images]}

    return app


def _parse_body_part(raw: str) -> BodyPart:
    """Map a query value to a body part, defaulting to full body."""
    try:
        return BodyPart(raw)
    except ValueError:
        return BodyPart.FULL_BODY


def _parse_content_type(raw: str) -> ContentType:
    """Map a query value to a content rating, defaulting to SFW."""
    try:
        return ContentType(raw)
    except ValueError:
        return ContentType.SFW
