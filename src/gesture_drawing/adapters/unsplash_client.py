"""Unsplash API client for reference photos."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from gesture_drawing.domain.errors import ProviderError
from gesture_drawing.domain.images import ImageRecord
from gesture_drawing.domain.routine import BodyPart, ContentType

_logger = logging.getLogger(__name__)

SEARCH_QUERIES: dict[BodyPart, dict[ContentType, str]] = {
    BodyPart.FULL_BODY: {
        ContentType.SFW: (
            "figure drawing dynamic pose reference human anatomy action pose "
            "dance movement athletic"
        ),
        ContentType.NSFW: (
            "figure drawing nude reference human anatomy artistic nude pose "
            "life drawing"
        ),
    },
    BodyPart.HANDS: {
        ContentType.SFW: (
            "hand gesture reference drawing anatomy fingers palm artistic hand pose"
        ),
        ContentType.NSFW: (
            "hand anatomy reference artistic nude hand gesture life drawing"
        ),
    },
    BodyPart.HEADS: {
        ContentType.SFW: (
            "portrait reference face anatomy head drawing facial expression profile"
        ),
        ContentType.NSFW: (
            "portrait nude reference face anatomy artistic nude portrait life drawing"
        ),
    },
    BodyPart.FEET: {
        ContentType.SFW: (
            "feet anatomy reference foot drawing toes ankle artistic foot pose"
        ),
        ContentType.NSFW: "feet anatomy nude reference artistic nude foot life drawing",
    },
    BodyPart.TORSO: {
        ContentType.SFW: (
            "torso anatomy reference chest back shoulder artistic pose figure drawing"
        ),
        ContentType.NSFW: (
            "torso nude reference artistic nude chest back life drawing anatomy"
        ),
    },
}


class ImageProviderClient(Protocol):
    """Interface for fetching reference images."""

    async def fetch_reference_images(
        self, body_part: BodyPart, content_type: ContentType, count: int
    ) -> list[ImageRecord]:
        """Return reference images for a body part and content rating."""


def search_query(body_part: str, content_type: str) -> str:
    """Map a body part and content rating to an Unsplash search query."""
    try:
        return SEARCH_QUERIES[BodyPart(body_part)][ContentType(content_type)]
    except ValueError:
        return SEARCH_QUERIES[BodyPart.FULL_BODY][ContentType.SFW]


@dataclass
class HttpxUnsplashClient(ImageProviderClient):
    """HTTPX-backed Unsplash client."""

    access_key: str | None
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10

    @classmethod
    def create(
        cls, access_key: str | None, base_url: str, timeout_seconds: float = 10
    ) -> "HttpxUnsplashClient":
        """Create an Unsplash client with a managed httpx session."""
        return cls(
            access_key=access_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def fetch_reference_images(
        self, body_part: BodyPart, content_type: ContentType, count: int
    ) -> list[ImageRecord]:
        """Fetch random portrait photos matching the body part query."""
        if not self.access_key:
            raise ProviderError("Unsplash API key not configured")

        url = f"{self.base_url}/photos/random"
        try:
            response = await self.http_client.get(
                url,
                params={
                    "query": search_query(body_part, content_type),
                    "count": count,
                    "orientation": "portrait",
                },
                headers={"Authorization": f"Client-ID {self.access_key}"},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            _logger.warning(
                "Unsplash returned status %s for %s/%s",
                exc.response.status_code,
                body_part,
                content_type,
            )
            raise ProviderError(
                "Failed to fetch images", status_code=exc.response.status_code
            ) from exc
        except httpx.HTTPError as exc:
            _logger.warning("Unsplash request failed for %s: %s", body_part, exc)
            raise ProviderError("Failed to fetch images") from exc

        try:
            data = response.json()
            photos = data if isinstance(data, list) else [data]
            return [_to_image_record(photo, body_part) for photo in photos]
        except (ValueError, KeyError, AttributeError) as exc:
            _logger.warning("Unexpected Unsplash payload for %s: %s", body_part, exc)
            raise ProviderError("Failed to fetch images") from exc

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _to_image_record(photo: dict[str, object], body_part: str) -> ImageRecord:
    """Keep only the photo fields the slideshow needs."""
    urls = photo.get("urls") or {}
    user = photo.get("user") or {}
    user_links = user.get("links") or {}
    links = photo.get("links") or {}
    return ImageRecord(
        id=str(photo["id"]),
        url=urls.get("regular", ""),
        thumbnail_url=urls.get("thumb", ""),
        alt_text=photo.get("alt_description")
        or f"{body_part} gesture drawing reference",
        photographer=user.get("name", ""),
        photographer_profile_url=user_links.get("html", ""),
        download_url=links.get("download_location"),
    )
