"""Reference image domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ImageRecord:
    """A reference photo returned by the image provider."""

    id: str
    url: str
    thumbnail_url: str
    alt_text: str
    photographer: str
    photographer_profile_url: str
    download_url: str | None = None
