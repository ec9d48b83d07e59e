"""Assemble the shuffled image pool for a drawing session."""

import asyncio
import logging
import random
from dataclasses import dataclass, field

from gesture_drawing.adapters.unsplash_client import ImageProviderClient
from gesture_drawing.domain.errors import ProviderError
from gesture_drawing.domain.images import ImageRecord
from gesture_drawing.domain.routine import RoutineConfig

_logger = logging.getLogger(__name__)


@dataclass
class SessionPoolBuilder:
    """Fetch images for every selected body part and merge them."""

    client: ImageProviderClient
    rng: random.Random = field(default_factory=random.Random)

    async def build(
        self, config: RoutineConfig
    ) -> tuple[list[ImageRecord], str | None]:
        """Return the shuffled, truncated pool or an error message.

        Any provider failure aborts the whole batch.
        """
        if not config.body_parts:
            raise ValueError("at least one body part must be selected")

        body_parts = sorted(config.body_parts)
        try:
            batches = await asyncio.gather(
                *(
                    self.client.fetch_reference_images(
                        part, config.content_type, config.image_count
                    )
                    for part in body_parts
                )
            )
        except ProviderError as exc:
            _logger.warning("Image pool build failed: %s", exc.message)
            return [], exc.message

        images = [image for batch in batches for image in batch]
        self.rng.shuffle(images)
        pool = images[: config.image_count]
        _logger.info(
            "Built image pool: parts=%s fetched=%s kept=%s",
            ",".join(body_parts),
            len(images),
            len(pool),
        )
        return pool, None
