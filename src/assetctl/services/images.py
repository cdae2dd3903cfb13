"""Raster images processor.

Two independent sub-chains per source, each gated by its own freshness
check against its own destination:

1. ``name.webp`` beside the mirrored original (raster formats only).
2. The original format, optimized, at the mirrored path.

Sprite sources are excluded by the path table, not here.
"""

from __future__ import annotations

import logging
from pathlib import Path

from assetctl.domain.freshness import is_fresh
from assetctl.domain.types import AssetCategory
from assetctl.infrastructure.filesystem import mirror_path, write_bytes
from assetctl.infrastructure.transforms import images
from assetctl.services.base import BaseProcessor

logger = logging.getLogger(__name__)


class ImagesProcessor(BaseProcessor):
    category = AssetCategory.IMAGES

    def process(self, source: Path, out: list[Path]) -> bool:
        config = self._project.settings.images
        did_work = False

        if config.webp and images.can_convert_to_webp(source):
            webp_path = mirror_path(source, self.base, self.dest, ext=".webp")
            if is_fresh(source, webp_path):
                logger.debug("Fresh, skipping webp: %s", webp_path)
            else:
                out.append(write_bytes(webp_path, images.to_webp(source, quality=config.webp_quality)))
                did_work = True

        optimized_path = mirror_path(source, self.base, self.dest)
        if is_fresh(source, optimized_path):
            logger.debug("Fresh, skipping optimize: %s", optimized_path)
        else:
            data = images.optimize(source, jpeg_quality=config.jpeg_quality)
            out.append(write_bytes(optimized_path, data))
            did_work = True

        return did_work
