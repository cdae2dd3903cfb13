"""Fonts processor.

For each convertible source: decode to TrueType, write every configured
format (``woff``, ``ttf``, ``eot``), then derive ``woff2`` from the
TrueType data. Sources fontTools cannot open (eot, svg fonts) are copied
through unchanged. A source is skipped when all its outputs are fresh.
"""

from __future__ import annotations

from pathlib import Path

from assetctl.domain.freshness import all_fresh
from assetctl.domain.types import AssetCategory
from assetctl.infrastructure.filesystem import copy_file, mirror_path, write_bytes
from assetctl.infrastructure.transforms import fonts
from assetctl.services.base import BaseProcessor


class FontsProcessor(BaseProcessor):
    category = AssetCategory.FONTS

    def outputs_for(self, source: Path) -> dict[str, Path]:
        """Format -> destination path for *source*."""
        if not fonts.can_convert(source):
            return {"copy": mirror_path(source, self.base, self.dest)}
        config = self._project.settings.fonts
        formats = list(dict.fromkeys(config.formats))
        if config.woff2:
            formats.append("woff2")
        return {fmt: mirror_path(source, self.base, self.dest, ext=f".{fmt}") for fmt in formats}

    def process(self, source: Path, out: list[Path]) -> bool:
        targets = self.outputs_for(source)
        if all_fresh(source, targets.values()):
            return False

        if "copy" in targets:
            out.append(copy_file(source, targets["copy"]))
            return True

        ttf = fonts.to_truetype(source)
        for fmt, path in targets.items():
            if fmt == "ttf":
                data = ttf
            elif fmt == "eot":
                data = fonts.to_eot(ttf)
            else:
                data = fonts.to_flavor(ttf, fmt)
            out.append(write_bytes(path, data))
        return True
