"""Markup processor: collapse whitespace -> write."""

from __future__ import annotations

from pathlib import Path

from assetctl.domain.types import AssetCategory
from assetctl.infrastructure.filesystem import mirror_path, write_text
from assetctl.infrastructure.transforms.markup import collapse_whitespace
from assetctl.services.base import BaseProcessor


class MarkupProcessor(BaseProcessor):
    category = AssetCategory.MARKUP

    def process(self, source: Path, out: list[Path]) -> bool:
        minified = collapse_whitespace(source.read_text(encoding="utf-8"))
        out.append(write_text(mirror_path(source, self.base, self.dest), minified))
        return True
