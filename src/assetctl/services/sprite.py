"""Vector sprite processor: every sprite source -> one ``<symbol>`` sheet.

Unlike the per-file processors this one works on the whole batch: the
outcome's ``source`` is the sprite source directory and the only output
is the sheet itself.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from assetctl.domain.freshness import newer_than_all
from assetctl.domain.outcomes import FileOutcome
from assetctl.domain.types import AssetCategory
from assetctl.infrastructure.filesystem import write_bytes
from assetctl.infrastructure.transforms.svg import build_sprite, symbol_ids
from assetctl.services.base import BaseProcessor
from assetctl.services.result import CATEGORY_DISABLED, ServiceResult


class SpriteProcessor(BaseProcessor):
    category = AssetCategory.SPRITE

    @property
    def sheet_path(self) -> Path:
        return self.dest / self._project.settings.sprite.filename

    def run(self, sources: Sequence[Path] | None = None) -> ServiceResult:
        if not self._project.settings.features.svg_sprite:
            return ServiceResult.failure(
                self.category.value,
                CATEGORY_DISABLED,
                "The svg sprite pipeline is disabled (features.svg_sprite = false)",
            )
        # A change to any one icon rebuilds the sheet from all of them.
        return super().run(None)

    def process_all(self, files: Sequence[Path]) -> list[FileOutcome]:
        if not files:
            return []
        outcome = self._run_one(self.base)
        self._report(outcome)
        return [outcome]

    def process(self, source: Path, out: list[Path]) -> bool:
        files = self.collect()
        if newer_than_all(self.sheet_path, files) and self._sheet_ids() == [f.stem for f in files]:
            return False
        sheet = build_sprite(files, strip_attrs=self._project.settings.sprite.strip_attrs)
        out.append(write_bytes(self.sheet_path, sheet))
        return True

    def _sheet_ids(self) -> list[str] | None:
        # Deleting an icon leaves the sheet newer than every remaining source.
        try:
            return symbol_ids(self.sheet_path.read_bytes())
        except (OSError, ValueError, SyntaxError):  # lxml parse errors are SyntaxErrors
            return None
