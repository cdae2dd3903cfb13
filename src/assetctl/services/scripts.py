"""Scripts processor: minify -> rename ``name.min.js`` -> write with source map."""

from __future__ import annotations

import os
from pathlib import Path

from assetctl.domain.types import AssetCategory
from assetctl.infrastructure.filesystem import mirror_path, write_text
from assetctl.infrastructure.transforms import sourcemaps
from assetctl.infrastructure.transforms.scripts import minify_js
from assetctl.services.base import BaseProcessor


class ScriptsProcessor(BaseProcessor):
    category = AssetCategory.SCRIPTS

    def process(self, source: Path, out: list[Path]) -> bool:
        config = self._project.settings.scripts
        text = source.read_text(encoding="utf-8")
        minified = minify_js(text, keep_bang_comments=config.keep_bang_comments)

        min_path = mirror_path(source, self.base, self.dest, suffix=config.min_suffix)
        map_name = f"{min_path.name}.map"
        # Map sources are relative to the map file, which sits beside min_path.
        source_ref = Path(os.path.relpath(source, min_path.parent)).as_posix()

        out.append(write_text(min_path, sourcemaps.with_map_comment(minified, map_name, "js")))
        out.append(
            write_text(
                min_path.with_name(map_name),
                sourcemaps.source_only_map(min_path.name, {source_ref: text}),
            )
        )
        return True
