"""Styles processor.

Chain per entry stylesheet::

    compile (libsass) -> prefix -> group media queries
        -> write name.css + name.css.map
        -> minify -> rename name.min.css -> write name.min.css + name.min.css.map

Sass partials (``_name.scss``) are only ever compiled through the entry
files that import them.
"""

from __future__ import annotations

from pathlib import Path

from assetctl.domain.types import AssetCategory
from assetctl.infrastructure.filesystem import mirror_path, write_text
from assetctl.infrastructure.transforms import sourcemaps
from assetctl.infrastructure.transforms import styles as css
from assetctl.services.base import BaseProcessor


class StylesProcessor(BaseProcessor):
    category = AssetCategory.STYLES

    def collect(self) -> list[Path]:
        return [p for p in super().collect() if not p.name.startswith("_")]

    def process(self, source: Path, out: list[Path]) -> bool:
        config = self._project.settings.styles
        css_path = mirror_path(source, self.base, self.dest, ext=".css")
        min_path = mirror_path(source, self.base, self.dest, suffix=config.min_suffix, ext=".css")
        css_map = f"{css_path.name}.map"
        min_map = f"{min_path.name}.map"

        compiled, raw_map = css.compile_sass(
            source,
            css_path=css_path,
            map_path=css_path.with_name(css_map),
            output_style=config.output_style,
            include_paths=[self._project.root / p for p in config.include_paths],
        )
        # libsass mappings only hold while nothing re-renders its output.
        rewritten = config.prefix or config.group_media
        if config.prefix:
            compiled = css.prefix_css(compiled)
        if config.group_media:
            compiled = css.group_media_queries(compiled)

        out.append(write_text(css_path, sourcemaps.with_map_comment(compiled, css_map, "css")))
        out.append(
            write_text(
                css_path.with_name(css_map),
                sourcemaps.retarget_map(raw_map, css_path.name, keep_mappings=not rewritten),
            )
        )

        minified = css.minify_css(compiled)
        out.append(write_text(min_path, sourcemaps.with_map_comment(minified, min_map, "css")))
        out.append(
            write_text(
                min_path.with_name(min_map),
                sourcemaps.retarget_map(raw_map, min_path.name, keep_mappings=False),
            )
        )
        return True
