"""Commands: one per asset category, plus ``clean`` and ``build``."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from assetctl.commands._base import AssetCommand
from assetctl.domain.types import AssetCategory

if TYPE_CHECKING:
    from assetctl.commands._context import AppContext

_CATEGORY_HELP: dict[AssetCategory, str] = {
    AssetCategory.MARKUP: "Minify HTML pages into dist/.",
    AssetCategory.STYLES: "Compile, prefix and minify stylesheets with source maps.",
    AssetCategory.SCRIPTS: "Minify scripts into name.min.js with source maps.",
    AssetCategory.IMAGES: "Optimize images and write WebP copies.",
    AssetCategory.SPRITE: "Merge sprite icons into a single <symbol> sheet.",
    AssetCategory.FONTS: "Convert fonts to woff, woff2, ttf and eot.",
}


def _category_command(category: AssetCategory) -> click.Command:
    name = category.value

    @click.pass_obj
    def run(app: AppContext) -> None:
        from assetctl.services.pipeline import PipelineService

        app.emit(PipelineService(app.project).run_category(category))

    return AssetCommand(
        name,
        callback=run,
        help=_CATEGORY_HELP[category],
        examples=f"""\
  assetctl {name}
  assetctl --json {name}
  assetctl -v {name}""",
    )


CATEGORY_COMMANDS: list[click.Command] = [_category_command(c) for c in AssetCategory]


@click.command(
    cls=AssetCommand,
    examples="""\
  assetctl clean
  assetctl -c site/assetctl.toml clean""",
)
@click.pass_obj
def clean(app: AppContext) -> None:
    """Remove the destination tree."""
    from assetctl.services.clean import CleanService

    app.emit(CleanService(app.project).clean())


@click.command(
    cls=AssetCommand,
    examples="""\
  assetctl build
  assetctl --no-sprite build
  assetctl --json build > build.json""",
)
@click.pass_obj
def build(app: AppContext) -> None:
    """Clean, then build every category concurrently."""
    from assetctl.services.pipeline import PipelineService

    app.emit(PipelineService(app.project).build())
