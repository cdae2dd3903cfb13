"""Root CLI group for assetctl with global flags and command registration."""

from __future__ import annotations

import click

from assetctl import __version__
from assetctl.commands import register_commands
from assetctl.commands._base import AssetGroup
from assetctl.commands._context import AppContext
from assetctl.config.settings import AssetSettings


@click.group(
    cls=AssetGroup,
    invoke_without_command=True,
    examples="""\
  # Build once, watch for changes and serve dist/ on :3000
  assetctl

  # One category
  assetctl css

  # Full build without the sprite pipeline, JSON on stdout
  assetctl --no-sprite --json build""",
)
@click.version_option(version=__version__, prog_name="assetctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Per-file output and debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--sync", is_flag=True, help="Dispatch plugin events synchronously.")
@click.option("--no-notify", is_flag=True, help="Disable desktop notifications on errors.")
@click.option("--no-sprite", is_flag=True, help="Disable the svg sprite pipeline.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    sync: bool,
    no_notify: bool,
    no_sprite: bool,
) -> None:
    """assetctl — static asset build pipeline."""
    settings = AssetSettings.from_cli(
        config_path=config_path,
        no_notify=no_notify,
        no_sprite=no_sprite,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        sync=sync,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        from assetctl.commands.watch import watch

        ctx.invoke(watch)


register_commands(cli)
