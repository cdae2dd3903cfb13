"""Command: build, watch sources, and serve dist/ with live reload."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from assetctl.commands._base import AssetCommand

if TYPE_CHECKING:
    from assetctl.commands._context import AppContext


@click.command(
    cls=AssetCommand,
    examples="""\
  assetctl watch
  assetctl
  assetctl watch --port 8080 --open
  assetctl --no-notify watch""",
)
@click.option("--host", default=None, help="Bind address (default from [server]).")
@click.option("--port", default=None, type=int, help="Listen port (default from [server]).")
@click.option("--open", "open_browser", is_flag=True, help="Open the site in a browser.")
@click.pass_obj
def watch(app: AppContext, host: str | None, port: int | None, open_browser: bool) -> None:
    """Build, then rebuild on change while serving dist/ with live reload."""
    from assetctl.config.logging import raise_verbosity
    from assetctl.infrastructure.devserver import DevServer
    from assetctl.services.pipeline import PipelineService

    raise_verbosity()
    project = app.project
    server_config = app.settings.server
    server = DevServer(
        project.dist_root,
        host=host or server_config.host,
        port=port or server_config.port,
        open_browser=open_browser or server_config.open_browser,
    )
    click.echo(f"Serving {project.relative(project.dist_root)} at {server.url}", err=True)
    result = PipelineService(project).watch_and_serve(server=server, on_result=app.report)
    app.emit(result)
