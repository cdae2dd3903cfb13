"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Builds the Project lazily and routes results to
stdout/stderr with the right exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from assetctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from assetctl.config.settings import AssetSettings
    from assetctl.infrastructure.project import Project
    from assetctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The project (and its plugins) is only created on first use, so
    ``--help`` and ``--examples`` never load plugins.
    """

    def __init__(self, settings: AssetSettings) -> None:
        self.settings = settings
        self._project: Project | None = None

        from assetctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    @property
    def project(self) -> Project:
        if self._project is None:
            from assetctl.infrastructure.project import Project

            self._project = Project(self.settings)
            self._project.init_event_bus(sync=self.settings.sync)
        return self._project

    def close(self) -> None:
        if self._project is not None:
            self._project.close()
            self._project = None

    def report(self, result: ServiceResult) -> None:
        """Print *result* without affecting the exit code (watch-mode rebuilds)."""
        output = format_result(result, settings=self.output_settings)
        click.echo(output, err=not result.ok)
        if result.ok and not self.settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout; warnings (per-file failures) go to stderr.
        * Failure: stderr, exit code 1.
        """
        self.report(result)
        if not result.ok:
            raise SystemExit(1)
