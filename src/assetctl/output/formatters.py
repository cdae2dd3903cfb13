"""Output mode selection.

The CLI renders a ServiceResult for humans (Rich tables) or machines
(``--json``); ``--quiet`` reduces it to a status line.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from assetctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult according to *settings*."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        from assetctl.output.renderers import render_quiet

        return render_quiet(result)

    from assetctl.output.renderers import render_result

    return render_result(result, verbose=settings.verbose)
