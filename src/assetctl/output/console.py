"""Rich Console factory and theme for assetctl output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract. Under CliRunner or a pipe Rich drops color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ASSET_THEME = Theme(
    {
        "asset.ok": "bold green",
        "asset.error": "bold red",
        "asset.warning": "bold yellow",
        "asset.op": "bold cyan",
        "asset.key": "dim",
        "asset.path": "dim",
        "asset.written": "green",
        "asset.skipped": "dim",
        "asset.failed": "red",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "written": "asset.written",
    "skipped": "asset.skipped",
    "failed": "asset.failed",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=ASSET_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Rich style name for a file outcome status."""
    return _STATUS_STYLES.get(status, "")
