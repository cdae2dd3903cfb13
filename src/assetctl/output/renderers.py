"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a StringIO-backed Console; :func:`render_result`
dispatches on ``result.op`` and returns the rendered text.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from assetctl.domain.types import AssetCategory
from assetctl.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from assetctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One status line for ``--quiet``."""
    if result.ok:
        return f"OK: {result.op}"
    reason = result.error.message if result.error else "Unknown error"
    return f"ERROR: {result.op}: {reason}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="asset.ok")
    op = Text(f"  {result.op}", style="asset.op")
    console.print(label, op, sep="", end="")
    duration = (result.meta or {}).get("duration_ms")
    if duration is not None:
        console.print(Text(f"  ({duration:.0f} ms)", style="dim"), end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="asset.key")
    v = Text(str(value), style="asset.path" if key in ("path", "url") else "")
    console.print(k, v, sep="", end="")
    console.print()


def _counts_table(rows: dict[str, dict[str, Any]]) -> Table:
    """Per-category written/skipped/failed counts."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Category", style="asset.op", no_wrap=True)
    table.add_column("Written", style="asset.written", justify="right")
    table.add_column("Skipped", style="asset.skipped", justify="right")
    table.add_column("Failed", style="asset.failed", justify="right")
    for name, counts in rows.items():
        table.add_row(
            name,
            str(counts.get("written", 0)),
            str(counts.get("skipped", 0)),
            str(counts.get("failed", 0)),
        )
    return table


def _files_table(files: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Source", no_wrap=True)
    table.add_column("Status")
    table.add_column("Outputs", style="asset.path")
    for item in files:
        status = str(item.get("status", ""))
        table.add_row(
            str(item.get("source", "")),
            Text(status, style=style_for_status(status)),
            "\n".join(item.get("outputs", [])) or str(item.get("message") or ""),
        )
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    error = result.error
    if error is None:
        label = Text("ERROR", style="asset.error")
        console.print(label, Text(f"  {result.op}", style="asset.op"), sep="")
        return
    console.print(
        Text("ERROR", style="asset.error"),
        Text(f"  {result.op}", style="asset.op"),
        Text(f": {error.message}"),
        sep="",
    )
    _field(console, "code", error.code)
    if verbose:
        for key, value in error.detail.items():
            _field(console, key, value)


# ── Operation renderers ───────────────────────────────────────────────


def _render_category(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a single category run (``assetctl css`` etc.)."""
    _status_line(console, result)
    console.print(_counts_table({result.op: result.data}))
    files = result.data.get("files", [])
    if verbose and files:
        console.print()
        console.print(_files_table(files))


def _render_build(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    clean = result.data.get("clean", {})
    if clean:
        _field(console, "cleaned", clean.get("path", ""))
    console.print(_counts_table(result.data.get("summary", {})))
    if verbose:
        for name, data in result.data.get("categories", {}).items():
            files = data.get("files", [])
            if files:
                console.print()
                console.print(Text(name, style="asset.op"))
                console.print(_files_table(files))


def _render_clean(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "path", result.data.get("path", ""))
    _field(console, "removed", "yes" if result.data.get("removed") else "nothing to remove")


def _render_watch(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "url", result.data.get("url", ""))
    _field(console, "watched", ", ".join(result.data.get("categories", [])))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    **{category.value: _render_category for category in AssetCategory},
    "build": _render_build,
    "clean": _render_clean,
    "watch": _render_watch,
}
