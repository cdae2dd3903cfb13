"""Built-in bridge from written assets to the dev server's reload channel."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from assetctl.infrastructure.devserver import DevServer

hookimpl = pluggy.HookimplMarker("assetctl")


class LiveReloadPlugin:
    """Forward every written file to :meth:`DevServer.notify`.

    Registered only while ``assetctl watch`` is serving. Hook paths are
    project-relative; they are resolved against *project_root* so the
    server can map them onto its served root.
    """

    def __init__(self, server: DevServer, project_root: Path) -> None:
        self._server = server
        self._root = project_root

    @hookimpl
    def post_asset_written(self, category: str, path: str) -> None:
        if path.endswith(".map"):
            return
        self._server.notify(self._root / path)
