"""DevServer — serve ``dist/`` through :mod:`livereload` and push reloads.

livereload's ``Server`` handles the static files, the client script and its
injection into HTML, and the ``/livereload`` websocket. The pipeline tells
the server which output changed through :meth:`DevServer.notify`, which is
safe to call from any thread. Stylesheets are swapped in place by the
client; anything else reloads the page.
"""

from __future__ import annotations

import logging
from pathlib import Path

from livereload import Server
from livereload.handlers import LiveReloadHandler
from tornado.ioloop import IOLoop

logger = logging.getLogger(__name__)


class DevServer:
    """Static server for the destination root with a reload channel.

    Parameters:
        root: Directory to serve (normally ``dist/``).
        host: Interface to bind.
        port: TCP port.
        open_browser: Open the served URL once listening.
    """

    def __init__(
        self,
        root: Path,
        *,
        host: str = "127.0.0.1",
        port: int = 3000,
        open_browser: bool = False,
    ) -> None:
        self.root = root
        self.host = host
        self.port = port
        self.open_browser = open_browser
        self.server = Server()
        # Reloads come from notify(); livereload's own poller never sends one.
        self.server.watch(str(root), delay="forever")
        self._loop: IOLoop | None = None

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}/"

    def url_path(self, path: str | Path) -> str:
        """Site path for *path* (absolute, or relative to the served root)."""
        candidate = Path(path)
        if candidate.is_absolute():
            try:
                candidate = candidate.resolve().relative_to(self.root.resolve())
            except ValueError:
                candidate = Path(candidate.name)
        return "/" + candidate.as_posix().lstrip("/")

    def notify(self, path: str | Path) -> None:
        """Push a reload for *path* to every connected browser."""
        if self._loop is None:
            return
        self._loop.add_callback(LiveReloadHandler.reload_waiters, self.url_path(path))

    def serve_forever(self) -> None:
        """Listen until the process is interrupted."""
        self._loop = IOLoop.current()
        logger.info("Serving %s at %s", self.root, self.url)
        try:
            self.server.serve(
                root=str(self.root),
                host=self.host,
                port=self.port,
                open_url_delay=1 if self.open_browser else None,
                live_css=True,
            )
        finally:
            self._loop = None
