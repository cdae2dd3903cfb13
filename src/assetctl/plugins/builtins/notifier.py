"""Built-in desktop notifier for per-file build errors.

Shows a popup titled after the failing category (``"CSS Error"``) with
the error message. Uses ``notify-send`` on Linux and ``osascript`` on
macOS; when neither is available the notification is only logged.

All subprocess calls are wrapped so a missing binary or a headless
session never interrupts a build.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys

import pluggy

hookimpl = pluggy.HookimplMarker("assetctl")

logger = logging.getLogger(__name__)

_TIMEOUT_SECONDS = 5


def _applescript_quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


class NotifierPlugin:
    """Error notification plugin, registered when ``features.notify`` is on."""

    def command_for(self, title: str, message: str) -> list[str] | None:
        """The notification command for this platform, or None."""
        if sys.platform == "darwin" and shutil.which("osascript"):
            script = (
                f"display notification {_applescript_quote(message)} "
                f"with title {_applescript_quote(title)}"
            )
            return ["osascript", "-e", script]
        if shutil.which("notify-send"):
            return ["notify-send", "--app-name=assetctl", title, message]
        return None

    @hookimpl
    def post_asset_failed(
        self,
        category: str,
        source: str,
        title: str,
        message: str,
    ) -> None:
        """Log the failure and pop it up when a notifier binary exists."""
        logger.warning("%s in %s: %s", title, source, message)
        cmd = self.command_for(title, message)
        if cmd is None:
            return
        try:
            subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=_TIMEOUT_SECONDS,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired):
            logger.debug("Notification command failed: %s", cmd[0], exc_info=True)
