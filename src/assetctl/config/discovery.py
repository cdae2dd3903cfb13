"""Locate ``assetctl.toml``.

Lookup order: the ``ASSETCTL_CONFIG`` env var (a file path), then the
nearest ``assetctl.toml`` walking up from the start directory.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "assetctl.toml"
CONFIG_ENV_VAR = "ASSETCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file for a project containing *start* (default: cwd).

    An ``ASSETCTL_CONFIG`` that names a missing file disables discovery.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        candidate = Path(override).expanduser()
        return candidate if candidate.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
