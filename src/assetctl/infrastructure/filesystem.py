"""Filesystem operations for build outputs.

INVARIANT: Sources are never written. Every write lands under a category's
destination directory, at the source's path relative to the category base.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------


def mirror_path(
    source: Path,
    base: Path,
    dest: Path,
    *,
    suffix: str = "",
    ext: str | None = None,
) -> Path:
    """Map *source* under *base* to the same relative path under *dest*.

    *suffix* is appended to the stem and *ext* replaces the extension::

        mirror_path(src/js/app.js, src/js, dist/js, suffix=".min")
        # -> dist/js/app.min.js

    Sources outside *base* are placed directly under *dest*.
    """
    try:
        rel = source.relative_to(base)
    except ValueError:
        rel = Path(source.name)
    extension = source.suffix if ext is None else ext
    name = f"{rel.stem}{suffix}{extension}"
    return dest / rel.parent / name


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def write_text(path: Path, content: str) -> Path:
    """Write UTF-8 *content* to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def write_bytes(path: Path, content: bytes) -> Path:
    """Write *content* to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


def copy_file(source: Path, path: Path) -> Path:
    """Copy *source* to *path* (contents only), creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, path)
    return path


def remove_tree(path: Path) -> bool:
    """Delete *path* and everything under it.

    Returns False when there was nothing to delete. Permission or lock
    errors propagate to the caller.
    """
    if not path.exists():
        return False
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()
    logger.debug("Removed %s", path)
    return True
