"""Freshness checks — skip redundant reprocessing by modification time.

A destination is fresh when it exists and its mtime is strictly newer
than every source it was derived from. Touching a source without changing
its content therefore still triggers a rebuild.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


def _mtime(path: Path) -> float | None:
    try:
        return path.stat().st_mtime
    except FileNotFoundError:
        return None


def is_fresh(source: Path, dest: Path) -> bool:
    """True when *dest* exists and is strictly newer than *source*."""
    dest_mtime = _mtime(dest)
    if dest_mtime is None:
        return False
    src_mtime = _mtime(source)
    if src_mtime is None:
        return False
    return dest_mtime > src_mtime


def all_fresh(source: Path, dests: Iterable[Path]) -> bool:
    """True when every one of *dests* is fresh relative to *source*.

    An empty *dests* is never fresh.
    """
    dest_list = list(dests)
    if not dest_list:
        return False
    return all(is_fresh(source, d) for d in dest_list)


def newer_than_all(dest: Path, sources: Iterable[Path]) -> bool:
    """True when *dest* is strictly newer than every file in *sources*.

    Used for many-to-one outputs such as the sprite sheet. No sources
    means there is nothing to rebuild from, so the check reports stale.
    """
    dest_mtime = _mtime(dest)
    if dest_mtime is None:
        return False
    seen = False
    for src in sources:
        seen = True
        src_mtime = _mtime(src)
        if src_mtime is None or src_mtime >= dest_mtime:
            return False
    return seen
