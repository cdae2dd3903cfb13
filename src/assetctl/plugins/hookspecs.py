"""Pluggy hook specifications for assetctl build events.

Events fire after the fact; hook implementations observe a build, they
cannot alter its outputs.
"""

from __future__ import annotations

from typing import Any

import pluggy

hookspec = pluggy.HookspecMarker("assetctl")


class AssetctlHookSpec:
    """Hook specifications for the assetctl plugin system."""

    @hookspec
    def post_clean(self, dest: str, removed: bool) -> None:
        """Called after the destination tree has been removed."""

    @hookspec
    def post_asset_written(self, category: str, path: str) -> None:
        """Called for every file a processor writes."""

    @hookspec
    def post_asset_failed(
        self,
        category: str,
        source: str,
        title: str,
        message: str,
    ) -> None:
        """Called when one source file fails its category chain."""

    @hookspec
    def post_category(
        self,
        category: str,
        written: int,
        skipped: int,
        failed: int,
    ) -> None:
        """Called after a category run completes."""

    @hookspec
    def post_build(self, ok: bool, summary: dict[str, Any]) -> None:
        """Called after a full build (clean plus every category) completes."""
