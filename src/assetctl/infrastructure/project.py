"""Project — the single dependency injected into every service.

Resolves the path table against the project root once, and owns the
plugin manager and event bus. The underlying settings are frozen, so a
Project can be shared by concurrently running category processors.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from assetctl.domain.globs import GlobSet
from assetctl.domain.types import AssetCategory

if TYPE_CHECKING:
    from assetctl.config.models import PathSpec
    from assetctl.config.settings import AssetSettings
    from assetctl.plugins.event_bus import EventBus
    from assetctl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class Project:
    """An assetctl project rooted at ``settings.project_root``."""

    def __init__(self, settings: AssetSettings) -> None:
        self.settings = settings
        self.root: Path = settings.project_root.resolve()
        self.paths: dict[AssetCategory, PathSpec] = settings.path_table()
        self._plugin_manager: PluginManager | None = None
        self._event_bus: EventBus | None = None

    # ------------------------------------------------------------------
    # Path table views
    # ------------------------------------------------------------------

    @property
    def dist_root(self) -> Path:
        return self.root / self.settings.paths.dist

    @property
    def src_root(self) -> Path:
        return self.root / self.settings.paths.src

    def sources(self, category: AssetCategory) -> GlobSet:
        return GlobSet(self.root, self.paths[category].source)

    def watch_globs(self, category: AssetCategory) -> GlobSet:
        spec = self.paths[category]
        return GlobSet(self.root, spec.watch or spec.source)

    def base_dir(self, category: AssetCategory) -> Path:
        return self.root / self.paths[category].base

    def dest_dir(self, category: AssetCategory) -> Path:
        return self.root / self.paths[category].dest

    def relative(self, path: Path) -> str:
        """*path* relative to the project root, for reporting."""
        try:
            return path.resolve().relative_to(self.root).as_posix()
        except ValueError:
            return str(path)

    # ------------------------------------------------------------------
    # Plugins and events
    # ------------------------------------------------------------------

    @property
    def plugin_manager(self) -> PluginManager:
        if self._plugin_manager is None:
            self._plugin_manager = self._load_plugins()
        return self._plugin_manager

    @property
    def event_bus(self) -> EventBus | None:
        return self._event_bus

    def init_event_bus(self, *, sync: bool = False) -> EventBus:
        """Create the event bus (idempotent)."""
        if self._event_bus is None:
            from assetctl.plugins.event_bus import EventBus

            self._event_bus = EventBus(self.plugin_manager, sync=sync)
        return self._event_bus

    def dispatch(self, hook_name: str, **payload: Any) -> None:
        """Fire a build event. No-op until :meth:`init_event_bus` is called."""
        if self._event_bus is not None:
            self._event_bus.dispatch(hook_name, **payload)

    def _load_plugins(self) -> PluginManager:
        from assetctl.plugins.builtins.notifier import NotifierPlugin
        from assetctl.plugins.manager import PluginManager

        plugins_config = self.settings.plugins
        pm = PluginManager(disabled=plugins_config.disabled)
        if self.settings.features.notify:
            pm.register_plugin(NotifierPlugin(), name="notifier")
        pm.discover_and_load(local_dir=self.root / plugins_config.local_dir)
        return pm

    def close(self) -> None:
        """Flush pending events and stop the event bus."""
        if self._event_bus is not None:
            self._event_bus.shutdown()
            self._event_bus = None
