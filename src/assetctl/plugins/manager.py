"""PluginManager — the pluggy registry behind the event bus.

Plugins come from three places, in registration order:

1. built-ins the Project registers itself (the desktop notifier),
2. pip-installed distributions exposing an ``assetctl.plugins`` entry point,
3. single-file plugins in the project's ``.assetctl/plugins/`` directory.

Names listed in ``[plugins] disabled`` are blocked before anything loads.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from collections.abc import Iterable, Iterator
from pathlib import Path
from types import ModuleType

import pluggy

from assetctl.plugins.hookspecs import AssetctlHookSpec

PROJECT_NAME = "assetctl"
ENTRY_POINT_GROUP = "assetctl.plugins"
LOCAL_MODULE_PREFIX = "assetctl_local_plugin_"

logger = logging.getLogger(__name__)


def _implements_hooks(cls: type) -> bool:
    marker = f"{PROJECT_NAME}_impl"
    return any(
        hasattr(getattr(cls, attr, None), marker) for attr in dir(cls) if not attr.startswith("_")
    )


def _import_file(py_file: Path) -> ModuleType | None:
    """Import *py_file* as a top-level module; None (logged) if it fails."""
    module_name = f"{LOCAL_MODULE_PREFIX}{py_file.stem}"
    spec = importlib.util.spec_from_file_location(module_name, py_file)
    if spec is None or spec.loader is None:
        logger.warning("Could not create module spec for %s", py_file)
        return None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
        sys.modules.pop(module_name, None)
        return None
    return module


def _plugin_classes(module: ModuleType) -> Iterator[type]:
    """Classes defined (not imported) in *module* that carry hook implementations."""
    for _name, obj in inspect.getmembers(module, inspect.isclass):
        if obj.__module__ == module.__name__ and _implements_hooks(obj):
            yield obj


class PluginManager:
    """Registers plugins against :class:`AssetctlHookSpec`."""

    def __init__(self, *, disabled: Iterable[str] = ()) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(AssetctlHookSpec)
        for name in disabled:
            self._pm.set_blocked(name)

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Load entry-point plugins, then the ``*.py`` files in *local_dir*.

        Returns every registered plugin name.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._instantiate_entry_point_classes()
        if local_dir is not None and local_dir.is_dir():
            self._load_local(local_dir)
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register *plugin* unless its name is disabled."""
        plugin_name = name or type(plugin).__name__
        if self._pm.is_blocked(plugin_name):
            logger.debug("Plugin %s is disabled", plugin_name)
            return
        self._pm.register(plugin, name=plugin_name)
        logger.debug("Registered plugin: %s", plugin_name)

    def unregister(self, plugin: object) -> None:
        """Remove *plugin*; a plugin that was never registered is ignored."""
        if self._pm.is_registered(plugin):
            self._pm.unregister(plugin)

    def get_plugin(self, name: str) -> object | None:
        return self._pm.get_plugin(name)

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or type(p).__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _load_local(self, local_dir: Path) -> None:
        """A broken local plugin is logged and skipped; it never stops a build."""
        for py_file in sorted(local_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            module = _import_file(py_file)
            if module is None:
                continue
            for cls in _plugin_classes(module):
                try:
                    instance = cls()
                except Exception:
                    logger.warning(
                        "Failed to instantiate plugin class %s from %s",
                        cls.__name__,
                        py_file,
                        exc_info=True,
                    )
                    continue
                self.register_plugin(instance, name=f"{module.__name__}.{cls.__name__}")

    def _instantiate_entry_point_classes(self) -> None:
        """Entry points may register a class; hooks need a bound instance."""
        for plugin in list(self._pm.get_plugins()):
            if not (inspect.isclass(plugin) and _implements_hooks(plugin)):
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                self._pm.register(plugin(), name=plugin_name)
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s", plugin_name, exc_info=True
                )
