"""AssetWatcher — re-run a category whenever a file under its watch globs changes.

One watchdog observer covers the whole source root. Each event is tested
against every enabled category's watch globs and matching categories are
re-run at once on a worker pool. There is no debounce, and two runs of the
same category may overlap; outputs are written per path so the last
write wins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from assetctl.domain.globs import GlobSet
from assetctl.domain.types import AssetCategory

if TYPE_CHECKING:
    from assetctl.infrastructure.project import Project
    from assetctl.services.result import ServiceResult

logger = logging.getLogger(__name__)

CategoryRunner = Callable[[AssetCategory], "ServiceResult"]
ResultCallback = Callable[["ServiceResult"], None]

_TRIGGERS = frozenset({"created", "modified", "deleted", "moved"})


def _as_str(path: str | bytes) -> str:
    return path.decode() if isinstance(path, bytes) else path


class _ChangeHandler(FileSystemEventHandler):
    def __init__(self, watcher: AssetWatcher) -> None:
        self._watcher = watcher

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type not in _TRIGGERS:
            return
        paths = [event.src_path]
        dest = getattr(event, "dest_path", "")
        if dest:
            paths.append(dest)
        for path in paths:
            self._watcher.handle_change(Path(_as_str(path)))


class AssetWatcher:
    """Bind each category's watch globs to a category runner.

    Parameters:
        project: Resolved project (path table and settings).
        run_category: Called on a worker thread with the category to re-run.
        on_result: Optional callback receiving each re-run's result.
    """

    def __init__(
        self,
        project: Project,
        run_category: CategoryRunner,
        *,
        on_result: ResultCallback | None = None,
        max_workers: int = 6,
    ) -> None:
        self._project = project
        self._run_category = run_category
        self._on_result = on_result
        self._bindings: dict[AssetCategory, GlobSet] = {
            category: project.watch_globs(category)
            for category in project.settings.enabled_categories()
        }
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="watch")
        self._observer: Observer | None = None

    @property
    def categories(self) -> list[AssetCategory]:
        return list(self._bindings)

    def matching(self, path: Path) -> list[AssetCategory]:
        """Categories whose watch globs match *path*."""
        return [category for category, globs in self._bindings.items() if globs.matches(path)]

    def handle_change(self, path: Path) -> list[Future[None]]:
        """Submit a re-run for every category matching *path*."""
        futures = []
        for category in self.matching(path):
            logger.info("%s changed, rebuilding %s", self._project.relative(path), category.value)
            futures.append(self._executor.submit(self._rerun, category))
        return futures

    def start(self) -> None:
        root = self._project.src_root
        observer = Observer()
        observer.schedule(_ChangeHandler(self), str(root), recursive=True)
        observer.daemon = True
        observer.start()
        self._observer = observer
        logger.info("Watching %s", self._project.relative(root))

    def stop(self) -> None:
        if self._observer is not None:
            self._observer.stop()
            self._observer.join()
            self._observer = None
        self._executor.shutdown(wait=True)

    def _rerun(self, category: AssetCategory) -> None:
        try:
            result = self._run_category(category)
        except Exception:
            logger.exception("Re-running %s crashed", category.value)
            return
        if self._on_result is not None:
            self._on_result(result)
