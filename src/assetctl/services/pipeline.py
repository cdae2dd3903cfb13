"""PipelineService — compose clean and the category processors into a build.

Build graph::

    clean ──▶ ┬─ html ──────┐
              ├─ css        │
              ├─ js         ├──▶ post_build
              ├─ images     │
              ├─ svgsprite  │
              └─ fonts ─────┘

Clean runs to completion before any processor is submitted. Processors run
concurrently on a thread pool and share nothing but the frozen Project.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

from assetctl.domain.types import AssetCategory, parse_category
from assetctl.services.clean import CleanService
from assetctl.services.fonts import FontsProcessor
from assetctl.services.images import ImagesProcessor
from assetctl.services.markup import MarkupProcessor
from assetctl.services.result import (
    CATEGORY_DISABLED,
    PROCESSOR_CRASHED,
    SOURCE_ROOT_MISSING,
    UNKNOWN_CATEGORY,
    ServiceError,
    ServiceResult,
)
from assetctl.services.scripts import ScriptsProcessor
from assetctl.services.sprite import SpriteProcessor
from assetctl.services.styles import StylesProcessor

if TYPE_CHECKING:
    from assetctl.infrastructure.devserver import DevServer
    from assetctl.infrastructure.project import Project
    from assetctl.infrastructure.watcher import AssetWatcher
    from assetctl.services.base import BaseProcessor

logger = logging.getLogger(__name__)

PROCESSORS: dict[AssetCategory, type[BaseProcessor]] = {
    AssetCategory.MARKUP: MarkupProcessor,
    AssetCategory.STYLES: StylesProcessor,
    AssetCategory.SCRIPTS: ScriptsProcessor,
    AssetCategory.IMAGES: ImagesProcessor,
    AssetCategory.SPRITE: SpriteProcessor,
    AssetCategory.FONTS: FontsProcessor,
}


def processor_for(project: Project, category: AssetCategory) -> BaseProcessor:
    """Instantiate the processor registered for *category*."""
    return PROCESSORS[category](project)


class PipelineService:
    """Run single categories, full builds, and the watch-and-serve loop."""

    def __init__(self, project: Project) -> None:
        self._project = project

    # ------------------------------------------------------------------
    # Single category
    # ------------------------------------------------------------------

    def run_category(self, name: str | AssetCategory) -> ServiceResult:
        """Run one category's processor over all its sources."""
        try:
            category = parse_category(str(name))
        except ValueError as exc:
            return ServiceResult.failure("run", UNKNOWN_CATEGORY, str(exc), category=str(name))

        op = category.value
        if category not in self._project.settings.enabled_categories():
            return ServiceResult.failure(
                op, CATEGORY_DISABLED, f"Category {op} is disabled", category=op
            )
        missing = self._check_source_root(op)
        if missing is not None:
            return missing

        result = processor_for(self._project, category).run()
        return self._with_plugin_warnings(result)

    # ------------------------------------------------------------------
    # Full build
    # ------------------------------------------------------------------

    def build(self) -> ServiceResult:
        """Clean, then run every enabled category concurrently and join."""
        started = time.perf_counter()
        missing = self._check_source_root("build")
        if missing is not None:
            return missing

        cleaned = CleanService(self._project).clean()
        if not cleaned.ok:
            return ServiceResult(ok=False, op="build", error=cleaned.error)

        categories = self._project.settings.enabled_categories()
        futures: dict[AssetCategory, Future[ServiceResult]] = {}
        with ThreadPoolExecutor(
            max_workers=len(categories), thread_name_prefix="category"
        ) as pool:
            for category in categories:
                processor = processor_for(self._project, category)
                futures[category] = pool.submit(processor.run)

        results: dict[str, ServiceResult] = {}
        crashed: dict[str, str] = {}
        for category, future in futures.items():
            try:
                results[category.value] = future.result()
            except Exception as exc:
                logger.error("%s processor crashed: %s", category.value, exc, exc_info=True)
                crashed[category.value] = str(exc)

        summary = {
            name: {
                "written": r.data.get("written", 0),
                "skipped": r.data.get("skipped", 0),
                "failed": r.data.get("failed", 0),
            }
            for name, r in results.items()
        }
        ok = not crashed
        self._project.dispatch("post_build", ok=ok, summary=summary)

        warnings = [w for r in results.values() for w in r.warnings]
        result = ServiceResult(
            ok=ok,
            op="build",
            data={
                "clean": cleaned.data,
                "categories": {name: r.data for name, r in results.items()},
                "summary": summary,
            },
            warnings=warnings,
            error=None
            if ok
            else ServiceError(
                code=PROCESSOR_CRASHED,
                message=f"Processor(s) crashed: {', '.join(sorted(crashed))}",
                detail={"crashed": crashed},
            ),
            meta={"duration_ms": round((time.perf_counter() - started) * 1000, 2)},
        )
        return self._with_plugin_warnings(result)

    # ------------------------------------------------------------------
    # Watch and serve
    # ------------------------------------------------------------------

    def watch_and_serve(
        self,
        *,
        server: DevServer | None = None,
        watcher: AssetWatcher | None = None,
        on_result: Callable[[ServiceResult], None] | None = None,
    ) -> ServiceResult:
        """Start a build, the watcher, and the dev server together.

        Blocks serving until the server stops or the process is
        interrupted; then stops the watcher and waits for the build.
        """
        from assetctl.infrastructure.devserver import DevServer
        from assetctl.infrastructure.watcher import AssetWatcher
        from assetctl.plugins.builtins.livereload import LiveReloadPlugin

        settings = self._project.settings
        if server is None:
            server = DevServer(
                self._project.dist_root,
                host=settings.server.host,
                port=settings.server.port,
                open_browser=settings.server.open_browser,
            )
        if watcher is None:
            watcher = AssetWatcher(self._project, self.run_category, on_result=on_result)
        reload_plugin = LiveReloadPlugin(server, self._project.root)
        self._project.plugin_manager.register_plugin(reload_plugin, name="livereload")

        initial: dict[str, Any] = {}

        def _initial_build() -> None:
            result = self.build()
            initial["result"] = result
            if on_result is not None:
                on_result(result)

        builder = threading.Thread(target=_initial_build, name="build", daemon=True)
        builder.start()
        watcher.start()
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            logger.info("Interrupted, shutting down")
        finally:
            watcher.stop()
            builder.join()
            self._project.plugin_manager.unregister(reload_plugin)

        build_result: ServiceResult | None = initial.get("result")
        return ServiceResult(
            ok=build_result is not None and build_result.ok,
            op="watch",
            data={
                "url": server.url,
                "categories": [c.value for c in watcher.categories],
                "build": build_result.data if build_result is not None else {},
            },
            warnings=list(build_result.warnings) if build_result is not None else [],
            error=build_result.error if build_result is not None else None,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _check_source_root(self, op: str) -> ServiceResult | None:
        src = self._project.src_root
        if src.is_dir():
            return None
        rel = self._project.relative(src)
        return ServiceResult.failure(
            op, SOURCE_ROOT_MISSING, f"Source root not found: {rel}", path=rel
        )

    def _with_plugin_warnings(self, result: ServiceResult) -> ServiceResult:
        bus = self._project.event_bus
        if bus is None:
            return result
        failures = bus.drain()
        if not failures:
            return result
        return result.model_copy(update={"warnings": [*result.warnings, *failures]})
