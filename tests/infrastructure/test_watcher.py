"""Tests for AssetWatcher — watch-glob bindings and immediate re-runs."""

from __future__ import annotations

import threading
from concurrent.futures import wait
from pathlib import Path

from watchdog.events import (
    DirModifiedEvent,
    FileClosedEvent,
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileMovedEvent,
)

from assetctl.config.settings import AssetSettings
from assetctl.domain.types import AssetCategory
from assetctl.infrastructure.project import Project
from assetctl.infrastructure.watcher import AssetWatcher, _ChangeHandler
from assetctl.services.result import ServiceResult


class Recorder:
    def __init__(self) -> None:
        self.calls: list[AssetCategory] = []
        self._lock = threading.Lock()

    def __call__(self, category: AssetCategory) -> ServiceResult:
        with self._lock:
            self.calls.append(category)
        return ServiceResult(ok=True, op=category.value)


def _watcher(project: Project, recorder: Recorder, **kwargs: object) -> AssetWatcher:
    return AssetWatcher(project, recorder, **kwargs)  # type: ignore[arg-type]


class TestMatching:
    def test_partial_change_rebuilds_styles(self, project: Project) -> None:
        watcher = _watcher(project, Recorder())
        partial = project.src_root / "assets" / "scss" / "components" / "_btn.scss"
        assert watcher.matching(partial) == [AssetCategory.STYLES]
        watcher.stop()

    def test_sprite_icon_not_an_image(self, project: Project) -> None:
        watcher = _watcher(project, Recorder())
        icon = project.src_root / "assets" / "images" / "sprite" / "arrow.svg"
        assert watcher.matching(icon) == [AssetCategory.SPRITE]
        logo = project.src_root / "assets" / "images" / "logo.svg"
        assert watcher.matching(logo) == [AssetCategory.IMAGES]
        watcher.stop()

    def test_nested_html(self, project: Project) -> None:
        watcher = _watcher(project, Recorder())
        assert watcher.matching(project.src_root / "partials" / "nav.html") == [
            AssetCategory.MARKUP
        ]
        watcher.stop()

    def test_unrelated_file(self, project: Project) -> None:
        watcher = _watcher(project, Recorder())
        assert watcher.matching(project.src_root / "README.md") == []
        watcher.stop()

    def test_disabled_sprite_not_bound(self, project_root: Path) -> None:
        settings = AssetSettings.from_cli(project_root=project_root, no_sprite=True)
        project = Project(settings)
        watcher = _watcher(project, Recorder())
        assert AssetCategory.SPRITE not in watcher.categories
        icon = project.src_root / "assets" / "images" / "sprite" / "arrow.svg"
        assert watcher.matching(icon) == []
        watcher.stop()


class TestHandleChange:
    def test_submits_rerun_and_reports(self, project: Project) -> None:
        recorder = Recorder()
        results: list[ServiceResult] = []
        watcher = _watcher(project, recorder, on_result=results.append)
        futures = watcher.handle_change(project.src_root / "assets" / "js" / "app.js")
        wait(futures, timeout=5)
        watcher.stop()
        assert recorder.calls == [AssetCategory.SCRIPTS]
        assert [r.op for r in results] == ["js"]

    def test_same_category_not_serialized(self, project: Project) -> None:
        started = threading.Barrier(2, timeout=5)

        def slow(category: AssetCategory) -> ServiceResult:
            started.wait()
            return ServiceResult(ok=True, op=category.value)

        watcher = AssetWatcher(project, slow)
        path = project.src_root / "index.html"
        futures = watcher.handle_change(path) + watcher.handle_change(path)
        done, _ = wait(futures, timeout=5)
        watcher.stop()
        assert len(done) == 2
        assert all(f.exception() is None for f in done)

    def test_crashing_runner_is_contained(self, project: Project) -> None:
        def boom(category: AssetCategory) -> ServiceResult:
            raise RuntimeError("nope")

        watcher = AssetWatcher(project, boom)
        futures = watcher.handle_change(project.src_root / "index.html")
        wait(futures, timeout=5)
        watcher.stop()
        assert futures[0].exception() is None


class TestEventHandler:
    def _handler(self, project: Project) -> tuple[_ChangeHandler, list[Path]]:
        seen: list[Path] = []
        watcher = _watcher(project, Recorder())
        watcher.handle_change = lambda path: seen.append(path) or []  # type: ignore[method-assign]
        return _ChangeHandler(watcher), seen

    def test_file_events_forwarded(self, project: Project) -> None:
        handler, seen = self._handler(project)
        target = str(project.src_root / "index.html")
        handler.dispatch(FileCreatedEvent(target))
        handler.dispatch(FileModifiedEvent(target))
        handler.dispatch(FileDeletedEvent(target))
        assert len(seen) == 3

    def test_move_reports_both_paths(self, project: Project) -> None:
        handler, seen = self._handler(project)
        old = str(project.src_root / "a.html")
        new = str(project.src_root / "b.html")
        handler.dispatch(FileMovedEvent(old, new))
        assert seen == [Path(old), Path(new)]

    def test_directory_and_close_events_ignored(self, project: Project) -> None:
        handler, seen = self._handler(project)
        handler.dispatch(DirModifiedEvent(str(project.src_root)))
        handler.dispatch(FileClosedEvent(str(project.src_root / "index.html")))
        assert seen == []


class TestLifecycle:
    def test_start_and_stop(self, project: Project) -> None:
        watcher = _watcher(project, Recorder())
        watcher.start()
        watcher.stop()
