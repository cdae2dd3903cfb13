"""Tests for PipelineService — category runs, full builds, watch-and-serve."""

from __future__ import annotations

import shutil
import threading
import time
from pathlib import Path
from typing import Any

import pluggy
import pytest

from assetctl.config.settings import AssetSettings
from assetctl.domain.types import AssetCategory
from assetctl.infrastructure.project import Project
from assetctl.services import clean as clean_module
from assetctl.services import markup as markup_module
from assetctl.services.markup import MarkupProcessor
from assetctl.services.pipeline import PROCESSORS, PipelineService, processor_for
from assetctl.services.result import (
    CATEGORY_DISABLED,
    CLEAN_FAILED,
    PROCESSOR_CRASHED,
    SOURCE_ROOT_MISSING,
    UNKNOWN_CATEGORY,
    ServiceResult,
)
from assetctl.services.styles import StylesProcessor

hookimpl = pluggy.HookimplMarker("assetctl")


class RecordingPlugin:
    def __init__(self) -> None:
        self.events: list[str] = []
        self._lock = threading.Lock()

    def _record(self, name: str) -> None:
        with self._lock:
            self.events.append(name)

    @hookimpl
    def post_clean(self, dest: str, removed: bool) -> None:
        self._record("post_clean")

    @hookimpl
    def post_category(self, category: str, written: int, skipped: int, failed: int) -> None:
        self._record(f"post_category:{category}")

    @hookimpl
    def post_build(self, ok: bool, summary: dict[str, Any]) -> None:
        self._record("post_build")


class FailingPlugin:
    @hookimpl
    def post_category(self, category: str, written: int, skipped: int, failed: int) -> None:
        raise RuntimeError(f"cannot observe {category}")


class FakeServer:
    url = "http://127.0.0.1:3000/"

    def __init__(self, *, interrupt: bool = False) -> None:
        self.notified: list[Path] = []
        self.served = False
        self._interrupt = interrupt

    def notify(self, path: Path) -> None:
        self.notified.append(path)

    def serve_forever(self) -> None:
        self.served = True
        if self._interrupt:
            raise KeyboardInterrupt


class FakeWatcher:
    categories = [AssetCategory.MARKUP, AssetCategory.STYLES]

    def __init__(self) -> None:
        self.started = False
        self.stopped = False

    def start(self) -> None:
        self.started = True

    def stop(self) -> None:
        self.stopped = True


class TestProcessorRegistry:
    def test_every_category_has_a_processor(self) -> None:
        assert set(PROCESSORS) == set(AssetCategory)

    def test_processor_for(self, project: Project) -> None:
        assert isinstance(processor_for(project, AssetCategory.STYLES), StylesProcessor)


class TestRunCategory:
    def test_by_command_name(self, project: Project) -> None:
        result = PipelineService(project).run_category("html")
        assert result.ok
        assert result.op == "html"
        assert (project.root / "dist" / "index.html").is_file()

    def test_by_member_name(self, project: Project) -> None:
        result = PipelineService(project).run_category("styles")
        assert result.op == "css"

    def test_unknown(self, project: Project) -> None:
        result = PipelineService(project).run_category("less")
        assert not result.ok
        assert result.op == "run"
        assert result.error is not None
        assert result.error.code == UNKNOWN_CATEGORY

    def test_disabled_sprite(self, project_root: Path) -> None:
        settings = AssetSettings.from_cli(project_root=project_root, no_notify=True, no_sprite=True)
        result = PipelineService(Project(settings)).run_category("svgsprite")
        assert result.error is not None
        assert result.error.code == CATEGORY_DISABLED

    def test_missing_source_root(self, project: Project) -> None:
        shutil.rmtree(project.src_root)
        result = PipelineService(project).run_category("js")
        assert result.error is not None
        assert result.error.code == SOURCE_ROOT_MISSING

    def test_empty_match_is_success(self, project: Project) -> None:
        (project.root / "src" / "assets" / "js" / "app.js").unlink()
        result = PipelineService(project).run_category("js")
        assert result.ok
        assert result.data["files"] == []


class TestBuild:
    def test_builds_everything(self, project: Project) -> None:
        (project.dist_root / "stale").mkdir(parents=True)
        (project.dist_root / "stale" / "old.css").write_text("x")

        result = PipelineService(project).build()

        assert result.ok, result.error
        assert result.data["clean"] == {"path": "dist", "removed": True}
        assert not (project.dist_root / "stale").exists()
        assert set(result.data["summary"]) == {c.value for c in AssetCategory}
        for counts in result.data["summary"].values():
            assert counts == {"written": 1, "skipped": 0, "failed": 0}
        assert "duration_ms" in result.meta

    def test_build_twice_identical(self, project: Project) -> None:
        def snapshot() -> dict[str, bytes]:
            return {
                path.relative_to(project.dist_root).as_posix(): path.read_bytes()
                for path in sorted(project.dist_root.rglob("*"))
                if path.is_file()
            }

        assert PipelineService(project).build().ok
        first = snapshot()
        time.sleep(1.1)
        assert PipelineService(project).build().ok

        assert first
        assert snapshot() == first

    def test_clean_finishes_before_processors(
        self, project: Project, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        events: list[str] = []
        real_remove = clean_module.remove_tree
        real_write = markup_module.write_text

        def slow_remove(path: Path) -> bool:
            time.sleep(0.2)
            removed = real_remove(path)
            events.append("clean")
            return removed

        def recording_write(path: Path, content: str) -> Path:
            events.append("html")
            return real_write(path, content)

        monkeypatch.setattr(clean_module, "remove_tree", slow_remove)
        monkeypatch.setattr(markup_module, "write_text", recording_write)
        project.dist_root.mkdir()

        assert PipelineService(project).build().ok
        assert events == ["clean", "html"]

    def test_clean_failure_runs_nothing(
        self, project: Project, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def locked(path: Path) -> bool:
            raise PermissionError(13, "Permission denied", str(path))

        monkeypatch.setattr(clean_module, "remove_tree", locked)
        result = PipelineService(project).build()

        assert not result.ok
        assert result.op == "build"
        assert result.error is not None
        assert result.error.code == CLEAN_FAILED
        assert not project.dist_root.exists()

    def test_missing_source_root_leaves_dist(self, project: Project) -> None:
        shutil.rmtree(project.src_root)
        project.dist_root.mkdir()
        (project.dist_root / "keep.txt").write_text("x")

        result = PipelineService(project).build()

        assert result.error is not None
        assert result.error.code == SOURCE_ROOT_MISSING
        assert (project.dist_root / "keep.txt").is_file()

    def test_per_file_failure_is_a_warning(self, project: Project) -> None:
        (project.root / "src" / "assets" / "scss" / "broken.scss").write_text(".a {\n")
        result = PipelineService(project).build()
        assert result.ok
        assert result.data["summary"]["css"]["failed"] == 1
        assert any(w.startswith("CSS Error: src/assets/scss/broken.scss") for w in result.warnings)
        assert (project.dist_root / "assets" / "js" / "app.min.js").is_file()

    def test_crashed_processor(self, project: Project, monkeypatch: pytest.MonkeyPatch) -> None:
        def boom(self: MarkupProcessor) -> list[Path]:
            raise RuntimeError("glob exploded")

        monkeypatch.setattr(MarkupProcessor, "collect", boom)
        result = PipelineService(project).build()

        assert not result.ok
        assert result.error is not None
        assert result.error.code == PROCESSOR_CRASHED
        assert result.error.detail == {"crashed": {"html": "glob exploded"}}
        assert "html" not in result.data["summary"]
        assert result.data["summary"]["css"]["written"] == 1

    def test_sprite_disabled_not_built(self, project_root: Path) -> None:
        settings = AssetSettings.from_cli(project_root=project_root, no_notify=True, no_sprite=True)
        project = Project(settings)
        result = PipelineService(project).build()
        assert result.ok
        assert "svgsprite" not in result.data["summary"]
        assert not (project.dist_root / "assets" / "images" / "sprite").exists()

    def test_event_order(self, project: Project) -> None:
        recorder = RecordingPlugin()
        project.plugin_manager.register_plugin(recorder, name="recorder")

        PipelineService(project).build()

        assert recorder.events[0] == "post_clean"
        assert recorder.events[-1] == "post_build"
        assert sorted(e for e in recorder.events if e.startswith("post_category:")) == sorted(
            f"post_category:{c.value}" for c in AssetCategory
        )

    def test_plugin_failures_become_warnings(self, project: Project) -> None:
        project.plugin_manager.register_plugin(FailingPlugin(), name="failing")
        result = PipelineService(project).run_category("js")
        assert result.ok
        assert result.warnings == ["Plugin hook post_category failed: cannot observe js"]


class TestWatchAndServe:
    def test_builds_watches_and_serves(self, project: Project) -> None:
        server = FakeServer()
        watcher = FakeWatcher()
        seen: list[ServiceResult] = []

        result = PipelineService(project).watch_and_serve(
            server=server,  # type: ignore[arg-type]
            watcher=watcher,  # type: ignore[arg-type]
            on_result=seen.append,
        )

        assert result.ok
        assert result.op == "watch"
        assert result.data["url"] == "http://127.0.0.1:3000/"
        assert result.data["categories"] == ["html", "css"]
        assert result.data["build"]["summary"]["html"]["written"] == 1
        assert server.served
        assert watcher.started and watcher.stopped
        assert [r.op for r in seen] == ["build"]
        assert project.root / "dist" / "index.html" in server.notified
        assert not any(p.suffix == ".map" for p in server.notified)
        assert project.plugin_manager.get_plugin("livereload") is None

    def test_interrupt_stops_cleanly(self, project: Project) -> None:
        watcher = FakeWatcher()
        result = PipelineService(project).watch_and_serve(
            server=FakeServer(interrupt=True),  # type: ignore[arg-type]
            watcher=watcher,  # type: ignore[arg-type]
        )
        assert watcher.stopped
        assert result.op == "watch"
        assert result.ok
