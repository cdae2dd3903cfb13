"""Tests for Project — path table views and plugin wiring."""

from __future__ import annotations

from pathlib import Path

from assetctl.config.settings import AssetSettings
from assetctl.domain.types import AssetCategory
from assetctl.infrastructure.project import Project


class TestPathViews:
    def test_roots(self, project: Project, project_root: Path) -> None:
        assert project.src_root == project_root.resolve() / "src"
        assert project.dist_root == project_root.resolve() / "dist"

    def test_sources_apply_exclusions(self, project: Project) -> None:
        images = [p.name for p in project.sources(AssetCategory.IMAGES).files()]
        assert images == ["photo.png"]
        sprite = [p.name for p in project.sources(AssetCategory.SPRITE).files()]
        assert sprite == ["arrow.svg", "close.svg"]

    def test_watch_globs_cover_partials(self, project: Project) -> None:
        watch = project.watch_globs(AssetCategory.STYLES)
        assert watch.matches(project.src_root / "assets" / "scss" / "base" / "_grid.scss")

    def test_base_and_dest(self, project: Project) -> None:
        assert project.base_dir(AssetCategory.SCRIPTS) == project.root / "src/assets/js"
        assert project.dest_dir(AssetCategory.SCRIPTS) == project.root / "dist/assets/js"

    def test_relative(self, project: Project) -> None:
        assert project.relative(project.root / "dist" / "index.html") == "dist/index.html"
        assert project.relative(Path("/somewhere/else.txt")) == "/somewhere/else.txt"


class TestPlugins:
    def test_notifier_registered_when_enabled(self, project_root: Path) -> None:
        settings = AssetSettings.from_cli(project_root=project_root)
        project = Project(settings)
        assert "notifier" in project.plugin_manager.list_plugin_names()

    def test_notifier_absent_with_no_notify(self, project: Project) -> None:
        assert "notifier" not in project.plugin_manager.list_plugin_names()

    def test_dispatch_without_bus_is_noop(self, settings: AssetSettings) -> None:
        project = Project(settings)
        project.dispatch("post_build", ok=True, summary={})
        assert project.event_bus is None

    def test_init_event_bus_idempotent(self, project: Project) -> None:
        assert project.init_event_bus() is project.init_event_bus()

    def test_close_drops_bus(self, settings: AssetSettings) -> None:
        project = Project(settings)
        project.init_event_bus(sync=True)
        project.close()
        assert project.event_bus is None
