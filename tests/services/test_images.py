"""Tests for ImagesProcessor — webp and optimize sub-chains."""

from __future__ import annotations

from PIL import Image

from assetctl.infrastructure.project import Project
from assetctl.services.images import ImagesProcessor
from tests.conftest import backdate, make_png


class TestImagesProcessor:
    def test_webp_and_optimized(self, project: Project) -> None:
        result = ImagesProcessor(project).run()
        assert result.ok
        assert sorted(result.data["outputs"]) == [
            "dist/assets/images/photo.png",
            "dist/assets/images/photo.webp",
        ]
        with Image.open(project.root / "dist" / "assets" / "images" / "photo.webp") as img:
            assert img.format == "WEBP"

    def test_sprite_sources_excluded(self, project: Project) -> None:
        result = ImagesProcessor(project).run()
        assert not any("sprite" in f["source"] for f in result.data["files"])

    def test_freshness_per_file(self, project: Project) -> None:
        images = project.root / "src" / "assets" / "images"
        second = make_png(images / "icons" / "logo.png", color="blue")
        backdate(images / "photo.png", second)
        ImagesProcessor(project).run()

        # Only the second source changes afterwards.
        backdate(images / "photo.png", seconds=50)
        make_png(second, color="green")
        result = ImagesProcessor(project).run()

        statuses = {f["source"]: f["status"] for f in result.data["files"]}
        assert statuses == {
            "src/assets/images/photo.png": "skipped",
            "src/assets/images/icons/logo.png": "written",
        }
        assert sorted(result.data["outputs"]) == [
            "dist/assets/images/icons/logo.png",
            "dist/assets/images/icons/logo.webp",
        ]

    def test_missing_webp_rebuilt_alone(self, project: Project) -> None:
        source = project.root / "src" / "assets" / "images" / "photo.png"
        backdate(source)
        ImagesProcessor(project).run()
        (project.root / "dist" / "assets" / "images" / "photo.webp").unlink()

        result = ImagesProcessor(project).run()
        assert result.data["outputs"] == ["dist/assets/images/photo.webp"]

    def test_webp_disabled(self, project: Project) -> None:
        settings = project.settings.model_copy(
            update={"images": project.settings.images.model_copy(update={"webp": False})}
        )
        other = Project(settings)
        result = ImagesProcessor(other).run()
        assert result.data["outputs"] == ["dist/assets/images/photo.png"]

    def test_corrupt_image_fails(self, project: Project) -> None:
        (project.root / "src" / "assets" / "images" / "broken.png").write_bytes(b"not a png")
        result = ImagesProcessor(project).run()
        failed = [f for f in result.data["files"] if f["status"] == "failed"]
        assert [f["source"] for f in failed] == ["src/assets/images/broken.png"]
        assert failed[0]["title"] == "IMAGES Error"
