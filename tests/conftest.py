"""Shared pytest fixtures and test helpers for assetctl tests."""

from __future__ import annotations

import os
import time
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from PIL import Image

from assetctl.config.settings import AssetSettings
from assetctl.infrastructure.project import Project

INDEX_HTML = """\
<!DOCTYPE html>
<html>
  <head>
    <title>  Demo   page </title>
    <link rel="stylesheet" href="assets/css/style.min.css">
  </head>
  <body>
    <p>Hello,
       world</p>
    <pre>  keep
   this  </pre>
  </body>
</html>
"""

STYLE_SCSS = """\
@import "partial";

$brand: #336699;

.button {
  color: $brand;
  user-select: none;
}

@media (min-width: 768px) {
  .button { padding: 2px; }
}
"""

PARTIAL_SCSS = """\
.header {
  position: sticky;
}

@media (min-width: 768px) {
  .header { margin: 0; }
}
"""

APP_JS = """\
// greet the user
function greet(name) {
  var message = "Hello, " + name;
  return message;
}
"""

ICON_SVG = """\
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {size} {size}">
  <!-- exported -->
  <path fill="#000" stroke="red" d="M0 0h{size}v{size}z"/>
</svg>
"""


def make_png(path: Path, size: tuple[int, int] = (32, 32), color: str = "red") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, color).save(path, "PNG")
    return path


def make_font(path: Path, family: str = "Demo") -> Path:
    """A minimal single-glyph TrueType font."""
    pen = TTGlyphPen(None)
    pen.moveTo((100, 0))
    pen.lineTo((500, 700))
    pen.lineTo((900, 0))
    pen.closePath()
    glyph_a = pen.glyph()

    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder([".notdef", "A"])
    fb.setupCharacterMap({ord("A"): "A"})
    fb.setupGlyf({".notdef": TTGlyphPen(None).glyph(), "A": glyph_a})
    fb.setupHorizontalMetrics({".notdef": (500, 0), "A": (1000, 100)})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": family, "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    path.parent.mkdir(parents=True, exist_ok=True)
    fb.save(str(path))
    return path


def backdate(*paths: Path, seconds: float = 100) -> None:
    """Move mtimes into the past so freshly written outputs count as newer."""
    past = time.time() - seconds
    for path in paths:
        os.utime(path, (past, past))


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A project with one source file (or pair) per category.

    This is the single source of truth for the sample ``src/`` layout.
    """
    monkeypatch.delenv("ASSETCTL_CONFIG", raising=False)
    src = tmp_path / "src"
    assets = src / "assets"
    (assets / "scss").mkdir(parents=True)
    (assets / "js").mkdir()
    (assets / "images" / "sprite").mkdir(parents=True)

    (src / "index.html").write_text(INDEX_HTML)
    (assets / "scss" / "style.scss").write_text(STYLE_SCSS)
    (assets / "scss" / "_partial.scss").write_text(PARTIAL_SCSS)
    (assets / "js" / "app.js").write_text(APP_JS)
    make_png(assets / "images" / "photo.png")
    (assets / "images" / "sprite" / "arrow.svg").write_text(ICON_SVG.format(size=24))
    (assets / "images" / "sprite" / "close.svg").write_text(ICON_SVG.format(size=16))
    make_font(assets / "fonts" / "demo.ttf")
    return tmp_path


@pytest.fixture
def settings(project_root: Path) -> AssetSettings:
    return AssetSettings.from_cli(project_root=project_root, no_notify=True, sync=True)


@pytest.fixture
def project(settings: AssetSettings) -> Iterator[Project]:
    """Project with a synchronous event bus (no desktop notifier)."""
    p = Project(settings)
    p.init_event_bus(sync=True)
    try:
        yield p
    finally:
        p.close()


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run CLI tests from inside the sample project."""
    monkeypatch.chdir(project_root)
