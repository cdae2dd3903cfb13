"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, assetctl.toml only contains overrides.
An empty (or missing) assetctl.toml builds ``src/`` into ``dist/``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from assetctl.domain.types import AssetCategory

# --- Path table ---


class PathSpec(BaseModel):
    """Where one category reads from, writes to, and what it watches.

    All globs are relative to the project root. ``source`` entries that
    start with ``!`` exclude files matched by earlier entries. ``base`` is
    the directory whose relative structure is mirrored under ``dest``.
    """

    model_config = {"frozen": True}

    source: tuple[str, ...]
    base: str
    dest: str
    watch: tuple[str, ...] = ()


def _default_paths() -> dict[AssetCategory, PathSpec]:
    src = "src"
    dist = "dist"
    return {
        AssetCategory.MARKUP: PathSpec(
            source=(f"{src}/*.html",),
            base=src,
            dest=dist,
            watch=(f"{src}/**/*.html",),
        ),
        AssetCategory.STYLES: PathSpec(
            source=(f"{src}/assets/scss/*.scss",),
            base=f"{src}/assets/scss",
            dest=f"{dist}/assets/css",
            watch=(f"{src}/assets/scss/**/*.scss",),
        ),
        AssetCategory.SCRIPTS: PathSpec(
            source=(f"{src}/assets/js/*.js",),
            base=f"{src}/assets/js",
            dest=f"{dist}/assets/js",
            watch=(f"{src}/assets/js/**/*.js",),
        ),
        AssetCategory.IMAGES: PathSpec(
            source=(
                f"{src}/assets/images/**/*.{{jpg,jpeg,png,svg,gif,ico,webp}}",
                f"!{src}/assets/images/sprite/*.svg",
            ),
            base=f"{src}/assets/images",
            dest=f"{dist}/assets/images",
            watch=(
                f"{src}/assets/images/**/*.{{jpg,jpeg,png,svg,gif,ico,webp}}",
                f"!{src}/assets/images/sprite/*.svg",
            ),
        ),
        AssetCategory.SPRITE: PathSpec(
            source=(f"{src}/assets/images/sprite/*.svg",),
            base=f"{src}/assets/images/sprite",
            dest=f"{dist}/assets/images/sprite",
            watch=(f"{src}/assets/images/sprite/*.svg",),
        ),
        AssetCategory.FONTS: PathSpec(
            source=(f"{src}/assets/fonts/**/*.{{eot,woff,woff2,ttf,svg}}",),
            base=f"{src}/assets/fonts",
            dest=f"{dist}/assets/fonts",
            watch=(f"{src}/assets/fonts/**/*.{{eot,woff,woff2,ttf,svg}}",),
        ),
    }


class PathsConfig(BaseModel):
    """[paths] section.

    ``src`` and ``dist`` are the roots; ``categories`` overrides individual
    category specs (``[paths.categories.css]``).
    """

    model_config = {"frozen": True}

    src: str = "src"
    dist: str = "dist"
    categories: dict[AssetCategory, PathSpec] = Field(default_factory=dict)

    def table(self) -> dict[AssetCategory, PathSpec]:
        """The full path table: defaults re-rooted at src/dist, then overrides."""
        table: dict[AssetCategory, PathSpec] = {}
        for category, spec in _default_paths().items():
            table[category] = PathSpec(
                source=tuple(_reroot(p, self.src, self.dist) for p in spec.source),
                base=_reroot(spec.base, self.src, self.dist),
                dest=_reroot(spec.dest, self.src, self.dist),
                watch=tuple(_reroot(p, self.src, self.dist) for p in spec.watch),
            )
        table.update(self.categories)
        return table


def _reroot(value: str, src: str, dist: str) -> str:
    negate = value.startswith("!")
    body = value[1:] if negate else value
    head, sep, rest = body.partition("/")
    if head == "src":
        body = f"{src.rstrip('/')}{sep}{rest}"
    elif head == "dist":
        body = f"{dist.rstrip('/')}{sep}{rest}"
    return f"!{body}" if negate else body


# --- Per-category options ---


class StylesConfig(BaseModel):
    """[styles] section."""

    model_config = {"frozen": True}

    output_style: Literal["expanded", "nested", "compact", "compressed"] = "expanded"
    include_paths: tuple[str, ...] = ()
    prefix: bool = True
    group_media: bool = True
    min_suffix: str = ".min"


class ScriptsConfig(BaseModel):
    """[scripts] section."""

    model_config = {"frozen": True}

    min_suffix: str = ".min"
    keep_bang_comments: bool = False


class ImagesConfig(BaseModel):
    """[images] section."""

    model_config = {"frozen": True}

    webp: bool = True
    webp_quality: int = Field(default=75, ge=0, le=100)
    jpeg_quality: int = Field(default=85, ge=0, le=100)


class SpriteConfig(BaseModel):
    """[sprite] section."""

    model_config = {"frozen": True}

    filename: str = "sprite.svg"
    strip_attrs: tuple[str, ...] = ("fill", "stroke", "style")


class FontsConfig(BaseModel):
    """[fonts] section."""

    model_config = {"frozen": True}

    formats: tuple[Literal["woff", "ttf", "eot"], ...] = ("woff", "ttf", "eot")
    woff2: bool = True


class ServerConfig(BaseModel):
    """[server] section."""

    model_config = {"frozen": True}

    host: str = "127.0.0.1"
    port: int = 3000
    open_browser: bool = False


class FeaturesConfig(BaseModel):
    """[features] section — optional capabilities."""

    model_config = {"frozen": True}

    notify: bool = True
    svg_sprite: bool = True


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    local_dir: str = ".assetctl/plugins"
    disabled: tuple[str, ...] = ()
