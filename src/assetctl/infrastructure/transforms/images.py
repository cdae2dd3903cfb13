"""Raster image conversion and optimization via Pillow.

``to_webp`` produces the modern-format copy; ``optimize`` re-encodes in
the original format. SVG optimization is delegated to the lxml cleanup
in :mod:`assetctl.infrastructure.transforms.svg`.
"""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

from PIL import Image

from assetctl.infrastructure.transforms.svg import minify_svg

# Formats Pillow can rasterize into a WebP copy.
WEBP_SOURCES = frozenset({".jpg", ".jpeg", ".png", ".gif"})

_PILLOW_FORMATS = {".jpg": "JPEG", ".jpeg": "JPEG", ".png": "PNG", ".gif": "GIF"}


def can_convert_to_webp(path: Path) -> bool:
    return path.suffix.lower() in WEBP_SOURCES


def to_webp(source: Path, *, quality: int = 75) -> bytes:
    """Encode *source* as WebP, keeping animation and transparency."""
    buffer = BytesIO()
    with Image.open(source) as image:
        if getattr(image, "is_animated", False):
            image.save(buffer, "WEBP", quality=quality, save_all=True)
        else:
            has_alpha = image.mode in ("RGBA", "LA", "PA") or "transparency" in image.info
            converted = image.convert("RGBA" if has_alpha else "RGB")
            converted.save(buffer, "WEBP", quality=quality)
    return buffer.getvalue()


def _reencode(source: Path, fmt: str, *, jpeg_quality: int) -> bytes:
    buffer = BytesIO()
    with Image.open(source) as image:
        if fmt == "JPEG":
            if image.mode not in ("RGB", "L", "CMYK"):
                image = image.convert("RGB")
            image.save(buffer, fmt, optimize=True, progressive=True, quality=jpeg_quality)
        elif fmt == "GIF":
            image.save(buffer, fmt, optimize=True, save_all=getattr(image, "is_animated", False))
        else:
            image.save(buffer, fmt, optimize=True)
    return buffer.getvalue()


def optimize(source: Path, *, jpeg_quality: int = 85) -> bytes:
    """Optimized bytes for *source* in its own format.

    Never returns something larger than the original: when re-encoding
    does not shrink the file, the original bytes come back unchanged.
    Formats with no optimizer (ico, webp) are returned as-is.
    """
    original = source.read_bytes()
    suffix = source.suffix.lower()
    if suffix == ".svg":
        optimized = minify_svg(original)
    elif suffix in _PILLOW_FORMATS:
        optimized = _reencode(source, _PILLOW_FORMATS[suffix], jpeg_quality=jpeg_quality)
    else:
        return original
    return optimized if len(optimized) < len(original) else original
