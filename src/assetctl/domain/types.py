"""Asset categories and their fixed per-category labels.

The six categories are fixed at configuration time; every processor,
watch binding, and command is keyed by one of them.
"""

from __future__ import annotations

from enum import StrEnum


class AssetCategory(StrEnum):
    """Declared asset kinds, valued by their command name."""

    MARKUP = "html"
    STYLES = "css"
    SCRIPTS = "js"
    IMAGES = "images"
    SPRITE = "svgsprite"
    FONTS = "fonts"


# Title attached to user-visible failure notifications.
ERROR_TITLES: dict[AssetCategory, str] = {
    AssetCategory.MARKUP: "HTML Error",
    AssetCategory.STYLES: "CSS Error",
    AssetCategory.SCRIPTS: "JS Error",
    AssetCategory.IMAGES: "IMAGES Error",
    AssetCategory.SPRITE: "SVG Error",
    AssetCategory.FONTS: "FONTS Error",
}


def parse_category(name: str) -> AssetCategory:
    """Resolve a command name (``"css"``) or member name (``"styles"``)."""
    try:
        return AssetCategory(name)
    except ValueError:
        pass
    try:
        return AssetCategory[name.upper()]
    except KeyError:
        msg = f"Unknown asset category: {name!r}"
        raise ValueError(msg) from None
