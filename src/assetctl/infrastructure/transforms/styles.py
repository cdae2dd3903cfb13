"""Stylesheet steps: Sass compile, vendor prefixing, media-query grouping, minify.

Compilation is libsass, minification is rcssmin. Prefixing and grouping
operate on the compiled CSS through the tinycss2 tokenizer and re-render
rules in libsass's ``expanded`` layout.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import rcssmin
import sass
import tinycss2

# Property -> vendor prefixes to emit ahead of the standard declaration.
PROPERTY_PREFIXES: dict[str, tuple[str, ...]] = {
    "appearance": ("-webkit-", "-moz-"),
    "user-select": ("-webkit-", "-moz-", "-ms-"),
    "backdrop-filter": ("-webkit-",),
    "text-size-adjust": ("-webkit-", "-moz-", "-ms-"),
    "hyphens": ("-webkit-", "-ms-"),
    "tab-size": ("-moz-",),
    "clip-path": ("-webkit-",),
    "mask": ("-webkit-",),
    "mask-image": ("-webkit-",),
    "mask-size": ("-webkit-",),
    "mask-position": ("-webkit-",),
    "mask-repeat": ("-webkit-",),
    "box-decoration-break": ("-webkit-",),
    "text-emphasis": ("-webkit-",),
    "text-emphasis-color": ("-webkit-",),
    "text-emphasis-position": ("-webkit-",),
    "text-emphasis-style": ("-webkit-",),
    "print-color-adjust": ("-webkit-",),
    "font-kerning": ("-webkit-",),
}

# (property, value) -> prefixed values to emit ahead of the standard one.
VALUE_PREFIXES: dict[tuple[str, str], tuple[str, ...]] = {
    ("position", "sticky"): ("-webkit-sticky",),
    ("width", "fit-content"): ("-moz-fit-content",),
    ("width", "max-content"): ("-moz-max-content",),
    ("width", "min-content"): ("-moz-min-content",),
}

_NESTING_AT_RULES = frozenset({"media", "supports", "document", "layer", "container"})
_MEDIA_WIDTH_RE = re.compile(r"\((min|max)-width\s*:\s*([\d.]+)")
_INDENT = "  "

Prefixer = Callable[[Any, set[str]], list[str]]


# ---------------------------------------------------------------------------
# Compile
# ---------------------------------------------------------------------------


def compile_sass(
    source: Path,
    *,
    css_path: Path,
    map_path: Path,
    output_style: str = "expanded",
    include_paths: Sequence[Path] = (),
) -> tuple[str, str]:
    """Compile *source* and return ``(css, source_map_json)``.

    *css_path* and *map_path* are where the caller will write the outputs;
    the map's ``sources`` are made relative to *map_path*. Nothing is
    written here. The CSS carries no ``sourceMappingURL`` comment; callers
    add it once post-processing is done.
    """
    css, source_map = sass.compile(
        filename=str(source),
        output_style=output_style,
        include_paths=[str(p) for p in include_paths],
        source_map_filename=str(map_path),
        output_filename_hint=str(css_path),
        source_map_contents=True,
        omit_source_map_url=True,
    )
    return css, source_map


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


def _declaration_text(name: str, value: str, important: bool) -> str:
    return f"{name}: {value}{' !important' if important else ''};"


def _parse_error(node: Any) -> ValueError:
    return ValueError(f"Invalid CSS: {node.message}")


def _render_block(
    content: list[Any],
    depth: int,
    prefixer: Prefixer | None,
) -> list[str]:
    """Render the body of a qualified rule, one line per item."""
    items = tinycss2.parse_blocks_contents(content, skip_whitespace=True, skip_comments=False)
    existing = {item.lower_name for item in items if item.type == "declaration"}
    lines: list[str] = []
    pad = _INDENT * depth
    for item in items:
        if item.type == "declaration":
            value = tinycss2.serialize(item.value).strip()
            if prefixer is not None:
                lines.extend(f"{pad}{line}" for line in prefixer(item, existing))
            lines.append(f"{pad}{_declaration_text(item.name, value, item.important)}")
        elif item.type == "comment":
            lines.append(f"{pad}/*{item.value}*/")
        elif item.type == "error":
            raise _parse_error(item)
        else:
            lines.append(f"{pad}{item.serialize().strip()}")
    return lines


def _render_rules(
    nodes: list[Any],
    depth: int = 0,
    prefixer: Prefixer | None = None,
) -> str:
    pad = _INDENT * depth
    out: list[str] = []
    for node in nodes:
        if node.type == "qualified-rule":
            selector = tinycss2.serialize(node.prelude).strip()
            body = _render_block(node.content, depth + 1, prefixer)
            out.append(f"{pad}{selector} {{\n" + "".join(f"{b}\n" for b in body) + f"{pad}}}\n")
        elif (
            node.type == "at-rule"
            and node.lower_at_keyword in _NESTING_AT_RULES
            and node.content is not None
        ):
            prelude = tinycss2.serialize(node.prelude).strip()
            inner = tinycss2.parse_rule_list(node.content, skip_whitespace=True, skip_comments=False)
            out.append(
                f"{pad}@{node.at_keyword} {prelude} {{\n"
                + _render_rules(inner, depth + 1, prefixer)
                + f"{pad}}}\n"
            )
        elif node.type == "comment":
            out.append(f"{pad}/*{node.value}*/\n")
        elif node.type == "error":
            raise _parse_error(node)
        else:
            out.append(f"{pad}{node.serialize().strip()}\n")
    return "".join(out)


def _parse(css: str) -> list[Any]:
    return tinycss2.parse_stylesheet(css, skip_whitespace=True, skip_comments=False)


# ---------------------------------------------------------------------------
# Prefix
# ---------------------------------------------------------------------------


def _vendor_prefixer(declaration: Any, existing: set[str]) -> list[str]:
    name = declaration.lower_name
    value = tinycss2.serialize(declaration.value).strip()
    lines: list[str] = []
    for prefix in PROPERTY_PREFIXES.get(name, ()):
        if f"{prefix}{name}" not in existing:
            lines.append(_declaration_text(f"{prefix}{name}", value, declaration.important))
    for prefixed_value in VALUE_PREFIXES.get((name, value.lower()), ()):
        lines.append(_declaration_text(name, prefixed_value, declaration.important))
    return lines


def prefix_css(css: str) -> str:
    """Insert vendor-prefixed declarations ahead of their standard forms.

    A prefixed property already present in the same block is not repeated.
    """
    return _render_rules(_parse(css), prefixer=_vendor_prefixer)


# ---------------------------------------------------------------------------
# Group media queries
# ---------------------------------------------------------------------------


def _media_sort_key(prelude: str, order: int) -> tuple[int, float]:
    """Mobile-first order: min-width ascending, max-width descending, rest as found."""
    widths = _MEDIA_WIDTH_RE.findall(prelude)
    kinds = {kind for kind, _ in widths}
    if kinds == {"min"}:
        return (0, min(float(w) for _, w in widths))
    if kinds == {"max"}:
        return (1, -max(float(w) for _, w in widths))
    return (2, float(order))


def group_media_queries(css: str) -> str:
    """Merge identical top-level ``@media`` blocks and move them to the end.

    Rules outside media queries keep their relative order; merged media
    blocks keep the relative order of their inner rules.
    """
    plain: list[Any] = []
    groups: dict[str, list[Any]] = {}
    first_seen: dict[str, int] = {}
    for node in _parse(css):
        if node.type == "at-rule" and node.lower_at_keyword == "media" and node.content is not None:
            prelude = " ".join(tinycss2.serialize(node.prelude).split())
            first_seen.setdefault(prelude, len(first_seen))
            inner = tinycss2.parse_rule_list(node.content, skip_whitespace=True, skip_comments=False)
            groups.setdefault(prelude, []).extend(inner)
        else:
            plain.append(node)

    out = [_render_rules(plain)]
    for prelude in sorted(groups, key=lambda p: _media_sort_key(p, first_seen[p])):
        out.append(f"@media {prelude} {{\n{_render_rules(groups[prelude], 1)}}}\n")
    return "".join(out)


# ---------------------------------------------------------------------------
# Minify
# ---------------------------------------------------------------------------


def minify_css(css: str) -> str:
    """Minify *css*, dropping all comments including ``/*! ... */``."""
    return rcssmin.cssmin(css, keep_bang_comments=False)
