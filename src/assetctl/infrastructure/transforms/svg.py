"""SVG cleanup and symbol sprite assembly via lxml.

Cleanup removes comments, ``<metadata>``, editor namespaces (Inkscape,
Sodipodi, Sketch), empty attributes, and empty ``<text>`` elements, and
unwraps attribute-less ``<g>`` groups. ``id`` attributes and ``viewBox``
are always kept.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from lxml import etree

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

_EDITOR_NAMESPACES = frozenset(
    {
        "http://www.inkscape.org/namespaces/inkscape",
        "http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd",
        "http://www.bohemiancoding.com/sketch/ns",
        "http://ns.adobe.com/AdobeIllustrator/10.0/",
    }
)
_DROP_ELEMENTS = frozenset({"metadata"})


def _parser() -> etree.XMLParser:
    return etree.XMLParser(
        remove_comments=True,
        remove_blank_text=True,
        resolve_entities=False,
        no_network=True,
    )


def _local(tag: object) -> str:
    if not isinstance(tag, str):
        return ""
    return etree.QName(tag).localname


def _namespace(name: str) -> str | None:
    return etree.QName(name).namespace


def parse_svg(data: bytes) -> etree._Element:
    """Parse *data* into an element tree rooted at ``<svg>``.

    Raises :class:`ValueError` for documents whose root is not ``svg``.
    """
    root = etree.fromstring(data, parser=_parser())
    if _local(root.tag) != "svg":
        msg = f"Root element is <{_local(root.tag)}>, expected <svg>"
        raise ValueError(msg)
    return root


def clean_tree(root: etree._Element, *, strip_attrs: Iterable[str] = ()) -> etree._Element:
    """Clean *root* in place and return it."""
    strip = frozenset(strip_attrs)

    for el in list(root.iter()):
        if not isinstance(el.tag, str):
            # Processing instructions survive remove_comments.
            el.getparent().remove(el)
            continue
        if _local(el.tag) in _DROP_ELEMENTS or _namespace(el.tag) in _EDITOR_NAMESPACES:
            el.getparent().remove(el)

    for el in root.iter():
        for name in list(el.attrib):
            if name == "id" or _local(name) == "viewBox":
                continue
            value = el.attrib[name]
            if (
                _namespace(name) in _EDITOR_NAMESPACES
                or _local(name) in strip
                or not value.strip()
            ):
                del el.attrib[name]

    for el in list(root.iter(f"{{{SVG_NS}}}text", "text")):
        if not (el.text or "").strip() and len(el) == 0:
            el.getparent().remove(el)

    for group in list(root.iter(f"{{{SVG_NS}}}g", "g")):
        parent = group.getparent()
        if parent is None or group.attrib:
            continue
        index = parent.index(group)
        for offset, child in enumerate(list(group)):
            parent.insert(index + offset, child)
        parent.remove(group)

    etree.cleanup_namespaces(root)
    return root


def minify_svg(data: bytes) -> bytes:
    """Clean an SVG document without stripping presentational attributes."""
    root = clean_tree(parse_svg(data))
    return etree.tostring(root, xml_declaration=False, encoding="utf-8")


def _view_box(svg: etree._Element) -> str | None:
    view_box = svg.get("viewBox")
    if view_box:
        return view_box
    width, height = svg.get("width"), svg.get("height")
    if width and height:
        w = width.removesuffix("px")
        h = height.removesuffix("px")
        return f"0 0 {w} {h}"
    return None


def build_sprite(sources: Sequence[Path], *, strip_attrs: Iterable[str] = ()) -> bytes:
    """Combine *sources* into one ``<symbol>`` sprite, ids taken from file stems.

    Every symbol keeps its source's ``viewBox`` (derived from width/height
    when absent). Attributes named in *strip_attrs* are removed from every
    element inside each symbol.
    """
    strip = tuple(strip_attrs)
    sprite = etree.Element(f"{{{SVG_NS}}}svg", nsmap={None: SVG_NS, "xlink": XLINK_NS})
    for source in sources:
        svg = clean_tree(parse_svg(source.read_bytes()), strip_attrs=strip)
        for el in svg.iter():
            if _namespace(el.tag) is None:
                el.tag = f"{{{SVG_NS}}}{el.tag}"
        symbol = etree.SubElement(sprite, f"{{{SVG_NS}}}symbol", id=source.stem)
        view_box = _view_box(svg)
        if view_box:
            symbol.set("viewBox", view_box)
        for child in list(svg):
            symbol.append(child)
    etree.cleanup_namespaces(sprite, top_nsmap={None: SVG_NS, "xlink": XLINK_NS})
    return etree.tostring(sprite, xml_declaration=True, encoding="utf-8")


def symbol_ids(data: bytes) -> list[str]:
    """Ids of the top-level ``<symbol>`` elements of a sprite sheet, in order."""
    return [el.get("id", "") for el in parse_svg(data) if _local(el.tag) == "symbol"]
