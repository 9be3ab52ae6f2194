"""Drawing parser — converted CAD SVG → DrawingDocument.

The converter that turns customer DXF files into SVG emits one of two
layouts: a single group whose paths carry their color in ``style``, or a
group of sub-groups each carrying an ``rgb(r,g,b)`` stroke. Both are kept
as nested DrawingGroups with normalized ``#rrggbb`` colors.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET

from framestitch.models.drawing import DrawingCircle, DrawingDocument, DrawingGroup, DrawingPath

logger = logging.getLogger(__name__)

_RGB_RE = re.compile(r"rgb\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)", re.IGNORECASE)
_HEX_RE = re.compile(r"#([0-9a-f]{6}|[0-9a-f]{3})\b", re.IGNORECASE)


def parse_drawing(svg_text: str) -> DrawingDocument:
    """Parse raw SVG text. Unparsable XML yields an empty document."""
    doc = DrawingDocument(raw_svg=svg_text)
    try:
        root = ET.fromstring(svg_text)
    except ET.ParseError as e:
        logger.warning("Failed to parse drawing: %s", e)
        return doc

    for child in root:
        if _tag(child) == "g":
            doc.groups.append(_parse_group(child, None))

    n_paths = sum(len(g.paths) for g in _iter_groups(doc.groups))
    n_circles = sum(len(g.circles) for g in _iter_groups(doc.groups))
    logger.info("Parsed drawing: %d groups, %d paths, %d circles", len(doc.groups), n_paths, n_circles)
    return doc


def normalize_color(value: str | None) -> str | None:
    """``rgb(r,g,b)`` or ``#rgb``/``#rrggbb`` → lowercase ``#rrggbb``.

    Pure white maps to black: DXF color 7 is rendered white on dark
    backgrounds but annotated as black in the color maps.
    """
    if not value:
        return None
    value = value.strip()
    m = _RGB_RE.fullmatch(value)
    if m:
        r, g, b = (int(v) for v in m.groups())
        if (r, g, b) == (255, 255, 255):
            return "#000000"
        return f"#{r:02x}{g:02x}{b:02x}"
    m = _HEX_RE.fullmatch(value)
    if m:
        digits = m.group(1).lower()
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        return f"#{digits}"
    return None


def _parse_group(elem: ET.Element, inherited: str | None) -> DrawingGroup:
    group = DrawingGroup(stroke=_stroke_of(elem) or inherited)
    for child in elem:
        tag = _tag(child)
        stroke = _stroke_of(child) or group.stroke
        if tag == "g":
            group.groups.append(_parse_group(child, group.stroke))
        elif tag == "path":
            d = child.get("d")
            if not d:
                logger.warning("Skipping path without data")
                continue
            group.paths.append(DrawingPath(d=d, stroke=stroke))
        elif tag == "circle":
            try:
                cx, cy, r = float(child.get("cx", 0)), float(child.get("cy", 0)), float(child.get("r"))
            except (TypeError, ValueError):
                logger.warning("Skipping circle with invalid geometry: %s", child.attrib)
                continue
            group.circles.append(DrawingCircle(cx=cx, cy=cy, r=r, stroke=stroke))
        else:
            logger.debug("Ignoring <%s> element", tag)
    return group


def _stroke_of(elem: ET.Element) -> str | None:
    style = _parse_style(elem.get("style", ""))
    return normalize_color(style.get("stroke")) or normalize_color(elem.get("stroke"))


def _parse_style(style: str) -> dict[str, str]:
    result = {}
    for decl in style.split(";"):
        if ":" in decl:
            key, _, value = decl.partition(":")
            result[key.strip().lower()] = value.strip()
    return result


def _tag(elem: ET.Element) -> str:
    return elem.tag.rsplit("}", 1)[-1]


def _iter_groups(groups: list[DrawingGroup]):
    for g in groups:
        yield g
        yield from _iter_groups(g.groups)
