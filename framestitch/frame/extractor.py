"""Part extraction — colored drawing → named, chained, oriented parts.

Drafters annotate each frame part (bridge, shape, hinge, pad, lens) with its
own stroke color. The color map tells which color belongs to which part.
"""

from __future__ import annotations

import logging

from framestitch.diagnostics import Diagnostics
from framestitch.frame.orientation import normalize_orientation
from framestitch.frame.parts import BRIDGE, HOLE_PARTS, SHAPE, PartSet, canonical_part_name
from framestitch.kernel.chains import chain_to_model, find_chains
from framestitch.kernel.config import KernelConfig
from framestitch.kernel.model import Model, mirror, originate, simplify
from framestitch.kernel.paths import Arc
from framestitch.models.drawing import DrawingCircle, DrawingDocument, DrawingGroup, DrawingPath
from framestitch.models.warnings import (
    DUPLICATE,
    MISSING_ANNOTATION,
    MISSING_CURVE,
    PARTS_MISSING,
    UNHANDLED_CIRCLES,
    UNSUPPORTED_PATH,
)
from framestitch.svg.parser import normalize_color, parse_drawing
from framestitch.svg.primitives import import_path_data

logger = logging.getLogger(__name__)


def canonical_color_map(part2color_map: dict[str, str], diagnostics: Diagnostics) -> dict[str, str]:
    """Resolve part-name aliases and normalize colors to ``#rrggbb``."""
    result: dict[str, str] = {}
    for name, color in part2color_map.items():
        part = canonical_part_name(name)
        if part is None:
            logger.info("Ignoring unknown part name %r in color map", name)
            continue
        hex_color = normalize_color(color)
        if hex_color is None:
            logger.warning("Ignoring invalid color %r for %s", color, name)
            continue
        if part in result:
            logger.warning("Color map names %s more than once", part)
            diagnostics.warning(DUPLICATE, NAME=part)
            continue
        result[part] = hex_color
    return result


def model_from_paths(
    paths: list[DrawingPath], part: str, diagnostics: Diagnostics, config: KernelConfig
) -> Model:
    """One child model per path, y-axis flipped back to CAD orientation."""
    result = Model()
    for path in paths:
        try:
            raw = import_path_data(path.d, config)
        except ValueError as e:
            logger.warning("Skipping path of %s: %s", part, e)
            diagnostics.warning(UNSUPPORTED_PATH, NAME=part)
            continue
        # The DXF to SVG conversion inverts the y axis
        flipped = mirror(raw, False, True)
        originate(flipped)
        simplify(flipped)
        result.models[str(len(result.models))] = flipped
    return result


def model_from_circles(circles: list[DrawingCircle]) -> Model:
    return Model(paths={str(i): Arc.circle((c.cx, -c.cy), c.r) for i, c in enumerate(circles)})


def create_parts(
    color_map: dict[str, str],
    document: DrawingDocument,
    diagnostics: Diagnostics,
    config: KernelConfig,
) -> PartSet:
    """Collect the raw geometry of every mapped part from the first group."""
    if not document.groups:
        logger.warning("Drawing has no top-level group")
        return {}
    first = document.groups[0]

    parts: PartSet = {}
    for part, color in color_map.items():
        paths, circles = _matching_elements(first, color)
        if paths:
            model = model_from_paths(paths, part, diagnostics, config)
            if not model.is_empty():
                parts[part] = model
        if circles:
            if part in HOLE_PARTS:
                parts[HOLE_PARTS[part]] = model_from_circles(circles)
            else:
                logger.info("Unhandled circles for %s: %d", part, len(circles))
                diagnostics.info(UNHANDLED_CIRCLES, NAME=part)
        if part not in parts:
            logger.warning("No geometry drawn in %s for %s", color, part)
            diagnostics.warning(MISSING_CURVE, NAME=part)
    return parts


def make_model_parts(
    part2color_map: dict[str, str],
    drawing: str | DrawingDocument,
    diagnostics: Diagnostics | None = None,
    config: KernelConfig | None = None,
) -> PartSet:
    """Extract the oriented PartSet of a reference drawing.

    Returns ``{}`` when the drawing lacks a bridge or a shape.
    """
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    config = config or KernelConfig.from_settings()
    document = parse_drawing(drawing) if isinstance(drawing, str) else drawing

    color_map = canonical_color_map(part2color_map, diagnostics)
    for required in (BRIDGE, SHAPE):
        if required not in color_map:
            diagnostics.warning(MISSING_ANNOTATION, NAME=required)

    converted: PartSet = {}
    for key, part in create_parts(color_map, document, diagnostics, config).items():
        chains = find_chains(part, config.part_chain_distance)
        if len(chains) == 1:
            converted[key] = chain_to_model(chains[0])
        elif len(chains) > 1:
            converted[key] = Model(models={f"{key}-{i}": chain_to_model(c) for i, c in enumerate(chains)})

    if BRIDGE not in converted or SHAPE not in converted:
        logger.error("Frame parts need at least a bridge and a shape, got %s", sorted(converted))
        diagnostics.error(PARTS_MISSING)
        return {}

    parts = normalize_orientation(converted)
    logger.info("Extracted %d parts: %s", len(parts), ", ".join(sorted(parts)))
    return parts


def _matching_elements(group: DrawingGroup, color: str) -> tuple[list[DrawingPath], list[DrawingCircle]]:
    if group.paths or group.circles:
        paths = [p for p in group.paths if p.stroke == color]
        circles = [c for c in group.circles if c.stroke == color]
        return paths, circles
    paths = []
    circles = []
    for sub in group.groups:
        if sub.stroke == color:
            paths.extend(sub.paths)
            circles.extend(sub.circles)
    return paths, circles
