"""Shape transformation — scale reference parts to the ordered frame size.

The bridge stretches horizontally to absorb the bridge-size change (half of
it per side), the shape scales with lens width and height, and the pad
follows the shape while keeping the angle of its arm.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from framestitch.kernel.config import KernelConfig
from framestitch.kernel.connections import Connection
from framestitch.kernel.geometry import distance, midpoint
from framestitch.kernel.model import Extents, Model, distort, extents, move_relative, originate
from framestitch.kernel.paths import Line
from framestitch.kernel.reconnect import (
    bottom_point,
    find_previous_and_next,
    set_connecting_paths_to_goal,
    top_point,
)
from framestitch.models.sizes import SizeParameters

logger = logging.getLogger(__name__)


@dataclass
class ScaleFactors:
    bridge: float
    vertical: float
    horizontal: float
    bridge_x_translation: float

    @classmethod
    def compute(cls, target: SizeParameters, reference: SizeParameters, bridge_width: float) -> ScaleFactors:
        """Factors taking the reference drawing to the target size.

        ``bridge_width`` is the drawn width of the half bridge.
        """
        return cls(
            bridge=1.0 - (reference.bridge_size - target.bridge_size) / (2.0 * bridge_width),
            vertical=target.glas_height / reference.glas_height,
            horizontal=target.glas_width / reference.glas_width,
            bridge_x_translation=(target.bridge_size - reference.bridge_size) / 2.0,
        )


def scale_bridge(bridge: Model, factors: ScaleFactors, config: KernelConfig) -> Model:
    """Stretch the bridge about x = 0, where it meets the mirror axis."""
    return distort(bridge, factors.bridge, factors.vertical, config.arc_max_angle)


def scale_shape(
    shape: Model,
    factors: ScaleFactors,
    anchor_x: float,
    config: KernelConfig,
    inflation: float = 1.0,
) -> Model:
    """Scale from the shape's left edge ``anchor_x`` and follow the bridge.

    ``inflation`` widens the result slightly so neighbouring parts overlap
    instead of touching; the excess is split evenly on both sides.
    """
    rebased = originate(move_relative(shape.clone(), (-anchor_x, 0.0)))
    width = extents(rebased).high[0] if not rebased.is_empty() else 0.0
    scaled = distort(rebased, factors.horizontal * inflation, factors.vertical, config.arc_max_angle)
    excess = width * factors.horizontal * (inflation - 1.0)
    move_relative(scaled, (anchor_x - excess / 2.0 + factors.bridge_x_translation, 0.0))
    return originate(scaled)


def translate_pad(
    pad: Model,
    shape: Model,
    reference_shape: Extents,
    factors: ScaleFactors,
    connection: Connection | None,
    config: KernelConfig,
) -> Model:
    """Move the pad along with the scaled shape, in place.

    ``reference_shape`` is the shape's extents before scaling. With a
    connection the pad's vertical move lines its connecting line up with
    the shape's. The pad never moves closer than ``min_pad_x`` to x = 0.
    """
    pad_ext = extents(pad)
    tx = (pad_ext.high[0] - reference_shape.low[0]) * (factors.horizontal - 1.0)
    ty = pad_ext.high[1] * (factors.vertical - 1.0)
    if connection is not None:
        shape_line = shape.segment_at(connection.a.route)
        pad_line = pad.segment_at(connection.b.route)
        ty = midpoint(*shape_line.endpoints)[1] - midpoint(*pad_line.endpoints)[1]
    tx += factors.bridge_x_translation
    if pad_ext.low[0] + tx < config.min_pad_x:
        logger.debug("Clamping pad translation %.3f to keep x >= %.2f", tx, config.min_pad_x)
        tx = config.min_pad_x - pad_ext.low[0]
    move_relative(pad, (tx, ty))
    return originate(pad)


def attach_pad(shape: Model, pad: Model, connection: Connection, config: KernelConfig) -> None:
    """Snap the pad's connecting line onto the shape's, keeping the arm angle.

    The arm is the pad line meeting the connection at its top. If that
    junction has to move sideways, the whole pad first moves vertically so
    the arm keeps its slope.
    """
    shape_line = shape.segment_at(connection.a.route)
    pad_line = pad.segment_at(connection.b.route)
    to_top, to_bottom = find_previous_and_next(pad, pad_line, config.tol)
    to_top = [ref for ref in to_top if isinstance(ref.segment, Line)]
    to_bottom = [ref for ref in to_bottom if isinstance(ref.segment, Line)]
    top = top_point(shape_line)
    bottom = bottom_point(shape_line)

    arm = next((ref for ref in to_top if _line_distance(ref.segment, pad_line) > config.tol), None)
    if arm is not None:
        junction = arm.segment.origin if arm.is_at_origin else arm.segment.end
        far = arm.segment.end if arm.is_at_origin else arm.segment.origin
        dx = top[0] - junction[0]
        sx, sy = far[0] - junction[0], far[1] - junction[1]
        if abs(dx) > config.tol and abs(sx) > config.tol:
            move_relative(pad, (0.0, -sy / sx * dx))
            originate(pad)

    set_connecting_paths_to_goal(to_top, pad, top)
    set_connecting_paths_to_goal(to_bottom, pad, bottom)


def place_unmerged_hinge(hinge: Model, shape: Model, config: KernelConfig) -> Model:
    """Park a separately manufactured hinge right of the shape, in place."""
    shift = extents(shape).high[0] - extents(hinge).low[0] + config.hinge_gap
    move_relative(hinge, (shift, 0.0))
    return originate(hinge)


def track_shape_holes(holes: Model, anchor_x: float, factors: ScaleFactors) -> Model:
    """Move each hole by the shape's scaling of its center; holes keep their size."""
    result = Model()
    for index, hole in enumerate(_split_holes(holes)):
        cx, cy = extents(hole).center
        rel_x = cx - anchor_x
        dx = rel_x * factors.horizontal - rel_x + factors.bridge_x_translation
        dy = cy * factors.vertical - cy
        result.models[str(index)] = originate(move_relative(hole, (dx, dy)))
    return result


def track_hinge_holes(holes: Model, before: Extents, after: Extents) -> Model:
    """Move hinge holes by the hinge's net displacement."""
    moved = holes.clone()
    move_relative(moved, (after.center[0] - before.center[0], after.center[1] - before.center[1]))
    return originate(moved)


def _split_holes(holes: Model) -> list[Model]:
    flat = originate(holes.clone())
    result = [Model(paths={key: seg}) for key, seg in flat.paths.items()]
    result.extend(flat.models.values())
    return result


def _line_distance(a: Line, b: Line) -> float:
    same = distance(a.origin, b.origin) + distance(a.end, b.end)
    opposite = distance(a.origin, b.end) + distance(a.end, b.origin)
    return min(same, opposite)
