"""Shape reconnection — re-stitch two scaled parts along their connections.

One shape is moved rigidly so the topmost connection lines up again; the
other shape has the endpoints of its boundary paths snapped onto the
partner's connection points.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from framestitch.diagnostics import Diagnostics
from framestitch.kernel.config import KernelConfig
from framestitch.kernel.connections import Connection, PathRef
from framestitch.kernel.geometry import Point, distance, subtract
from framestitch.kernel.model import Model, move_relative, originate, walk_paths
from framestitch.kernel.paths import Arc, Line, PathSegment
from framestitch.models.warnings import MISSING_CONNECTION

logger = logging.getLogger(__name__)


def top_point(segment: PathSegment) -> Point:
    """Higher endpoint; on a horizontal segment the one further right."""
    a, b = segment.endpoints
    return a if (a[1], a[0]) >= (b[1], b[0]) else b


def bottom_point(segment: PathSegment) -> Point:
    a, b = segment.endpoints
    return b if (a[1], a[0]) >= (b[1], b[0]) else a


def find_previous_and_next(
    model: Model, segment: PathSegment, tol: float
) -> tuple[list[PathRef], list[PathRef]]:
    """Paths touching the segment's top point and its bottom point.

    The segment itself appears in both lists. The model must be originated.
    """
    top = top_point(segment)
    bottom = bottom_point(segment)
    to_top: list[PathRef] = []
    to_bottom: list[PathRef] = []
    for walked in walk_paths(model):
        start, end = walked.segment.endpoints
        for target, found in ((top, to_top), (bottom, to_bottom)):
            d_start = distance(start, target)
            d_end = distance(end, target)
            if min(d_start, d_end) < tol:
                found.append(PathRef(walked.route, walked.segment, d_start < d_end))
    return to_top, to_bottom


def set_connecting_paths_to_goal(refs: Sequence[PathRef], model: Model, goal: Point) -> None:
    """Move the referenced endpoint of each path onto goal.

    Lines are edited in place. Arcs are rebuilt through their kept endpoint
    and the goal with the same radius and orientation.
    """
    for ref in refs:
        segment = model.segment_at(ref.route)
        if isinstance(segment, Line):
            segment.set_endpoint(ref.is_at_origin, goal)
        elif isinstance(segment, Arc):
            kept = segment.end if ref.is_at_origin else segment.start
            if distance(kept, goal) == 0.0:
                logger.warning("Cannot rebuild arc %s onto its own endpoint", "/".join(ref.route))
                continue
            start, end = (goal, kept) if ref.is_at_origin else (kept, goal)
            rebuilt = Arc.from_endpoints(start, end, segment.radius, large_arc=segment.sweep > 180.0)
            model.replace_segment(ref.route, rebuilt)
        else:
            raise TypeError(f"Unknown path segment: {type(segment).__name__}")


def highest_connection(shapes: Sequence[Model], connections: Sequence[Connection]) -> Connection:
    """The connection whose top point lies highest."""
    def height(conn: Connection) -> float:
        return max(top_point(shapes[i].segment_at(conn[i].route))[1] for i in (0, 1))

    return max(connections, key=height)


def reconnect_shapes(
    shapes: Sequence[Model],
    connections: Sequence[Connection],
    move: int,
    modify: int,
    config: KernelConfig | None = None,
    diagnostics: Diagnostics | None = None,
    names: tuple[str, str] = ("shape1", "shape2"),
) -> bool:
    """Re-stitch shapes[0] and shapes[1] along their connections.

    ``shapes[move]`` is translated so the highest connection's top points
    coincide; ``shapes[modify]`` gets its boundary endpoints snapped onto the
    other shape's connection points. Connection refs must point into
    ``shapes`` (index 0 = ``connection.a``). Returns False when the anchor's
    bottom point does not have exactly two neighbors.
    """
    if not connections:
        raise ValueError("reconnect_shapes needs at least one connection")
    config = config or KernelConfig()
    for shape in shapes:
        originate(shape)

    anchor = highest_connection(shapes, connections)
    fixed = 1 - move
    goal_top = top_point(shapes[fixed].segment_at(anchor[fixed].route))
    actual_top = top_point(shapes[move].segment_at(anchor[move].route))
    move_relative(shapes[move], subtract(goal_top, actual_top))
    originate(shapes[move])

    unmodified = 1 - modify
    goal_bottom = bottom_point(shapes[unmodified].segment_at(anchor[unmodified].route))
    anchor_line = shapes[modify].segment_at(anchor[modify].route)
    _, to_bottom = find_previous_and_next(shapes[modify], anchor_line, config.tol)
    if len(to_bottom) != 2:
        logger.error(
            "Cannot reconnect %s and %s: %d paths meet the anchor bottom, expected 2",
            names[0], names[1], len(to_bottom),
        )
        if diagnostics is not None:
            diagnostics.error(MISSING_CONNECTION, PART1=names[0], PART2=names[1])
        return False
    set_connecting_paths_to_goal(to_bottom, shapes[modify], goal_bottom)

    for conn in connections:
        if conn is anchor:
            continue
        goal_line = shapes[unmodified].segment_at(conn[unmodified].route)
        line = shapes[modify].segment_at(conn[modify].route)
        to_top, to_bottom = find_previous_and_next(shapes[modify], line, config.tol)
        set_connecting_paths_to_goal(to_top, shapes[modify], top_point(goal_line))
        set_connecting_paths_to_goal(to_bottom, shapes[modify], bottom_point(goal_line))

    logger.debug("Reconnected %s and %s along %d connections", names[0], names[1], len(connections))
    return True
