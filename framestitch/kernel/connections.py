"""Connection finding — shared boundary lines between two models.

Two lines connect when their endpoints coincide within ``tol`` in either
direction. Lines that share only one endpoint and run the same way overlap
partially; the longer one is split so the overlap becomes an exact match.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import NamedTuple

from scipy.spatial import cKDTree

from framestitch.kernel.config import KernelConfig
from framestitch.kernel.geometry import Point, distance, same_direction
from framestitch.kernel.model import Model, Route, originate, walk_paths
from framestitch.kernel.paths import Arc, Line, PathSegment

logger = logging.getLogger(__name__)

_MAX_SPLIT_PASSES = 8


@dataclass
class PathRef:
    """A live segment inside a model plus the route that reaches it."""

    route: Route
    segment: PathSegment
    is_at_origin: bool = False


class Connection(NamedTuple):
    a: PathRef
    b: PathRef


@dataclass
class _Split:
    owner: Model
    route: Route
    line: Line
    shared_at_origin: bool
    middle: Point


def check_lines(line_a: Line, line_b: Line, config: KernelConfig) -> bool | tuple[int, int, Point]:
    """Classify a pair of lines.

    Returns True for a common line, False for no relation, or
    ``(longer, shared_index, middle)`` when the longer line (0 = a, 1 = b)
    must be split at ``middle`` to make the overlap exact. ``shared_index``
    is 0 when the shared endpoint is the longer line's origin.
    """
    a0, a1 = line_a.endpoints
    b0, b1 = line_b.endpoints
    d00 = distance(a0, b0)
    d01 = distance(a0, b1)
    d10 = distance(a1, b0)
    d11 = distance(a1, b1)
    if min(d00, d01, d10, d11) > config.tol:
        return False
    if min(d00 + d11, d01 + d10) < config.tol:
        return True

    shared = [(i, j) for i, j, d in ((0, 0, d00), (0, 1, d01), (1, 0, d10), (1, 1, d11)) if d <= config.tol]
    i, j = shared[0]
    a_pts, b_pts = (a0, a1), (b0, b1)
    common = a_pts[i]
    va = (a_pts[1 - i][0] - common[0], a_pts[1 - i][1] - common[1])
    vb = (b_pts[1 - j][0] - b_pts[j][0], b_pts[1 - j][1] - b_pts[j][1])
    if not same_direction(va, vb, config.direction_tol):
        return False
    if abs(line_a.length - line_b.length) <= config.tol:
        return True
    if line_a.length > line_b.length:
        return (0, i, (common[0] + vb[0], common[1] + vb[1]))
    return (1, j, (b_pts[j][0] + va[0], b_pts[j][1] + va[1]))


def find_connections(model_a: Model, model_b: Model, config: KernelConfig | None = None) -> list[Connection]:
    """All line pairs (a in model_a, b in model_b) forming a shared boundary.

    Both models are originated in place. Partially overlapping collinear
    lines are split first; the remainder of a split line is inserted as
    ``<key>_add`` beside it.
    """
    config = config or KernelConfig()
    originate(model_a)
    originate(model_b)

    for _ in range(_MAX_SPLIT_PASSES):
        connections, splits = _scan(model_a, model_b, config)
        if not splits:
            return connections
        for split in splits:
            _apply_split(split)
    logger.warning("Connection splitting did not settle after %d passes", _MAX_SPLIT_PASSES)
    return _scan(model_a, model_b, config)[0]


def _lines(model: Model) -> list[tuple[Route, Line]]:
    lines = []
    arcs = 0
    for walked in walk_paths(model):
        if isinstance(walked.segment, Line):
            lines.append((walked.route, walked.segment))
        elif isinstance(walked.segment, Arc):
            arcs += 1
    if arcs:
        logger.debug("Skipping %d arcs during connection finding", arcs)
    return lines


def _scan(model_a: Model, model_b: Model, config: KernelConfig) -> tuple[list[Connection], list[_Split]]:
    lines_a = _lines(model_a)
    lines_b = _lines(model_b)
    connections: list[Connection] = []
    splits: list[_Split] = []
    if not lines_a or not lines_b:
        return connections, splits

    tree = cKDTree([p for _, line in lines_b for p in line.endpoints])
    split_lines: set[int] = set()

    for route_a, line_a in lines_a:
        candidates = sorted({idx // 2 for p in line_a.endpoints for idx in tree.query_ball_point(p, config.tol)})
        for bi in candidates:
            route_b, line_b = lines_b[bi]
            verdict = check_lines(line_a, line_b, config)
            if verdict is True:
                connections.append(Connection(PathRef(route_a, line_a), PathRef(route_b, line_b)))
            elif verdict:
                longer, shared_index, middle = verdict
                owner, route, line = (model_a, route_a, line_a) if longer == 0 else (model_b, route_b, line_b)
                if id(line) in split_lines:
                    continue
                split_lines.add(id(line))
                splits.append(_Split(owner, route, line, shared_index == 0, middle))
                logger.debug("Splitting %s at (%.4f, %.4f)", "/".join(route), *middle)
    return connections, splits


def _apply_split(split: _Split) -> None:
    line = split.line
    if split.shared_at_origin:
        far = line.end
        line.end = split.middle
        remainder = Line(split.middle, far)
    else:
        far = line.origin
        line.origin = split.middle
        remainder = Line(far, split.middle)
    split.owner.add_path(split.route[:-1], f"{split.route[-1]}_add", remainder)
