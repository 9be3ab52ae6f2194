"""Model tree — named paths, named child models and local origin offsets.

Every path in a Model is addressed by a Route: the chain of child-model keys
followed by the path key. Routes are resolved through explicit lookups so
connection and chain references survive cloning and in-place edits.
"""

from __future__ import annotations

import copy
import math
from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np

from framestitch.kernel.geometry import Point, add, bbox
from framestitch.kernel.paths import Arc, Line, PathSegment

Route = tuple[str, ...]


@dataclass
class Model:
    paths: dict[str, PathSegment] = field(default_factory=dict)
    models: dict[str, Model] = field(default_factory=dict)
    origin: Point = (0.0, 0.0)

    def clone(self) -> Model:
        return copy.deepcopy(self)

    def is_empty(self) -> bool:
        return next(walk_paths(self), None) is None

    def child(self, route: Route) -> Model:
        """Resolve a route of child-model keys. Raises KeyError if absent."""
        node = self
        for key in route:
            node = node.models[key]
        return node

    def segment_at(self, route: Route) -> PathSegment:
        return self.child(route[:-1]).paths[route[-1]]

    def replace_segment(self, route: Route, segment: PathSegment) -> None:
        parent = self.child(route[:-1])
        if route[-1] not in parent.paths:
            raise KeyError(route)
        parent.paths[route[-1]] = segment

    def add_path(self, parent_route: Route, key: str, segment: PathSegment) -> Route:
        """Insert a segment next to its siblings, suffixing the key if taken."""
        parent = self.child(parent_route)
        unique = key
        n = 1
        while unique in parent.paths:
            unique = f"{key}_{n}"
            n += 1
        parent.paths[unique] = segment
        return parent_route + (unique,)

    def to_dict(self) -> dict:
        data: dict = {}
        if self.origin != (0.0, 0.0):
            data["origin"] = list(self.origin)
        if self.paths:
            data["paths"] = {key: _segment_to_dict(seg) for key, seg in self.paths.items()}
        if self.models:
            data["models"] = {key: child.to_dict() for key, child in self.models.items()}
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Model:
        return cls(
            paths={key: _segment_from_dict(raw) for key, raw in data.get("paths", {}).items()},
            models={key: cls.from_dict(raw) for key, raw in data.get("models", {}).items()},
            origin=tuple(data.get("origin", (0.0, 0.0))),
        )


@dataclass
class WalkedPath:
    route: Route
    segment: PathSegment
    offset: Point


@dataclass(frozen=True)
class Extents:
    low: Point
    high: Point

    @property
    def center(self) -> Point:
        return ((self.low[0] + self.high[0]) / 2.0, (self.low[1] + self.high[1]) / 2.0)

    @property
    def width(self) -> float:
        return self.high[0] - self.low[0]

    @property
    def height(self) -> float:
        return self.high[1] - self.low[1]


def walk_paths(model: Model, offset: Point = (0.0, 0.0), prefix: Route = ()) -> Iterator[WalkedPath]:
    """Yield every path depth-first with its route and accumulated offset."""
    offset = add(offset, model.origin)
    for key, segment in model.paths.items():
        yield WalkedPath(prefix + (key,), segment, offset)
    for key, child in model.models.items():
        yield from walk_paths(child, offset, prefix + (key,))


def originate(model: Model, offset: Point = (0.0, 0.0)) -> Model:
    """Fold all origin offsets into absolute path coordinates, in place."""
    offset = add(offset, model.origin)
    model.origin = (0.0, 0.0)
    if offset != (0.0, 0.0):
        for segment in model.paths.values():
            segment.move(*offset)
    for child in model.models.values():
        originate(child, offset)
    return model


def move_relative(model: Model, delta: Point) -> Model:
    model.origin = add(model.origin, delta)
    return model


def extents(model: Model) -> Extents | None:
    """Axis-aligned bounds of all paths, or None for an empty model."""
    corners = []
    for walked in walk_paths(model):
        xmin, ymin, xmax, ymax = walked.segment.bounds()
        dx, dy = walked.offset
        corners.append((xmin + dx, ymin + dy))
        corners.append((xmax + dx, ymax + dy))
    if not corners:
        return None
    xmin, ymin, xmax, ymax = bbox(np.array(corners, dtype=np.float64))
    return Extents((xmin, ymin), (xmax, ymax))


def zero(model: Model) -> Model:
    """Move the model so its lower-left extent sits at the origin."""
    ext = extents(model)
    if ext is not None:
        move_relative(model, (-ext.low[0], -ext.low[1]))
    return model


def mirror(model: Model, mirror_x: bool, mirror_y: bool) -> Model:
    """New model with x and/or y negated."""
    sx = -1.0 if mirror_x else 1.0
    sy = -1.0 if mirror_y else 1.0
    return Model(
        paths={key: _mirror_segment(seg, mirror_x, mirror_y) for key, seg in model.paths.items()},
        models={key: mirror(child, mirror_x, mirror_y) for key, child in model.models.items()},
        origin=(model.origin[0] * sx, model.origin[1] * sy),
    )


def distort(model: Model, sx: float, sy: float, arc_max_angle: float = 5.0) -> Model:
    """New model scaled by sx horizontally and sy vertically about (0, 0).

    Arcs survive when the scale is uniform in magnitude; otherwise they become
    an elliptical polyline child model stored under the arc's key.
    """
    result = Model(origin=(model.origin[0] * sx, model.origin[1] * sy))
    for key, seg in model.paths.items():
        if isinstance(seg, Line):
            result.paths[key] = Line(
                (seg.origin[0] * sx, seg.origin[1] * sy),
                (seg.end[0] * sx, seg.end[1] * sy),
            )
        elif isinstance(seg, Arc):
            if math.isclose(abs(sx), abs(sy)):
                arc = _mirror_segment(seg, sx < 0, sy < 0)
                arc.center = (abs(sx) * arc.center[0], abs(sy) * arc.center[1])
                arc.radius *= abs(sx)
                result.paths[key] = arc
            else:
                points = [(x * sx, y * sy) for x, y in seg.sample(arc_max_angle)]
                child_key = key if key not in model.models else f"{key}_distorted"
                result.models[child_key] = polyline_model(points)
        else:
            raise TypeError(f"Unknown path segment: {type(seg).__name__}")
    for key, child in model.models.items():
        result.models[key] = distort(child, sx, sy, arc_max_angle)
    return result


def simplify(model: Model, tol: float = 1e-6) -> Model:
    """Drop degenerate lines and merge overlapping collinear lines, in place.

    Collinear lines that only touch are kept apart; their shared vertex may
    be where another part connects.
    """
    for key in [k for k, seg in model.paths.items() if isinstance(seg, Line) and seg.length < tol]:
        del model.paths[key]

    merged = True
    while merged:
        merged = False
        keys = [k for k, seg in model.paths.items() if isinstance(seg, Line)]
        for i, ka in enumerate(keys):
            for kb in keys[i + 1:]:
                union = _merge_collinear(model.paths[ka], model.paths[kb], tol)
                if union is not None:
                    model.paths[ka] = union
                    del model.paths[kb]
                    merged = True
                    break
            if merged:
                break

    for child in model.models.values():
        simplify(child, tol)
    return model


def polyline_model(points: list[Point], closed: bool = False) -> Model:
    """Model of consecutive Lines keyed "0".."n-1"."""
    result = Model()
    pairs = list(zip(points, points[1:]))
    if closed and len(points) > 2:
        pairs.append((points[-1], points[0]))
    for i, (a, b) in enumerate(pairs):
        result.paths[str(i)] = Line(a, b)
    return result


def _merge_collinear(a: Line, b: Line, tol: float) -> Line | None:
    dx = a.end[0] - a.origin[0]
    dy = a.end[1] - a.origin[1]
    length = math.hypot(dx, dy)
    if length < tol:
        return None
    ux, uy = dx / length, dy / length
    params = []
    for px, py in b.endpoints:
        rx, ry = px - a.origin[0], py - a.origin[1]
        if abs(rx * uy - ry * ux) > tol:
            return None
        params.append(rx * ux + ry * uy)
    lo, hi = min(params), max(params)
    overlap = min(length, hi) - max(0.0, lo)
    if overlap <= tol:
        return None
    start, stop = min(0.0, lo), max(length, hi)
    return Line(
        (a.origin[0] + ux * start, a.origin[1] + uy * start),
        (a.origin[0] + ux * stop, a.origin[1] + uy * stop),
    )


def _mirror_segment(seg: PathSegment, mirror_x: bool, mirror_y: bool) -> PathSegment:
    sx = -1.0 if mirror_x else 1.0
    sy = -1.0 if mirror_y else 1.0
    if isinstance(seg, Line):
        return Line((seg.origin[0] * sx, seg.origin[1] * sy), (seg.end[0] * sx, seg.end[1] * sy))
    if isinstance(seg, Arc):
        center = (seg.center[0] * sx, seg.center[1] * sy)
        if seg.is_circle:
            return Arc(center, seg.radius, seg.start_angle, seg.end_angle)
        start, end = seg.start_angle, seg.end_angle
        if mirror_x and mirror_y:
            return Arc(center, seg.radius, start + 180.0, end + 180.0)
        if mirror_x:
            return Arc(center, seg.radius, 180.0 - end, 180.0 - start)
        if mirror_y:
            return Arc(center, seg.radius, -end, -start)
        return Arc(center, seg.radius, start, end)
    raise TypeError(f"Unknown path segment: {type(seg).__name__}")


def _segment_to_dict(seg: PathSegment) -> dict:
    if isinstance(seg, Line):
        return {"type": "line", "origin": list(seg.origin), "end": list(seg.end)}
    if isinstance(seg, Arc):
        if seg.is_circle:
            return {"type": "circle", "origin": list(seg.center), "radius": seg.radius}
        return {
            "type": "arc",
            "origin": list(seg.center),
            "radius": seg.radius,
            "startAngle": seg.start_angle,
            "endAngle": seg.end_angle,
        }
    raise TypeError(f"Unknown path segment: {type(seg).__name__}")


def _segment_from_dict(raw: dict) -> PathSegment:
    kind = raw.get("type")
    if kind == "line":
        return Line(tuple(raw["origin"]), tuple(raw["end"]))
    if kind == "arc":
        return Arc(tuple(raw["origin"]), raw["radius"], raw["startAngle"], raw["endAngle"])
    if kind == "circle":
        return Arc.circle(tuple(raw["origin"]), raw["radius"])
    raise ValueError(f"Unknown path type: {kind!r}")
