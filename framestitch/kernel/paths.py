"""Path segments — the closed set of primitives a Model can hold.

A segment is either a straight ``Line`` or a counter-clockwise ``Arc``.
Full circles are arcs spanning 360 degrees. Segments are mutable so the
reconnector can snap endpoints in place.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from framestitch.kernel.geometry import (
    Point,
    angle_of,
    distance,
    midpoint,
    polar,
)


@dataclass
class Line:
    origin: Point
    end: Point

    @property
    def endpoints(self) -> tuple[Point, Point]:
        return (self.origin, self.end)

    @property
    def length(self) -> float:
        return distance(self.origin, self.end)

    def set_endpoint(self, at_origin: bool, point: Point) -> None:
        if at_origin:
            self.origin = point
        else:
            self.end = point

    def move(self, dx: float, dy: float) -> None:
        self.origin = (self.origin[0] + dx, self.origin[1] + dy)
        self.end = (self.end[0] + dx, self.end[1] + dy)

    def sample(self, max_angle: float = 5.0) -> list[Point]:
        return [self.origin, self.end]

    def bounds(self) -> tuple[float, float, float, float]:
        xs = (self.origin[0], self.end[0])
        ys = (self.origin[1], self.end[1])
        return (min(xs), min(ys), max(xs), max(ys))


@dataclass
class Arc:
    """Circular arc from start_angle to end_angle, counter-clockwise, in degrees."""

    center: Point
    radius: float
    start_angle: float
    end_angle: float

    @classmethod
    def circle(cls, center: Point, radius: float) -> Arc:
        return cls(center, radius, 0.0, 360.0)

    @classmethod
    def from_endpoints(cls, start: Point, end: Point, radius: float, large_arc: bool = False) -> Arc:
        """Counter-clockwise arc from start to end with the given radius.

        A radius smaller than half the chord is widened to a half circle.
        """
        chord = distance(start, end)
        if chord == 0.0:
            raise ValueError("arc endpoints coincide")
        radius = max(radius, chord / 2.0)
        mid = midpoint(start, end)
        h = math.sqrt(max(radius * radius - (chord / 2.0) ** 2, 0.0))
        # Left normal of the chord direction; the center of a small CCW arc lies on it
        nx = -(end[1] - start[1]) / chord
        ny = (end[0] - start[0]) / chord
        side = -1.0 if large_arc else 1.0
        center = (mid[0] + side * h * nx, mid[1] + side * h * ny)
        start_angle = angle_of(center, start)
        end_angle = angle_of(center, end)
        if end_angle <= start_angle:
            end_angle += 360.0
        return cls(center, radius, start_angle, end_angle)

    @property
    def sweep(self) -> float:
        sweep = self.end_angle - self.start_angle
        if sweep <= 0:
            sweep += 360.0
        return min(sweep, 360.0)

    @property
    def is_circle(self) -> bool:
        return self.sweep >= 360.0 - 1e-9

    @property
    def start(self) -> Point:
        return polar(self.center, self.radius, self.start_angle)

    @property
    def end(self) -> Point:
        return polar(self.center, self.radius, self.end_angle)

    @property
    def endpoints(self) -> tuple[Point, Point]:
        return (self.start, self.end)

    @property
    def length(self) -> float:
        return math.radians(self.sweep) * self.radius

    def move(self, dx: float, dy: float) -> None:
        self.center = (self.center[0] + dx, self.center[1] + dy)

    def sample(self, max_angle: float = 5.0) -> list[Point]:
        """Polyline approximation, first and last point exactly on the arc ends."""
        steps = max(1, int(math.ceil(self.sweep / max_angle)))
        if self.is_circle:
            steps = max(steps, 8)
        return [
            polar(self.center, self.radius, self.start_angle + self.sweep * i / steps)
            for i in range(steps + 1)
        ]

    def bounds(self) -> tuple[float, float, float, float]:
        points = list(self.endpoints)
        start = self.start_angle % 360.0
        # Axis extremes at 0/90/180/270 degrees when they fall inside the sweep
        for quadrant in range(0, 720, 90):
            if start <= quadrant <= start + self.sweep:
                points.append(polar(self.center, self.radius, quadrant))
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        return (min(xs), min(ys), max(xs), max(ys))


PathSegment = Line | Arc