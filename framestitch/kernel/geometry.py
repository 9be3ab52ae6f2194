"""Leaf-node point helpers. No kernel imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

Point = tuple[float, float]


def add(a: Point, b: Point) -> Point:
    return (a[0] + b[0], a[1] + b[1])


def subtract(a: Point, b: Point) -> Point:
    return (a[0] - b[0], a[1] - b[1])


def scale(p: Point, sx: float, sy: float | None = None) -> Point:
    return (p[0] * sx, p[1] * (sx if sy is None else sy))


def distance(a: Point, b: Point) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def midpoint(a: Point, b: Point) -> Point:
    return ((a[0] + b[0]) / 2.0, (a[1] + b[1]) / 2.0)


def is_point_equal(a: Point, b: Point, tol: float) -> bool:
    """True when two points lie within tol of each other."""
    return distance(a, b) <= tol


def polar(center: Point, radius: float, angle_deg: float) -> Point:
    """Point on a circle, angle in degrees measured counter-clockwise from +x."""
    rad = math.radians(angle_deg)
    return (center[0] + radius * math.cos(rad), center[1] + radius * math.sin(rad))


def angle_of(center: Point, p: Point) -> float:
    """Angle of p around center in degrees, in [0, 360)."""
    return math.degrees(math.atan2(p[1] - center[1], p[0] - center[0])) % 360.0


def same_direction(a: Point, b: Point, tol: float) -> bool:
    """True when vectors a and b point the same way.

    Uses the normalized cross product so the test is symmetric and does not
    depend on which axis dominates.
    """
    la = math.hypot(*a)
    lb = math.hypot(*b)
    if la == 0.0 or lb == 0.0:
        return False
    cross = (a[0] * b[1] - a[1] * b[0]) / (la * lb)
    dot = a[0] * b[0] + a[1] * b[1]
    return abs(cross) < tol and dot > 0


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )
