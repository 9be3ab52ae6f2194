"""Path data import — SVG path strings to kernel segments via svgpathtools."""

from __future__ import annotations

import logging

import numpy as np
from svgpathtools import Arc as SvgArc
from svgpathtools import CubicBezier, Line as SvgLine, QuadraticBezier, parse_path

from framestitch.kernel.config import KernelConfig
from framestitch.kernel.model import Model
from framestitch.kernel.paths import Arc, Line

logger = logging.getLogger(__name__)


def _pt(c: complex) -> tuple[float, float]:
    return (float(c.real), float(c.imag))


def import_path_data(d: str, config: KernelConfig | None = None) -> Model:
    """Convert one path string into a flat Model in raw drawing coordinates.

    Circular arcs stay arcs; elliptical arcs and Bezier curves become lines.
    Raises ValueError if the path data cannot be parsed.
    """
    config = config or KernelConfig()
    try:
        path = parse_path(d)
    except Exception as e:
        raise ValueError(f"Unparsable path data: {e}") from e

    model = Model()
    for seg in path:
        if isinstance(seg, SvgLine):
            _add(model, Line(_pt(seg.start), _pt(seg.end)))
        elif isinstance(seg, SvgArc) and _is_circular(seg):
            _add(model, _circular_arc(seg))
        elif isinstance(seg, (SvgArc, CubicBezier, QuadraticBezier)):
            for a, b in _flatten(seg, config.bezier_samples):
                _add(model, Line(a, b))
        else:
            logger.warning("Unsupported path segment %s", type(seg).__name__)
    return model


def _add(model: Model, segment: Line | Arc) -> None:
    model.paths[str(len(model.paths))] = segment


def _is_circular(seg: SvgArc) -> bool:
    rx, ry = abs(seg.radius.real), abs(seg.radius.imag)
    return abs(rx - ry) <= 1e-9 * max(rx, ry, 1.0)


def _circular_arc(seg: SvgArc) -> Arc:
    radius = abs(seg.radius.real)
    start = seg.theta + seg.rotation
    if seg.delta >= 0:
        return Arc(_pt(seg.center), radius, start, start + seg.delta)
    return Arc(_pt(seg.center), radius, start + seg.delta, start)


def _flatten(seg, samples: int) -> list[tuple[tuple[float, float], tuple[float, float]]]:
    ts = np.linspace(0.0, 1.0, max(samples, 1) + 1)
    pts = [_pt(seg.start)] + [_pt(seg.point(t)) for t in ts[1:-1]] + [_pt(seg.end)]
    return list(zip(pts, pts[1:]))
