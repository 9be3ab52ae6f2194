"""Shared test fixtures."""

from __future__ import annotations

import pytest

from framestitch.kernel.model import Model, polyline_model
from framestitch.models.sizes import SizeParameters


# Right half of a frame as drafted in CAD and converted to SVG (y axis down).
# After extraction: bridge x 0..9 / y -2..2, shape x 9..59 / y -20..20,
# pad x 6..9 / y -12..-6, hinge x 59..64 / y 4..10, one drill hole at (30, 0).

COLORS = {
    "bridge": "#ff0000",
    "shape": "#00ff00",
    "pad": "#0000ff",
    "hinge": "#ff00ff",
}

BRIDGE_D = "M 10 48 L 19 48 L 19 52 L 10 52 Z"
SHAPE_D = "M 19 30 L 69 30 L 69 40 L 69 46 L 69 70 L 19 70 L 19 62 L 19 56 L 19 52 L 19 48 Z"
PAD_D = "M 16 56 L 19 56 L 19 62 L 16 62 Z"
HINGE_D = "M 69 40 L 74 40 L 74 46 L 69 46 Z"

FRAME_SVG = f'''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <g>
    <path style="stroke:#ff0000;fill:none" d="{BRIDGE_D}"/>
    <path style="stroke:#00ff00;fill:none" d="{SHAPE_D}"/>
    <path style="stroke:#0000ff;fill:none" d="{PAD_D}"/>
  </g>
</svg>'''

FRAME_WITH_HINGE_SVG = f'''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <g>
    <path style="stroke:#ff0000;fill:none" d="{BRIDGE_D}"/>
    <path style="stroke:#00ff00;fill:none" d="{SHAPE_D}"/>
    <path style="stroke:#0000ff;fill:none" d="{PAD_D}"/>
    <path style="stroke:#ff00ff;fill:none" d="{HINGE_D}"/>
    <circle style="stroke:#00ff00;fill:none" cx="40" cy="50" r="2"/>
    <circle style="stroke:#0000ff;fill:none" cx="17" cy="59" r="0.5"/>
  </g>
</svg>'''

# Browser preview layout: one sub-group per color
FRAME_GROUPED_SVG = f'''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <g>
    <g stroke="rgb(255,0,0)"><path d="{BRIDGE_D}"/></g>
    <g stroke="rgb(0,255,0)"><path d="{SHAPE_D}"/></g>
    <g stroke="rgb(0,0,255)"><path d="{PAD_D}"/></g>
  </g>
</svg>'''

# The same half drafted as the left side (mirrored about x = 50)
LEFT_SIDE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <g>
    <path style="stroke:#ff0000;fill:none" d="M 90 48 L 81 48 L 81 52 L 90 52 Z"/>
    <path style="stroke:#00ff00;fill:none" d="M 81 30 L 31 30 L 31 40 L 31 46 L 31 70 L 81 70 L 81 62 L 81 56 L 81 52 L 81 48 Z"/>
    <path style="stroke:#0000ff;fill:none" d="M 84 56 L 81 56 L 81 62 L 84 62 Z"/>
  </g>
</svg>'''

# Pad drawn well away from the shape
DETACHED_PAD_SVG = f'''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <g>
    <path style="stroke:#ff0000;fill:none" d="{BRIDGE_D}"/>
    <path style="stroke:#00ff00;fill:none" d="{SHAPE_D}"/>
    <path style="stroke:#0000ff;fill:none" d="M 12 60 L 15 60 L 15 66 L 12 66 Z"/>
  </g>
</svg>'''

REFERENCE = SizeParameters(bridge_size=18, glas_width=50, glas_height=40)


@pytest.fixture
def frame_svg() -> str:
    return FRAME_SVG


@pytest.fixture
def frame_with_hinge_svg() -> str:
    return FRAME_WITH_HINGE_SVG


@pytest.fixture
def reference() -> SizeParameters:
    return REFERENCE


@pytest.fixture
def unit_square() -> Model:
    return square(0.0, 0.0, 1.0)


def square(x: float, y: float, size: float) -> Model:
    """Closed counter-clockwise square with its lower-left corner at (x, y)."""
    return polyline_model(
        [(x, y), (x + size, y), (x + size, y + size), (x, y + size)],
        closed=True,
    )


def rect(x0: float, y0: float, x1: float, y1: float) -> Model:
    return polyline_model([(x0, y0), (x1, y0), (x1, y1), (x0, y1)], closed=True)
