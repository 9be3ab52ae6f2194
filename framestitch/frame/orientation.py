"""Orientation normalization — bring every drawing into one frame of reference.

After normalization the parts sit at x >= 0 with the bridge left-most,
the shape to its right, and the bridge vertically centered on y = 0.
"""

from __future__ import annotations

import logging

from framestitch.frame.parts import BRIDGE, SHAPE, PartSet
from framestitch.kernel.model import Model, distort, extents, move_relative, originate, zero

logger = logging.getLogger(__name__)


def is_left_side(parts: PartSet) -> bool:
    """True when the drawing shows the left half (shape left of the bridge)."""
    bridge = extents(parts[BRIDGE])
    shape = extents(parts[SHAPE])
    return shape.center[0] < bridge.center[0]


def normalize_orientation(parts: PartSet) -> PartSet:
    """Zero, un-mirror and vertically center a PartSet with bridge and shape."""
    combined = Model(models=dict(parts))
    originate(zero(combined))

    if is_left_side(combined.models):
        logger.info("Drawing shows the left side, mirroring parts")
        for key, model in combined.models.items():
            combined.models[key] = distort(model, -1.0, 1.0)
        originate(zero(combined))

    bridge = extents(combined.models[BRIDGE])
    move_relative(combined, (0.0, -bridge.center[1]))
    originate(combined)
    return combined.models
