"""Frame combination — scale, re-stitch, union and mirror a PartSet.

Stages:
  1. Connect -- find shared lines between shape/pad, shape/hinge, bridge/shape
  2. Scale -- bridge, shape (and lens) to the ordered size, re-stitch bridge and shape
  3. Attach -- hinge and pad follow the shape, drill holes follow their parts
  4. Combine -- clean up chains and union everything into one side
  5. Mirror -- stitch the side to its mirror image at x = 0
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum

from framestitch.diagnostics import Diagnostics
from framestitch.frame.parts import BRIDGE, HINGE, HINGE_HOLES, LENS, PAD, SHAPE, SHAPE_HOLES, PartSet
from framestitch.frame.transformer import (
    ScaleFactors,
    attach_pad,
    place_unmerged_hinge,
    scale_bridge,
    scale_shape,
    track_hinge_holes,
    track_shape_holes,
    translate_pad,
)
from framestitch.kernel.boolean import combine_subtraction, combine_union
from framestitch.kernel.chains import cleanup_via_chains
from framestitch.kernel.config import KernelConfig
from framestitch.kernel.connections import Connection, find_connections
from framestitch.kernel.model import Model, extents, mirror, move_relative, originate
from framestitch.kernel.reconnect import reconnect_shapes
from framestitch.models.sizes import SizeParameters
from framestitch.models.warnings import FrameWarning, NO_LINE_CONNECTS, PARTS_MISSING

logger = logging.getLogger(__name__)


class DebugStep(str, Enum):
    """Intermediate results combine_model can stop at."""

    SCALED_PARTS = "scaled_parts"
    CHAINED_PARTS = "chained_parts"
    BRIDGE_SHAPE = "bridge&Shape"
    BRIDGE_SHAPE_HINGE = "bridge&Shape&Hinge"
    FULL_SIDE = "fullside"
    FINAL = "final"


@dataclass
class CombineResult:
    """Combined frame outline plus everything worth telling the drafter."""

    model: Model = field(default_factory=Model)
    warnings: list[FrameWarning] = field(default_factory=list)


def combine_model(
    parts: PartSet,
    bridge_size: float,
    glas_width: float,
    glas_height: float,
    reference_size: SizeParameters,
    merge_hinge: bool = True,
    step: DebugStep | str | None = None,
    config: KernelConfig | None = None,
) -> CombineResult:
    """Combine the reference parts into a full frame of the requested size.

    ``parts`` is never modified, so one extracted PartSet can serve many
    sizes. With ``step`` the intermediate models of that stage are returned.
    """
    t0 = time.perf_counter()
    config = config or KernelConfig.from_settings()
    step = DebugStep(step) if step is not None else None
    diagnostics = Diagnostics()

    missing = [name for name in (SHAPE, PAD, BRIDGE) if name not in parts]
    if missing:
        logger.error("Cannot combine a frame without %s", ", ".join(missing))
        diagnostics.error(PARTS_MISSING)
        return CombineResult(Model(), diagnostics.warnings)

    shape = parts[SHAPE].clone()
    pad = parts[PAD].clone()
    bridge = parts[BRIDGE].clone()
    hinge = parts[HINGE].clone() if HINGE in parts else None
    lens = parts[LENS].clone() if LENS in parts else None
    original_hinge = extents(hinge) if hinge is not None else None

    # Stage 1: Connect
    shape_pad = find_connections(shape, pad, config)
    if not shape_pad:
        logger.error("No line of the shape connects to the pad")
        diagnostics.error(NO_LINE_CONNECTS, PART1="pad", PART2="shape")
    shape_hinge: list[Connection] = []
    if hinge is not None:
        shape_hinge = find_connections(shape, hinge, config)
        if not shape_hinge:
            logger.error("No lines connect or overlap between shape and hinge")
            diagnostics.error(NO_LINE_CONNECTS, PART1="shape", PART2="hinge")
    bridge_shape = find_connections(bridge, shape, config)
    if not bridge_shape:
        logger.error("No lines connect or overlap between bridge and shape")
        diagnostics.error(NO_LINE_CONNECTS, PART1="bridge", PART2="shape")

    # Stage 2: Scale
    shape_ext = extents(shape)
    target = SizeParameters(bridge_size=bridge_size, glas_width=glas_width, glas_height=glas_height)
    factors = ScaleFactors.compute(target, reference_size, extents(bridge).width)
    logger.debug("Scale factors: %s", factors)

    bridge = scale_bridge(bridge, factors, config)
    shape = scale_shape(shape, factors, shape_ext.low[0], config, inflation=config.shape_inflation)
    if lens is not None:
        lens = scale_shape(lens, factors, shape_ext.low[0], config)
    if bridge_shape:
        reconnect_shapes((bridge, shape), bridge_shape, 1, 0, config, diagnostics, ("bridge", "shape"))

    if step is DebugStep.SCALED_PARTS:
        return CombineResult(_bundle(bridge=bridge, shape=shape, pad=pad, hinge=hinge), diagnostics.warnings)

    # Stage 3: Attach
    if hinge is not None:
        if merge_hinge and shape_hinge:
            reconnect_shapes((shape, hinge), shape_hinge, 1, 0, config, diagnostics, ("shape", "hinge"))
        elif not merge_hinge:
            place_unmerged_hinge(hinge, shape, config)

    pad_connection = shape_pad[0] if shape_pad else None
    translate_pad(pad, shape, shape_ext, factors, pad_connection, config)
    originate(shape)
    if pad_connection is not None:
        attach_pad(shape, pad, pad_connection, config)

    if SHAPE_HOLES in parts:
        holes = track_shape_holes(parts[SHAPE_HOLES], shape_ext.low[0], factors)
        shape = combine_subtraction(shape, holes, config)
    if hinge is not None and HINGE_HOLES in parts:
        holes = track_hinge_holes(parts[HINGE_HOLES], original_hinge, extents(hinge))
        hinge = combine_subtraction(hinge, holes, config)

    # Stage 4: Combine
    pad = cleanup_via_chains(pad, config)
    bridge = cleanup_via_chains(bridge, config)
    shape = cleanup_via_chains(shape, config)

    if step is DebugStep.CHAINED_PARTS:
        return CombineResult(_bundle(bridge=bridge, shape=shape, pad=pad, hinge=hinge), diagnostics.warnings)

    bridge_and_shape = combine_union(bridge, shape, config)
    if step is DebugStep.BRIDGE_SHAPE:
        return CombineResult(
            _bundle(bridgeAndShape=bridge_and_shape, pad=pad, hinge=hinge), diagnostics.warnings
        )

    with_hinge = bridge_and_shape
    if hinge is not None and merge_hinge:
        with_hinge = combine_union(bridge_and_shape, hinge, config)
    if step is DebugStep.BRIDGE_SHAPE_HINGE:
        return CombineResult(_bundle(bridgeShapeAndHinge=with_hinge, pad=pad), diagnostics.warnings)

    full_side = cleanup_via_chains(combine_union(with_hinge, pad, config), config)
    if step is DebugStep.FULL_SIDE:
        return CombineResult(full_side, diagnostics.warnings)

    # Stage 5: Mirror
    full_frame = mirror_and_stitch(full_side, config)

    if hinge is not None and not merge_hinge:
        full_frame = Model(models={"fullFrame": full_frame, "hinge": hinge, "leftHinge": mirror(hinge, True, False)})
    if lens is not None:
        if "fullFrame" not in full_frame.models:
            full_frame = Model(models={"fullFrame": full_frame})
        full_frame.models["lens"] = lens
        full_frame.models["leftLens"] = mirror(lens, True, False)

    elapsed = (time.perf_counter() - t0) * 1000
    logger.info(
        "Combining frame %.1f-%.1f-%.1f took %.0fms (%d warnings)",
        bridge_size, glas_width, glas_height, elapsed, len(diagnostics),
    )
    return CombineResult(full_frame, diagnostics.warnings)


def mirror_and_stitch(full_side: Model, config: KernelConfig) -> Model:
    """Union one side with its mirror image about x = 0."""
    mirrored = mirror(full_side, True, False)
    seam = find_connections(full_side, mirrored, config)
    if seam:
        reconnect_shapes((full_side, mirrored), seam, 0, 1, config, names=("fullSide", "mirroredSide"))
    else:
        logger.warning("No seam found between the side and its mirror image")
    mirrored = cleanup_via_chains(mirrored, config)
    originate(move_relative(mirrored, (config.mirror_nudge, 0.0)))
    return combine_union(full_side, mirrored, config)


def _bundle(**models: Model | None) -> Model:
    return Model(models={key: model for key, model in models.items() if model is not None})
