"""DXF export for laser-cut frame outlines.

Uses ezdxf to write one LWPOLYLINE per chain. Each top-level child of a
combined result (``fullFrame``, ``hinge``, ``lens``, ...) gets its own layer.

Units: millimeters. Format: R2010.
"""

from __future__ import annotations

import io
import logging
import os
from dataclasses import dataclass

import ezdxf

from framestitch.kernel.chains import find_chains
from framestitch.kernel.config import KernelConfig
from framestitch.kernel.model import Model

logger = logging.getLogger(__name__)

# Children of a combined result that carry their own layer
_LAYER_KEYS = ("fullFrame", "hinge", "leftHinge", "lens", "leftLens")


@dataclass
class DXFExportConfig:
    """Configuration for DXF export."""

    cut_layer: str = "CUT"
    cut_color: int = 7  # ACI white/black
    lens_color: int = 5  # ACI blue
    arc_max_angle: float = 5.0
    point_matching_distance: float = 0.01


def model_to_dxf(model: Model, config: DXFExportConfig | None = None) -> str:
    """Render a model as DXF text."""
    doc = _build_document(model, config or DXFExportConfig())
    stream = io.StringIO()
    doc.write(stream)
    return stream.getvalue()


def save_dxf(model: Model, filepath: str, config: DXFExportConfig | None = None) -> str:
    """Write a model to a DXF file and return its path."""
    doc = _build_document(model, config or DXFExportConfig())
    os.makedirs(os.path.dirname(filepath) or ".", exist_ok=True)
    doc.saveas(filepath)
    logger.info("Exported DXF: %s", filepath)
    return filepath


def dxf_filename(name: str, glas_width: float, bridge_size: float, glas_height: float) -> str:
    """File name shipped to the workshop: ``<name>-<width>-<bridge>-<height>.dxf``."""
    return f"{name}-{_fmt(glas_width)}-{_fmt(bridge_size)}-{_fmt(glas_height)}.dxf"


def _build_document(model: Model, config: DXFExportConfig):
    doc = ezdxf.new("R2010")
    doc.units = ezdxf.units.MM
    msp = doc.modelspace()

    layered = [(key, model.models[key]) for key in _LAYER_KEYS if key in model.models]
    if not layered or model.paths:
        layered = [(config.cut_layer, model)]

    n_polylines = 0
    for layer, part in layered:
        color = config.lens_color if layer in ("lens", "leftLens") else config.cut_color
        if layer not in doc.layers:
            doc.layers.add(layer, color=color)
        for chain in find_chains(part, config.point_matching_distance):
            points = chain.points(config.arc_max_angle)
            if chain.endless and len(points) > 2:
                points = points[:-1]
            if len(points) < 2:
                continue
            msp.add_lwpolyline(points, close=chain.endless, dxfattribs={"layer": layer})
            n_polylines += 1
    logger.debug("Built DXF with %d polylines on %d layers", n_polylines, len(layered))
    return doc


def _fmt(value: float) -> str:
    return f"{value:g}"
