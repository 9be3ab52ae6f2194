"""Kernel configuration — geometric tolerances and frame constants."""

from __future__ import annotations

from dataclasses import dataclass

from framestitch.config import Settings, settings as app_settings


@dataclass
class KernelConfig:
    """Tolerances used by chain finding, connection finding and combination."""

    # Coincidence tests
    tol: float = 0.01
    direction_tol: float = 0.0001  # normalized cross product for "same direction"

    # Chain finding
    part_chain_distance: float = 0.05  # endpoint merge distance during extraction
    cleanup_chain_distance: float = 0.01
    min_chain_length: float = 1.0
    min_chain_links: int = 3

    # Curve flattening
    arc_max_angle: float = 5.0  # degrees per line when an arc becomes a polyline
    bezier_samples: int = 12

    # Frame assembly
    min_pad_x: float = 0.2  # pad may never move closer to the mirror axis
    shape_inflation: float = 1.00003
    mirror_nudge: float = 0.0001
    hinge_gap: float = 2.0  # gap between shape and an unmerged hinge

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> KernelConfig:
        source = source or app_settings
        return cls(tol=source.framestitch_tolerance)
