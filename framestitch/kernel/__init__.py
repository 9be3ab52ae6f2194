"""2D geometry kernel — segments, model trees, chains, connections and booleans."""

from framestitch.kernel.boolean import combine_subtraction, combine_union
from framestitch.kernel.chains import Chain, ChainLink, chain_to_model, cleanup_via_chains, find_chains
from framestitch.kernel.config import KernelConfig
from framestitch.kernel.connections import Connection, PathRef, find_connections
from framestitch.kernel.model import (
    Extents,
    Model,
    distort,
    extents,
    mirror,
    move_relative,
    originate,
    simplify,
    walk_paths,
    zero,
)
from framestitch.kernel.paths import Arc, Line, PathSegment
from framestitch.kernel.reconnect import find_previous_and_next, reconnect_shapes

__all__ = [
    "Arc",
    "Chain",
    "ChainLink",
    "Connection",
    "Extents",
    "KernelConfig",
    "Line",
    "Model",
    "PathRef",
    "PathSegment",
    "chain_to_model",
    "cleanup_via_chains",
    "combine_subtraction",
    "combine_union",
    "distort",
    "extents",
    "find_chains",
    "find_connections",
    "find_previous_and_next",
    "mirror",
    "move_relative",
    "originate",
    "reconnect_shapes",
    "simplify",
    "walk_paths",
    "zero",
]
