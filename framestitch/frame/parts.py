"""Part vocabulary shared by extraction and combination."""

from __future__ import annotations

from framestitch.kernel.model import Model

PartSet = dict[str, Model]

BRIDGE = "bridge"
SHAPE = "shape"
HINGE = "hinge"
PAD = "pad"
LENS = "lens"
SHAPE_HOLES = "shape_holes"
HINGE_HOLES = "hinge_holes"

# Names drafters use in color maps for each canonical part
PART_ALIASES: dict[str, tuple[str, ...]] = {
    BRIDGE: ("bridge", "bruecke", "brücke"),
    SHAPE: ("shape", "front", "frame", "shape_left", "shape_right"),
    HINGE: ("hinge", "hinge_left", "hinge_right", "backe"),
    PAD: ("pad", "pad_left", "pad_right"),
    LENS: ("lens",),
}

# Parts whose circles are drill holes
HOLE_PARTS = {SHAPE: SHAPE_HOLES, HINGE: HINGE_HOLES}


def canonical_part_name(name: str) -> str | None:
    key = name.strip().lower()
    for canonical, aliases in PART_ALIASES.items():
        if key in aliases:
            return canonical
    return None
