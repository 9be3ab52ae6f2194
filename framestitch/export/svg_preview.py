"""SVG previews of models and debug steps.

Each top-level child gets its own palette color so intermediate combine
results (bridge, shape, pad, hinge) can be told apart. Only string
formatting, no extra dependencies.
"""

from __future__ import annotations

from framestitch.kernel.chains import find_chains
from framestitch.kernel.model import Model, extents

# 12 distinct colors for coloring individual parts
_PALETTE = [
    "#e6194b", "#3cb44b", "#4363d8", "#f58231",
    "#911eb4", "#42d4f4", "#f032e6", "#bfef45",
    "#fabed4", "#469990", "#dcbeff", "#9A6324",
]

_MARGIN = 2.0


def _chains_to_svg_paths(model: Model, stroke: str, arc_max_angle: float = 5.0) -> str:
    """Convert a model's chains to SVG <path> elements, y axis flipped."""
    parts: list[str] = []
    for chain in find_chains(model, 0.01):
        pts = chain.points(arc_max_angle)
        if len(pts) < 2:
            continue
        d = f"M {pts[0][0]:.3f},{-pts[0][1]:.3f}"
        for x, y in pts[1:]:
            d += f" L {x:.3f},{-y:.3f}"
        if chain.endless:
            d += " Z"
        parts.append(f'<path d="{d}" fill="none" stroke="{stroke}" stroke-width="0.2"/>')
    return "\n".join(parts)


def _svg_wrap(content: str, x: float, y: float, w: float, h: float) -> str:
    """Wrap SVG content in a standalone SVG document."""
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="{x:.3f} {y:.3f} {w:.3f} {h:.3f}"'
        f' width="{w:.1f}mm" height="{h:.1f}mm">'
        f'\n{content}\n</svg>'
    )


def render_model_svg(model: Model) -> str:
    """Standalone SVG of a model, one color per top-level child."""
    ext = extents(model)
    if ext is None:
        return _svg_wrap("", 0.0, 0.0, 1.0, 1.0)

    layers = list(model.models.items()) if model.models and not model.paths else [("model", model)]
    content = []
    for i, (key, child) in enumerate(layers):
        paths = _chains_to_svg_paths(child, _PALETTE[i % len(_PALETTE)])
        if paths:
            content.append(f'<g id="{key}">\n{paths}\n</g>')

    # Flipped y: the model's top edge becomes the viewBox's upper edge
    return _svg_wrap(
        "\n".join(content),
        ext.low[0] - _MARGIN,
        -ext.high[1] - _MARGIN,
        ext.width + 2 * _MARGIN,
        ext.height + 2 * _MARGIN,
    )
