"""Boolean combination of Models through shapely.

Closed chains become polygon rings (nested rings cancel by even-odd rule),
shapely does the region algebra, and the resulting rings come back as
closed Line chains. Arcs are flattened on the way in.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import shapely
from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry
from shapely.validation import make_valid

from framestitch.kernel.chains import find_chains
from framestitch.kernel.config import KernelConfig
from framestitch.kernel.geometry import distance
from framestitch.kernel.model import Model, polyline_model

logger = logging.getLogger(__name__)


def model_to_geometry(model: Model, config: KernelConfig | None = None) -> BaseGeometry:
    """Region enclosed by the model's closed chains."""
    config = config or KernelConfig()
    region: BaseGeometry = Polygon()
    for chain in find_chains(model, config.cleanup_chain_distance):
        if not chain.endless:
            logger.debug("Ignoring open chain with %d links", len(chain.links))
            continue
        pts = chain.points(config.arc_max_angle)
        if len(pts) < 4:
            continue
        poly = Polygon(pts)
        if not poly.is_valid:
            poly = make_valid(poly)
        if poly.is_empty:
            continue
        region = region.symmetric_difference(poly)
    return region


def geometry_to_model(geom: BaseGeometry, tolerance: float = 0.0) -> Model:
    """One closed polyline child per ring: exteriors and holes alike.

    Ring vertices closer than ``tolerance`` collapse into one, so the rings
    survive chain finding at that matching distance.
    """
    if tolerance > 0.0 and not geom.is_empty:
        geom = shapely.remove_repeated_points(geom, tolerance)
    result = Model()
    index = 0
    for poly in _polygons(geom):
        for ring in [poly.exterior, *poly.interiors]:
            coords = [(float(x), float(y)) for x, y in ring.coords[:-1]]
            # The closing vertex is kept as is, its predecessor may still sit on it
            while len(coords) > 3 and distance(coords[-1], coords[0]) <= tolerance:
                coords.pop()
            if len(coords) < 3:
                continue
            result.models[str(index)] = polyline_model(coords, closed=True)
            index += 1
    return result


def combine_union(model_a: Model, model_b: Model, config: KernelConfig | None = None) -> Model:
    config = config or KernelConfig()
    region = model_to_geometry(model_a, config).union(model_to_geometry(model_b, config))
    return geometry_to_model(region, config.cleanup_chain_distance)


def combine_subtraction(model_a: Model, model_b: Model, config: KernelConfig | None = None) -> Model:
    """model_a with the regions of model_b cut out."""
    config = config or KernelConfig()
    region = model_to_geometry(model_a, config).difference(model_to_geometry(model_b, config))
    return geometry_to_model(region, config.cleanup_chain_distance)


def _polygons(geom: BaseGeometry) -> Iterator[Polygon]:
    if geom is None or geom.is_empty:
        return
    if geom.geom_type == "Polygon":
        yield geom
    elif geom.geom_type in ("MultiPolygon", "GeometryCollection"):
        for g in geom.geoms:
            yield from _polygons(g)
