"""Tests for scaling and attaching frame parts."""

from __future__ import annotations

import pytest

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
from framestitch.kernel.config import KernelConfig
from framestitch.kernel.connections import Connection, PathRef
from framestitch.kernel.model import Extents, Model, extents, polyline_model
from framestitch.kernel.paths import Arc, Line
from framestitch.models.sizes import SizeParameters
from tests.conftest import REFERENCE, rect

CONFIG = KernelConfig()
TARGET = SizeParameters(bridge_size=20, glas_width=55, glas_height=44)


@pytest.fixture
def factors() -> ScaleFactors:
    return ScaleFactors.compute(TARGET, REFERENCE, 9.0)


class TestScaleFactors:
    def test_compute(self, factors):
        assert factors.bridge == pytest.approx(10.0 / 9.0)
        assert factors.vertical == pytest.approx(1.1)
        assert factors.horizontal == pytest.approx(1.1)
        assert factors.bridge_x_translation == pytest.approx(1.0)

    def test_identity(self):
        factors = ScaleFactors.compute(REFERENCE, REFERENCE, 9.0)
        assert (factors.bridge, factors.vertical, factors.horizontal) == (1.0, 1.0, 1.0)
        assert factors.bridge_x_translation == 0.0


class TestScaleParts:
    def test_bridge_absorbs_half_the_size_change(self, factors):
        bridge = scale_bridge(rect(0, -2, 9, 2), factors, CONFIG)
        ext = extents(bridge)
        assert ext.low == pytest.approx((0.0, -2.2))
        assert ext.high == pytest.approx((10.0, 2.2))

    def test_shape_scales_from_its_left_edge(self, factors):
        shape = scale_shape(rect(9, -20, 59, 20), factors, 9.0, CONFIG)
        ext = extents(shape)
        assert ext.low == pytest.approx((10.0, -22.0))
        assert ext.high == pytest.approx((65.0, 22.0))

    def test_inflation_is_centered(self, factors):
        shape = scale_shape(rect(9, -20, 59, 20), factors, 9.0, CONFIG, inflation=1.001)
        ext = extents(shape)
        assert ext.width == pytest.approx(55.0 * 1.001)
        assert ext.center[0] == pytest.approx(37.5)

    def test_input_untouched(self, factors):
        shape = rect(9, -20, 59, 20)
        scale_shape(shape, factors, 9.0, CONFIG)
        assert shape == rect(9, -20, 59, 20)


class TestTranslatePad:
    reference_shape = Extents((9.0, -20.0), (59.0, 20.0))

    def test_follows_shape_without_connection(self, factors):
        pad = rect(6, -12, 9, -6)
        translate_pad(pad, Model(), self.reference_shape, factors, None, CONFIG)
        ext = extents(pad)
        assert ext.low == pytest.approx((7.0, -12.6))
        assert ext.high == pytest.approx((10.0, -6.6))

    def test_connection_aligns_midpoints(self, factors):
        shape = Model(paths={"edge": Line((10, -6.6), (10, -13.2))})
        pad = rect(6, -12, 9, -6)
        connection = Connection(PathRef(("edge",), shape.paths["edge"]), PathRef(("1",), pad.paths["1"]))
        translate_pad(pad, shape, self.reference_shape, factors, connection, CONFIG)
        ext = extents(pad)
        assert ext.center[1] == pytest.approx(-9.9)
        assert ext.low[0] == pytest.approx(7.0)

    def test_never_crosses_center(self):
        factors = ScaleFactors(bridge=0.5, vertical=1.0, horizontal=1.0, bridge_x_translation=-10.0)
        pad = rect(6, -12, 9, -6)
        translate_pad(pad, Model(), self.reference_shape, factors, None, CONFIG)
        assert extents(pad).low[0] == pytest.approx(CONFIG.min_pad_x)


class TestAttachPad:
    def test_snaps_connecting_line_and_neighbours(self):
        shape = polyline_model(
            [(10, -22), (65, -22), (65, 22), (10, 22), (10, -6.6), (10, -13.2)], closed=True
        )
        pad = rect(7, -12.9, 10, -6.9)
        connection = Connection(PathRef(("4",), shape.paths["4"]), PathRef(("1",), pad.paths["1"]))

        attach_pad(shape, pad, connection, CONFIG)

        assert pad.paths["1"].origin == (10, -13.2)
        assert pad.paths["1"].end == (10, -6.6)
        assert pad.paths["0"].end == (10, -13.2)
        assert pad.paths["2"].origin == (10, -6.6)
        assert pad.paths["2"].end == (7, -6.9)


class TestHinge:
    def test_unmerged_hinge_is_parked_beside_shape(self):
        hinge = rect(59, 4, 64, 10)
        place_unmerged_hinge(hinge, rect(9, -20, 59, 20), CONFIG)
        ext = extents(hinge)
        assert ext.low[0] == pytest.approx(59.0 + CONFIG.hinge_gap)
        assert ext.low[1] == pytest.approx(4.0)

    def test_hinge_holes_follow_hinge(self):
        holes = Model(paths={"0": Arc.circle((61.0, 7.0), 0.5)})
        moved = track_hinge_holes(holes, Extents((59.0, 4.0), (64.0, 10.0)), Extents((61.0, 5.0), (66.0, 11.0)))
        assert moved.paths["0"].center == pytest.approx((63.0, 8.0))
        assert holes.paths["0"].center == (61.0, 7.0)


class TestShapeHoles:
    def test_holes_move_with_shape_but_keep_size(self, factors):
        holes = Model(paths={"0": Arc.circle((30.0, 0.0), 2.0), "1": Arc.circle((40.0, 10.0), 1.0)})
        moved = track_shape_holes(holes, 9.0, factors)
        first = extents(moved.models["0"])
        second = extents(moved.models["1"])
        assert first.center == pytest.approx((33.1, 0.0))
        assert first.width == pytest.approx(4.0)
        assert second.center == pytest.approx((44.1, 11.0))
        assert second.width == pytest.approx(2.0)
