"""End-to-end tests: extracted reference parts combined at ordered sizes."""

from __future__ import annotations

import math

import pytest

from framestitch.frame.combiner import DebugStep, combine_model
from framestitch.frame.extractor import make_model_parts
from framestitch.kernel.boolean import model_to_geometry
from framestitch.kernel.chains import find_chains
from framestitch.kernel.config import KernelConfig
from framestitch.kernel.model import extents
from framestitch.models.warnings import NO_LINE_CONNECTS, PARTS_MISSING
from tests.conftest import COLORS, DETACHED_PAD_SVG, FRAME_SVG, LEFT_SIDE_SVG, REFERENCE

LENS_SVG = FRAME_SVG.replace(
    "</g>", '  <path style="stroke:#ffff00;fill:none" d="M 24 35 L 64 35 L 64 65 L 24 65 Z"/>\n  </g>'
)


def area(model) -> float:
    return model_to_geometry(model).area


def combine(parts, bridge=18, width=50, height=40, **kwargs):
    return combine_model(parts, bridge, width, height, REFERENCE, **kwargs)


@pytest.fixture
def parts(frame_svg):
    return make_model_parts(COLORS, frame_svg)


@pytest.fixture
def hinge_parts(frame_with_hinge_svg):
    return make_model_parts(COLORS, frame_with_hinge_svg)


class TestCombineModel:
    def test_reference_size_reproduces_drawing(self, parts):
        result = combine(parts)
        ext = extents(result.model)

        assert result.warnings == []
        assert ext.low == pytest.approx((-59.0, -20.0), abs=0.01)
        assert ext.high == pytest.approx((59.0, 20.0), abs=0.01)
        assert area(result.model) == pytest.approx(2 * (36 + 2000 + 18), rel=1e-3)

    def test_result_is_one_outline(self, parts):
        result = combine(parts)
        assert len(result.model.models) == 1

    @pytest.mark.parametrize("size", [(18, 50, 40), (20, 55, 44), (16, 50, 40), (18, 50, 40.0001)])
    def test_outline_is_one_closed_chain(self, parts, size):
        bridge, width, height = size
        result = combine(parts, bridge=bridge, width=width, height=height)
        chains = find_chains(result.model, KernelConfig().cleanup_chain_distance)
        assert [c.endless for c in chains] == [True]
        assert area(result.model) > 0.0

    def test_scaled_size(self, parts):
        result = combine(parts, bridge=20, width=55, height=44)
        ext = extents(result.model)

        assert result.warnings == []
        assert ext.low == pytest.approx((-65.0, -22.0), abs=0.01)
        assert ext.high == pytest.approx((65.0, 22.0), abs=0.01)

    def test_smaller_bridge(self, parts):
        result = combine(parts, bridge=16)
        ext = extents(result.model)
        assert ext.high[0] == pytest.approx(58.0, abs=0.01)
        assert ext.height == pytest.approx(40.0, abs=0.01)

    def test_is_symmetric(self, parts):
        ext = extents(combine(parts, bridge=20, width=52, height=38).model)
        assert ext.low[0] == pytest.approx(-ext.high[0], abs=0.01)

    def test_parts_are_reusable(self, parts):
        before = {key: model.clone() for key, model in parts.items()}
        first = combine(parts, bridge=20, width=55, height=44)
        second = combine(parts, bridge=20, width=55, height=44)
        assert parts == before
        assert area(first.model) == pytest.approx(area(second.model))

    def test_missing_pad(self, frame_svg):
        colors = {key: value for key, value in COLORS.items() if key != "pad"}
        result = combine(make_model_parts(colors, frame_svg))

        assert result.model.is_empty()
        assert [w.term for w in result.warnings] == [PARTS_MISSING]
        assert result.warnings[0].severity == "error"

    def test_detached_pad_still_produces_frame(self):
        result = combine(make_model_parts(COLORS, DETACHED_PAD_SVG))

        assert not result.model.is_empty()
        assert len(result.warnings) == 1
        warning = result.warnings[0]
        assert warning.term == NO_LINE_CONNECTS
        assert warning.severity == "error"
        assert warning.data == {"PART1": "pad", "PART2": "shape"}
        assert len(result.model.models) == 3

    def test_left_side_drawing_matches_right_side(self, parts):
        right = combine(parts, bridge=20, width=55, height=44).model
        left = combine(make_model_parts(COLORS, LEFT_SIDE_SVG), bridge=20, width=55, height=44).model
        assert extents(left).low == pytest.approx(extents(right).low, abs=1e-6)
        assert extents(left).high == pytest.approx(extents(right).high, abs=1e-6)
        assert area(left) == pytest.approx(area(right), rel=1e-6)


class TestHinge:
    def test_merged_hinge_and_holes(self, hinge_parts):
        result = combine(hinge_parts)
        chains = find_chains(result.model, KernelConfig().cleanup_chain_distance)
        assert len(chains) == 3  # outline and one drill hole per side
        assert all(c.endless for c in chains)
        ext = extents(result.model)

        assert result.warnings == []
        assert ext.low[0] == pytest.approx(-64.0, abs=0.01)
        assert ext.high[0] == pytest.approx(64.0, abs=0.01)
        hinges = 2 * 30
        holes = 2 * math.pi * 2.0 ** 2
        assert area(result.model) == pytest.approx(2 * (36 + 2000 + 18) + hinges - holes, rel=1e-3)

    def test_unmerged_hinge_is_separate(self, hinge_parts):
        result = combine(hinge_parts, merge_hinge=False)
        models = result.model.models

        assert sorted(models) == ["fullFrame", "hinge", "leftHinge"]
        frame = extents(models["fullFrame"])
        hinge = extents(models["hinge"])
        left_hinge = extents(models["leftHinge"])
        assert frame.high[0] == pytest.approx(59.0, abs=0.01)
        assert hinge.low[0] > frame.high[0]
        assert left_hinge.high[0] == pytest.approx(-hinge.low[0])


class TestLens:
    def test_lens_follows_shape(self):
        colors = dict(COLORS, lens="#ffff00")
        result = combine(make_model_parts(colors, LENS_SVG), width=55)
        models = result.model.models

        assert sorted(models) == ["fullFrame", "leftLens", "lens"]
        lens = extents(models["lens"])
        assert lens.low[0] == pytest.approx(9.0 + 5 * 1.1, abs=0.01)
        assert lens.high[0] == pytest.approx(9.0 + 45 * 1.1, abs=0.01)
        assert extents(models["leftLens"]).low[0] == pytest.approx(-lens.high[0])


class TestDebugSteps:
    def test_scaled_parts(self, parts):
        result = combine(parts, step=DebugStep.SCALED_PARTS)
        assert sorted(result.model.models) == ["bridge", "pad", "shape"]

    def test_chained_parts(self, hinge_parts):
        result = combine(hinge_parts, step="chained_parts")
        assert sorted(result.model.models) == ["bridge", "hinge", "pad", "shape"]
        shape = result.model.models["shape"]
        assert all(key.startswith("chain_") for key in shape.models)
        assert len(shape.models) == 2  # outline and drill hole

    def test_bridge_and_shape(self, parts):
        result = combine(parts, step="bridge&Shape")
        assert sorted(result.model.models) == ["bridgeAndShape", "pad"]
        assert area(result.model.models["bridgeAndShape"]) == pytest.approx(2036.0, rel=1e-3)

    def test_bridge_shape_and_hinge(self, hinge_parts):
        result = combine(hinge_parts, step=DebugStep.BRIDGE_SHAPE_HINGE)
        assert sorted(result.model.models) == ["bridgeShapeAndHinge", "pad"]

    def test_full_side(self, parts):
        ext = extents(combine(parts, step="fullside").model)
        assert ext.low == pytest.approx((0.0, -20.0), abs=0.01)
        assert ext.high == pytest.approx((59.0, 20.0), abs=0.01)

    def test_final_matches_default(self, parts):
        assert area(combine(parts, step="final").model) == pytest.approx(area(combine(parts).model))

    def test_unknown_step(self, parts):
        with pytest.raises(ValueError):
            combine(parts, step="nonsense")
