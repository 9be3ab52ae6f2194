"""Tests for the warning collector and size parameters."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from framestitch.diagnostics import Diagnostics
from framestitch.models.sizes import SizeParameters
from framestitch.models.warnings import FrameWarning, NO_LINE_CONNECTS, PARTS_MISSING


class TestDiagnostics:
    def test_records_in_order(self):
        diagnostics = Diagnostics()
        diagnostics.info("a")
        diagnostics.warning("b", NAME="pad")
        diagnostics.error(NO_LINE_CONNECTS, PART1="pad", PART2="shape")

        assert [w.severity for w in diagnostics] == ["info", "warning", "error"]
        assert diagnostics.warnings[1].data == {"NAME": "pad"}
        assert len(diagnostics) == 3
        assert diagnostics.has_errors()

    def test_warnings_is_a_copy(self):
        diagnostics = Diagnostics()
        diagnostics.warning("a")
        diagnostics.warnings.clear()
        assert len(diagnostics) == 1

    def test_extend(self):
        first, second = Diagnostics(), Diagnostics()
        second.error(PARTS_MISSING)
        first.extend(second)
        assert first.has_errors()

    def test_data_values_are_strings(self):
        warning = Diagnostics().warning("a", COUNT=3)
        assert warning.data == {"COUNT": "3"}

    def test_warning_serializes(self):
        warning = FrameWarning(term=PARTS_MISSING, severity="error")
        assert warning.model_dump() == {"term": PARTS_MISSING, "severity": "error", "data": {}}

    def test_rejects_unknown_severity(self):
        with pytest.raises(ValidationError):
            FrameWarning(term="x", severity="fatal")


class TestSizeParameters:
    def test_aliases(self):
        size = SizeParameters.model_validate({"bridgeSize": 18, "glasWidth": 50, "glasHeight": 40})
        assert (size.bridge_size, size.glas_width, size.glas_height) == (18, 50, 40)
        assert size.temple_length is None

    def test_parse_triplet(self):
        size = SizeParameters.parse_triplet("20-52.5-41")
        assert size.bridge_size == 20
        assert size.glas_width == 52.5
        assert size.glas_height == 41

    @pytest.mark.parametrize("text", ["18-50", "a-b-c", "18-0-40"])
    def test_parse_triplet_rejects(self, text):
        with pytest.raises(ValueError):
            SizeParameters.parse_triplet(text)
