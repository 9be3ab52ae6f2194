"""Localizable warnings raised while combining a frame."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

Severity = Literal["info", "warning", "error"]

# Translation keys understood by the order frontend
PARTS_MISSING = "frameupload.dxfwarning.partsMissing"
NO_LINE_CONNECTS = "frameupload.dxfwarning.noLineConnects1And2"
MISSING_CONNECTION = "frameupload.dxfwarning.missingConnection"
MISSING_CURVE = "frameupload.dxfwarning.missingCurve"
MISSING_ANNOTATION = "frameupload.dxfwarning.missingAnnotation"
DUPLICATE = "frameupload.dxfwarning.duplicate"
UNHANDLED_CIRCLES = "frameupload.dxfwarning.unhandledCircles"
UNSUPPORTED_PATH = "frameupload.dxfwarning.unsupportedPath"


class FrameWarning(BaseModel):
    term: str
    severity: Severity = "warning"
    data: dict[str, str] = Field(default_factory=dict)
