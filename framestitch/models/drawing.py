"""Parsed drawing document model.

Only the parts of an SVG that carry frame geometry are kept: groups, the
paths and circles inside them, and the stroke color of each.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class DrawingPath(BaseModel):
    d: str
    stroke: str | None = None  # normalized "#rrggbb"


class DrawingCircle(BaseModel):
    cx: float
    cy: float
    r: float
    stroke: str | None = None


class DrawingGroup(BaseModel):
    stroke: str | None = None
    paths: list[DrawingPath] = Field(default_factory=list)
    circles: list[DrawingCircle] = Field(default_factory=list)
    groups: list[DrawingGroup] = Field(default_factory=list)


class DrawingDocument(BaseModel):
    """Represents a converted CAD drawing."""

    groups: list[DrawingGroup] = Field(default_factory=list)
    raw_svg: str = ""
