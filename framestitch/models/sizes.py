"""Frame size parameters."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SizeParameters(BaseModel):
    """Ordered (or reference) frame dimensions in millimeters."""

    bridge_size: float = Field(gt=0, alias="bridgeSize")
    glas_width: float = Field(gt=0, alias="glasWidth")
    glas_height: float = Field(gt=0, alias="glasHeight")
    temple_length: float | None = Field(default=None, alias="templeLength")

    model_config = {"populate_by_name": True}

    @classmethod
    def parse_triplet(cls, text: str) -> SizeParameters:
        """Parse ``bridge-width-height``, e.g. ``18-50-40``."""
        parts = text.split("-")
        if len(parts) != 3:
            raise ValueError(f"Expected bridge-width-height, got {text!r}")
        bridge, width, height = (float(p) for p in parts)
        return cls(bridge_size=bridge, glas_width=width, glas_height=height)
