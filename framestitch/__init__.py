"""framestitch — rescale and stitch hand-drafted eyewear frame parts."""

from framestitch.diagnostics import Diagnostics
from framestitch.frame.combiner import CombineResult, DebugStep, combine_model
from framestitch.frame.extractor import make_model_parts
from framestitch.kernel.config import KernelConfig
from framestitch.kernel.model import Model
from framestitch.models.sizes import SizeParameters
from framestitch.models.warnings import FrameWarning

__all__ = [
    "CombineResult",
    "DebugStep",
    "Diagnostics",
    "FrameWarning",
    "KernelConfig",
    "Model",
    "SizeParameters",
    "combine_model",
    "make_model_parts",
]
