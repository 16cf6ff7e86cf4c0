"""Query-string driven color effects for raster images."""

__version__ = "0.1.0"

from .core.image import ImageResource, ResourceTracker
from .effects.pipeline import EffectPipeline, build_plan, execute, process_query
from .exceptions import InvalidImage, InvalidParameter, PhotofxError, ProcessingError

__all__ = [
    "EffectPipeline",
    "ImageResource",
    "InvalidImage",
    "InvalidParameter",
    "PhotofxError",
    "ProcessingError",
    "ResourceTracker",
    "__version__",
    "build_plan",
    "execute",
    "process_query",
]
