"""Effects module for image effects."""

from .alpha import AlphaEffect
from .base import Effect, MatrixEffect
from .brightness import BrightnessEffect
from .composite import LayeredEffect, lomograph, polaroid
from .contrast import ContrastEffect
from .filter_effect import FilterEffect, FilterMode
from .pipeline import EffectPipeline, PlanStep, build_plan, execute, process_query
from .saturation import SaturationEffect
from .tint import TintEffect
from .vignette import VignetteEffect

__all__ = [
    "AlphaEffect",
    "BrightnessEffect",
    "ContrastEffect",
    "Effect",
    "EffectPipeline",
    "FilterEffect",
    "FilterMode",
    "LayeredEffect",
    "MatrixEffect",
    "PlanStep",
    "SaturationEffect",
    "TintEffect",
    "VignetteEffect",
    "build_plan",
    "execute",
    "lomograph",
    "polaroid",
    "process_query",
]
