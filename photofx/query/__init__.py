"""Query-string driven effect selection."""

from .registry import EffectDefinition, EffectRegistry, default_registry
from .resolver import NOT_FOUND, Match, resolve

__all__ = [
    "EffectDefinition",
    "EffectRegistry",
    "Match",
    "NOT_FOUND",
    "default_registry",
    "resolve",
]
