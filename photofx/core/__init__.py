"""Core image primitives: resources, colors, matrices and compositing."""

from .color import Color, parse_color
from .image import ImageResource, ResourceTracker, ensure_valid
from .matrix import ColorMatrices, apply_color_matrix, identity

__all__ = [
    "Color",
    "ColorMatrices",
    "ImageResource",
    "ResourceTracker",
    "apply_color_matrix",
    "ensure_valid",
    "identity",
    "parse_color",
]
