"""Compositing and resizing utilities."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import cv2
import numpy as np

from ..exceptions import InvalidParameter, ProcessingError
from .color import Color
from .image import ImageResource, dispose_quietly, ensure_valid

# Fraction of each dimension kept when inflating the vignette ellipse so its
# boundary passes through the image corners (sqrt(2) / 2).
VIGNETTE_SCALE = 0.70712


@dataclass(frozen=True)
class BlendCurve:
    """Control points mapping a gradient position to a center-color intensity.

    Position 0 is the ellipse boundary and 1 its center. Intensity is the
    fraction of the center color mixed into the edge color; values between
    control points are linearly interpolated.
    """

    positions: tuple[float, ...]
    intensities: tuple[float, ...]

    def __post_init__(self):
        if len(self.positions) != len(self.intensities):
            raise InvalidParameter("Blend curve positions and intensities differ in length")
        if len(self.positions) < 2:
            raise InvalidParameter("Blend curve needs at least two control points")
        if self.positions[0] != 0.0 or self.positions[-1] != 1.0:
            raise InvalidParameter("Blend curve must span positions 0 to 1")
        if any(b < a for a, b in zip(self.positions, self.positions[1:])):
            raise InvalidParameter("Blend curve positions must be non-decreasing")
        if any(not 0.0 <= value <= 1.0 for value in self.intensities):
            raise InvalidParameter("Blend curve intensities must lie in [0, 1]")

    @classmethod
    def from_points(cls, points: Sequence[tuple[float, float]]) -> "BlendCurve":
        return cls(
            positions=tuple(float(p) for p, _ in points),
            intensities=tuple(float(i) for _, i in points),
        )

    @classmethod
    def linear(cls) -> "BlendCurve":
        return cls(positions=(0.0, 1.0), intensities=(0.0, 1.0))

    def evaluate(self, position: np.ndarray) -> np.ndarray:
        return np.interp(position, self.positions, self.intensities).astype(np.float32)


@dataclass(frozen=True)
class RadialGradient:
    """Elliptical gradient from a center color out to one or more edge colors.

    Attributes:
        center_color: Color at the ellipse center.
        edge_colors: Colors on the ellipse boundary, spread evenly by angle
            starting from the positive x axis.
        blend: Curve controlling how fast the center color fades out.
        inflate: Grow the ellipse so its boundary reaches the image corners.
    """

    center_color: Color
    edge_colors: tuple[Color, ...]
    blend: BlendCurve = BlendCurve.linear()
    inflate: bool = False

    def __post_init__(self):
        if not self.edge_colors:
            raise InvalidParameter("Radial gradient needs at least one edge color")

    def render(self, width: int, height: int) -> np.ndarray:
        """Render the gradient as a float32 RGBA array in [0, 1].

        Pixels outside the ellipse are fully transparent.
        """
        semi_x = width / 2.0
        semi_y = height / 2.0
        if self.inflate:
            semi_x += width - math.floor(VIGNETTE_SCALE * width)
            semi_y += height - math.floor(VIGNETTE_SCALE * height)

        ys, xs = np.mgrid[0:height, 0:width].astype(np.float32)
        dx = (xs + 0.5 - width / 2.0) / semi_x
        dy = (ys + 0.5 - height / 2.0) / semi_y
        radius = np.sqrt(dx * dx + dy * dy)
        inside = radius <= 1.0

        intensity = self.blend.evaluate(1.0 - np.clip(radius, 0.0, 1.0))[..., np.newaxis]
        edge = self._edge_colors(dx, dy)
        center = np.asarray(self.center_color.normalized(), dtype=np.float32)

        gradient = edge + (center - edge) * intensity
        gradient[~inside] = 0.0
        return gradient

    def _edge_colors(self, dx: np.ndarray, dy: np.ndarray) -> np.ndarray:
        colors = np.asarray([c.normalized() for c in self.edge_colors], dtype=np.float32)
        count = len(colors)
        if count == 1:
            return np.broadcast_to(colors[0], dx.shape + (4,)).copy()

        angle = np.mod(np.arctan2(dy, dx), 2.0 * np.pi)
        scaled = angle / (2.0 * np.pi) * count
        lower = np.floor(scaled).astype(int) % count
        upper = (lower + 1) % count
        weight = (scaled - np.floor(scaled))[..., np.newaxis]
        return colors[lower] * (1.0 - weight) + colors[upper] * weight


def alpha_composite(base: np.ndarray, overlay: np.ndarray) -> np.ndarray:
    """Composite a float RGBA overlay over a uint8 RGBA image (source-over).

    Args:
        base: Background image, uint8 RGBA.
        overlay: Foreground, float32 RGBA in [0, 1], same height and width.

    Returns:
        Composited uint8 RGBA array.

    Raises:
        ValueError: If the shapes don't match.
    """
    if base.shape[:2] != overlay.shape[:2]:
        raise ValueError(f"Shape mismatch: {base.shape} vs {overlay.shape}")

    dst = base.astype(np.float32) / 255.0
    src_a = overlay[..., 3:4]
    dst_a = dst[..., 3:4]

    out_a = src_a + dst_a * (1.0 - src_a)
    safe_a = np.where(out_a > 0.0, out_a, 1.0)
    out_rgb = (overlay[..., :3] * src_a + dst[..., :3] * dst_a * (1.0 - src_a)) / safe_a

    result = np.concatenate([out_rgb, out_a], axis=2)
    result = np.rint(np.clip(result, 0.0, 1.0) * 255.0).astype(np.uint8)
    # Untouched pixels keep their exact values.
    untouched = (src_a[..., 0] <= 0.0)
    result[untouched] = base[untouched]
    return result


def apply_gradient(
    image: ImageResource,
    gradient: RadialGradient,
    name: str,
    stage: str = "overlay",
) -> ImageResource:
    """Render ``gradient`` over the full canvas of ``image`` and composite it.

    Takes ownership of ``image`` the same way ``apply_color_matrix`` does.

    Raises:
        InvalidImage: If ``image`` is missing, disposed or empty.
        ProcessingError: If rendering or compositing fails.
    """
    ensure_valid(image)
    output = None
    try:
        overlay = gradient.render(image.width, image.height)
        output = image.derive(alpha_composite(image.pixels, overlay))
    except Exception as exc:
        dispose_quietly(output)
        image.dispose()
        raise ProcessingError(f"Error compositing overlay with {name}", effect=name, stage=stage) from exc

    image.dispose()
    return output


def resize_to_fit(pixels: np.ndarray, max_dim: int) -> np.ndarray:
    """Scale pixels down so neither side exceeds ``max_dim``.

    Args:
        pixels: Input array.
        max_dim: Maximum width/height; 0 or less disables resizing.

    Returns:
        The resized array, or the input when it already fits.
    """
    height, width = pixels.shape[:2]
    if max_dim <= 0 or max(height, width) <= max_dim:
        return pixels

    scale = max_dim / max(height, width)
    new_width = max(1, int(width * scale))
    new_height = max(1, int(height * scale))
    return cv2.resize(pixels, (new_width, new_height), interpolation=cv2.INTER_AREA)
