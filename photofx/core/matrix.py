"""5x5 color matrices and the engine that applies them.

Matrices use the row-vector convention: each pixel ``[r, g, b, a, 1]`` is
multiplied on the left, so row 5 holds the per-channel bias.
"""

import logging

import cv2
import numpy as np

from ..exceptions import InvalidParameter, ProcessingError
from .color import Color
from .image import ImageResource, dispose_quietly, ensure_valid

logger = logging.getLogger(__name__)

# Rec. 709-ish luminance weights used for saturation.
LUMINANCE_R = 0.3086
LUMINANCE_G = 0.6094
LUMINANCE_B = 0.0820


def identity() -> np.ndarray:
    """Return a fresh identity color matrix."""
    return np.eye(5, dtype=np.float32)


def as_matrix(rows) -> np.ndarray:
    """Convert nested rows to a validated 5x5 float32 matrix."""
    try:
        matrix = np.asarray(rows, dtype=np.float32)
    except (TypeError, ValueError) as exc:
        raise InvalidParameter("Color matrix must be numeric") from exc
    if matrix.shape != (5, 5):
        raise InvalidParameter(f"Color matrix must be 5x5, got {matrix.shape}")
    if not np.all(np.isfinite(matrix)):
        raise InvalidParameter("Color matrix contains non-finite values")
    return matrix


class ColorMatrices:
    """Preset matrices for the named filters."""

    GREYSCALE = as_matrix([
        [0.33, 0.33, 0.33, 0, 0],
        [0.59, 0.59, 0.59, 0, 0],
        [0.11, 0.11, 0.11, 0, 0],
        [0, 0, 0, 1, 0],
        [0, 0, 0, 0, 1],
    ])

    SEPIA = as_matrix([
        [0.393, 0.349, 0.272, 0, 0],
        [0.769, 0.686, 0.534, 0, 0],
        [0.189, 0.168, 0.131, 0, 0],
        [0, 0, 0, 1, 0],
        [0, 0, 0, 0, 1],
    ])

    BLACK_WHITE = as_matrix([
        [1.5, 1.5, 1.5, 0, 0],
        [1.5, 1.5, 1.5, 0, 0],
        [1.5, 1.5, 1.5, 0, 0],
        [0, 0, 0, 1, 0],
        [-1, -1, -1, 0, 1],
    ])

    POLAROID = as_matrix([
        [1.638, -0.062, -0.262, 0, 0],
        [-0.122, 1.378, -0.122, 0, 0],
        [1.016, -0.016, 1.383, 0, 0],
        [0, 0, 0, 1, 0],
        [0.06, -0.05, -0.05, 0, 1],
    ])

    LOMOGRAPH = as_matrix([
        [1.50, 0, 0, 0, 0],
        [0, 1.45, 0, 0, 0],
        [0, 0, 1.09, 0, 0],
        [0, 0, 0, 1, 0],
        [-0.10, 0.05, -0.08, 0, 1],
    ])

    HI_SATCH = as_matrix([
        [3, -1, -1, 0, 0],
        [-1, 3, -1, 0, 0],
        [-1, -1, 3, 0, 0],
        [0, 0, 0, 1, 0],
        [0, 0, 0, 0, 1],
    ])

    LO_SATCH = as_matrix([
        [1, 0, 0, 0, 0],
        [0, 1, 0, 0, 0],
        [0, 0, 1, 0, 0],
        [0, 0, 0, 1, 0],
        [0.25, 0.25, 0.25, 0, 1],
    ])

    INVERT = as_matrix([
        [-1, 0, 0, 0, 0],
        [0, -1, 0, 0, 0],
        [0, 0, -1, 0, 0],
        [0, 0, 0, 1, 0],
        [1, 1, 1, 0, 1],
    ])


def brightness_matrix(percent: float) -> np.ndarray:
    """Additive shift of each color channel by ``percent / 100``."""
    factor = percent / 100.0
    matrix = identity()
    matrix[4, :3] = factor
    return matrix


def contrast_matrix(percent: float) -> np.ndarray:
    """Scale color channels around mid-grey by ``1 + percent / 100``."""
    factor = percent / 100.0 + 1.0
    offset = 0.5 * (1.0 - factor)
    matrix = identity()
    matrix[0, 0] = matrix[1, 1] = matrix[2, 2] = factor
    matrix[4, :3] = offset
    return matrix


def saturation_matrix(percent: float) -> np.ndarray:
    """Move colors toward (negative) or away from (positive) their luminance."""
    factor = percent / 100.0 + 1.0
    complement = 1.0 - factor
    weights = (LUMINANCE_R * complement, LUMINANCE_G * complement, LUMINANCE_B * complement)
    matrix = identity()
    for row, weight in enumerate(weights):
        matrix[row, :3] = weight
        matrix[row, row] = weight + factor
    return matrix


def alpha_matrix(percent: float) -> np.ndarray:
    """Scale the alpha channel to ``percent`` of its value."""
    matrix = identity()
    matrix[3, 3] = percent / 100.0
    return matrix


def tint_matrix(color: Color) -> np.ndarray:
    """Multiply each channel by the tint color's normalized channel."""
    matrix = identity()
    for index, channel in enumerate(color.normalized()):
        matrix[index, index] = channel
    return matrix


def transform_pixels(pixels: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Apply ``matrix`` to an RGBA ``uint8`` array and return a new array."""
    normalized = pixels.astype(np.float32) / 255.0
    # cv2.transform computes m @ [src; 1] with m shaped (channels, channels + 1).
    transformed = cv2.transform(normalized, np.ascontiguousarray(matrix[:, :4].T))
    transformed = np.clip(transformed, 0.0, 1.0)
    return np.rint(transformed * 255.0).astype(np.uint8)


def apply_color_matrix(
    image: ImageResource,
    matrix: np.ndarray,
    name: str = "ColorMatrix",
) -> ImageResource:
    """Apply a color matrix to every pixel of ``image``.

    Takes ownership of ``image``: it is disposed once the output is fully
    populated, or on failure.

    Args:
        image: Input image.
        matrix: 5x5 color matrix.
        name: Effect name reported in errors.

    Returns:
        A new image of the same dimensions.

    Raises:
        InvalidImage: If ``image`` is missing, disposed or empty.
        InvalidParameter: If ``matrix`` is not a finite 5x5 matrix.
        ProcessingError: If the transform itself fails.
    """
    ensure_valid(image)
    try:
        matrix = as_matrix(matrix)
    except InvalidParameter:
        image.dispose()
        raise

    output = None
    try:
        output = image.derive(transform_pixels(image.pixels, matrix))
    except Exception as exc:
        dispose_quietly(output)
        image.dispose()
        raise ProcessingError(f"Error processing image with {name}", effect=name, stage="matrix") from exc

    logger.debug("Applied %s matrix to %dx%d image", name, output.width, output.height)
    image.dispose()
    return output
