"""Tint effect."""

import numpy as np

from ..core.color import Color
from ..core.matrix import tint_matrix
from ..exceptions import InvalidParameter
from .base import MatrixEffect


class TintEffect(MatrixEffect):
    """Tint an image with the given color.

    Each channel is multiplied by the matching normalized channel of the
    tint color, so white leaves the image unchanged.
    """

    name = "tint"

    def validate(self, parameter) -> Color:
        if not isinstance(parameter, Color):
            raise InvalidParameter(
                f"Expected a Color, got {type(parameter).__name__}",
                effect=self.name,
                value=str(parameter),
            )
        return parameter

    def matrix(self) -> np.ndarray:
        return tint_matrix(self.parameter)
