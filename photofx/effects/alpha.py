"""Opacity effect."""

import numpy as np

from ..core.matrix import alpha_matrix
from .base import MatrixEffect, validate_percent


class AlphaEffect(MatrixEffect):
    """Scale the alpha channel to a percentage of its current value."""

    name = "alpha"

    def validate(self, parameter) -> int:
        return validate_percent(self.name, parameter, 0, 100)

    def matrix(self) -> np.ndarray:
        return alpha_matrix(self.parameter)
