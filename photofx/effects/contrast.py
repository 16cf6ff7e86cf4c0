"""Contrast adjustment effect."""

import numpy as np

from ..core.matrix import contrast_matrix
from .base import MatrixEffect, validate_percent


class ContrastEffect(MatrixEffect):
    """Stretch (positive) or flatten (negative) colors around mid-grey."""

    name = "contrast"

    def validate(self, parameter) -> int:
        return validate_percent(self.name, parameter, -100, 100)

    def matrix(self) -> np.ndarray:
        return contrast_matrix(self.parameter)
