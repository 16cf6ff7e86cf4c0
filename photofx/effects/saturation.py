"""Saturation adjustment effect."""

import numpy as np

from ..core.matrix import saturation_matrix
from .base import MatrixEffect, validate_percent


class SaturationEffect(MatrixEffect):
    """Adjust color saturation; -100 yields greyscale."""

    name = "saturation"

    def validate(self, parameter) -> int:
        return validate_percent(self.name, parameter, -100, 100)

    def matrix(self) -> np.ndarray:
        return saturation_matrix(self.parameter)
