"""Brightness adjustment effect."""

import numpy as np

from ..core.matrix import brightness_matrix
from .base import MatrixEffect, validate_percent


class BrightnessEffect(MatrixEffect):
    """Shift every color channel by a percentage of full scale.

    A parameter of 50 adds 0.5 to each normalized channel; -50 subtracts it.
    Alpha is left untouched.
    """

    name = "brightness"

    def validate(self, parameter) -> int:
        return validate_percent(self.name, parameter, -100, 100)

    def matrix(self) -> np.ndarray:
        return brightness_matrix(self.parameter)
