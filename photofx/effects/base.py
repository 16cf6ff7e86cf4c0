"""Base effect protocol and the single-matrix effect base class."""

from typing import Any, Protocol

import numpy as np

from ..core.image import ImageResource, dispose_quietly
from ..core.matrix import apply_color_matrix
from ..exceptions import InvalidParameter


class Effect(Protocol):
    """Protocol for image effects."""

    name: str

    def process(self, image: ImageResource) -> ImageResource:
        """Apply effect to an image.

        Takes ownership of ``image``. On success exactly one live image is
        returned; on failure everything the effect held is disposed.

        Args:
            image: Input image.

        Returns:
            Processed image.
        """
        ...


class MatrixEffect:
    """Effect implemented as one color matrix application.

    Subclasses validate ``parameter`` in ``validate`` and build the matrix in
    ``matrix``.
    """

    name = "ColorMatrix"

    def __init__(self, parameter: Any = None, settings: dict[str, str] | None = None):
        self.parameter = self.validate(parameter)
        self.settings = dict(settings or {})

    def validate(self, parameter: Any) -> Any:
        return parameter

    def matrix(self) -> np.ndarray:
        raise NotImplementedError

    def process(self, image: ImageResource) -> ImageResource:
        try:
            matrix = self.matrix()
        except Exception:
            dispose_quietly(image)
            raise
        return apply_color_matrix(image, matrix, name=self.name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.parameter!r})"


def validate_percent(name: str, value: Any, low: int, high: int) -> int:
    """Check that ``value`` is an integer within ``[low, high]``."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidParameter(f"Expected an integer, got {type(value).__name__}", effect=name, value=str(value))
    if not low <= value <= high:
        raise InvalidParameter(f"Expected a value between {low} and {high}", effect=name, value=str(value))
    return int(value)
