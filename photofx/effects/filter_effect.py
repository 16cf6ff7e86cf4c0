"""Named photo filters."""

from enum import Enum

from ..core.image import ImageResource
from ..core.matrix import ColorMatrices
from ..exceptions import InvalidParameter
from .composite import LayeredEffect, lomograph, polaroid


class FilterMode(Enum):
    """Filters selectable with ``filter=<mode>``."""

    GREYSCALE = "greyscale"
    SEPIA = "sepia"
    BLACK_WHITE = "blackwhite"
    POLAROID = "polaroid"
    LOMOGRAPH = "lomograph"
    HI_SATCH = "hisatch"
    LO_SATCH = "losatch"
    INVERT = "invert"

    @classmethod
    def from_token(cls, token: str) -> "FilterMode":
        value = token.strip().lower()
        for mode in cls:
            if mode.value == value:
                return mode
        raise InvalidParameter(f"Unknown filter {token!r}", effect="filter", value=token)


MATRIX_FILTERS = {
    FilterMode.GREYSCALE: ColorMatrices.GREYSCALE,
    FilterMode.SEPIA: ColorMatrices.SEPIA,
    FilterMode.BLACK_WHITE: ColorMatrices.BLACK_WHITE,
    FilterMode.HI_SATCH: ColorMatrices.HI_SATCH,
    FilterMode.LO_SATCH: ColorMatrices.LO_SATCH,
    FilterMode.INVERT: ColorMatrices.INVERT,
}


class FilterEffect:
    """Apply one of the named filters.

    Plain filters are a single matrix pass; polaroid and lomograph are
    layered effects that finish with a vignette. The ``vignette-color``
    setting recolors that vignette.
    """

    name = "filter"

    def __init__(self, parameter: FilterMode, settings: dict[str, str] | None = None):
        if not isinstance(parameter, FilterMode):
            raise InvalidParameter(
                f"Expected a FilterMode, got {type(parameter).__name__}",
                effect=self.name,
                value=str(parameter),
            )
        self.parameter = parameter
        self.settings = dict(settings or {})
        self.effect = self._build()

    def _build(self) -> LayeredEffect:
        if self.parameter is FilterMode.POLAROID:
            return polaroid(self.settings)
        if self.parameter is FilterMode.LOMOGRAPH:
            return lomograph(self.settings)
        return LayeredEffect(self.parameter.value, matrix=MATRIX_FILTERS[self.parameter])

    def process(self, image: ImageResource) -> ImageResource:
        return self.effect.process(image)

    def __repr__(self) -> str:
        return f"FilterEffect({self.parameter.value!r})"
