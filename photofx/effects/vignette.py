"""Vignette effect."""

from ..core.color import BLACK, TRANSPARENT, Color
from ..core.image import ImageResource
from ..core.utils import BlendCurve, RadialGradient, apply_gradient
from ..exceptions import InvalidParameter


VIGNETTE_BLEND = BlendCurve.from_points(
    [(0.0, 0.0), (0.2, 0.5), (0.4, 1.0), (0.6, 1.0), (0.8, 1.0), (1.0, 1.0)]
)


class VignetteEffect:
    """Darken the image toward its edges.

    Draws an elliptical gradient that is transparent in the middle and fades
    to ``parameter`` (black by default) at the corners.
    """

    name = "vignette"

    def __init__(self, parameter: Color | None = None, settings: dict[str, str] | None = None):
        if parameter is None:
            parameter = BLACK
        if not isinstance(parameter, Color):
            raise InvalidParameter(
                f"Expected a Color, got {type(parameter).__name__}",
                effect=self.name,
                value=str(parameter),
            )
        self.parameter = parameter
        self.settings = dict(settings or {})

    def gradient(self) -> RadialGradient:
        edge = Color(self.parameter.r, self.parameter.g, self.parameter.b, 255)
        return RadialGradient(
            center_color=TRANSPARENT,
            edge_colors=(edge,),
            blend=VIGNETTE_BLEND,
            inflate=True,
        )

    def process(self, image: ImageResource) -> ImageResource:
        return apply_gradient(image, self.gradient(), name=self.name)

    def __repr__(self) -> str:
        return f"VignetteEffect({self.parameter!r})"
